"""
FFA elimination bracket generation and round progression.
"""
import logging
import math
from typing import List, Dict, Tuple

from .balancer import groups, reduce_group_size
from .models import UNKNOWN, FFAInternalError, Match, MatchId

logger = logging.getLogger(__name__)


def get_round_name(round_number: int, total_rounds: int) -> str:
    """Get the name of a round from its 1-indexed number."""
    if round_number == total_rounds:
        return "Final"
    return f"Round {round_number}"


def placements(match: Match) -> List[Tuple[int, float]]:
    """
    Pair each player of a scored match with their score, best first.

    The sort is stable, so equal scores keep slot order and the earlier
    (better seeded) slot places higher.
    """
    return sorted(zip(match.players, match.scores), key=lambda ps: -ps[1])


def generate_ffa_matches(num_players: int, group_sizes: List[int], advancers: List[int]) -> List[Match]:
    """
    Generate every match of an FFA elimination.

    Expects a configuration that already passed validation.invalid(). Round 1
    is filled with seeds, later rounds hold UNKNOWN slots sized for the
    players expected to reach them.

    Returns matches ordered by round, then by match number.
    """
    matches = []
    np = num_players

    for i, group_size in enumerate(group_sizes):
        num_groups = math.ceil(np / group_size)
        actual_size = reduce_group_size(np, group_size, num_groups)

        round_groups = groups(np, actual_size)
        if len(round_groups) != num_groups:
            raise FFAInternalError(
                f"internal FFA construction error: round {i + 1} expected {num_groups} groups, "
                f"got {len(round_groups)}"
            )
        if i > 0:
            # only round 1 seeding is known up front
            round_groups = [[UNKNOWN] * len(group) for group in round_groups]

        for number, group in enumerate(round_groups, start=1):
            matches.append(Match(MatchId(1, i + 1, number), group))

        if i < len(advancers):
            np = num_groups * advancers[i]

    return matches


def prepare_next_round(current_round: List[Match], next_round: List[Match], advance: int) -> List[int]:
    """
    Re-seed the advancing players of a fully scored round into the next one.

    The top `advance` players of every match are ranked against each other by
    score (the sort is stable, so equal scores keep match order and then
    placement within the match), and the resulting ranks 1..M are balanced
    into the next round's groups. Next round matches are updated in place.

    Returns the new seeding, best first.
    """
    top = []
    for match in current_round:
        top.extend(placements(match)[:advance])

    top.sort(key=lambda entry: -entry[1])
    seeding = [player for player, _ in top]

    # group size was fixed when the placeholders were built
    group_size = max(len(match.players) for match in next_round)

    for k, group in enumerate(groups(len(seeding), group_size)):
        next_round[k].players = [seeding[rank - 1] for rank in group]
        logger.debug(f"{next_round[k].id} seeded with {next_round[k].players}")

    return seeding


def get_ffa_bracket_summary(matches: List[Match]) -> Dict:
    """
    Summarize a generated bracket per round.

    Returns dict with:
    - 'rounds': dict of round_name -> list of matches
    - 'total_rounds': number of rounds
    - 'total_players': number of round 1 slots
    - 'matches_per_round': dict of round_name -> match count
    - 'group_sizes_per_round': dict of round_name -> largest group size
    """
    total_rounds = max((m.id.round for m in matches), default=0)

    rounds = {}
    for match in matches:
        round_name = get_round_name(match.id.round, total_rounds)
        rounds.setdefault(round_name, []).append(match)

    first_round = rounds.get(get_round_name(1, total_rounds), [])

    return {
        'rounds': rounds,
        'total_rounds': total_rounds,
        'total_players': sum(len(m.players) for m in first_round),
        'matches_per_round': {name: len(ms) for name, ms in rounds.items()},
        'group_sizes_per_round': {name: max(len(m.players) for m in ms) for name, ms in rounds.items()},
    }
