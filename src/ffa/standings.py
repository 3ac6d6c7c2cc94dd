"""
Standings for FFA elimination brackets.

Positions are derived round by round from the match list alone, so they can be
recomputed at any point of the tournament. Players knocked out at the same
placing in different matches of a round share a position.
"""
from typing import List, Dict

from .elimination import placements
from .models import FFAInternalError, Match, is_known


def _group_rounds(matches: List[Match]) -> List[List[Match]]:
    rounds = {}
    for match in matches:
        rounds.setdefault(match.id.round, []).append(match)
    return [rounds[r] for r in sorted(rounds)]


def is_round_done(round_matches: List[Match]) -> bool:
    return all(match.is_scored for match in round_matches)


def is_round_ready(round_matches: List[Match]) -> bool:
    return any(is_known(p) for match in round_matches for p in match.players)


def _position_limit_winners(round_matches, standings, limit, num_round_players) -> int:
    """Credit and position the players surviving a limited final. Returns the per-match quota."""
    num_groups = len(round_matches)
    if num_round_players < limit:
        raise FFAInternalError("FFA internal error - too few players for forwarding")
    if limit % num_groups != 0:
        raise FFAInternalError("FFA internal error - limit not multiple of final round matches")
    advance = limit // num_groups
    if any(advance >= len(match.players) for match in round_matches):
        raise FFAInternalError("FFA internal error - limit quota fills a whole final match")

    for match in round_matches:
        for i, (player, _) in enumerate(placements(match)[:advance]):
            entry = standings[player]
            # no advancers entry for the final, so the win is credited here
            entry['wins'] += 1
            entry['pos'] = i * num_groups + 1

    return advance


def calculate_standings(matches: List[Match], num_players: int, advancers: List[int], limit: int = 0) -> List[Dict]:
    """
    Calculate standings from all played matches.

    Args:
        matches: Full bracket match list, ordered by round then match number
        num_players: Number of seeded players
        advancers: Players advancing per match for every round but the last
        limit: Players surviving the final round, 0 for a single winner

    Returns:
        List of dicts with 'seed', 'sum', 'wins' and 'pos', sorted by
        position, then by score sum descending.
    """
    standings = {
        seed: {'seed': seed, 'sum': 0, 'wins': 0, 'pos': num_players}
        for seed in range(1, num_players + 1)
    }

    for match in matches:
        if not match.is_scored:
            continue
        advance = advancers[match.id.round - 1] if match.id.round <= len(advancers) else 0
        for j, (player, score) in enumerate(placements(match)):
            # final round wins are credited during positioning
            if j < advance:
                standings[player]['wins'] += 1
            standings[player]['sum'] += score

    rounds = _group_rounds(matches)
    for k, round_matches in enumerate(rounds):
        advance = advancers[k] if k < len(advancers) else 0
        round_players = [p for match in round_matches for p in match.players]
        num_groups = len(round_matches)

        if is_round_done(round_matches):
            if limit > 0 and k == len(rounds) - 1:
                advance = _position_limit_winners(round_matches, standings, limit, len(round_players))

            # in an unlimited final advance is 0 and everyone is positioned here
            start = advance * num_groups + 1
            for match in round_matches:
                for i, (player, _) in enumerate(placements(match)[advance:]):
                    entry = standings[player]
                    if i == 0 and advance == 0:
                        entry['wins'] += 1
                    entry['pos'] = start + i * num_groups
        elif is_round_ready(round_matches):
            # reached this round, nothing separates them yet
            for player in round_players:
                if is_known(player):
                    standings[player]['pos'] = len(round_players)

    return sorted(standings.values(), key=lambda entry: (entry['pos'], -entry['sum'], entry['seed']))
