"""
FFA elimination tournament and the in-memory match store it runs on.
"""
import logging
import math
import numbers
from typing import List, Dict, Optional

from .elimination import generate_ffa_matches, placements, prepare_next_round
from .models import BracketConfig, Match, MatchId, is_known
from .standings import calculate_standings
from .validation import invalid

logger = logging.getLogger(__name__)


def _is_number(value) -> bool:
    if not isinstance(value, numbers.Real) or isinstance(value, bool):
        return False
    return math.isfinite(value)


class MatchStore:
    """
    Match bookkeeping shared by bracket formats.

    Holds the ordered match list and answers lookups by round or id. Scores are
    recorded through record_score(); format specific rules live in the
    tournament that owns the store.
    """

    def __init__(self, matches):
        self.matches = matches

    def find_match(self, match_id: MatchId) -> Optional[Match]:
        for match in self.matches:
            if match.id == match_id:
                return match
        return None

    def find_matches(self, round_number: Optional[int] = None) -> List[Match]:
        if round_number is None:
            return list(self.matches)
        return [m for m in self.matches if m.id.round == round_number]

    def rounds(self) -> List[List[Match]]:
        numbers_seen = sorted({m.id.round for m in self.matches})
        return [self.find_matches(r) for r in numbers_seen]

    def current_round(self) -> Optional[List[Match]]:
        """First round that still has unscored matches."""
        for round_matches in self.rounds():
            if not all(m.is_scored for m in round_matches):
                return round_matches
        return None

    def players(self, round_number: Optional[int] = None) -> List[int]:
        seen = set()
        for match in self.find_matches(round_number):
            seen.update(p for p in match.players if is_known(p))
        return sorted(seen)

    def matches_for(self, player: int) -> List[Match]:
        return [m for m in self.matches if player in m.players]

    def is_done(self) -> bool:
        return all(m.is_scored for m in self.matches)

    def unscorable(self, match_id: MatchId, score, allow_past: bool = False) -> Optional[str]:
        match = self.find_match(match_id)
        if match is None:
            return f"{match_id} not found in tournament"
        if not all(is_known(p) for p in match.players):
            return f"cannot score {match_id}: players not yet determined"
        if not isinstance(score, (list, tuple)) or not all(_is_number(s) for s in score):
            return f"scores for {match_id} must be a list of numbers"
        if len(score) != len(match.players):
            return f"scores for {match_id} must have length {len(match.players)}"
        if not allow_past and match.is_scored:
            return f"{match_id} has already been scored"
        if any(m.is_scored for m in self.matches if m.id.round > match_id.round):
            return f"cannot score {match_id}: later rounds have already been played"
        return None

    def record_score(self, match_id: MatchId, score: List) -> bool:
        match = self.find_match(match_id)
        if match is None:
            return False
        match.scores = list(score)
        return True

    def upcoming(self, player: int) -> Optional[MatchId]:
        """Id of the first unplayed match the player is drawn into, if any."""
        for match in self.matches:
            if match.is_scored or player not in match.players:
                continue
            if all(is_known(p) for p in match.players):
                return match.id
        return None


class FFA:
    """
    Free-for-all elimination: groups of 3+ players, the top few of every match
    advance and are re-seeded into the next round.
    """

    def __init__(self, num_players, group_sizes, advancers, limit=0, store_factory=MatchStore):
        reason = invalid(num_players, group_sizes, advancers, limit)
        if reason is not None:
            logger.error(f"Invalid FFA configuration {num_players}p sizes={group_sizes}, "
                         f"advancers={advancers}, limit={limit}: {reason}")
            raise ValueError(f"Invalid FFA configuration: {reason}")

        self.num_players = num_players
        self.group_sizes = list(group_sizes)
        self.advancers = list(advancers)
        self.limit = limit
        self.store = store_factory(generate_ffa_matches(num_players, self.group_sizes, self.advancers))
        logger.info(f"Created {num_players}p FFA elimination with {len(self.group_sizes)} rounds "
                    f"(sizes={self.group_sizes}, advancers={self.advancers}, limit={limit})")

    @classmethod
    def from_config(cls, config: BracketConfig, store_factory=MatchStore):
        return cls(config.num_players, config.group_sizes, config.advancers, config.limit,
                   store_factory=store_factory)

    invalid = staticmethod(invalid)

    @property
    def matches(self) -> List[Match]:
        return self.store.matches

    def find_matches(self, round_number: Optional[int] = None) -> List[Match]:
        return self.store.find_matches(round_number)

    def _advancers_for(self, round_number: int) -> int:
        if round_number <= len(self.advancers):
            return self.advancers[round_number - 1]
        return 0

    def unscorable(self, match_id: MatchId, score, allow_past: bool = False) -> Optional[str]:
        """
        Check whether a score may be recorded for a match.

        On top of the store's checks, the score must leave a strict cutoff
        between players that advance and players that are knocked out.
        """
        reason = self.store.unscorable(match_id, score, allow_past)
        if reason is not None:
            return reason

        ordered = sorted(score, reverse=True)
        advance = self._advancers_for(match_id.round)
        if advance > 0 and ordered[advance] == ordered[advance - 1]:
            return "scores must unambiguously decide who advances"

        if not advance and self.limit > 0:
            # the last match's number is the group count of the final round
            last_num_groups = self.matches[-1].id.match
            cutoff = self.limit // last_num_groups
            if ordered[cutoff] == ordered[cutoff - 1]:
                return "scores must decide who advances in final round with limits"

        return None

    def score(self, match_id: MatchId, score: List) -> bool:
        """
        Record a score, re-seeding the next round once the current one is done.

        Returns whether the score was accepted.
        """
        reason = self.unscorable(match_id, score, allow_past=True)
        if reason is not None:
            logger.warning(f"Rejected score {score} for {match_id}: {reason}")
            return False
        if not self.store.record_score(match_id, score):
            return False

        advance = self._advancers_for(match_id.round)
        current = self.store.find_matches(match_id.round)
        if advance > 0 and all(m.is_scored for m in current):
            seeding = prepare_next_round(current, self.store.find_matches(match_id.round + 1), advance)
            logger.info(f"Round {match_id.round} complete, {len(seeding)} players advance "
                        f"to round {match_id.round + 1}")
        return True

    def upcoming(self, player: int) -> Optional[MatchId]:
        """
        Find where a player plays next.

        A player who finished a match in the current round and placed within
        its advancers is heading to the next round even though that round's
        groups are not known yet; that case returns an id without a match
        number.
        """
        match_id = self.store.upcoming(player)
        if match_id is not None:
            return match_id

        current = self.store.current_round() or []
        match = next((m for m in current if m.is_scored and player in m.players), None)
        if match is None:
            return None

        advance = self._advancers_for(match.id.round)
        top = [p for p, _ in placements(match)[:advance]]
        if player in top:
            return MatchId(1, match.id.round + 1)
        return None

    def is_done(self) -> bool:
        return self.store.is_done()

    def results(self) -> List[Dict]:
        return calculate_standings(self.matches, self.num_players, self.advancers, self.limit)
