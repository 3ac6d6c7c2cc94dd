"""
Configuration checks for FFA elimination brackets.

Every check returns a human readable reason when the configuration cannot be
built, or None when it can. Nothing here raises for bad input.
"""
import math
from typing import List, Optional

from .balancer import reduce_group_size


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def round_invalid(num_players: int, group_size: int, advance: int, num_groups: int) -> Optional[str]:
    """
    Check one non-final round.

    group_size is the reduced size the balancer will actually use for
    num_players split into num_groups groups.
    """
    if not _is_int(group_size) or not _is_int(advance):
        return "individual group size and advancers must all be integers"
    if not _is_int(num_players) or num_players < 2:
        return "needs at least 2 players"
    if group_size < 3:
        return "group size must be at least 3 in regular rounds"
    if group_size >= num_players:
        return "group size must be less than the number of players left"
    if advance >= group_size:
        return "must advance less than the group size"
    is_unfilled = num_players % num_groups > 0
    if is_unfilled and advance >= group_size - 1:
        return "must advance less than the smallest match size"
    if advance <= 0:
        return "must eliminate players each match"
    return None


def final_invalid(left_over: int, limit: int, last_group_size: int) -> Optional[str]:
    """Check the last round, played by the left_over players still in."""
    if left_over < 2:
        return "must at least contain 2 players"
    last_num_groups = math.ceil(left_over / last_group_size)
    if limit > 0:
        if limit >= left_over:
            return "limit must be less than the remaining number of players"
        # an uneven split would need a tiebreak between equally placed players
        if limit % last_num_groups != 0:
            return "number of groups must divide limit"
        smallest_group = left_over // last_num_groups
        if limit // last_num_groups >= smallest_group:
            return "limit must eliminate players from every final match"
    elif last_num_groups != 1:
        return "must contain a single match when not using limits"
    return None


def invalid(num_players: int, group_sizes: List[int], advancers: List[int], limit: int = 0) -> Optional[str]:
    """
    Check whether an FFA elimination can be built.

    Args:
        num_players: Number of seeded players entering round 1
        group_sizes: Requested maximum group size for each round
        advancers: Players advancing from each match, one entry per round
            except the last
        limit: Players surviving the final round (0 for a single winner)

    Returns:
        The first violated rule, or None if the configuration is valid.
    """
    if not _is_int(num_players) or num_players < 2:
        return "number of players must be at least 2"
    if not isinstance(group_sizes, (list, tuple)) or not isinstance(advancers, (list, tuple)):
        return "advancers and group sizes must be lists"
    if not group_sizes or not all(_is_int(g) and g > 0 for g in group_sizes):
        return "group sizes must be a non-empty list of positive integers"
    if not all(_is_int(a) for a in advancers) or len(group_sizes) != len(advancers) + 1:
        return "advancers must be a list of integers of length len(group_sizes) - 1"
    if not _is_int(limit) or limit < 0:
        return "limit must be a non-negative integer"

    np = num_players
    for i, advance in enumerate(advancers):
        num_groups = math.ceil(np / group_sizes[i])
        actual_size = reduce_group_size(np, group_sizes[i], num_groups)

        reason = round_invalid(np, actual_size, advance, num_groups)
        if reason is not None:
            return f"round {i + 1} {reason}"
        np = num_groups * advance

    reason = final_invalid(np, limit, group_sizes[-1])
    if reason is not None:
        return f"final round: {reason}"

    return None
