"""
Fair group partitioning for FFA rounds.
"""
import math
from typing import List


def reduce_group_size(num_players: int, group_size: int, num_groups: int) -> int:
    """
    Shrink a requested group size as far as possible without adding a group.

    Returns the smallest size that still fits num_players into num_groups
    groups, e.g. 28 players in groups of 8 -> 4 groups of 7.
    """
    while num_groups * (group_size - 1) >= num_players:
        group_size -= 1
    return group_size


def groups(num_players: int, group_size: int) -> List[List[int]]:
    """
    Partition seeds 1..num_players into ceil(num_players / group_size) groups.

    Seeds are dealt serpentine style (left to right, then right to left) so
    every group gets a similar spread of strong and weak seeds. A final partial
    row is dealt left to right, which keeps earlier groups at least as large as
    later ones. Group sizes differ by at most one.

    The same function re-seeds ranks 1..M between rounds.
    """
    if num_players < 1 or group_size < 1:
        return []

    num_groups = math.ceil(num_players / group_size)
    group_size = reduce_group_size(num_players, group_size, num_groups)

    result = [[] for _ in range(num_groups)]
    seed = 1
    for row in range(group_size):
        remaining = num_players - seed + 1
        if remaining <= 0:
            break
        if remaining < num_groups:
            order = range(remaining)
        elif row % 2 == 0:
            order = range(num_groups)
        else:
            order = reversed(range(num_groups))
        for g in order:
            result[g].append(seed)
            seed += 1

    return [sorted(group) for group in result]
