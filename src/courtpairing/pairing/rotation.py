"""Bench rotation: who sits out when the pool exceeds the available slots."""

# Court Pairing
# Copyright (C) 2025  Court Pairing developers
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import random
from typing import Callable, List, Mapping, Optional, Sequence, TypeVar

from courtpairing.utils import shuffled

T = TypeVar("T")


def select_with_rotation(
    ranked: Sequence[T], needed: int, played: Callable[[T], int]
) -> List[T]:
    """
    Keep the ``needed`` items that have played the least.

    Ties on play count are resolved by rank, and the kept items are
    returned in their original rank order.

    Parameters
    ----------
    ranked : sequence
        Items in rank order (best first).
    needed : int
        Number of slots to fill.
    played : callable
        Returns the number of rounds an item has played.

    Returns
    -------
    list
        At most ``needed`` items, in rank order.
    """
    if len(ranked) <= needed:
        return list(ranked)
    indexed = sorted(enumerate(ranked), key=lambda item: (played(item[1]), item[0]))
    kept = sorted(indexed[:needed], key=lambda item: item[0])
    return [item for _, item in kept]


def order_by_play_count(
    ids: Sequence[str], play_counts: Mapping[str, int], rng: Optional[random.Random] = None
) -> List[str]:
    """Order ids by ascending play count, ties shuffled when ``rng`` is given."""
    pool = shuffled(ids, rng) if rng is not None else list(ids)
    return sorted(pool, key=lambda player_id: play_counts.get(player_id, 0))
