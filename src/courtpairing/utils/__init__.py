"""Utility helpers shared across Court Pairing."""

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
import uuid
from typing import Iterable, List, MutableSequence, Optional, Sequence, TypeVar

from courtpairing.constants import PAIR_KEY_SEPARATOR, TEAM_KEY_SEPARATOR
from courtpairing.utils.logging import setup_logger

T = TypeVar("T")

__all__ = [
    "generate_id",
    "pair_key",
    "team_key",
    "setup_logger",
    "shuffled",
    "coin_flip",
    "ensure_rng",
    "reverse_randomly",
]


def generate_id(prefix: str = "item_") -> str:
    """Generate a unique ID."""
    return f"{prefix}{uuid.uuid4().hex[:12]}"


def pair_key(player1_id: str, player2_id: str) -> str:
    """Return the canonical key of an unordered player pair."""
    first, second = sorted((player1_id, player2_id))
    return f"{first}{PAIR_KEY_SEPARATOR}{second}"


def team_key(player_ids: Iterable[str]) -> str:
    """Return the canonical key of a team regardless of player order."""
    return TEAM_KEY_SEPARATOR.join(sorted(player_ids))


def ensure_rng(rng: Optional[random.Random]) -> random.Random:
    """Return the given random source, or a fresh unseeded one."""
    return rng if rng is not None else random.Random()


def shuffled(items: Sequence[T], rng: random.Random) -> List[T]:
    """Return a shuffled copy of ``items`` using ``rng``."""
    result = list(items)
    rng.shuffle(result)
    return result


def coin_flip(rng: random.Random) -> bool:
    return rng.random() < 0.5


def reverse_randomly(items: MutableSequence[T], rng: random.Random) -> None:
    """Reverse ``items`` in place half of the time."""
    if coin_flip(rng):
        items.reverse()
