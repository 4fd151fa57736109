"""Data model for a generated round."""

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

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from courtpairing.models.match import Match


@dataclass
class Round:
    """One generation cycle producing a batch of concurrent matches.

    Attributes
    ----------
    id : str
        Round identifier.
    matches : list of Match
        Matches of the round, in court order.
    name : str or None
        Display name given by the caller.
    """

    id: str
    matches: List[Match] = field(default_factory=list)
    name: Optional[str] = None

    @property
    def matches_with_players(self) -> List[Match]:
        return [m for m in self.matches if m.has_players]

    @property
    def is_complete(self) -> bool:
        """Every match with players has a scored set, and there is one such match."""
        populated = self.matches_with_players
        if not populated:
            return False
        return all(m.is_played for m in populated)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize round to dictionary."""
        data: Dict[str, Any] = {
            "id": self.id,
            "matches": [m.to_dict() for m in self.matches],
        }
        if self.name is not None:
            data["name"] = self.name
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Round":
        """Deserialize round from dictionary."""
        return cls(
            id=str(data.get("id", "")),
            matches=[Match.from_dict(m) for m in data.get("matches") or []],
            name=data.get("name"),
        )
