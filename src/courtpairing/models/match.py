"""Match and set score data classes."""

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
from typing import Any, Dict, List, Optional, Tuple

from courtpairing.exceptions import InvalidRoundDataException
from courtpairing.utils.validation import validate_score, validate_user_id


@dataclass
class SetScore:
    """Score of one set.

    Attributes
    ----------
    team_a : int
        Points scored by team A.
    team_b : int
        Points scored by team B.
    """

    team_a: int = 0
    team_b: int = 0

    def __post_init__(self) -> None:
        for side, score in (("teamA", self.team_a), ("teamB", self.team_b)):
            result = validate_score(score)
            if not result:
                raise InvalidRoundDataException(f"{side}: {result.error_message}")

    @property
    def is_played(self) -> bool:
        """A set counts only when either side scored."""
        return self.team_a > 0 or self.team_b > 0

    def to_dict(self) -> Dict[str, int]:
        return {"teamA": self.team_a, "teamB": self.team_b}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SetScore":
        return cls(team_a=data.get("teamA", 0), team_b=data.get("teamB", 0))


def empty_sets(number_of_sets: int = 1) -> List[SetScore]:
    """Return a fresh score sheet of ``number_of_sets`` zeroed sets."""
    return [SetScore() for _ in range(max(1, number_of_sets))]


@dataclass
class Match:
    """One A-vs-B contest between two teams of one or two players.

    Attributes
    ----------
    id : str
        Match identifier.
    team_a : list of str
        Player ids on team A.
    team_b : list of str
        Player ids on team B, disjoint from team A.
    sets : list of SetScore
        Score sheet.
    court_id : str or None
        Court the match is assigned to.
    """

    id: str
    team_a: List[str] = field(default_factory=list)
    team_b: List[str] = field(default_factory=list)
    sets: List[SetScore] = field(default_factory=list)
    court_id: Optional[str] = None

    def __post_init__(self) -> None:
        overlap = set(self.team_a) & set(self.team_b)
        if overlap:
            raise InvalidRoundDataException(
                f"Match {self.id} has players on both teams: {sorted(overlap)}"
            )

    @property
    def has_players(self) -> bool:
        """True when both teams are populated."""
        return bool(self.team_a) and bool(self.team_b)

    @property
    def player_ids(self) -> List[str]:
        return [*self.team_a, *self.team_b]

    @property
    def valid_sets(self) -> List[SetScore]:
        return [s for s in self.sets if s.is_played]

    @property
    def is_played(self) -> bool:
        """A match is played when at least one set has a non-zero score."""
        return bool(self.valid_sets)

    def team_totals(self) -> Tuple[int, int]:
        """Aggregate points of both teams over played sets."""
        valid = self.valid_sets
        return sum(s.team_a for s in valid), sum(s.team_b for s in valid)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize match to dictionary."""
        data: Dict[str, Any] = {
            "id": self.id,
            "teamA": list(self.team_a),
            "teamB": list(self.team_b),
            "sets": [s.to_dict() for s in self.sets],
        }
        if self.court_id is not None:
            data["courtId"] = self.court_id
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Match":
        """Deserialize match from dictionary."""
        if "id" not in data:
            raise InvalidRoundDataException("Match is missing an id")
        teams = {}
        for side in ("teamA", "teamB"):
            ids = []
            for player_id in data.get(side) or []:
                result = validate_user_id(player_id)
                if not result:
                    raise InvalidRoundDataException(f"{side}: {result.error_message}")
                ids.append(result.sanitized_value)
            teams[side] = ids
        return cls(
            id=str(data["id"]),
            team_a=teams["teamA"],
            team_b=teams["teamB"],
            sets=[SetScore.from_dict(s) for s in data.get("sets") or []],
            court_id=data.get("courtId"),
        )
