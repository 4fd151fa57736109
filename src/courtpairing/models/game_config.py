"""Game configuration data classes."""

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
from enum import Enum
from typing import Any, Dict, List, Optional

from courtpairing.constants import DEFAULT_COURT_COUNT, DEFAULT_NUMBER_OF_SETS
from courtpairing.exceptions import InvalidConfigurationException
from courtpairing.models.participant import FixedTeam
from courtpairing.utils.validation import validate_choice, validate_int


def _int_field(data: Dict[str, Any], key: str, default: int = 0) -> int:
    result = validate_int(data.get(key), key, default)
    if not result:
        raise InvalidConfigurationException(result.error_message)
    return result.sanitized_value


class GenderMode(Enum):
    """Gender policy for team formation."""

    ANY = "ANY"
    MEN = "MEN"
    WOMEN = "WOMEN"
    MIX_PAIRS = "MIX_PAIRS"
    MIXED = "MIXED"


class MatchGenerationType(Enum):
    """Strategy used to generate the matches of a new round."""

    HANDMADE = "HANDMADE"
    FIXED = "FIXED"
    RANDOM = "RANDOM"
    RATING = "RATING"
    WINNERS_COURT = "WINNERS_COURT"
    ROUND_ROBIN = "ROUND_ROBIN"
    ESCALERA = "ESCALERA"


class WinnerOfMatch(Enum):
    BY_SCORES = "BY_SCORES"
    BY_SETS = "BY_SETS"


class WinnerOfGame(Enum):
    BY_MATCHES_WON = "BY_MATCHES_WON"
    BY_POINTS = "BY_POINTS"
    BY_SCORES_DELTA = "BY_SCORES_DELTA"
    PLAYOFF_FINALS = "PLAYOFF_FINALS"


@dataclass
class Court:
    """A court available to the game; ``order`` ranks courts top to bottom."""

    court_id: str
    order: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"courtId": self.court_id, "order": self.order}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Court":
        if not data.get("courtId"):
            raise InvalidConfigurationException("Court is missing courtId")
        return cls(court_id=str(data["courtId"]), order=_int_field(data, "order"))


@dataclass
class GameConfig:
    """Per-game settings the engine reads when generating a round.

    Attributes
    ----------
    match_generation_type : MatchGenerationType
        Strategy to dispatch to.
    gender_teams : GenderMode
        Gender policy for eligibility and pairing.
    courts : list of Court
        Courts available to the game.
    has_fixed_teams : bool
        Whether rounds use the configured fixed teams.
    fixed_teams : list of FixedTeam
        Persistent pairings, used when ``has_fixed_teams`` is set.
    fixed_number_of_sets : int
        Sets on a fresh score sheet (0 means the default single set).
    winner_of_match : WinnerOfMatch
        How a match winner is derived from its sets.
    winner_of_game : WinnerOfGame
        How standings are ordered.
    points_per_win, points_per_tie, points_per_loose : int
        Points awarded per outcome in BY_POINTS mode.
    """

    match_generation_type: MatchGenerationType = MatchGenerationType.HANDMADE
    gender_teams: GenderMode = GenderMode.ANY
    courts: List[Court] = field(default_factory=list)
    has_fixed_teams: bool = False
    fixed_teams: List[FixedTeam] = field(default_factory=list)
    fixed_number_of_sets: int = 0
    winner_of_match: WinnerOfMatch = WinnerOfMatch.BY_SCORES
    winner_of_game: WinnerOfGame = WinnerOfGame.BY_MATCHES_WON
    points_per_win: int = 0
    points_per_tie: int = 0
    points_per_loose: int = 0

    @property
    def sorted_courts(self) -> List[Court]:
        return sorted(self.courts, key=lambda court: court.order)

    @property
    def available_courts(self) -> int:
        """Number of courts, falling back to one when none are configured."""
        return len(self.courts) or DEFAULT_COURT_COUNT

    @property
    def uses_fixed_teams(self) -> bool:
        return self.has_fixed_teams and bool(self.fixed_teams)

    @property
    def number_of_sets(self) -> int:
        return self.fixed_number_of_sets or DEFAULT_NUMBER_OF_SETS

    def court_id_at(self, index: int) -> Optional[str]:
        """Court id for the match at ``index``, by court order."""
        courts = self.sorted_courts
        if 0 <= index < len(courts):
            return courts[index].court_id
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "matchGenerationType": self.match_generation_type.value,
            "genderTeams": self.gender_teams.value,
            "gameCourts": [court.to_dict() for court in self.courts],
            "hasFixedTeams": self.has_fixed_teams,
            "fixedTeams": [team.to_dict() for team in self.fixed_teams],
            "fixedNumberOfSets": self.fixed_number_of_sets,
            "winnerOfMatch": self.winner_of_match.value,
            "winnerOfGame": self.winner_of_game.value,
            "pointsPerWin": self.points_per_win,
            "pointsPerTie": self.points_per_tie,
            "pointsPerLoose": self.points_per_loose,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        """Deserialize configuration from dictionary.

        A missing generation type means HANDMADE; unknown enum values raise
        ``InvalidConfigurationException``.
        """
        choices = {
            "matchGenerationType": (MatchGenerationType, MatchGenerationType.HANDMADE),
            "genderTeams": (GenderMode, GenderMode.ANY),
            "winnerOfMatch": (WinnerOfMatch, WinnerOfMatch.BY_SCORES),
            "winnerOfGame": (WinnerOfGame, WinnerOfGame.BY_MATCHES_WON),
        }
        resolved = {}
        for key, (enum_type, default) in choices.items():
            raw = data.get(key)
            if raw is None:
                resolved[key] = default
                continue
            result = validate_choice(raw, enum_type)
            if not result:
                raise InvalidConfigurationException(result.error_message)
            resolved[key] = result.sanitized_value

        return cls(
            match_generation_type=resolved["matchGenerationType"],
            gender_teams=resolved["genderTeams"],
            courts=[Court.from_dict(c) for c in data.get("gameCourts") or []],
            has_fixed_teams=bool(data.get("hasFixedTeams", False)),
            fixed_teams=[FixedTeam.from_dict(t) for t in data.get("fixedTeams") or []],
            fixed_number_of_sets=_int_field(data, "fixedNumberOfSets"),
            winner_of_match=resolved["winnerOfMatch"],
            winner_of_game=resolved["winnerOfGame"],
            points_per_win=_int_field(data, "pointsPerWin"),
            points_per_tie=_int_field(data, "pointsPerTie"),
            points_per_loose=_int_field(data, "pointsPerLoose"),
        )
