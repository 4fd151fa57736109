"""League season rules and the game records generated for a season round."""

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
from datetime import datetime
from typing import Any, Dict, List, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from courtpairing.constants import LEAGUE_GAME_DURATION_HOURS, LEAGUE_GAME_NAME
from courtpairing.exceptions import LeagueConfigurationException
from courtpairing.models.game_config import GameConfig
from courtpairing.models.participant import FixedTeam, Participant
from courtpairing.utils.validation import validate_int


def _int_field(data: Dict[str, Any], key: str, default: int = 0) -> int:
    result = validate_int(data.get(key), key, default)
    if not result:
        raise LeagueConfigurationException(result.error_message)
    return result.sanitized_value


def _parse_time(value: Any, label: str) -> Optional[datetime]:
    if not value:
        return None
    try:
        return date_parser.isoparse(value)
    except (TypeError, ValueError) as e:
        raise LeagueConfigurationException(f"Invalid {label}: {value}") from e


@dataclass
class SeasonRules:
    """Rules a league season hands down to every game it generates.

    Attributes
    ----------
    game_config : GameConfig
        Gender policy, sets, scoring and winner modes copied into each game.
    start_time : datetime or None
        Start of the season; round ``n`` is scheduled ``n`` weeks later.
    max_total_points_per_set : int
        Scoring cap per set, 0 for none.
    max_points_per_team : int
        Scoring cap per team, 0 for none.
    affects_rating : bool
        Whether generated games count towards player ratings.
    """

    game_config: GameConfig = field(default_factory=GameConfig)
    start_time: Optional[datetime] = None
    max_total_points_per_set: int = 0
    max_points_per_team: int = 0
    affects_rating: bool = True

    def schedule(self, round_index: int, now: Optional[datetime] = None):
        """Return ``(start, end)`` for a game of round ``round_index`` (0-based)."""
        base = self.start_time or now or datetime.now()
        start = base + relativedelta(weeks=round_index)
        return start, start + relativedelta(hours=LEAGUE_GAME_DURATION_HOURS)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "game": self.game_config.to_dict(),
            "startTime": self.start_time.isoformat() if self.start_time else None,
            "maxTotalPointsPerSet": self.max_total_points_per_set,
            "maxPointsPerTeam": self.max_points_per_team,
            "affectsRating": self.affects_rating,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SeasonRules":
        return cls(
            game_config=GameConfig.from_dict(data.get("game") or {}),
            start_time=_parse_time(data.get("startTime"), "season start time"),
            max_total_points_per_set=_int_field(data, "maxTotalPointsPerSet"),
            max_points_per_team=_int_field(data, "maxPointsPerTeam"),
            affects_rating=bool(data.get("affectsRating", True)),
        )


@dataclass
class SeasonGame:
    """A league game: two fixed teams of a group playing in one season round.

    Generated games carry the season rules and schedule; games read back as
    season history only need ``round_index`` and the two teams.
    """

    id: str
    round_index: int
    teams: List[FixedTeam] = field(default_factory=list)
    name: str = ""
    rules: Optional[SeasonRules] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def participants(self) -> List[Participant]:
        return [player for team in self.teams for player in team.players]

    @property
    def participant_ids(self) -> List[str]:
        return [player.user_id for player in self.participants]

    @property
    def team_player_ids(self) -> List[List[str]]:
        return [team.player_ids for team in self.teams]

    @staticmethod
    def default_name(round_index: int) -> str:
        return LEAGUE_GAME_NAME.format(number=round_index + 1)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize game to dictionary."""
        return {
            "id": self.id,
            "roundIndex": self.round_index,
            "name": self.name,
            "teams": [team.to_dict() for team in self.teams],
            "rules": self.rules.to_dict() if self.rules else None,
            "startTime": self.start_time.isoformat() if self.start_time else None,
            "endTime": self.end_time.isoformat() if self.end_time else None,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SeasonGame":
        """Deserialize game from dictionary; schedule fields are optional."""
        rules = data.get("rules")
        return cls(
            id=str(data.get("id", "")),
            round_index=_int_field(data, "roundIndex"),
            teams=[FixedTeam.from_dict(t) for t in data.get("teams") or []],
            name=data.get("name", ""),
            rules=SeasonRules.from_dict(rules) if rules else None,
            start_time=_parse_time(data.get("startTime"), "game start time"),
            end_time=_parse_time(data.get("endTime"), "game end time"),
        )


@dataclass
class LeagueGroup:
    """A league group: its roster and the games it has played this season."""

    group_id: str
    participants: List[Participant] = field(default_factory=list)
    games: List[SeasonGame] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LeagueGroup":
        if not data.get("id"):
            raise LeagueConfigurationException("League group is missing an id")
        return cls(
            group_id=str(data["id"]),
            participants=[Participant.from_dict(p) for p in data.get("participants") or []],
            games=[SeasonGame.from_dict(g) for g in data.get("games") or []],
        )
