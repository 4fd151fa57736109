"""Roster data models: participants and fixed teams."""

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
from typing import Any, Dict, Iterable, List

from courtpairing.exceptions import InvalidParticipantDataException
from courtpairing.utils import team_key
from courtpairing.utils.validation import (
    validate_choice,
    validate_int,
    validate_level,
    validate_user_id,
)


class Gender(Enum):
    """Gender recorded on a player profile."""

    MALE = "MALE"
    FEMALE = "FEMALE"
    PREFER_NOT_TO_SAY = "PREFER_NOT_TO_SAY"
    UNSPECIFIED = "UNSPECIFIED"


class ParticipantStatus(Enum):
    """Participation status of a roster entry."""

    PLAYING = "PLAYING"
    NON_PLAYING = "NON_PLAYING"
    INVITED = "INVITED"
    GUEST = "GUEST"


@dataclass
class Participant:
    """A resolved roster entry for one player.

    Attributes
    ----------
    user_id : str
        Identity of the player.
    gender : Gender
        Player gender, used by gender-team modes.
    level : float
        Player level, used for first-round seeding.
    status : ParticipantStatus
        Only PLAYING participants are eligible for rounds.
    is_trainer : bool
        Whether the participant joined as a trainer.
    points : int
        League points, used to order league groups.
    """

    user_id: str
    gender: Gender = Gender.UNSPECIFIED
    level: float = 0.0
    status: ParticipantStatus = ParticipantStatus.PLAYING
    is_trainer: bool = False
    points: int = 0

    @property
    def is_playing(self) -> bool:
        return self.status == ParticipantStatus.PLAYING

    def to_dict(self) -> Dict[str, Any]:
        """Serialize participant to dictionary."""
        return {
            "userId": self.user_id,
            "gender": self.gender.value,
            "level": self.level,
            "status": self.status.value,
            "isTrainer": self.is_trainer,
            "points": self.points,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Participant":
        """Deserialize participant from dictionary.

        Raises:
            InvalidParticipantDataException: On a missing id, unknown gender
                or status, a non-numeric level or non-integer points
        """
        checks = {
            "userId": validate_user_id(data.get("userId")),
            "gender": validate_choice(
                data.get("gender") or Gender.UNSPECIFIED.value, Gender
            ),
            "level": validate_level(data.get("level")),
            "status": validate_choice(
                data.get("status", ParticipantStatus.PLAYING.value), ParticipantStatus
            ),
            "points": validate_int(data.get("points"), "points"),
        }
        errors = [result.error_message for result in checks.values() if not result]
        if errors:
            raise InvalidParticipantDataException("; ".join(errors))
        return cls(
            user_id=checks["userId"].sanitized_value,
            gender=checks["gender"].sanitized_value,
            level=checks["level"].sanitized_value,
            status=checks["status"].sanitized_value,
            is_trainer=bool(data.get("isTrainer", False)),
            points=checks["points"].sanitized_value,
        )


@dataclass
class FixedTeam:
    """A persistent pairing of players configured for a game or season."""

    team_number: int
    players: List[Participant] = field(default_factory=list)

    def __post_init__(self) -> None:
        ids = self.player_ids
        if len(set(ids)) != len(ids):
            raise InvalidParticipantDataException(
                f"Fixed team {self.team_number} lists a player twice: {ids}"
            )

    @property
    def player_ids(self) -> List[str]:
        return [player.user_id for player in self.players]

    @property
    def key(self) -> str:
        return team_key(self.player_ids)

    @property
    def average_level(self) -> float:
        if not self.players:
            return 0.0
        return sum(player.level for player in self.players) / len(self.players)

    def is_usable(self, eligible_ids: Iterable[str]) -> bool:
        """A team is usable only when every player is currently eligible."""
        eligible = set(eligible_ids)
        return len(self.players) >= 2 and all(
            player_id in eligible for player_id in self.player_ids
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize fixed team to dictionary."""
        return {
            "teamNumber": self.team_number,
            "players": [player.to_dict() for player in self.players],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FixedTeam":
        """Deserialize fixed team from dictionary."""
        if data.get("teamNumber") is None:
            raise InvalidParticipantDataException("Fixed team is missing teamNumber")
        number = validate_int(data["teamNumber"], "teamNumber")
        if not number:
            raise InvalidParticipantDataException(number.error_message)
        return cls(
            team_number=number.sanitized_value,
            players=[Participant.from_dict(p) for p in data.get("players") or []],
        )
