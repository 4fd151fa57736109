"""Data model of the court pairing engine."""

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

from courtpairing.models.game_config import (
    Court,
    GameConfig,
    GenderMode,
    MatchGenerationType,
    WinnerOfGame,
    WinnerOfMatch,
)
from courtpairing.models.history import HistoryIndex
from courtpairing.models.match import Match, SetScore, empty_sets
from courtpairing.models.participant import (
    FixedTeam,
    Gender,
    Participant,
    ParticipantStatus,
)
from courtpairing.models.round_data import Round
from courtpairing.models.season import LeagueGroup, SeasonGame, SeasonRules

__all__ = [
    "Court",
    "FixedTeam",
    "GameConfig",
    "Gender",
    "GenderMode",
    "HistoryIndex",
    "LeagueGroup",
    "Match",
    "MatchGenerationType",
    "Participant",
    "ParticipantStatus",
    "Round",
    "SeasonGame",
    "SeasonRules",
    "SetScore",
    "WinnerOfGame",
    "WinnerOfMatch",
    "empty_sets",
]
