"""Court Pairing: match scheduling for social racket sports."""

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

__version__ = "0.1.0"

from courtpairing.controllers import (
    RoundGenerator,
    generate_escalera_round,
    generate_predefined_round,
    generate_round,
)
from courtpairing.pairing.season_teams import SeasonTeamGenerator, generate_season_round
from courtpairing.tournament import calculate_standings, calculate_team_standings

__all__ = [
    "RoundGenerator",
    "SeasonTeamGenerator",
    "calculate_standings",
    "calculate_team_standings",
    "generate_escalera_round",
    "generate_predefined_round",
    "generate_round",
    "generate_season_round",
]
