"""Pairing strategies of the court pairing engine.

Each strategy turns an eligible roster and the round history into a list
of matchups in court order; the round generator assigns courts and score
sheets.
"""

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

from courtpairing.pairing.eligibility import Eligibility, resolve_eligibility
from courtpairing.pairing.ladder import CourtSeating, generate_ladder_matchups
from courtpairing.pairing.matchup import form_matchups
from courtpairing.pairing.random_pairing import generate_random_matchups, select_pairs
from courtpairing.pairing.rating import generate_rating_matchups
from courtpairing.pairing.season_teams import SeasonTeamGenerator, generate_season_round

__all__ = [
    "CourtSeating",
    "Eligibility",
    "SeasonTeamGenerator",
    "form_matchups",
    "generate_ladder_matchups",
    "generate_random_matchups",
    "generate_rating_matchups",
    "generate_season_round",
    "resolve_eligibility",
    "select_pairs",
]
