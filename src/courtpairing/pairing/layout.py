"""Turn team-vs-team layouts into matches with courts and score sheets."""

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

from typing import Iterable, List, Optional, Sequence

from courtpairing.models.game_config import GameConfig
from courtpairing.models.match import Match, empty_sets
from courtpairing.type_hints import Matchup
from courtpairing.utils import generate_id


def new_match(
    config: GameConfig,
    team_a: Sequence[str] = (),
    team_b: Sequence[str] = (),
    court_id: Optional[str] = None,
) -> Match:
    """Create a match with a fresh score sheet."""
    return Match(
        id=generate_id("match_"),
        team_a=list(team_a),
        team_b=list(team_b),
        sets=empty_sets(config.number_of_sets),
        court_id=court_id,
    )


def build_matches(
    matchups: Iterable[Matchup],
    config: GameConfig,
    limit: Optional[int] = None,
) -> List[Match]:
    """Assign each matchup to the court at its position, up to ``limit``."""
    matches = []
    for index, (team_a, team_b) in enumerate(matchups):
        if limit is not None and index >= limit:
            break
        matches.append(new_match(config, team_a, team_b, config.court_id_at(index)))
    return matches


def cross_pairs(court: Sequence[str]) -> Matchup:
    """Positions 0+3 against 1+2 of a four-player court."""
    return [court[0], court[3]], [court[1], court[2]]


def group_in_fours(ordered_ids: Sequence[str], num_matches: int, pattern=cross_pairs):
    """Split ranked ids into blocks of four and lay each block out with ``pattern``."""
    matchups = []
    for index in range(num_matches):
        block = ordered_ids[index * 4 : index * 4 + 4]
        if len(block) < 4:
            break
        matchups.append(pattern(block))
    return matchups


def pair_adjacent(ordered_teams: Sequence[Sequence[str]], num_matches: int):
    """Pair ranked teams 1 vs 2, 3 vs 4, and so on."""
    count = min(num_matches, len(ordered_teams) // 2)
    return [
        (list(ordered_teams[i * 2]), list(ordered_teams[i * 2 + 1]))
        for i in range(count)
    ]
