"""RATING strategy: seed courts from the current standings."""

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
from typing import List, Sequence

from courtpairing.models.game_config import GameConfig, GenderMode
from courtpairing.models.history import HistoryIndex
from courtpairing.pairing.eligibility import Eligibility
from courtpairing.pairing.layout import cross_pairs, group_in_fours, pair_adjacent
from courtpairing.pairing.rotation import select_with_rotation
from courtpairing.tournament.standings import StandingsCalculator
from courtpairing.type_hints import Matchup
from courtpairing.utils import setup_logger, shuffled, team_key

logger = setup_logger(__name__)


def _with_missing(ranked: Sequence[str], eligible: Sequence[str]) -> List[str]:
    """Keep eligible ids in rank order, appending those without a standing."""
    allowed = set(eligible)
    ordered = [player_id for player_id in ranked if player_id in allowed]
    seen = set(ordered)
    ordered.extend(player_id for player_id in eligible if player_id not in seen)
    return ordered


def rank_players(
    eligibility: Eligibility,
    history: HistoryIndex,
    config: GameConfig,
    rng: random.Random,
) -> List[str]:
    """Eligible player ids, best first; a random order before any round."""
    if history.is_empty:
        return shuffled(eligibility.player_ids, rng)
    standings = StandingsCalculator(config).calculate(eligibility.players, history.rounds)
    return _with_missing([s.user_id for s in standings], eligibility.player_ids)


def _rating_players(
    eligibility: Eligibility,
    history: HistoryIndex,
    config: GameConfig,
    rng: random.Random,
) -> List[Matchup]:
    play_counts = history.matches_played(eligibility.player_ids)
    ranked = rank_players(eligibility, history, config, rng)

    if eligibility.gender_mode == GenderMode.MIX_PAIRS:
        per_gender = eligibility.num_matches * 2
        male_ids = {p.user_id for p in eligibility.males}
        female_ids = {p.user_id for p in eligibility.females}
        males = select_with_rotation(
            [p for p in ranked if p in male_ids], per_gender, lambda p: play_counts.get(p, 0)
        )
        females = select_with_rotation(
            [p for p in ranked if p in female_ids], per_gender, lambda p: play_counts.get(p, 0)
        )
        count = min(eligibility.num_matches, len(males) // 2, len(females) // 2)
        return [
            ([males[i * 2], females[i * 2 + 1]], [males[i * 2 + 1], females[i * 2]])
            for i in range(count)
        ]

    selected = select_with_rotation(
        ranked, eligibility.needed_players, lambda p: play_counts.get(p, 0)
    )
    return group_in_fours(selected, eligibility.num_matches, cross_pairs)


def _rating_teams(
    eligibility: Eligibility,
    history: HistoryIndex,
    config: GameConfig,
    rng: random.Random,
) -> List[Matchup]:
    teams = [team.player_ids for team in eligibility.teams]
    if history.is_empty:
        ranked = shuffled(teams, rng)
    else:
        standings = StandingsCalculator(config).calculate_teams(
            eligibility.teams, history.rounds
        )
        by_key = {team_key(ids): ids for ids in teams}
        ranked_keys = _with_missing(
            [team_key(s.player_ids) for s in standings], list(by_key)
        )
        ranked = [by_key[key] for key in ranked_keys]

    rounds_played = history.team_rounds_played(teams)
    selected = select_with_rotation(
        ranked, eligibility.needed_teams, lambda ids: rounds_played.get(team_key(ids), 0)
    )
    return pair_adjacent(selected, eligibility.num_matches)


def generate_rating_matchups(
    eligibility: Eligibility,
    history: HistoryIndex,
    config: GameConfig,
    rng: random.Random,
) -> List[Matchup]:
    """
    Lay out a round from the standings.

    Ranks 1 and 4 play 2 and 3 within every block of four; fixed teams play
    the adjacent-ranked team. When more players are eligible than fit, the
    ones who have played the most sit out, keeping rank order among the
    rest. No opponent-history balancing is applied.
    """
    if eligibility.num_matches <= 0:
        return []
    if eligibility.teams:
        matchups = _rating_teams(eligibility, history, config, rng)
    else:
        matchups = _rating_players(eligibility, history, config, rng)
    logger.info(
        f"Rating round {len(history.rounds) + 1}: {len(matchups)} of "
        f"{eligibility.num_matches} matches"
    )
    return matchups
