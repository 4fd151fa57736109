"""Teammate selection and matchup forming for the RANDOM strategy."""

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
from collections import defaultdict
from itertools import combinations
from typing import Dict, List, Sequence, Tuple

from courtpairing.config import DEFAULT_SETTINGS, EngineSettings
from courtpairing.models.game_config import GenderMode
from courtpairing.models.history import HistoryIndex
from courtpairing.models.participant import FixedTeam, Gender, Participant
from courtpairing.pairing.eligibility import Eligibility
from courtpairing.pairing.matchup import form_matchups
from courtpairing.pairing.rotation import order_by_play_count
from courtpairing.type_hints import Matchup, Pair, PlayCounts
from courtpairing.utils import setup_logger, shuffled, team_key

logger = setup_logger(__name__)


def legal_pairs(players: Sequence[Participant], gender_mode: GenderMode) -> List[Pair]:
    """All pairs that may team up: male-female for MIX_PAIRS, any two otherwise."""
    if gender_mode == GenderMode.MIX_PAIRS:
        males = [p.user_id for p in players if p.gender == Gender.MALE]
        females = [p.user_id for p in players if p.gender == Gender.FEMALE]
        return [(m, f) for m in males for f in females]
    return list(combinations([p.user_id for p in players], 2))


def _selection_key(
    pairs: Sequence[Pair], play_counts: PlayCounts, history: HistoryIndex
) -> Tuple[int, int, int]:
    """Higher is better: more pairs, then fewer plays, then fewer repeats."""
    plays = sum(play_counts.get(a, 0) + play_counts.get(b, 0) for a, b in pairs)
    repeats = sum(history.teammate_count(a, b) for a, b in pairs)
    return len(pairs), -plays, -repeats


def _greedy_pairs(
    pool: Sequence[Pair],
    needed: int,
    play_counts: PlayCounts,
    history: HistoryIndex,
    rng: random.Random,
) -> List[Pair]:
    partners: Dict[str, Dict[str, Pair]] = defaultdict(dict)
    for pair in pool:
        first, second = pair
        partners[first][second] = pair
        partners[second][first] = pair

    used = set()
    selected: List[Pair] = []
    for player in order_by_play_count(list(partners), play_counts, rng):
        if len(selected) >= needed:
            break
        if player in used:
            continue
        options = [other for other in partners[player] if other not in used]
        if not options:
            continue
        partner = min(
            shuffled(options, rng),
            key=lambda other: (
                play_counts.get(other, 0),
                history.teammate_count(player, other),
            ),
        )
        selected.append(partners[player][partner])
        used.update((player, partner))
    return selected


def _best_greedy(
    pool: Sequence[Pair],
    needed: int,
    play_counts: PlayCounts,
    history: HistoryIndex,
    rng: random.Random,
    attempts: int,
) -> List[Pair]:
    best: List[Pair] = []
    for _ in range(attempts):
        pairs = _greedy_pairs(pool, needed, play_counts, history, rng)
        if _selection_key(pairs, play_counts, history) > _selection_key(
            best, play_counts, history
        ):
            best = pairs
        if len(best) >= needed:
            break
    return best


def _sorted_fallback(
    players: Sequence[Participant],
    gender_mode: GenderMode,
    needed: int,
    play_counts: PlayCounts,
    rng: random.Random,
) -> List[Pair]:
    """Pair neighbours in play-count order, ignoring history entirely."""
    if gender_mode == GenderMode.MIX_PAIRS:
        males = order_by_play_count(
            [p.user_id for p in players if p.gender == Gender.MALE], play_counts, rng
        )
        females = order_by_play_count(
            [p.user_id for p in players if p.gender == Gender.FEMALE], play_counts, rng
        )
        return list(zip(males, females))[:needed]
    ordered = order_by_play_count([p.user_id for p in players], play_counts, rng)
    return [(ordered[i], ordered[i + 1]) for i in range(0, len(ordered) - 1, 2)][:needed]


def drop_odd_pair(pairs: List[Pair], play_counts: PlayCounts) -> List[Pair]:
    """Drop the pair with the highest combined play count when the count is odd."""
    if len(pairs) % 2 == 0:
        return pairs
    index = max(
        range(len(pairs)),
        key=lambda i: play_counts.get(pairs[i][0], 0) + play_counts.get(pairs[i][1], 0),
    )
    logger.debug(f"Dropping pair {pairs[index]} to keep an even number of pairs")
    return pairs[:index] + pairs[index + 1 :]


def rotation_pool(
    players: Sequence[Participant],
    needed: int,
    gender_mode: GenderMode,
    play_counts: PlayCounts,
    rng: random.Random,
) -> List[Participant]:
    """The players who sit out the least, enough to fill ``needed`` pairs.

    Equal play counts at the cut-off are resolved at random. MIX_PAIRS
    rotates men and women separately.
    """
    by_id = {p.user_id: p for p in players}
    if gender_mode == GenderMode.MIX_PAIRS:
        selected = []
        for gender in (Gender.MALE, Gender.FEMALE):
            ids = [p.user_id for p in players if p.gender == gender]
            selected.extend(order_by_play_count(ids, play_counts, rng)[:needed])
    else:
        ids = [p.user_id for p in players]
        selected = order_by_play_count(ids, play_counts, rng)[: needed * 2]
    return [by_id[player_id] for player_id in selected]


def _select_from_universe(
    universe: Sequence[Pair],
    needed: int,
    play_counts: PlayCounts,
    history: HistoryIndex,
    rng: random.Random,
    attempts: int,
) -> List[Pair]:
    levels = sorted({history.teammate_count(a, b) for a, b in universe})
    best: List[Pair] = []
    for level in levels:
        pool = [pair for pair in universe if history.teammate_count(*pair) <= level]
        fresh = [pair for pair in pool if not history.played_together_last_round(*pair)]
        pairs = _best_greedy(fresh or pool, needed, play_counts, history, rng, attempts)
        if _selection_key(pairs, play_counts, history) > _selection_key(
            best, play_counts, history
        ):
            best = pairs
        if len(best) >= needed:
            logger.debug(f"Selected {len(best)} pairs at teammate level {level}")
            return best

    pairs = _best_greedy(universe, needed, play_counts, history, rng, attempts)
    if len(pairs) > len(best):
        logger.warning(f"Reusing last-round teammates to reach {len(pairs)}/{needed} pairs")
        best = pairs
    return best


def select_pairs(
    players: Sequence[Participant],
    needed: int,
    history: HistoryIndex,
    gender_mode: GenderMode,
    rng: random.Random,
    attempts: int = DEFAULT_SETTINGS.pair_attempts,
) -> List[Pair]:
    """
    Choose up to ``needed`` disjoint teammate pairs for the next round.

    The players with the fewest rounds played are taken first, so the
    bench rotates. Among them, pools are widened one teammate-history level
    at a time, starting from the least-used pairs; within a pool, pairs
    that were teammates in the previous round are left out while anything
    else remains. Each pool gets ``attempts`` randomized greedy passes in
    which the least-played players choose first, taking the least-played
    partner available. When the rotated players cannot fill the quota the
    whole roster is tried, then a plain play-count ordering.

    Returns
    -------
    list of Pair
        Disjoint pairs, always an even number of them.
    """
    if needed <= 0:
        return []

    play_counts = history.matches_played(p.user_id for p in players)
    rotated = rotation_pool(players, needed, gender_mode, play_counts, rng)
    best = _select_from_universe(
        legal_pairs(rotated, gender_mode), needed, play_counts, history, rng, attempts
    )

    if len(best) < needed and len(rotated) < len(players):
        pairs = _select_from_universe(
            legal_pairs(players, gender_mode), needed, play_counts, history, rng, attempts
        )
        if len(pairs) > len(best):
            logger.warning(f"Widened pairing to the whole roster: {len(pairs)}/{needed} pairs")
            best = pairs

    if len(best) < needed:
        pairs = _sorted_fallback(players, gender_mode, needed, play_counts, rng)
        if len(pairs) > len(best):
            logger.warning(f"Falling back to play-count pairing: {len(pairs)}/{needed} pairs")
            best = pairs

    return drop_odd_pair(best[:needed], play_counts)


def select_fixed_teams(
    teams: Sequence[FixedTeam],
    needed: int,
    history: HistoryIndex,
    rng: random.Random,
) -> List[List[str]]:
    """Pick the fixed teams that have sat out the most, random among equals."""
    candidates = [team.player_ids for team in shuffled(teams, rng)]
    rounds_played = history.team_rounds_played(candidates)
    ordered = sorted(candidates, key=lambda ids: rounds_played[team_key(ids)])
    selected = ordered[:needed]
    if len(selected) % 2:
        selected = selected[:-1]
    return selected


def generate_random_matchups(
    eligibility: Eligibility,
    history: HistoryIndex,
    rng: random.Random,
    settings: EngineSettings = DEFAULT_SETTINGS,
) -> List[Matchup]:
    """Select teams for the round and pair them against each other.

    Returns at most ``eligibility.num_matches`` matchups; fewer when not
    enough legal pairs exist.
    """
    if eligibility.num_matches <= 0:
        return []

    if eligibility.teams:
        teams = select_fixed_teams(
            eligibility.teams, eligibility.needed_teams, history, rng
        )
    else:
        teams = select_pairs(
            eligibility.players,
            eligibility.needed_teams,
            history,
            eligibility.gender_mode,
            rng,
            settings.pair_attempts,
        )

    matchups = form_matchups(
        teams,
        history,
        rng,
        attempts=settings.matchup_attempts,
        max_matches=eligibility.num_matches,
    )
    logger.info(
        f"Random round: {len(matchups)} of {eligibility.num_matches} matches "
        f"from {len(eligibility.players)} eligible players"
    )
    return matchups
