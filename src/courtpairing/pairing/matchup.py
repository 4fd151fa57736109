"""Group teams into A-vs-B matchups with the fewest repeated opponents."""

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
from typing import List, Optional, Sequence, Tuple

from courtpairing.constants import MATCHUP_ATTEMPTS
from courtpairing.models.history import HistoryIndex
from courtpairing.type_hints import Matchup
from courtpairing.utils import setup_logger, shuffled

logger = setup_logger(__name__)


def _greedy_matchups(
    teams: Sequence[Sequence[str]], history: HistoryIndex, rng: random.Random
) -> Tuple[List[Matchup], int]:
    """One randomized nearest-neighbour pass; returns matchups and their score."""
    order = shuffled(range(len(teams)), rng)
    used = set()
    matchups: List[Matchup] = []
    total = 0
    for i in order:
        if i in used:
            continue
        candidates = [j for j in order if j != i and j not in used]
        if not candidates:
            continue
        scores = {j: history.opponent_score(teams[i], teams[j]) for j in candidates}
        best = min(scores.values())
        j = rng.choice([c for c in candidates if scores[c] == best])
        used.update((i, j))
        matchups.append((list(teams[i]), list(teams[j])))
        total += best
    return matchups, total


def form_matchups(
    teams: Sequence[Sequence[str]],
    history: HistoryIndex,
    rng: random.Random,
    attempts: int = MATCHUP_ATTEMPTS,
    max_matches: Optional[int] = None,
) -> List[Matchup]:
    """
    Pair teams against each other minimizing prior opponent encounters.

    Each pass shuffles the teams, then lets every unmatched team take the
    opponent with the lowest summed player-vs-player opponent count, picking
    at random among equal scores. The pass with the most matchups wins,
    ties going to the lowest total score.

    Parameters
    ----------
    teams : sequence of sequence of str
        Teams (pairs or fixed teams) already selected for the round.
    history : HistoryIndex
        Opponent counts of prior rounds.
    rng : random.Random
        Source of every random choice.
    attempts : int
        Number of randomized passes.
    max_matches : int, optional
        Cap on the number of matchups returned.

    Returns
    -------
    list of (team_a, team_b)
    """
    if len(teams) < 2:
        return []

    best: List[Matchup] = []
    best_score = None
    for attempt in range(attempts):
        matchups, score = _greedy_matchups(teams, history, rng)
        if (
            best_score is None
            or len(matchups) > len(best)
            or (len(matchups) == len(best) and score < best_score)
        ):
            best, best_score = matchups, score
            logger.debug(f"Matchup attempt {attempt + 1}: {len(matchups)} matches, score {score}")
        if best_score == 0 and len(best) == len(teams) // 2:
            break

    if max_matches is not None:
        best = best[:max_matches]
    return best
