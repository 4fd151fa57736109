"""Statistics derived from the history of prior rounds."""

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

from collections import Counter
from dataclasses import dataclass, field
from itertools import combinations
from typing import Dict, FrozenSet, Iterable, Sequence, Set

from courtpairing.models.match import Match
from courtpairing.models.round_data import Round
from courtpairing.type_hints import PairCounts, PlayCounts
from courtpairing.utils import pair_key, team_key


def _teammate_keys(match: Match) -> Set[str]:
    keys = set()
    for team in (match.team_a, match.team_b):
        for first, second in combinations(team, 2):
            keys.add(pair_key(first, second))
    return keys


def _opponent_keys(match: Match) -> Set[str]:
    return {pair_key(a, b) for a in match.team_a for b in match.team_b}


def matches_played(player_ids: Iterable[str], rounds: Sequence[Round]) -> PlayCounts:
    """Count the rounds each player appeared in a match with players.

    Players absent from every round map to 0; ids not listed in
    ``player_ids`` are ignored.
    """
    counts = {player_id: 0 for player_id in player_ids}
    for round_data in rounds:
        seen: Set[str] = set()
        for match in round_data.matches_with_players:
            seen.update(match.player_ids)
        for player_id in seen:
            if player_id in counts:
                counts[player_id] += 1
    return counts


def teammate_history(rounds: Sequence[Round]) -> PairCounts:
    """Map each pair key to the number of rounds the two were teammates."""
    counts: Counter = Counter()
    for round_data in rounds:
        keys: Set[str] = set()
        for match in round_data.matches_with_players:
            keys |= _teammate_keys(match)
        counts.update(keys)
    return dict(counts)


def opponent_history(rounds: Sequence[Round]) -> PairCounts:
    """Map each pair key to the number of rounds the two faced each other."""
    counts: Counter = Counter()
    for round_data in rounds:
        keys: Set[str] = set()
        for match in round_data.matches_with_players:
            keys |= _opponent_keys(match)
        counts.update(keys)
    return dict(counts)


def last_round_teammate_keys(rounds: Sequence[Round]) -> FrozenSet[str]:
    """Pair keys that were teammates in the most recent round only."""
    if not rounds:
        return frozenset()
    keys: Set[str] = set()
    for match in rounds[-1].matches_with_players:
        keys |= _teammate_keys(match)
    return frozenset(keys)


def team_rounds_played(
    teams: Iterable[Sequence[str]], rounds: Sequence[Round]
) -> Dict[str, int]:
    """Count the rounds in which any player of each team took part.

    Keys are team keys as built by ``utils.team_key``.
    """
    player_to_team: Dict[str, str] = {}
    counts: Dict[str, int] = {}
    for team in teams:
        key = team_key(team)
        counts[key] = 0
        for player_id in team:
            player_to_team[player_id] = key

    for round_data in rounds:
        counted: Set[str] = set()
        for match in round_data.matches_with_players:
            for player_id in match.player_ids:
                key = player_to_team.get(player_id)
                if key is not None:
                    counted.add(key)
        for key in counted:
            counts[key] += 1
    return counts


@dataclass(frozen=True)
class HistoryIndex:
    """
    Read-only statistics over the rounds played so far.

    Built once per generation call from the supplied rounds; it holds no
    state beyond them.

    Attributes
    ----------
    rounds : tuple of Round
        The prior rounds, oldest first.
    teammate_counts : dict of str to int
        Pair key to rounds played as teammates.
    opponent_counts : dict of str to int
        Pair key to rounds played as opponents.
    last_round_teammates : frozenset of str
        Pair keys that were teammates in the latest round.
    """

    rounds: tuple = ()
    teammate_counts: PairCounts = field(default_factory=dict)
    opponent_counts: PairCounts = field(default_factory=dict)
    last_round_teammates: FrozenSet[str] = frozenset()

    @classmethod
    def from_rounds(cls, rounds: Sequence[Round]) -> "HistoryIndex":
        """Build the index from prior rounds, oldest first."""
        rounds = tuple(rounds)
        return cls(
            rounds=rounds,
            teammate_counts=teammate_history(rounds),
            opponent_counts=opponent_history(rounds),
            last_round_teammates=last_round_teammate_keys(rounds),
        )

    @property
    def is_empty(self) -> bool:
        return not self.rounds

    @property
    def last_round(self):
        return self.rounds[-1] if self.rounds else None

    def matches_played(self, player_ids: Iterable[str]) -> PlayCounts:
        return matches_played(player_ids, self.rounds)

    def team_rounds_played(self, teams: Iterable[Sequence[str]]) -> Dict[str, int]:
        return team_rounds_played(teams, self.rounds)

    def teammate_count(self, player1_id: str, player2_id: str) -> int:
        return self.teammate_counts.get(pair_key(player1_id, player2_id), 0)

    def opponent_count(self, player1_id: str, player2_id: str) -> int:
        return self.opponent_counts.get(pair_key(player1_id, player2_id), 0)

    def played_together_last_round(self, player1_id: str, player2_id: str) -> bool:
        return pair_key(player1_id, player2_id) in self.last_round_teammates

    def opponent_score(self, team_a: Sequence[str], team_b: Sequence[str]) -> int:
        """Sum of pairwise opponent counts between two teams."""
        return sum(self.opponent_count(a, b) for a in team_a for b in team_b)
