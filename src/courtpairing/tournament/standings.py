"""Match winners and game standings from recorded rounds."""

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
from functools import cmp_to_key
from typing import Dict, Iterable, List, Optional, Sequence

from courtpairing.constants import OUTCOME_LOSS, OUTCOME_TIE, OUTCOME_WIN
from courtpairing.models.game_config import (
    GameConfig,
    GenderMode,
    WinnerOfGame,
    WinnerOfMatch,
)
from courtpairing.models.match import Match
from courtpairing.models.participant import FixedTeam, Gender, Participant
from courtpairing.models.round_data import Round
from courtpairing.type_hints import TEAM_A, TEAM_B, MatchOutcome
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


def match_winner(
    match: Match, winner_of_match: WinnerOfMatch = WinnerOfMatch.BY_SCORES
) -> MatchOutcome:
    """Decide a match from its played sets.

    Sets where both sides scored 0 are ignored. BY_SCORES compares total
    points, BY_SETS compares sets won. Equal totals are a tie; a match with
    nothing played (or only drawn sets under BY_SETS) has no outcome.
    """
    valid = match.valid_sets
    if not valid:
        return None

    if winner_of_match == WinnerOfMatch.BY_SETS:
        a_value = sum(1 for s in valid if s.team_a > s.team_b)
        b_value = sum(1 for s in valid if s.team_b > s.team_a)
    else:
        a_value, b_value = match.team_totals()

    if a_value > b_value:
        return TEAM_A
    if b_value > a_value:
        return TEAM_B
    if a_value > 0:
        return OUTCOME_TIE
    return None


@dataclass
class PlayerStanding:
    """Accumulated results of one player.

    Attributes
    ----------
    user_id : str
        The player.
    place : int
        1-based place; fully tied players share one.
    wins, ties, losses : int
        Match outcomes.
    scores_made, scores_lost : int
        Points scored and conceded over played sets.
    matches_won : int
        Same as ``wins``; kept separately as the primary sort key.
    scores_delta : int
        ``scores_made - scores_lost``.
    points : int
        Points earned, only filled in BY_POINTS mode.
    """

    user_id: str
    level: float = 0.0
    gender: Gender = Gender.UNSPECIFIED
    place: int = 0
    wins: int = 0
    ties: int = 0
    losses: int = 0
    scores_made: int = 0
    scores_lost: int = 0
    matches_won: int = 0
    scores_delta: int = 0
    points: int = 0

    def record(self, made: int, lost: int, outcome: Optional[str]) -> None:
        self.scores_made += made
        self.scores_lost += lost
        self.scores_delta += made - lost
        if outcome == OUTCOME_WIN:
            self.wins += 1
            self.matches_won += 1
        elif outcome == OUTCOME_LOSS:
            self.losses += 1
        elif outcome == OUTCOME_TIE:
            self.ties += 1

    def to_dict(self) -> Dict[str, object]:
        return {
            "userId": self.user_id,
            "place": self.place,
            "wins": self.wins,
            "ties": self.ties,
            "losses": self.losses,
            "scoresMade": self.scores_made,
            "scoresLost": self.scores_lost,
            "matchesWon": self.matches_won,
            "scoresDelta": self.scores_delta,
            "points": self.points,
        }


@dataclass
class TeamStanding:
    """Accumulated results of a fixed team."""

    team_number: int
    player_ids: List[str] = field(default_factory=list)
    matches_won: int = 0
    scores_delta: int = 0


class StandingsCalculator:
    """Ranks the players of a game by the configured winner-of-game mode.

    The tie-break chain after the primary value is matches won, ties, score
    delta, head-to-head and finally level.
    """

    def __init__(self, config: GameConfig):
        self.config = config

    def _points(self, standing: PlayerStanding) -> int:
        return (
            standing.wins * self.config.points_per_win
            + standing.ties * self.config.points_per_tie
            + standing.losses * self.config.points_per_loose
        )

    def player_stats(self, participant: Participant, rounds: Sequence[Round]) -> PlayerStanding:
        standing = PlayerStanding(
            user_id=participant.user_id, level=participant.level, gender=participant.gender
        )
        for round_data in rounds:
            for match in round_data.matches:
                if not match.is_played:
                    continue
                on_a = participant.user_id in match.team_a
                on_b = participant.user_id in match.team_b
                if on_a == on_b:
                    continue
                total_a, total_b = match.team_totals()
                winner = match_winner(match, self.config.winner_of_match)
                side = TEAM_A if on_a else TEAM_B
                if winner == OUTCOME_TIE:
                    outcome = OUTCOME_TIE
                elif winner is None:
                    outcome = None
                else:
                    outcome = OUTCOME_WIN if winner == side else OUTCOME_LOSS
                if on_a:
                    standing.record(total_a, total_b, outcome)
                else:
                    standing.record(total_b, total_a, outcome)
        if self.config.winner_of_game == WinnerOfGame.BY_POINTS:
            standing.points = self._points(standing)
        return standing

    def head_to_head(self, player_a: str, player_b: str, rounds: Sequence[Round]) -> int:
        """Return -1 when ``player_a`` beat ``player_b`` more often, 1 for the reverse, else 0."""
        a_wins = b_wins = 0
        for round_data in rounds:
            for match in round_data.matches:
                if not match.is_played:
                    continue
                if player_a in match.team_a and player_b in match.team_b:
                    a_side = TEAM_A
                elif player_a in match.team_b and player_b in match.team_a:
                    a_side = TEAM_B
                else:
                    continue
                winner = match_winner(match, self.config.winner_of_match)
                if winner in (TEAM_A, TEAM_B):
                    if winner == a_side:
                        a_wins += 1
                    else:
                        b_wins += 1
        if a_wins > b_wins:
            return -1
        if b_wins > a_wins:
            return 1
        return 0

    def _primary(self, standing: PlayerStanding) -> int:
        mode = self.config.winner_of_game
        if mode == WinnerOfGame.BY_POINTS:
            return self._points(standing)
        if mode == WinnerOfGame.BY_SCORES_DELTA:
            return standing.scores_delta
        if mode == WinnerOfGame.PLAYOFF_FINALS:
            return 0
        return standing.matches_won

    def _compare(self, a: PlayerStanding, b: PlayerStanding, rounds: Sequence[Round]) -> int:
        keys = [
            self._primary,
            lambda s: s.matches_won,
            lambda s: s.ties,
            lambda s: s.scores_delta,
        ]
        for key in keys:
            diff = key(b) - key(a)
            if diff:
                return diff
        h2h = self.head_to_head(a.user_id, b.user_id, rounds)
        if h2h:
            return h2h
        if b.level != a.level:
            return -1 if a.level > b.level else 1
        return 0

    def _rank(self, standings: List[PlayerStanding], rounds: Sequence[Round]) -> List[PlayerStanding]:
        ordered = sorted(standings, key=cmp_to_key(lambda a, b: self._compare(a, b, rounds)))
        place = 0
        previous = None
        for standing in ordered:
            if previous is None or self._compare(previous, standing, rounds) != 0 or (
                previous.wins,
                previous.losses,
            ) != (standing.wins, standing.losses):
                place += 1
            standing.place = place
            previous = standing
        return ordered

    def calculate(
        self, participants: Iterable[Participant], rounds: Sequence[Round]
    ) -> List[PlayerStanding]:
        """Standings of the PLAYING participants, best first.

        Returns an empty list before any round exists. MIX_PAIRS games
        without fixed teams rank men and women separately and interleave
        the two tables.
        """
        players = [p for p in participants if p.is_playing]
        if not players or not rounds:
            return []
        standings = [self.player_stats(p, rounds) for p in players]

        if (
            self.config.gender_teams == GenderMode.MIX_PAIRS
            and not self.config.uses_fixed_teams
        ):
            males = self._rank([s for s in standings if s.gender == Gender.MALE], rounds)
            females = self._rank([s for s in standings if s.gender == Gender.FEMALE], rounds)
            interleaved = []
            for i in range(max(len(males), len(females))):
                interleaved.extend(table[i] for table in (males, females) if i < len(table))
            return interleaved

        ranked = self._rank(standings, rounds)
        logger.debug(f"Standings: {[s.user_id for s in ranked]}")
        return ranked

    def calculate_teams(
        self, teams: Iterable[FixedTeam], rounds: Sequence[Round]
    ) -> List[TeamStanding]:
        """Fixed teams ordered by summed score delta of their players."""
        results = []
        for team in teams:
            standing = TeamStanding(team_number=team.team_number, player_ids=team.player_ids)
            for player in team.players:
                stats = self.player_stats(player, rounds)
                standing.scores_delta += stats.scores_delta
                standing.matches_won += stats.matches_won
            results.append(standing)
        return sorted(results, key=lambda s: s.scores_delta, reverse=True)


def calculate_standings(
    participants: Iterable[Participant], rounds: Sequence[Round], config: GameConfig
) -> List[PlayerStanding]:
    return StandingsCalculator(config).calculate(participants, rounds)


def calculate_team_standings(
    teams: Iterable[FixedTeam], rounds: Sequence[Round], config: Optional[GameConfig] = None
) -> List[TeamStanding]:
    return StandingsCalculator(config or GameConfig()).calculate_teams(teams, rounds)
