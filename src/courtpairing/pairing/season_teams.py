"""League season team generation: new teammates every round of a season."""

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
from collections import Counter, defaultdict
from datetime import datetime
from itertools import combinations
from typing import Dict, List, Optional, Sequence, Set

from courtpairing.config import DEFAULT_SETTINGS, EngineSettings
from courtpairing.constants import MIN_LEAGUE_GROUP_SIZE, MIN_LEAGUE_TEAMS
from courtpairing.exceptions import (
    LeagueConfigurationException,
    NoPairingAvailableException,
    OddParticipantCountException,
    RepeatPairingException,
)
from courtpairing.models.history import HistoryIndex
from courtpairing.models.match import Match
from courtpairing.models.participant import FixedTeam, Participant
from courtpairing.models.round_data import Round
from courtpairing.models.season import LeagueGroup, SeasonGame, SeasonRules
from courtpairing.pairing.matchup import form_matchups
from courtpairing.type_hints import Pair
from courtpairing.utils import ensure_rng, generate_id, pair_key, setup_logger, shuffled

logger = setup_logger(__name__)


def played_team_keys(games: Sequence[SeasonGame]) -> Set[str]:
    """Pair keys of every two players who were teammates in ``games``."""
    keys = set()
    for game in games:
        for team in game.team_player_ids:
            for first, second in combinations(team, 2):
                keys.add(pair_key(first, second))
    return keys


def season_rounds(games: Sequence[SeasonGame]) -> List[Round]:
    """Regroup season games into rounds so they can feed a HistoryIndex."""
    by_round: Dict[int, List[Match]] = defaultdict(list)
    for game in games:
        teams = game.team_player_ids
        if len(teams) != 2:
            continue
        by_round[game.round_index].append(
            Match(id=game.id or generate_id("match_"), team_a=teams[0], team_b=teams[1])
        )
    return [
        Round(id=f"season-round-{index}", matches=by_round[index])
        for index in sorted(by_round)
    ]


def sort_group_roster(participants: Sequence[Participant]) -> List[Participant]:
    """PLAYING participants by league points, then level, best first."""
    playing = [p for p in participants if p.is_playing]
    return sorted(playing, key=lambda p: (p.points, p.level), reverse=True)


class SeasonTeamGenerator:
    """
    Builds the games of one league round.

    Every group of a season plays in teams of two that have never been
    teammates earlier in the season, and teams meet the opponents they have
    faced least. Games carry the season rules and are scheduled one week
    apart.

    Parameters
    ----------
    rng : random.Random, optional
        Source of every random choice; a fresh one when omitted.
    settings : EngineSettings, optional
        Retry caps for team selection and matchup forming.
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        settings: EngineSettings = DEFAULT_SETTINGS,
    ):
        self.rng = ensure_rng(rng)
        self.settings = settings

    def _greedy_teams(
        self,
        candidates: Sequence[Pair],
        needed: int,
        rounds_played: Counter,
    ) -> List[Pair]:
        partners: Dict[str, Dict[str, Pair]] = defaultdict(dict)
        for pair in candidates:
            partners[pair[0]][pair[1]] = pair
            partners[pair[1]][pair[0]] = pair

        players = sorted(shuffled(list(partners), self.rng), key=lambda p: rounds_played[p])
        used = set()
        selected: List[Pair] = []
        for player in players:
            if len(selected) >= needed:
                break
            if player in used:
                continue
            options = [other for other in partners[player] if other not in used]
            if not options:
                continue
            partner = min(shuffled(options, self.rng), key=lambda o: rounds_played[o])
            selected.append(partners[player][partner])
            used.update((player, partner))
        return selected

    @staticmethod
    def _least_overlap_teams(candidates: Sequence[Pair], needed: int) -> List[Pair]:
        """Deterministic pass over teams sorted by how many of their players are taken.

        Among untouched teams, the one whose players have the fewest
        remaining options goes first.
        """
        used: Set[str] = set()
        selected: List[Pair] = []
        while len(selected) < needed:
            free = [pair for pair in candidates if not used.intersection(pair)]
            degree = Counter(player for pair in free for player in pair)
            ranked = sorted(
                candidates,
                key=lambda pair: (
                    len(used.intersection(pair)),
                    degree[pair[0]] + degree[pair[1]],
                ),
            )
            if not ranked or used.intersection(ranked[0]):
                break
            selected.append(ranked[0])
            used.update(ranked[0])
        return selected

    def select_teams(
        self,
        player_ids: Sequence[str],
        prior_games: Sequence[SeasonGame],
    ) -> List[Pair]:
        """
        Choose ``len(player_ids) // 2`` teams nobody has played before.

        Raises
        ------
        NoPairingAvailableException
            When every possible team has already been played.
        RepeatPairingException
            When a selected team turns out to have been played already.
        """
        played = played_team_keys(prior_games)
        candidates = [
            pair for pair in combinations(player_ids, 2) if pair_key(*pair) not in played
        ]
        if not candidates:
            logger.error(
                f"All {len(player_ids) * (len(player_ids) - 1) // 2} teams of the group "
                "were already played this season"
            )
            raise NoPairingAvailableException(
                "No new teams left for this group; the season has used every combination"
            )

        rounds_played: Counter = Counter()
        for season_round in season_rounds(prior_games):
            rounds_played.update(set(p for m in season_round.matches for p in m.player_ids))

        needed = len(player_ids) // 2
        best: List[Pair] = []
        for attempt in range(self.settings.season_attempts):
            teams = self._greedy_teams(candidates, needed, rounds_played)
            if len(teams) > len(best):
                best = teams
            if len(best) >= needed:
                logger.debug(f"Season teams found on attempt {attempt + 1}")
                break

        if len(best) < needed:
            fallback = self._least_overlap_teams(candidates, needed)
            if len(fallback) > len(best):
                logger.warning(
                    f"Greedy selection found {len(best)}/{needed} teams, "
                    f"least-overlap pass found {len(fallback)}"
                )
                best = fallback

        repeated = [pair for pair in best if pair_key(*pair) in played]
        if repeated:
            logger.error(f"Selected teams were already played this season: {repeated}")
            raise RepeatPairingException(
                f"Selected teams were already played this season: {repeated}"
            )
        return best

    def generate_season_round(
        self,
        group_roster: Sequence[Participant],
        season_history: Sequence[SeasonGame],
        season_rules: SeasonRules,
        round_index: int,
        now: Optional[datetime] = None,
    ) -> List[SeasonGame]:
        """
        Generate the games of one group for round ``round_index`` (0-based).

        Groups with fewer than four playing participants are skipped.

        Raises
        ------
        OddParticipantCountException
            When the group has an odd number of playing participants.
        NoPairingAvailableException
            When no new team exists, or fewer than two teams could be formed.
        RepeatPairingException
            When an already-played team slipped through selection.
        """
        players = sort_group_roster(group_roster)
        if len(players) < MIN_LEAGUE_GROUP_SIZE:
            logger.info(f"Skipping group with {len(players)} playing participants")
            return []
        if len(players) % 2:
            logger.error(f"League group has an odd number of participants: {len(players)}")
            raise OddParticipantCountException(
                f"League group needs an even number of participants, has {len(players)}"
            )

        prior_games = [g for g in season_history if g.round_index != round_index]
        teams = self.select_teams([p.user_id for p in players], prior_games)
        if len(teams) < MIN_LEAGUE_TEAMS:
            logger.error(f"Only {len(teams)} team(s) could be formed for the group")
            raise NoPairingAvailableException(
                f"At least {MIN_LEAGUE_TEAMS} teams are needed, only {len(teams)} formed"
            )

        history = HistoryIndex.from_rounds(season_rounds(prior_games))
        if len(teams) % 2:
            plays = history.matches_played(p.user_id for p in players)
            dropped = max(teams, key=lambda pair: plays[pair[0]] + plays[pair[1]])
            logger.info(f"Benching team {dropped} to keep an even number of teams")
            teams = [pair for pair in teams if pair != dropped]

        matchups = form_matchups(
            teams, history, self.rng, attempts=self.settings.matchup_attempts
        )
        by_id = {p.user_id: p for p in players}
        start, end = season_rules.schedule(round_index, now)
        games = [
            SeasonGame(
                id=generate_id("game_"),
                round_index=round_index,
                teams=[
                    FixedTeam(team_number=1, players=[by_id[p] for p in team_a]),
                    FixedTeam(team_number=2, players=[by_id[p] for p in team_b]),
                ],
                name=SeasonGame.default_name(round_index),
                rules=season_rules,
                start_time=start,
                end_time=end,
            )
            for team_a, team_b in matchups
        ]
        logger.info(
            f"Generated {len(games)} league game(s) for round {round_index + 1} "
            f"from {len(players)} participants"
        )
        return games

    def generate_for_season(
        self,
        groups: Sequence[LeagueGroup],
        season_rules: SeasonRules,
        round_index: int,
        now: Optional[datetime] = None,
    ) -> List[SeasonGame]:
        """Generate the round for every group of the season."""
        if not groups:
            logger.error("League season has no groups")
            raise LeagueConfigurationException("No groups found for this league season")
        games: List[SeasonGame] = []
        for group in groups:
            logger.debug(f"Generating round {round_index + 1} for group {group.group_id}")
            games.extend(
                self.generate_season_round(
                    group.participants, group.games, season_rules, round_index, now
                )
            )
        return games


def generate_season_round(
    group_roster: Sequence[Participant],
    season_history: Sequence[SeasonGame],
    season_rules: SeasonRules,
    round_index: int,
    rng: Optional[random.Random] = None,
) -> List[SeasonGame]:
    """Generate one group's league games for a round."""
    return SeasonTeamGenerator(rng).generate_season_round(
        group_roster, season_history, season_rules, round_index
    )
