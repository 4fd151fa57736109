"""Round generation: dispatch a game configuration to its strategy."""

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
from typing import Callable, Dict, List, Optional, Sequence

from courtpairing.config import DEFAULT_SETTINGS, EngineSettings
from courtpairing.models.game_config import GameConfig, MatchGenerationType
from courtpairing.models.history import HistoryIndex
from courtpairing.models.match import Match
from courtpairing.models.participant import Participant
from courtpairing.models.round_data import Round
from courtpairing.pairing.eligibility import Eligibility, resolve_eligibility
from courtpairing.pairing.ladder import generate_ladder_matchups
from courtpairing.pairing.layout import build_matches, new_match, pair_adjacent
from courtpairing.pairing.random_pairing import generate_random_matchups
from courtpairing.pairing.rating import generate_rating_matchups
from courtpairing.type_hints import Matchup
from courtpairing.utils import ensure_rng, setup_logger

logger = setup_logger(__name__)


def winners_court_seed(block: Sequence[str]) -> Matchup:
    """Ranks 1 and 3 against 2 and 4."""
    return [block[0], block[2]], [block[1], block[3]]


class RoundGenerator:
    """Generates the matches of the next round of a game.

    The generator is stateless between calls: everything it knows comes
    from the roster and the rounds handed to ``generate_round``.
    """

    def __init__(
        self,
        config: GameConfig,
        rng: Optional[random.Random] = None,
        settings: EngineSettings = DEFAULT_SETTINGS,
    ):
        """Initialize the round generator.

        Args:
            config: Game configuration selecting the strategy
            rng: Random source for every shuffle and tie-break
            settings: Retry caps for the randomized searches
        """
        self.config = config
        self.rng = ensure_rng(rng)
        self.settings = settings

    def _strategies(self) -> Dict[MatchGenerationType, Callable]:
        return {
            MatchGenerationType.HANDMADE: self._handmade,
            MatchGenerationType.FIXED: self._fixed,
            MatchGenerationType.RANDOM: self._random,
            MatchGenerationType.RATING: self._rating,
            MatchGenerationType.WINNERS_COURT: self._winners_court,
            MatchGenerationType.ROUND_ROBIN: self._not_generated_here,
            MatchGenerationType.ESCALERA: self._not_generated_here,
        }

    def generate_round(
        self,
        participants: Sequence[Participant],
        rounds: Sequence[Round],
        manual_layout: Optional[Sequence[Matchup]] = None,
    ) -> List[Match]:
        """Generate the matches of the next round.

        Args:
            participants: Resolved roster of the game
            rounds: Prior rounds, oldest first
            manual_layout: Caller-built matchups, used by HANDMADE only

        Returns:
            Matches with court and fresh score sheet, in court order. An
            empty list means the round cannot be generated yet.
        """
        generation_type = self.config.match_generation_type
        history = HistoryIndex.from_rounds(rounds)
        eligibility = resolve_eligibility(participants, self.config)
        round_number = len(history.rounds) + 1

        logger.info(
            f"Generating round {round_number} ({generation_type.value}) with "
            f"{len(eligibility.players)} eligible players"
        )
        if generation_type == MatchGenerationType.HANDMADE:
            matches = self._handmade(eligibility, history, manual_layout)
        else:
            matches = self._strategies()[generation_type](eligibility, history)
        logger.info(f"Round {round_number}: {len(matches)} match(es) generated")
        return matches

    def _handmade(
        self,
        eligibility: Eligibility,
        history: HistoryIndex,
        manual_layout: Optional[Sequence[Matchup]] = None,
    ) -> List[Match]:
        if manual_layout is not None:
            return build_matches(manual_layout, self.config)

        player_ids = eligibility.player_ids
        if len(player_ids) == 2:
            return build_matches([([player_ids[0]], [player_ids[1]])], self.config)
        if len(player_ids) == 4:
            if len(eligibility.teams) == 2:
                teams = [team.player_ids for team in eligibility.teams]
                return build_matches([(teams[0], teams[1])], self.config)
            return build_matches([(player_ids[:2], player_ids[2:])], self.config)
        return [new_match(self.config, court_id=self.config.court_id_at(0))]

    def _fixed(self, eligibility: Eligibility, history: HistoryIndex) -> List[Match]:
        if history.is_empty:
            teams = [team.player_ids for team in eligibility.teams]
            matchups = pair_adjacent(teams, eligibility.num_matches)
            if not matchups:
                return [new_match(self.config, court_id=self.config.court_id_at(0))]
            return build_matches(matchups, self.config)

        previous = history.last_round
        first = history.rounds[0]
        if not previous.matches:
            return [new_match(self.config, court_id=self.config.court_id_at(0))]
        matches = []
        for index, match in enumerate(previous.matches):
            court_id = first.matches[index].court_id if index < len(first.matches) else None
            matches.append(new_match(self.config, match.team_a, match.team_b, court_id))
        return matches

    def _random(self, eligibility: Eligibility, history: HistoryIndex) -> List[Match]:
        matchups = generate_random_matchups(eligibility, history, self.rng, self.settings)
        return build_matches(matchups, self.config, limit=eligibility.num_matches)

    def _rating(self, eligibility: Eligibility, history: HistoryIndex) -> List[Match]:
        matchups = generate_rating_matchups(eligibility, history, self.config, self.rng)
        return build_matches(matchups, self.config, limit=eligibility.num_matches)

    def _winners_court(self, eligibility: Eligibility, history: HistoryIndex) -> List[Match]:
        matchups = generate_ladder_matchups(
            eligibility, history, self.rng, seed_pattern=winners_court_seed
        )
        return build_matches(matchups, self.config, limit=eligibility.num_matches)

    def _escalera(self, eligibility: Eligibility, history: HistoryIndex) -> List[Match]:
        matchups = generate_ladder_matchups(eligibility, history, self.rng)
        return build_matches(matchups, self.config, limit=eligibility.num_matches)

    def _not_generated_here(
        self, eligibility: Eligibility, history: HistoryIndex
    ) -> List[Match]:
        logger.info(
            f"{self.config.match_generation_type.value} rounds are not generated "
            "by the round generator"
        )
        return []

    def generate_predefined_round(
        self, participants: Sequence[Participant], rounds: Sequence[Round]
    ) -> List[Match]:
        """Generate a round for the strategies that pre-compute results.

        ESCALERA goes to the standalone ladder; RANDOM, RATING and
        WINNERS_COURT behave as in ``generate_round``. Other types yield
        no matches.
        """
        strategies = {
            MatchGenerationType.ESCALERA: self._escalera,
            MatchGenerationType.RANDOM: self._random,
            MatchGenerationType.RATING: self._rating,
            MatchGenerationType.WINNERS_COURT: self._winners_court,
        }
        generation_type = self.config.match_generation_type
        strategy = strategies.get(generation_type)
        if strategy is None:
            logger.info(f"No predefined generation for {generation_type.value}")
            return []
        history = HistoryIndex.from_rounds(rounds)
        eligibility = resolve_eligibility(participants, self.config)
        matches = strategy(eligibility, history)
        logger.info(
            f"Predefined {generation_type.value} round {len(history.rounds) + 1}: "
            f"{len(matches)} match(es)"
        )
        return matches

    def generate_escalera_round(
        self, participants: Sequence[Participant], rounds: Sequence[Round]
    ) -> List[Match]:
        """Generate a ladder round regardless of the configured type."""
        history = HistoryIndex.from_rounds(rounds)
        eligibility = resolve_eligibility(participants, self.config)
        return self._escalera(eligibility, history)


def generate_round(
    config: GameConfig,
    participants: Sequence[Participant],
    rounds: Sequence[Round],
    rng: Optional[random.Random] = None,
    manual_layout: Optional[Sequence[Matchup]] = None,
) -> List[Match]:
    """Generate the next round of a game; see ``RoundGenerator.generate_round``."""
    return RoundGenerator(config, rng).generate_round(participants, rounds, manual_layout)


def generate_predefined_round(
    config: GameConfig,
    participants: Sequence[Participant],
    rounds: Sequence[Round],
    rng: Optional[random.Random] = None,
) -> List[Match]:
    return RoundGenerator(config, rng).generate_predefined_round(participants, rounds)


def generate_escalera_round(
    config: GameConfig,
    participants: Sequence[Participant],
    rounds: Sequence[Round],
    rng: Optional[random.Random] = None,
) -> List[Match]:
    return RoundGenerator(config, rng).generate_escalera_round(participants, rounds)
