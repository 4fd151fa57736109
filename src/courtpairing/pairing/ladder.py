"""Ladder (escalera) movement: winners climb, losers drop, courts re-team."""

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
from collections import Counter
from dataclasses import dataclass
from typing import Callable, Dict, Hashable, List, Optional, Sequence, Tuple

from courtpairing.constants import PLAYERS_PER_MATCH
from courtpairing.models.game_config import GenderMode
from courtpairing.models.history import HistoryIndex
from courtpairing.models.match import Match
from courtpairing.models.participant import Gender, Participant
from courtpairing.models.round_data import Round
from courtpairing.pairing.eligibility import Eligibility
from courtpairing.pairing.layout import cross_pairs, group_in_fours, pair_adjacent
from courtpairing.pairing.rotation import order_by_play_count, select_with_rotation
from courtpairing.type_hints import Matchup, PlayCounts
from courtpairing.utils import coin_flip, reverse_randomly, setup_logger, team_key

logger = setup_logger(__name__)

# A court under construction; None marks a vacated slot
CourtSlots = List[Optional[str]]


@dataclass
class CourtResult:
    """Winners and losers of one court of the previous round."""

    winners: List[str]
    losers: List[str]


def decide_winner(match: Match, rng: random.Random) -> Tuple[List[str], List[str]]:
    """Return ``(winners, losers)`` by aggregate points; a tie is a coin flip."""
    team_a_total, team_b_total = match.team_totals()
    if team_a_total == team_b_total:
        a_wins = coin_flip(rng)
    else:
        a_wins = team_a_total > team_b_total
    if a_wins:
        return list(match.team_a), list(match.team_b)
    return list(match.team_b), list(match.team_a)


def court_results(previous_round: Round, rng: random.Random) -> List[CourtResult]:
    """Outcome of every doubles court, top court first.

    The order inside winners and inside losers is shuffled independently,
    deciding who stays and who moves.
    """
    results = []
    for match in previous_round.matches_with_players:
        if len(match.team_a) != 2 or len(match.team_b) != 2:
            logger.debug(f"Skipping match {match.id}: not a doubles court")
            continue
        winners, losers = decide_winner(match, rng)
        reverse_randomly(winners, rng)
        reverse_randomly(losers, rng)
        results.append(CourtResult(winners=winners, losers=losers))
    return results


def distribute_across_courts(results: Sequence[CourtResult]) -> List[CourtSlots]:
    """
    Move players between adjacent courts.

    Every court keeps one winner and one loser, sends its other winner up
    and its other loser down. The top court keeps both winners and the
    bottom court keeps both losers. Each new court is listed so that
    ``cross_pairs`` splits up the previous teams.

    Parameters
    ----------
    results : sequence of CourtResult
        Previous round, top court first.

    Returns
    -------
    list of list of str
        Four player ids per court, top court first.
    """
    count = len(results)
    if count == 0:
        return []
    if count == 1:
        only = results[0]
        return [[only.winners[0], only.losers[0], only.winners[1], only.losers[1]]]

    staying_winner = [r.winners[0] for r in results]
    moving_up = [r.winners[1] for r in results]
    staying_loser = [r.losers[0] for r in results]
    moving_down = [r.losers[1] for r in results]

    courts: List[CourtSlots] = []
    for i in range(count):
        if i == 0:
            courts.append([staying_winner[0], moving_up[0], moving_up[1], staying_loser[0]])
        elif i == count - 1:
            courts.append(
                [moving_down[i - 1], staying_winner[i], staying_loser[i], moving_down[i]]
            )
        else:
            courts.append(
                [moving_down[i - 1], staying_winner[i], staying_loser[i], moving_up[i + 1]]
            )
    return courts


class CourtSeating:
    """
    Reseats players on ladder courts after movement.

    Handles departed players, bench fill-in, extra or surplus courts and
    bench rotation. A court must hold ``composition`` players per group;
    the standard ladder has a single group of four, MIX_PAIRS two men and
    two women.
    """

    def __init__(
        self,
        play_counts: PlayCounts,
        rng: random.Random,
        group_of: Optional[Callable[[str], Hashable]] = None,
        composition: Optional[Dict[Hashable, int]] = None,
    ):
        self.play_counts = play_counts
        self.rng = rng
        self.group_of = group_of or (lambda _player_id: None)
        self.composition = Counter(composition or {None: PLAYERS_PER_MATCH})

    def plays(self, player_id: str) -> int:
        return self.play_counts.get(player_id, 0)

    def present(self, court: CourtSlots) -> Counter:
        return Counter(self.group_of(p) for p in court if p is not None)

    def is_balanced(self, court: CourtSlots) -> bool:
        return None not in court and self.present(court) == self.composition

    def order_bench(self, bench: Sequence[str]) -> List[str]:
        return order_by_play_count(bench, self.play_counts, self.rng)

    def _take_from_bench(self, bench: List[str], court: CourtSlots) -> Optional[str]:
        deficit = self.composition - self.present(court)
        # scarcest group on the court first
        for group, _ in deficit.most_common():
            for player_id in bench:
                if self.group_of(player_id) == group:
                    bench.remove(player_id)
                    return player_id
        return None

    def rebalance(self, courts: List[CourtSlots]) -> None:
        """Swap players between courts until each meets the composition.

        A court with too many of one group trades its last such player with
        the nearest court that has a surplus of a group it lacks.
        """
        for _ in range(len(courts) ** 2):
            source = None
            for index, court in enumerate(courts):
                excess = [
                    group
                    for group in self.present(court) - self.composition
                    if group in self.composition
                ]
                if excess:
                    source = index, excess[0]
                    break
            if source is None:
                return
            index, extra_group = source
            lacking = self.composition - self.present(courts[index])

            target = None
            for other in sorted(range(len(courts)), key=lambda c: abs(c - index)):
                if other == index:
                    continue
                surplus = self.present(courts[other]) - self.composition
                wanted = [g for g in lacking if surplus[g] > 0]
                if wanted:
                    target = other, wanted[0]
                    break
            if target is None:
                return
            other, wanted_group = target

            src_pos = max(
                i for i, p in enumerate(courts[index])
                if p is not None and self.group_of(p) == extra_group
            )
            dst_pos = max(
                i for i, p in enumerate(courts[other])
                if p is not None and self.group_of(p) == wanted_group
            )
            courts[index][src_pos], courts[other][dst_pos] = (
                courts[other][dst_pos],
                courts[index][src_pos],
            )

    def regroup(self, courts: List[CourtSlots]) -> Tuple[List[CourtSlots], List[str]]:
        """Collapse courts with holes into full courts, keeping ladder order."""
        queue = [p for court in courts for p in court if p is not None]
        regrouped: List[CourtSlots] = []
        while queue:
            need = Counter(self.composition)
            court: CourtSlots = []
            for player_id in queue:
                group = self.group_of(player_id)
                if need[group] > 0:
                    court.append(player_id)
                    need[group] -= 1
            if +need:
                break
            regrouped.append(court)
            queue = [p for p in queue if p not in court]
        return regrouped, queue

    def reseat(
        self, courts: List[CourtSlots], eligible_ids: Sequence[str], num_matches: int
    ) -> List[CourtSlots]:
        """
        Fill the moved courts from the eligible roster.

        Departed players leave a hole that the least-played bench player of
        the right group fills. Holes left over collapse the courts. Extra
        courts are opened from the bench when more matches fit; surplus
        courts are closed. Every remaining bench player then replaces the
        most-played player of its group on the lowest court holding someone
        with strictly more rounds played.
        """
        eligible = set(eligible_ids)
        courts = [[p if p in eligible else None for p in court] for court in courts]
        departed = sum(court.count(None) for court in courts)
        seated = {p for court in courts for p in court if p is not None}
        bench = self.order_bench([p for p in eligible_ids if p not in seated])
        if departed:
            logger.info(f"{departed} departed player(s) to replace from a bench of {len(bench)}")

        for court in courts:
            for position, player_id in enumerate(court):
                if player_id is None:
                    court[position] = self._take_from_bench(bench, court)

        if any(None in court for court in courts):
            courts, leftovers = self.regroup(courts)
            logger.warning(f"Not enough bench players, regrouped into {len(courts)} courts")
            bench = self.order_bench(bench + leftovers)

        if len(courts) > num_matches:
            closed = [p for court in courts[num_matches:] for p in court]
            courts = courts[:num_matches]
            bench = self.order_bench(bench + closed)

        while len(courts) < num_matches:
            court = [None] * sum(self.composition.values())
            taken = []
            for position in range(len(court)):
                court[position] = self._take_from_bench(bench, court)
                if court[position] is not None:
                    taken.append(court[position])
            if None in court:
                bench = self.order_bench(bench + taken)
                break
            courts.append(court)

        swapped_in = set()
        for bench_player in list(bench):
            group = self.group_of(bench_player)
            for court in reversed(courts):
                positions = [
                    i
                    for i, p in enumerate(court)
                    if p not in swapped_in
                    and self.group_of(p) == group
                    and self.plays(p) > self.plays(bench_player)
                ]
                if positions:
                    position = max(positions, key=lambda i: self.plays(court[i]))
                    logger.debug(f"Rotating {bench_player} in for {court[position]}")
                    court[position] = bench_player
                    swapped_in.add(bench_player)
                    break
        return courts


def _previous_results(history: HistoryIndex, rng: random.Random) -> List[CourtResult]:
    previous = history.last_round
    if previous is None or not previous.matches_with_players:
        return []
    if not previous.is_complete:
        logger.info("Previous round is not fully scored yet, no ladder movement")
        return []
    return court_results(previous, rng)


def _by_level(players: Sequence[Participant]) -> List[str]:
    return [p.user_id for p in sorted(players, key=lambda p: p.level, reverse=True)]


def _standard_ladder(
    eligibility: Eligibility,
    history: HistoryIndex,
    rng: random.Random,
    seed_pattern: Callable[[Sequence[str]], Matchup],
) -> List[Matchup]:
    play_counts = history.matches_played(eligibility.player_ids)
    if history.is_empty:
        ranked = select_with_rotation(
            _by_level(eligibility.players),
            eligibility.needed_players,
            lambda player_id: play_counts.get(player_id, 0),
        )
        return group_in_fours(ranked, eligibility.num_matches, seed_pattern)

    results = _previous_results(history, rng)
    if not results:
        return []
    seating = CourtSeating(play_counts, rng)
    courts = seating.reseat(
        distribute_across_courts(results),
        eligibility.player_ids,
        eligibility.num_matches,
    )
    return [cross_pairs(court) for court in courts if seating.is_balanced(court)]


def _mixed_court(court: CourtSlots, genders: Dict[str, Gender]) -> Matchup:
    males = [p for p in court if genders[p] == Gender.MALE]
    females = [p for p in court if genders[p] == Gender.FEMALE]
    return [males[0], females[1]], [males[1], females[0]]


def _mix_pairs_ladder(
    eligibility: Eligibility, history: HistoryIndex, rng: random.Random
) -> List[Matchup]:
    genders = {p.user_id: p.gender for p in eligibility.players}
    play_counts = history.matches_played(eligibility.player_ids)

    if history.is_empty:
        per_gender = eligibility.num_matches * 2
        males = select_with_rotation(
            _by_level(eligibility.males), per_gender, lambda p: play_counts.get(p, 0)
        )
        females = select_with_rotation(
            _by_level(eligibility.females), per_gender, lambda p: play_counts.get(p, 0)
        )
        count = min(eligibility.num_matches, len(males) // 2, len(females) // 2)
        return [
            ([males[i * 2], females[i * 2 + 1]], [males[i * 2 + 1], females[i * 2]])
            for i in range(count)
        ]

    results = _previous_results(history, rng)
    if not results:
        return []
    seating = CourtSeating(
        play_counts,
        rng,
        group_of=lambda player_id: genders.get(player_id),
        composition={Gender.MALE: 2, Gender.FEMALE: 2},
    )
    courts = distribute_across_courts(results)
    seating.rebalance(courts)
    courts = seating.reseat(courts, eligibility.player_ids, eligibility.num_matches)
    return [_mixed_court(court, genders) for court in courts if seating.is_balanced(court)]


def _fixed_team_ladder(
    eligibility: Eligibility, history: HistoryIndex, rng: random.Random
) -> List[Matchup]:
    teams = [team.player_ids for team in eligibility.teams]
    rounds_played = history.team_rounds_played(teams)

    def played(ids: Sequence[str]) -> int:
        return rounds_played.get(team_key(ids), 0)

    if history.is_empty:
        ranked = sorted(eligibility.teams, key=lambda t: t.average_level, reverse=True)
        ranked_ids = select_with_rotation(
            [team.player_ids for team in ranked], eligibility.needed_teams, played
        )
        return pair_adjacent(ranked_ids, eligibility.num_matches)

    previous = history.last_round
    if previous is None or not previous.matches_with_players:
        return []
    if not previous.is_complete:
        logger.info("Previous round is not fully scored yet, no ladder movement")
        return []

    team_of = {player_id: ids for ids in teams for player_id in ids}
    results: List[Tuple[List[str], List[str]]] = []
    for match in previous.matches_with_players:
        winners, losers = decide_winner(match, rng)
        winner_team = team_of.get(winners[0])
        loser_team = team_of.get(losers[0])
        if winner_team is None or loser_team is None:
            continue
        results.append((winner_team, loser_team))
    if not results:
        return []

    if len(results) == 1:
        pairings = [list(results[0])]
    else:
        pairings = []
        last = len(results) - 1
        for i in range(len(results)):
            if i == 0:
                pairings.append([results[0][0], results[1][0]])
            elif i == last:
                pairings.append([results[i - 1][1], results[i][1]])
            else:
                pairings.append([results[i - 1][1], results[i + 1][0]])
    pairings = pairings[: eligibility.num_matches]

    active = {team_key(ids) for pairing in pairings for ids in pairing}
    bench = sorted(
        (ids for ids in teams if team_key(ids) not in active), key=played
    )
    while len(pairings) < eligibility.num_matches and len(bench) >= 2:
        pairings.append([bench.pop(0), bench.pop(0)])

    swapped_in = set()
    for bench_team in list(bench):
        for pairing in reversed(pairings):
            sides = [
                side
                for side in (0, 1)
                if team_key(pairing[side]) not in swapped_in
                and played(pairing[side]) > played(bench_team)
            ]
            if sides:
                side = max(sides, key=lambda s: played(pairing[s]))
                pairing[side] = bench_team
                swapped_in.add(team_key(bench_team))
                break
    return [(list(a), list(b)) for a, b in pairings]


def generate_ladder_matchups(
    eligibility: Eligibility,
    history: HistoryIndex,
    rng: random.Random,
    seed_pattern: Callable[[Sequence[str]], Matchup] = cross_pairs,
) -> List[Matchup]:
    """
    Lay out the next ladder round.

    The first round seeds courts by descending level (per gender for
    MIX_PAIRS, by average level for fixed teams), each block of four laid
    out with ``seed_pattern``. Later rounds move players between courts
    from the previous round's results, which must be fully scored.

    Parameters
    ----------
    eligibility : Eligibility
        Eligible roster and target match count.
    history : HistoryIndex
        Prior rounds.
    rng : random.Random
        Source of coin flips and shuffles.
    seed_pattern : callable
        Splits a block of four ranked players into two teams for round one.

    Returns
    -------
    list of (team_a, team_b)
        Matchups in court order; empty when the round cannot be generated.
    """
    if eligibility.num_matches <= 0:
        return []
    if eligibility.teams:
        matchups = _fixed_team_ladder(eligibility, history, rng)
    elif eligibility.gender_mode == GenderMode.MIX_PAIRS:
        matchups = _mix_pairs_ladder(eligibility, history, rng)
    else:
        matchups = _standard_ladder(eligibility, history, rng, seed_pattern)
    logger.info(
        f"Ladder round {len(history.rounds) + 1}: {len(matchups)} of "
        f"{eligibility.num_matches} courts filled"
    )
    return matchups
