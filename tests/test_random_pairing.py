import random
from collections import Counter

import pytest

from courtpairing.controllers import RoundGenerator
from courtpairing.models import (
    FixedTeam,
    Gender,
    GenderMode,
    HistoryIndex,
    MatchGenerationType,
    Round,
)
from courtpairing.pairing.random_pairing import drop_odd_pair, legal_pairs, select_pairs
from courtpairing.utils import pair_key


def _assert_disjoint(matches):
    seen = [p for match in matches for p in match.player_ids]
    assert len(seen) == len(set(seen))
    for match in matches:
        assert not set(match.team_a) & set(match.team_b)


def _teammate_keys(matches):
    return {pair_key(*m.team_a) for m in matches} | {pair_key(*m.team_b) for m in matches}


def test_eight_players_two_courts_first_round(make_players, make_config, rng):
    players = make_players(8)
    config = make_config(MatchGenerationType.RANDOM, courts=2)

    matches = RoundGenerator(config, rng).generate_round(players, [])

    assert len(matches) == 2
    assert sorted(p for m in matches for p in m.player_ids) == [p.user_id for p in players]
    for match in matches:
        assert len(match.team_a) == 2 and len(match.team_b) == 2
        assert [s.to_dict() for s in match.sets] == [{"teamA": 0, "teamB": 0}]
    assert [m.court_id for m in matches] == ["court_1", "court_2"]


@pytest.mark.parametrize("seed", [7, 42, 2024, 31337])
@pytest.mark.parametrize(
    "gender_mode, genders",
    [
        (GenderMode.ANY, None),
        (GenderMode.MIX_PAIRS, [Gender.MALE, Gender.FEMALE]),
    ],
)
def test_rounds_never_repeat_last_round_teammates(
    make_players, make_config, score_round, seed, gender_mode, genders
):
    players = make_players(8, genders=genders)
    config = make_config(MatchGenerationType.RANDOM, courts=2, gender_teams=gender_mode)
    generator = RoundGenerator(config, random.Random(seed))
    rounds = []

    for number in range(12):
        matches = generator.generate_round(players, rounds)
        assert len(matches) == 2
        if rounds:
            assert not _teammate_keys(rounds[-1].matches) & _teammate_keys(matches)
        if gender_mode == GenderMode.MIX_PAIRS:
            genders_of = {p.user_id: p.gender for p in players}
            for match in matches:
                for team in (match.team_a, match.team_b):
                    assert {genders_of[p] for p in team} == {Gender.MALE, Gender.FEMALE}
        rounds.append(score_round(matches, round_id=f"r{number}"))


def test_round_never_exceeds_capacity(make_players, make_config, rng):
    config = make_config(MatchGenerationType.RANDOM, courts=3)

    matches = RoundGenerator(config, rng).generate_round(make_players(18), [])

    assert len(matches) == 3
    _assert_disjoint(matches)


def test_too_few_players_returns_no_matches(make_players, make_config, rng):
    config = make_config(MatchGenerationType.RANDOM, courts=2)
    assert RoundGenerator(config, rng).generate_round(make_players(3), []) == []


def test_play_counts_stay_within_one_over_many_rounds(make_players, make_config, score_round):
    players = make_players(10)
    config = make_config(MatchGenerationType.RANDOM, courts=2)
    generator = RoundGenerator(config, random.Random(99))
    rounds = []

    for number in range(20):
        matches = generator.generate_round(players, rounds)
        _assert_disjoint(matches)
        rounds.append(score_round(matches, round_id=f"r{number}"))
        counts = HistoryIndex.from_rounds(rounds).matches_played(p.user_id for p in players)
        assert max(counts.values()) - min(counts.values()) <= 1


def test_mix_pairs_teams_are_one_man_one_woman(make_players, make_config, rng):
    players = make_players(10, genders=[Gender.MALE, Gender.FEMALE])
    genders = {p.user_id: p.gender for p in players}
    config = make_config(MatchGenerationType.RANDOM, courts=2, gender_teams=GenderMode.MIX_PAIRS)

    matches = RoundGenerator(config, rng).generate_round(players, [])

    assert len(matches) == 2
    for match in matches:
        for team in (match.team_a, match.team_b):
            assert {genders[p] for p in team} == {Gender.MALE, Gender.FEMALE}


def test_mix_pairs_with_too_few_women(make_players, make_config, rng):
    players = make_players(5, genders=[Gender.MALE, Gender.MALE, Gender.MALE, Gender.MALE, Gender.FEMALE])
    config = make_config(MatchGenerationType.RANDOM, courts=2, gender_teams=GenderMode.MIX_PAIRS)

    assert RoundGenerator(config, rng).generate_round(players, []) == []


def test_select_pairs_returns_even_count_of_legal_pairs(make_players, rng):
    players = make_players(6, genders=[Gender.MALE, Gender.MALE, Gender.FEMALE])
    pairs = select_pairs(players, 4, HistoryIndex(), GenderMode.MIX_PAIRS, rng)

    # 4 men and 2 women allow only 2 mixed pairs
    assert len(pairs) == 2
    assert set(pairs) <= set(legal_pairs(players, GenderMode.MIX_PAIRS))


def test_drop_odd_pair_removes_most_played():
    pairs = [("a", "b"), ("c", "d"), ("e", "f")]
    kept = drop_odd_pair(pairs, {"a": 1, "b": 1, "c": 3, "d": 2, "e": 0, "f": 0})
    assert kept == [("a", "b"), ("e", "f")]


def test_fixed_teams_rotate_through_the_bench(make_players, make_config, score_round):
    players = make_players(12)
    teams = [FixedTeam(team_number=i + 1, players=players[i * 2 : i * 2 + 2]) for i in range(6)]
    config = make_config(
        MatchGenerationType.RANDOM, courts=2, has_fixed_teams=True, fixed_teams=teams
    )
    generator = RoundGenerator(config, random.Random(3))
    team_of = {p.user_id: t.team_number for t in teams for p in t.players}
    rounds = []

    for number in range(3):
        matches = generator.generate_round(players, rounds)
        assert len(matches) == 2
        for match in matches:
            assert len({team_of[p] for p in match.team_a}) == 1
            assert len({team_of[p] for p in match.team_b}) == 1
        rounds.append(score_round(matches, round_id=f"r{number}"))

    played = Counter(
        team_of[m.team_a[0]] for r in rounds for m in r.matches
    ) + Counter(team_of[m.team_b[0]] for r in rounds for m in r.matches)
    assert sorted(played.values()) == [2, 2, 2, 2, 2, 2]


def test_incomplete_history_round_still_counts(make_players, make_config, rng):
    players = make_players(8)
    config = make_config(MatchGenerationType.RANDOM, courts=1)
    generator = RoundGenerator(config, rng)

    first = Round(id="r1", matches=generator.generate_round(players, []))
    second = generator.generate_round(players, [first])

    assert len(second) == 1
    assert not set(first.matches[0].player_ids) & set(second[0].player_ids)
