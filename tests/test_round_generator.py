from courtpairing.controllers import (
    RoundGenerator,
    generate_predefined_round,
    generate_round,
)
from courtpairing.models import FixedTeam, MatchGenerationType, Round


def test_handmade_passes_manual_layout_through(make_players, make_config, rng):
    config = make_config(MatchGenerationType.HANDMADE, courts=2, fixed_number_of_sets=3)
    layout = [(["p01", "p02"], ["p03", "p04"]), (["p05"], ["p06"])]

    matches = generate_round(config, make_players(6), [], rng, manual_layout=layout)

    assert [(m.team_a, m.team_b) for m in matches] == [
        (["p01", "p02"], ["p03", "p04"]),
        (["p05"], ["p06"]),
    ]
    assert [m.court_id for m in matches] == ["court_1", "court_2"]
    assert all(len(m.sets) == 3 for m in matches)


def test_handmade_two_players_make_a_singles_match(make_players, make_config, rng):
    matches = generate_round(make_config(MatchGenerationType.HANDMADE), make_players(2), [], rng)
    assert [(m.team_a, m.team_b) for m in matches] == [(["p01"], ["p02"])]


def test_handmade_four_players_use_fixed_teams(make_players, make_config, rng):
    players = make_players(4)
    teams = [
        FixedTeam(team_number=1, players=[players[0], players[3]]),
        FixedTeam(team_number=2, players=[players[1], players[2]]),
    ]
    config = make_config(
        MatchGenerationType.HANDMADE, courts=1, has_fixed_teams=True, fixed_teams=teams
    )

    matches = generate_round(config, players, [], rng)

    assert [(m.team_a, m.team_b) for m in matches] == [(["p01", "p04"], ["p02", "p03"])]


def test_handmade_other_sizes_get_an_empty_scaffold(make_players, make_config, rng):
    matches = generate_round(make_config(MatchGenerationType.HANDMADE), make_players(7), [], rng)

    assert len(matches) == 1
    assert not matches[0].has_players
    assert matches[0].court_id == "court_1"


def test_fixed_first_round_pairs_teams_in_order(make_players, make_config, rng):
    players = make_players(8)
    teams = [FixedTeam(team_number=i + 1, players=players[i * 2 : i * 2 + 2]) for i in range(4)]
    config = make_config(
        MatchGenerationType.FIXED, courts=2, has_fixed_teams=True, fixed_teams=teams
    )

    matches = generate_round(config, players, [], rng)

    assert [(m.team_a, m.team_b) for m in matches] == [
        (["p01", "p02"], ["p03", "p04"]),
        (["p05", "p06"], ["p07", "p08"]),
    ]


def test_fixed_repeats_previous_round_on_first_round_courts(
    make_players, make_config, score_round, rng
):
    players = make_players(8)
    teams = [FixedTeam(team_number=i + 1, players=players[i * 2 : i * 2 + 2]) for i in range(4)]
    config = make_config(
        MatchGenerationType.FIXED, courts=2, has_fixed_teams=True, fixed_teams=teams
    )
    generator = RoundGenerator(config, rng)
    first = score_round(generator.generate_round(players, []), round_id="r1")

    second = generator.generate_round(players, [first])

    assert [(m.team_a, m.team_b) for m in second] == [
        (m.team_a, m.team_b) for m in first.matches
    ]
    assert [m.court_id for m in second] == [m.court_id for m in first.matches]
    assert all(not s.is_played for m in second for s in m.sets)


def test_fixed_without_teams_gets_an_empty_scaffold(make_players, make_config, rng):
    matches = generate_round(make_config(MatchGenerationType.FIXED), make_players(8), [], rng)
    assert len(matches) == 1
    assert not matches[0].has_players


def test_round_robin_and_escalera_are_not_generated_here(make_players, make_config, rng):
    players = make_players(8)
    for generation_type in (MatchGenerationType.ROUND_ROBIN, MatchGenerationType.ESCALERA):
        assert generate_round(make_config(generation_type), players, [], rng) == []


def test_predefined_round_dispatches_escalera_to_the_ladder(make_players, make_config, rng):
    config = make_config(MatchGenerationType.ESCALERA, courts=2)

    matches = generate_predefined_round(config, make_players(8), [], rng)

    assert [(m.team_a, m.team_b) for m in matches] == [
        (["p01", "p04"], ["p02", "p03"]),
        (["p05", "p08"], ["p06", "p07"]),
    ]


def test_predefined_round_skips_handmade(make_players, make_config, rng):
    config = make_config(MatchGenerationType.HANDMADE)
    assert generate_predefined_round(config, make_players(4), [], rng) == []


def test_every_strategy_keeps_players_disjoint(make_players, make_config, score_round, rng):
    players = make_players(14)
    for generation_type in (
        MatchGenerationType.RANDOM,
        MatchGenerationType.RATING,
        MatchGenerationType.WINNERS_COURT,
    ):
        generator = RoundGenerator(make_config(generation_type, courts=3), rng)
        rounds = []
        for number in range(5):
            matches = generator.generate_round(players, rounds)
            seated = [p for m in matches for p in m.player_ids]
            assert len(seated) == len(set(seated))
            assert len(matches) <= 3
            rounds.append(score_round(matches, round_id=f"r{number}"))
        assert isinstance(rounds[-1], Round)
