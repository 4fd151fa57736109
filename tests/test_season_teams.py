import random
from datetime import datetime

import pytest

from courtpairing.exceptions import (
    LeagueConfigurationException,
    NoPairingAvailableException,
    OddParticipantCountException,
)
from courtpairing.models import (
    FixedTeam,
    LeagueGroup,
    Participant,
    ParticipantStatus,
    SeasonGame,
    SeasonRules,
)
from courtpairing.pairing.season_teams import (
    SeasonTeamGenerator,
    played_team_keys,
    sort_group_roster,
)
from courtpairing.utils import pair_key

RULES = SeasonRules(start_time=datetime(2025, 1, 6, 19, 0))


def _roster(ids):
    return [Participant(user_id=uid, level=float(i)) for i, uid in enumerate(ids)]


def _game(game_id, round_index, team_1, team_2):
    return SeasonGame(
        id=game_id,
        round_index=round_index,
        teams=[
            FixedTeam(team_number=1, players=[Participant(p) for p in team_1]),
            FixedTeam(team_number=2, players=[Participant(p) for p in team_2]),
        ],
    )


def test_six_players_pick_three_unplayed_teams():
    history = [
        _game("g1", 0, ["a", "b"], ["c", "d"]),
        _game("g2", 1, ["e", "f"], ["a", "b"]),
    ]
    played = played_team_keys(history)
    assert len(played) == 3

    teams = SeasonTeamGenerator(random.Random(1)).select_teams(list("abcdef"), history)

    assert len(teams) == 3
    assert len({p for team in teams for p in team}) == 6
    assert not {pair_key(*team) for team in teams} & played


def test_six_players_round_yields_one_scheduled_game():
    history = [
        _game("g1", 0, ["a", "b"], ["c", "d"]),
        _game("g2", 1, ["e", "f"], ["a", "b"]),
    ]
    generator = SeasonTeamGenerator(random.Random(2))

    games = generator.generate_season_round(_roster("abcdef"), history, RULES, 2)

    assert len(games) == 1
    game = games[0]
    assert game.name == "Round 3 - Game"
    assert [team.team_number for team in game.teams] == [1, 2]
    assert len(set(game.participant_ids)) == 4
    assert not {pair_key(*ids) for ids in game.team_player_ids} & played_team_keys(history)
    assert game.start_time == datetime(2025, 1, 20, 19, 0)
    assert game.end_time == datetime(2025, 1, 20, 21, 0)
    assert game.rules is RULES


def test_teams_never_repeat_within_a_season():
    roster = _roster("abcdefgh")
    generator = SeasonTeamGenerator(random.Random(3))
    history = []
    generated_rounds = 0

    for round_index in range(7):
        try:
            games = generator.generate_season_round(roster, history, RULES, round_index)
        except NoPairingAvailableException:
            break
        history.extend(games)
        generated_rounds += 1

    keys = [pair_key(*ids) for game in history for ids in game.team_player_ids]
    assert generated_rounds >= 3
    assert len(keys) == len(set(keys))


def test_regenerating_a_round_ignores_its_own_games():
    roster = _roster("abcd")
    existing = [_game("g1", 0, ["a", "b"], ["c", "d"])]

    games = SeasonTeamGenerator(random.Random(4)).generate_season_round(
        roster, existing, RULES, 0
    )

    assert len(games) == 1


def test_odd_group_raises():
    with pytest.raises(OddParticipantCountException):
        SeasonTeamGenerator(random.Random(5)).generate_season_round(
            _roster("abcde"), [], RULES, 0
        )


def test_small_group_is_skipped():
    games = SeasonTeamGenerator(random.Random(6)).generate_season_round(
        _roster("abc"), [], RULES, 0
    )
    assert games == []


def test_only_playing_participants_join():
    roster = _roster("abcde")
    roster[2].status = ParticipantStatus.NON_PLAYING

    games = SeasonTeamGenerator(random.Random(7)).generate_season_round(roster, [], RULES, 0)

    assert len(games) == 1
    assert "c" not in games[0].participant_ids


def test_exhausted_group_raises_no_pairing_available():
    history = [
        _game("g1", 0, ["a", "b"], ["c", "d"]),
        _game("g2", 1, ["a", "c"], ["b", "d"]),
        _game("g3", 2, ["a", "d"], ["b", "c"]),
    ]
    with pytest.raises(NoPairingAvailableException) as excinfo:
        SeasonTeamGenerator(random.Random(8)).generate_season_round(
            _roster("abcd"), history, RULES, 3
        )
    assert excinfo.value.status_code == 400


def test_single_remaining_team_raises():
    history = [
        _game("g1", 0, ["a", "b"], ["c", "d"]),
        _game("g2", 1, ["a", "c"], ["b", "d"]),
        _game("g3", 2, ["a", "d"], ["e", "f"]),
    ]
    with pytest.raises(NoPairingAvailableException):
        SeasonTeamGenerator(random.Random(9)).generate_season_round(
            _roster("abcd"), history, RULES, 3
        )


def test_roster_sorted_by_points_then_level():
    roster = [
        Participant("a", level=5.0, points=3),
        Participant("b", level=2.0, points=9),
        Participant("c", level=7.0, points=3),
        Participant("d", level=9.0, points=0, status=ParticipantStatus.INVITED),
    ]
    assert [p.user_id for p in sort_group_roster(roster)] == ["b", "c", "a"]


def test_season_generation_covers_every_group():
    groups = [
        LeagueGroup(group_id="g1", participants=_roster("abcd")),
        LeagueGroup(group_id="g2", participants=_roster("efghij")),
    ]
    generator = SeasonTeamGenerator(random.Random(10))

    games = generator.generate_for_season(groups, RULES, 0)

    assert len(games) == 2
    assert set(games[0].participant_ids) <= set("abcd")
    assert set(games[1].participant_ids) <= set("efghij")


def test_season_without_groups_raises():
    with pytest.raises(LeagueConfigurationException):
        SeasonTeamGenerator(random.Random(11)).generate_for_season([], RULES, 0)


@pytest.mark.parametrize("seed", range(10))
def test_selected_teams_never_intersect_random_histories(seed):
    source = random.Random(seed)
    players = list("abcdefgh")
    history = []
    for round_index in range(source.randint(1, 3)):
        order = source.sample(players, len(players))
        teams = [order[i : i + 2] for i in range(0, len(order), 2)]
        history.append(_game(f"g{round_index}a", round_index, teams[0], teams[1]))
        history.append(_game(f"g{round_index}b", round_index, teams[2], teams[3]))

    selected = SeasonTeamGenerator(random.Random(seed)).select_teams(players, history)

    assert selected
    assert not {pair_key(*team) for team in selected} & played_team_keys(history)
    flat = [p for team in selected for p in team]
    assert len(flat) == len(set(flat))
