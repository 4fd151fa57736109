from datetime import datetime

import pytest

from courtpairing.exceptions import (
    InvalidConfigurationException,
    InvalidParticipantDataException,
    InvalidRoundDataException,
    LeagueConfigurationException,
)
from courtpairing.models import (
    Court,
    FixedTeam,
    GameConfig,
    Gender,
    LeagueGroup,
    Match,
    MatchGenerationType,
    Participant,
    ParticipantStatus,
    Round,
    SeasonGame,
    SeasonRules,
    SetScore,
    empty_sets,
)


def test_participant_round_trips_camel_case_keys():
    data = {
        "userId": "u1",
        "gender": "FEMALE",
        "level": "3.5",
        "status": "PLAYING",
        "isTrainer": True,
        "points": 7,
    }
    participant = Participant.from_dict(data)

    assert participant.gender == Gender.FEMALE
    assert participant.level == 3.5
    assert participant.is_trainer
    assert participant.to_dict()["userId"] == "u1"
    assert participant.to_dict()["level"] == 3.5


def test_participant_defaults_and_errors():
    participant = Participant.from_dict({"userId": "u2"})
    assert participant.gender == Gender.UNSPECIFIED
    assert participant.status == ParticipantStatus.PLAYING
    assert participant.level == 0.0

    with pytest.raises(InvalidParticipantDataException):
        Participant.from_dict({"userId": "u3", "gender": "ROBOT"})
    with pytest.raises(InvalidParticipantDataException):
        Participant.from_dict({"gender": "MALE"})


def test_participant_points_null_defaults_and_garbage_is_rejected():
    assert Participant.from_dict({"userId": "u1", "points": None}).points == 0
    assert Participant.from_dict({"userId": "u1", "points": "4"}).points == 4

    with pytest.raises(InvalidParticipantDataException):
        Participant.from_dict({"userId": "u1", "points": "abc"})
    with pytest.raises(InvalidParticipantDataException):
        Participant.from_dict({"userId": "u1", "points": 2.5})


def test_fixed_team_number_must_be_an_integer():
    with pytest.raises(InvalidParticipantDataException):
        FixedTeam.from_dict({"teamNumber": None})
    with pytest.raises(InvalidParticipantDataException):
        FixedTeam.from_dict({"teamNumber": "first"})
    assert FixedTeam.from_dict({"teamNumber": "2", "players": None}).team_number == 2


def test_fixed_team_rejects_duplicate_player():
    player = Participant(user_id="u1")
    with pytest.raises(InvalidParticipantDataException):
        FixedTeam(team_number=1, players=[player, player])


def test_fixed_team_usable_only_when_all_players_eligible():
    team = FixedTeam(team_number=1, players=[Participant("a"), Participant("b")])
    assert team.is_usable(["a", "b", "c"])
    assert not team.is_usable(["a"])
    assert team.key == "a,b"


def test_match_rejects_player_on_both_teams():
    with pytest.raises(InvalidRoundDataException):
        Match(id="m1", team_a=["a", "b"], team_b=["b", "c"])


def test_set_score_rejects_negative_score():
    with pytest.raises(InvalidRoundDataException):
        SetScore(team_a=-1, team_b=3)


def test_zero_zero_sets_are_not_played():
    match = Match(
        id="m1",
        team_a=["a", "b"],
        team_b=["c", "d"],
        sets=[SetScore(0, 0), SetScore(6, 4), SetScore(3, 6)],
    )
    assert len(match.valid_sets) == 2
    assert match.team_totals() == (9, 10)
    assert match.is_played


def test_empty_sets_has_at_least_one_set():
    assert [s.to_dict() for s in empty_sets(0)] == [{"teamA": 0, "teamB": 0}]
    assert len(empty_sets(3)) == 3


def test_round_is_complete_requires_every_populated_match_scored():
    scored = Match(id="m1", team_a=["a"], team_b=["b"], sets=[SetScore(21, 10)])
    unscored = Match(id="m2", team_a=["c"], team_b=["d"], sets=empty_sets())
    scaffold = Match(id="m3", sets=empty_sets())

    assert Round(id="r1", matches=[scored, scaffold]).is_complete
    assert not Round(id="r2", matches=[scored, unscored]).is_complete
    assert not Round(id="r3", matches=[scaffold]).is_complete


def test_round_from_dict_parses_matches():
    round_data = Round.from_dict(
        {
            "id": "r1",
            "matches": [
                {
                    "id": "m1",
                    "teamA": ["a", "b"],
                    "teamB": ["c", "d"],
                    "sets": [{"teamA": 21, "teamB": 19}],
                    "courtId": "c1",
                }
            ],
        }
    )
    match = round_data.matches[0]
    assert match.court_id == "c1"
    assert match.team_totals() == (21, 19)
    assert round_data.to_dict()["matches"][0]["courtId"] == "c1"


def test_game_config_defaults_to_handmade():
    config = GameConfig.from_dict({})
    assert config.match_generation_type == MatchGenerationType.HANDMADE
    assert config.available_courts == 1
    assert config.number_of_sets == 1


def test_game_config_rejects_unknown_generation_type():
    with pytest.raises(InvalidConfigurationException):
        GameConfig.from_dict({"matchGenerationType": "SWISS"})


def test_game_config_null_numbers_fall_back_to_defaults():
    config = GameConfig.from_dict(
        {
            "fixedNumberOfSets": None,
            "pointsPerWin": None,
            "pointsPerTie": None,
            "pointsPerLoose": None,
            "gameCourts": [{"courtId": "c1", "order": None}],
            "fixedTeams": None,
        }
    )
    assert config.number_of_sets == 1
    assert config.points_per_win == 0
    assert config.courts[0].order == 0
    assert config.fixed_teams == []


@pytest.mark.parametrize(
    "payload",
    [
        {"fixedNumberOfSets": "three"},
        {"pointsPerWin": [3]},
        {"pointsPerTie": True},
        {"gameCourts": [{"courtId": "c1", "order": "top"}]},
    ],
)
def test_game_config_rejects_non_integer_numbers(payload):
    with pytest.raises(InvalidConfigurationException):
        GameConfig.from_dict(payload)


def test_courts_are_assigned_by_order():
    config = GameConfig(courts=[Court("back", order=2), Court("front", order=1)])
    assert config.court_id_at(0) == "front"
    assert config.court_id_at(1) == "back"
    assert config.court_id_at(2) is None


def test_season_rules_schedule_weekly_two_hour_slots():
    rules = SeasonRules(start_time=datetime(2025, 1, 6, 19, 0))
    start, end = rules.schedule(2)
    assert start == datetime(2025, 1, 20, 19, 0)
    assert end == datetime(2025, 1, 20, 21, 0)


def test_season_rules_parse_iso_start_time():
    rules = SeasonRules.from_dict(
        {"startTime": "2025-03-01T10:00:00", "game": {"fixedNumberOfSets": 3}}
    )
    assert rules.start_time == datetime(2025, 3, 1, 10, 0)
    assert rules.game_config.number_of_sets == 3

    with pytest.raises(LeagueConfigurationException):
        SeasonRules.from_dict({"startTime": "next tuesday"})
    with pytest.raises(LeagueConfigurationException):
        SeasonRules.from_dict({"maxPointsPerTeam": "lots"})
    rules = SeasonRules.from_dict({"maxTotalPointsPerSet": None})
    assert rules.max_total_points_per_set == 0


def test_season_game_rejects_malformed_index_and_times():
    with pytest.raises(LeagueConfigurationException):
        SeasonGame.from_dict({"id": "g1", "roundIndex": "second"})
    with pytest.raises(LeagueConfigurationException):
        SeasonGame.from_dict({"id": "g1", "startTime": 1700000000})
    game = SeasonGame.from_dict({"id": "g1", "roundIndex": None, "teams": None})
    assert game.round_index == 0
    assert game.teams == []


def test_season_game_default_name_is_one_based():
    assert SeasonGame.default_name(0) == "Round 1 - Game"
    assert SeasonGame.default_name(4) == "Round 5 - Game"


def test_league_group_requires_id():
    with pytest.raises(LeagueConfigurationException):
        LeagueGroup.from_dict({"participants": []})
    group = LeagueGroup.from_dict({"id": "g1", "participants": [{"userId": "u1"}]})
    assert group.participants[0].user_id == "u1"
