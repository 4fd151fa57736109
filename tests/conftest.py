import random

import pytest

from courtpairing.models import (
    Court,
    GameConfig,
    Gender,
    MatchGenerationType,
    Participant,
    Round,
    SetScore,
)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def make_players():
    """Players p01..pNN with descending levels, so p01 is the strongest."""

    def _make(count, genders=None, prefix="p"):
        genders = genders or [Gender.UNSPECIFIED]
        return [
            Participant(
                user_id=f"{prefix}{i + 1:02d}",
                gender=genders[i % len(genders)],
                level=float(count - i),
            )
            for i in range(count)
        ]

    return _make


@pytest.fixture
def make_config():
    def _make(generation_type=MatchGenerationType.RANDOM, courts=2, **kwargs):
        return GameConfig(
            match_generation_type=generation_type,
            courts=[Court(court_id=f"court_{i + 1}", order=i) for i in range(courts)],
            **kwargs,
        )

    return _make


@pytest.fixture
def score_round():
    """Score every populated match; ``results`` lists the winning side per match."""

    def _score(matches, results=None, round_id="round"):
        results = results or ["a"] * len(matches)
        for match, winner in zip(matches, results):
            if not match.has_players:
                continue
            if winner == "a":
                match.sets = [SetScore(team_a=21, team_b=15)]
            elif winner == "b":
                match.sets = [SetScore(team_a=15, team_b=21)]
            else:
                match.sets = [SetScore(team_a=18, team_b=18)]
        return Round(id=round_id, matches=list(matches))

    return _score
