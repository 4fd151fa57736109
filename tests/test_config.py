import pytest

from courtpairing.config import DEFAULT_SETTINGS, EngineSettings
from courtpairing.exceptions import CourtPairingException, InvalidConfigurationException


def test_default_retry_caps():
    assert DEFAULT_SETTINGS.pair_attempts == 20
    assert DEFAULT_SETTINGS.matchup_attempts == 10
    assert DEFAULT_SETTINGS.season_attempts == 10


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("COURTPAIRING_PAIR_ATTEMPTS", "5")
    monkeypatch.delenv("COURTPAIRING_MATCHUP_ATTEMPTS", raising=False)
    monkeypatch.setenv("COURTPAIRING_SEASON_ATTEMPTS", " ")

    settings = EngineSettings.from_env()

    assert settings.pair_attempts == 5
    assert settings.matchup_attempts == 10
    assert settings.season_attempts == 10


def test_settings_reject_bad_values(monkeypatch):
    monkeypatch.setenv("COURTPAIRING_MATCHUP_ATTEMPTS", "many")
    with pytest.raises(InvalidConfigurationException):
        EngineSettings.from_env()

    with pytest.raises(CourtPairingException):
        EngineSettings(pair_attempts=0)


def test_configuration_errors_are_client_errors():
    assert InvalidConfigurationException.status_code == 400
