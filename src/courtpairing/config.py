"""Engine settings: retry caps for the randomized search passes."""

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

import os
from dataclasses import dataclass

from courtpairing.constants import (
    ENV_MATCHUP_ATTEMPTS,
    ENV_PAIR_ATTEMPTS,
    ENV_SEASON_ATTEMPTS,
    MATCHUP_ATTEMPTS,
    PAIR_SELECTION_ATTEMPTS,
    SEASON_TEAM_ATTEMPTS,
)
from courtpairing.exceptions import InvalidConfigurationException
from courtpairing.utils import setup_logger

logger = setup_logger(__name__)


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise InvalidConfigurationException(f"{name} must be an integer, got {raw!r}") from e
    return value


@dataclass(frozen=True)
class EngineSettings:
    """Bounded retry caps used by the greedy searches.

    Attributes
    ----------
    pair_attempts : int
        Greedy passes per teammate pool when selecting pairs.
    matchup_attempts : int
        Randomized passes when forming A-vs-B matchups.
    season_attempts : int
        Randomized passes when selecting league teams.
    """

    pair_attempts: int = PAIR_SELECTION_ATTEMPTS
    matchup_attempts: int = MATCHUP_ATTEMPTS
    season_attempts: int = SEASON_TEAM_ATTEMPTS

    def __post_init__(self) -> None:
        for name in ("pair_attempts", "matchup_attempts", "season_attempts"):
            if getattr(self, name) < 1:
                raise InvalidConfigurationException(
                    f"{name} must be at least 1, got {getattr(self, name)}"
                )

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Read overrides from the environment, keeping defaults for unset values."""
        settings = cls(
            pair_attempts=_env_int(ENV_PAIR_ATTEMPTS, PAIR_SELECTION_ATTEMPTS),
            matchup_attempts=_env_int(ENV_MATCHUP_ATTEMPTS, MATCHUP_ATTEMPTS),
            season_attempts=_env_int(ENV_SEASON_ATTEMPTS, SEASON_TEAM_ATTEMPTS),
        )
        logger.debug(f"Engine settings: {settings}")
        return settings


DEFAULT_SETTINGS = EngineSettings()
