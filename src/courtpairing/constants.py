"""Engine-wide constants for Court Pairing."""

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

# --- Match shape ---
PLAYERS_PER_TEAM = 2
PLAYERS_PER_MATCH = 4
TEAMS_PER_MATCH = 2
# Fallback court count when a game has no courts configured
DEFAULT_COURT_COUNT = 1
# Sets created on a fresh score sheet when the game does not fix a number
DEFAULT_NUMBER_OF_SETS = 1

# --- Retry caps ---
PAIR_SELECTION_ATTEMPTS = 20
MATCHUP_ATTEMPTS = 10
SEASON_TEAM_ATTEMPTS = 10

# --- League ---
MIN_LEAGUE_GROUP_SIZE = 4
MIN_LEAGUE_TEAMS = 2
LEAGUE_GAME_DURATION_HOURS = 2
LEAGUE_GAME_NAME = "Round {number} - Game"

# --- Keys ---
PAIR_KEY_SEPARATOR = "|"
TEAM_KEY_SEPARATOR = ","

# --- Outcomes ---
OUTCOME_WIN = "win"
OUTCOME_LOSS = "loss"
OUTCOME_TIE = "tie"

# --- Environment overrides ---
ENV_LOG_LEVEL = "COURTPAIRING_LOG_LEVEL"
ENV_LOG_FILE = "COURTPAIRING_LOG_FILE"
ENV_PAIR_ATTEMPTS = "COURTPAIRING_PAIR_ATTEMPTS"
ENV_MATCHUP_ATTEMPTS = "COURTPAIRING_MATCHUP_ATTEMPTS"
ENV_SEASON_ATTEMPTS = "COURTPAIRING_SEASON_ATTEMPTS"
