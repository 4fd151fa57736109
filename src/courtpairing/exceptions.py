"""Exceptions for use in Court Pairing"""

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


# ========== Base Application Exception ==========


class CourtPairingException(Exception):
    """Base exception for all Court Pairing errors.

    All custom exceptions in the library inherit from this class, so callers
    can catch every engine error with a single except clause.

    Attributes
    ----------
    status_code : int
        HTTP-style status a caller may use when presenting the error.
    """

    status_code = 500


# ========== Pairing Exceptions ==========


class PairingException(CourtPairingException):
    """Base exception for pairing-related errors."""

    pass


class NoPairingAvailableException(PairingException):
    """Raised when no legal team or pairing can be generated.

    This is a genuine scheduling dead-end (for example a league season whose
    teammate combinations are exhausted) and needs human intervention.
    """

    status_code = 400


class RepeatPairingException(PairingException):
    """Raised when a selected team was already played this season.

    The exclusion filter makes this impossible; seeing it means an internal
    invariant broke and the round must not be persisted.
    """

    status_code = 500


# ========== League Exceptions ==========


class LeagueException(CourtPairingException):
    """Base exception for league season errors."""

    status_code = 400


class OddParticipantCountException(LeagueException):
    """Raised when a league group has an odd number of participants."""

    pass


# ========== Validation Exceptions ==========


class ValidationException(CourtPairingException):
    """Base exception for malformed input rejected at the boundary."""

    status_code = 400


class InvalidParticipantDataException(ValidationException):
    """Raised when participant or fixed team data is invalid or incomplete."""

    pass


class InvalidRoundDataException(ValidationException):
    """Raised when round, match or score data is invalid."""

    pass


# ========== Configuration Exceptions ==========


class ConfigurationException(CourtPairingException):
    """Base exception for configuration errors."""

    status_code = 400


class InvalidConfigurationException(ConfigurationException):
    """Raised when configuration data is invalid."""

    pass


class LeagueConfigurationException(ConfigurationException):
    """Raised when a league season cannot be generated as configured."""

    pass
