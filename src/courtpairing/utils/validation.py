"""Validation utilities for roster and score input."""

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

from enum import Enum
from typing import Any, Optional, Type, TypeVar

E = TypeVar("E", bound=Enum)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Identifier Validation ==========


def validate_user_id(user_id: Any) -> ValidationResult:
    """Validate a player identifier.

    Args:
        user_id: Identifier from the roster

    Returns:
        ValidationResult with the stripped identifier

    Example:
        >>> validate_user_id("  u1 ").sanitized_value
        'u1'
    """
    if not isinstance(user_id, str) or not user_id.strip():
        return ValidationResult(
            is_valid=False,
            error_message=f"Player id must be a non-empty string, got {user_id!r}",
        )
    return ValidationResult(is_valid=True, sanitized_value=user_id.strip())


# ========== Score Validation ==========


def validate_score(score: Any) -> ValidationResult:
    """Validate a set score: a non-negative integer."""
    if isinstance(score, bool) or not isinstance(score, int):
        return ValidationResult(
            is_valid=False, error_message=f"Score must be an integer, got {score!r}"
        )
    if score < 0:
        return ValidationResult(
            is_valid=False, error_message=f"Score cannot be negative, got {score}"
        )
    return ValidationResult(is_valid=True, sanitized_value=score)


# ========== Level Validation ==========


def validate_level(level: Any) -> ValidationResult:
    """Validate a player level.

    Levels are numeric; a missing level counts as 0.
    """
    if level is None:
        return ValidationResult(is_valid=True, sanitized_value=0.0)
    if isinstance(level, bool):
        return ValidationResult(
            is_valid=False, error_message=f"Level must be numeric, got {level!r}"
        )
    try:
        value = float(level)
    except (TypeError, ValueError):
        return ValidationResult(
            is_valid=False, error_message=f"Level must be numeric, got {level!r}"
        )
    return ValidationResult(is_valid=True, sanitized_value=value)


# ========== Integer Validation ==========


def validate_int(value: Any, field_name: str, default: int = 0) -> ValidationResult:
    """Validate an integer payload field.

    Args:
        value: Raw value from the payload
        field_name: Field name used in the error message
        default: Value used when the field is missing or null

    Returns:
        ValidationResult with the integer value

    Example:
        >>> validate_int(None, "pointsPerWin").sanitized_value
        0
        >>> validate_int("3", "order").sanitized_value
        3
    """
    if value is None:
        return ValidationResult(is_valid=True, sanitized_value=default)
    if isinstance(value, bool):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be an integer, got {value!r}",
        )
    if isinstance(value, float):
        if not value.is_integer():
            return ValidationResult(
                is_valid=False,
                error_message=f"{field_name} must be an integer, got {value!r}",
            )
        return ValidationResult(is_valid=True, sanitized_value=int(value))
    try:
        return ValidationResult(is_valid=True, sanitized_value=int(value))
    except (TypeError, ValueError):
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} must be an integer, got {value!r}",
        )


# ========== Enum Validation ==========


def validate_choice(value: Any, enum_type: Type[E]) -> ValidationResult:
    """Validate that ``value`` names a member of ``enum_type``."""
    if isinstance(value, enum_type):
        return ValidationResult(is_valid=True, sanitized_value=value)
    try:
        return ValidationResult(is_valid=True, sanitized_value=enum_type(value))
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        return ValidationResult(
            is_valid=False,
            error_message=f"Unknown {enum_type.__name__} {value!r} (expected one of: {allowed})",
        )
