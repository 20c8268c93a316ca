"""Validation utilities for Gambit Bracket.

This module provides reusable validation functions with consistent error handling.
Each ``validate_*`` function returns a :class:`ValidationResult`; the matching
``*_strict`` variant raises :class:`InvalidArgumentException` instead, which is
what entity constructors use.
"""

from datetime import datetime
from typing import Any, Mapping, Optional

from dateutil.tz import UTC

from gambitbracket.exceptions import InvalidArgumentException
from gambitbracket.utils.snowflake import Snowflake


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


def _raise_if_invalid(result: ValidationResult) -> Any:
    if not result.is_valid:
        raise InvalidArgumentException(result.error_message)
    return result.sanitized_value


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


# ========== Identifier Validation ==========


def validate_snowflake(value: Any, field_name: str = "id") -> ValidationResult:
    """Validate a snowflake identifier string.

    Args:
        value: Identifier to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with validation status

    Example:
        >>> validate_snowflake("")
        ValidationResult(INVALID, "Invalid id provided: ''")
    """
    if Snowflake.validate(value):
        return ValidationResult(is_valid=True, sanitized_value=value)
    return ValidationResult(
        is_valid=False,
        error_message=f"Invalid {field_name} provided: {value!r}",
    )


def validate_snowflake_strict(value: Any, field_name: str = "id") -> str:
    """Validate a snowflake and return it or raise exception.

    Raises:
        InvalidArgumentException: If the identifier is invalid
    """
    return _raise_if_invalid(validate_snowflake(value, field_name))


# ========== Series Validation ==========


def validate_best_of(best_of: Any) -> ValidationResult:
    """Validate a best-of count (a positive integer)."""
    if not _is_int(best_of):
        return ValidationResult(
            is_valid=False,
            error_message=f"Best of must be an integer: {best_of!r}",
        )
    if best_of <= 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"Best of must be positive: {best_of}",
        )
    return ValidationResult(is_valid=True, sanitized_value=best_of)


def validate_best_of_strict(best_of: Any) -> int:
    """Validate best-of count and return it or raise exception.

    Raises:
        InvalidArgumentException: If the count is not a positive integer
    """
    return _raise_if_invalid(validate_best_of(best_of))


def validate_score(score: Any) -> ValidationResult:
    """Validate a game score (must be a non-negative integer).

    Args:
        score: Score to validate

    Returns:
        ValidationResult with validation status
    """
    if not _is_int(score):
        return ValidationResult(
            is_valid=False,
            error_message=f"Score must be an integer: {score!r}",
        )
    if score < 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"Score cannot be negative: {score}",
        )
    return ValidationResult(is_valid=True, sanitized_value=score)


def validate_score_mapping(
    scores: Mapping[str, Any], team_ids: Any
) -> ValidationResult:
    """Validate a full score mapping against the expected team ids.

    The key set must match ``team_ids`` exactly and every value must be a
    valid score.
    """
    expected = set(team_ids)
    if set(scores.keys()) != expected:
        return ValidationResult(
            is_valid=False,
            error_message=(
                f"Score teams {sorted(scores.keys())} do not match "
                f"series teams {sorted(expected)}"
            ),
        )
    for team_id, score in scores.items():
        result = validate_score(score)
        if not result:
            return ValidationResult(
                is_valid=False,
                error_message=f"Invalid score for {team_id}: {result.error_message}",
            )
    return ValidationResult(is_valid=True, sanitized_value=dict(scores))


def validate_score_mapping_strict(
    scores: Mapping[str, Any], team_ids: Any
) -> dict:
    """Validate a score mapping and return a copy or raise exception."""
    return _raise_if_invalid(validate_score_mapping(scores, team_ids))


def validate_timestamp(value: Any, field_name: str = "timestamp") -> ValidationResult:
    """Validate an optional timezone-aware timestamp.

    Aware timestamps are normalized to UTC. Naive ones are rejected, since
    they cannot be ordered against the UTC timestamps a series records.
    """
    if value is None:
        return ValidationResult(is_valid=True, sanitized_value=None)
    if not isinstance(value, datetime):
        return ValidationResult(
            is_valid=False,
            error_message=f"Invalid {field_name} provided: {value!r}",
        )
    if value.tzinfo is None or value.utcoffset() is None:
        return ValidationResult(
            is_valid=False,
            error_message=f"The {field_name} must be timezone-aware: {value!r}",
        )
    return ValidationResult(is_valid=True, sanitized_value=value.astimezone(UTC))


def validate_timestamp_strict(
    value: Any, field_name: str = "timestamp"
) -> Optional[datetime]:
    """Validate a timestamp and return it in UTC or raise exception."""
    return _raise_if_invalid(validate_timestamp(value, field_name))


# ========== Bracket Validation ==========


def validate_seed(seed: Any) -> ValidationResult:
    """Validate a seed (1 is the top seed)."""
    if not _is_int(seed) or seed <= 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"Seed must be a positive integer: {seed!r}",
        )
    return ValidationResult(is_valid=True, sanitized_value=seed)


# ========== Generic Validation ==========


def validate_non_empty(
    value: Optional[str], field_name: str = "Field"
) -> ValidationResult:
    """Validate that a field is not empty.

    Args:
        value: Value to validate
        field_name: Name of the field for error messages

    Returns:
        ValidationResult with validation status
    """
    if not isinstance(value, str) or not value.strip():
        return ValidationResult(
            is_valid=False,
            error_message=f"{field_name} cannot be empty",
        )
    return ValidationResult(is_valid=True, sanitized_value=value.strip())


def validate_non_empty_strict(value: Optional[str], field_name: str = "Field") -> str:
    """Validate a non-empty string and return it stripped or raise exception."""
    return _raise_if_invalid(validate_non_empty(value, field_name))
