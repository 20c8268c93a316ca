"""Exceptions for use in Gambit Bracket"""

# Gambit Bracket
# Copyright (C) 2025  Gambit Bracket developers
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


class GambitBracketException(Exception):
    """Base exception for all Gambit Bracket errors.

    All custom exceptions in the application should inherit from this class.
    This enables catching all application-specific errors with a single except clause.
    """

    pass


# ========== Argument / Operation Exceptions ==========


class InvalidArgumentException(GambitBracketException, ValueError):
    """Raised when a constructor receives data that violates an invariant.

    Examples are malformed identifiers, a non-positive best-of count or a
    score mapping that does not match the participants of a series.
    """

    pass


class InvalidOperationException(GambitBracketException, RuntimeError):
    """Raised when an operation is attempted while its precondition is unmet."""

    pass


# ========== Series Exceptions ==========


class SeriesException(GambitBracketException):
    """Base exception for series and game errors."""

    pass


class ForeignGameException(SeriesException, InvalidArgumentException):
    """Raised when a game belonging to another series is attached to a series."""

    pass


# ========== Bracket Exceptions ==========


class BracketException(GambitBracketException):
    """Base exception for bracket construction errors."""

    pass


class EmptyBracketException(BracketException, InvalidOperationException):
    """Raised when generating a bracket that has no participants."""

    pass


class InvalidSeedException(BracketException, InvalidArgumentException):
    """Raised when a seed mapping is malformed."""

    pass


class BracketStructureException(BracketException, InvalidOperationException):
    """Raised when bracket construction reaches an inconsistent state."""

    pass
