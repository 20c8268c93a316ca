"""Concrete bracket participants."""

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

from gambitbracket.models.team.abc_team import TeamABC
from gambitbracket.utils.validation import (
    validate_non_empty_strict,
    validate_snowflake_strict,
)


class Team(TeamABC):
    """A team competing in a bracket.

    Args:
        id: Snowflake identifier
        name: Display name, surrounding whitespace is stripped

    Raises:
        InvalidArgumentException: If the id or name is invalid
    """

    def __init__(self, id: str, name: str) -> None:
        self._id = validate_snowflake_strict(id)
        self._name = validate_non_empty_strict(name, "Team name")

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name


class ByeTeam(TeamABC):
    """Placeholder filling an empty slot in a seeded field.

    Whoever is drawn against a placeholder advances without playing.
    """

    def __init__(self, id: str) -> None:
        self._id = validate_snowflake_strict(id)

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return "BYE"

    @property
    def is_bye(self) -> bool:
        return True
