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

from __future__ import annotations

from abc import ABC, abstractmethod


class TeamABC(ABC):
    """
    Abstract base class defining the interface for a bracket participant.

    A participant only needs a stable identifier to take part in a series.
    Series reference participants, they never own them, so the same
    participant object moves through many series over a tournament.

    Attributes
    ----------
    id : str
        Immutable snowflake identifier.
    name : str
        Display name.
    is_bye : bool
        True for a placeholder that stands in for an empty slot.

    Notes
    -----
    - This class is an abstract interface and cannot be instantiated directly.
    - Two participants are equal when their ids are equal.

    See Also
    --------
    Team
        A real team.
    ByeTeam
        Placeholder used to pad a seeded field.
    """

    @property
    @abstractmethod
    def id(self) -> str:
        """Unique snowflake identifier."""
        raise NotImplementedError

    @property
    @abstractmethod
    def name(self) -> str:
        """Display name."""
        raise NotImplementedError

    @property
    def is_bye(self) -> bool:
        """Whether this participant is a bye placeholder."""
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TeamABC):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return f"{self.__class__.__name__}(name='{self.name}', id='{self.id}')"

    def __str__(self) -> str:
        return self.name
