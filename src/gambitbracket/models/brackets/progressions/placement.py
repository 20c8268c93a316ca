"""Final ranking buckets."""

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

from abc import abstractmethod
from typing import List

from gambitbracket.exceptions import InvalidArgumentException
from gambitbracket.models.brackets.progressions.progression import Progression
from gambitbracket.models.team import TeamABC
from gambitbracket.utils import setup_logger

logger = setup_logger(__name__)


class Placement(Progression):
    """A terminal progression: teams that reach it stop playing.

    Attributes:
        teams: Teams recorded in this placement, in arrival order
    """

    def __init__(self) -> None:
        self.teams: List[TeamABC] = []

    @property
    @abstractmethod
    def positions(self) -> range:
        """Finishing positions covered by this placement."""
        raise NotImplementedError

    def receive(self, team: TeamABC) -> bool:
        if any(t.id == team.id for t in self.teams):
            logger.warning(f"{team.name} ({team.id}) is already placed in {self}")
            return False

        self.teams.append(team)
        logger.info(f"Placed {team.name} ({team.id}) in {self}")
        return True

    def contains(self, team_id: str) -> bool:
        return any(t.id == team_id for t in self.teams)

    def __str__(self) -> str:
        first, last = self.positions[0], self.positions[-1]
        if first == last:
            return f"place {first}"
        return f"places {first}-{last}"


class SinglePlacement(Placement):
    """An exact finishing position, e.g. 1 for the champion."""

    def __init__(self, position: int) -> None:
        if isinstance(position, bool) or not isinstance(position, int) or position < 1:
            raise InvalidArgumentException(f"Invalid position provided: {position!r}")
        super().__init__()
        self.position = position

    @property
    def positions(self) -> range:
        return range(self.position, self.position + 1)

    def __repr__(self) -> str:
        return f"SinglePlacement(position={self.position})"


class GroupPlacement(Placement):
    """The teams eliminated while the field was ``size`` teams wide.

    Losing in a round of ``size`` shares positions ``size // 2 + 1`` to
    ``size``, so ``GroupPlacement(4)`` covers places 3-4 and
    ``GroupPlacement(8)`` places 5-8.
    """

    def __init__(self, size: int) -> None:
        if (
            isinstance(size, bool)
            or not isinstance(size, int)
            or size < 2
            or size & (size - 1)
        ):
            raise InvalidArgumentException(
                f"Invalid group size provided: {size!r} (must be a power of two >= 2)"
            )
        super().__init__()
        self.size = size

    @property
    def positions(self) -> range:
        return range(self.size // 2 + 1, self.size + 1)

    def __repr__(self) -> str:
        return f"GroupPlacement(size={self.size})"
