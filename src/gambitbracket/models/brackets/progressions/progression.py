"""Progression target interface."""

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

from gambitbracket.models.team import TeamABC


class Progression(ABC):
    """Somewhere the winner or loser of a series is sent once it is decided.

    A series points at up to two progressions. Another series accepts the
    team as a new participant; a placement records a final ranking.
    """

    @abstractmethod
    def receive(self, team: TeamABC) -> bool:
        """Accept a team coming out of a decided series.

        Returns:
            True if the team was accepted
        """
        raise NotImplementedError
