"""Bracket tree nodes."""

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

from typing import Iterator, List, Optional

from gambitbracket.constants import CHAMPION_POSITION, RUNNER_UP_POSITION
from gambitbracket.models.brackets.progressions import (
    Placement,
    Progression,
    Series,
    SinglePlacement,
)
from gambitbracket.models.team import TeamABC


class Structure:
    """A node of a bracket tree.

    Each node owns one series and the child nodes whose winners feed into
    it. The tree is walked from the root down; nodes keep no parent link.

    Attributes:
        series: The series played at this node
        children: Nodes feeding their winners into ``series``
    """

    def __init__(self, series: Series, children: Optional[List[Structure]] = None):
        self.series = series
        self.children: List[Structure] = list(children or [])

    def add_child(self, structure: Structure) -> None:
        """Attach a child node.

        The caller is responsible for the tree shape and for pointing the
        child's winner progression at this node's series.
        """
        self.children.append(structure)

    def set_winner_progression(self, progression: Optional[Progression]) -> None:
        self.series.set_winner_progression(progression)

    def set_loser_progression(self, progression: Optional[Progression]) -> None:
        self.series.set_loser_progression(progression)

    def find_structure_with_team(self, team_id: str) -> Optional[Structure]:
        """Find the node whose series currently holds a team.

        Args:
            team_id: Id of the team to look for

        Returns:
            The matching node in this subtree, or None
        """
        for structure in self.walk():
            if team_id in structure.series.teams:
                return structure
        return None

    def walk(self) -> Iterator[Structure]:
        """Yield this node and every descendant, parents before children."""
        stack = [self]
        while stack:
            structure = stack.pop()
            yield structure
            stack.extend(reversed(structure.children))

    def walk_bottom_up(self) -> Iterator[Structure]:
        """Yield every descendant before its parent, this node last."""
        for child in self.children:
            yield from child.walk_bottom_up()
        yield self

    def playable(self) -> List[Structure]:
        """Nodes whose series has two teams and is not finished yet."""
        return [
            s
            for s in self.walk()
            if len(s.series.teams) == 2 and not s.series.finished
        ]

    @property
    def depth(self) -> int:
        """Number of rounds from the deepest leaf up to and including this node."""
        if not self.children:
            return 1
        return 1 + max(child.depth for child in self.children)

    def __len__(self) -> int:
        return sum(1 for _ in self.walk())

    def __repr__(self) -> str:
        return f"Structure(series={self.series!r}, children={len(self.children)})"


class Finale(Structure):
    """Root node of a bracket.

    The winner of the final series is placed first and the loser second.
    """

    def __init__(
        self,
        series: Series,
        winner_placement: Optional[Placement] = None,
        loser_placement: Optional[Placement] = None,
        children: Optional[List[Structure]] = None,
    ):
        super().__init__(series, children)
        self.winner_placement = winner_placement or SinglePlacement(CHAMPION_POSITION)
        self.loser_placement = loser_placement or SinglePlacement(RUNNER_UP_POSITION)
        self.set_winner_progression(self.winner_placement)
        self.set_loser_progression(self.loser_placement)

    @property
    def champion(self) -> Optional[TeamABC]:
        """The bracket winner once the final is decided."""
        return self.winner_placement.teams[0] if self.winner_placement.teams else None
