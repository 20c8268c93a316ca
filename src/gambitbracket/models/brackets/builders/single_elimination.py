"""Single elimination bracket generation.

The tree is grown one seed at a time. Seeds 1 and 2 start in the final.
Every later seed challenges the lowest ranked seed that has not yet been
challenged at the current depth: that opponent leaves its series, and the
two meet in a new series one round lower whose winner takes the opponent's
old place. Each time the seed count passes a power of two the bracket gets
one round deeper and every slot is open again.

With 0-based seed indexes this pairs seed ``i`` against seed
``2^(k+1) - 1 - i`` for ``2^k <= i < 2^(k+1)``, which is the standard
seeding (1 v 8, 4 v 5, 2 v 7, 3 v 6 for eight teams).
"""

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

from typing import List, Sequence

from gambitbracket.constants import BRACKET_SINGLE_ELIMINATION
from gambitbracket.exceptions import (
    BracketStructureException,
    EmptyBracketException,
    InvalidArgumentException,
)
from gambitbracket.models.brackets.builders.bracket_builder import BracketBuilder
from gambitbracket.models.brackets.progressions import GroupPlacement, Series
from gambitbracket.models.brackets.structures import Finale, Structure
from gambitbracket.models.team import TeamABC
from gambitbracket.utils import setup_logger
from gambitbracket.utils.snowflake import SnowflakeService
from gambitbracket.utils.validation import validate_best_of_strict

logger = setup_logger(__name__)


def _next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (n >= 1)."""
    return 1 << (n - 1).bit_length()


def _is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def _lowest_open_slot(open_slots: List[bool]) -> int:
    """Index of the lowest ranked seed still unchallenged at this depth."""
    for j in range(len(open_slots) - 1, -1, -1):
        if open_slots[j]:
            return j
    raise BracketStructureException(
        "No open slot left at the current bracket depth"
    )


def build_single_elimination(
    teams: Sequence[TeamABC],
    best_of: int,
    snowflake_service: SnowflakeService,
) -> Finale:
    """Build a single elimination bracket.

    Args:
        teams: Participants in seed order, best first. Bye placeholders may
            pad the field; their opponents advance without playing.
        best_of: Number of games every series is played over
        snowflake_service: Source of series identifiers

    Returns:
        The root of the tree, whose series is the final

    Raises:
        InvalidOperationException: If there are no teams
        InvalidArgumentException: If the best-of is invalid, a team appears
            twice, or two placeholders are drawn against each other
    """
    if not teams:
        raise EmptyBracketException("No teams are currently in the bracket builder")

    best_of = validate_best_of_strict(best_of)
    if len({team.id for team in teams}) != len(teams):
        raise InvalidArgumentException("A team cannot appear in a bracket twice")

    root = Finale(Series(str(snowflake_service.generate()), None, best_of))
    open_slots: List[bool] = []

    for i, team in enumerate(teams):
        if _is_power_of_two(i):
            open_slots = [True] * i

        if i < 2:
            root.series.add_team(team)
            continue

        j = _lowest_open_slot(open_slots)
        opponent = teams[j]

        head = root.find_structure_with_team(opponent.id)
        head.series.remove_team(opponent.id)

        series = Series(
            str(snowflake_service.generate()),
            {opponent.id: opponent, team.id: team},
            best_of,
        )
        structure = Structure(series)
        structure.set_winner_progression(head.series)
        structure.set_loser_progression(GroupPlacement(_next_power_of_two(i + 1)))
        head.add_child(structure)

        open_slots[j] = False
        logger.debug(f"Seed {i + 1} {team.name} drawn against seed {j + 1} {opponent.name}")

    _advance_past_placeholders(root)

    if len(teams) == 1:
        root.series.bye()

    return root


def _advance_past_placeholders(root: Structure) -> None:
    """Remove bye placeholders and advance whoever was drawn against them."""
    for structure in root.walk_bottom_up():
        series = structure.series
        placeholders = [t for t in series.teams.values() if t.is_bye]
        if not placeholders:
            continue

        if len(placeholders) == len(series.teams):
            raise InvalidArgumentException(
                f"Series {series.id} was drawn between bye placeholders only"
            )

        for placeholder in placeholders:
            series.remove_team(placeholder.id)
        series.bye()


class SingleEliminationBuilder(BracketBuilder):
    """Builds single elimination brackets.

    The loser of every series is placed in the group of teams knocked out in
    that round; the final decides places 1 and 2.
    """

    bracket_type = BRACKET_SINGLE_ELIMINATION

    def _build(self, ordered_teams: List[TeamABC]) -> Structure:
        return build_single_elimination(
            ordered_teams, self.best_of, self.snowflake_service
        )
