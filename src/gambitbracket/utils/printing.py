"""
Plain text rendering of bracket trees.
This module is used by the developer CLI and by log output.
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

from typing import List

from gambitbracket.models.brackets.progressions import Series
from gambitbracket.models.brackets.structures import Structure

TBD = "TBD"


def format_series(series: Series) -> str:
    """
    Describe one series on a single line.

    Example:
        Alpha 2 - 1 Bravo (Bo3) -> Alpha
    """
    names = [team.name for team in series.teams.values()]
    while len(names) < 2:
        names.append(TBD)

    score = series.score
    if len(score) == 2 and series.started:
        left, right = score.values()
        line = f"{names[0]} {left} - {right} {names[1]}"
    else:
        line = f"{names[0]} vs {names[1]}"

    line += f" (Bo{series.best_of})"

    if series.finished:
        winner = series.winner
        outcome = winner.name if winner is not None else "no winner"
        if series.resolution != "score":
            outcome += f" by {series.resolution}"
        line += f" -> {outcome}"
    return line


def render_bracket_tree(root: Structure) -> str:
    """
    Render a bracket as an indented tree, final first.

    Returns:
        Multi-line string, one series per line
    """
    lines: List[str] = []

    def _render(structure: Structure, prefix: str, is_last: bool, is_root: bool):
        if is_root:
            lines.append(format_series(structure.series))
            child_prefix = ""
        else:
            connector = "`-- " if is_last else "|-- "
            lines.append(prefix + connector + format_series(structure.series))
            child_prefix = prefix + ("    " if is_last else "|   ")

        for index, child in enumerate(structure.children):
            _render(child, child_prefix, index == len(structure.children) - 1, False)

    _render(root, "", True, True)
    return "\n".join(lines)
