"""A single scored game inside a series."""

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

from typing import TYPE_CHECKING, Dict, Optional

from gambitbracket.constants import GAME_NAME_TEMPLATE, MAX_SERIES_TEAMS
from gambitbracket.exceptions import InvalidArgumentException
from gambitbracket.type_hints import Scores
from gambitbracket.utils import setup_logger
from gambitbracket.utils.validation import (
    validate_score,
    validate_score_mapping_strict,
    validate_snowflake_strict,
)

if TYPE_CHECKING:
    from gambitbracket.models.brackets.progressions.series import Series

logger = setup_logger(__name__)


class SeriesGame:
    """One game played between the teams of a series.

    Creating a game registers it in its series, so the series always lists
    every game that points back at it. Games are never removed; they are the
    match history of the series.

    Args:
        id: Snowflake identifier, also used to order games for naming
        series: The series this game belongs to
        score: Starting score per team; defaults to 0 for every team
            currently in the series
        finished: Restore an already finished game

    Raises:
        InvalidArgumentException: If the id is invalid, the score mapping does
            not match the series' teams, a score is negative, or a finished
            game is tied
    """

    def __init__(
        self,
        id: str,
        series: Series,
        score: Optional[Scores] = None,
        finished: bool = False,
    ) -> None:
        self.id: str = validate_snowflake_strict(id)
        self.series: Series = series

        if score is None:
            self._score: Dict[str, int] = {team_id: 0 for team_id in series.teams}
        else:
            self._score = validate_score_mapping_strict(score, series.teams.keys())

        if finished and not self._is_decisive():
            raise InvalidArgumentException(
                f"Game {self.id} cannot be restored as finished with a tied score"
            )
        self._finished: bool = finished

        # Ordinal among the series' games by id, which is creation order
        earlier = sum(1 for game_id in series.games if int(game_id) < int(self.id))
        self.name: str = GAME_NAME_TEMPLATE.format(number=earlier + 1)

        series._register_game(self)
        logger.debug(f"Created {self.name} ({self.id}) in series {series.id}")

    @property
    def score(self) -> Scores:
        """Copy of the current score per team."""
        return dict(self._score)

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def winner(self) -> Optional[str]:
        """Id of the team with the higher score once the game is finished."""
        if not self._finished:
            return None
        return max(self._score, key=self._score.__getitem__)

    def get_score(self, team_id: str) -> int:
        """Get a team's current score.

        Raises:
            InvalidArgumentException: If the team is not playing this game
        """
        if team_id not in self._score:
            raise InvalidArgumentException(f"Invalid team id provided: {team_id!r}")
        return self._score[team_id]

    def set_score(self, team_id: str, score: int) -> bool:
        """Overwrite a team's score.

        Returns:
            True if the score was changed, False if the game or its series is
            finished, the team is unknown, or the score is invalid
        """
        if self._finished or self.series.finished:
            logger.warning(f"Cannot change score of finished {self.name} ({self.id})")
            return False

        if team_id not in self._score:
            logger.warning(f"Team {team_id} is not playing {self.name} ({self.id})")
            return False

        result = validate_score(score)
        if not result:
            logger.warning(result.error_message)
            return False

        self._score[team_id] = score
        return True

    def finish(self) -> bool:
        """Finish the game, freezing its score.

        Returns:
            True if the game was finished, False if it already was, its series
            is finished or already decided, or the score does not separate the
            two teams
        """
        if self._finished:
            logger.warning(f"{self.name} ({self.id}) is already finished")
            return False

        if self.series.finished:
            logger.warning(
                f"Cannot finish {self.name} ({self.id}): series {self.series.id} "
                "is already finished"
            )
            return False

        if self.series.winner is not None:
            logger.warning(
                f"Cannot finish {self.name} ({self.id}): series {self.series.id} "
                "is already decided"
            )
            return False

        if not self._is_decisive():
            logger.debug(f"{self.name} ({self.id}) cannot finish without a winner")
            return False

        self._finished = True
        logger.info(f"Finished {self.name} ({self.id}): {self._score}")
        return True

    def _is_decisive(self) -> bool:
        """Two teams with different scores."""
        if len(self._score) != MAX_SERIES_TEAMS:
            return False
        first, second = self._score.values()
        return first != second

    def __repr__(self) -> str:
        return (
            f"SeriesGame(id='{self.id}', name='{self.name}', "
            f"score={self._score}, finished={self._finished})"
        )
