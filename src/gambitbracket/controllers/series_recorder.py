"""Result recording for bracket series.

This module records game results and series outcomes with proper validation,
serializing every mutation of a series behind a lock of its own.
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

import threading
from contextlib import ExitStack, contextmanager
from typing import Dict, Iterator, Optional

from gambitbracket.models.brackets.progressions import Series
from gambitbracket.models.events import SeriesGame
from gambitbracket.type_hints import Scores
from gambitbracket.utils import setup_logger
from gambitbracket.utils.snowflake import SnowflakeService
from gambitbracket.utils.validation import validate_score_mapping

logger = setup_logger(__name__)


class SeriesRecorder:
    """Handles recording and validating series results.

    This class is responsible for:
    - Recording finished games with proper validation
    - Finishing a series as soon as a team holds the required wins
    - Forfeits and byes
    - Serializing concurrent calls on the same series

    Reads on a series (score, winner) need no lock; every mutation made
    through this class holds the series' lock. Anything that can finish a
    series also holds the locks of the series its winner and loser move on
    to. Locks are always taken from a series towards its progressions, so
    an acyclic bracket cannot deadlock.
    """

    def __init__(self, snowflake_service: SnowflakeService, auto_finish: bool = True):
        """Initialize the recorder.

        Args:
            snowflake_service: Source of identifiers for recorded games
            auto_finish: Finish a series once a recorded game decides it
        """
        self.snowflake_service = snowflake_service
        self.auto_finish = auto_finish
        self._locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def lock_for(self, series: Series) -> threading.Lock:
        """Get the lock guarding a series, creating it on first use."""
        with self._registry_lock:
            lock = self._locks.get(series.id)
            if lock is None:
                lock = self._locks[series.id] = threading.Lock()
            return lock

    @contextmanager
    def _locked_with_progressions(self, series: Series) -> Iterator[None]:
        """Hold the lock of a series and of every series it progresses into."""
        with ExitStack() as stack:
            stack.enter_context(self.lock_for(series))
            held = {series.id}
            for progression in (series.winner_progression, series.loser_progression):
                if isinstance(progression, Series) and progression.id not in held:
                    stack.enter_context(self.lock_for(progression))
                    held.add(progression.id)
            yield

    def record_game(self, series: Series, scores: Scores) -> Optional[SeriesGame]:
        """Record a finished game.

        Args:
            series: The series the game was played in
            scores: Final score per team id

        Returns:
            The finished game, or None if the result was rejected
        """
        with self._locked_with_progressions(series):
            if not self._validate_game_entry(series, scores):
                return None

            game = SeriesGame(str(self.snowflake_service.generate()), series, scores)
            if not game.finish():
                logger.error(f"Could not finish {game.name} in series {series.id}")
                return None

            logger.debug(f"Recorded {game.name} in series {series.id}: {scores}")

            if self.auto_finish and series.winner is not None:
                series.finish()

            return game

    def _validate_game_entry(self, series: Series, scores: Scores) -> bool:
        """Validate a game result before recording.

        Returns:
            True if valid, False otherwise
        """
        if series.finished:
            logger.warning(f"Series {series.id} is already finished")
            return False

        if len(series.teams) != 2:
            logger.warning(f"Series {series.id} does not have two teams yet")
            return False

        if series.winner is not None:
            logger.warning(f"Series {series.id} is already decided")
            return False

        result = validate_score_mapping(scores, series.teams.keys())
        if not result:
            logger.error(f"Invalid result for series {series.id}: {result.error_message}")
            return False

        first, second = scores.values()
        if first == second:
            logger.error(f"Series {series.id}: a game cannot end in a tie")
            return False

        return True

    def start(self, series: Series) -> bool:
        with self.lock_for(series):
            return series.start()

    def finish(self, series: Series) -> bool:
        with self._locked_with_progressions(series):
            return series.finish()

    def forfeit(self, series: Series, team_id: str) -> bool:
        with self._locked_with_progressions(series):
            return series.forfeit(team_id)

    def bye(self, series: Series) -> bool:
        with self._locked_with_progressions(series):
            return series.bye()
