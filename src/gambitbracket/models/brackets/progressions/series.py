"""Best-of-N series between two teams.

A series is the unit every bracket is built from. It moves through three
states::

    pending -> started -> finished

``finished`` is reached in one of three mutually exclusive ways: a team
wins the majority of games, a team forfeits, or the only team present is
given a bye. On finishing, the winner is sent to the winner progression
and the loser to the loser progression, exactly once.

Business rule violations (a third team, finishing an undecided series, ...)
are reported by returning False, never by raising. Only malformed data
handed to the constructor raises :class:`InvalidArgumentException`.
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

from __future__ import annotations

from datetime import datetime
from types import MappingProxyType
from typing import Dict, Mapping, Optional

from dateutil.relativedelta import relativedelta
from dateutil.tz import UTC

from gambitbracket.constants import DEFAULT_BEST_OF, MAX_SERIES_TEAMS
from gambitbracket.exceptions import ForeignGameException, InvalidArgumentException
from gambitbracket.models.brackets.progressions.progression import Progression
from gambitbracket.models.events.series_game import SeriesGame
from gambitbracket.models.team import TeamABC
from gambitbracket.type_hints import Resolution
from gambitbracket.utils import setup_logger
from gambitbracket.utils.validation import (
    validate_best_of,
    validate_best_of_strict,
    validate_snowflake_strict,
    validate_timestamp_strict,
)

logger = setup_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class Series(Progression):
    """A best-of-N match between at most two teams.

    Args:
        id: Snowflake identifier
        teams: Initial teams (id -> team), copied on construction
        best_of: Number of games the series is played over
        games: Games restored from an earlier instance of this series
        started_timestamp: When the series started, when restoring. Must be
            timezone-aware; stored in UTC
        finished_timestamp: When the series finished, when restoring. Must be
            timezone-aware; stored in UTC
        forfeiter_id: Id of the team that forfeited, when restoring
        byed: Whether the series was decided by a bye, when restoring

    Raises:
        InvalidArgumentException: If any argument violates a series invariant
    """

    def __init__(
        self,
        id: str,
        teams: Optional[Mapping[str, TeamABC]] = None,
        best_of: int = DEFAULT_BEST_OF,
        games: Optional[Mapping[str, SeriesGame]] = None,
        started_timestamp: Optional[datetime] = None,
        finished_timestamp: Optional[datetime] = None,
        forfeiter_id: Optional[str] = None,
        byed: bool = False,
    ) -> None:
        self.id: str = validate_snowflake_strict(id)
        self._best_of: int = validate_best_of_strict(best_of)

        self._teams: Dict[str, TeamABC] = dict(teams or {})
        if len(self._teams) > MAX_SERIES_TEAMS:
            raise InvalidArgumentException(
                f"A series holds at most {MAX_SERIES_TEAMS} teams, "
                f"got {len(self._teams)}"
            )
        for team_id, team in self._teams.items():
            if team_id != team.id:
                raise InvalidArgumentException(
                    f"Team {team.id} is registered under a different id {team_id}"
                )

        self._games: Dict[str, SeriesGame] = {}
        self.started_timestamp: Optional[datetime] = validate_timestamp_strict(
            started_timestamp, "started timestamp"
        )
        self.finished_timestamp: Optional[datetime] = validate_timestamp_strict(
            finished_timestamp, "finished timestamp"
        )
        self._started: bool = started_timestamp is not None
        self._finished: bool = finished_timestamp is not None
        self._forfeiter_id: Optional[str] = forfeiter_id
        self._byed: bool = byed

        self.winner_progression: Optional[Progression] = None
        self.loser_progression: Optional[Progression] = None

        for game_id, game in (games or {}).items():
            self._restore_game(game_id, game)

        self._validate_restored_state()

    # ========== Restoration ==========

    def _restore_game(self, game_id: str, game: SeriesGame) -> None:
        if not isinstance(game, SeriesGame):
            raise InvalidArgumentException(f"Invalid game provided: {game!r}")
        if game_id != game.id:
            raise InvalidArgumentException(
                f"Game {game.id} is registered under a different id {game_id}"
            )
        if game.series.id != self.id:
            raise ForeignGameException(
                f"Game {game.id} belongs to series {game.series.id}, not {self.id}"
            )
        if set(game.score) != set(self._teams):
            raise InvalidArgumentException(
                f"Game {game.id} was played by different teams than series {self.id}"
            )
        self._games[game.id] = game

    def _validate_restored_state(self) -> None:
        self._validate_game_history()

        if self._forfeiter_id is not None:
            if self._forfeiter_id not in self._teams:
                raise InvalidArgumentException(
                    f"Invalid forfeiter id provided: {self._forfeiter_id!r}"
                )
            if len(self._teams) < MAX_SERIES_TEAMS:
                raise InvalidArgumentException(
                    "A forfeited series must hold two teams"
                )
            if not self._finished:
                raise InvalidArgumentException(
                    "A forfeited series must have a finished timestamp"
                )

        if self._byed:
            if self._forfeiter_id is not None:
                raise InvalidArgumentException(
                    "A series cannot be both forfeited and byed"
                )
            if len(self._teams) != 1 or not self._finished:
                raise InvalidArgumentException(
                    "A byed series must be finished with exactly one team"
                )

        if (
            self._finished
            and self._forfeiter_id is None
            and not self._byed
            and self._score_winner() is None
        ):
            raise InvalidArgumentException(
                f"Series {self.id} is marked finished but has no winner"
            )

        if (
            self.started_timestamp is not None
            and self.finished_timestamp is not None
            and self.finished_timestamp < self.started_timestamp
        ):
            raise InvalidArgumentException(
                "The finished timestamp cannot be before the started timestamp"
            )

    def _validate_game_history(self) -> None:
        """No game may have been won after the series was decided."""
        wins = {team_id: 0 for team_id in self._teams}
        decided = False
        for game in self._games.values():
            winner_id = game.winner
            if winner_id is None:
                continue
            if decided:
                raise InvalidArgumentException(
                    f"Game {game.id} was won after series {self.id} was decided"
                )
            wins[winner_id] += 1
            decided = wins[winner_id] >= self.required_wins and all(
                count < wins[winner_id]
                for team_id, count in wins.items()
                if team_id != winner_id
            )

    def _register_game(self, game: SeriesGame) -> None:
        """Add a newly created game. Called by :class:`SeriesGame` itself."""
        if game.series is not self:
            raise ForeignGameException(
                f"Game {game.id} was created for another series"
            )
        if game.id in self._games:
            raise InvalidArgumentException(
                f"Game {game.id} is already part of series {self.id}"
            )

        self._games[game.id] = game
        if self.started_timestamp is None:
            self.started_timestamp = _utcnow()

    # ========== Properties ==========

    @property
    def teams(self) -> Mapping[str, TeamABC]:
        """Read-only view of the teams (id -> team) in insertion order."""
        return MappingProxyType(self._teams)

    @property
    def games(self) -> Dict[str, SeriesGame]:
        """Copy of the games (id -> game) in play order."""
        return dict(self._games)

    @property
    def best_of(self) -> int:
        return self._best_of

    @property
    def required_wins(self) -> int:
        """Game wins needed to take the series: ``ceil(best_of / 2)``."""
        return (self._best_of + 1) // 2

    @property
    def started(self) -> bool:
        return self._started or bool(self._games)

    @property
    def finished(self) -> bool:
        return self._finished

    @property
    def forfeited(self) -> bool:
        return self._forfeiter_id is not None

    @property
    def forfeiter_id(self) -> Optional[str]:
        return self._forfeiter_id

    @property
    def byed(self) -> bool:
        return self._byed

    @property
    def score(self) -> Dict[str, int]:
        """Finished games won per team."""
        wins = {team_id: 0 for team_id in self._teams}
        for game in self._games.values():
            winner_id = game.winner
            if winner_id is not None and winner_id in wins:
                wins[winner_id] += 1
        return wins

    @property
    def winner(self) -> Optional[TeamABC]:
        """The team that won or will win the series, if it is decided."""
        if self._forfeiter_id is not None:
            return self._other_team(self._forfeiter_id)
        if self._byed:
            return next(iter(self._teams.values()), None)
        return self._score_winner()

    @property
    def loser(self) -> Optional[TeamABC]:
        """The beaten team. A bye has no loser."""
        if self._forfeiter_id is not None:
            return self._teams.get(self._forfeiter_id)
        if self._byed:
            return None
        winner = self._score_winner()
        if winner is None:
            return None
        return self._other_team(winner.id)

    @property
    def resolution(self) -> Optional[Resolution]:
        """How the series was decided, None while unfinished."""
        if not self._finished:
            return None
        if self._forfeiter_id is not None:
            return "forfeit"
        if self._byed:
            return "bye"
        return "score"

    @property
    def duration(self) -> Optional[relativedelta]:
        """Time from start to finish, None until both are known."""
        if self.started_timestamp is None or self.finished_timestamp is None:
            return None
        return relativedelta(self.finished_timestamp, self.started_timestamp)

    def _score_winner(self) -> Optional[TeamABC]:
        score = self.score
        if not score:
            return None
        leader_id = max(score, key=score.__getitem__)
        leader_wins = score[leader_id]
        if leader_wins < self.required_wins:
            return None
        if any(wins >= leader_wins for tid, wins in score.items() if tid != leader_id):
            return None
        return self._teams[leader_id]

    def _other_team(self, team_id: str) -> Optional[TeamABC]:
        return next((t for tid, t in self._teams.items() if tid != team_id), None)

    # ========== Team Management ==========

    def add_team(self, team: TeamABC) -> bool:
        """Add a team to the series.

        Returns:
            True if added, False if the series is full, already contains the
            team, or has started
        """
        if self.started or self._finished:
            logger.warning(f"Cannot add {team.name}: series {self.id} has started")
            return False

        if len(self._teams) >= MAX_SERIES_TEAMS:
            logger.warning(f"Cannot add {team.name}: series {self.id} is full")
            return False

        if team.id in self._teams:
            logger.warning(f"{team.name} ({team.id}) is already in series {self.id}")
            return False

        self._teams[team.id] = team
        logger.debug(f"Added {team.name} ({team.id}) to series {self.id}")
        return True

    def remove_team(self, team_id: str) -> bool:
        """Remove a team from the series.

        Returns:
            True if removed, False if not present or the series has started
        """
        if team_id not in self._teams:
            return False

        if self.started or self._finished:
            logger.warning(f"Cannot remove {team_id}: series {self.id} has started")
            return False

        del self._teams[team_id]
        logger.debug(f"Removed {team_id} from series {self.id}")
        return True

    def receive(self, team: TeamABC) -> bool:
        return self.add_team(team)

    def set_best_of(self, best_of: int) -> bool:
        """Change the number of games the series is played over.

        Returns:
            True if changed, False for a non-positive count or a started series
        """
        result = validate_best_of(best_of)
        if not result:
            logger.warning(result.error_message)
            return False

        if self.started or self._finished:
            logger.warning(f"Cannot change best of: series {self.id} has started")
            return False

        self._best_of = best_of
        return True

    def set_winner_progression(self, progression: Optional[Progression]) -> None:
        self.winner_progression = progression

    def set_loser_progression(self, progression: Optional[Progression]) -> None:
        self.loser_progression = progression

    # ========== State Transitions ==========

    def start(self) -> bool:
        """Start the series.

        Starting an already started series succeeds without touching the
        original timestamp.

        Returns:
            True if the series is started, False if it lacks two teams or is
            already finished
        """
        if self._started:
            return True

        if self._finished:
            logger.warning(f"Cannot start series {self.id}: already finished")
            return False

        if len(self._teams) < MAX_SERIES_TEAMS:
            logger.warning(f"Cannot start series {self.id}: needs two teams")
            return False

        self._started = True
        if self.started_timestamp is None:
            self.started_timestamp = _utcnow()
        logger.info(f"Started series {self.id}")
        return True

    def finish(self) -> bool:
        """Finish the series once a team holds the required game wins.

        Returns:
            True if finished, False if already finished or still undecided
        """
        if self._finished:
            logger.warning(f"Series {self.id} is already finished")
            return False

        winner = self._score_winner()
        if winner is None:
            logger.debug(f"Series {self.id} is not decided yet: {self.score}")
            return False

        self._complete()
        logger.info(f"Series {self.id} won by {winner.name} {self.score}")
        self._progress(winner, self._other_team(winner.id))
        return True

    def forfeit(self, team_id: str) -> bool:
        """Forfeit the series on behalf of a team.

        Returns:
            True if forfeited, False if the series is finished, does not hold
            two teams yet, or the team is not part of it
        """
        if self._finished:
            logger.warning(f"Cannot forfeit series {self.id}: already finished")
            return False

        if len(self._teams) < MAX_SERIES_TEAMS:
            logger.warning(f"Cannot forfeit series {self.id}: needs two teams")
            return False

        if team_id not in self._teams:
            logger.warning(f"Cannot forfeit series {self.id}: unknown team {team_id}")
            return False

        self._forfeiter_id = team_id
        self._complete()
        logger.info(f"{self._teams[team_id].name} forfeited series {self.id}")
        self._progress(self._other_team(team_id), self._teams[team_id])
        return True

    def bye(self) -> bool:
        """Advance the only team in the series without playing.

        Returns:
            True if byed, False if the series is finished or does not hold
            exactly one team
        """
        if self._finished:
            logger.warning(f"Cannot bye series {self.id}: already finished")
            return False

        if len(self._teams) != 1:
            logger.warning(
                f"Cannot bye series {self.id}: has {len(self._teams)} teams"
            )
            return False

        self._byed = True
        self._complete()
        team = next(iter(self._teams.values()))
        logger.info(f"{team.name} received a bye in series {self.id}")
        self._progress(team, None)
        return True

    def _complete(self) -> None:
        self._finished = True
        self.finished_timestamp = _utcnow()

    def _progress(
        self, winner: Optional[TeamABC], loser: Optional[TeamABC]
    ) -> None:
        """Send the outcome of the series to its progressions."""
        for team, progression, role in (
            (winner, self.winner_progression, "winner"),
            (loser, self.loser_progression, "loser"),
        ):
            if team is None or progression is None:
                continue
            if progression.receive(team):
                logger.debug(f"Series {self.id} {role} {team.name} -> {progression!r}")
            else:
                logger.error(
                    f"Series {self.id} could not progress {role} {team.name} "
                    f"to {progression!r}"
                )

    def __repr__(self) -> str:
        names = ", ".join(t.name for t in self._teams.values()) or "-"
        return f"Series(id='{self.id}', teams=[{names}], best_of={self._best_of})"
