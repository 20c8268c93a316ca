"""Common base for bracket builders.

A builder collects the teams, seeds and settings of a bracket and turns them
into a tree of :class:`Structure` nodes exactly once.
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

from abc import ABC, abstractmethod
from typing import Dict, List, Mapping, Optional

from gambitbracket.constants import DEFAULT_BEST_OF
from gambitbracket.exceptions import InvalidArgumentException, InvalidSeedException
from gambitbracket.models.brackets.builders.bracket_config import (
    BracketConfig,
    BracketInvite,
)
from gambitbracket.models.brackets.structures import Structure
from gambitbracket.models.team import TeamABC
from gambitbracket.type_hints import Seeds
from gambitbracket.utils import setup_logger
from gambitbracket.utils.snowflake import SnowflakeService
from gambitbracket.utils.validation import (
    validate_best_of,
    validate_best_of_strict,
    validate_seed,
    validate_snowflake,
    validate_snowflake_strict,
)

logger = setup_logger(__name__)


class BracketBuilder(ABC):
    """Base class for bracket builders.

    Args:
        id: Snowflake identifier of the bracket
        snowflake_service: Source of identifiers for the generated series
        teams: Initial teams (id -> team), copied on construction
        seeds: Seed per team id, 1 being the top seed
        best_of: Number of games every series is played over
        private: Whether teams need an invite to join
        invites: Outstanding invites keyed by team id
        root: A previously generated bracket to resume instead of regenerating

    Raises:
        InvalidArgumentException: If any argument is malformed
    """

    bracket_type: str = ""

    def __init__(
        self,
        id: str,
        snowflake_service: SnowflakeService,
        teams: Optional[Mapping[str, TeamABC]] = None,
        seeds: Optional[Seeds] = None,
        best_of: int = DEFAULT_BEST_OF,
        private: bool = False,
        invites: Optional[Mapping[str, BracketInvite]] = None,
        root: Optional[Structure] = None,
    ) -> None:
        self.id: str = validate_snowflake_strict(id)
        self.snowflake_service = snowflake_service

        self.config = BracketConfig(
            best_of=validate_best_of_strict(best_of),
            private=bool(private),
            bracket_type=self.bracket_type,
        )

        self.teams: Dict[str, TeamABC] = dict(teams or {})
        for team_id, team in self.teams.items():
            if team_id != team.id:
                raise InvalidArgumentException(
                    f"Team {team.id} is registered under a different id {team_id}"
                )

        self.seeds: Seeds = dict(seeds or {})
        self._validate_seeds()

        self.invites: Dict[str, BracketInvite] = dict(invites or {})
        for team_id, invite in self.invites.items():
            validate_snowflake_strict(invite.id, "invite id")
            if team_id != invite.team_id:
                raise InvalidArgumentException(
                    f"Invite {invite.id} is registered under a different team {team_id}"
                )

        self.bracket: Optional[Structure] = root

    def _validate_seeds(self) -> None:
        used = set()
        for team_id, seed in self.seeds.items():
            if team_id not in self.teams:
                raise InvalidSeedException(f"Seed given for unknown team {team_id}")
            result = validate_seed(seed)
            if not result:
                raise InvalidSeedException(result.error_message)
            if seed in used:
                raise InvalidSeedException(f"Seed {seed} is used more than once")
            used.add(seed)

    # ========== Properties ==========

    @property
    def best_of(self) -> int:
        return self.config.best_of

    @property
    def private(self) -> bool:
        return self.config.private

    @property
    def generated(self) -> bool:
        """Whether the bracket tree exists."""
        return self.bracket is not None

    # ========== Team Management ==========

    def add_team(self, team: TeamABC) -> bool:
        """Add a team to the bracket.

        A private bracket consumes the team's invite.

        Returns:
            True if added, False if the bracket is generated, the team is
            already in it, or it is private and the team has no invite
        """
        if self.generated:
            logger.warning(f"Cannot add {team.name}: bracket {self.id} is generated")
            return False

        if team.id in self.teams:
            logger.warning(f"{team.name} ({team.id}) is already in bracket {self.id}")
            return False

        if self.private:
            if team.id not in self.invites:
                logger.warning(
                    f"Cannot add {team.name}: private bracket {self.id} needs an invite"
                )
                return False
            del self.invites[team.id]

        self.teams[team.id] = team
        logger.info(f"Added {team.name} ({team.id}) to bracket {self.id}")
        return True

    def remove_team(self, team_id: str) -> bool:
        """Remove a team and its seed.

        Returns:
            True if removed, False if absent or the bracket is generated
        """
        if self.generated or team_id not in self.teams:
            return False

        team = self.teams.pop(team_id)
        self.seeds.pop(team_id, None)
        logger.info(f"Removed {team.name} ({team_id}) from bracket {self.id}")
        return True

    def invite_team(self, team_id: str) -> Optional[BracketInvite]:
        """Create (or return the outstanding) invite for a team.

        Returns:
            The invite, or None if the id is invalid, the team is already in
            the bracket, or the bracket is generated
        """
        if self.generated or not validate_snowflake(team_id) or team_id in self.teams:
            logger.warning(f"Cannot invite {team_id!r} to bracket {self.id}")
            return None

        if team_id not in self.invites:
            invite = BracketInvite(str(self.snowflake_service.generate()), team_id)
            self.invites[team_id] = invite
            logger.debug(f"Invited {team_id} to bracket {self.id}: {invite.id}")
        return self.invites[team_id]

    def set_seed(self, team_id: str, seed: int) -> bool:
        """Seed a team, 1 being the top seed.

        Returns:
            True if set, False if the team is unknown, the seed is invalid or
            held by another team, or the bracket is generated
        """
        if self.generated or team_id not in self.teams:
            return False

        result = validate_seed(seed)
        if not result:
            logger.warning(result.error_message)
            return False

        if any(s == seed and t != team_id for t, s in self.seeds.items()):
            logger.warning(f"Seed {seed} is already taken in bracket {self.id}")
            return False

        self.seeds[team_id] = seed
        return True

    def set_best_of(self, best_of: int) -> bool:
        """Change the best-of used for series generated from now on."""
        if self.generated:
            return False

        result = validate_best_of(best_of)
        if not result:
            logger.warning(result.error_message)
            return False

        self.config.best_of = best_of
        return True

    def get_ordered_teams(self) -> List[TeamABC]:
        """Teams in seed order.

        Seeded teams come first by ascending seed, then unseeded teams in the
        order they joined. Bye placeholders always come last.
        """
        real = [t for t in self.teams.values() if not t.is_bye]
        placeholders = [t for t in self.teams.values() if t.is_bye]

        seeded = sorted(
            (t for t in real if t.id in self.seeds), key=lambda t: self.seeds[t.id]
        )
        unseeded = [t for t in real if t.id not in self.seeds]
        return seeded + unseeded + placeholders

    # ========== Generation ==========

    def generate(self) -> Structure:
        """Generate the bracket tree.

        A bracket is only ever generated once; later calls (or a builder
        resumed with a ``root``) return the existing tree.

        Raises:
            InvalidOperationException: If the bracket has no teams
        """
        if self.bracket is not None:
            logger.warning(f"Bracket {self.id} is already generated, not regenerating")
            return self.bracket

        self.bracket = self._build(self.get_ordered_teams())
        logger.info(
            f"Generated {self.bracket_type} bracket {self.id} "
            f"with {len(self.teams)} teams"
        )
        return self.bracket

    @abstractmethod
    def _build(self, ordered_teams: List[TeamABC]) -> Structure:
        """Build the tree for teams given best seed first."""
        raise NotImplementedError
