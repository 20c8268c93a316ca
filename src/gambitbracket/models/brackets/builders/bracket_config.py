"""BracketConfig and BracketInvite data classes."""

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

from dataclasses import dataclass
from typing import Any, Dict

from gambitbracket.constants import DEFAULT_BEST_OF, DEFAULT_BRACKET_TYPE


@dataclass
class BracketConfig:
    """Bracket configuration settings.

    Attributes
    ----------
    best_of : int
        Number of games every series of the bracket is played over.
    private : bool
        Private brackets only accept teams holding an invite.
    bracket_type : str
        Builder used to generate the bracket. Only "single_elimination" is
        supported.
    """

    best_of: int = DEFAULT_BEST_OF
    private: bool = False
    bracket_type: str = DEFAULT_BRACKET_TYPE

    def to_dict(self) -> Dict[str, Any]:
        """Serialize configuration to dictionary."""
        return {
            "best_of": self.best_of,
            "private": self.private,
            "bracket_type": self.bracket_type,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BracketConfig":
        """Deserialize configuration from dictionary."""
        return cls(
            best_of=data.get("best_of", DEFAULT_BEST_OF),
            private=data.get("private", False),
            bracket_type=data.get("bracket_type", DEFAULT_BRACKET_TYPE),
        )


@dataclass(frozen=True)
class BracketInvite:
    """An invitation for a team to join a private bracket.

    Attributes
    ----------
    id : str
        Snowflake identifier of the invite.
    team_id : str
        The invited team.
    """

    id: str
    team_id: str
