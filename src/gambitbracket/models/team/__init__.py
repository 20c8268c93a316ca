from gambitbracket.models.team.abc_team import TeamABC
from gambitbracket.models.team.team import ByeTeam, Team

__all__ = [
    "TeamABC",
    "Team",
    "ByeTeam",
]
