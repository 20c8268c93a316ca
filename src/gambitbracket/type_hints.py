"""Type hints used in Gambit Bracket."""

from typing import Dict, Literal

# Snowflake id of a team
TeamId = str

# Points per team inside a single game
Scores = Dict[TeamId, int]
# Team id -> seed (1 = top seed)
Seeds = Dict[TeamId, int]

# Ways a series can be decided
Resolution = Literal["score", "forfeit", "bye"]

#  LocalWords:  TeamId
