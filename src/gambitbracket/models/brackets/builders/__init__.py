from gambitbracket.models.brackets.builders.bracket_builder import BracketBuilder
from gambitbracket.models.brackets.builders.bracket_config import (
    BracketConfig,
    BracketInvite,
)
from gambitbracket.models.brackets.builders.single_elimination import (
    SingleEliminationBuilder,
    build_single_elimination,
)

__all__ = [
    "BracketBuilder",
    "BracketConfig",
    "BracketInvite",
    "SingleEliminationBuilder",
    "build_single_elimination",
]
