from gambitbracket.models.brackets.progressions.placement import (
    GroupPlacement,
    Placement,
    SinglePlacement,
)
from gambitbracket.models.brackets.progressions.progression import Progression
from gambitbracket.models.brackets.progressions.series import Series

__all__ = [
    "Progression",
    "Series",
    "Placement",
    "SinglePlacement",
    "GroupPlacement",
]
