from gambitbracket.models.brackets.structures.structure import Finale, Structure

__all__ = ["Structure", "Finale"]
