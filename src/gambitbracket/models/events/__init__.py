from gambitbracket.models.events.series_game import SeriesGame

__all__ = ["SeriesGame"]
