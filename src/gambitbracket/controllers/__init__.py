from gambitbracket.controllers.series_recorder import SeriesRecorder

__all__ = ["SeriesRecorder"]
