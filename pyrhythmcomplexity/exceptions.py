class TimingLoadError(Exception):
    """Raised when a note timing file cannot be loaded or is invalid."""


class NotEnoughObjectsError(Exception):
    """Raised when a timing sequence is too short to produce difficulty objects."""
