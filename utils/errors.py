class UnknownItemError(LookupError):
    """Raised when an item id is not present in the loaded catalog."""


class StateWriteError(OSError):
    """Raised when the state document could not be committed to disk."""
