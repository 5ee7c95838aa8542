class InvalidArgument(ValueError):
    """Raised when a game component receives input that breaks its contract."""
