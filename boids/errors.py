"""Exceptions raised by the flock simulator."""


class FlockError(Exception):
    """Base class for flock errors."""


class InvalidConfigurationError(FlockError, ValueError):
    """Construction-time input the simulator cannot work with."""


class InvalidStateError(FlockError, RuntimeError):
    """A bird ended up with a zero or non-finite heading."""
