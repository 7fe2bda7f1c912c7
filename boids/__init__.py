"""2D flocking simulation core."""

from .errors import FlockError, InvalidConfigurationError, InvalidStateError
from .geometry import compute_shape
from .flock import Flock, FlockParams

__all__ = [
    "Flock",
    "FlockParams",
    "compute_shape",
    "FlockError",
    "InvalidConfigurationError",
    "InvalidStateError",
]
