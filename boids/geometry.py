"""Triangle silhouettes for birds, pointing along their heading."""

import math
import numpy as np
from numba import njit, prange

from config import boids as config
from .errors import InvalidConfigurationError, InvalidStateError


NOSE_LENGTH = float(config.BOIDS["nose_length"])
HALF_WIDTH = float(config.BOIDS["half_width"])


@njit(cache=True)
def triangle_vertices(
    px: float, py: float,
    hx: float, hy: float,
    nose_length: float,
    half_width: float,
    out: np.ndarray
):
    """
    Write the triangle for one bird into ``out`` (shape (3, 2)).

    Row 0 is the apex ahead of the bird, rows 1 and 2 the base corners on
    either side of its position. The heading must be non-zero.
    """
    length = math.sqrt(hx * hx + hy * hy)
    ux = hx / length
    uy = hy / length

    # Perpendicular of (ux, uy)
    perp_x = uy * half_width
    perp_y = -ux * half_width

    out[0, 0] = px + ux * nose_length
    out[0, 1] = py + uy * nose_length
    out[1, 0] = px + perp_x
    out[1, 1] = py + perp_y
    out[2, 0] = px - perp_x
    out[2, 1] = py - perp_y


@njit(parallel=True, cache=True)
def build_triangles_numba(
    positions: np.ndarray,
    headings: np.ndarray,
    triangles: np.ndarray,
    nose_length: float,
    half_width: float,
    num_boids: int
):
    """Numba JIT-compiled triangle building for the whole flock."""
    for i in prange(num_boids):
        triangle_vertices(
            positions[i, 0], positions[i, 1],
            headings[i, 0], headings[i, 1],
            nose_length, half_width,
            triangles[i]
        )


def compute_shape(
    position,
    heading,
    nose_length: float = NOSE_LENGTH,
    half_width: float = HALF_WIDTH
) -> np.ndarray:
    """
    Build the triangle silhouette of a single bird.

    Args:
        position: 2D point of the bird
        heading: 2D heading vector, any non-zero length
        nose_length: Distance from the position to the apex
        half_width: Distance from the position to each base corner

    Returns:
        (3, 2) float64 array holding apex, right corner and left corner

    Raises:
        InvalidStateError: If the heading is zero or not finite
        InvalidConfigurationError: If position or heading is not a 2D vector
    """
    position = np.asarray(position, dtype=np.float64)
    heading = np.asarray(heading, dtype=np.float64)
    if position.shape != (2,) or heading.shape != (2,):
        raise InvalidConfigurationError(
            f"position and heading must be 2D vectors, got {position.shape} and {heading.shape}"
        )

    length = math.hypot(heading[0], heading[1])
    if length == 0.0 or not math.isfinite(length):
        raise InvalidStateError(f"Cannot orient a triangle along heading {tuple(heading)}")

    triangle = np.empty((3, 2), dtype=np.float64)
    triangle_vertices(
        float(position[0]), float(position[1]),
        float(heading[0]), float(heading[1]),
        float(nose_length), float(half_width),
        triangle
    )
    return triangle
