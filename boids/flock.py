"""Flock state and per-frame update - all-pairs neighbor scan with Numba JIT."""

import math
from dataclasses import dataclass
import numpy as np
from numba import njit, prange

from config import boids as config
from .errors import InvalidConfigurationError, InvalidStateError
from .geometry import build_triangles_numba


# ============================================================================
# NUMBA JIT-COMPILED STEERING FUNCTIONS
# ============================================================================

@njit(parallel=True, cache=True)
def compute_steering_numba(
    positions: np.ndarray,
    headings: np.ndarray,
    num_vicinity: np.ndarray,
    num_too_close: np.ndarray,
    cohesion: np.ndarray,
    alignment: np.ndarray,
    separation: np.ndarray,
    vicinity_radius: float,
    too_close_radius: float,
    mass_attraction_factor: float,
    alignment_factor: float,
    repulsion_factor: float,
    num_boids: int
):
    """
    Numba JIT-compiled neighbor scan over all pairs.

    Reads positions and headings only; every bird writes its counts and
    steering terms into its own row of the output arrays.
    """
    vicinity_sq = vicinity_radius * vicinity_radius
    too_close_sq = too_close_radius * too_close_radius

    for i in prange(num_boids):
        px = positions[i, 0]
        py = positions[i, 1]

        mass_x, mass_y = 0.0, 0.0
        dir_x, dir_y = 0.0, 0.0
        rep_x, rep_y = 0.0, 0.0
        n_vicinity = 0
        n_too_close = 0

        for j in range(num_boids):
            if i == j:
                continue

            dx = px - positions[j, 0]
            dy = py - positions[j, 1]
            dist_sq = dx * dx + dy * dy

            if dist_sq < vicinity_sq:
                mass_x += positions[j, 0]
                mass_y += positions[j, 1]
                dir_x += headings[j, 0]
                dir_y += headings[j, 1]
                n_vicinity += 1

            if dist_sq < too_close_sq:
                # Points from the other bird towards this one
                rep_x += dx
                rep_y += dy
                n_too_close += 1

        num_vicinity[i] = n_vicinity
        num_too_close[i] = n_too_close

        if n_vicinity > 0:
            cohesion[i, 0] = (mass_x / n_vicinity - px) * mass_attraction_factor
            cohesion[i, 1] = (mass_y / n_vicinity - py) * mass_attraction_factor
            alignment[i, 0] = dir_x / n_vicinity * alignment_factor
            alignment[i, 1] = dir_y / n_vicinity * alignment_factor
        else:
            cohesion[i, 0] = 0.0
            cohesion[i, 1] = 0.0
            alignment[i, 0] = 0.0
            alignment[i, 1] = 0.0

        if n_too_close > 0:
            separation[i, 0] = rep_x / n_too_close * repulsion_factor
            separation[i, 1] = rep_y / n_too_close * repulsion_factor
        else:
            separation[i, 0] = 0.0
            separation[i, 1] = 0.0


@njit(parallel=True, cache=True)
def update_physics_numba(
    positions: np.ndarray,
    headings: np.ndarray,
    cohesion: np.ndarray,
    alignment: np.ndarray,
    separation: np.ndarray,
    next_positions: np.ndarray,
    next_headings: np.ndarray,
    width: float,
    height: float,
    margin: float,
    turn_speed: float,
    min_speed: float,
    max_speed: float,
    step_scale: float,
    num_boids: int
) -> int:
    """
    Numba JIT-compiled heading and position update.

    Writes into ``next_positions`` and ``next_headings`` and leaves the
    current state untouched. Returns the number of birds that would be left
    with a zero or non-finite heading.
    """
    degenerate = 0

    for i in prange(num_boids):
        hx = headings[i, 0] + cohesion[i, 0] + alignment[i, 0] + separation[i, 0]
        hy = headings[i, 1] + cohesion[i, 1] + alignment[i, 1] + separation[i, 1]

        # Turn back towards the interior, using the position before this step's move
        px = positions[i, 0]
        py = positions[i, 1]
        if px < margin:
            hx += turn_speed
        if px > width - margin:
            hx -= turn_speed
        if py < margin:
            hy += turn_speed
        if py > height - margin:
            hy -= turn_speed

        speed = math.sqrt(hx * hx + hy * hy)
        if speed == 0.0 or not math.isfinite(speed):
            degenerate += 1
        elif speed < min_speed:
            scale = min_speed / speed
            hx *= scale
            hy *= scale
        elif speed > max_speed:
            scale = max_speed / speed
            hx *= scale
            hy *= scale

        next_headings[i, 0] = hx
        next_headings[i, 1] = hy
        next_positions[i, 0] = px + hx * step_scale
        next_positions[i, 1] = py + hy * step_scale

    return degenerate


# ============================================================================
# PARAMETERS
# ============================================================================

@dataclass(frozen=True)
class FlockParams:
    """
    Construction-time steering constants.

    Attributes:
        vicinity_radius: Neighbors closer than this feed cohesion and alignment
        too_close_radius: Neighbors closer than this feed separation
        mass_attraction_factor: Weight of the pull towards the local centroid
        alignment_factor: Weight of the local mean heading
        repulsion_factor: Weight of the push away from crowding neighbors
        turn_speed: Heading nudge applied inside the margin
        min_speed: Lower bound of the heading magnitude
        max_speed: Upper bound of the heading magnitude
        step_scale: Position advance per unit of heading per frame
        nose_length: Apex distance of the rendered triangle
        half_width: Base half-width of the rendered triangle
    """
    vicinity_radius: float = config.BOIDS["vicinity_radius"]
    too_close_radius: float = config.BOIDS["too_close_radius"]
    mass_attraction_factor: float = config.BOIDS["mass_attraction_factor"]
    alignment_factor: float = config.BOIDS["alignment_factor"]
    repulsion_factor: float = config.BOIDS["repulsion_factor"]
    turn_speed: float = config.BOIDS["turn_speed"]
    min_speed: float = config.BOIDS["min_speed"]
    max_speed: float = config.BOIDS["max_speed"]
    step_scale: float = config.BOIDS["step_scale"]
    nose_length: float = config.BOIDS["nose_length"]
    half_width: float = config.BOIDS["half_width"]

    def validate(self):
        """Raise InvalidConfigurationError if the constants cannot drive a flock."""
        if not 0 < self.too_close_radius < self.vicinity_radius:
            raise InvalidConfigurationError(
                f"Need 0 < too_close_radius < vicinity_radius, got "
                f"{self.too_close_radius} and {self.vicinity_radius}"
            )
        if not 0 < self.min_speed <= self.max_speed:
            raise InvalidConfigurationError(
                f"Need 0 < min_speed <= max_speed, got {self.min_speed} and {self.max_speed}"
            )
        if self.step_scale <= 0:
            raise InvalidConfigurationError(f"step_scale must be positive, got {self.step_scale}")
        if self.nose_length <= 0 or self.half_width <= 0:
            raise InvalidConfigurationError(
                f"Triangle dimensions must be positive, got {self.nose_length} and {self.half_width}"
            )


# ============================================================================
# FLOCK CLASS
# ============================================================================

class Flock:
    """
    Fixed-size 2D flock stored as parallel arrays and advanced one frame at a time.

    Birds are identified by their index. ``positions`` and ``headings`` are
    (N, 2) arrays, ``shapes`` is (N, 3, 2); all three are handed out as
    read-only views that stay valid until the next ``step()``.
    """

    def __init__(
        self,
        num_boids: int = config.BOIDS["count"],
        width: float = config.WINDOW["width"],
        height: float = config.WINDOW["height"],
        margin: float = config.BOIDS["margin"],
        params: FlockParams = None,
        seed: int = None
    ):
        self._setup(num_boids, width, height, margin, params)
        self._rng = np.random.default_rng(seed)
        self._scatter()

        print(f"[Flock] Initialized {self.num_boids:,} birds in a "
              f"{self.width:g}x{self.height:g} world")

    def _setup(self, num_boids, width, height, margin, params):
        """Validate the world and allocate bird arrays."""
        self.params = params if params is not None else FlockParams()
        self.params.validate()

        if num_boids < 1:
            raise InvalidConfigurationError(f"Need at least one bird, got {num_boids}")
        if margin < 0:
            raise InvalidConfigurationError(f"margin must not be negative, got {margin}")
        if width <= 2 * margin or height <= 2 * margin:
            raise InvalidConfigurationError(
                f"World {width}x{height} is too small for margin {margin}"
            )

        self.num_boids = int(num_boids)
        self.width = float(width)
        self.height = float(height)
        self.margin = float(margin)
        self.frame = 0

        # Bird data
        self._positions = np.zeros((self.num_boids, 2), dtype=np.float64)
        self._headings = np.zeros((self.num_boids, 2), dtype=np.float64)
        self._triangles = np.zeros((self.num_boids, 3, 2), dtype=np.float64)

        # Per-step aggregates, one row per bird
        self._num_vicinity = np.zeros(self.num_boids, dtype=np.int64)
        self._num_too_close = np.zeros(self.num_boids, dtype=np.int64)
        self._cohesion = np.zeros((self.num_boids, 2), dtype=np.float64)
        self._alignment = np.zeros((self.num_boids, 2), dtype=np.float64)
        self._separation = np.zeros((self.num_boids, 2), dtype=np.float64)

        # Next-frame state, committed only once the whole flock is valid
        self._next_positions = np.zeros((self.num_boids, 2), dtype=np.float64)
        self._next_headings = np.zeros((self.num_boids, 2), dtype=np.float64)

        self._warmup_numba()

    @classmethod
    def from_state(
        cls,
        positions,
        headings,
        width: float,
        height: float,
        margin: float,
        params: FlockParams = None
    ) -> "Flock":
        """
        Build a flock from explicit positions and headings.

        Args:
            positions: (N, 2) array-like of bird positions
            headings: (N, 2) array-like of non-zero bird headings
            width: World width
            height: World height
            margin: Distance from each edge where birds start turning
            params: Steering constants (defaults from config)

        Raises:
            InvalidConfigurationError: On malformed arrays or world bounds
            InvalidStateError: If any heading is zero or not finite
        """
        positions = np.array(positions, dtype=np.float64)
        headings = np.array(headings, dtype=np.float64)

        if positions.ndim != 2 or positions.shape[1] != 2 or positions.shape != headings.shape:
            raise InvalidConfigurationError(
                f"positions and headings must both be (N, 2), got {positions.shape} and {headings.shape}"
            )
        if not np.all(np.isfinite(positions)):
            raise InvalidConfigurationError("positions must be finite")

        speeds = np.hypot(headings[:, 0], headings[:, 1])
        if np.any(speeds == 0.0) or not np.all(np.isfinite(speeds)):
            raise InvalidStateError("Every heading must be finite and non-zero")

        flock = cls.__new__(cls)
        flock._setup(len(positions), width, height, margin, params)
        flock._rng = np.random.default_rng()
        flock._positions[:] = positions
        flock._headings[:] = headings
        flock._refresh_shapes()

        print(f"[Flock] Loaded {flock.num_boids:,} birds into a "
              f"{flock.width:g}x{flock.height:g} world")
        return flock

    def __len__(self) -> int:
        return self.num_boids

    def _warmup_numba(self):
        """Pre-compile Numba functions."""
        n = 4
        pos = np.linspace(0.0, 10.0, n * 2).reshape(n, 2)
        head = np.linspace(0.5, 1.5, n * 2).reshape(n, 2)
        next_pos = np.zeros((n, 2), dtype=np.float64)
        next_head = np.zeros((n, 2), dtype=np.float64)
        tri = np.zeros((n, 3, 2), dtype=np.float64)
        counts_a = np.zeros(n, dtype=np.int64)
        counts_b = np.zeros(n, dtype=np.int64)
        f1 = np.zeros((n, 2), dtype=np.float64)
        f2 = np.zeros((n, 2), dtype=np.float64)
        f3 = np.zeros((n, 2), dtype=np.float64)

        compute_steering_numba(
            pos, head, counts_a, counts_b, f1, f2, f3,
            5.0, 1.0, 0.001, 0.05, 0.1, n
        )
        update_physics_numba(
            pos, head, f1, f2, f3, next_pos, next_head,
            100.0, 100.0, 10.0, 0.1, 1.0, 3.0, 2.0, n
        )
        build_triangles_numba(pos, head, tri, 2.5, 1.0, n)

    def _scatter(self):
        """Place birds uniformly inside the margin with random unit headings."""
        n = self.num_boids
        self._positions[:, 0] = self._rng.uniform(self.margin, self.width - self.margin, n)
        self._positions[:, 1] = self._rng.uniform(self.margin, self.height - self.margin, n)

        angles = self._rng.uniform(0.0, 2.0 * np.pi, n)
        self._headings[:, 0] = np.cos(angles)
        self._headings[:, 1] = np.sin(angles)

        self._refresh_shapes()

    def _refresh_shapes(self):
        build_triangles_numba(
            self._positions,
            self._headings,
            self._triangles,
            float(self.params.nose_length),
            float(self.params.half_width),
            self.num_boids
        )

    def reset(self, seed: int = None):
        """Scatter the same birds again; a seed restarts the random stream."""
        if seed is not None:
            self._rng = np.random.default_rng(seed)
        self.frame = 0
        self._num_vicinity.fill(0)
        self._num_too_close.fill(0)
        self._cohesion.fill(0)
        self._alignment.fill(0)
        self._separation.fill(0)
        self._scatter()

    def step(self):
        """
        Advance every bird by one frame.

        All steering terms are computed from the state as it was when the
        call began; headings and positions are committed afterwards.
        """
        p = self.params

        compute_steering_numba(
            self._positions,
            self._headings,
            self._num_vicinity,
            self._num_too_close,
            self._cohesion,
            self._alignment,
            self._separation,
            float(p.vicinity_radius),
            float(p.too_close_radius),
            float(p.mass_attraction_factor),
            float(p.alignment_factor),
            float(p.repulsion_factor),
            self.num_boids
        )

        degenerate = update_physics_numba(
            self._positions,
            self._headings,
            self._cohesion,
            self._alignment,
            self._separation,
            self._next_positions,
            self._next_headings,
            self.width,
            self.height,
            self.margin,
            float(p.turn_speed),
            float(p.min_speed),
            float(p.max_speed),
            float(p.step_scale),
            self.num_boids
        )
        if degenerate:
            raise InvalidStateError(
                f"{degenerate} bird(s) would end frame {self.frame + 1} with a zero or non-finite heading"
            )

        np.copyto(self._positions, self._next_positions)
        np.copyto(self._headings, self._next_headings)
        self._refresh_shapes()
        self.frame += 1

    @staticmethod
    def _read_only(array: np.ndarray) -> np.ndarray:
        view = array.view()
        view.flags.writeable = False
        return view

    @property
    def positions(self) -> np.ndarray:
        return self._read_only(self._positions)

    @property
    def headings(self) -> np.ndarray:
        return self._read_only(self._headings)

    @property
    def shapes(self) -> np.ndarray:
        """Triangles in bird order, (N, 3, 2): apex, right corner, left corner."""
        return self._read_only(self._triangles)

    @property
    def num_vicinity(self) -> np.ndarray:
        """Vicinity neighbor count of each bird during the last step."""
        return self._read_only(self._num_vicinity)

    @property
    def num_too_close(self) -> np.ndarray:
        """Too-close neighbor count of each bird during the last step."""
        return self._read_only(self._num_too_close)

    @property
    def cohesion(self) -> np.ndarray:
        return self._read_only(self._cohesion)

    @property
    def alignment(self) -> np.ndarray:
        return self._read_only(self._alignment)

    @property
    def separation(self) -> np.ndarray:
        return self._read_only(self._separation)
