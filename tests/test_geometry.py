import numpy as np
import pytest

from boids import InvalidConfigurationError, InvalidStateError, compute_shape
from boids.geometry import HALF_WIDTH, NOSE_LENGTH, build_triangles_numba


def test_default_dimensions_come_from_bird_size():
    assert NOSE_LENGTH == 25.0
    assert HALF_WIDTH == 10.0


def test_triangle_points_along_heading():
    triangle = compute_shape((10.0, 20.0), (3.0, 4.0))

    # unit heading (0.6, 0.8), perpendicular (0.8, -0.6)
    expected = np.array([
        [10.0 + 0.6 * 25, 20.0 + 0.8 * 25],
        [10.0 + 0.8 * 10, 20.0 - 0.6 * 10],
        [10.0 - 0.8 * 10, 20.0 + 0.6 * 10],
    ])
    np.testing.assert_allclose(triangle, expected, atol=1e-12)


def test_axis_aligned_heading():
    triangle = compute_shape((0.0, 0.0), (1.0, 0.0), nose_length=25.0, half_width=10.0)
    np.testing.assert_allclose(triangle, [[25.0, 0.0], [0.0, -10.0], [0.0, 10.0]], atol=1e-12)


def test_heading_length_does_not_change_shape():
    slow = compute_shape((5.0, 5.0), (0.3, 0.4))
    fast = compute_shape((5.0, 5.0), (3.0, 4.0))
    np.testing.assert_allclose(slow, fast, atol=1e-12)


def test_triangle_is_isosceles():
    position = np.array([100.0, 50.0])
    triangle = compute_shape(position, (-2.0, 7.0), nose_length=6.0, half_width=2.0)

    apex, right, left = triangle
    assert np.linalg.norm(apex - position) == pytest.approx(6.0)
    assert np.linalg.norm(right - position) == pytest.approx(2.0)
    assert np.linalg.norm(left - position) == pytest.approx(2.0)
    np.testing.assert_allclose((right + left) / 2, position, atol=1e-12)


@pytest.mark.parametrize("heading", [(0.0, 0.0), (np.nan, 1.0), (np.inf, 0.0)])
def test_degenerate_heading_is_rejected(heading):
    with pytest.raises(InvalidStateError):
        compute_shape((0.0, 0.0), heading)


def test_wrong_dimensions_are_rejected():
    with pytest.raises(InvalidConfigurationError):
        compute_shape((0.0, 0.0, 0.0), (1.0, 0.0))
    with pytest.raises(InvalidConfigurationError):
        compute_shape((0.0, 0.0), [[1.0, 0.0]])


def test_batch_matches_single_shape():
    rng = np.random.default_rng(4)
    positions = rng.uniform(0, 500, (16, 2))
    headings = rng.uniform(-3, 3, (16, 2)) + 0.01
    triangles = np.zeros((16, 3, 2))

    build_triangles_numba(positions, headings, triangles, 25.0, 10.0, 16)

    for i in range(16):
        np.testing.assert_allclose(
            triangles[i], compute_shape(positions[i], headings[i], 25.0, 10.0), atol=1e-12
        )
