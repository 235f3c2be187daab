"""Tests for regression-based minutia orientation."""

import math

import numpy as np
import pytest

from ridgematch.minutiae.orientation import (
    compute_angle,
    compute_orientation,
    compute_slope,
    round_half_up,
)


def _mask(shape, pixels):
    mask = np.zeros(shape, dtype=bool)
    for row, col in pixels:
        mask[row, col] = True
    return mask


@pytest.fixture
def horizontal_ridge():
    grid = np.zeros((11, 20), dtype=bool)
    grid[5, 5:13] = True
    return grid


@pytest.fixture
def vertical_ridge():
    grid = np.zeros((14, 11), dtype=bool)
    grid[3:11, 5] = True
    return grid


@pytest.fixture
def diagonal_ridge():
    grid = np.zeros((12, 12), dtype=bool)
    for k in range(6):
        grid[10 - k, 3 + k] = True
    return grid


class TestSlope:

    def test_horizontal_slope_is_zero(self, horizontal_ridge):
        assert compute_slope(horizontal_ridge, 5, 5) == 0.0

    def test_vertical_slope_is_infinite(self, vertical_ridge):
        assert compute_slope(vertical_ridge, 3, 5) == math.inf

    def test_diagonal_slope(self, diagonal_ridge):
        assert compute_slope(diagonal_ridge, 10, 3) == pytest.approx(1.0)

    def test_steep_fit_uses_syy_over_sxy(self):
        # x = 1, y = 3 relative to (5, 5): Sxx = 1, Syy = 9, Sxy = 3
        region = _mask((10, 10), [(5, 5), (2, 6)])
        assert compute_slope(region, 5, 5) == pytest.approx(3.0)

    def test_steep_fit_with_zero_sxy_is_infinite(self):
        # (x, y) = (1, 2) and (-1, 2): Sxy = 0, Sxx = 2 < Syy = 8
        region = _mask((10, 10), [(5, 5), (3, 6), (3, 4)])
        assert compute_slope(region, 5, 5) == math.inf


class TestAngle:

    def test_infinite_slope_majority_above(self):
        region = _mask((10, 10), [(5, 5), (4, 5), (3, 5)])
        assert compute_angle(region, 5, 5, math.inf) == pytest.approx(math.pi / 2)

    def test_infinite_slope_majority_below(self):
        region = _mask((10, 10), [(5, 5), (6, 5), (7, 5)])
        assert compute_angle(region, 5, 5, math.inf) == pytest.approx(-math.pi / 2)

    def test_infinite_slope_tie_points_down(self):
        region = _mask((10, 10), [(5, 5), (6, 5)])
        assert compute_angle(region, 5, 5, math.inf) == pytest.approx(-math.pi / 2)

    def test_positive_angle_flipped_when_below(self, diagonal_ridge):
        angle = compute_angle(diagonal_ridge, 5, 8, 1.0)
        assert angle == pytest.approx(math.pi / 4 + math.pi)

    def test_zero_slope_keeps_zero_angle(self, horizontal_ridge):
        assert compute_angle(horizontal_ridge, 5, 12, 0.0) == 0.0


class TestOrientation:

    def test_horizontal_ridge(self, horizontal_ridge):
        assert compute_orientation(horizontal_ridge, 5, 5, 16) == 0
        assert compute_orientation(horizontal_ridge, 5, 12, 16) == 0

    def test_vertical_ridge_ends(self, vertical_ridge):
        # top end: ridge runs downwards
        assert compute_orientation(vertical_ridge, 3, 5, 16) == 270
        # bottom end: ridge runs upwards
        assert compute_orientation(vertical_ridge, 10, 5, 16) == 90

    def test_diagonal_ridge_ends(self, diagonal_ridge):
        assert compute_orientation(diagonal_ridge, 10, 3, 16) == 45
        assert compute_orientation(diagonal_ridge, 5, 8, 16) == 225

    def test_orientation_range_on_random_grids(self):
        rng = np.random.default_rng(11)
        grid = rng.random((20, 20)) > 0.5
        for row in range(20):
            for col in range(20):
                orientation = compute_orientation(grid, row, col, 4)
                assert 0 <= orientation < 360
                assert isinstance(orientation, int)


@pytest.mark.parametrize("value,expected", [
    (2.5, 3),
    (2.4999, 2),
    (-2.5, -2),
    (-2.6, -3),
    (359.5, 360),
    (0.0, 0),
])
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected
