"""
Minutia orientation by local linear regression.

The ridge pixels connected to a minutia are fitted with a line through
the minutia; the side of the perpendicular holding most of the pixels
decides which of the two line directions the minutia points to.
"""

import math

import numpy as np

from ridgematch.minutiae.region_growing import connected_region


# =============================================================================
# MATHEMATICAL BACKGROUND
# =============================================================================
#
# Coordinates are centered on the minutia (row, col) with the row axis
# flipped so that y grows upwards:
#
#     x = px - col,   y = row - py
#
# Origin-anchored least squares:
#     Sxy = Σ x·y,  Sxx = Σ x²,  Syy = Σ y²
#
#     slope = +∞          if Sxx = 0
#           = Sxy / Sxx   if Sxx >= Syy
#           = Syy / Sxy   otherwise
#
# Direction:
# A pixel is "above" when y >= (-1 / slope) · x, i.e. on the upper side of
# the perpendicular through the minutia. θ = atan(slope) is flipped by π
# when the majority of pixels sits on the opposite side.
# =============================================================================


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def _centered_coordinates(region: np.ndarray, row: int, col: int):
    ys, xs = np.nonzero(region)
    return xs.astype(np.int64) - col, row - ys.astype(np.int64)


def compute_slope(region: np.ndarray, row: int, col: int) -> float:
    """
    Compute the slope of a minutia by linear regression.

    Args:
        region: Connected region mask, see connected_region()
        row, col: Minutia coordinates

    Returns:
        Slope of the fitted line (math.inf for a vertical fit)
    """
    x, y = _centered_coordinates(region, row, col)

    sum_xy = float(np.sum(x * y))
    sum_xx = float(np.sum(x * x))
    sum_yy = float(np.sum(y * y))

    if sum_xx == 0:
        return math.inf
    if sum_xx >= sum_yy:
        return sum_xy / sum_xx
    if sum_xy == 0:
        return math.inf
    return sum_yy / sum_xy


def compute_angle(region: np.ndarray, row: int, col: int, slope: float) -> float:
    """
    Compute the orientation of a minutia in radians.

    Args:
        region: Connected region mask
        row, col: Minutia coordinates
        slope: Slope as returned by compute_slope()

    Returns:
        Angle in radians, in (-π/2, 3π/2)
    """
    x, y = _centered_coordinates(region, row, col)

    # slope 0 gives a vertical perpendicular; the pixel at x == 0 then
    # compares against NaN and is counted below
    perpendicular = -1.0 / slope if slope != 0 else -math.inf
    with np.errstate(invalid='ignore'):
        above = y >= perpendicular * x

    up_count = int(np.count_nonzero(above))
    down_count = int(above.size - up_count)

    if math.isinf(slope):
        return math.pi / 2 if up_count > down_count else -math.pi / 2

    angle = math.atan(slope)
    if angle > 0 and down_count > up_count:
        return angle + math.pi
    if angle < 0 and down_count < up_count:
        return angle + math.pi
    return angle


def compute_orientation(grid: np.ndarray, row: int, col: int, distance: int) -> int:
    """
    Compute the orientation of the minutia at (row, col).

    Args:
        grid: Skeleton grid
        row, col: Minutia coordinates
        distance: Half-width of the region considered around the minutia

    Returns:
        Orientation in whole degrees, in [0, 360)
    """
    region = connected_region(grid, row, col, distance)
    slope = compute_slope(region, row, col)
    angle = compute_angle(region, row, col, slope)

    degrees = math.degrees(angle)
    if degrees < 0:
        degrees += 360

    return round_half_up(degrees) % 360
