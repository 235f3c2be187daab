"""
Bounded region growth around a minutia.

Collects the ridge pixels connected to a minutia inside a square
window. The resulting mask feeds the orientation regression.
"""

import numpy as np
from typing import Tuple
from scipy import ndimage

from ridgematch.minutiae.grid import as_grid, identical


# 8-connectivity: a pixel joins the region if any of its 8 neighbors is in it
EIGHT_CONNECTED = np.ones((3, 3), dtype=bool)


def window_bounds(
    shape: Tuple[int, int],
    row: int,
    col: int,
    distance: int
) -> Tuple[int, int, int, int]:
    """
    Square window of half-width `distance` around (row, col).

    Args:
        shape: Grid shape (H, W)
        row, col: Window center
        distance: Half-width of the square

    Returns:
        Inclusive bounds (row_min, row_max, col_min, col_max) clamped to the grid
    """
    height, width = shape
    return (
        max(row - distance, 0),
        min(row + distance, height - 1),
        max(col - distance, 0),
        min(col + distance, width - 1),
    )


def connected_region(
    grid: np.ndarray,
    row: int,
    col: int,
    distance: int
) -> np.ndarray:
    """
    Compute the pixels connected to (row, col) within a square window.

    Algorithm:
    ----------
    1. Seed a mask with (row, col) only
    2. Add every black pixel inside the window that has a neighbor
       already in the mask
    3. Repeat until a pass leaves the mask unchanged

    Pixels outside the window are never added, even when they are
    reachable through black pixels inside it. The seed is part of the
    region even if it is white.

    Args:
        grid: Binary grid (ridges = True)
        row, col: Seed pixel, must lie inside the grid
        distance: Half-width of the square window

    Returns:
        Boolean mask with the same shape as the grid
    """
    grid = as_grid(grid)
    row_min, row_max, col_min, col_max = window_bounds(
        grid.shape, row, col, distance
    )
    window = grid[row_min:row_max + 1, col_min:col_max + 1]

    region = np.zeros(window.shape, dtype=bool)
    region[row - row_min, col - col_min] = True

    while True:
        touching = ndimage.binary_dilation(region, structure=EIGHT_CONNECTED)
        grown = region | (window & touching)
        if identical(grown, region):
            break
        region = grown

    mask = np.zeros(grid.shape, dtype=bool)
    mask[row_min:row_max + 1, col_min:col_max + 1] = region
    return mask
