"""
Neighborhood primitives over binary ridge grids.

A grid is a rectangular 2-D boolean array where True marks a black
(ridge) pixel and False a white (background) pixel. Every function
here treats pixels outside the grid as white.
"""

import numpy as np
from typing import Optional, Sequence, Tuple


# =============================================================================
# NEIGHBOR CONVENTION
# =============================================================================
#
# The 8 neighbors of a pixel P are indexed clockwise starting directly
# above it:
#
#     7 0 1
#     6 P 2
#     5 4 3
#
# i.e. (N, NE, E, SE, S, SW, W, NW).
#
# Transition count:
# A(P) = number of white->black steps scanning 0..7 and wrapping 7->0.
# A(P) = 1 on a ridge ending or a removable boundary pixel,
# A(P) = 3 on a ridge bifurcation.
# =============================================================================

NEIGHBOR_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, 0),   # N
    (-1, 1),   # NE
    (0, 1),    # E
    (1, 1),    # SE
    (1, 0),    # S
    (1, -1),   # SW
    (0, -1),   # W
    (-1, -1),  # NW
)

NORTH, NORTH_EAST, EAST, SOUTH_EAST, SOUTH, SOUTH_WEST, WEST, NORTH_WEST = range(8)


def as_grid(image) -> np.ndarray:
    """
    Convert an array-like into a boolean grid.

    Args:
        image: Rectangular 2-D array-like (nested lists, 0/1 or bool array)

    Returns:
        Boolean numpy array

    Raises:
        ValueError: If the input is not two-dimensional
    """
    grid = np.asarray(image, dtype=bool)
    if grid.ndim != 2:
        raise ValueError(f"Grid must be 2-D, got shape {grid.shape}")
    return grid


def in_bounds(grid: np.ndarray, row: int, col: int) -> bool:
    """Whether (row, col) addresses a pixel of the grid."""
    height, width = grid.shape
    return 0 <= row < height and 0 <= col < width


def get_pixel(grid: np.ndarray, row: int, col: int) -> bool:
    """
    Read a pixel, treating anything outside the grid as white.

    Negative indices are out of bounds and do not wrap around.
    """
    if not in_bounds(grid, row, col):
        return False
    return bool(grid[row, col])


def neighbors(grid: np.ndarray, row: int, col: int) -> Optional[Tuple[bool, ...]]:
    """
    Get the 8 neighbors of a pixel in clockwise order starting from north.

    Args:
        grid: Binary grid
        row, col: Pixel coordinates

    Returns:
        Tuple (N, NE, E, SE, S, SW, W, NW) of neighbor values, or None
        when (row, col) itself lies outside the grid
    """
    if not in_bounds(grid, row, col):
        return None
    return tuple(
        get_pixel(grid, row + dr, col + dc) for dr, dc in NEIGHBOR_OFFSETS
    )


def black_count(neighbor_values: Sequence[bool]) -> int:
    """Count black (True) values among the neighbors."""
    return sum(1 for value in neighbor_values if value)


def transition_count(neighbor_values: Sequence[bool]) -> int:
    """
    Count white-to-black transitions around the neighborhood.

    The scan is circular, so the step from index 7 back to index 0
    is counted too.

    Args:
        neighbor_values: 8 neighbor values as returned by neighbors()

    Returns:
        Number of white->black transitions
    """
    count = 0
    n = len(neighbor_values)
    for i in range(n):
        if not neighbor_values[i] and neighbor_values[(i + 1) % n]:
            count += 1
    return count


def identical(grid_a: np.ndarray, grid_b: np.ndarray) -> bool:
    """
    Pixel-wise equality of two grids.

    Both grids are expected to have the same shape.
    """
    return bool(np.array_equal(grid_a, grid_b))


def copy_grid(grid: np.ndarray) -> np.ndarray:
    """Deep copy of a grid."""
    return np.array(grid, dtype=bool, copy=True)


def neighbor_planes(grid: np.ndarray) -> np.ndarray:
    """
    Vectorized neighbors() for every pixel at once.

    Plane k holds, for each pixel, the value of its k-th neighbor in
    the (N, NE, E, SE, S, SW, W, NW) order. Pixels beyond the border
    read as white.

    Args:
        grid: Binary grid of shape (H, W)

    Returns:
        Boolean array of shape (8, H, W)
    """
    grid = as_grid(grid)
    height, width = grid.shape
    padded = np.pad(grid, 1, mode='constant', constant_values=False)

    return np.stack([
        padded[1 + dr:1 + dr + height, 1 + dc:1 + dc + width]
        for dr, dc in NEIGHBOR_OFFSETS
    ])


def black_counts(
    grid: np.ndarray,
    planes: Optional[np.ndarray] = None
) -> np.ndarray:
    """Black-neighbor count of every pixel, shape (H, W)."""
    if planes is None:
        planes = neighbor_planes(grid)
    return planes.sum(axis=0)


def transition_counts(
    grid: np.ndarray,
    planes: Optional[np.ndarray] = None
) -> np.ndarray:
    """
    Circular transition count of every pixel, shape (H, W).

    Args:
        grid: Binary grid
        planes: Precomputed neighbor_planes(grid), if available

    Returns:
        Integer array of white->black transition counts
    """
    if planes is None:
        planes = neighbor_planes(grid)
    following = np.roll(planes, -1, axis=0)
    return np.sum(~planes & following, axis=0)
