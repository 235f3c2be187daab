"""
Skeletonization of binary ridge grids.

This module reduces ridge regions to single-pixel-wide skeletons, which
is a prerequisite for minutiae extraction.
"""

import logging
from typing import Optional

import numpy as np

from ridgematch.minutiae.grid import (
    NORTH, EAST, SOUTH, WEST,
    as_grid,
    black_counts,
    copy_grid,
    identical,
    neighbor_planes,
    transition_counts,
)


logger = logging.getLogger(__name__)


# =============================================================================
# MATHEMATICAL BACKGROUND
# =============================================================================
#
# Two-substep parallel thinning:
# -----------------------------
# For a black pixel P with neighbors (N, NE, E, SE, S, SW, W, NW):
#
# P is removable in either substep when
# - 2 <= B(P) <= 6   (B = number of black neighbors)
# - A(P) = 1         (A = white->black transitions, circular)
#
# Substep 0 additionally requires
# - not (N and E and S)
# - not (E and S and W)
#
# Substep 1 additionally requires
# - not (N and S and W)
# - not (N and E and W)
#
# All pixels of a substep are judged against the same input grid and
# removed together. A full iteration is substep 0 followed by substep 1;
# iterations repeat until one leaves the grid unchanged.
# =============================================================================


def removable_pixels(grid: np.ndarray, step: int) -> np.ndarray:
    """
    Mark the pixels a thinning substep would remove.

    Args:
        grid: Binary grid (ridges = True)
        step: Substep number (0 or 1)

    Returns:
        Boolean mask of removal candidates

    Raises:
        ValueError: If step is not 0 or 1
    """
    if step not in (0, 1):
        raise ValueError(f"Unknown thinning step: {step}")

    grid = as_grid(grid)
    planes = neighbor_planes(grid)
    n, e, s, w = planes[NORTH], planes[EAST], planes[SOUTH], planes[WEST]

    b = black_counts(grid, planes)
    a = transition_counts(grid, planes)
    candidates = grid & (b >= 2) & (b <= 6) & (a == 1)

    if step == 0:
        return candidates & ~(n & e & s) & ~(e & s & w)
    return candidates & ~(n & s & w) & ~(n & e & w)


def thinning_step(grid: np.ndarray, step: int) -> np.ndarray:
    """
    Perform one substep of thinning.

    Args:
        grid: Binary grid (ridges = True)
        step: Substep number (0 or 1)

    Returns:
        New grid with the removable pixels cleared
    """
    result = copy_grid(grid)
    result[removable_pixels(grid, step)] = False
    return result


def thin(grid: np.ndarray, max_iterations: Optional[int] = None) -> np.ndarray:
    """
    Compute the skeleton of a binary grid.

    Args:
        grid: Binary grid (ridges = True); left unmodified
        max_iterations: Optional cap on full iterations (None = run until stable)

    Returns:
        Skeleton grid
    """
    current = copy_grid(as_grid(grid))
    iteration = 0

    while True:
        iteration += 1
        thinned = thinning_step(thinning_step(current, 0), 1)

        if identical(thinned, current):
            logger.debug("Thinning converged after %d iterations", iteration)
            return thinned

        if max_iterations is not None and iteration >= max_iterations:
            logger.warning(
                "Thinning stopped at max_iterations=%d before converging",
                max_iterations
            )
            return thinned

        current = thinned


class Thinner:
    """
    Configurable skeletonization processor.
    """

    def __init__(self, max_iterations: Optional[int] = None):
        """
        Initialize thinner.

        Args:
            max_iterations: Maximum full thinning iterations (None = until stable)
        """
        self.max_iterations = max_iterations

    def process(self, grid: np.ndarray) -> np.ndarray:
        """
        Thin a binary ridge grid.

        Args:
            grid: Binary ridge grid

        Returns:
            Skeleton grid
        """
        return thin(grid, self.max_iterations)
