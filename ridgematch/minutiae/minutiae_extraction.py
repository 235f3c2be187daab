"""
Minutiae extraction from fingerprint skeletons.

This module detects ridge endings and bifurcations with the transition
count of each skeleton pixel and attaches a regression-based orientation.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import numpy as np

from ridgematch.minutiae.grid import as_grid, neighbors, transition_count, transition_counts
from ridgematch.minutiae.orientation import compute_orientation


logger = logging.getLogger(__name__)


# Half-width of the region used for the orientation regression
ORIENTATION_DISTANCE = 16


# =============================================================================
# MATHEMATICAL BACKGROUND
# =============================================================================
#
# Minutiae:
# ---------
# Minutiae are local discontinuities in the ridge pattern:
# - Ridge ending: a ridge that terminates abruptly
# - Ridge bifurcation: a single ridge that splits into two ridges
#
# Transition count on a 1-pixel-wide skeleton:
# A(P) = number of white->black steps around the 8-neighborhood
#
# - A = 1: ridge ending
# - A = 2: ridge continuing point
# - A = 3: ridge bifurcation
#
# The outermost 1-pixel frame of the skeleton is never scanned.
# =============================================================================


class MinutiaeType(Enum):
    """Enumeration of minutiae types, valued by their transition count."""
    ENDING = 1
    BIFURCATION = 3


@dataclass(frozen=True)
class Minutia:
    """
    Represents a single minutia point.

    Attributes:
        row: Row of the minutia in the skeleton
        col: Column of the minutia in the skeleton
        orientation: Direction of the ridge in whole degrees
    """
    row: int
    col: int
    orientation: int

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'row': self.row,
            'col': self.col,
            'orientation': self.orientation
        }

    @classmethod
    def from_dict(cls, d: dict) -> 'Minutia':
        """Create from dictionary."""
        return cls(
            row=int(d['row']),
            col=int(d['col']),
            orientation=int(d['orientation'])
        )


def classify_minutia(
    skeleton: np.ndarray,
    row: int,
    col: int
) -> Optional[MinutiaeType]:
    """
    Classify a skeleton pixel by its transition count.

    Args:
        skeleton: Binary skeleton grid
        row, col: Pixel coordinates

    Returns:
        MinutiaeType, or None for white pixels, pixels outside the grid
        and pixels that are neither endings nor bifurcations
    """
    skeleton = as_grid(skeleton)
    values = neighbors(skeleton, row, col)
    if values is None or not skeleton[row, col]:
        return None

    count = transition_count(values)
    for minutiae_type in MinutiaeType:
        if minutiae_type.value == count:
            return minutiae_type
    return None


def extract_minutiae(skeleton: np.ndarray) -> List[Minutia]:
    """
    Extract minutiae from a skeleton grid.

    Algorithm Steps:
    ----------------
    1. For each black pixel not on the outer border
    2. Compute its transition count
    3. Keep it if the count is 1 (ending) or 3 (bifurcation)
    4. Estimate orientation over a region of half-width ORIENTATION_DISTANCE

    Args:
        skeleton: Binary skeleton grid, see thin()

    Returns:
        List of Minutia objects in row-major order
    """
    skeleton = as_grid(skeleton)
    height, width = skeleton.shape

    counts = transition_counts(skeleton)
    candidates = skeleton & ((counts == 1) | (counts == 3))

    interior = np.zeros_like(candidates)
    interior[1:height - 1, 1:width - 1] = True
    candidates &= interior

    minutiae = []
    for row, col in np.argwhere(candidates):
        row, col = int(row), int(col)
        orientation = compute_orientation(skeleton, row, col, ORIENTATION_DISTANCE)
        minutiae.append(Minutia(row=row, col=col, orientation=orientation))

    return minutiae


class MinutiaeExtractor:
    """
    Minutiae extraction step of the matching pipeline.
    """

    def extract(self, skeleton: np.ndarray) -> List[Minutia]:
        """
        Extract minutiae from a skeleton grid.

        Args:
            skeleton: Binary skeleton grid

        Returns:
            List of extracted minutiae
        """
        minutiae = extract_minutiae(skeleton)
        logger.debug(
            "Extracted %d minutiae from %dx%d skeleton",
            len(minutiae), *np.shape(skeleton)
        )
        return minutiae
