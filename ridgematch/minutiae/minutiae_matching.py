"""
Minutiae-based fingerprint matching.

This module decides whether two minutiae sets come from the same finger
by a brute-force search over rigid alignments.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np

from ridgematch.minutiae.geometry import transform_minutiae
from ridgematch.minutiae.minutiae_extraction import Minutia, MinutiaeExtractor
from ridgematch.minutiae.thinning import Thinner


logger = logging.getLogger(__name__)


# Maximum distance (pixels) between two minutiae considered overlapping
DISTANCE_THRESHOLD = 5

# Maximum orientation difference (degrees) between overlapping minutiae
ORIENTATION_THRESHOLD = 20

# Number of overlapping minutiae needed to declare a match
FOUND_THRESHOLD = 20

# Rotations tried around each candidate rotation: [r - offset, r + offset]
MATCH_ANGLE_OFFSET = 2


# =============================================================================
# MATHEMATICAL BACKGROUND
# =============================================================================
#
# Alignment search:
# -----------------
# For every reference pair (m1 ∈ A, m2 ∈ B):
#
#     center      = (m1.row, m1.col)
#     translation = (m2.row - m1.row, m2.col - m1.col)
#     rotation    = m2.θ - m1.θ
#
# B is rotated around the center by each r ∈ [rotation - 2, rotation + 2],
# translated, and scored against A. The first alignment reaching
# FOUND_THRESHOLD overlaps ends the search.
#
# Overlap:
# Two minutiae overlap if
# - ||(a.row, a.col) - (b.row, b.col)|| <= DISTANCE_THRESHOLD
# - |a.θ - b.θ| <= ORIENTATION_THRESHOLD   (plain difference, no wrap at 360)
#
# Every (a, b) pair is counted, so the score is not a one-to-one matching.
# Cost: O(|A|·|B|·5·|A|·|B|).
# =============================================================================


@dataclass(frozen=True)
class Alignment:
    """
    Candidate rigid alignment of a minutiae set.

    Attributes:
        center_row: Row of the rotation center
        center_col: Column of the rotation center
        row_shift: Rows subtracted after rotating
        col_shift: Columns subtracted after rotating
        rotation: Rotation in degrees
    """
    center_row: int
    center_col: int
    row_shift: int
    col_shift: int
    rotation: int

    def apply(self, minutiae: List[Minutia]) -> List[Minutia]:
        """Transform a minutiae list with this alignment."""
        return transform_minutiae(
            minutiae,
            self.center_row,
            self.center_col,
            self.row_shift,
            self.col_shift,
            self.rotation
        )


def _as_array(minutiae: List[Minutia]) -> np.ndarray:
    return np.array(
        [(m.row, m.col, m.orientation) for m in minutiae], dtype=np.int64
    ).reshape(-1, 3)


def overlap_count(
    minutiae1: List[Minutia],
    minutiae2: List[Minutia],
    max_distance: float,
    max_orientation: float
) -> int:
    """
    Count overlapping minutiae pairs.

    Args:
        minutiae1: First minutiae set
        minutiae2: Second minutiae set
        max_distance: Maximum Euclidean distance between overlapping minutiae
        max_orientation: Maximum absolute orientation difference (degrees)

    Returns:
        Number of overlapping (m1, m2) pairs over the full cross product
    """
    a = _as_array(minutiae1)
    b = _as_array(minutiae2)

    diff = a[:, None, :] - b[None, :, :]
    distance = np.sqrt(diff[..., 0] ** 2 + diff[..., 1] ** 2)
    orientation_diff = np.abs(diff[..., 2])

    overlaps = (distance <= max_distance) & (orientation_diff <= max_orientation)
    return int(np.count_nonzero(overlaps))


def reference_alignments(
    reference: Minutia,
    minutiae2: List[Minutia]
) -> Iterator[Alignment]:
    """
    Candidate alignments pairing one minutia of the first set with each of the second.

    Args:
        reference: Minutia of the first set, used as rotation center
        minutiae2: Second minutiae set

    Yields:
        Alignments in (m2, rotation offset) order
    """
    for m2 in minutiae2:
        rotation = m2.orientation - reference.orientation
        for r in range(rotation - MATCH_ANGLE_OFFSET, rotation + MATCH_ANGLE_OFFSET + 1):
            yield Alignment(
                center_row=reference.row,
                center_col=reference.col,
                row_shift=m2.row - reference.row,
                col_shift=m2.col - reference.col,
                rotation=r
            )


def candidate_alignments(
    minutiae1: List[Minutia],
    minutiae2: List[Minutia]
) -> Iterator[Alignment]:
    """Lazily enumerate every candidate alignment of minutiae2 onto minutiae1."""
    for m1 in minutiae1:
        yield from reference_alignments(m1, minutiae2)


def alignment_score(
    minutiae1: List[Minutia],
    minutiae2: List[Minutia],
    alignment: Alignment
) -> int:
    """Overlap count of minutiae1 against minutiae2 transformed by alignment."""
    return overlap_count(
        minutiae1,
        alignment.apply(minutiae2),
        DISTANCE_THRESHOLD,
        ORIENTATION_THRESHOLD
    )


def _first_alignment(
    minutiae1: List[Minutia],
    minutiae2: List[Minutia],
    alignments: Iterator[Alignment],
    stop: Optional[threading.Event] = None
) -> Optional[Alignment]:
    for alignment in alignments:
        if stop is not None and stop.is_set():
            return None
        if alignment_score(minutiae1, minutiae2, alignment) >= FOUND_THRESHOLD:
            return alignment
    return None


def find_alignment(
    minutiae1: List[Minutia],
    minutiae2: List[Minutia],
    num_workers: int = 1
) -> Optional[Alignment]:
    """
    Search for an alignment under which the two sets overlap enough.

    Args:
        minutiae1: First minutiae set
        minutiae2: Second minutiae set
        num_workers: Number of threads; above 1 the reference minutiae of
            minutiae1 are searched in parallel

    Returns:
        An alignment reaching FOUND_THRESHOLD, or None. With several
        workers any successful alignment may be returned, but whether one
        is found does not depend on the number of workers.
    """
    if num_workers <= 1 or len(minutiae1) <= 1:
        return _first_alignment(
            minutiae1, minutiae2, candidate_alignments(minutiae1, minutiae2)
        )

    stop = threading.Event()
    with ThreadPoolExecutor(max_workers=num_workers) as executor:
        futures = [
            executor.submit(
                _first_alignment,
                minutiae1,
                minutiae2,
                reference_alignments(m1, minutiae2),
                stop
            )
            for m1 in minutiae1
        ]

        for future in as_completed(futures):
            alignment = future.result()
            if alignment is not None:
                stop.set()
                for pending in futures:
                    pending.cancel()
                return alignment

    return None


def match(
    minutiae1: List[Minutia],
    minutiae2: List[Minutia],
    num_workers: int = 1
) -> bool:
    """
    Compare the minutiae of two fingerprints.

    Args:
        minutiae1: Minutiae of the first fingerprint
        minutiae2: Minutiae of the second fingerprint
        num_workers: Number of threads used for the alignment search

    Returns:
        True if the fingerprints match
    """
    return find_alignment(minutiae1, minutiae2, num_workers) is not None


class MinutiaeMatcher:
    """
    Minutiae-based fingerprint matcher.

    Compares minutiae sets by searching rigid alignments until
    FOUND_THRESHOLD minutiae overlap.
    """

    def __init__(self, num_workers: int = 1):
        """
        Initialize minutiae matcher.

        Args:
            num_workers: Threads used for the alignment search (1 = serial)
        """
        self.num_workers = num_workers

    @property
    def name(self) -> str:
        return "Minutiae"

    def match_minutiae(
        self,
        minutiae1: List[Minutia],
        minutiae2: List[Minutia]
    ) -> Tuple[bool, Optional[Alignment]]:
        """
        Match two minutiae sets.

        Args:
            minutiae1: First minutiae set
            minutiae2: Second minutiae set

        Returns:
            Tuple of (matched, alignment found or None)
        """
        alignment = find_alignment(minutiae1, minutiae2, self.num_workers)

        if alignment is None:
            logger.debug(
                "No alignment found (%d vs %d minutiae)",
                len(minutiae1), len(minutiae2)
            )
        else:
            logger.debug("Match found with %s", alignment)

        return alignment is not None, alignment


class MinutiaeMatchingPipeline:
    """
    Complete pipeline for minutiae-based fingerprint matching.

    Combines:
    - Thinning
    - Minutiae extraction
    - Minutiae matching
    """

    def __init__(
        self,
        thinner: Optional[Thinner] = None,
        extractor: Optional[MinutiaeExtractor] = None,
        matcher: Optional[MinutiaeMatcher] = None
    ):
        """
        Initialize pipeline.

        Args:
            thinner: Thinner instance
            extractor: MinutiaeExtractor instance
            matcher: MinutiaeMatcher instance
        """
        self.thinner = thinner or Thinner()
        self.extractor = extractor or MinutiaeExtractor()
        self.matcher = matcher or MinutiaeMatcher()

    def extract_minutiae(self, grid: np.ndarray) -> List[Minutia]:
        """
        Extract minutiae from a binary ridge grid.

        Args:
            grid: Binary ridge grid (ridges = True)

        Returns:
            List of extracted minutiae
        """
        skeleton = self.thinner.process(grid)
        return self.extractor.extract(skeleton)

    def match(self, grid1: np.ndarray, grid2: np.ndarray) -> bool:
        """
        Match two binary ridge grids.

        Args:
            grid1: First fingerprint grid
            grid2: Second fingerprint grid

        Returns:
            True if the fingerprints match
        """
        minutiae1 = self.extract_minutiae(grid1)
        minutiae2 = self.extract_minutiae(grid2)

        matched, _ = self.matcher.match_minutiae(minutiae1, minutiae2)
        return matched
