"""Tests for minutiae matching."""

import numpy as np
import pytest

from ridgematch.minutiae.minutiae_extraction import Minutia
from ridgematch.minutiae.minutiae_matching import (
    DISTANCE_THRESHOLD,
    FOUND_THRESHOLD,
    MATCH_ANGLE_OFFSET,
    ORIENTATION_THRESHOLD,
    Alignment,
    MinutiaeMatcher,
    MinutiaeMatchingPipeline,
    alignment_score,
    candidate_alignments,
    find_alignment,
    match,
    overlap_count,
)


def test_fixed_thresholds():
    assert (FOUND_THRESHOLD, DISTANCE_THRESHOLD, ORIENTATION_THRESHOLD, MATCH_ANGLE_OFFSET) == (20, 5, 20, 2)


class TestOverlapCount:

    def test_symmetric(self):
        rng = np.random.default_rng(3)
        a = [Minutia(int(r), int(c), int(o)) for r, c, o in rng.integers(0, 40, size=(30, 3))]
        b = [Minutia(int(r), int(c), int(o)) for r, c, o in rng.integers(0, 40, size=(25, 3))]
        assert overlap_count(a, b, 5, 20) == overlap_count(b, a, 5, 20)
        assert overlap_count(a, b, 5, 20) > 0

    def test_thresholds_are_inclusive(self):
        a = [Minutia(0, 0, 100)]
        assert overlap_count(a, [Minutia(3, 4, 120)], 5, 20) == 1
        assert overlap_count(a, [Minutia(3, 4, 121)], 5, 20) == 0
        assert overlap_count(a, [Minutia(4, 4, 100)], 5, 20) == 0

    def test_orientation_difference_has_no_wraparound(self):
        # 359 and 1 degrees are visually close but counted as 358 apart
        assert overlap_count([Minutia(0, 0, 359)], [Minutia(0, 0, 1)], 5, 20) == 0

    def test_counts_full_cross_product(self):
        m = Minutia(10, 10, 90)
        assert overlap_count([m, m], [m], 5, 20) == 2
        assert overlap_count([m, m], [m, m, m], 5, 20) == 6

    def test_empty_lists(self):
        assert overlap_count([], [Minutia(0, 0, 0)], 5, 20) == 0
        assert overlap_count([], [], 5, 20) == 0


class TestAlignmentSearch:

    def test_candidate_order_and_count(self, minutiae_lattice):
        a = minutiae_lattice[:3]
        b = minutiae_lattice[3:7]
        candidates = list(candidate_alignments(a, b))

        assert len(candidates) == len(a) * len(b) * (2 * MATCH_ANGLE_OFFSET + 1)

        rotation = b[0].orientation - a[0].orientation
        assert candidates[0] == Alignment(
            center_row=a[0].row,
            center_col=a[0].col,
            row_shift=b[0].row - a[0].row,
            col_shift=b[0].col - a[0].col,
            rotation=rotation - MATCH_ANGLE_OFFSET
        )
        assert [c.rotation for c in candidates[:5]] == list(
            range(rotation - 2, rotation + 3)
        )

    def test_identity_alignment_scores_every_minutia(self, minutiae_lattice):
        identity = Alignment(100, 100, 0, 0, 0)
        assert alignment_score(minutiae_lattice, minutiae_lattice, identity) == 20

    def test_alignment_apply(self, minutiae_lattice):
        shifted = Alignment(0, 0, 1, 1, 0).apply(minutiae_lattice)
        assert shifted[0] == Minutia(
            minutiae_lattice[0].row - 1,
            minutiae_lattice[0].col - 1,
            minutiae_lattice[0].orientation
        )

    def test_identical_lists_match(self, minutiae_lattice):
        assert len(minutiae_lattice) >= FOUND_THRESHOLD
        assert match(minutiae_lattice, list(minutiae_lattice))

    def test_identical_lists_first_alignment(self, minutiae_lattice):
        alignment = find_alignment(minutiae_lattice, minutiae_lattice)
        first = minutiae_lattice[0]
        assert alignment == Alignment(first.row, first.col, 0, 0, -MATCH_ANGLE_OFFSET)

    def test_translated_copy_matches(self, minutiae_lattice):
        moved = [Minutia(m.row + 7, m.col - 3, m.orientation) for m in minutiae_lattice]
        assert match(minutiae_lattice, moved)
        assert match(moved, minutiae_lattice)

    def test_unrelated_lists_do_not_match(self, minutiae_lattice, minutiae_scattered):
        assert not match(minutiae_lattice, minutiae_scattered)
        assert not match(minutiae_scattered, minutiae_lattice)

    def test_too_few_minutiae_never_match(self, minutiae_lattice):
        few = minutiae_lattice[:4]
        assert not match(few, few)

    def test_empty_lists_do_not_match(self, minutiae_lattice):
        assert not match([], minutiae_lattice)
        assert not match(minutiae_lattice, [])
        assert find_alignment([], []) is None

    @pytest.mark.parametrize("num_workers", [2, 4])
    def test_parallel_search_same_verdict(self, minutiae_lattice, minutiae_scattered, num_workers):
        assert match(minutiae_lattice, minutiae_lattice, num_workers=num_workers)
        assert not match(minutiae_lattice, minutiae_scattered, num_workers=num_workers)

    def test_parallel_alignment_reaches_threshold(self, minutiae_lattice):
        alignment = find_alignment(minutiae_lattice, minutiae_lattice, num_workers=3)
        assert alignment is not None
        assert alignment_score(minutiae_lattice, minutiae_lattice, alignment) >= FOUND_THRESHOLD


class TestMinutiaeMatcher:

    def test_match_minutiae(self, minutiae_lattice, minutiae_scattered):
        matcher = MinutiaeMatcher()
        assert matcher.name == "Minutiae"

        matched, alignment = matcher.match_minutiae(minutiae_lattice, minutiae_lattice)
        assert matched
        assert isinstance(alignment, Alignment)

        matched, alignment = matcher.match_minutiae(minutiae_lattice, minutiae_scattered)
        assert not matched
        assert alignment is None

    def test_threaded_matcher(self, minutiae_lattice):
        matched, _ = MinutiaeMatcher(num_workers=2).match_minutiae(
            minutiae_lattice, minutiae_lattice
        )
        assert matched


@pytest.fixture
def segments_grid():
    """Twenty separate 1-pixel ridge segments, forty ridge endings."""
    grid = np.zeros((64, 40), dtype=bool)
    for i in range(10):
        row = 4 + 6 * i
        grid[row, 3:13] = True
        grid[row, 20:31] = True
    return grid


class TestPipeline:

    def test_extracts_segment_endings(self, segments_grid):
        minutiae = MinutiaeMatchingPipeline().extract_minutiae(segments_grid)
        assert len(minutiae) == 40
        assert all(m.orientation == 0 for m in minutiae)

    def test_same_grid_matches(self, segments_grid):
        assert MinutiaeMatchingPipeline().match(segments_grid, segments_grid.copy())

    def test_sparse_grid_does_not_match(self, segments_grid):
        sparse = np.zeros_like(segments_grid)
        sparse[10, 5:15] = True
        pipeline = MinutiaeMatchingPipeline()
        assert not pipeline.match(segments_grid, sparse)
        assert not pipeline.match(sparse, sparse)
