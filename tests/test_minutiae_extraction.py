"""Tests for minutiae extraction."""

import numpy as np
import pytest

from ridgematch.minutiae.minutiae_extraction import (
    ORIENTATION_DISTANCE,
    Minutia,
    MinutiaeExtractor,
    MinutiaeType,
    classify_minutia,
    extract_minutiae,
)
from ridgematch.minutiae.thinning import thin


@pytest.fixture
def t_junction():
    """Horizontal ridge on row 5 with a branch hanging from column 7."""
    grid = np.zeros((12, 16), dtype=bool)
    grid[5, 3:13] = True
    grid[6:10, 7] = True
    return grid


def test_orientation_distance_constant():
    assert ORIENTATION_DISTANCE == 16


def test_horizontal_ridge_endings():
    skeleton = np.zeros((11, 16), dtype=bool)
    skeleton[5, 3:13] = True

    assert extract_minutiae(skeleton) == [
        Minutia(row=5, col=3, orientation=0),
        Minutia(row=5, col=12, orientation=0),
    ]


def test_bifurcation_and_endings_in_row_major_order(t_junction):
    positions = [(m.row, m.col) for m in extract_minutiae(t_junction)]
    assert positions == [(5, 3), (5, 7), (5, 12), (9, 7)]


def test_classify_minutia(t_junction):
    assert classify_minutia(t_junction, 5, 3) is MinutiaeType.ENDING
    assert classify_minutia(t_junction, 9, 7) is MinutiaeType.ENDING
    assert classify_minutia(t_junction, 5, 7) is MinutiaeType.BIFURCATION
    assert classify_minutia(t_junction, 5, 5) is None
    assert classify_minutia(t_junction, 0, 0) is None
    assert classify_minutia(t_junction, -1, 0) is None


def test_border_pixels_never_extracted():
    skeleton = np.zeros((7, 8), dtype=bool)
    skeleton[3, 0:6] = True

    minutiae = extract_minutiae(skeleton)

    assert [(m.row, m.col) for m in minutiae] == [(3, 5)]


def test_empty_skeleton():
    assert extract_minutiae(np.zeros((6, 6), dtype=bool)) == []


def test_minutiae_within_bounds_and_range():
    rng = np.random.default_rng(5)
    grid = rng.random((30, 30)) > 0.45
    skeleton = thin(grid)

    for m in extract_minutiae(skeleton):
        assert 1 <= m.row < 29
        assert 1 <= m.col < 29
        assert skeleton[m.row, m.col]
        assert 0 <= m.orientation < 360


def test_extractor_matches_function(t_junction):
    assert MinutiaeExtractor().extract(t_junction) == extract_minutiae(t_junction)


def test_minutia_dict_round_trip():
    m = Minutia(row=3, col=4, orientation=270)
    assert m.to_dict() == {'row': 3, 'col': 4, 'orientation': 270}
    assert Minutia.from_dict(m.to_dict()) == m


def test_minutia_is_immutable():
    m = Minutia(row=1, col=2, orientation=3)
    with pytest.raises(AttributeError):
        m.row = 5
