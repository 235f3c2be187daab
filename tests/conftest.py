"""Shared fixtures for the ridgematch test suite."""

import numpy as np
import pytest

from ridgematch.minutiae import Minutia


def parse_grid(rows):
    """Build a grid from strings where '#' is a ridge pixel and '.' background."""
    return np.array([[c == '#' for c in r] for r in rows], dtype=bool)


@pytest.fixture
def make_grid():
    return parse_grid


@pytest.fixture
def square_grid():
    """Solid 3x3 black square centered in a 5x5 white grid."""
    return parse_grid([
        ".....",
        ".###.",
        ".###.",
        ".###.",
        ".....",
    ])


@pytest.fixture
def minutiae_lattice():
    """20 minutiae on a 5x4 lattice with 15 pixel spacing."""
    return [
        Minutia(row=100 + 15 * i, col=100 + 15 * j, orientation=(37 * (4 * i + j)) % 300 + 30)
        for i in range(5)
        for j in range(4)
    ]


@pytest.fixture
def minutiae_scattered():
    """20 minutiae pairwise at least 100 pixels apart."""
    return [
        Minutia(row=1000 + 100 * k, col=2000 + 137 * k, orientation=(53 * k) % 300 + 30)
        for k in range(20)
    ]
