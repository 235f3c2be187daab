"""
Rigid transformations of minutiae.

Rotations work in a row-flipped frame centered on the rotation center
(x grows to the right, y grows upwards), so positive angles turn
counter-clockwise on the image.
"""

import math
from typing import List

from ridgematch.minutiae.minutiae_extraction import Minutia
from ridgematch.minutiae.orientation import round_half_up


def apply_rotation(
    minutia: Minutia,
    center_row: int,
    center_col: int,
    rotation: int
) -> Minutia:
    """
    Rotate a minutia around a center.

    Mathematical Formulation:
    -------------------------
    x = col - center_col,  y = center_row - row

    x' = x cos(θ) - y sin(θ)
    y' = x sin(θ) + y cos(θ)

    row' = round(center_row - y'),  col' = round(x' + center_col)

    The orientation becomes (orientation + θ) with truncated modulo 360,
    which keeps the sign of the sum: 10 rotated by -20 gives -10.

    Args:
        minutia: Original minutia
        center_row, center_col: Center of rotation
        rotation: Rotation in degrees

    Returns:
        Rotated minutia
    """
    angle = math.radians(rotation)
    x = minutia.col - center_col
    y = center_row - minutia.row
    cos_t = math.cos(angle)
    sin_t = math.sin(angle)

    new_x = x * cos_t - y * sin_t
    new_y = x * sin_t + y * cos_t

    return Minutia(
        row=round_half_up(center_row - new_y),
        col=round_half_up(new_x + center_col),
        orientation=int(math.fmod(minutia.orientation + rotation, 360)),
    )


def apply_translation(minutia: Minutia, row_shift: int, col_shift: int) -> Minutia:
    """Shift a minutia by (-row_shift, -col_shift); orientation is unchanged."""
    return Minutia(
        row=minutia.row - row_shift,
        col=minutia.col - col_shift,
        orientation=minutia.orientation,
    )


def apply_transformation(
    minutia: Minutia,
    center_row: int,
    center_col: int,
    row_shift: int,
    col_shift: int,
    rotation: int
) -> Minutia:
    """
    Rotate a minutia around (center_row, center_col), then translate it.

    Args:
        minutia: Original minutia
        center_row, center_col: Center of rotation
        row_shift, col_shift: Translation subtracted after rotating
        rotation: Rotation in degrees

    Returns:
        Transformed minutia
    """
    rotated = apply_rotation(minutia, center_row, center_col, rotation)
    return apply_translation(rotated, row_shift, col_shift)


def transform_minutiae(
    minutiae: List[Minutia],
    center_row: int,
    center_col: int,
    row_shift: int,
    col_shift: int,
    rotation: int
) -> List[Minutia]:
    """Apply the same transformation to every minutia, preserving order."""
    return [
        apply_transformation(m, center_row, center_col, row_shift, col_shift, rotation)
        for m in minutiae
    ]
