"""
Minutiae-based fingerprint verification modules.

This package provides the classical skeleton pipeline:
- Grid primitives (neighbors, transition counts)
- Thinning (skeletonization)
- Region growth and orientation regression
- Minutiae extraction (transition count method)
- Rigid transformation of minutiae
- Minutiae matching (brute-force alignment search)
"""

from .grid import (
    as_grid,
    get_pixel,
    neighbors,
    black_count,
    transition_count,
    identical,
    copy_grid,
    neighbor_planes,
    black_counts,
    transition_counts
)
from .thinning import (
    removable_pixels,
    thinning_step,
    thin,
    Thinner
)
from .region_growing import (
    window_bounds,
    connected_region
)
from .orientation import (
    round_half_up,
    compute_slope,
    compute_angle,
    compute_orientation
)
from .minutiae_extraction import (
    ORIENTATION_DISTANCE,
    MinutiaeType,
    Minutia,
    classify_minutia,
    extract_minutiae,
    MinutiaeExtractor
)
from .geometry import (
    apply_rotation,
    apply_translation,
    apply_transformation,
    transform_minutiae
)
from .minutiae_matching import (
    DISTANCE_THRESHOLD,
    ORIENTATION_THRESHOLD,
    FOUND_THRESHOLD,
    MATCH_ANGLE_OFFSET,
    Alignment,
    overlap_count,
    reference_alignments,
    candidate_alignments,
    alignment_score,
    find_alignment,
    match,
    MinutiaeMatcher,
    MinutiaeMatchingPipeline
)

__all__ = [
    # Grid primitives
    'as_grid',
    'get_pixel',
    'neighbors',
    'black_count',
    'transition_count',
    'identical',
    'copy_grid',
    'neighbor_planes',
    'black_counts',
    'transition_counts',
    # Thinning
    'removable_pixels',
    'thinning_step',
    'thin',
    'Thinner',
    # Region growth / orientation
    'window_bounds',
    'connected_region',
    'round_half_up',
    'compute_slope',
    'compute_angle',
    'compute_orientation',
    # Minutiae extraction
    'ORIENTATION_DISTANCE',
    'MinutiaeType',
    'Minutia',
    'classify_minutia',
    'extract_minutiae',
    'MinutiaeExtractor',
    # Geometry
    'apply_rotation',
    'apply_translation',
    'apply_transformation',
    'transform_minutiae',
    # Minutiae matching
    'DISTANCE_THRESHOLD',
    'ORIENTATION_THRESHOLD',
    'FOUND_THRESHOLD',
    'MATCH_ANGLE_OFFSET',
    'Alignment',
    'overlap_count',
    'reference_alignments',
    'candidate_alignments',
    'alignment_score',
    'find_alignment',
    'match',
    'MinutiaeMatcher',
    'MinutiaeMatchingPipeline',
]
