"""
I/O utilities for ridgematch.

Thin wrappers that turn image files into ridge grids and persist
minutiae and pair lists. The matching core itself only sees in-memory
grids and Minutia lists.
"""

import csv
import json
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

import cv2
import numpy as np

from ridgematch.minutiae.grid import as_grid
from ridgematch.minutiae.minutiae_extraction import Minutia


# Supported image extensions
SUPPORTED_EXTENSIONS = {'.tif', '.tiff', '.png', '.jpg', '.jpeg', '.bmp'}


def binarize_image(
    image: np.ndarray,
    threshold: int = 128,
    ridges_dark: bool = True
) -> np.ndarray:
    """
    Turn a grayscale image into a ridge grid with a global threshold.

    Args:
        image: Grayscale image (uint8)
        threshold: Intensity separating ridges from background
        ridges_dark: Whether ridges are darker than the background

    Returns:
        Boolean grid (ridges = True)
    """
    if ridges_dark:
        return image < threshold
    return image >= threshold


def load_grid(
    path: Union[str, Path],
    threshold: int = 128,
    ridges_dark: bool = True
) -> np.ndarray:
    """
    Load a black/white fingerprint image as a ridge grid.

    Args:
        path: Path to the image file
        threshold: Intensity separating ridges from background
        ridges_dark: Whether ridges are darker than the background

    Returns:
        Boolean grid (ridges = True)

    Raises:
        FileNotFoundError: If image file does not exist
        ValueError: If image cannot be loaded
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")

    image = cv2.imread(str(path), cv2.IMREAD_GRAYSCALE)

    if image is None:
        raise ValueError(f"Failed to load image: {path}")

    return binarize_image(image, threshold, ridges_dark)


def save_grid(
    grid: np.ndarray,
    path: Union[str, Path],
    ridges_dark: bool = True
) -> None:
    """
    Save a ridge grid as a black/white image.

    Args:
        grid: Boolean grid (ridges = True)
        path: Output path
        ridges_dark: Whether to draw ridges black on white
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    grid = as_grid(grid)
    ridge_value, background_value = (0, 255) if ridges_dark else (255, 0)
    image = np.where(grid, ridge_value, background_value).astype(np.uint8)

    if not cv2.imwrite(str(path), image):
        raise ValueError(f"Failed to write image: {path}")


def load_pair_list(
    csv_path: Union[str, Path]
) -> List[Tuple[str, str, Optional[int]]]:
    """
    Load a list of image pairs from a CSV file.

    CSV format: img1,img2[,label] (1=genuine, 0=impostor)

    Args:
        csv_path: Path to the CSV file

    Returns:
        List of (img1_path, img2_path, label) tuples; label is None when
        the column is absent or empty
    """
    pairs = []
    with open(csv_path, 'r', newline='') as f:
        reader = csv.DictReader(f)
        for row in reader:
            label = row.get('label')
            pairs.append((
                row['img1'],
                row['img2'],
                int(label) if label not in (None, '') else None
            ))
    return pairs


def save_pair_list(
    pairs: List[Tuple[str, str, int]],
    csv_path: Union[str, Path]
) -> None:
    """
    Save a list of image pairs to a CSV file.

    Args:
        pairs: List of (img1_path, img2_path, label) tuples
        csv_path: Output path
    """
    csv_path = Path(csv_path)
    csv_path.parent.mkdir(parents=True, exist_ok=True)

    with open(csv_path, 'w', newline='') as f:
        writer = csv.writer(f)
        writer.writerow(['img1', 'img2', 'label'])
        for pair in pairs:
            writer.writerow(pair)


def discover_images(
    directory: Union[str, Path],
    extensions: Optional[set] = None,
    recursive: bool = True
) -> List[Path]:
    """
    Discover all images in a directory.

    Args:
        directory: Root directory to search
        extensions: Set of valid extensions (default: SUPPORTED_EXTENSIONS)
        recursive: Whether to search subdirectories

    Returns:
        Sorted list of paths to discovered images
    """
    directory = Path(directory)
    extensions = extensions or SUPPORTED_EXTENSIONS

    pattern = '**/*' if recursive else '*'
    images = [
        path for path in directory.glob(pattern)
        if path.is_file() and path.suffix.lower() in extensions
    ]

    return sorted(images)


def load_json(path: Union[str, Path]) -> Any:
    """Load a JSON file."""
    with open(path, 'r') as f:
        return json.load(f)


def save_json(data: Any, path: Union[str, Path], indent: int = 2) -> None:
    """Save data to a JSON file."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(data, f, indent=indent, default=str)


def load_minutiae(path: Union[str, Path]) -> List[Minutia]:
    """
    Load minutiae from a JSON file.

    Expected format: list of dicts with 'row', 'col', 'orientation' keys.

    Args:
        path: Path to minutiae file

    Returns:
        List of Minutia objects
    """
    return [Minutia.from_dict(d) for d in load_json(path)]


def save_minutiae(minutiae: List[Minutia], path: Union[str, Path]) -> None:
    """
    Save minutiae to a JSON file.

    Args:
        minutiae: List of minutiae
        path: Output path
    """
    save_json([m.to_dict() for m in minutiae], path)
