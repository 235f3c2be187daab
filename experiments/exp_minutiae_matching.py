"""
Experiment: Skeleton Minutiae Verification

This experiment verifies fingerprint pairs with the skeleton-based
minutiae pipeline.

Pipeline:
1. Binarization of black/white images into ridge grids
2. Thinning (two-substep skeletonization)
3. Minutiae extraction (transition count + regression orientation)
4. Minutiae matching (brute-force rigid alignment search)

Modes:
- Single pair: --image_a / --image_b, prints MATCH or NO MATCH
- Pair list:   --pairs CSV (img1,img2[,label]), reports accuracy when
               labels are present
"""

import sys
import argparse
from pathlib import Path
from typing import Dict, List, Optional, Tuple

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

import numpy as np
from ridgematch.minutiae import (
    Minutia,
    MinutiaeExtractor,
    MinutiaeMatcher,
    MinutiaeMatchingPipeline,
    Thinner
)
from ridgematch.utils.config import Config, load_config
from ridgematch.utils.io import load_grid, load_pair_list, save_minutiae
from ridgematch.utils.logger import ExperimentLogger, ProgressTracker, get_logger


def build_pipeline(config: Config) -> MinutiaeMatchingPipeline:
    """Create the matching pipeline described by a configuration."""
    return MinutiaeMatchingPipeline(
        thinner=Thinner(max_iterations=config.matching.max_thinning_iterations),
        extractor=MinutiaeExtractor(),
        matcher=MinutiaeMatcher(num_workers=config.matching.num_workers)
    )


class MinutiaeCache:
    """
    Extracts and memoizes minutiae per image path.
    """

    def __init__(
        self,
        pipeline: MinutiaeMatchingPipeline,
        config: Config,
        minutiae_dir: Optional[Path] = None
    ):
        self.pipeline = pipeline
        self.config = config
        self.minutiae_dir = minutiae_dir
        self._cache: Dict[str, List[Minutia]] = {}

    def get(self, path: str) -> List[Minutia]:
        if path not in self._cache:
            grid = load_grid(
                path,
                threshold=self.config.binarization.threshold,
                ridges_dark=self.config.binarization.ridges_dark
            )
            minutiae = self.pipeline.extract_minutiae(grid)
            if self.minutiae_dir is not None:
                save_minutiae(minutiae, self.minutiae_dir / f"{Path(path).stem}.json")
            self._cache[path] = minutiae
        return self._cache[path]


def verify_pair(
    cache: MinutiaeCache,
    image_a: str,
    image_b: str
) -> bool:
    """
    Verify one pair of fingerprint images.

    Args:
        cache: Minutiae cache bound to a pipeline
        image_a: Path to the first image
        image_b: Path to the second image

    Returns:
        True if the fingerprints match
    """
    minutiae_a = cache.get(image_a)
    minutiae_b = cache.get(image_b)

    matched, _ = cache.pipeline.matcher.match_minutiae(minutiae_a, minutiae_b)
    return matched


def summarize(verdicts: List[Tuple[bool, Optional[int]]]) -> Dict[str, float]:
    """
    Summarize verdicts against ground-truth labels.

    Args:
        verdicts: List of (matched, label) tuples; unlabeled pairs are
            counted but excluded from the error rates

    Returns:
        Dictionary with counts, accuracy, FAR and FRR
    """
    labeled = [(m, l) for m, l in verdicts if l is not None]
    matched = np.array([m for m, _ in labeled], dtype=bool)
    labels = np.array([l for _, l in labeled], dtype=int)

    genuine = labels == 1
    impostor = labels == 0

    results = {
        'num_pairs': len(verdicts),
        'num_matches': int(sum(1 for m, _ in verdicts if m)),
        'num_genuine': int(genuine.sum()),
        'num_impostor': int(impostor.sum()),
    }

    if len(labeled) > 0:
        results['accuracy'] = float(np.mean(matched == genuine))
    if genuine.any():
        results['frr'] = float(np.mean(~matched[genuine]))
    if impostor.any():
        results['far'] = float(np.mean(matched[impostor]))

    return results


def run_single(
    config: Config,
    image_a: str,
    image_b: str,
    logger: ExperimentLogger,
    minutiae_dir: Optional[Path] = None
) -> bool:
    """Verify a single pair and log the verdict."""
    cache = MinutiaeCache(build_pipeline(config), config, minutiae_dir)
    matched = verify_pair(cache, image_a, image_b)
    logger.log_verdict(image_a, image_b, matched)
    return matched


def run_experiment(
    config: Config,
    pairs_file: str,
    logger: ExperimentLogger,
    minutiae_dir: Optional[Path] = None
) -> Dict[str, float]:
    """
    Verify every pair of a CSV pair list.

    Args:
        config: Run configuration
        pairs_file: CSV file with img1,img2[,label] rows
        logger: Experiment logger
        minutiae_dir: Optional directory to dump extracted minutiae

    Returns:
        Summary of the run, see summarize()
    """
    pairs = load_pair_list(pairs_file)
    logger.info(f"Loaded {len(pairs)} pairs from {pairs_file}")

    cache = MinutiaeCache(build_pipeline(config), config, minutiae_dir)
    tracker = ProgressTracker(len(pairs), logger)
    verdicts = []

    for image_a, image_b, label in pairs:
        try:
            matched = verify_pair(cache, image_a, image_b)
        except (FileNotFoundError, ValueError) as e:
            logger.error(f"Failed to verify {image_a} vs {image_b}: {e}")
            matched = False

        logger.log_verdict(image_a, image_b, matched, label)
        verdicts.append((matched, label))
        tracker.update()

    tracker.finish()

    results = summarize(verdicts)
    logger.log_results(results)
    return results


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Skeleton Minutiae Verification Experiment"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML configuration file"
    )
    parser.add_argument(
        "--image_a",
        type=str,
        default=None,
        help="First fingerprint image (single pair mode)"
    )
    parser.add_argument(
        "--image_b",
        type=str,
        default=None,
        help="Second fingerprint image (single pair mode)"
    )
    parser.add_argument(
        "--pairs",
        type=str,
        default=None,
        help="CSV pair list (img1,img2[,label])"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Threads for the alignment search (overrides config)"
    )
    parser.add_argument(
        "--save_minutiae",
        action="store_true",
        help="Dump extracted minutiae as JSON under the output directory"
    )

    args = parser.parse_args(argv)

    config = load_config(args.config) if args.config else Config()
    if args.workers is not None:
        config.matching.num_workers = args.workers

    single = args.image_a is not None or args.image_b is not None
    if single and (args.image_a is None or args.image_b is None):
        parser.error("--image_a and --image_b must be given together")

    output_path = Path(config.data.output_dir)
    minutiae_dir = output_path / "minutiae" if args.save_minutiae else None

    logger = get_logger(
        "minutiae_matching",
        log_dir=config.logging.log_dir,
        level=config.logging.level
    )
    logger.log_params({
        'config': args.config,
        'num_workers': config.matching.num_workers,
        'max_thinning_iterations': config.matching.max_thinning_iterations,
        'binarization_threshold': config.binarization.threshold,
    })

    try:
        if single:
            matched = run_single(
                config, args.image_a, args.image_b, logger, minutiae_dir
            )
            print("MATCH" if matched else "NO MATCH")
        else:
            run_experiment(
                config,
                args.pairs or config.data.pairs_file,
                logger,
                minutiae_dir
            )

        if config.logging.save_results:
            logger.save_results()
    finally:
        logger.close()

    return 0


if __name__ == "__main__":
    sys.exit(main())
