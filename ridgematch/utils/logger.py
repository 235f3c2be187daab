"""
Logging utilities for ridgematch.

Provides structured logging for verification runs: per-pair verdicts,
run parameters and final results, persisted as JSON next to the log.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import json


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ExperimentLogger:
    """
    Logger for tracking verification runs.

    Combines standard Python logging with verdict tracking and result
    persistence.

    Attributes:
        name: Logger name (typically experiment name)
        log_dir: Directory for log files
        logger: Python logger instance
        verdicts: Per-pair verdicts recorded so far
        metrics: Parameters and results of the run
    """

    def __init__(
        self,
        name: str,
        log_dir: Union[str, Path] = "logs",
        level: str = "INFO",
        console_output: bool = True,
        file_output: bool = True
    ):
        """
        Initialize the experiment logger.

        Args:
            name: Name of the experiment/logger
            log_dir: Directory for log and result files
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
            console_output: Whether to output to console
            file_output: Whether to output to file
        """
        self.name = name
        self.log_dir = Path(log_dir)
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.verdicts: List[Dict[str, Any]] = []
        self.metrics: Dict[str, Any] = {}
        self.start_time = datetime.now()
        self.log_file: Optional[Path] = None

        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper()))
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

        if console_output:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)

        if file_output:
            timestamp = self.start_time.strftime('%Y%m%d_%H%M%S')
            self.log_file = self.log_dir / f"{name}_{timestamp}.log"
            file_handler = logging.FileHandler(self.log_file)
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def debug(self, message: str) -> None:
        """Log debug message."""
        self.logger.debug(message)

    def info(self, message: str) -> None:
        """Log info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log error message."""
        self.logger.error(message)

    def log_verdict(
        self,
        image_a: str,
        image_b: str,
        matched: bool,
        label: Optional[int] = None
    ) -> None:
        """
        Record the verdict for one pair of fingerprints.

        Args:
            image_a: Identifier of the first fingerprint
            image_b: Identifier of the second fingerprint
            matched: Verdict of the matcher
            label: Optional ground truth (1 = genuine, 0 = impostor)
        """
        entry = {'image_a': image_a, 'image_b': image_b, 'matched': matched}
        if label is not None:
            entry['label'] = label
        self.verdicts.append(entry)

        verdict = "MATCH" if matched else "NO MATCH"
        self.info(f"{image_a} vs {image_b}: {verdict}")

    def log_params(self, params: Dict[str, Any]) -> None:
        """
        Log run parameters.

        Args:
            params: Dictionary of parameter names and values
        """
        self.metrics['params'] = params
        self.info(f"Parameters: {json.dumps(params, indent=2, default=str)}")

    def log_results(self, results: Dict[str, Any]) -> None:
        """
        Log final run results.

        Args:
            results: Dictionary of result names and values
        """
        self.metrics['results'] = results
        self.info("Final Results:")
        for key, value in results.items():
            if isinstance(value, float):
                self.info(f"  {key}: {value:.4f}")
            else:
                self.info(f"  {key}: {value}")

    def save_results(self, filename: Optional[str] = None) -> Path:
        """
        Save parameters, results and verdicts to a JSON file.

        Args:
            filename: Optional custom filename

        Returns:
            Path to the saved file
        """
        if filename is None:
            timestamp = self.start_time.strftime('%Y%m%d_%H%M%S')
            filename = f"{self.name}_{timestamp}_results.json"

        filepath = self.log_dir / filename

        output = {
            'experiment_name': self.name,
            'start_time': self.start_time.isoformat(),
            'end_time': datetime.now().isoformat(),
            'metrics': self.metrics,
            'verdicts': self.verdicts
        }

        with open(filepath, 'w') as f:
            json.dump(output, f, indent=2, default=str)

        self.info(f"Results saved to {filepath}")
        return filepath

    def close(self) -> None:
        """Detach and close all handlers."""
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()


def get_logger(
    name: str,
    log_dir: str = "logs",
    level: str = "INFO",
    file_output: bool = True
) -> ExperimentLogger:
    """
    Get or create an experiment logger.

    Args:
        name: Logger name
        log_dir: Directory for log files
        level: Logging level
        file_output: Whether to also log to a file in log_dir

    Returns:
        ExperimentLogger instance
    """
    return ExperimentLogger(name, log_dir, level, file_output=file_output)


class ProgressTracker:
    """
    Track progress of long-running operations.

    Reports roughly every 5% of the work with a time estimate.
    """

    def __init__(self, total: int, logger: Optional[ExperimentLogger] = None):
        """
        Initialize progress tracker.

        Args:
            total: Total number of items to process
            logger: Optional logger for output
        """
        self.total = total
        self.current = 0
        self.start_time = datetime.now()
        self.logger = logger

    def update(self, n: int = 1) -> None:
        """
        Update progress by n items.

        Args:
            n: Number of items completed
        """
        self.current += n

        if self.logger and self.current % max(1, self.total // 20) == 0:
            elapsed = (datetime.now() - self.start_time).total_seconds()
            rate = self.current / elapsed if elapsed > 0 else 0
            eta = (self.total - self.current) / rate if rate > 0 else 0

            self.logger.info(
                f"Progress: {self.current}/{self.total} "
                f"({100 * self.current / max(1, self.total):.1f}%) "
                f"ETA: {eta:.1f}s"
            )

    def finish(self) -> float:
        """
        Mark operation as complete.

        Returns:
            Total elapsed time in seconds
        """
        elapsed = (datetime.now() - self.start_time).total_seconds()
        if self.logger:
            self.logger.info(f"Completed {self.current} items in {elapsed:.2f}s")
        return elapsed
