"""Performance metrics and evaluation."""

import numpy as np
from scipy.spatial.distance import cosine
from typing import Dict, Sequence
from time import perf_counter


class PerformanceMetrics:
    """Track performance metrics."""

    def __init__(self):
        self.start_times = {}
        self.durations = {}

    def start_timer(self, name: str):
        """Start timing an operation."""
        self.start_times[name] = perf_counter()

    def stop_timer(self, name: str) -> float:
        """Stop timing and return duration in milliseconds."""
        if name not in self.start_times:
            return 0.0
        duration = (perf_counter() - self.start_times.pop(name)) * 1000
        self.durations[name] = duration
        return duration

    def get_summary(self) -> Dict[str, float]:
        """Get summary of all timings."""
        return self.durations.copy()


class AccuracyMetrics:
    """Calculate accuracy metrics."""

    @staticmethod
    def calculate_precision_recall(true_positives: int, false_positives: int,
                                   false_negatives: int) -> Dict[str, float]:
        """Calculate precision, recall, and F1 score."""
        precision = true_positives / (true_positives + false_positives) if (true_positives + false_positives) > 0 else 0
        recall = true_positives / (true_positives + false_negatives) if (true_positives + false_negatives) > 0 else 0
        f1 = 2 * (precision * recall) / (precision + recall) if (precision + recall) > 0 else 0

        return {
            'precision': precision,
            'recall': recall,
            'f1_score': f1
        }

    @staticmethod
    def inlier_precision_recall(inlier_indices: Sequence[int],
                                outlier_mask: np.ndarray) -> Dict[str, float]:
        """Score a consensus set against ground-truth outlier labels."""
        outlier_mask = np.asarray(outlier_mask, dtype=bool)
        predicted = np.zeros(outlier_mask.shape[0], dtype=bool)
        predicted[np.asarray(inlier_indices, dtype=np.int64)] = True
        actual = ~outlier_mask

        return AccuracyMetrics.calculate_precision_recall(
            int(np.sum(predicted & actual)),
            int(np.sum(predicted & ~actual)),
            int(np.sum(~predicted & actual)),
        )

    @staticmethod
    def parameter_alignment(params: Sequence[float], expected: Sequence[float]) -> float:
        """
        Absolute cosine similarity between two coefficient vectors.

        Implicit models are only defined up to sign and scale, so 1.0 means
        the two parameter sets describe the same primitive.
        """
        u = np.asarray(params, dtype=np.float64)
        v = np.asarray(expected, dtype=np.float64)
        if u.shape != v.shape:
            raise ValueError(f"Parameter shapes differ: {u.shape} vs {v.shape}")
        if not np.any(u) or not np.any(v):
            return 0.0
        return float(abs(1.0 - cosine(u, v)))
