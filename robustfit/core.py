"""
robustfit Core Processor
Main entry point for fitting lines and planes to contaminated point sets
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from robustfit.config import DEFAULT_CONFIG, estimator_settings, merge_config
from robustfit.estimation.errors import InsufficientDataError
from robustfit.estimation.ransac import RANSAC
from robustfit.models.line_model import Line2DModel
from robustfit.models.plane_model import PlaneModel
from robustfit.utils.logger import setup_logger_from_config
from robustfit.utils.metrics import PerformanceMetrics

logger = logging.getLogger(__name__)

MODEL_TYPES = {
    "line": Line2DModel,
    "plane": PlaneModel,
}


class FittingProcessor:
    """Run RANSAC on point sets using config-driven settings"""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the processor

        Args:
            config: Configuration dictionary merged over DEFAULT_CONFIG (optional)
        """
        self.config = merge_config(DEFAULT_CONFIG, config)
        self.version = "1.0.0"
        self.metrics = PerformanceMetrics()
        setup_logger_from_config(self.config["logging"])

        self.estimators: Dict[str, RANSAC] = {}
        for kind, model_type in MODEL_TYPES.items():
            settings = estimator_settings(self.config, kind)
            self.estimators[kind] = RANSAC(
                model_type,
                threshold=settings["threshold"],
                max_iters=settings["max_iterations"],
                probability=settings["success_probability"],
                num_workers=settings.get("num_workers", 1),
                seed=settings.get("seed"),
            )

    def process(self, points: Sequence, model: str = "line") -> Dict[str, Any]:
        """
        Fit a model to a point set

        Args:
            points: Sequence of observations (Point2D for lines, Point3D for planes)
            model: Model kind, "line" or "plane"

        Returns:
            Dictionary describing the best model and its consensus set
        """
        if model not in self.estimators:
            raise ValueError(f"Unknown model kind '{model}', expected one of {sorted(self.estimators)}")

        estimator = self.estimators[model]
        timer_name = f"ransac_{model}"
        self.metrics.start_timer(timer_name)

        ok = estimator.estimate(points)
        processing_time = self.metrics.stop_timer(timer_name)

        errors: List[str] = []
        if not ok:
            errors.append(str(InsufficientDataError(len(points), estimator.min_samples)))

        best = estimator.best_model if ok else None
        if not ok:
            status = "failed"
        elif best is None:
            status = "no_consensus"
        else:
            status = "success"

        n = len(points)
        inliers = list(estimator.inlier_indices) if best is not None else []

        result = {
            "system": "robustfit",
            "version": self.version,
            "timestamp": datetime.now().isoformat(),
            "status": status,

            "model": {
                "type": model,
                "parameters": list(best.parameters()) if best is not None else None,
                "inlier_count": len(inliers),
                "inlier_ratio": round(len(inliers) / n, 4) if n else 0.0,
                "inlier_indices": inliers,
            },

            "processing_metadata": {
                "processing_time_ms": round(processing_time, 2),
                "num_points": n,
                "iterations": estimator.iterations if ok else 0,
                "threshold": estimator.threshold,
                "max_iterations": estimator.max_iters,
                "success_probability": estimator.probability,
                "num_workers": estimator.num_workers,
                "errors": errors
            }
        }

        logger.info("Fitted %s: status=%s, inliers=%d/%d", model, status, len(inliers), n)
        return result

    @staticmethod
    def inlier_points(points: Sequence, result: Dict[str, Any]) -> list:
        """Select the observations listed as inliers in a result."""
        return [points[i] for i in result["model"]["inlier_indices"]]
