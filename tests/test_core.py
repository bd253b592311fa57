"""Tests for the fitting processor."""

import logging

import pytest

from robustfit.core import FittingProcessor, MODEL_TYPES
from robustfit.models.line_model import Line2DModel
from robustfit.models.plane_model import PlaneModel
from robustfit.models.points import Point2D
from robustfit.utils.synthetic import (
    create_random_line_points, create_random_plane_points, add_uniform_outliers,
)


class TestFittingProcessor:
    """Test processor setup and results."""

    def test_processor_initialization(self):
        """Test processor builds one estimator per model kind."""
        processor = FittingProcessor()
        assert set(processor.estimators) == set(MODEL_TYPES)
        assert processor.estimators['line'].model_type is Line2DModel
        assert processor.estimators['plane'].model_type is PlaneModel
        assert processor.estimators['line'].threshold == 10.0
        assert processor.estimators['plane'].threshold == 0.5

    def test_config_overrides(self):
        """Test user config is merged over defaults."""
        processor = FittingProcessor({"ransac": {"num_workers": 2}, "line": {"threshold": 3.0}})
        assert processor.estimators['line'].threshold == 3.0
        assert processor.estimators['line'].num_workers == 2
        assert processor.estimators['plane'].num_workers == 2

    def test_process_line(self):
        """Test a successful line fit result."""
        processor = FittingProcessor({"ransac": {"seed": 1}})
        points = create_random_line_points(n_points=200, perturb=4.0, rng=1, bounded=True)

        result = processor.process(points, model="line")
        assert result['status'] == 'success'
        assert result['model']['type'] == 'line'
        assert len(result['model']['parameters']) == 3
        assert result['model']['inlier_count'] == len(result['model']['inlier_indices'])
        assert result['model']['inlier_ratio'] >= 0.6
        assert result['processing_metadata']['num_points'] == 200
        assert result['processing_metadata']['iterations'] >= 1
        assert result['processing_metadata']['errors'] == []

    def test_process_plane(self):
        """Test a successful plane fit result."""
        processor = FittingProcessor({"ransac": {"seed": 2}})
        clean = create_random_plane_points(size=30, coefficients=(0.0, 1.0, -1.0, 5.0),
                                           perturb=0.0)
        points, _ = add_uniform_outliers(clean, 0.2, 0.0, 40.0, rng=2)

        result = processor.process(points, model="plane")
        assert result['status'] == 'success'
        assert len(result['model']['parameters']) == 4
        assert result['model']['inlier_count'] >= 720

    def test_insufficient_points_fail(self):
        """Test too few points give a failed status with an error message."""
        processor = FittingProcessor()
        result = processor.process([Point2D(0.0, 0.0), Point2D(1.0, 1.0)], model="line")

        assert result['status'] == 'failed'
        assert result['model']['parameters'] is None
        assert result['model']['inlier_count'] == 0
        errors = result['processing_metadata']['errors']
        assert errors == ["Got 2 observations, need more than 2"]

    def test_no_consensus(self):
        """Test scattered points with a tiny threshold find no consensus."""
        processor = FittingProcessor({"line": {"threshold": 1e-9, "max_iterations": 30}})
        points = create_random_line_points(n_points=25, perturb=50.0, rng=3, bounded=True)

        result = processor.process(points, model="line")
        assert result['status'] == 'no_consensus'
        assert result['model']['inlier_indices'] == []

    def test_unknown_model(self):
        """Test unsupported model kinds are rejected."""
        with pytest.raises(ValueError):
            FittingProcessor().process([], model="circle")

    def test_inlier_points(self):
        """Test selecting inlier observations from a result."""
        points = [Point2D(float(i), float(i)) for i in range(10)]
        result = FittingProcessor({"ransac": {"seed": 4}}).process(points, model="line")
        assert FittingProcessor.inlier_points(points, result) == points

    def test_logging_section_configures_logger(self, tmp_path):
        """Test the logging config section sets the level and log file of the package logger."""
        package_logger = logging.getLogger('robustfit')
        saved_level = package_logger.level
        saved_handlers = list(package_logger.handlers)
        log_file = tmp_path / "fit.log"

        try:
            processor = FittingProcessor({
                "ransac": {"seed": 2},
                "logging": {"level": "DEBUG", "log_file": str(log_file)},
            })
            assert package_logger.level == logging.DEBUG
            processor.process(create_random_line_points(n_points=50, perturb=2.0, rng=2,
                                                        bounded=True), model="line")

            for handler in package_logger.handlers:
                handler.flush()
            assert "Fitted line" in log_file.read_text()
        finally:
            for handler in list(package_logger.handlers):
                if handler not in saved_handlers:
                    handler.close()
                    package_logger.removeHandler(handler)
            package_logger.setLevel(saved_level)
