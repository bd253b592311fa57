"""Generic robust estimation."""

from robustfit.estimation.errors import (
    RobustFitError, DegenerateSampleError, InsufficientDataError,
)
from robustfit.estimation.model import Model, check_sample_size
from robustfit.estimation.ransac import (
    RANSAC, TrialRecord, required_iterations, check_observations,
)

__all__ = [
    "RobustFitError", "DegenerateSampleError", "InsufficientDataError",
    "Model", "check_sample_size",
    "RANSAC", "TrialRecord", "required_iterations", "check_observations",
]
