"""
robustfit

Generic RANSAC estimation with an adaptive trial budget, plus reference
line and plane models.
"""

from robustfit.estimation import (
    RANSAC, Model, TrialRecord,
    RobustFitError, DegenerateSampleError, InsufficientDataError,
)
from robustfit.models import Point2D, Point3D, Line2DModel, PlaneModel

__version__ = "1.0.0"

__all__ = [
    "RANSAC", "Model", "TrialRecord",
    "RobustFitError", "DegenerateSampleError", "InsufficientDataError",
    "Point2D", "Point3D", "Line2DModel", "PlaneModel",
]
