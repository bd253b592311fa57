"""Reference line and plane models for the RANSAC estimator."""

from robustfit.models.points import Point2D, Point3D
from robustfit.models.line_model import Line2DModel
from robustfit.models.plane_model import PlaneModel

__all__ = ["Point2D", "Point3D", "Line2DModel", "PlaneModel"]
