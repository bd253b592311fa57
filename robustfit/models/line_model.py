"""2D line model in implicit form Ax + By + C = 0."""

import math
from typing import ClassVar, Sequence, Tuple

from robustfit.estimation.errors import DegenerateSampleError
from robustfit.estimation.model import check_sample_size

# Smallest point separation relative to the coordinate magnitude
_MIN_SEPARATION = 1e-12


class Line2DModel:
    """Line through two points, scored by perpendicular distance."""

    MIN_SAMPLES: ClassVar[int] = 2

    def __init__(self, a: float, b: float, c: float):
        denominator = math.sqrt(a * a + b * b)
        if denominator == 0.0:
            raise DegenerateSampleError("Line2DModel - normal vector is zero")

        self.A = float(a)
        self.B = float(b)
        self.C = float(c)
        self._dist_denominator = denominator

    @classmethod
    def from_sample(cls, samples: Sequence) -> "Line2DModel":
        """
        Build the line through two points.

        Args:
            samples: two observations indexable as (x, y)

        Returns:
            Fitted Line2DModel
        """
        check_sample_size(samples, cls.MIN_SAMPLES, cls.__name__)
        p1, p2 = samples

        a = p2[1] - p1[1]
        b = p1[0] - p2[0]

        # The normal (a, b) has the length of the separation between the points
        scale = max(math.hypot(p1[0], p1[1]), math.hypot(p2[0], p2[1]))
        if math.hypot(a, b) <= _MIN_SEPARATION * scale:
            raise DegenerateSampleError("Line2DModel - points coincide")

        c = p2[0] * p1[1] - p1[0] * p2[1]
        return cls(a, b, c)

    def distance_to(self, observation) -> float:
        """Perpendicular distance between the point and the line."""
        x, y = observation[0], observation[1]
        return abs(self.A * x + self.B * y + self.C) / self._dist_denominator

    def parameters(self) -> Tuple[float, float, float]:
        return (self.A, self.B, self.C)

    def __repr__(self):
        return f"Line2DModel(A={self.A:.6g}, B={self.B:.6g}, C={self.C:.6g})"
