"""3D plane model in implicit form Ax + By + Cz + D = 0."""

import math
from typing import ClassVar, Sequence, Tuple

from robustfit.estimation.errors import DegenerateSampleError
from robustfit.estimation.model import check_sample_size

# Smallest sine of the angle between the two sample edges
_MIN_SINE = 1e-12


class PlaneModel:
    """Plane through three points, scored by point-to-plane distance."""

    MIN_SAMPLES: ClassVar[int] = 3

    def __init__(self, a: float, b: float, c: float, d: float):
        denominator = math.sqrt(a * a + b * b + c * c)
        if denominator == 0.0:
            raise DegenerateSampleError("PlaneModel - normal vector is zero")

        self.A = float(a)
        self.B = float(b)
        self.C = float(c)
        self.D = float(d)
        self._dist_denominator = denominator

    @classmethod
    def from_sample(cls, samples: Sequence) -> "PlaneModel":
        """
        Build the plane through three points.

        The normal is the cross product of the two edges leaving the first
        point; D places the plane through that point.
        """
        check_sample_size(samples, cls.MIN_SAMPLES, cls.__name__)
        p1, p2, p3 = samples

        ax, ay, az = p2[0] - p1[0], p2[1] - p1[1], p2[2] - p1[2]
        bx, by, bz = p3[0] - p1[0], p3[1] - p1[1], p3[2] - p1[2]

        a = ay * bz - az * by
        b = az * bx - ax * bz
        c = ax * by - ay * bx

        # |a x b| = |a| |b| sin(theta), compared relative to the edge lengths
        edge_product = (math.sqrt(ax * ax + ay * ay + az * az)
                        * math.sqrt(bx * bx + by * by + bz * bz))
        if math.sqrt(a * a + b * b + c * c) <= _MIN_SINE * edge_product:
            raise DegenerateSampleError("PlaneModel - sample points are collinear")

        d = -(a * p1[0] + b * p1[1] + c * p1[2])
        return cls(a, b, c, d)

    def distance_to(self, observation) -> float:
        x, y, z = observation[0], observation[1], observation[2]
        return abs(self.A * x + self.B * y + self.C * z + self.D) / self._dist_denominator

    def parameters(self) -> Tuple[float, float, float, float]:
        return (self.A, self.B, self.C, self.D)

    def normal(self) -> Tuple[float, float, float]:
        """Unit normal of the plane."""
        n = self._dist_denominator
        return (self.A / n, self.B / n, self.C / n)

    def __repr__(self):
        return (f"PlaneModel(A={self.A:.6g}, B={self.B:.6g}, "
                f"C={self.C:.6g}, D={self.D:.6g})")
