"""Synthetic line and plane data for exercising the estimator."""

import math
import numpy as np
from typing import List, Sequence, Tuple, Union

from robustfit.models.points import Point2D, Point3D


def _as_rng(rng: Union[np.random.Generator, int, None]) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def create_random_line_points(n_points: int = 500, side: int = 1000, perturb: float = 25.0,
                              rng: Union[np.random.Generator, int, None] = None,
                              bounded: bool = False) -> List[Point2D]:
    """
    Generate points scattered around the diagonal y = x.

    Args:
        n_points: number of points
        side: positions along the diagonal are drawn from [0, side)
        perturb: Gaussian sigma, or the half-width of a uniform band when bounded
        rng: generator or seed
        bounded: use uniform noise in [-perturb, perturb] instead of Gaussian noise

    Returns:
        List of Point2D
    """
    rng = _as_rng(rng)
    diag = rng.integers(0, side, size=n_points).astype(np.float64)

    if bounded:
        noise = rng.uniform(-perturb, perturb, size=(n_points, 2))
        xs = diag + noise[:, 0]
        ys = diag + noise[:, 1]
    else:
        # Gaussian scatter snapped to the integer grid
        noise = rng.normal(0.0, perturb, size=(n_points, 2))
        xs = np.floor(diag + noise[:, 0])
        ys = np.floor(diag + noise[:, 1])

    return [Point2D(float(x), float(y)) for x, y in zip(xs, ys)]


def create_random_plane_points(size: int = 100,
                               coefficients: Sequence[float] = (math.sqrt(2) * 0.5, 0.0,
                                                                math.sqrt(2) * 0.5, -1.0),
                               perturb: float = 2.0,
                               rng: Union[np.random.Generator, int, None] = None) -> List[Point3D]:
    """
    Generate a size x size grid of points on the plane ax + by + cz + d = 0.

    z is solved from the plane equation and perturbed with Gaussian noise of
    sigma `perturb`; perturb=0 puts every point exactly on the plane.
    """
    a, b, c, d = map(float, coefficients)
    if c == 0.0:
        raise ValueError("Plane coefficient c must be non-zero to solve for z")

    rng = _as_rng(rng)
    ys, xs = np.mgrid[0:size, 0:size].astype(np.float64)
    zs = -(a * xs + b * ys + d) / c
    if perturb > 0:
        zs = zs + rng.normal(0.0, perturb, size=zs.shape)

    return [Point3D(float(x), float(y), float(z))
            for x, y, z in zip(xs.ravel(), ys.ravel(), zs.ravel())]


def add_uniform_outliers(points: Sequence, ratio: float, low: float, high: float,
                         rng: Union[np.random.Generator, int, None] = None
                         ) -> Tuple[list, np.ndarray]:
    """
    Replace a random fraction of points with uniform noise.

    Args:
        points: Point2D or Point3D sequence, left untouched
        ratio: fraction of points to replace, in [0, 1]
        low, high: bounds of the uniform box on every axis
        rng: generator or seed

    Returns:
        (new point list, boolean mask marking the replaced points)
    """
    if not 0.0 <= ratio <= 1.0:
        raise ValueError(f"ratio must be in [0, 1], got {ratio}")

    points = list(points)
    n = len(points)
    outlier_mask = np.zeros(n, dtype=bool)
    if n == 0:
        return points, outlier_mask

    rng = _as_rng(rng)
    point_type = type(points[0])
    dim = len(points[0])

    n_outliers = int(round(ratio * n))
    chosen = rng.choice(n, size=n_outliers, replace=False)
    coords = rng.uniform(low, high, size=(n_outliers, dim))

    for idx, row in zip(chosen, coords):
        points[idx] = point_type(*map(float, row))
        outlier_mask[idx] = True

    return points, outlier_mask
