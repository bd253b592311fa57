"""Tests for synthetic data generation."""

import pytest
import numpy as np

from robustfit.models.points import Point2D, Point3D
from robustfit.utils.synthetic import (
    create_random_line_points, create_random_plane_points, add_uniform_outliers,
)


class TestLinePoints:
    """Test line point generation."""

    def test_line_point_count(self):
        """Test requested number of points."""
        points = create_random_line_points(n_points=500, rng=0)
        assert len(points) == 500
        assert all(isinstance(p, Point2D) for p in points)

    def test_gaussian_points_are_integral(self):
        """Test Gaussian scatter is snapped to integers."""
        points = create_random_line_points(n_points=50, rng=1)
        assert all(p.x == int(p.x) and p.y == int(p.y) for p in points)

    def test_bounded_perturbation(self):
        """Test bounded noise keeps points inside the band."""
        points = create_random_line_points(n_points=200, perturb=3.0, rng=2, bounded=True)
        assert all(abs(p.x - p.y) <= 6.0 for p in points)

    def test_seed_is_reproducible(self):
        """Test the same seed gives the same points."""
        assert create_random_line_points(rng=3) == create_random_line_points(rng=3)


class TestPlanePoints:
    """Test plane point generation."""

    def test_grid_size(self):
        """Test size x size grid."""
        points = create_random_plane_points(size=20, rng=0)
        assert len(points) == 400
        assert all(isinstance(p, Point3D) for p in points)

    def test_exact_plane(self):
        """Test zero perturbation puts points on the plane."""
        points = create_random_plane_points(size=10, coefficients=(1.0, 0.0, -1.0, 0.0),
                                            perturb=0.0)
        assert all(p.z == pytest.approx(p.x) for p in points)
        assert points[1] == Point3D(1.0, 0.0, 1.0)

    def test_vertical_plane_rejected(self):
        """Test c = 0 cannot be solved for z."""
        with pytest.raises(ValueError):
            create_random_plane_points(coefficients=(1.0, 0.0, 0.0, 0.0))


class TestOutliers:
    """Test outlier contamination."""

    def test_outlier_count_and_mask(self):
        """Test the requested fraction is replaced."""
        clean = create_random_plane_points(size=10, perturb=0.0)
        points, mask = add_uniform_outliers(clean, 0.2, 0.0, 50.0, rng=4)

        assert len(points) == len(clean)
        assert mask.dtype == bool
        assert int(mask.sum()) == 20
        for i in np.flatnonzero(~mask):
            assert points[i] == clean[i]
        for i in np.flatnonzero(mask):
            assert isinstance(points[i], Point3D)
            assert all(0.0 <= v <= 50.0 for v in points[i])

    def test_input_is_not_mutated(self):
        """Test the input sequence is left untouched."""
        clean = create_random_line_points(n_points=30, rng=5)
        snapshot = list(clean)
        add_uniform_outliers(clean, 0.5, 0.0, 10.0, rng=6)
        assert clean == snapshot

    def test_invalid_ratio(self):
        """Test ratio outside [0, 1] is rejected."""
        with pytest.raises(ValueError):
            add_uniform_outliers([Point2D(0.0, 0.0)], 1.5, 0.0, 1.0)

    def test_empty_input(self):
        """Test empty input gives an empty mask."""
        points, mask = add_uniform_outliers([], 0.5, 0.0, 1.0)
        assert points == []
        assert mask.shape == (0,)
