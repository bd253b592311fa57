"""I/O handling for point files, model parameters, and JSON output."""

import json
import numpy as np
from pathlib import Path
from typing import Dict, List, Sequence, Union

from robustfit.models.points import Point2D, Point3D


def save_points(points: Sequence, output_path: str):
    """Save points as `x,y,z` lines; 2D points get z = 0."""
    rows = np.zeros((len(points), 3), dtype=np.float64)
    for i, p in enumerate(points):
        values = tuple(p)[:3]
        rows[i, :len(values)] = values

    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    np.savetxt(output_path, rows, fmt='%f', delimiter=',')


def load_points(input_path: str, dim: int = 3) -> List[Union[Point2D, Point3D]]:
    """Load points written by save_points."""
    if dim not in (2, 3):
        raise ValueError(f"dim must be 2 or 3, got {dim}")

    rows = np.loadtxt(input_path, delimiter=',', ndmin=2)
    if rows.size == 0:
        return []
    if rows.shape[1] < dim:
        raise ValueError(f"Expected at least {dim} columns in {input_path}, got {rows.shape[1]}")

    point_type = Point2D if dim == 2 else Point3D
    return [point_type(*map(float, row[:dim])) for row in rows]


def save_parameters(params: Sequence[float], output_path: str):
    """Save model coefficients, one per line."""
    Path(output_path).parent.mkdir(parents=True, exist_ok=True)
    np.savetxt(output_path, np.asarray(params, dtype=np.float64), fmt='%f')


class JSONWriter:
    """Write fitting results to JSON."""

    @staticmethod
    def save_results(output_dict: Dict, output_path: str, indent: int = 2):
        """Save results to JSON file."""
        Path(output_path).parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            json.dump(output_dict, f, indent=indent)

    @staticmethod
    def load_results(input_path: str) -> Dict:
        """Load results from JSON file."""
        with open(input_path, 'r') as f:
            return json.load(f)
