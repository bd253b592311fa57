"""Immutable observation types used by the reference models."""

from typing import NamedTuple


class Point2D(NamedTuple):
    x: float
    y: float


class Point3D(NamedTuple):
    x: float
    y: float
    z: float
