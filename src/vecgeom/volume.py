"""Volumes of simple solids and areas of planar polygons.

Degenerate shapes are not errors here: a flat tetrahedron has volume
zero, a set of coincident points bounds a box of volume zero and a
polygon whose vertices are collinear has area zero.  Only values that
are outside the domain (negative radii, too few points) raise.

Polygon areas are computed in the least-squares plane of the vertices,
so slightly non-planar input still yields a sensible area.

Copyright (c) 2025 vecgeom contributors
MIT License
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from vecgeom.errors import DegenerateInputError, InvalidArgument
from vecgeom.linear import Plane3
from vecgeom.primitives import AABB
from vecgeom.result import Result
from vecgeom.vector import Vector3, cross, dot, epsilon, require_nonnegative, vec

logger = logging.getLogger(__name__)


def scalar_triple_product(a, b, c) -> float:
    """``a . (b x c)``, the signed volume of the parallelepiped."""
    return dot(vec(a), cross(vec(b), vec(c)))


def tetrahedron_volume(a, b, c, d) -> float:
    """Volume of the tetrahedron with vertices ``a``, ``b``, ``c``, ``d``."""
    a = vec(a)
    return abs(scalar_triple_product(vec(b) - a, vec(c) - a, vec(d) - a)) / 6.0


def sphere_volume(radius: float) -> float:
    r = require_nonnegative('radius', radius)
    return 4.0 / 3.0 * math.pi * r ** 3


def cylinder_volume(radius: float, height: float) -> float:
    r = require_nonnegative('radius', radius)
    h = require_nonnegative('height', height)
    return math.pi * r * r * h


# -----------------------------------------------------------------------------
# Bounding boxes
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class BoxVolumeResult(Result):
    volume: float
    min_point: Vector3
    max_point: Vector3
    dimensions: Vector3


def bounding_box(points: Sequence) -> AABB:
    """Smallest axis-aligned box containing ``points``."""
    pts = [vec(p) for p in points]
    if not pts:
        raise InvalidArgument('at least one point is required', {'count': 0})
    lo = Vector3(min(p.x for p in pts), min(p.y for p in pts), min(p.z for p in pts))
    hi = Vector3(max(p.x for p in pts), max(p.y for p in pts), max(p.z for p in pts))
    return AABB(lo, hi)


def aabb_volume(points: Sequence) -> BoxVolumeResult:
    box = bounding_box(points)
    return BoxVolumeResult(volume=box.volume(),
                           min_point=box.min,
                           max_point=box.max,
                           dimensions=box.dimensions())


# -----------------------------------------------------------------------------
# Polygons and pyramids
# -----------------------------------------------------------------------------

def _principal_axes(points: Sequence) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Centroid, singular values and right singular vectors of ``points``.

    Rows of the returned ``vh`` are the in-plane axes followed by the
    normal of the least-squares plane.
    """
    pts = np.asarray([tuple(vec(p)) for p in points], dtype=float)
    if pts.shape[0] < 3:
        raise InvalidArgument('at least 3 points are required',
                              {'count': int(pts.shape[0])})
    centroid = pts.mean(axis=0)
    _, s, vh = np.linalg.svd(pts - centroid, full_matrices=False)
    return centroid, s, vh


def _is_flat(s: np.ndarray, tol: float) -> bool:
    # rank < 2: every point on one line (or all coincident)
    return s[1] < tol * max(1.0, s[0])


def fit_plane(points: Sequence, tol: float = epsilon) -> Plane3:
    """Least-squares plane through ``points``, anchored at their centroid.

    Raises
    ------
    InvalidArgument
        If fewer than three points are given.
    DegenerateInputError
        If the points are collinear or coincident.
    """
    centroid, s, vh = _principal_axes(points)
    if _is_flat(s, tol):
        raise DegenerateInputError('points are collinear, cannot fit a plane',
                                   {'singular_values': tuple(float(x) for x in s)})
    return Plane3(Vector3(*(float(x) for x in centroid)),
                  Vector3(*(float(x) for x in vh[2])))


def polygon_area(points: Sequence, tol: float = epsilon) -> float:
    """Area of the polygon with vertices ``points`` in order.

    The vertices are projected onto their best-fit plane and measured
    with the shoelace formula.  Collinear or coincident vertices give
    zero.
    """
    points = list(points)
    centroid, s, vh = _principal_axes(points)
    if _is_flat(s, tol):
        logger.debug('polygon_area: vertices are collinear, area is zero')
        return 0.0
    q = np.asarray([tuple(vec(p)) for p in points], dtype=float) - centroid
    x = q @ vh[0]
    y = q @ vh[1]
    return 0.5 * abs(float(np.dot(x, np.roll(y, -1)) - np.dot(np.roll(x, -1), y)))


@dataclass(frozen=True)
class PyramidVolumeResult(Result):
    volume: float
    base_area: float
    height: float
    base_plane: Optional[Plane3]


def pyramid_volume(base_points: Sequence, apex, tol: float = epsilon) -> PyramidVolumeResult:
    """Volume of a pyramid over a polygonal base.

    The height is the distance from ``apex`` to the best-fit plane of
    the base.  A base with zero area yields a zero volume, a zero height
    and no ``base_plane``.
    """
    apex = vec(apex)
    base_points = list(base_points)
    area = polygon_area(base_points, tol)
    if area < tol:
        logger.debug('pyramid_volume: degenerate base, volume is zero')
        return PyramidVolumeResult(volume=0.0, base_area=area, height=0.0,
                                   base_plane=None)
    plane = fit_plane(base_points, tol)
    h = abs(plane.signed_distance(apex))
    return PyramidVolumeResult(volume=area * h / 3.0,
                               base_area=area,
                               height=h,
                               base_plane=plane)


__all__ = [
    'scalar_triple_product',
    'tetrahedron_volume',
    'sphere_volume',
    'cylinder_volume',
    'BoxVolumeResult',
    'bounding_box',
    'aabb_volume',
    'fit_plane',
    'polygon_area',
    'PyramidVolumeResult',
    'pyramid_volume',
]
