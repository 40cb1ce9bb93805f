"""Lines, planes, and their intersections.

A ``Line3`` is an infinite line through ``point`` along ``direction``,
parameterized as ``point + t * direction``.  The direction need not be
unit length; classification tests normalize it internally, while the
reported parameters are in the line's own parameterization.

A ``Plane3`` is the infinite plane through ``point`` with normal
``normal``.  A zero normal is rejected when the plane is built.

Intersections are classified into a closed set of relations per pair
of primitives (``LineRelation``, ``LinePlaneRelation``,
``PlaneRelation``).  Each result record carries the geometry that is
meaningful for its relation and ``None`` elsewhere.

Copyright (c) 2025 vecgeom contributors
MIT License
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from vecgeom.errors import DegenerateInputError, InvalidArgument
from vecgeom.result import Result
from vecgeom.vector import (Vector3, are_parallel, clamp, cross, dist, dot,
                            epsilon, mag, normalize, vec)
from vecgeom.xform import Matrix3

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Primitives
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Line3:
    """Infinite line ``point + t * direction``."""

    point: Vector3
    direction: Vector3

    def __post_init__(self) -> None:
        object.__setattr__(self, 'point', vec(self.point))
        object.__setattr__(self, 'direction', vec(self.direction))

    @classmethod
    def through(cls, p1, p2) -> "Line3":
        """Line through two points, with ``t=0`` at ``p1`` and ``t=1`` at ``p2``."""
        p1 = vec(p1)
        return cls(p1, vec(p2) - p1)

    def point_at(self, t: float) -> Vector3:
        return self.point + self.direction * t

    def unit_direction(self, tol: float = epsilon) -> Vector3:
        return normalize(self.direction, tol)


@dataclass(frozen=True)
class Plane3:
    """Infinite plane through ``point`` with normal ``normal``."""

    point: Vector3
    normal: Vector3

    def __post_init__(self) -> None:
        object.__setattr__(self, 'point', vec(self.point))
        object.__setattr__(self, 'normal', vec(self.normal))
        if mag(self.normal) < epsilon:
            raise DegenerateInputError('plane normal cannot be zero',
                                       {'normal': self.normal})

    @classmethod
    def from_points(cls, p1, p2, p3, tol: float = epsilon) -> "Plane3":
        """Plane through three points, normal ``(p2-p1) x (p3-p1)``."""
        p1, p2, p3 = vec(p1), vec(p2), vec(p3)
        n = cross(p2 - p1, p3 - p1)
        if mag(n) < tol:
            raise DegenerateInputError('points are collinear, cannot define a plane',
                                       {'points': (p1, p2, p3)})
        return cls(p1, n)

    def unit_normal(self) -> Vector3:
        return normalize(self.normal)

    def signed_distance(self, p) -> float:
        """Distance of ``p`` from the plane, positive on the normal side."""
        return dot(self.unit_normal(), vec(p) - self.point)

    def project(self, p) -> Vector3:
        """Orthogonal projection of ``p`` onto the plane."""
        p = vec(p)
        return p - self.unit_normal() * self.signed_distance(p)


# -----------------------------------------------------------------------------
# Line / line
# -----------------------------------------------------------------------------

class LineRelation(Enum):
    INTERSECTING = 'intersecting'
    PARALLEL = 'parallel'
    SKEW = 'skew'
    COINCIDENT = 'coincident'


@dataclass(frozen=True)
class LineLineResult(Result):
    kind: LineRelation
    intersection_point: Optional[Vector3]
    closest_point_line1: Vector3
    closest_point_line2: Vector3
    minimum_distance: float
    parameter_line1: float
    parameter_line2: float

    @property
    def intersects(self) -> bool:
        return self.kind in (LineRelation.INTERSECTING, LineRelation.COINCIDENT)


def line_line_intersection(line1: Line3, line2: Line3,
                           tol: float = epsilon) -> LineLineResult:
    """Classify two lines as intersecting, parallel, skew or coincident.

    The closest points on each line, the distance between them and
    their parameters are reported for every relation.  For parallel and
    coincident lines, the closest point on ``line2`` is its own
    ``point`` and the closest point on ``line1`` is that point's
    projection.

    Raises
    ------
    DegenerateInputError
        If either direction is zero.
    """
    u1 = line1.unit_direction(tol)
    u2 = line2.unit_direction(tol)
    d1 = line1.direction
    d2 = line2.direction

    if mag(cross(u1, u2)) < tol:
        t1 = dot(d1, line2.point - line1.point) / dot(d1, d1)
        c1 = line1.point_at(t1)
        c2 = line2.point
        distance = dist(c1, c2)
        kind = LineRelation.COINCIDENT if distance < tol else LineRelation.PARALLEL
        logger.debug('line_line_intersection: %s, separation %r', kind.value, distance)
        return LineLineResult(kind=kind,
                              intersection_point=None,
                              closest_point_line1=c1,
                              closest_point_line2=c2,
                              minimum_distance=distance,
                              parameter_line1=t1,
                              parameter_line2=0.0)

    # normal equations for min |(p1 + t1 d1) - (p2 + t2 d2)|^2
    w = line1.point - line2.point
    a = dot(d1, d1)
    b = dot(d1, d2)
    c = dot(d2, d2)
    d = dot(d1, w)
    e = dot(d2, w)
    denom = a * c - b * b
    t1 = (b * e - c * d) / denom
    t2 = (a * e - b * d) / denom

    c1 = line1.point_at(t1)
    c2 = line2.point_at(t2)
    distance = dist(c1, c2)
    if distance < tol:
        return LineLineResult(kind=LineRelation.INTERSECTING,
                              intersection_point=(c1 + c2) * 0.5,
                              closest_point_line1=c1,
                              closest_point_line2=c2,
                              minimum_distance=distance,
                              parameter_line1=t1,
                              parameter_line2=t2)
    return LineLineResult(kind=LineRelation.SKEW,
                          intersection_point=None,
                          closest_point_line1=c1,
                          closest_point_line2=c2,
                          minimum_distance=distance,
                          parameter_line1=t1,
                          parameter_line2=t2)


# -----------------------------------------------------------------------------
# Line / plane
# -----------------------------------------------------------------------------

class LinePlaneRelation(Enum):
    INTERSECTING = 'intersecting'
    PARALLEL = 'parallel'
    COINCIDENT = 'coincident'


@dataclass(frozen=True)
class LinePlaneResult(Result):
    kind: LinePlaneRelation
    intersection_point: Optional[Vector3]
    parameter: Optional[float]
    distance_to_plane: float

    @property
    def intersects(self) -> bool:
        return self.kind is not LinePlaneRelation.PARALLEL


def line_plane_intersection(line: Line3, plane: Plane3,
                            tol: float = epsilon) -> LinePlaneResult:
    """Intersect a line with a plane.

    A line parallel to the plane is ``PARALLEL``, or ``COINCIDENT`` when
    it lies in the plane; neither carries an intersection point.
    """
    u = line.unit_direction(tol)
    n = plane.unit_normal()

    if abs(dot(n, u)) < tol:
        distance = abs(plane.signed_distance(line.point))
        kind = LinePlaneRelation.COINCIDENT if distance < tol else LinePlaneRelation.PARALLEL
        logger.debug('line_plane_intersection: %s', kind.value)
        return LinePlaneResult(kind=kind,
                               intersection_point=None,
                               parameter=None,
                               distance_to_plane=distance)

    t = dot(n, plane.point - line.point) / dot(n, line.direction)
    return LinePlaneResult(kind=LinePlaneRelation.INTERSECTING,
                           intersection_point=line.point_at(t),
                           parameter=t,
                           distance_to_plane=0.0)


# -----------------------------------------------------------------------------
# Plane / plane
# -----------------------------------------------------------------------------

class PlaneRelation(Enum):
    INTERSECTING = 'intersecting'
    PARALLEL = 'parallel'
    COINCIDENT = 'coincident'


@dataclass(frozen=True)
class PlanePlaneResult(Result):
    kind: PlaneRelation
    intersection_line: Optional[Line3]
    angle_radians: float
    angle_degrees: float

    @property
    def intersects(self) -> bool:
        return self.kind is not PlaneRelation.PARALLEL


def plane_plane_intersection(plane1: Plane3, plane2: Plane3,
                             tol: float = epsilon) -> PlanePlaneResult:
    """Intersect two planes.

    Non-parallel planes meet in a line with unit direction
    ``n1 x n2``.  Its point is the one closest to the origin, found as
    ``c1*n1 + c2*n2`` from the two plane equations.  The angle between
    the planes is the angle between their normals.
    """
    n1 = plane1.unit_normal()
    n2 = plane2.unit_normal()
    cos_angle = clamp(dot(n1, n2))
    ang = math.acos(cos_angle)

    direction = cross(n1, n2)
    if mag(direction) < tol:
        distance = abs(plane1.signed_distance(plane2.point))
        kind = PlaneRelation.COINCIDENT if distance < tol else PlaneRelation.PARALLEL
        logger.debug('plane_plane_intersection: %s', kind.value)
        return PlanePlaneResult(kind=kind,
                                intersection_line=None,
                                angle_radians=ang,
                                angle_degrees=math.degrees(ang))

    h1 = dot(n1, plane1.point)
    h2 = dot(n2, plane2.point)
    # unit normals: the 2x2 Gram determinant is 1 - (n1.n2)^2
    det = 1.0 - cos_angle * cos_angle
    c1 = (h1 - h2 * cos_angle) / det
    c2 = (h2 - h1 * cos_angle) / det
    p = n1 * c1 + n2 * c2
    return PlanePlaneResult(kind=PlaneRelation.INTERSECTING,
                            intersection_line=Line3(p, normalize(direction)),
                            angle_radians=ang,
                            angle_degrees=math.degrees(ang))


# -----------------------------------------------------------------------------
# Segments
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class SegmentIntersectionResult(Result):
    intersects: bool
    intersection_point: Optional[Vector3]
    closest_point_segment1: Vector3
    closest_point_segment2: Vector3
    parameter_segment1: float
    parameter_segment2: float
    minimum_distance: float


def segment_intersection(a0, a1, b0, b1, tol: float = epsilon) -> SegmentIntersectionResult:
    """Closest approach of segments ``a0-a1`` and ``b0-b1``.

    Parameters run from 0 at the first endpoint to 1 at the second.
    The segments intersect when the closest points are within ``tol``,
    in which case ``intersection_point`` is their midpoint.

    Raises
    ------
    DegenerateInputError
        If either segment has zero length.
    """
    a0, a1, b0, b1 = vec(a0), vec(a1), vec(b0), vec(b1)
    d1 = a1 - a0
    d2 = b1 - b0
    if mag(d1) < tol:
        raise DegenerateInputError('segment 1 has zero length', {'start': a0, 'end': a1})
    if mag(d2) < tol:
        raise DegenerateInputError('segment 2 has zero length', {'start': b0, 'end': b1})

    r = a0 - b0
    a = dot(d1, d1)
    e = dot(d2, d2)
    f = dot(d2, r)
    c = dot(d1, r)
    b = dot(d1, d2)

    if are_parallel(d1, d2, tol):
        s = 0.0
    else:
        s = clamp((b * f - c * e) / (a * e - b * b), 0.0, 1.0)
    t = (b * s + f) / e
    if t < 0.0:
        t = 0.0
        s = clamp(-c / a, 0.0, 1.0)
    elif t > 1.0:
        t = 1.0
        s = clamp((b - c) / a, 0.0, 1.0)

    p1 = a0 + d1 * s
    p2 = b0 + d2 * t
    distance = dist(p1, p2)
    hit = distance < tol
    return SegmentIntersectionResult(intersects=hit,
                                     intersection_point=(p1 + p2) * 0.5 if hit else None,
                                     closest_point_segment1=p1,
                                     closest_point_segment2=p2,
                                     parameter_segment1=s,
                                     parameter_segment2=t,
                                     minimum_distance=distance)


# -----------------------------------------------------------------------------
# Least-squares intersection of many lines
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LeastSquaresResult(Result):
    point: Vector3
    total_squared_distance: float
    distances: Tuple[float, ...]


def _projector(u: Vector3) -> Matrix3:
    # I - u u^T, projection onto the plane perpendicular to unit u
    return Matrix3([[1.0 - u.x * u.x, -u.x * u.y, -u.x * u.z],
                    [-u.y * u.x, 1.0 - u.y * u.y, -u.y * u.z],
                    [-u.z * u.x, -u.z * u.y, 1.0 - u.z * u.z]])


def nearest_point_to_lines(lines: Sequence[Line3],
                           tol: float = epsilon) -> LeastSquaresResult:
    """Point minimizing the sum of squared distances to ``lines``.

    Solves ``sum(P_i) x = sum(P_i p_i)`` where ``P_i`` projects onto the
    plane perpendicular to line ``i``.

    Raises
    ------
    InvalidArgument
        If fewer than two lines are given.
    DegenerateInputError
        If a direction is zero or the lines are all parallel, in which
        case no unique point exists.
    """
    lines = list(lines)
    if len(lines) < 2:
        raise InvalidArgument('at least 2 lines required', {'count': len(lines)})

    A = Matrix3().mul(0.0)
    rhs = Vector3.zero()
    for line in lines:
        P = _projector(line.unit_direction(tol))
        A = A.add(P)
        rhs = rhs + P.mul(line.point)

    x = A.inverse(tol).mul(rhs)
    distances = tuple(mag(cross(x - line.point, line.unit_direction(tol)))
                      for line in lines)
    return LeastSquaresResult(point=x,
                              total_squared_distance=sum(d * d for d in distances),
                              distances=distances)


__all__ = [
    'Line3',
    'Plane3',
    'LineRelation',
    'LineLineResult',
    'line_line_intersection',
    'LinePlaneRelation',
    'LinePlaneResult',
    'line_plane_intersection',
    'PlaneRelation',
    'PlanePlaneResult',
    'plane_plane_intersection',
    'SegmentIntersectionResult',
    'segment_intersection',
    'LeastSquaresResult',
    'nearest_point_to_lines',
]
