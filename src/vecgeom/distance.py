"""Distances and orthogonal projections.

Copyright (c) 2025 vecgeom contributors
MIT License
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum

from vecgeom.linear import Line3, Plane3
from vecgeom.result import Result
from vecgeom.vector import (Vector3, angle, are_parallel, are_perpendicular,
                            dot, epsilon, iszero, mag, normalize, vec)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PointLineResult(Result):
    distance: float
    closest_point: Vector3
    parameter: float
    perpendicular: Vector3
    on_line: bool


def point_line_distance(p, line: Line3, tol: float = epsilon) -> PointLineResult:
    """Distance from ``p`` to an infinite line.

    ``closest_point`` is the foot of the perpendicular from ``p``,
    ``parameter`` its position along the line and ``perpendicular`` the
    vector from the foot to ``p``.
    """
    p = vec(p)
    u = line.unit_direction(tol)
    w = p - line.point
    foot = line.point + u * dot(w, u)
    perp = p - foot
    d = mag(perp)
    return PointLineResult(distance=d,
                           closest_point=foot,
                           parameter=dot(w, line.direction) / dot(line.direction, line.direction),
                           perpendicular=perp,
                           on_line=d < tol)


def project_point_on_line(p, line: Line3, tol: float = epsilon) -> Vector3:
    return point_line_distance(p, line, tol).closest_point


class PlaneSide(Enum):
    POSITIVE = 'positive'
    NEGATIVE = 'negative'
    ON_PLANE = 'on_plane'


@dataclass(frozen=True)
class PointPlaneResult(Result):
    distance: float
    signed_distance: float
    closest_point: Vector3
    side: PlaneSide


def point_plane_distance(p, plane: Plane3, tol: float = epsilon) -> PointPlaneResult:
    """Distance from ``p`` to a plane, signed positive on the normal side."""
    p = vec(p)
    s = plane.signed_distance(p)
    if abs(s) < tol:
        side = PlaneSide.ON_PLANE
    elif s > 0:
        side = PlaneSide.POSITIVE
    else:
        side = PlaneSide.NEGATIVE
    return PointPlaneResult(distance=abs(s),
                            signed_distance=s,
                            closest_point=p - plane.unit_normal() * s,
                            side=side)


def project_point_on_plane(p, plane: Plane3) -> Vector3:
    return plane.project(p)


def line_plane_distance(line: Line3, plane: Plane3, tol: float = epsilon) -> float:
    """Distance between a line and a plane: zero unless they are parallel."""
    u = line.unit_direction(tol)
    if abs(dot(plane.unit_normal(), u)) >= tol:
        return 0.0
    logger.debug('line_plane_distance: line is parallel to the plane')
    return abs(plane.signed_distance(line.point))


@dataclass(frozen=True)
class ProjectionResult(Result):
    scalar_projection: float
    vector_projection: Vector3
    rejection: Vector3
    angle_radians: float
    are_parallel: bool
    are_perpendicular: bool

    @property
    def angle_degrees(self) -> float:
        return math.degrees(self.angle_radians)


def vector_projection(a, b, tol: float = epsilon) -> ProjectionResult:
    """Project ``a`` onto ``b``.

    ``a`` splits as ``vector_projection + rejection``, the rejection
    being perpendicular to ``b``.  A zero ``a`` projects to zero with an
    angle of zero.

    Raises
    ------
    DegenerateInputError
        If ``b`` is shorter than ``tol``.
    """
    a = vec(a)
    b = vec(b)
    ub = normalize(b, tol)
    s = dot(a, ub)
    proj = ub * s
    return ProjectionResult(scalar_projection=s,
                            vector_projection=proj,
                            rejection=a - proj,
                            angle_radians=0.0 if iszero(a, tol) else angle(a, b, tol),
                            are_parallel=are_parallel(a, b, tol),
                            are_perpendicular=are_perpendicular(a, b, tol))


__all__ = [
    'PointLineResult',
    'point_line_distance',
    'project_point_on_line',
    'PlaneSide',
    'PointPlaneResult',
    'point_plane_distance',
    'project_point_on_plane',
    'line_plane_distance',
    'ProjectionResult',
    'vector_projection',
]
