"""Rays, spheres, cylinders and axis-aligned boxes, and the
intersection tests between them.

Distances along a ray are measured along its unit direction, so a
hit's ``distance`` is the Euclidean distance from the ray origin.
Only hits at non-negative distance are reported; a ray starting inside
a solid reports only the hits ahead of it.

Copyright (c) 2025 vecgeom contributors
MIT License
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from vecgeom.errors import DegenerateInputError, InvalidArgument
from vecgeom.result import Result
from vecgeom.vector import (Vector3, dist, dot, epsilon, mag, normalize,
                            require_nonnegative, vec)

logger = logging.getLogger(__name__)

_AXIS_NAMES = ('x', 'y', 'z')


# -----------------------------------------------------------------------------
# Primitives
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Ray3:
    """Half-line ``origin + t * direction`` for ``t >= 0``."""

    origin: Vector3
    direction: Vector3

    def __post_init__(self) -> None:
        object.__setattr__(self, 'origin', vec(self.origin))
        object.__setattr__(self, 'direction', vec(self.direction))

    def unit_direction(self, tol: float = epsilon) -> Vector3:
        return normalize(self.direction, tol)

    def point_at(self, distance: float) -> Vector3:
        """Point ``distance`` units from the origin along the ray."""
        return self.origin + self.unit_direction() * distance


@dataclass(frozen=True)
class Sphere:
    center: Vector3
    radius: float

    def __post_init__(self) -> None:
        object.__setattr__(self, 'center', vec(self.center))
        object.__setattr__(self, 'radius', require_nonnegative('radius', self.radius))


@dataclass(frozen=True)
class Cylinder:
    """Finite right circular cylinder.

    The axis runs from ``base_center`` to ``base_center + a * height``
    where ``a`` is the unit ``axis``.
    """

    base_center: Vector3
    axis: Vector3
    radius: float
    height: float

    def __post_init__(self) -> None:
        object.__setattr__(self, 'base_center', vec(self.base_center))
        object.__setattr__(self, 'axis', vec(self.axis))
        object.__setattr__(self, 'radius', require_nonnegative('radius', self.radius))
        object.__setattr__(self, 'height', require_nonnegative('height', self.height))
        if mag(self.axis) < epsilon:
            raise DegenerateInputError('cylinder axis cannot be zero',
                                       {'axis': self.axis})

    def unit_axis(self) -> Vector3:
        return normalize(self.axis)

    def top_center(self) -> Vector3:
        return self.base_center + self.unit_axis() * self.height


@dataclass(frozen=True)
class AABB:
    """Axis-aligned box with corners ``min`` and ``max``."""

    min: Vector3
    max: Vector3

    def __post_init__(self) -> None:
        lo = vec(self.min)
        hi = vec(self.max)
        for name, a, b in zip(_AXIS_NAMES, lo, hi):
            if a > b:
                raise InvalidArgument(
                    f'box minimum exceeds maximum on the {name} axis',
                    {'min': lo, 'max': hi})
        object.__setattr__(self, 'min', lo)
        object.__setattr__(self, 'max', hi)

    def center(self) -> Vector3:
        return (self.min + self.max) * 0.5

    def dimensions(self) -> Vector3:
        return self.max - self.min

    def volume(self) -> float:
        d = self.dimensions()
        return d.x * d.y * d.z


def point_in_aabb(box: AABB, p, tol: float = epsilon) -> bool:
    """Is ``p`` inside ``box`` or on its boundary."""
    p = vec(p)
    return all(lo - tol <= x <= hi + tol
               for x, lo, hi in zip(p, box.min, box.max))


class CylinderSurface(Enum):
    SIDE = 'side'
    BASE_CAP = 'base_cap'
    TOP_CAP = 'top_cap'


@dataclass(frozen=True)
class RayHit(Result):
    point: Vector3
    distance: float
    normal: Vector3
    surface: Optional[CylinderSurface] = None


# -----------------------------------------------------------------------------
# Ray / sphere
# -----------------------------------------------------------------------------

class RaySphereRelation(Enum):
    MISS = 'miss'
    TANGENT = 'tangent'
    SECANT = 'secant'


@dataclass(frozen=True)
class RaySphereResult(Result):
    kind: RaySphereRelation
    hits: Tuple[RayHit, ...]

    @property
    def intersects(self) -> bool:
        return bool(self.hits)


def _sphere_hit(ray: Ray3, u: Vector3, sphere: Sphere, t: float, tol: float) -> RayHit:
    p = ray.origin + u * t
    if sphere.radius < tol:
        n = Vector3.zero()
    else:
        n = (p - sphere.center) / sphere.radius
    return RayHit(point=p, distance=t, normal=n)


def ray_sphere_intersection(ray: Ray3, sphere: Sphere,
                            tol: float = epsilon) -> RaySphereResult:
    """Intersect a ray with a sphere.

    The relation is decided by the discriminant of the quadratic in the
    distance along the ray and describes the supporting line; ``hits``
    holds only the intersections at non-negative distance, nearest
    first.
    """
    u = ray.unit_direction(tol)
    oc = ray.origin - sphere.center
    b = dot(oc, u)
    c = dot(oc, oc) - sphere.radius * sphere.radius
    disc = b * b - c

    if abs(disc) <= tol:
        kind = RaySphereRelation.TANGENT
        roots = [-b]
    elif disc < 0:
        return RaySphereResult(kind=RaySphereRelation.MISS, hits=())
    else:
        kind = RaySphereRelation.SECANT
        sq = math.sqrt(disc)
        roots = [-b - sq, -b + sq]

    hits = tuple(_sphere_hit(ray, u, sphere, t, tol) for t in roots if t >= 0.0)
    if len(hits) < len(roots):
        logger.debug('ray_sphere_intersection: %d hit(s) behind the ray origin',
                     len(roots) - len(hits))
    return RaySphereResult(kind=kind, hits=hits)


# -----------------------------------------------------------------------------
# Sphere / sphere
# -----------------------------------------------------------------------------

class SphereRelation(Enum):
    SEPARATE = 'separate'
    EXTERNAL_TANGENT = 'external_tangent'
    INTERNAL_TANGENT = 'internal_tangent'
    ONE_INSIDE_OTHER = 'one_inside_other'
    INTERSECTING = 'intersecting'


@dataclass(frozen=True)
class IntersectionCircle(Result):
    center: Vector3
    radius: float
    normal: Vector3


@dataclass(frozen=True)
class SphereSphereResult(Result):
    kind: SphereRelation
    center_distance: float
    circle: Optional[IntersectionCircle] = None
    contact_point: Optional[Vector3] = None


def sphere_sphere_intersection(s1: Sphere, s2: Sphere,
                               tol: float = epsilon) -> SphereSphereResult:
    """Classify the relation of two spheres.

    Intersecting spheres meet in a circle whose plane is perpendicular
    to the line of centers; ``circle.normal`` points from ``s1`` toward
    ``s2``.  Tangent spheres report their ``contact_point``, except for
    identical spheres, which are internally tangent everywhere.
    """
    r1, r2 = s1.radius, s2.radius
    d = dist(s1.center, s2.center)

    if d < tol:
        if abs(r1 - r2) <= tol:
            logger.debug('sphere_sphere_intersection: identical spheres')
            return SphereSphereResult(kind=SphereRelation.INTERNAL_TANGENT,
                                      center_distance=d)
        return SphereSphereResult(kind=SphereRelation.ONE_INSIDE_OTHER,
                                  center_distance=d)

    u = (s2.center - s1.center) / d

    if d > r1 + r2 + tol:
        return SphereSphereResult(kind=SphereRelation.SEPARATE, center_distance=d)
    if abs(d - (r1 + r2)) <= tol:
        return SphereSphereResult(kind=SphereRelation.EXTERNAL_TANGENT,
                                  center_distance=d,
                                  contact_point=s1.center + u * r1)
    if abs(d - abs(r1 - r2)) <= tol:
        # contact lies on the larger sphere, on the ray through the smaller center
        if r1 >= r2:
            contact = s1.center + u * r1
        else:
            contact = s2.center - u * r2
        return SphereSphereResult(kind=SphereRelation.INTERNAL_TANGENT,
                                  center_distance=d,
                                  contact_point=contact)
    if d < abs(r1 - r2):
        return SphereSphereResult(kind=SphereRelation.ONE_INSIDE_OTHER,
                                  center_distance=d)

    a = (d * d + r1 * r1 - r2 * r2) / (2.0 * d)
    h = math.sqrt(max(0.0, r1 * r1 - a * a))
    return SphereSphereResult(kind=SphereRelation.INTERSECTING,
                              center_distance=d,
                              circle=IntersectionCircle(center=s1.center + u * a,
                                                        radius=h,
                                                        normal=u))


# -----------------------------------------------------------------------------
# Ray / cylinder
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RayCylinderResult(Result):
    hits: Tuple[RayHit, ...]
    nearest: Optional[RayHit]

    @property
    def intersects(self) -> bool:
        return self.nearest is not None


def ray_cylinder_intersection(ray: Ray3, cylinder: Cylinder,
                              tol: float = epsilon) -> RayCylinderResult:
    """Intersect a ray with a capped cylinder.

    The lateral surface is found from the quadratic in the components
    perpendicular to the axis; the two caps are disks in the planes at
    either end of the axis.  Hits are sorted by distance and tagged with
    the surface they lie on.
    """
    u = ray.unit_direction(tol)
    a = cylinder.unit_axis()
    base = cylinder.base_center
    r = cylinder.radius
    hits = []

    # lateral surface
    w = ray.origin - base
    dp = u - a * dot(u, a)
    wp = w - a * dot(w, a)
    qa = dot(dp, dp)
    if qa > tol:
        qb = 2.0 * dot(dp, wp)
        qc = dot(wp, wp) - r * r
        disc = qb * qb - 4.0 * qa * qc
        if disc >= -tol:
            sq = math.sqrt(max(0.0, disc))
            roots = [(-qb - sq) / (2.0 * qa)]
            if sq > tol:
                roots.append((-qb + sq) / (2.0 * qa))
            for t in roots:
                if t < 0.0:
                    continue
                p = ray.origin + u * t
                h = dot(p - base, a)
                if -tol <= h <= cylinder.height + tol:
                    radial = (p - base) - a * h
                    n = normalize(radial) if r >= tol else Vector3.zero()
                    hits.append(RayHit(point=p, distance=t, normal=n,
                                       surface=CylinderSurface.SIDE))
    else:
        logger.debug('ray_cylinder_intersection: ray parallel to the axis, '
                     'no lateral hits')

    # caps
    denom = dot(u, a)
    if abs(denom) > tol:
        for center, normal, surface in ((base, -a, CylinderSurface.BASE_CAP),
                                        (cylinder.top_center(), a, CylinderSurface.TOP_CAP)):
            t = dot(center - ray.origin, a) / denom
            if t < 0.0:
                continue
            p = ray.origin + u * t
            if dist(p, center) <= r + tol:
                hits.append(RayHit(point=p, distance=t, normal=normal,
                                   surface=surface))

    hits.sort(key=lambda hit: hit.distance)
    return RayCylinderResult(hits=tuple(hits), nearest=hits[0] if hits else None)


# -----------------------------------------------------------------------------
# Ray / box
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RayBoxResult(Result):
    intersects: bool
    t_enter: Optional[float]
    t_exit: Optional[float]
    hits: Tuple[RayHit, ...]
    origin_inside: bool


def _unit(i: int, sign: float) -> Vector3:
    c = [0.0, 0.0, 0.0]
    c[i] = sign
    return Vector3(*c)


def ray_aabb_intersection(ray: Ray3, box: AABB,
                          tol: float = epsilon) -> RayBoxResult:
    """Intersect a ray with a box using the slab method.

    ``t_enter`` and ``t_exit`` are the distances at which the
    supporting line enters and leaves the box; ``t_enter`` is negative
    when the origin is inside.  Each hit carries the outward normal of
    the face it lies on.
    """
    u = ray.unit_direction(tol)
    o = ray.origin
    inside = point_in_aabb(box, o, tol)

    t_enter, t_exit = -math.inf, math.inf
    n_enter = n_exit = None
    for i in range(3):
        lo, hi = box.min[i], box.max[i]
        if abs(u[i]) < tol:
            if o[i] < lo - tol or o[i] > hi + tol:
                logger.debug('ray_aabb_intersection: ray parallel to and outside '
                             'the %s slab', _AXIS_NAMES[i])
                return RayBoxResult(intersects=False, t_enter=None, t_exit=None,
                                    hits=(), origin_inside=inside)
            continue
        t1 = (lo - o[i]) / u[i]
        t2 = (hi - o[i]) / u[i]
        n1, n2 = _unit(i, -1.0), _unit(i, 1.0)
        if t1 > t2:
            t1, t2 = t2, t1
            n1, n2 = n2, n1
        if t1 > t_enter:
            t_enter, n_enter = t1, n1
        if t2 < t_exit:
            t_exit, n_exit = t2, n2

    if t_enter > t_exit + tol or t_exit < 0.0:
        return RayBoxResult(intersects=False, t_enter=None, t_exit=None,
                            hits=(), origin_inside=inside)

    hits = []
    if t_enter >= 0.0:
        hits.append(RayHit(point=o + u * t_enter, distance=t_enter, normal=n_enter))
    if t_exit - max(t_enter, 0.0) > tol or not hits:
        hits.append(RayHit(point=o + u * t_exit, distance=t_exit, normal=n_exit))
    return RayBoxResult(intersects=True, t_enter=t_enter, t_exit=t_exit,
                        hits=tuple(hits), origin_inside=inside)


# -----------------------------------------------------------------------------
# Box / box
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class BoxOverlapResult(Result):
    intersects: bool
    overlap: Optional[AABB]
    separating_axis: Optional[str]


def aabb_aabb_intersection(a: AABB, b: AABB, tol: float = epsilon) -> BoxOverlapResult:
    """Overlap of two boxes.  Boxes that only touch intersect, with a
    flat overlap box.  Disjoint boxes name the first axis, of ``'x'``,
    ``'y'``, ``'z'``, along which they are separated."""
    for i, name in enumerate(_AXIS_NAMES):
        if a.max[i] < b.min[i] - tol or b.max[i] < a.min[i] - tol:
            return BoxOverlapResult(intersects=False, overlap=None,
                                    separating_axis=name)
    lo = [max(a.min[i], b.min[i]) for i in range(3)]
    hi = [max(lo[i], min(a.max[i], b.max[i])) for i in range(3)]
    return BoxOverlapResult(intersects=True,
                            overlap=AABB(Vector3(*lo), Vector3(*hi)),
                            separating_axis=None)


__all__ = [
    'Ray3',
    'Sphere',
    'Cylinder',
    'AABB',
    'point_in_aabb',
    'CylinderSurface',
    'RayHit',
    'RaySphereRelation',
    'RaySphereResult',
    'ray_sphere_intersection',
    'SphereRelation',
    'IntersectionCircle',
    'SphereSphereResult',
    'sphere_sphere_intersection',
    'RayCylinderResult',
    'ray_cylinder_intersection',
    'RayBoxResult',
    'ray_aabb_intersection',
    'BoxOverlapResult',
    'aabb_aabb_intersection',
]
