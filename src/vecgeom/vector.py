## foundational vector algebra for vecgeom
## Copyright (c) 2025 vecgeom contributors

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""foundational vector algebra for **vecgeom**

constants
=========

``epsilon`` is the tolerance below which a length, a cross product
magnitude or a dot product is treated as zero.  Every operation that
makes such a decision accepts a ``tol`` keyword that defaults to
``epsilon``, so a caller can tighten or loosen the test for a single
call without touching the module constant.

vectors
=======

A ``Vector3`` is an immutable ``(x, y, z)`` triple of floats.  It is
used both for points and for free directions.  Construction rejects
booleans, non-numbers and non-finite values with ``InvalidArgument``.

``Vector3`` supports ``+``, ``-``, unary ``-``, multiplication and
division by a scalar, iteration and indexing, so it unpacks like a
tuple: ``x, y, z = v``.

operations
==========

- ``dot(a,b)``, ``cross(a,b)``, ``mag(a)``, ``dist(a,b)``
- ``normalize(a)`` -- unit vector, ``DegenerateInputError`` when
  ``mag(a) < tol``
- ``angle(a,b)`` -- angle in radians in ``[0, pi]``
- ``are_parallel(a,b)``, ``are_perpendicular(a,b)`` -- tested on the
  normalized vectors
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterator

from vecgeom.errors import DegenerateInputError, InvalidArgument
from vecgeom.result import Result

logger = logging.getLogger(__name__)

## constants
epsilon = 1e-10


## operations on scalars
## -----------------------

## booleans are ints in Python, but True is not a coordinate
def isgoodnum(n):
    """ determine if an argument is actually a finite scalar number, and not boolean
    """
    return (not isinstance(n, bool)) and isinstance(n, (int, float)) \
        and math.isfinite(n)


def close(a, b, tol=epsilon):
    """ are two scalars the same within ``tol``
    """
    return abs(a - b) < tol


def clamp(x, lo=-1.0, hi=1.0):
    """ clamp ``x`` to the closed interval ``[lo, hi]``"""
    return max(lo, min(hi, x))


def require_finite(name, value):
    """raise ``InvalidArgument`` unless ``value`` is a finite number"""
    if not isgoodnum(value):
        raise InvalidArgument(f'{name} must be a finite number',
                              {name: value})
    return float(value)


def require_nonnegative(name, value):
    """raise ``InvalidArgument`` unless ``value`` is a finite number >= 0"""
    value = require_finite(name, value)
    if value < 0:
        raise InvalidArgument(f'{name} cannot be negative', {name: value})
    return float(value)


## vectors
## -------

@dataclass(frozen=True)
class Vector3:
    """Immutable 3D vector, used for points and directions."""

    x: float
    y: float
    z: float

    def __post_init__(self) -> None:
        for name in ('x', 'y', 'z'):
            value = getattr(self, name)
            if not isgoodnum(value):
                raise InvalidArgument(
                    f'vector component {name} must be a finite number',
                    {name: value})
            object.__setattr__(self, name, float(value))

    @classmethod
    def zero(cls) -> "Vector3":
        return cls(0.0, 0.0, 0.0)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __len__(self) -> int:
        return 3

    def __getitem__(self, i: int) -> float:
        return (self.x, self.y, self.z)[i]

    def __add__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: "Vector3") -> "Vector3":
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> "Vector3":
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, c: float) -> "Vector3":
        return Vector3(self.x * c, self.y * c, self.z * c)

    __rmul__ = __mul__

    def __truediv__(self, c: float) -> "Vector3":
        return Vector3(self.x / c, self.y / c, self.z / c)


def vec(x) -> Vector3:
    """Convenience function for making a ``Vector3`` from a ``Vector3``
    or any sequence of three numbers
    """
    if isinstance(x, Vector3):
        return x
    if isinstance(x, (tuple, list)) and len(x) == 3:
        return Vector3(x[0], x[1], x[2])
    raise InvalidArgument('bad thing used in attempt to make a vector: {}'.format(x),
                          {'value': x})


## R^3 -> R^3 functions
## --------------------

def cross(a, b):
    """ 3 vector cross product `a x b`"""
    return Vector3(a.y * b.z - a.z * b.y,
                   a.z * b.x - a.x * b.z,
                   a.x * b.y - a.y * b.x)


def normalize(a, tol=epsilon):
    """return the unit vector in the direction of ``a``.  Raises
    ``DegenerateInputError`` if ``a`` is shorter than ``tol``"""
    m = mag(a)
    if m < tol:
        raise DegenerateInputError('cannot normalize a zero-length vector',
                                   {'vector': a, 'magnitude': m})
    return Vector3(a.x / m, a.y / m, a.z / m)


## R^3 -> R functions
## ------------------

def dot(a, b):
    """ 3 vector ``a`` dot ``b`` """
    return a.x * b.x + a.y * b.y + a.z * b.z


def mag(a):
    """ compute the magnitude of 3 vector ``a``"""
    return math.hypot(a.x, a.y, a.z)


magnitude = mag


def dist(a, b):
    """ compute the euclidean distance between two points ``a`` and ``b``"""
    return mag(a - b)


def angle(a, b, tol=epsilon):
    """Angle between ``a`` and ``b`` in radians, in ``[0, pi]``.

    The cosine is clamped to ``[-1, 1]`` before ``acos``; rounding can
    push the dot product of two unit vectors a few ulps past 1.
    """
    ua = normalize(a, tol)
    ub = normalize(b, tol)
    return math.acos(clamp(dot(ua, ub)))


## R^3 -> bool functions
## ---------------------

def iszero(a, tol=epsilon):
    """ is ``a`` shorter than ``tol``"""
    return mag(a) < tol


def vclose(a, b, tol=epsilon):
    """ are two vectors the same to within ``tol``"""
    return close(mag(a - b), 0.0, tol)


## a zero vector has no direction, so it is treated as both parallel
## and perpendicular to everything rather than raising
def are_parallel(a, b, tol=epsilon):
    """ are ``a`` and ``b`` parallel or anti-parallel"""
    if iszero(a, tol) or iszero(b, tol):
        return True
    return mag(cross(normalize(a, tol), normalize(b, tol))) < tol


def are_perpendicular(a, b, tol=epsilon):
    """ are ``a`` and ``b`` perpendicular"""
    if iszero(a, tol) or iszero(b, tol):
        return True
    return abs(dot(normalize(a, tol), normalize(b, tol))) < tol


## reports
## -------

@dataclass(frozen=True)
class DotProductResult(Result):
    dot_product: float
    angle_radians: float
    angle_degrees: float
    are_perpendicular: bool
    are_parallel: bool


@dataclass(frozen=True)
class CrossProductResult(Result):
    cross_product: Vector3
    magnitude: float
    area_parallelogram: float
    are_parallel: bool


@dataclass(frozen=True)
class MagnitudeResult(Result):
    magnitude: float
    unit_vector: Vector3
    is_zero_vector: bool


@dataclass(frozen=True)
class VectorAngleResult(Result):
    angle_radians: float
    angle_degrees: float
    cos_angle: float


def dot_product_report(a, b, tol=epsilon):
    """Dot product of ``a`` and ``b`` together with the angle between
    them and the parallel/perpendicular tests.  The angle is reported
    as zero when either vector is zero."""
    if iszero(a, tol) or iszero(b, tol):
        ang = 0.0
    else:
        ang = angle(a, b, tol)
    return DotProductResult(dot_product=dot(a, b),
                            angle_radians=ang,
                            angle_degrees=math.degrees(ang),
                            are_perpendicular=are_perpendicular(a, b, tol),
                            are_parallel=are_parallel(a, b, tol))


def cross_product_report(a, b, tol=epsilon):
    """Cross product of ``a`` and ``b``; its magnitude is also the area
    of the parallelogram the two vectors span."""
    c = cross(a, b)
    m = mag(c)
    return CrossProductResult(cross_product=c,
                              magnitude=m,
                              area_parallelogram=m,
                              are_parallel=are_parallel(a, b, tol))


def magnitude_report(a, tol=epsilon):
    """Magnitude and unit vector of ``a``.  A zero vector reports the
    zero vector as its unit vector instead of raising."""
    zero = iszero(a, tol)
    if zero:
        logger.debug('magnitude_report: zero vector %s', a)
    return MagnitudeResult(magnitude=mag(a),
                           unit_vector=Vector3.zero() if zero else normalize(a, tol),
                           is_zero_vector=zero)


def angle_report(a, b, tol=epsilon):
    """Angle between ``a`` and ``b`` in radians and degrees, with its
    cosine.  Unlike ``dot_product_report``, a zero vector raises
    ``DegenerateInputError``."""
    c = clamp(dot(normalize(a, tol), normalize(b, tol)))
    ang = math.acos(c)
    return VectorAngleResult(angle_radians=ang,
                             angle_degrees=math.degrees(ang),
                             cos_angle=c)


__all__ = [
    'epsilon',
    'Vector3',
    'vec',
    'isgoodnum',
    'close',
    'clamp',
    'require_finite',
    'require_nonnegative',
    'dot',
    'cross',
    'mag',
    'magnitude',
    'dist',
    'normalize',
    'angle',
    'iszero',
    'vclose',
    'are_parallel',
    'are_perpendicular',
    'DotProductResult',
    'CrossProductResult',
    'MagnitudeResult',
    'VectorAngleResult',
    'dot_product_report',
    'cross_product_report',
    'magnitude_report',
    'angle_report',
]
