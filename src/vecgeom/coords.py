"""Conversions between Cartesian, spherical and cylindrical coordinates.

Spherical coordinates are ``(radius, theta, phi)`` with ``theta`` the
azimuth in the XY plane, measured from +x in ``[-pi, pi]``, and ``phi``
the polar angle from +z in ``[0, pi]``.  Cylindrical coordinates are
``(radius, theta, z)`` with ``radius`` and ``theta`` taken in the XY
plane and ``z`` passed through unchanged.

Copyright (c) 2025 vecgeom contributors
MIT License
"""

from __future__ import annotations

import math
from typing import NamedTuple

from vecgeom.errors import DegenerateInputError, InvalidArgument
from vecgeom.vector import (Vector3, clamp, epsilon, mag, require_finite,
                            require_nonnegative, vec)


class SphericalCoord(NamedTuple):
    radius: float
    theta: float
    phi: float


class CylindricalCoord(NamedTuple):
    radius: float
    theta: float
    z: float


def cartesian_to_spherical(v, tol=epsilon) -> SphericalCoord:
    """Spherical coordinates of ``v``.

    Raises ``DegenerateInputError`` at the origin, where both angles are
    undefined.
    """
    v = vec(v)
    r = mag(v)
    if r < tol:
        raise DegenerateInputError('spherical angles are undefined at the origin',
                                   {'vector': v, 'radius': r})
    return SphericalCoord(r, math.atan2(v.y, v.x), math.acos(clamp(v.z / r)))


def spherical_to_cartesian(coord) -> Vector3:
    radius, theta, phi = coord
    radius = require_nonnegative('radius', radius)
    theta = require_finite('theta', theta)
    phi = require_finite('phi', phi)
    sin_phi = math.sin(phi)
    return Vector3(radius * sin_phi * math.cos(theta),
                   radius * sin_phi * math.sin(theta),
                   radius * math.cos(phi))


def cartesian_to_cylindrical(v, tol=epsilon) -> CylindricalCoord:
    """Cylindrical coordinates of ``v``.

    Raises ``DegenerateInputError`` on the z axis, where ``theta`` is
    undefined.  Conventions that report ``theta = 0`` there are not followed;
    a caller that wants one must catch the error.
    """
    v = vec(v)
    rho = math.hypot(v.x, v.y)
    if rho < tol:
        raise DegenerateInputError('cylindrical angle is undefined on the z axis',
                                   {'vector': v, 'radius': rho})
    return CylindricalCoord(rho, math.atan2(v.y, v.x), v.z)


def cylindrical_to_cartesian(coord) -> Vector3:
    radius, theta, z = coord
    radius = require_nonnegative('radius', radius)
    theta = require_finite('theta', theta)
    return Vector3(radius * math.cos(theta), radius * math.sin(theta), z)


_SYSTEMS = ('cartesian', 'spherical', 'cylindrical')

_CONVERSIONS = {
    ('cartesian', 'spherical'): cartesian_to_spherical,
    ('spherical', 'cartesian'): spherical_to_cartesian,
    ('cartesian', 'cylindrical'): cartesian_to_cylindrical,
    ('cylindrical', 'cartesian'): cylindrical_to_cartesian,
}


def convert(coordinates, from_type: str, to_type: str) -> Vector3:
    """Convert a coordinate triple between named systems.

    ``from_type`` and ``to_type`` are one of ``'cartesian'``,
    ``'spherical'`` or ``'cylindrical'`` (case-insensitive).  The triple
    is read and returned in the field order of the corresponding
    coordinate type, packed into a ``Vector3``.  Spherical and
    cylindrical are converted to each other by way of Cartesian.
    """
    src = from_type.lower() if isinstance(from_type, str) else from_type
    dst = to_type.lower() if isinstance(to_type, str) else to_type
    for name in (src, dst):
        if name not in _SYSTEMS:
            raise InvalidArgument('unsupported coordinate system: {!r}'.format(name),
                                  {'from_type': from_type, 'to_type': to_type})
    coordinates = vec(coordinates)
    if src == dst:
        return coordinates
    fn = _CONVERSIONS.get((src, dst))
    if fn is None:
        cart = _CONVERSIONS[(src, 'cartesian')](coordinates)
        return vec(tuple(_CONVERSIONS[('cartesian', dst)](cart)))
    return vec(tuple(fn(coordinates)))


__all__ = [
    'SphericalCoord',
    'CylindricalCoord',
    'cartesian_to_spherical',
    'spherical_to_cartesian',
    'cartesian_to_cylindrical',
    'cylindrical_to_cartesian',
    'convert',
]
