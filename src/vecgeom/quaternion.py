"""Quaternion rotations for vecgeom.

Quaternions are stored as ``(x, y, z, w)`` with ``w`` the scalar part.
Operations that build a rotation return a unit quaternion; operations
that consume one normalize it first, so callers may pass any non-zero
quaternion.

Composition convention
----------------------
``multiply(q1, q2)`` is the Hamilton product ``q1 * q2``.  Read as a
rotation it applies ``q2`` first and then ``q1``, the same order as
``Matrix3.mul``::

    multiply(q1, q2).to_matrix() == q1.to_matrix().mul(q2.to_matrix())

Copyright (c) 2025 vecgeom contributors
MIT License
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Tuple

from vecgeom.errors import DegenerateInputError, InvalidArgument
from vecgeom.result import Result
from vecgeom.vector import Vector3, clamp, epsilon, isgoodnum, mag, require_finite, vec
from vecgeom.xform import Matrix3

logger = logging.getLogger(__name__)

# Above cos(omega) = 1 - slerp_tol the two rotations are close enough
# that sin(omega) loses precision; slerp falls back to normalized
# linear interpolation there.
slerp_tol = 5e-4


@dataclass(frozen=True)
class Quaternion(Result):
    """Immutable quaternion ``x*i + y*j + z*k + w``."""

    x: float
    y: float
    z: float
    w: float

    def __post_init__(self) -> None:
        for name in ('x', 'y', 'z', 'w'):
            value = getattr(self, name)
            if not isgoodnum(value):
                raise InvalidArgument(
                    f'quaternion component {name} must be a finite number',
                    {name: value})
            object.__setattr__(self, name, float(value))

    @classmethod
    def identity(cls) -> "Quaternion":
        return cls(0.0, 0.0, 0.0, 1.0)

    @classmethod
    def from_axis_angle(cls, axis, angle: float, tol: float = epsilon) -> "Quaternion":
        """Rotation of ``angle`` radians about ``axis``.

        Raises
        ------
        InvalidArgument
            If ``angle`` is not a finite number.
        DegenerateInputError
            If ``axis`` is shorter than ``tol``.
        """
        angle = require_finite('angle', angle)
        axis = vec(axis)
        m = mag(axis)
        if m < tol:
            raise DegenerateInputError('zero-length rotation axis not allowed',
                                       {'axis': axis})
        s = math.sin(angle * 0.5)
        return cls(axis.x / m * s, axis.y / m * s, axis.z / m * s,
                   math.cos(angle * 0.5))

    @classmethod
    def from_matrix(cls, m: Matrix3) -> "Quaternion":
        """Unit quaternion for a rotation matrix (Shepperd's method)."""
        r = m.rows()
        trace = r[0][0] + r[1][1] + r[2][2]
        if trace > 0.0:
            s = 2.0 * math.sqrt(trace + 1.0)
            q = cls((r[2][1] - r[1][2]) / s,
                    (r[0][2] - r[2][0]) / s,
                    (r[1][0] - r[0][1]) / s,
                    0.25 * s)
        elif r[0][0] > r[1][1] and r[0][0] > r[2][2]:
            s = 2.0 * math.sqrt(1.0 + r[0][0] - r[1][1] - r[2][2])
            q = cls(0.25 * s,
                    (r[0][1] + r[1][0]) / s,
                    (r[0][2] + r[2][0]) / s,
                    (r[2][1] - r[1][2]) / s)
        elif r[1][1] > r[2][2]:
            s = 2.0 * math.sqrt(1.0 + r[1][1] - r[0][0] - r[2][2])
            q = cls((r[0][1] + r[1][0]) / s,
                    0.25 * s,
                    (r[1][2] + r[2][1]) / s,
                    (r[0][2] - r[2][0]) / s)
        else:
            s = 2.0 * math.sqrt(1.0 + r[2][2] - r[0][0] - r[1][1])
            q = cls((r[0][2] + r[2][0]) / s,
                    (r[1][2] + r[2][1]) / s,
                    0.25 * s,
                    (r[1][0] - r[0][1]) / s)
        return q.normalized()

    def __iter__(self):
        yield self.x
        yield self.y
        yield self.z
        yield self.w

    def __neg__(self) -> "Quaternion":
        return Quaternion(-self.x, -self.y, -self.z, -self.w)

    def __mul__(self, other: "Quaternion") -> "Quaternion":
        return multiply(self, other)

    def vector_part(self) -> Vector3:
        return Vector3(self.x, self.y, self.z)

    def dot(self, other: "Quaternion") -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z + self.w * other.w

    def norm(self) -> float:
        return math.hypot(self.x, self.y, self.z, self.w)

    def normalized(self, tol: float = epsilon) -> "Quaternion":
        n = self.norm()
        if n < tol:
            raise DegenerateInputError('cannot normalize a zero quaternion',
                                       {'quaternion': self})
        return Quaternion(self.x / n, self.y / n, self.z / n, self.w / n)

    def conjugate(self) -> "Quaternion":
        return Quaternion(-self.x, -self.y, -self.z, self.w)

    def inverse(self, tol: float = epsilon) -> "Quaternion":
        n2 = self.dot(self)
        if n2 < tol * tol:
            raise DegenerateInputError('cannot invert a zero quaternion',
                                       {'quaternion': self})
        c = self.conjugate()
        return Quaternion(c.x / n2, c.y / n2, c.z / n2, c.w / n2)

    def isclose(self, other: "Quaternion", tol: float = 1e-9) -> bool:
        return all(abs(a - b) < tol for a, b in zip(self, other))

    def to_matrix(self) -> Matrix3:
        """Rotation matrix of this quaternion (normalized first)."""
        q = self.normalized()
        x2, y2, z2 = q.x * q.x, q.y * q.y, q.z * q.z
        xy, xz, yz = q.x * q.y, q.x * q.z, q.y * q.z
        wx, wy, wz = q.w * q.x, q.w * q.y, q.w * q.z
        return Matrix3([[1.0 - 2.0 * (y2 + z2), 2.0 * (xy - wz), 2.0 * (xz + wy)],
                        [2.0 * (xy + wz), 1.0 - 2.0 * (x2 + z2), 2.0 * (yz - wx)],
                        [2.0 * (xz - wy), 2.0 * (yz + wx), 1.0 - 2.0 * (x2 + y2)]])

    def rotate(self, v: Vector3) -> Vector3:
        """Rotate vector ``v`` by this quaternion."""
        return self.to_matrix().mul(vec(v))

    def to_axis_angle(self, tol: float = epsilon) -> Tuple[Vector3, float]:
        """Return ``(axis, angle)`` with ``angle`` in ``[0, 2*pi)``.

        The identity rotation has no unique axis; the x axis is returned.
        """
        q = self.normalized()
        ang = 2.0 * math.acos(clamp(q.w))
        s = math.sqrt(max(0.0, 1.0 - q.w * q.w))
        if s < tol:
            return Vector3(1.0, 0.0, 0.0), ang
        return Vector3(q.x / s, q.y / s, q.z / s), ang


def multiply(q1: Quaternion, q2: Quaternion) -> Quaternion:
    """Hamilton product ``q1 * q2``: rotate by ``q2``, then by ``q1``."""
    return Quaternion(
        q1.w * q2.x + q1.x * q2.w + q1.y * q2.z - q1.z * q2.y,
        q1.w * q2.y - q1.x * q2.z + q1.y * q2.w + q1.z * q2.x,
        q1.w * q2.z + q1.x * q2.y - q1.y * q2.x + q1.z * q2.w,
        q1.w * q2.w - q1.x * q2.x - q1.y * q2.y - q1.z * q2.z,
    )


def slerp(q1: Quaternion, q2: Quaternion, t: float,
          slerp_tol: float = slerp_tol) -> Quaternion:
    """Spherical linear interpolation from ``q1`` (t=0) to ``q2`` (t=1).

    Interpolates along the shorter arc: when the quaternions lie in
    opposite hemispheres ``q2`` is negated, which describes the same
    rotation.  ``t`` is not clamped; values outside ``[0, 1]``
    extrapolate along the same arc.

    Parameters
    ----------
    q1, q2 : Quaternion
        End points; normalized before use.
    t : float
        Interpolation parameter.
    slerp_tol : float, optional
        Closeness threshold for the linear fallback, compared against
        ``1 - cos(omega)``.  Looser than ``epsilon``.
    """
    if not isgoodnum(t):
        raise InvalidArgument('interpolation parameter must be a finite number',
                              {'t': t})
    a = q1.normalized()
    b = q2.normalized()

    cos_omega = a.dot(b)
    if cos_omega < 0.0:
        b = -b
        cos_omega = -cos_omega

    if cos_omega > 1.0 - slerp_tol:
        logger.debug('slerp: cos(omega)=%r, using linear interpolation', cos_omega)
        return Quaternion(a.x + t * (b.x - a.x),
                          a.y + t * (b.y - a.y),
                          a.z + t * (b.z - a.z),
                          a.w + t * (b.w - a.w)).normalized()

    omega = math.acos(cos_omega)
    sin_omega = math.sin(omega)
    s0 = math.sin((1.0 - t) * omega) / sin_omega
    s1 = math.sin(t * omega) / sin_omega
    return Quaternion(s0 * a.x + s1 * b.x,
                      s0 * a.y + s1 * b.y,
                      s0 * a.z + s1 * b.z,
                      s0 * a.w + s1 * b.w)


def quaternion_from_axis_angle(axis, angle, tol=epsilon):
    return Quaternion.from_axis_angle(axis, angle, tol)


__all__ = [
    'slerp_tol',
    'Quaternion',
    'multiply',
    'slerp',
    'quaternion_from_axis_angle',
]
