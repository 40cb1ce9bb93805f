## matrix transformation operations for 3D vectors and homogeneous
## coordinates in vecgeom

## Copyright (c) 2025 vecgeom contributors
## All rights reserved

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

"""matrix transformations for **vecgeom**

``Matrix3`` is a 3x3 linear transform and ``Matrix4`` a 4x4 affine
transform over homogeneous coordinates.  Both are stored row-major and
are immutable: every operation returns a new matrix.  Operations of
the form ``M.mul(v)`` treat ``v`` as a column vector.

Rotation factories take angles in radians and follow the right-hand
rule.  Composition reads right to left: ``A.mul(B)`` applies ``B``
first, then ``A``.
"""

from math import cos, sin

from vecgeom.errors import DegenerateInputError, InvalidArgument
from vecgeom.vector import Vector3, epsilon, isgoodnum, mag, require_finite, vec


class _Matrix:
    """row-major square matrix base class; ``n`` is set by subclasses"""

    n = 0

    def __init__(self, a=None, trans=False):
        n = self.n
        rows = [[1.0 if i == j else 0.0 for j in range(n)] for i in range(n)]

        if isinstance(a, _Matrix):
            if a.n != n:
                raise InvalidArgument('cannot build a {0}x{0} matrix from a {1}x{1} one'.format(n, a.n))
            rows = [list(a.getrow(i)) for i in range(n)]
        elif isinstance(a, (tuple, list)):
            if len(a) == n and all(isinstance(r, (tuple, list)) and len(r) == n for r in a):
                rows = [[a[i][j] for j in range(n)] for i in range(n)]
            elif len(a) == n * n:
                rows = [[a[i * n + j] for j in range(n)] for i in range(n)]
            else:
                raise InvalidArgument('bad thing used in attempt to initialize matrix: {}'.format(a))
            for r in rows:
                for x in r:
                    if not isgoodnum(x):
                        raise InvalidArgument('bad element in matrix initialization: {}'.format(x),
                                              {'element': x})
        elif a is not None:
            raise InvalidArgument('bad thing used in attempt to initialize matrix: {}'.format(a))

        if trans:
            rows = [[rows[j][i] for j in range(n)] for i in range(n)]
        self.m = tuple(tuple(float(x) for x in r) for r in rows)

    def __repr__(self):
        return "{}({})".format(type(self).__name__,
                               ",".join(str(list(r)) for r in self.m))

    def __eq__(self, other):
        return type(self) is type(other) and self.m == other.m

    def __hash__(self):
        return hash((type(self).__name__, self.m))

    @classmethod
    def identity(cls):
        return cls()

    #return value indexed by i,j
    def get(self, i, j):
        if i < 0 or i >= self.n or j < 0 or j >= self.n:
            raise InvalidArgument('bad index passed to get: {},{}'.format(i, j))
        return self.m[i][j]

    def getrow(self, i):
        if i < 0 or i >= self.n:
            raise InvalidArgument('bad row passed to getrow: {}'.format(i))
        return self.m[i]

    def getcol(self, j):
        if j < 0 or j >= self.n:
            raise InvalidArgument('bad column passed to getcol: {}'.format(j))
        return tuple(self.m[i][j] for i in range(self.n))

    def rows(self):
        """the matrix as a tuple of row tuples"""
        return self.m

    def transpose(self):
        return type(self)(self, trans=True)

    def add(self, x):
        """element-wise sum of two matrices of the same size"""
        if type(x) is not type(self):
            raise InvalidArgument('bad thing passed to add(): {}'.format(x))
        return type(self)([[self.m[i][j] + x.m[i][j] for j in range(self.n)]
                           for i in range(self.n)])

    def isclose(self, x, tol=1e-9):
        """are all elements of the two matrices within ``tol``"""
        return type(x) is type(self) and \
            all(abs(self.m[i][j] - x.m[i][j]) < tol
                for i in range(self.n) for j in range(self.n))

    # matrix multiply.  If x is a matrix, compute MX.  If x is a
    # scalar, compute xM.  Vectors are handled by subclasses.
    def mul(self, x):
        n = self.n
        if type(x) is type(self):
            return type(self)([[sum(self.m[i][k] * x.m[k][j] for k in range(n))
                                for j in range(n)] for i in range(n)])
        elif isgoodnum(x):
            return type(self)([[self.m[i][j] * x for j in range(n)]
                               for i in range(n)])
        raise InvalidArgument('bad thing passed to mul(): {}'.format(x))


class Matrix3(_Matrix):
    """3x3 matrix for linear transformation of 3D vectors"""

    n = 3

    def mul(self, x):
        if isinstance(x, Vector3):
            r = self.m
            return Vector3(r[0][0] * x.x + r[0][1] * x.y + r[0][2] * x.z,
                           r[1][0] * x.x + r[1][1] * x.y + r[1][2] * x.z,
                           r[2][0] * x.x + r[2][1] * x.y + r[2][2] * x.z)
        return super().mul(x)

    def determinant(self):
        m = self.m
        return (m[0][0] * (m[1][1] * m[2][2] - m[1][2] * m[2][1])
                - m[0][1] * (m[1][0] * m[2][2] - m[1][2] * m[2][0])
                + m[0][2] * (m[1][0] * m[2][1] - m[1][1] * m[2][0]))

    def inverse(self, tol=epsilon):
        """analytic inverse via the adjugate; raises
        ``DegenerateInputError`` if the matrix is singular"""
        det = self.determinant()
        if abs(det) < tol:
            raise DegenerateInputError('matrix is not invertible (determinant is zero)',
                                       {'determinant': det})
        m = self.m
        inv = 1.0 / det
        return Matrix3([
            [(m[1][1] * m[2][2] - m[1][2] * m[2][1]) * inv,
             (m[0][2] * m[2][1] - m[0][1] * m[2][2]) * inv,
             (m[0][1] * m[1][2] - m[0][2] * m[1][1]) * inv],
            [(m[1][2] * m[2][0] - m[1][0] * m[2][2]) * inv,
             (m[0][0] * m[2][2] - m[0][2] * m[2][0]) * inv,
             (m[0][2] * m[1][0] - m[0][0] * m[1][2]) * inv],
            [(m[1][0] * m[2][1] - m[1][1] * m[2][0]) * inv,
             (m[0][1] * m[2][0] - m[0][0] * m[2][1]) * inv,
             (m[0][0] * m[1][1] - m[0][1] * m[1][0]) * inv]])


class Matrix4(_Matrix):
    """4x4 transformation matrix for homogeneous 3D coordinates"""

    n = 4

    @classmethod
    def from_matrix3(cls, m3):
        """embed a linear 3x3 transform in the upper-left of a 4x4"""
        r = m3.rows()
        return cls([[r[0][0], r[0][1], r[0][2], 0],
                    [r[1][0], r[1][1], r[1][2], 0],
                    [r[2][0], r[2][1], r[2][2], 0],
                    [0, 0, 0, 1]])

    def mul(self, x):
        if isinstance(x, Vector3):
            return self.transform_point(x)
        return super().mul(x)

    def transform_point(self, p):
        """transform point ``p`` (w=1), projecting back to w=1"""
        r = self.m
        h = [r[i][0] * p.x + r[i][1] * p.y + r[i][2] * p.z + r[i][3]
             for i in range(4)]
        w = h[3]
        if abs(w) < epsilon:
            raise DegenerateInputError('point maps to infinity (w=0)',
                                       {'point': p})
        if w != 1.0:
            return Vector3(h[0] / w, h[1] / w, h[2] / w)
        return Vector3(h[0], h[1], h[2])

    def transform_direction(self, d):
        """transform direction ``d`` (w=0); translation does not apply"""
        r = self.m
        return Vector3(r[0][0] * d.x + r[0][1] * d.y + r[0][2] * d.z,
                       r[1][0] * d.x + r[1][1] * d.y + r[1][2] * d.z,
                       r[2][0] * d.x + r[2][1] * d.y + r[2][2] * d.z)


def matrix_vector_multiply(m, v):
    """``m`` times column vector ``v``; always defined"""
    return m.mul(v)


## rotations
## ---------

def RotationX(angle):
    """rotation of ``angle`` radians about the x axis"""
    angle = require_finite('angle', angle)
    c = cos(angle)
    s = sin(angle)
    return Matrix3([[1, 0, 0],
                    [0, c, -s],
                    [0, s, c]])


def RotationY(angle):
    """rotation of ``angle`` radians about the y axis"""
    angle = require_finite('angle', angle)
    c = cos(angle)
    s = sin(angle)
    return Matrix3([[c, 0, s],
                    [0, 1, 0],
                    [-s, 0, c]])


def RotationZ(angle):
    """rotation of ``angle`` radians about the z axis"""
    angle = require_finite('angle', angle)
    c = cos(angle)
    s = sin(angle)
    return Matrix3([[c, -s, 0],
                    [s, c, 0],
                    [0, 0, 1]])


_AXES = {'x': RotationX, 'y': RotationY, 'z': RotationZ}


def axis_rotation(axis, angle):
    """rotation about a cardinal axis named by ``axis`` in ``'xyz'``"""
    fn = _AXES.get(axis.lower()) if isinstance(axis, str) else None
    if fn is None:
        raise InvalidArgument("invalid axis {!r}, use 'x', 'y', or 'z'".format(axis),
                              {'axis': axis})
    return fn(angle)


def skew(u):
    """cross-product matrix ``K`` such that ``K.mul(v) == cross(u, v)``"""
    return Matrix3([[0, -u.z, u.y],
                    [u.z, 0, -u.x],
                    [-u.y, u.x, 0]])


# return the arbitrary axis rotation matrix, computed with Rodrigues'
# formula R = I + sin(a) K + (1 - cos(a)) K^2
def Rotation(axis, angle, inverse=False, tol=epsilon):
    angle = require_finite('angle', angle)
    axis = vec(axis)
    m = mag(axis)
    if m < tol:
        raise DegenerateInputError('zero-length rotation axis not allowed',
                                   {'axis': axis})
    u = Vector3(axis.x / m, axis.y / m, axis.z / m)

    if inverse:
        angle = -angle

    K = skew(u)
    return Matrix3().add(K.mul(sin(angle))).add(K.mul(K).mul(1.0 - cos(angle)))


## affine transforms
## -----------------

def Translation(delta, inverse=False):
    delta = vec(delta)
    if inverse:
        delta = -delta
    return Matrix4([[1, 0, 0, delta.x],
                    [0, 1, 0, delta.y],
                    [0, 0, 1, delta.z],
                    [0, 0, 0, 1]])


def Scale(x, y=None, z=None, inverse=False):
    if isgoodnum(x):
        sx = x
        if isgoodnum(y) and isgoodnum(z):
            sy = y
            sz = z
        else:
            sy = sz = x
    elif isinstance(x, (Vector3, tuple, list)):
        sx, sy, sz = vec(x)
    else:
        raise InvalidArgument('bad scaling values passed to Scale')

    if inverse:
        if 0 in (sx, sy, sz):
            raise DegenerateInputError('cannot invert a zero scale factor',
                                       {'scale': (sx, sy, sz)})
        sx = 1.0 / sx
        sy = 1.0 / sy
        sz = 1.0 / sz

    return Matrix4([[sx, 0, 0, 0],
                    [0, sy, 0, 0],
                    [0, 0, sz, 0],
                    [0, 0, 0, 1.0]])


__all__ = [
    'Matrix3',
    'Matrix4',
    'matrix_vector_multiply',
    'RotationX',
    'RotationY',
    'RotationZ',
    'axis_rotation',
    'skew',
    'Rotation',
    'Translation',
    'Scale',
]
