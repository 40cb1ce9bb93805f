# -*- coding: utf-8 -*-
from importlib.metadata import PackageNotFoundError, version

from vecgeom.errors import DegenerateInputError, GeometryError, InvalidArgument
from vecgeom.linear import Line3, Plane3
from vecgeom.primitives import AABB, Cylinder, Ray3, Sphere
from vecgeom.quaternion import Quaternion
from vecgeom.vector import Vector3
from vecgeom.xform import Matrix3, Matrix4

try:
    __version__ = version("vecgeom")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

__all__ = [
    '__version__',
    'GeometryError',
    'InvalidArgument',
    'DegenerateInputError',
    'Vector3',
    'Matrix3',
    'Matrix4',
    'Quaternion',
    'Line3',
    'Plane3',
    'Ray3',
    'Sphere',
    'Cylinder',
    'AABB',
]
