"""Exceptions raised by vecgeom operations.

Two kinds of failure are distinguished:

- ``InvalidArgument`` -- a caller supplied a value outside the domain of
  the operation (negative radius, NaN coordinate, inverted bounding box,
  unknown axis name).
- ``DegenerateInputError`` -- a quantity that must be non-zero for the
  operation to be defined fell below tolerance (zero-length vector
  normalization, zero plane normal, zero rotation axis).

Degenerate *configurations* that still have a well-defined answer, such
as a flat tetrahedron or a pair of parallel lines, are reported in the
result of the operation and never raised.

Copyright (c) 2025 vecgeom contributors
MIT License
"""


class GeometryError(ValueError):
    """Base class for vecgeom errors.

    ``details`` holds the offending values keyed by argument name.
    """

    def __init__(self, message, details=None):
        super().__init__(message)
        self.details = details or {}


class InvalidArgument(GeometryError):
    """Raised when an argument lies outside the domain of an operation."""


class DegenerateInputError(GeometryError):
    """Raised when a required non-zero quantity is zero within tolerance."""


__all__ = [
    'GeometryError',
    'InvalidArgument',
    'DegenerateInputError',
]
