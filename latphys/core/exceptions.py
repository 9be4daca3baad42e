"""
Error types raised by the lattice data model.

Each structural error also derives from the matching builtin exception, so
callers that only catch ValueError / IndexError / TypeError keep working.
"""


class LatticeError(Exception):
    """Base class for all latphys errors."""


class DimensionMismatchError(LatticeError, ValueError):
    """A coordinate, lattice vector or wrap vector has the wrong length."""


class InvalidIndexError(LatticeError, IndexError):
    """A site or bond index does not refer to an existing element."""


class LabelTypeError(LatticeError, TypeError):
    """Labels of one container do not share a common type."""


class UnknownUnitcellError(LatticeError, ValueError):
    """Requested preset name or version is not in the registry."""


class ConfigError(LatticeError, ValueError):
    """A build configuration is malformed."""
