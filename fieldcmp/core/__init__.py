"""Value rendering and structural serialization primitives for fieldcmp."""

from fieldcmp.core.exceptions import CallerConfigurationError, CompareError, SerializationError
from fieldcmp.core.pretty import pretty_repr
from fieldcmp.core.serialization import (
    DefaultStructuralSerializer,
    StructuralSerializer,
    structurally_equal,
)

__all__ = [
    "CompareError",
    "CallerConfigurationError",
    "SerializationError",
    "DefaultStructuralSerializer",
    "StructuralSerializer",
    "pretty_repr",
    "structurally_equal",
]
