"""Comparison exceptions."""


class CompareError(Exception):
    """Base class for comparison errors."""


class CallerConfigurationError(CompareError):
    """Invalid field selection or a field that cannot be compared."""


class SerializationError(CompareError):
    """A value could not be converted into a keyed field mapping."""
