"""Exceptions raised by the filter bench."""

class FilterTBError(Exception):
    pass

class MismatchError(FilterTBError, AssertionError):
    """The device disagreed with the expected value; testing must stop."""

class CacheStateError(FilterTBError, RuntimeError):
    """The impulse response was read while it was still being computed."""
