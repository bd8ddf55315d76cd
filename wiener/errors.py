"""Exceptions raised by the wiener package."""


class WienerError(Exception):
    """Base class for every error raised by this package."""


class InvalidParameters(WienerError, ValueError):
    """n < 9 or e <= 0: the search is never started."""


class InvalidKeyFile(WienerError, ValueError):
    """A key file could not be read or is not an RSA key."""


class InvariantViolation(WienerError, AssertionError):
    """An internal check failed. This is a bug, not a bad input."""
