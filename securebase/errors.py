"""
Error taxonomy for securebase.

    ObjectDisposedError  — a Keccak session was used after dispose().
    InvalidDataError     — malformed input reached a SecureBase encode/decode.
"""


class SecureBaseError(Exception):
    """Base class for every error raised by securebase."""


class ObjectDisposedError(SecureBaseError, RuntimeError):
    """Raised when a disposed Keccak session is asked to hash."""

    def __init__(self, msg: str = "Object is disposed"):
        super().__init__(msg)


class InvalidDataError(SecureBaseError, ValueError):
    """
    Raised for any fault inside encode/decode: unknown symbols, truncated
    groups, misplaced padding, or recovered bytes that are not valid text.
    The lower-level fault is chained as __cause__.
    """

    def __init__(self, msg: str = "Invalid data or secret key!"):
        super().__init__(msg)
