# myobridge/core/errors.py
from __future__ import annotations


class MyoBridgeError(Exception):
    """
    Base class for all expected operational errors in myobridge.
    """

    #: Stable machine-readable identifier (for CLI exit mapping, logs, etc.)
    code: str = "unknown"

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.hint = hint
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Configuration / setup errors (no native access yet)
# ---------------------------------------------------------------------------

class ConfigError(MyoBridgeError):
    """
    Bridge configuration is missing, malformed or inconsistent.

    Examples:
      - config file not found
      - section is not a mapping / value has the wrong type
      - unknown native driver key
      - driver params do not match the driver constructor
    """
    code = "config_error"


class NativeUnavailableError(MyoBridgeError):
    """
    The native device library could not be loaded.

    Examples:
      - shared library not found on the search path
      - architecture mismatch (32/64 bit)
      - library is missing expected symbols
    """
    code = "native_unavailable"


# ---------------------------------------------------------------------------
# Device proxy errors
# ---------------------------------------------------------------------------

class InvalidHandleError(MyoBridgeError):
    """
    A device proxy was constructed with a null or otherwise invalid handle.
    """
    code = "invalid_handle"
