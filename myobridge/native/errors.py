# myobridge/native/errors.py
from __future__ import annotations


class NativeError(Exception):
    """Base class for native-boundary failures."""


class NativeLoadError(NativeError):
    pass


class NativeCallError(NativeError):
    def __init__(self, fn: str, result: int, message: str = ""):
        super().__init__(f"{fn} failed (result={result}): {message or 'no details'}")
        self.fn = fn
        self.result = result
        self.message = message
