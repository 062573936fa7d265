# myobridge/native/__init__.py

from .base import NativeLibrary, handle_key, is_valid_handle
from .errors import NativeCallError, NativeError, NativeLoadError
from .libmyo import LibMyo, timestamp_from_micros
from .registry import NativeDriverRegistry

__all__ = [
    "NativeLibrary", "handle_key", "is_valid_handle",
    "NativeError", "NativeLoadError", "NativeCallError",
    "LibMyo", "timestamp_from_micros",
    "NativeDriverRegistry",
]
