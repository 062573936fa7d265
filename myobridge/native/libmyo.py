# myobridge/native/libmyo.py
from __future__ import annotations

import ctypes
import ctypes.util
import sys
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from .base import NativeLibrary
from .errors import NativeCallError, NativeError, NativeLoadError

LIBMYO_SUCCESS = 0

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_c_handle = ctypes.c_void_p
_c_error_out = ctypes.POINTER(ctypes.c_void_p)

# name -> (argtypes, restype)
_SIGNATURES: dict[str, tuple[list, Any]] = {
    # commands: (myo, [arg], libmyo_error_details_t* out_error) -> libmyo_result_t
    "libmyo_vibrate": ([_c_handle, ctypes.c_int, _c_error_out], ctypes.c_int),
    "libmyo_request_rssi": ([_c_handle, _c_error_out], ctypes.c_int),
    "libmyo_set_stream_emg": ([_c_handle, ctypes.c_int, _c_error_out], ctypes.c_int),
    "libmyo_myo_unlock": ([_c_handle, ctypes.c_int, _c_error_out], ctypes.c_int),
    "libmyo_myo_lock": ([_c_handle, _c_error_out], ctypes.c_int),
    "libmyo_myo_notify_user_action": ([_c_handle, ctypes.c_int, _c_error_out], ctypes.c_int),
    # error details
    "libmyo_error_cstring": ([ctypes.c_void_p], ctypes.c_char_p),
    "libmyo_free_error_details": ([ctypes.c_void_p], None),
    # event accessors
    "libmyo_event_get_type": ([ctypes.c_void_p], ctypes.c_uint32),
    "libmyo_event_get_timestamp": ([ctypes.c_void_p], ctypes.c_uint64),
    "libmyo_event_get_myo": ([ctypes.c_void_p], ctypes.c_void_p),
    "libmyo_event_get_arm": ([ctypes.c_void_p], ctypes.c_int),
    "libmyo_event_get_x_direction": ([ctypes.c_void_p], ctypes.c_int),
    "libmyo_event_get_orientation": ([ctypes.c_void_p, ctypes.c_int], ctypes.c_float),
    "libmyo_event_get_accelerometer": ([ctypes.c_void_p, ctypes.c_uint], ctypes.c_float),
    "libmyo_event_get_gyroscope": ([ctypes.c_void_p, ctypes.c_uint], ctypes.c_float),
    "libmyo_event_get_pose": ([ctypes.c_void_p], ctypes.c_int),
    "libmyo_event_get_rssi": ([ctypes.c_void_p], ctypes.c_int8),
    "libmyo_event_get_emg": ([ctypes.c_void_p, ctypes.c_uint], ctypes.c_int8),
}


def default_library_name() -> str:
    if sys.platform.startswith("win"):
        return "myo64.dll" if ctypes.sizeof(ctypes.c_void_p) == 8 else "myo32.dll"
    if sys.platform == "darwin":
        return "myo.framework/myo"
    return ctypes.util.find_library("myo") or "libmyo.so"


def timestamp_from_micros(us: int) -> datetime:
    """libmyo timestamps are microseconds since the Unix epoch."""
    return _EPOCH + timedelta(microseconds=int(us))


class LibMyo(NativeLibrary):
    """
    ctypes binding to the vendor libmyo shared library.

    Commands pass an error-details out pointer; a non-zero result is raised as
    NativeCallError with the library's message. Nothing else is read back.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.lib: Optional[ctypes.CDLL] = None

    def open(self) -> None:
        if self.lib is not None:
            return

        name = self.path or default_library_name()
        try:
            lib = ctypes.CDLL(name)
        except OSError as e:
            raise NativeLoadError(f"could not load {name}: {e}") from None

        try:
            for fn_name, (argtypes, restype) in _SIGNATURES.items():
                fn = getattr(lib, fn_name)
                fn.argtypes = argtypes
                fn.restype = restype
        except AttributeError as e:
            raise NativeLoadError(f"{name} is not a compatible libmyo: {e}") from None

        self.lib = lib

    def close(self) -> None:
        # ctypes cannot unload a CDLL; drop the reference
        self.lib = None

    def is_open(self) -> bool:
        return self.lib is not None

    # ---------------- internals ----------------
    def _require(self) -> ctypes.CDLL:
        if self.lib is None:
            raise NativeError("libmyo call while library not open")
        return self.lib

    def _command(self, fn_name: str, *args: Any) -> None:
        lib = self._require()
        err = ctypes.c_void_p()
        result = getattr(lib, fn_name)(*args, ctypes.pointer(err))
        if result != LIBMYO_SUCCESS:
            raise NativeCallError(fn_name, int(result), self._consume_error(lib, err))

    @staticmethod
    def _consume_error(lib: ctypes.CDLL, err: ctypes.c_void_p) -> str:
        if not err.value:
            return ""
        try:
            raw = lib.libmyo_error_cstring(err)
            return raw.decode("utf-8", "replace") if raw else ""
        finally:
            lib.libmyo_free_error_details(err)

    # ---------------- commands ----------------
    def vibrate(self, handle: Any, vibration_type: int) -> None:
        self._command("libmyo_vibrate", handle, int(vibration_type))

    def request_rssi(self, handle: Any) -> None:
        self._command("libmyo_request_rssi", handle)

    def set_stream_emg(self, handle: Any, stream_type: int) -> None:
        self._command("libmyo_set_stream_emg", handle, int(stream_type))

    def unlock(self, handle: Any, unlock_type: int) -> None:
        self._command("libmyo_myo_unlock", handle, int(unlock_type))

    def lock(self, handle: Any) -> None:
        self._command("libmyo_myo_lock", handle)

    def notify_user_action(self, handle: Any, action_type: int) -> None:
        self._command("libmyo_myo_notify_user_action", handle, int(action_type))

    # ---------------- event accessors ----------------
    def event_get_type(self, evt: Any) -> int:
        return int(self._require().libmyo_event_get_type(evt))

    def event_get_timestamp(self, evt: Any) -> datetime:
        return timestamp_from_micros(self._require().libmyo_event_get_timestamp(evt))

    def event_get_myo(self, evt: Any) -> Any:
        return self._require().libmyo_event_get_myo(evt)

    def event_get_arm(self, evt: Any) -> int:
        return int(self._require().libmyo_event_get_arm(evt))

    def event_get_x_direction(self, evt: Any) -> int:
        return int(self._require().libmyo_event_get_x_direction(evt))

    def event_get_orientation(self, evt: Any, index: int) -> float:
        return float(self._require().libmyo_event_get_orientation(evt, int(index)))

    def event_get_accelerometer(self, evt: Any, index: int) -> float:
        return float(self._require().libmyo_event_get_accelerometer(evt, int(index)))

    def event_get_gyroscope(self, evt: Any, index: int) -> float:
        return float(self._require().libmyo_event_get_gyroscope(evt, int(index)))

    def event_get_pose(self, evt: Any) -> int:
        return int(self._require().libmyo_event_get_pose(evt))

    def event_get_rssi(self, evt: Any) -> int:
        return int(self._require().libmyo_event_get_rssi(evt))

    def event_get_emg(self, evt: Any, sensor: int) -> int:
        return int(self._require().libmyo_event_get_emg(evt, int(sensor)))
