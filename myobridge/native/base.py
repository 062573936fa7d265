# myobridge/native/base.py
from __future__ import annotations

import ctypes
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Hashable, Optional

_POINTER_TYPES = (ctypes._Pointer, ctypes.c_void_p, ctypes.c_char_p, ctypes.c_wchar_p)


def _pointer_address(handle: Any) -> Optional[int]:
    return ctypes.cast(handle, ctypes.c_void_p).value


def is_valid_handle(handle: Any) -> bool:
    """
    Null checks for an opaque device handle.

    None, integer 0 (False included) and null ctypes pointers of any pointer
    type are invalid; anything else is an opaque token handed back to the
    native layer untouched.
    """
    if handle is None:
        return False
    if isinstance(handle, int):
        return handle != 0
    if isinstance(handle, _POINTER_TYPES):
        return bool(_pointer_address(handle))
    return True


def handle_key(handle: Any) -> Hashable:
    """Stable dict key for a handle (ctypes pointers compare by address)."""
    if isinstance(handle, _POINTER_TYPES):
        return _pointer_address(handle)
    return handle


class NativeLibrary(ABC):
    """
    Abstract native device library (vendor SDK binding, simulator, ...).

    Contract:
      - open()/close() load and release the underlying library.
      - command calls take the opaque device handle and return nothing; they
        raise NativeCallError when the library reports a failure.
      - event accessors read one field from an opaque event token; callers
        only read the fields valid for the event's tag.
    """

    @abstractmethod
    def open(self) -> None: ...

    @abstractmethod
    def close(self) -> None: ...

    # ---------------- commands ----------------
    @abstractmethod
    def vibrate(self, handle: Any, vibration_type: int) -> None: ...

    @abstractmethod
    def request_rssi(self, handle: Any) -> None: ...

    @abstractmethod
    def set_stream_emg(self, handle: Any, stream_type: int) -> None: ...

    @abstractmethod
    def unlock(self, handle: Any, unlock_type: int) -> None: ...

    @abstractmethod
    def lock(self, handle: Any) -> None: ...

    @abstractmethod
    def notify_user_action(self, handle: Any, action_type: int) -> None: ...

    # ---------------- event accessors ----------------
    @abstractmethod
    def event_get_type(self, evt: Any) -> int: ...

    @abstractmethod
    def event_get_timestamp(self, evt: Any) -> datetime: ...

    @abstractmethod
    def event_get_myo(self, evt: Any) -> Any: ...

    @abstractmethod
    def event_get_arm(self, evt: Any) -> int: ...

    @abstractmethod
    def event_get_x_direction(self, evt: Any) -> int: ...

    @abstractmethod
    def event_get_orientation(self, evt: Any, index: int) -> float: ...

    @abstractmethod
    def event_get_accelerometer(self, evt: Any, index: int) -> float: ...

    @abstractmethod
    def event_get_gyroscope(self, evt: Any, index: int) -> float: ...

    @abstractmethod
    def event_get_pose(self, evt: Any) -> int: ...

    @abstractmethod
    def event_get_rssi(self, evt: Any) -> int: ...

    @abstractmethod
    def event_get_emg(self, evt: Any, sensor: int) -> int: ...

    def __enter__(self) -> "NativeLibrary":
        self.open()
        return self

    def __exit__(self, exc_type: type | None, exc_val: BaseException | None, exc_tb: Any) -> None:
        self.close()
