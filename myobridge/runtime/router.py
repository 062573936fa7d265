# myobridge/runtime/router.py
from __future__ import annotations

import logging
from typing import Any, Dict, Hashable, List, Optional

from myobridge.interfaces.command_sink import CommandSink
from myobridge.native.base import NativeLibrary, handle_key
from myobridge.runtime.device import MyoDevice, UnknownEventHook


class DeviceRouter:
    """
    Handle -> MyoDevice attribution table for a device-management hub.

    The hub keeps ownership of discovery, pairing and the event pump; it calls
    attach()/detach() as devices come and go and route()/route_native() once
    per native event. The router is the `hub` back-reference of its devices.
    """

    def __init__(
        self,
        native: NativeLibrary,
        *,
        logger: Optional[logging.Logger] = None,
        cmd_sink: Optional[CommandSink] = None,
        on_unknown: Optional[UnknownEventHook] = None,
        report_unknown: bool = False,
    ):
        self._native = native
        self._log = logger or logging.getLogger(__name__)
        self._cmd_sink = cmd_sink
        self._on_unknown = on_unknown
        self._report_unknown = report_unknown
        self._devices: Dict[Hashable, MyoDevice] = {}

    @property
    def native(self) -> NativeLibrary:
        return self._native

    def attach(self, handle: Any) -> MyoDevice:
        """Return the device for handle, creating it on first sight."""
        key = handle_key(handle)
        device = self._devices.get(key)
        if device is not None:
            return device

        device = MyoDevice(
            self,
            handle,
            self._native,
            logger=self._log,
            cmd_sink=self._cmd_sink,
            on_unknown=self._on_unknown,
            report_unknown=self._report_unknown,
        )
        self._devices[key] = device
        self._log.info("DEVICE_ATTACHED handle=%r count=%d", handle, len(self._devices))
        return device

    def get(self, handle: Any) -> Optional[MyoDevice]:
        return self._devices.get(handle_key(handle))

    def devices(self) -> List[MyoDevice]:
        return list(self._devices.values())

    def detach(self, handle: Any) -> Optional[MyoDevice]:
        """Forget a device and invalidate it so stale references cannot reach native code."""
        device = self._devices.pop(handle_key(handle), None)
        if device is None:
            return None
        device.invalidate()
        self._log.info("DEVICE_DETACHED handle=%r count=%d", handle, len(self._devices))
        return device

    def route(self, handle: Any, kind: Any, timestamp: Any, evt: Any) -> bool:
        """Forward one event to the device owning handle; False if none is attached."""
        device = self._devices.get(handle_key(handle))
        if device is None:
            self._log.debug("EVENT_UNROUTED kind=%r handle=%r", kind, handle)
            return False
        device.dispatch(kind, timestamp, evt)
        return True

    def route_native(self, evt: Any) -> bool:
        """Read handle, tag and timestamp from a native event token and route it."""
        handle = self._native.event_get_myo(evt)
        kind = self._native.event_get_type(evt)
        timestamp = self._native.event_get_timestamp(evt)
        return self.route(handle, kind, timestamp, evt)

    def close(self) -> None:
        for key in list(self._devices):
            self.detach(key)

    def __len__(self) -> int:
        return len(self._devices)
