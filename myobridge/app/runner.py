# myobridge/app/runner.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from myobridge.app.config import BridgeConfig
from myobridge.core.errors import ConfigError, NativeUnavailableError
from myobridge.interfaces.command_sink import CommandSink
from myobridge.native.base import NativeLibrary
from myobridge.native.errors import NativeError, NativeLoadError
from myobridge.native.registry import NativeDriverRegistry
from myobridge.recording.command import CommandTraceLogger
from myobridge.runtime.router import DeviceRouter


@dataclass(frozen=True)
class BridgeRun:
    native: NativeLibrary
    router: DeviceRouter
    cmd_sink: Optional[CommandSink]

    def close(self) -> None:
        self.router.close()
        if self.cmd_sink is not None:
            self.cmd_sink.close()
        self.native.close()


def create_native(cfg: BridgeConfig, *, drivers: Optional[NativeDriverRegistry] = None) -> NativeLibrary:
    """Construct (not open) the configured native driver."""
    drivers = drivers or NativeDriverRegistry.default()
    try:
        return drivers.create(cfg.native_driver, **cfg.native_params)
    except (NativeError, TypeError) as e:
        # unknown driver key or constructor mismatch
        raise ConfigError(
            f"Failed to construct native driver '{cfg.native_driver}'.",
            hint=str(e),
            details={"driver": cfg.native_driver, "params": dict(cfg.native_params)},
        ) from None


def start_bridge(
    cfg: BridgeConfig,
    *,
    drivers: Optional[NativeDriverRegistry] = None,
    logger: Optional[logging.Logger] = None,
) -> BridgeRun:
    log = logger or logging.getLogger(__name__)

    native = create_native(cfg, drivers=drivers)
    try:
        native.open()
    except NativeLoadError as e:
        log.error("NATIVE_OPEN_FAILED driver=%s err=%s", cfg.native_driver, e)
        raise NativeUnavailableError(
            "Could not load the native device library.",
            hint=str(e),
            details={"driver": cfg.native_driver},
        ) from None

    cmd_sink: Optional[CommandTraceLogger] = None
    try:
        if cfg.command_trace_file:
            cmd_sink = CommandTraceLogger(
                logger=logging.getLogger("myobridge.commands"),
                file_path=Path(cfg.command_trace_file),
                flush_interval_s=cfg.flush_interval_s,
            )

        router = DeviceRouter(
            native,
            logger=log,
            cmd_sink=cmd_sink,
            report_unknown=cfg.report_unknown_events,
        )
    except Exception:
        if cmd_sink is not None:
            cmd_sink.close()
        native.close()
        raise

    log.info("BRIDGE_STARTED driver=%s trace=%s", cfg.native_driver, cfg.command_trace_file)
    return BridgeRun(native=native, router=router, cmd_sink=cmd_sink)
