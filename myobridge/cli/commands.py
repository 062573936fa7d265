# myobridge/cli/commands.py
from __future__ import annotations

import dataclasses
import logging
from pathlib import Path

from myobridge.app.config import BridgeConfig, load_config
from myobridge.app.runner import start_bridge
from myobridge.model.enums import KINDS_BY_EVENT_TYPE, EventType


# ---------------- Logging ----------------

def configure_file_logging(app_log_path: Path, level: int = logging.INFO) -> None:
    """
    Add a file handler to the root logger (idempotent).
    Kept in CLI (presentation-layer concern).
    """
    root = logging.getLogger()
    app_log_path.parent.mkdir(parents=True, exist_ok=True)
    target = str(app_log_path.resolve())

    for h in root.handlers:
        if isinstance(h, logging.FileHandler) and getattr(h, "baseFilename", None) == target:
            return

    fh = logging.FileHandler(app_log_path, encoding="utf-8", delay=True)
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
    root.addHandler(fh)

    if root.level > level:
        root.setLevel(level)


def configure_logging(cfg: BridgeConfig) -> None:
    level = getattr(logging, cfg.log_level)
    logging.getLogger("myobridge").setLevel(level)
    if cfg.log_file:
        configure_file_logging(Path(cfg.log_file), level)


# ---------------- Commands ----------------

def cmd_kinds() -> int:
    for event_type in EventType:
        kinds = KINDS_BY_EVENT_TYPE.get(event_type)
        target = ", ".join(k.value for k in kinds) if kinds else "(ignored)"
        print(f"{int(event_type):>3}  {event_type.name:<13} -> {target}")
    return 0


def cmd_check(*, config_path: str, driver: str | None = None) -> int:
    cfg = load_config(config_path)
    if driver:
        cfg = dataclasses.replace(cfg, native_driver=driver)
    configure_logging(cfg)

    run = start_bridge(cfg)
    try:
        print(f"Native:  driver={cfg.native_driver} params={cfg.native_params or '-'} OK")
        print(f"Trace:   {cfg.command_trace_file or '(disabled)'}")
        print(f"Unknown: {'warning' if cfg.report_unknown_events else 'debug'}")
    finally:
        run.close()
    return 0
