# myobridge/app/config.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from myobridge.core.errors import ConfigError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class BridgeConfig:
    native_driver: str = "libmyo"
    native_params: Dict[str, Any] = field(default_factory=dict)
    log_level: str = "INFO"
    log_file: Optional[str] = None
    command_trace_file: Optional[str] = None
    flush_interval_s: float = 0.5
    report_unknown_events: bool = False


def _section(doc: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    sec = doc.get(name)
    if sec is None:
        return {}
    if not isinstance(sec, dict):
        raise ConfigError(
            f"Config section '{name}' must be a mapping.",
            details={"section": name, "type": type(sec).__name__},
        )
    return sec


def _opt_str(sec: Mapping[str, Any], key: str, where: str) -> Optional[str]:
    v = sec.get(key)
    if v is None:
        return None
    if not isinstance(v, str):
        raise ConfigError(f"'{where}.{key}' must be a string.", details={"value": repr(v)})
    return v


def config_from_dict(doc: Mapping[str, Any]) -> BridgeConfig:
    """Build a BridgeConfig from a parsed YAML document (missing keys -> defaults)."""
    if not isinstance(doc, dict):
        raise ConfigError("Config root must be a mapping.")

    native = _section(doc, "native")
    logging_sec = _section(doc, "logging")
    commands = _section(doc, "commands")
    dispatch = _section(doc, "dispatch")

    driver = native.get("driver", "libmyo")
    if not isinstance(driver, str) or not driver:
        raise ConfigError("'native.driver' must be a non-empty string.", details={"value": repr(driver)})

    params = native.get("params") or {}
    if not isinstance(params, dict):
        raise ConfigError("'native.params' must be a mapping.", details={"value": repr(params)})

    level = str(logging_sec.get("level", "INFO")).upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(
            f"Unknown log level '{level}'.",
            hint=f"Use one of: {', '.join(_LOG_LEVELS)}",
        )

    try:
        flush_interval_s = float(commands.get("flush_interval_s", 0.5))
    except (TypeError, ValueError):
        raise ConfigError(
            "'commands.flush_interval_s' must be a number.",
            details={"value": repr(commands.get("flush_interval_s"))},
        ) from None
    if flush_interval_s <= 0:
        raise ConfigError("'commands.flush_interval_s' must be > 0.")

    report_unknown = dispatch.get("report_unknown_events", False)
    if not isinstance(report_unknown, bool):
        raise ConfigError("'dispatch.report_unknown_events' must be true/false.")

    return BridgeConfig(
        native_driver=driver,
        native_params=dict(params),
        log_level=level,
        log_file=_opt_str(logging_sec, "file", "logging"),
        command_trace_file=_opt_str(commands, "trace_file", "commands"),
        flush_interval_s=flush_interval_s,
        report_unknown_events=report_unknown,
    )


def load_config(path: str | Path) -> BridgeConfig:
    full_path = Path(path)
    if not full_path.exists():
        raise ConfigError(
            f"Missing config file: {full_path}",
            hint="Pass --config with a path to a YAML file.",
        )

    try:
        with open(full_path, "r", encoding="utf-8") as f:
            doc = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {full_path}.", hint=str(e)) from None

    return config_from_dict(doc)
