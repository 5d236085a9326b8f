#===============================================================================
#  BootWorkspace | config.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Loads workspace.json into a WorkspaceConfig. Keys are matched
#  case-insensitively; a config without apps is rejected.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import math
from pathlib import Path
from typing import Any, Dict, Optional

import json5

from .constants import DEFAULT_LAUNCH_DELAY_MS
from .errors import ConfigError
from .models import AppSpec, DesktopSpec, WorkspaceConfig


def _lower_keys(d: Dict[str, Any]) -> Dict[str, Any]:
    return {str(k).lower(): v for k, v in d.items()}


def _as_int(value: Any, field_name: str, default: int) -> int:
    if value is None:
        return default
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise ConfigError(f"'{field_name}' must be a number, got {value!r}")
    return int(value)


def _as_str(value: Any, field_name: str, default: Optional[str] = "") -> Optional[str]:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ConfigError(f"'{field_name}' must be a string, got {value!r}")
    if isinstance(value, (int, float)):
        return str(value)
    if not isinstance(value, str):
        raise ConfigError(f"'{field_name}' must be a string, got {value!r}")
    return value


def _parse_desktop(raw: Any, pos: int) -> DesktopSpec:
    if not isinstance(raw, dict):
        raise ConfigError(f"desktops[{pos}] must be an object")
    d = _lower_keys(raw)
    return DesktopSpec(
        index=_as_int(d.get("index"), f"desktops[{pos}].index", 0),
        name=_as_str(d.get("name"), f"desktops[{pos}].name") or "",
    )


def _parse_app(raw: Any, pos: int) -> AppSpec:
    if not isinstance(raw, dict):
        raise ConfigError(f"apps[{pos}] must be an object")
    d = _lower_keys(raw)
    wait = d.get("waitforwindow", False)
    if not isinstance(wait, bool):
        raise ConfigError(f"apps[{pos}].waitForWindow must be true/false")
    return AppSpec(
        name=_as_str(d.get("name"), f"apps[{pos}].name") or "",
        path=_as_str(d.get("path"), f"apps[{pos}].path") or "",
        args=_as_str(d.get("args"), f"apps[{pos}].args", default=None),
        desktop=_as_str(d.get("desktop"), f"apps[{pos}].desktop", default="0"),
        wait_for_window=wait,
        launch_timeout_ms=_as_int(d.get("launchtimeoutms"), f"apps[{pos}].launchTimeoutMs", 0),
    )


def parse_config(data: Any) -> WorkspaceConfig:
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a JSON object")
    d = _lower_keys(data)

    raw_desktops = d.get("desktops") or []
    raw_apps = d.get("apps") or []
    if not isinstance(raw_desktops, list):
        raise ConfigError("'desktops' must be a list")
    if not isinstance(raw_apps, list):
        raise ConfigError("'apps' must be a list")
    if not raw_apps:
        raise ConfigError("Config has no 'apps' entries.")

    return WorkspaceConfig(
        desktops=tuple(_parse_desktop(x, i) for i, x in enumerate(raw_desktops)),
        apps=tuple(_parse_app(x, i) for i, x in enumerate(raw_apps)),
        launch_delay_ms=_as_int(d.get("launchdelayms"), "launchDelayMs", DEFAULT_LAUNCH_DELAY_MS),
    )


def load_config(config_file: Path) -> WorkspaceConfig:
    """Read and validate workspace.json. Raises ConfigError on any problem.

    // and /* */ comments and trailing commas are allowed.
    """
    config_file = Path(config_file)
    if not config_file.exists():
        raise ConfigError(f"Config file '{config_file}' not found")
    try:
        data = json5.loads(config_file.read_text(encoding="utf-8-sig"))
    except (OSError, ValueError) as e:
        raise ConfigError(f"Error loading config file '{config_file}': {e}") from e
    return parse_config(data)
