#===============================================================================
#  BootWorkspace | waits.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Waits for a launched app to show its main window. Best effort: a timeout
#  is a logged warning, never an error.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import threading
import time
from typing import Any, Optional

from .constants import INPUT_IDLE_CAP_MS, WINDOW_POLL_MS
from .errors import WindowQueryUnavailable
from .interfaces import ProcessSpawner
from .run_log import RunLog


def _now_ms() -> int:
    return int(time.monotonic() * 1000)


def pause(seconds: float, cancel: Optional[threading.Event] = None) -> bool:
    """Sleep that wakes up early on cancel. Returns True if cancelled."""
    seconds = max(0.0, seconds)
    if cancel is None:
        time.sleep(seconds)
        return False
    return cancel.wait(seconds)


def wait_for_window(
    spawner: ProcessSpawner,
    process: Any,
    app_name: str,
    timeout_ms: int,
    log: RunLog,
    cancel: Optional[threading.Event] = None,
    poll_ms: int = WINDOW_POLL_MS,
    idle_cap_ms: int = INPUT_IDLE_CAP_MS,
) -> bool:
    """Block until `process` is input-idle or has a main window, or timeout_ms passes.

    Input-idle is asked first, capped at min(idle_cap_ms, timeout_ms). If that
    times out or is not available for the process, the main window handle is
    polled every poll_ms for whatever is left of timeout_ms. Never raises.
    """
    if process is None:
        return False
    try:
        return _wait_for_window(spawner, process, app_name, timeout_ms, log, cancel, poll_ms, idle_cap_ms)
    except Exception as e:
        log.write_quiet(f"[WARN] {app_name} window wait failed: {e}")
        return False


def _wait_for_window(spawner, process, app_name, timeout_ms, log, cancel, poll_ms, idle_cap_ms) -> bool:
    timeout_ms = max(0, int(timeout_ms))
    deadline = _now_ms() + timeout_ms

    try:
        if spawner.wait_input_idle(process, min(idle_cap_ms, timeout_ms)):
            return True
    except WindowQueryUnavailable:
        pass

    while True:
        if spawner.main_window_handle(process):
            return True
        if not spawner.is_running(process):
            log.write(f"[WARN] {app_name} exited before a window was detected")
            return False

        remaining = deadline - _now_ms()
        if remaining <= 0:
            break
        if pause(min(poll_ms, remaining) / 1000.0, cancel):
            return False

    log.write(f"[WARN] {app_name} window not detected within {timeout_ms}ms")
    return False
