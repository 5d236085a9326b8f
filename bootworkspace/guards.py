#===============================================================================
#  BootWorkspace | guards.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Session guards run before the launch sequence: one instance at a time,
#  ignore a second start within a few seconds, and wait for the shell
#  (explorer.exe + taskbar) to be up at logon.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import sys
import threading
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import psutil

from .constants import (
    LAST_RUN_FILE_NAME,
    LOCK_FILE_NAME,
    RECENT_RUN_WINDOW_S,
    SHELL_READY_POLL_S,
    SHELL_READY_TIMEOUT_S,
    SINGLE_INSTANCE_MUTEX,
)
from .waits import pause


class SingleInstance:
    """Named mutex on Windows, an exclusive lock file elsewhere."""

    def __init__(self, lock_dir: Path, name: str = SINGLE_INSTANCE_MUTEX):
        self.lock_dir = Path(lock_dir)
        self.name = name
        self._handle = None
        self._lock_file = None

    def acquire(self) -> bool:
        if sys.platform.startswith("win"):
            return self._acquire_mutex()
        return self._acquire_lock_file()

    def _acquire_mutex(self) -> bool:
        import pywintypes
        import win32api
        import win32event
        import winerror

        try:
            handle = win32event.CreateMutex(None, True, self.name)
        except pywintypes.error:
            return False
        if win32api.GetLastError() == winerror.ERROR_ALREADY_EXISTS:
            win32api.CloseHandle(handle)
            return False
        self._handle = handle
        return True

    def _acquire_lock_file(self) -> bool:
        import fcntl

        self.lock_dir.mkdir(parents=True, exist_ok=True)
        f = open(self.lock_dir / LOCK_FILE_NAME, "a+")
        try:
            fcntl.flock(f.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except OSError:
            f.close()
            return False
        self._lock_file = f
        return True

    def release(self) -> None:
        if self._handle is not None:
            import win32api
            import win32event

            try:
                win32event.ReleaseMutex(self._handle)
            finally:
                win32api.CloseHandle(self._handle)
                self._handle = None
        if self._lock_file is not None:
            self._lock_file.close()
            self._lock_file = None

    def __enter__(self) -> bool:
        return self.acquire()

    def __exit__(self, *exc) -> None:
        self.release()


def should_exit_due_to_recent_run(
    state_dir: Path, seconds: float = RECENT_RUN_WINDOW_S, now: Optional[datetime] = None
) -> bool:
    """True if the previous run started less than `seconds` ago; otherwise stamps this run.

    A stamp that cannot be read or written never blocks a run.
    """
    now = now or datetime.now(timezone.utc)
    stamp = Path(state_dir) / LAST_RUN_FILE_NAME
    try:
        stamp.parent.mkdir(parents=True, exist_ok=True)
        if stamp.exists():
            try:
                prev = datetime.fromisoformat(stamp.read_text(encoding="utf-8").strip())
            except ValueError:
                prev = None
            if prev is not None:
                if prev.tzinfo is None:
                    prev = prev.replace(tzinfo=timezone.utc)
                if 0 <= (now - prev).total_seconds() < seconds:
                    return True
        stamp.write_text(now.isoformat(), encoding="utf-8")
    except OSError:
        pass
    return False


def _explorer_running() -> bool:
    for p in psutil.process_iter(attrs=["name"]):
        if (p.info.get("name") or "").lower() == "explorer.exe":
            return True
    return False


def _taskbar_present() -> bool:
    import pywintypes
    import win32gui

    try:
        return bool(win32gui.FindWindow("Shell_TrayWnd", None))
    except pywintypes.error:
        return False


def wait_for_shell_ready(
    timeout_s: float = SHELL_READY_TIMEOUT_S,
    poll_s: float = SHELL_READY_POLL_S,
    cancel: Optional[threading.Event] = None,
) -> bool:
    """At logon Explorer may not be up yet; desktops cannot be switched before it is."""
    if not sys.platform.startswith("win"):
        return True
    deadline = time.monotonic() + timeout_s
    while time.monotonic() < deadline:
        if _explorer_running() and _taskbar_present():
            return True
        if pause(poll_s, cancel):
            return False
    return False
