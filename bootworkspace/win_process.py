#===============================================================================
#  BootWorkspace | win_process.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Windows spawner: adds input-idle and main-window detection (pywin32) on
#  top of the portable subprocess spawner.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from typing import Any, List

import pywintypes
import win32api
import win32con
import win32event
import win32gui
import win32process

from .errors import WindowQueryUnavailable
from .spawner import SubprocessSpawner

WAIT_TIMEOUT = 258
WAIT_FAILED = 0xFFFFFFFF


class Win32ProcessSpawner(SubprocessSpawner):
    def wait_input_idle(self, process: Any, timeout_ms: int) -> bool:
        try:
            handle = win32api.OpenProcess(
                win32con.PROCESS_QUERY_INFORMATION | win32con.SYNCHRONIZE, False, process.pid
            )
        except pywintypes.error as e:
            raise WindowQueryUnavailable(f"Cannot open process {process.pid}: {e}") from e

        try:
            rc = win32event.WaitForInputIdle(handle, max(0, int(timeout_ms)))
        except pywintypes.error as e:
            raise WindowQueryUnavailable(str(e)) from e
        finally:
            win32api.CloseHandle(handle)

        if rc == WAIT_FAILED:
            # console apps have no message queue to go idle on
            raise WindowQueryUnavailable(f"Process {process.pid} has no input queue")
        return rc == 0

    def main_window_handle(self, process: Any) -> int:
        """First visible, unowned top-level window that belongs to the process."""
        target = process.pid
        found: List[int] = []

        def _cb(hwnd, _):
            try:
                if not win32gui.IsWindowVisible(hwnd):
                    return True
                if win32gui.GetWindow(hwnd, win32con.GW_OWNER):
                    return True
                _, pid = win32process.GetWindowThreadProcessId(hwnd)
            except pywintypes.error:
                return True
            if pid == target:
                found.append(hwnd)
            return True

        win32gui.EnumWindows(_cb, None)
        return found[0] if found else 0
