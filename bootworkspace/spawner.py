#===============================================================================
#  BootWorkspace | spawner.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Portable process spawner (subprocess + psutil). Window questions are not
#  answerable here; the Windows spawner in win_process.py fills them in.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import os
import shlex
import subprocess
import sys
from typing import Any, List, Optional, Union

import psutil

from .errors import WindowQueryUnavailable
from .interfaces import ProcessSpawner


def build_command(executable: str, args: Optional[str], windows: Optional[bool] = None) -> Union[str, List[str]]:
    """Windows gets one command line with `args` appended verbatim; POSIX gets argv."""
    if windows is None:
        windows = os.name == "nt"
    has_args = bool(args and args.strip())
    if windows:
        cmd = subprocess.list2cmdline([executable])
        return f"{cmd} {args}" if has_args else cmd
    return [executable] + (shlex.split(args) if has_args else [])


class SubprocessSpawner(ProcessSpawner):
    def spawn(self, executable: str, args: Optional[str], cwd: str) -> subprocess.Popen:
        return subprocess.Popen(
            build_command(executable, args),
            cwd=cwd or None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            shell=False,
            # no console window flashes for console-subsystem children
            creationflags=getattr(subprocess, "CREATE_NO_WINDOW", 0),
        )

    def shell_open(self, target: str) -> Optional[Any]:
        if hasattr(os, "startfile"):
            os.startfile(target)  # type: ignore[attr-defined]
            return None
        opener = "open" if sys.platform == "darwin" else "xdg-open"
        subprocess.Popen([opener, target])
        return None

    def wait_input_idle(self, process: Any, timeout_ms: int) -> bool:
        raise WindowQueryUnavailable("Input-idle state is only reported on Windows")

    def main_window_handle(self, process: Any) -> int:
        return 0

    def is_running(self, process: Any) -> bool:
        poll = getattr(process, "poll", None)
        if poll is not None:
            return poll() is None
        try:
            return psutil.Process(process.pid).is_running()
        except psutil.Error:
            return False
