#===============================================================================
#  BootWorkspace | interfaces.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Capability contracts the launch core depends on. Concrete Windows bindings
#  live in win_desktops.py / win_process.py; tests plug in fakes.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from .models import LiveDesktop


class DesktopProvider(ABC):
    """Virtual desktops as the OS sees them, addressed by live position."""

    @abstractmethod
    def list_desktops(self) -> List[LiveDesktop]:
        """Current desktops in stable OS order. Unreadable names come back as ""."""

    @abstractmethod
    def create_desktop(self) -> None:
        ...

    @abstractmethod
    def switch_to(self, index: int) -> None:
        ...

    @abstractmethod
    def current_index(self) -> int:
        """Position of the active desktop, or -1 if it cannot be determined."""

    @abstractmethod
    def rename(self, index: int, name: str) -> None:
        """May raise when the OS does not support naming; callers swallow it."""


class ProcessSpawner(ABC):
    """Starting processes and asking them about their windows."""

    @abstractmethod
    def spawn(self, executable: str, args: Optional[str], cwd: str) -> Any:
        """Start directly (no shell, no console window) with stdout/stderr piped.

        The returned handle must expose `stdout`, `stderr`, `pid` and `poll()`
        like subprocess.Popen.
        """

    @abstractmethod
    def shell_open(self, target: str) -> Optional[Any]:
        """Hand a URI / shell: reference to the OS. Usually returns no handle."""

    @abstractmethod
    def wait_input_idle(self, process: Any, timeout_ms: int) -> bool:
        """True once the process waits for input; False on timeout.

        Raises WindowQueryUnavailable when the signal does not exist for this
        process (console apps, non-Windows hosts).
        """

    @abstractmethod
    def main_window_handle(self, process: Any) -> int:
        """Handle of the process's main top-level window, 0 when there is none."""

    @abstractmethod
    def is_running(self, process: Any) -> bool:
        ...
