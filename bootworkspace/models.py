#===============================================================================
#  BootWorkspace | models.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Shared data models: workspace config entries, live desktops, per-app
#  launch results and the rows of the end-of-run report.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Tuple

from .constants import DEFAULT_LAUNCH_DELAY_MS, DEFAULT_LAUNCH_TIMEOUT_MS


# eq=False: two entries with the same fields are still two different apps.
@dataclass(frozen=True, eq=False)
class AppSpec:
    """One application to start, as declared in workspace.json."""
    name: str
    path: str = ""
    args: Optional[str] = None
    desktop: str = "0"          # "Thing 1" | "desktop 2" | "0" | "1"
    wait_for_window: bool = False
    launch_timeout_ms: int = 0  # <= 0 means "use the default"

    @property
    def display_name(self) -> str:
        return self.name.strip() or "(unnamed)"

    @property
    def effective_timeout_ms(self) -> int:
        return self.launch_timeout_ms if self.launch_timeout_ms > 0 else DEFAULT_LAUNCH_TIMEOUT_MS


@dataclass(frozen=True)
class DesktopSpec:
    index: int
    name: str = ""


@dataclass(frozen=True)
class WorkspaceConfig:
    desktops: Tuple[DesktopSpec, ...] = ()
    apps: Tuple[AppSpec, ...] = ()
    launch_delay_ms: int = DEFAULT_LAUNCH_DELAY_MS


@dataclass(frozen=True)
class LiveDesktop:
    """Snapshot of an OS desktop. `index` is its position in the live enumeration."""
    index: int
    name: str = ""
    id: str = ""


class LaunchStatus(str, Enum):
    PENDING = "Pending"
    DONE = "Done"
    SKIPPED_NO_PATH = "Skipped: No path"
    SKIPPED_NOT_FOUND = "Skipped: Not found"
    ERROR = "Error"

    @property
    def is_terminal(self) -> bool:
        return self is not LaunchStatus.PENDING

    @property
    def label(self) -> str:
        if self in (LaunchStatus.SKIPPED_NO_PATH, LaunchStatus.SKIPPED_NOT_FOUND):
            return "Skipped"
        return self.value


class PlannedLaunch(NamedTuple):
    desktop_index: int
    app: AppSpec


@dataclass
class LaunchResult:
    """Outcome of one planned app. Pending until the orchestrator finishes it."""
    app: AppSpec
    desktop_index: int
    desktop_label: str
    status: LaunchStatus = LaunchStatus.PENDING
    detail: str = ""

    def finish(self, status: LaunchStatus, detail: str = "") -> None:
        if self.status.is_terminal:
            raise ValueError(
                f"Result for '{self.app.display_name}' is already {self.status.value}; "
                f"cannot move it to {status.value}"
            )
        if not status.is_terminal:
            raise ValueError("A result can only be finished with a terminal status")
        self.status = status
        self.detail = detail


@dataclass(frozen=True)
class ReportRow:
    app: str
    desktop: str
    status: str
    detail: str
