#===============================================================================
#  BootWorkspace | orchestrator.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  The launch sequence: provision desktops, plan, then walk the plan one app
#  at a time, switching desktop only when it changes. A failing app is
#  recorded and the sequence moves on; only config/provisioning problems
#  abort the run.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import threading
import traceback
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .constants import DEFAULT_SETTLE_DELAY_MS, INPUT_IDLE_CAP_MS, READER_JOIN_TIMEOUT_S, WINDOW_POLL_MS
from .interfaces import DesktopProvider, ProcessSpawner
from .launcher import ProcessLauncher, ProcessSupervisor
from .models import LaunchStatus, PlannedLaunch, ReportRow, WorkspaceConfig
from .planner import plan_launches
from .provisioner import ensure_desktops
from .results import ResultAggregator
from .run_log import RunLog
from .waits import pause, wait_for_window


@dataclass
class RunSettings:
    settle_delay_ms: int = DEFAULT_SETTLE_DELAY_MS
    poll_ms: int = WINDOW_POLL_MS
    input_idle_cap_ms: int = INPUT_IDLE_CAP_MS
    reader_join_timeout_s: float = READER_JOIN_TIMEOUT_S
    # skip settle / inter-launch sleeps (dry runs, tests)
    no_delay: bool = False


@dataclass
class RunSummary:
    rows: List[ReportRow]
    counts: Dict[str, int]
    cancelled: bool = False
    plan: List[PlannedLaunch] = field(default_factory=list, repr=False)


# Called as progress(done_count, total, row) after each app; used by the UI.
ProgressCallback = Callable[[int, int, ReportRow], None]


class Orchestrator:
    def __init__(
        self,
        config: WorkspaceConfig,
        desktops: DesktopProvider,
        spawner: ProcessSpawner,
        log: RunLog,
        settings: Optional[RunSettings] = None,
        cancel: Optional[threading.Event] = None,
        progress: Optional[ProgressCallback] = None,
    ):
        self.config = config
        self.desktops = desktops
        self.spawner = spawner
        self.log = log
        self.settings = settings or RunSettings()
        self.cancel = cancel or threading.Event()
        self.progress = progress
        self.results: Optional[ResultAggregator] = None
        self.live_count = 0

    def _sleep_ms(self, ms: int) -> bool:
        if self.settings.no_delay or ms <= 0:
            return self.cancel.is_set()
        return pause(ms / 1000.0, self.cancel)

    def prepare(self) -> List[PlannedLaunch]:
        """Provision desktops and build the plan. Raises ProvisioningError if a desktop cannot be created."""
        self.log.write(f"Desktops(before)={len(self.desktops.list_desktops())}")
        live = ensure_desktops(self.config, self.desktops, self.log)
        self.log.write(f"Desktops(after)={len(live)}")
        self.live_count = len(live)

        current = self.desktops.current_index()
        return plan_launches(self.config, current, live)

    def run(self) -> RunSummary:
        plan = self.prepare()
        results = self.results = ResultAggregator(plan, self.config)
        if not plan:
            self.log.write("No apps defined in workspace.json.")
            return RunSummary(rows=[], counts={}, plan=plan)

        supervisor = ProcessSupervisor(self.log)
        launcher = ProcessLauncher(self.spawner, self.log, supervisor)
        cancelled = False
        current_desktop: Optional[int] = None

        try:
            for n, step in enumerate(plan, start=1):
                if self.cancel.is_set():
                    cancelled = True
                    break

                if not 0 <= step.desktop_index < self.live_count:
                    self._record_unavailable(results, step)
                    self._report_progress(n, len(plan), results, step)
                    continue

                if step.desktop_index != current_desktop:
                    try:
                        self.desktops.switch_to(step.desktop_index)
                    except Exception as e:
                        self._record_error(results, step, e)
                        self._report_progress(n, len(plan), results, step)
                        continue
                    current_desktop = step.desktop_index
                    if self._sleep_ms(self.settings.settle_delay_ms):
                        cancelled = True
                        break

                try:
                    status, detail = self._launch_one(launcher, step)
                except Exception as e:
                    self._record_error(results, step, e)
                else:
                    results.complete(step.app, status, detail)
                self._report_progress(n, len(plan), results, step)
        finally:
            supervisor.shutdown(self.settings.reader_join_timeout_s)

        if cancelled or self.cancel.is_set():
            cancelled = True
            self.log.stamp(f"Run cancelled; {len(results.pending())} app(s) not started.")
        else:
            self.log.write("Launch sequence complete.")

        return RunSummary(rows=results.report(), counts=results.counts(), cancelled=cancelled, plan=plan)

    def _launch_one(self, launcher: ProcessLauncher, step: PlannedLaunch):
        app = step.app
        attempt = launcher.launch(app, step.desktop_index)
        if attempt.status is not LaunchStatus.DONE:
            return attempt.status, attempt.detail

        if app.wait_for_window:
            wait_for_window(
                self.spawner,
                attempt.process,
                app.name,
                app.effective_timeout_ms,
                self.log,
                cancel=self.cancel,
                poll_ms=self.settings.poll_ms,
                idle_cap_ms=self.settings.input_idle_cap_ms,
            )

        self._sleep_ms(self.config.launch_delay_ms)
        return LaunchStatus.DONE, attempt.detail

    def _record_error(self, results: ResultAggregator, step: PlannedLaunch, exc: BaseException) -> None:
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip()
        self.log.write_quiet(f"[ERROR] {step.app.name}: {tb}")
        results.complete(step.app, LaunchStatus.ERROR, str(exc))

    def _record_unavailable(self, results: ResultAggregator, step: PlannedLaunch) -> None:
        detail = f"Desktop index {step.desktop_index} not available"
        self.log.write(f"[ERROR] {step.app.name}: {detail} ({self.live_count} desktop(s) exist)")
        results.complete(step.app, LaunchStatus.ERROR, detail)

    def _report_progress(self, n: int, total: int, results: ResultAggregator, step: PlannedLaunch) -> None:
        if self.progress is None:
            return
        row = results.report()[n - 1]
        try:
            self.progress(n, total, row)
        except Exception:
            self.log.write_quiet(f"[WARN] progress callback failed:\n{traceback.format_exc()}")


def run_workspace(
    config: WorkspaceConfig,
    desktops: DesktopProvider,
    spawner: ProcessSpawner,
    log: RunLog,
    settings: Optional[RunSettings] = None,
    cancel: Optional[threading.Event] = None,
    progress: Optional[ProgressCallback] = None,
) -> RunSummary:
    return Orchestrator(config, desktops, spawner, log, settings, cancel, progress).run()
