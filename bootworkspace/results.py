#===============================================================================
#  BootWorkspace | results.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  One LaunchResult per planned app, in plan order, plus the report rows
#  derived from them at the end of the run.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterator, List, Sequence

from .models import AppSpec, LaunchResult, LaunchStatus, PlannedLaunch, ReportRow, WorkspaceConfig
from .resolver import desktop_label

DEFAULT_DETAILS = {
    LaunchStatus.DONE: "Launched successfully",
    LaunchStatus.SKIPPED_NO_PATH: "No path specified",
    LaunchStatus.SKIPPED_NOT_FOUND: "Executable not found",
    LaunchStatus.ERROR: "See log for details",
    LaunchStatus.PENDING: "Not started",
}


class ResultAggregator:
    def __init__(self, plan: Sequence[PlannedLaunch], config: WorkspaceConfig):
        self._results: List[LaunchResult] = [
            LaunchResult(app=app, desktop_index=idx, desktop_label=desktop_label(idx, config))
            for idx, app in plan
        ]
        self._by_app: Dict[AppSpec, LaunchResult] = {r.app: r for r in self._results}
        if len(self._by_app) != len(self._results):
            raise ValueError("An app appears more than once in the launch plan")

    def __len__(self) -> int:
        return len(self._results)

    def __iter__(self) -> Iterator[LaunchResult]:
        return iter(self._results)

    def complete(self, app: AppSpec, status: LaunchStatus, detail: str = "") -> LaunchResult:
        result = self._by_app[app]
        result.finish(status, detail)
        return result

    def pending(self) -> List[LaunchResult]:
        return [r for r in self._results if not r.status.is_terminal]

    @property
    def all_finished(self) -> bool:
        return not self.pending()

    def counts(self) -> Dict[str, int]:
        return dict(Counter(r.status.label for r in self._results))

    def report(self) -> List[ReportRow]:
        rows = []
        for r in self._results:
            detail = DEFAULT_DETAILS[r.status]
            if r.status is LaunchStatus.ERROR and r.detail:
                detail = f"{detail}: {r.detail}"
            rows.append(ReportRow(app=r.app.display_name, desktop=r.desktop_label, status=r.status.label, detail=detail))
        return rows
