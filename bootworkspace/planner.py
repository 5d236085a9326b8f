#===============================================================================
#  BootWorkspace | planner.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Decides the order desktops are visited and the order apps start on each.
#  Pure: no desktop or process calls, only the config and a live snapshot.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from typing import Dict, List, Sequence

from .models import AppSpec, LiveDesktop, PlannedLaunch, WorkspaceConfig
from .resolver import resolve_desktop


def resolve_targets(
    config: WorkspaceConfig, live_desktops: Sequence[LiveDesktop] = ()
) -> Dict[AppSpec, int]:
    # AppSpec hashes by identity, so repeated names stay separate entries.
    return {app: resolve_desktop(app.desktop, config, live_desktops) for app in config.apps}


def desktop_visit_order(
    config: WorkspaceConfig,
    current_index: int,
    live_desktops: Sequence[LiveDesktop] = (),
) -> List[int]:
    """Distinct target desktops in first-seen order, the current desktop first if targeted."""
    order: List[int] = []
    for idx in resolve_targets(config, live_desktops).values():
        if idx not in order:
            order.append(idx)

    if current_index >= 0 and current_index in order:
        order.remove(current_index)
        order.insert(0, current_index)
    return order


def _launch_sort_key(app: AppSpec):
    # waiters first so their slow start overlaps later launches, then by name
    return (not app.wait_for_window, app.name)


def plan_launches(
    config: WorkspaceConfig,
    current_index: int,
    live_desktops: Sequence[LiveDesktop] = (),
) -> List[PlannedLaunch]:
    targets = resolve_targets(config, live_desktops)
    plan: List[PlannedLaunch] = []
    for desk in desktop_visit_order(config, current_index, live_desktops):
        apps = [a for a in config.apps if targets[a] == desk]
        for app in sorted(apps, key=_launch_sort_key):
            plan.append(PlannedLaunch(desk, app))
    return plan
