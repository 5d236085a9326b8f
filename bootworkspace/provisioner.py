#===============================================================================
#  BootWorkspace | provisioner.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Makes sure enough virtual desktops exist for the config and applies the
#  configured names. Safe to run any number of times.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from typing import List, Optional

from .errors import ProvisioningError
from .interfaces import DesktopProvider
from .models import LiveDesktop, WorkspaceConfig
from .resolver import parse_int
from .run_log import RunLog


def required_desktop_count(config: WorkspaceConfig) -> int:
    """max(1, 1 + highest configured index, 1 + highest numeric app target).

    Only plain integers count as app targets here, not names or "desktop N".
    """
    required = 1
    if config.desktops:
        required = max(required, max(d.index for d in config.desktops) + 1)

    numeric = [n for n in (parse_int(a.desktop) for a in config.apps) if n is not None and n >= 0]
    if numeric:
        required = max(required, max(numeric) + 1)
    return required


def ensure_desktops(
    config: WorkspaceConfig,
    provider: DesktopProvider,
    log: Optional[RunLog] = None,
) -> List[LiveDesktop]:
    """Create missing desktops one at a time, then name them. Returns the final live list."""
    required = required_desktop_count(config)

    desks = provider.list_desktops()
    while len(desks) < required:
        before = len(desks)
        provider.create_desktop()
        # The OS decides where the new desktop goes; always re-read.
        desks = provider.list_desktops()
        if len(desks) <= before:
            raise ProvisioningError(
                f"Creating a virtual desktop did not add one ({before} before and after)"
            )
        if log:
            log.write(f"Created virtual desktop #{len(desks)}")

    for d in config.desktops:
        if not (0 <= d.index < len(desks)) or not d.name.strip():
            continue
        try:
            if desks[d.index].name != d.name:
                provider.rename(d.index, d.name)
        except Exception as e:
            # naming is not supported on every Windows build
            if log:
                log.write_quiet(f"[WARN] Could not name desktop {d.index} '{d.name}': {e}")

    return provider.list_desktops()
