#===============================================================================
#  BootWorkspace | win_desktops.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Windows 10/11 virtual desktops through pyvda. Positions are always taken
#  from a fresh enumeration; pyvda's 1-based numbers are not used as indices.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from typing import List

from pyvda import VirtualDesktop, get_virtual_desktops

from .interfaces import DesktopProvider
from .models import LiveDesktop


def _safe_name(desktop) -> str:
    try:
        return desktop.name or ""
    except Exception:
        # names are not readable on older Windows 10 builds
        return ""


class PyvdaDesktopProvider(DesktopProvider):
    def list_desktops(self) -> List[LiveDesktop]:
        return [
            LiveDesktop(index=pos, name=_safe_name(d), id=str(d.id))
            for pos, d in enumerate(get_virtual_desktops())
        ]

    def create_desktop(self) -> None:
        VirtualDesktop.create()

    def switch_to(self, index: int) -> None:
        desks = get_virtual_desktops()
        if not 0 <= index < len(desks):
            raise IndexError(f"Desktop index {index} out of range (have {len(desks)})")
        desks[index].go()

    def current_index(self) -> int:
        current = VirtualDesktop.current()
        for pos, d in enumerate(get_virtual_desktops()):
            if d.id == current.id:
                return pos
        return -1

    def rename(self, index: int, name: str) -> None:
        get_virtual_desktops()[index].rename(name)
