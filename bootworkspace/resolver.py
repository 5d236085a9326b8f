#===============================================================================
#  BootWorkspace | resolver.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Turns the free-form "desktop" value of an app entry into a zero-based
#  desktop index. Never fails; anything unrecognised lands on desktop 0.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import re
from typing import Optional, Sequence

from .models import LiveDesktop, WorkspaceConfig

INT_RE = re.compile(r"[+-]?[0-9]+")
INT32_MIN, INT32_MAX = -(2 ** 31), 2 ** 31 - 1
DESKTOP_PREFIX = "desktop "


def parse_int(value: Optional[str]) -> Optional[int]:
    """Plain integer parse ("2", " -1 ", "+3"). No underscores, no unicode digits.

    Values outside the 32-bit signed range are not integers.
    """
    if value is None:
        return None
    v = value.strip()
    if not INT_RE.fullmatch(v):
        return None
    n = int(v)
    if not INT32_MIN <= n <= INT32_MAX:
        return None
    return n


def resolve_desktop(
    identifier: Optional[str],
    config: WorkspaceConfig,
    live_desktops: Sequence[LiveDesktop] = (),
) -> int:
    """Resolve an app's desktop identifier to a desktop index.

    Resolution order (first match wins):
      1) empty                       -> 0
      2) integer                     -> that integer, verbatim
      3) "desktop N" (N >= 1)        -> N - 1
      4) configured desktop name     -> its configured index
      5) live desktop name           -> its live position
      6) contains "thing 1"/"thing 2"-> 0 / 1
      7) anything else               -> 0

    Changing this order changes where existing configs put their apps.
    """
    if not identifier:
        return 0
    v = identifier.strip()

    n = parse_int(v)
    if n is not None:
        return n

    if v.lower().startswith(DESKTOP_PREFIX):
        one_based = parse_int(v[len(DESKTOP_PREFIX):])
        if one_based is not None and one_based > 0:
            return one_based - 1

    wanted = v.casefold()
    for d in config.desktops:
        if d.name.casefold() == wanted:
            return d.index

    for live in live_desktops:
        if (live.name or "").casefold() == wanted:
            return live.index

    low = v.lower()
    if "thing 1" in low:
        return 0
    if "thing 2" in low:
        return 1

    return 0


def desktop_label(index: int, config: WorkspaceConfig) -> str:
    """Name shown in the report: the configured name, else "Desktop <index>"."""
    for d in config.desktops:
        if d.index == index and d.name:
            return d.name
    return f"Desktop {index}"
