#===============================================================================
#  BootWorkspace | report.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Plain-text end-of-run summary (console and log).
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from typing import Dict, List

from .models import ReportRow
from .orchestrator import RunSummary

HEADERS = ("App", "Desktop", "Status", "Details")


def format_summary(summary: RunSummary) -> str:
    table: List[tuple] = [HEADERS] + [(r.app, r.desktop, r.status, r.detail) for r in summary.rows]
    widths = [max(len(str(line[i])) for line in table) for i in range(len(HEADERS))]

    def fmt(line) -> str:
        return " | ".join(str(v).ljust(w) for v, w in zip(line, widths)).rstrip()

    sep = "-+-".join("-" * w for w in widths)
    out = [fmt(HEADERS), sep] + [fmt(line) for line in table[1:]]
    out.append("")
    out.append(format_counts(summary.counts))
    out.append(completion_line(summary.cancelled))
    return "\n".join(out)


def completion_line(cancelled: bool) -> str:
    return "Launch sequence cancelled." if cancelled else "Launch sequence complete."


def format_counts(counts: Dict[str, int]) -> str:
    order = ["Done", "Skipped", "Error", "Pending"]
    parts = [f"{k}: {counts[k]}" for k in order if counts.get(k)]
    return ", ".join(parts) if parts else "No apps."


def format_progress(done: int, total: int, row: ReportRow) -> str:
    return f"[{done}/{total}] {row.status:<8} {row.app} | {row.desktop}"
