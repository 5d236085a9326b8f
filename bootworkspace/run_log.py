#===============================================================================
#  BootWorkspace | run_log.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Append-only run log (bootworkspace.log). The orchestrator and the child
#  output readers write to the same file, so every line goes through one lock.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import threading
from datetime import datetime
from pathlib import Path


def timestamp() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


class RunLog:
    def __init__(self, log_file: Path):
        self.log_file = Path(log_file)
        self._lock = threading.Lock()

    def write(self, line: str) -> None:
        """Append one line. Embedded newlines are kept inside the same write."""
        text = line.rstrip("\r\n") + "\n"
        with self._lock:
            self.log_file.parent.mkdir(parents=True, exist_ok=True)
            with open(self.log_file, "a", encoding="utf-8", errors="ignore") as f:
                f.write(text)
                f.flush()

    def write_quiet(self, line: str) -> None:
        """Same as write(), for background readers that must never die on I/O."""
        try:
            self.write(line)
        except OSError:
            pass

    def stamp(self, message: str) -> None:
        self.write(f"[{timestamp()}] {message}")

    def header(self) -> None:
        self.write(f"---- BootWorkspace run at {datetime.now():%Y-%m-%d %H:%M:%S} ----")

    def read_text(self) -> str:
        with self._lock:
            if not self.log_file.exists():
                return ""
            return self.log_file.read_text(encoding="utf-8", errors="ignore")
