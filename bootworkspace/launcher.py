#===============================================================================
#  BootWorkspace | launcher.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Starts one app entry. EXEs run directly with stdout/stderr captured into
#  the run log; URIs and shell: references are handed to the OS. Missing
#  paths and missing files are skips, spawn failures are errors.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import os
import re
import threading
import time
import traceback
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional

from .constants import READER_JOIN_TIMEOUT_S
from .interfaces import ProcessSpawner
from .models import AppSpec, LaunchStatus
from .run_log import RunLog

ENV_VAR_RE = re.compile(r"%([^%]+)%")


def expand_env(value: str) -> str:
    """Expand %VAR% references; unknown variables are left as written."""
    def _sub(m: re.Match) -> str:
        return os.environ.get(m.group(1), m.group(0))
    return ENV_VAR_RE.sub(_sub, value)


def resolve_target(raw_path: Optional[str]) -> str:
    if not raw_path or not raw_path.strip():
        return ""
    return expand_env(raw_path.strip().strip('"'))


def looks_like_uri(target: str) -> bool:
    return "://" in target or target.lower().startswith("shell:")


@dataclass
class LaunchAttempt:
    status: LaunchStatus
    target: str = ""
    detail: str = ""
    process: Optional[Any] = None
    via_shell: bool = False


@dataclass
class _Watched:
    name: str
    process: Any
    threads: List[threading.Thread] = field(default_factory=list)


class ProcessSupervisor:
    """Owns the output readers of every directly spawned child.

    Each captured stream gets a daemon thread that copies lines into the run
    log. shutdown() joins them for a bounded time; readers still attached to
    long-lived children are detached and noted in the log.
    """

    def __init__(self, log: RunLog):
        self.log = log
        self._watched: List[_Watched] = []

    def attach(self, name: str, process: Any) -> None:
        watched = _Watched(name=name, process=process)
        for stream, tag in ((getattr(process, "stdout", None), "OUT"), (getattr(process, "stderr", None), "ERR")):
            if stream is None:
                continue
            t = threading.Thread(
                target=self._pump,
                args=(name, tag, stream),
                name=f"bootworkspace-{tag.lower()}-{getattr(process, 'pid', '?')}",
                daemon=True,
            )
            t.start()
            watched.threads.append(t)
        self._watched.append(watched)

    def _pump(self, name: str, tag: str, stream) -> None:
        try:
            for line in iter(stream.readline, ""):
                line = line.rstrip("\r\n")
                if line:
                    self.log.write_quiet(f"[{name}] {tag}: {line}")
        except (OSError, ValueError):
            # stream closed underneath us
            pass
        finally:
            try:
                stream.close()
            except OSError:
                pass

    def shutdown(self, timeout: float = READER_JOIN_TIMEOUT_S) -> int:
        """Join readers until the deadline. Returns how many children were detached."""
        deadline = time.monotonic() + max(0.0, timeout)
        detached = 0
        for w in self._watched:
            for t in w.threads:
                t.join(max(0.0, deadline - time.monotonic()))
            if any(t.is_alive() for t in w.threads):
                detached += 1
                self.log.write_quiet(f"[INFO] {w.name} still running; output capture detached")
        self._watched.clear()
        return detached


class ProcessLauncher:
    def __init__(self, spawner: ProcessSpawner, log: RunLog, supervisor: Optional[ProcessSupervisor] = None):
        self.spawner = spawner
        self.log = log
        self.supervisor = supervisor

    def launch(self, app: AppSpec, desktop_index: Optional[int] = None) -> LaunchAttempt:
        """Start `app`. Never raises for spawn problems; they come back as ERROR."""
        target = resolve_target(app.path)
        if not target.strip():
            return LaunchAttempt(LaunchStatus.SKIPPED_NO_PATH, detail="No path specified")

        where = f" on desktop index={desktop_index}" if desktop_index is not None else ""

        if looks_like_uri(target):
            self.log.write(f"Launching '{app.name}'{where}: {target}")
            try:
                handle = self.spawner.shell_open(target)
            except Exception as e:
                self._log_error(app, e)
                return LaunchAttempt(LaunchStatus.ERROR, target, detail=str(e))
            return LaunchAttempt(LaunchStatus.DONE, target, detail="Launched successfully", process=handle, via_shell=True)

        exe = Path(target)
        if not exe.is_file():
            self.log.write(f"[SKIP] Not found: {target}")
            return LaunchAttempt(LaunchStatus.SKIPPED_NOT_FOUND, target, detail="Executable not found")

        self.log.write(f"Launching '{app.name}'{where}: {target} {app.args or ''}".rstrip())
        try:
            process = self.spawner.spawn(target, app.args, str(exe.parent))
        except Exception as e:
            self._log_error(app, e)
            return LaunchAttempt(LaunchStatus.ERROR, target, detail=str(e))

        if self.supervisor is not None and process is not None:
            self.supervisor.attach(app.display_name, process)
        return LaunchAttempt(LaunchStatus.DONE, target, detail="Launched successfully", process=process)

    def _log_error(self, app: AppSpec, exc: BaseException) -> None:
        tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip()
        self.log.write(f"[ERROR] {app.name}: {tb}")
