#===============================================================================
#  BootWorkspace | tests/conftest.py
#===============================================================================
#  In-memory desktop provider and process spawner, plus config helpers.
#===============================================================================

from __future__ import annotations

from typing import List, Optional

import pytest

from bootworkspace.errors import WindowQueryUnavailable
from bootworkspace.interfaces import DesktopProvider, ProcessSpawner
from bootworkspace.models import AppSpec, DesktopSpec, LiveDesktop, WorkspaceConfig
from bootworkspace.run_log import RunLog


class FakeDesktopProvider(DesktopProvider):
    def __init__(self, count: int = 1, names: Optional[List[str]] = None, current: int = 0, can_rename: bool = True):
        self.names = list(names) if names is not None else [""] * count
        self.current = current
        self.can_rename = can_rename
        self.created = 0
        self.switches: List[int] = []
        self.renames: List[tuple] = []

    def list_desktops(self) -> List[LiveDesktop]:
        return [LiveDesktop(index=i, name=n, id=f"id-{i}") for i, n in enumerate(self.names)]

    def create_desktop(self) -> None:
        self.names.append("")
        self.created += 1

    def switch_to(self, index: int) -> None:
        if not 0 <= index < len(self.names):
            raise IndexError(index)
        self.switches.append(index)
        self.current = index

    def current_index(self) -> int:
        return self.current

    def rename(self, index: int, name: str) -> None:
        if not self.can_rename:
            raise NotImplementedError("naming not supported")
        self.renames.append((index, name))
        self.names[index] = name


class FakeProcess:
    _next_pid = 4000

    def __init__(self):
        FakeProcess._next_pid += 1
        self.pid = FakeProcess._next_pid
        self.stdout = None
        self.stderr = None
        self.running = True
        self.window_polls = 0

    def poll(self):
        return None if self.running else 0


class FakeSpawner(ProcessSpawner):
    """idle: None -> input-idle unavailable, else the value wait_input_idle returns.
    window_after: number of polls before a main window shows up (None = never).
    """

    def __init__(self, idle: Optional[bool] = None, window_after: Optional[int] = None, spawn_error: Optional[Exception] = None):
        self.idle = idle
        self.window_after = window_after
        self.spawn_error = spawn_error
        self.spawned: List[tuple] = []
        self.opened: List[str] = []
        self.idle_calls: List[int] = []
        self.processes: List[FakeProcess] = []

    def spawn(self, executable, args, cwd):
        if self.spawn_error is not None:
            raise self.spawn_error
        self.spawned.append((executable, args, cwd))
        p = FakeProcess()
        self.processes.append(p)
        return p

    def shell_open(self, target):
        self.opened.append(target)
        return None

    def wait_input_idle(self, process, timeout_ms):
        self.idle_calls.append(timeout_ms)
        if self.idle is None:
            raise WindowQueryUnavailable("not here")
        return self.idle

    def main_window_handle(self, process):
        process.window_polls += 1
        if self.window_after is not None and process.window_polls > self.window_after:
            return 0x1234
        return 0

    def is_running(self, process):
        return process.running


def make_config(apps, desktops=(), launch_delay_ms: int = 0) -> WorkspaceConfig:
    return WorkspaceConfig(
        desktops=tuple(DesktopSpec(i, n) for i, n in desktops),
        apps=tuple(apps),
        launch_delay_ms=launch_delay_ms,
    )


@pytest.fixture
def run_log(tmp_path) -> RunLog:
    return RunLog(tmp_path / "logs" / "bootworkspace.log")


@pytest.fixture
def exe_file(tmp_path):
    p = tmp_path / "bin" / "tool.exe"
    p.parent.mkdir(parents=True)
    p.write_bytes(b"MZ")
    return p


@pytest.fixture
def app_factory(exe_file):
    def _make(name="App", desktop="0", path=None, **kw):
        return AppSpec(name=name, path=str(exe_file) if path is None else path, desktop=desktop, **kw)
    return _make
