#===============================================================================
#  BootWorkspace | app.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Command-line entry. Guards (single instance, recent run, shell ready),
#  --install / --uninstall, then load workspace.json and run the launch
#  sequence on the Windows bindings.
#
#  Exit codes: 0 run finished (per-app skips/errors included) or early exit
#  by a guard, 1 fatal error, 130 cancelled with Ctrl+C.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import argparse
import signal
import sys
import threading
import traceback
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .config import load_config
from .constants import CONFIG_FILE_NAME, DEFAULT_SETTLE_DELAY_MS, LOG_FILE_NAME, RECENT_RUN_WINDOW_S, STARTUP_CUSHION_S
from .errors import BootWorkspaceError
from .guards import SingleInstance, should_exit_due_to_recent_run, wait_for_shell_ready
from .installer import install_dir, install_self, program_dir, uninstall_self
from .interfaces import DesktopProvider, ProcessSpawner
from .orchestrator import RunSettings, RunSummary, run_workspace
from .report import format_progress, format_summary
from .run_log import RunLog, timestamp
from .waits import pause

EXIT_OK = 0
EXIT_FATAL = 1
EXIT_CANCELLED = 130


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bootworkspace",
        description="Restore a multi-desktop workspace: create/name virtual desktops and start apps on them.",
    )
    p.add_argument("--config", help=f"Path to {CONFIG_FILE_NAME} (default: next to the program)")
    p.add_argument("--install", nargs="?", const="", metavar="CONFIG",
                   help="Install into %%LOCALAPPDATA%%\\BootWorkspace and add a Startup shortcut")
    p.add_argument("--uninstall", action="store_true", help="Remove the Startup shortcut and install folder")
    p.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation on --uninstall")
    p.add_argument("--force", action="store_true", help="Run even if another run started a moment ago")
    p.add_argument("--startup-delay", type=float, default=STARTUP_CUSHION_S,
                   help="Seconds to wait before starting (logon cushion, default %(default)s)")
    p.add_argument("--settle-ms", type=int, default=DEFAULT_SETTLE_DELAY_MS,
                   help="Pause after each desktop switch in ms (default %(default)s)")
    p.add_argument("--show-report", action="store_true", help="Show the results in a window when done")
    p.add_argument("--quiet", "-q", action="store_true", help="No per-app progress lines")
    return p


def find_config(explicit: Optional[str]) -> Path:
    if explicit:
        return Path(explicit)
    for folder in (program_dir(), install_dir(), Path.cwd()):
        candidate = folder / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
    return program_dir() / CONFIG_FILE_NAME


def platform_bindings() -> Tuple[DesktopProvider, ProcessSpawner]:
    if not sys.platform.startswith("win"):
        raise BootWorkspaceError("Virtual desktops are only supported on Windows 10/11")
    from .win_desktops import PyvdaDesktopProvider
    from .win_process import Win32ProcessSpawner
    return PyvdaDesktopProvider(), Win32ProcessSpawner()


def install_cancel_handlers(cancel: threading.Event) -> None:
    def _handler(signum, frame):
        cancel.set()

    for name in ("SIGINT", "SIGTERM", "SIGBREAK"):
        sig = getattr(signal, name, None)
        if sig is not None:
            signal.signal(sig, _handler)


def _confirm_uninstall() -> bool:
    answer = input("Are you sure you want to uninstall? [y/N] ").strip().lower()
    return answer in ("y", "yes")


def _do_install(config_arg: str) -> int:
    res = install_self(config_arg or None)
    print(f"Installed to:      {res.install_dir}")
    print(f"Startup shortcut:  {res.shortcut_path}")
    print(f"Edit your workspace configuration here:\n  {res.config_path}")
    return EXIT_OK


def _do_uninstall(assume_yes: bool) -> int:
    if uninstall_self(confirm=(lambda: True) if assume_yes else _confirm_uninstall):
        print("Uninstallation complete.")
    else:
        print("Uninstall cancelled.")
    return EXIT_OK


def run(
    argv: Optional[Sequence[str]] = None,
    bindings: Optional[Tuple[DesktopProvider, ProcessSpawner]] = None,
    cancel: Optional[threading.Event] = None,
) -> int:
    args = build_parser().parse_args(argv)

    if args.install is not None:
        return _do_install(args.install)
    if args.uninstall:
        return _do_uninstall(args.yes)

    state_dir = install_dir()
    state_dir.mkdir(parents=True, exist_ok=True)
    log = RunLog(state_dir / LOG_FILE_NAME)
    cancel = cancel or threading.Event()

    guard = SingleInstance(state_dir)
    if not guard.acquire():
        log.stamp("Another instance is already running. Exiting.")
        return EXIT_OK

    try:
        if not args.force and should_exit_due_to_recent_run(state_dir, RECENT_RUN_WINDOW_S):
            log.stamp("Recent run detected. Exiting.")
            return EXIT_OK

        log.header()
        if pause(args.startup_delay, cancel):
            return EXIT_CANCELLED
        if not wait_for_shell_ready(cancel=cancel):
            log.stamp("[WARN] Shell did not report ready; continuing anyway.")

        desktops, spawner = bindings or platform_bindings()
        log.write(f"Explorer is running. Current desktop index: {desktops.current_index()}")

        config_file = find_config(args.config)
        log.write(f"BaseDir={program_dir()}")
        log.write(f"Config={config_file}")
        config = load_config(config_file)
        log.write(f"Apps={len(config.apps)}")

        progress = None if args.quiet else _print_progress
        summary = run_workspace(
            config,
            desktops,
            spawner,
            log,
            settings=RunSettings(settle_delay_ms=args.settle_ms),
            cancel=cancel,
            progress=progress,
        )
        _finish(summary, log, args.show_report)
        return EXIT_CANCELLED if summary.cancelled else EXIT_OK

    except Exception as e:
        log.write_quiet(f"[{timestamp()}] ERROR: {''.join(traceback.format_exception(type(e), e, e.__traceback__)).rstrip()}")
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_FATAL
    finally:
        guard.release()


def _print_progress(done: int, total: int, row) -> None:
    print(format_progress(done, total, row), flush=True)


def _finish(summary: RunSummary, log: RunLog, show_window: bool) -> None:
    text = format_summary(summary)
    print(text)
    for line in text.splitlines():
        log.write(line)
    if show_window:
        from .report_window import show_report_window
        show_report_window(summary, str(log.log_file))


def main(argv: Optional[List[str]] = None) -> int:
    cancel = threading.Event()
    install_cancel_handlers(cancel)
    return run(argv, cancel=cancel)
