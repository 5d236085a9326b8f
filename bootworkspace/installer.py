#===============================================================================
#  BootWorkspace | installer.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  --install / --uninstall: copy the program into %LOCALAPPDATA%\BootWorkspace,
#  put a workspace.json next to it and register a Startup-folder shortcut.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from .constants import CONFIG_FILE_NAME, DEFAULT_CONFIG_JSON, INSTALL_FOLDER_NAME, STARTUP_SHORTCUT_NAME


def install_dir() -> Path:
    local = os.environ.get("LOCALAPPDATA")
    if local:
        return Path(local) / INSTALL_FOLDER_NAME
    return Path.home() / f".{INSTALL_FOLDER_NAME.lower()}"


def startup_shortcut_path() -> Path:
    appdata = os.environ.get("APPDATA") or str(Path.home())
    return Path(appdata) / "Microsoft" / "Windows" / "Start Menu" / "Programs" / "Startup" / STARTUP_SHORTCUT_NAME


def program_dir() -> Path:
    """Folder holding the running program (the EXE when frozen, else the project root)."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parent.parent


def _ps_quote(s: str) -> str:
    return "'" + s.replace("'", "''") + "'"


def create_shortcut(link_path: Path, target: str, arguments: str, working_dir: str, description: str) -> None:
    """Create a .lnk through WScript.Shell (PowerShell)."""
    link_path.parent.mkdir(parents=True, exist_ok=True)
    ps = (
        "$WshShell = New-Object -ComObject WScript.Shell; "
        f"$Shortcut = $WshShell.CreateShortcut({_ps_quote(str(link_path))}); "
        f"$Shortcut.TargetPath = {_ps_quote(target)}; "
        f"$Shortcut.Arguments = {_ps_quote(arguments)}; "
        f"$Shortcut.WorkingDirectory = {_ps_quote(working_dir)}; "
        "$Shortcut.WindowStyle = 1; "
        f"$Shortcut.Description = {_ps_quote(description)}; "
        "$Shortcut.Save();"
    )
    subprocess.check_call(["powershell", "-NoProfile", "-ExecutionPolicy", "Bypass", "-Command", ps])


@dataclass
class InstallResult:
    install_dir: Path
    config_path: Path
    shortcut_path: Path
    config_source: str  # "argument" | "local" | "default"


def _ignore_junk(_dir, names):
    return [n for n in names if n in ("__pycache__", ".git", ".pytest_cache") or n.endswith(".log")]


def install_self(
    config_path: Optional[str] = None,
    source_dir: Optional[Path] = None,
    dest_dir: Optional[Path] = None,
    shortcut_path: Optional[Path] = None,
    make_shortcut: Callable[..., None] = create_shortcut,
) -> InstallResult:
    source_dir = Path(source_dir or program_dir())
    dest_dir = Path(dest_dir or install_dir())
    shortcut_path = Path(shortcut_path or startup_shortcut_path())
    dest_dir.mkdir(parents=True, exist_ok=True)

    if source_dir.resolve() != dest_dir.resolve():
        shutil.copytree(source_dir, dest_dir, dirs_exist_ok=True, ignore=_ignore_junk)

    dest_config = dest_dir / CONFIG_FILE_NAME
    local_config = source_dir / CONFIG_FILE_NAME
    if config_path and config_path.strip() and Path(config_path).is_file():
        shutil.copyfile(config_path, dest_config)
        source = "argument"
    elif local_config.is_file():
        if local_config.resolve() != dest_config.resolve():
            shutil.copyfile(local_config, dest_config)
        source = "local"
    else:
        dest_config.write_text(DEFAULT_CONFIG_JSON, encoding="utf-8")
        source = "default"

    if getattr(sys, "frozen", False):
        target, args = str(dest_dir / Path(sys.executable).name), ""
    else:
        target, args = sys.executable, f'"{dest_dir / "main.py"}"'
    make_shortcut(shortcut_path, target, args, str(dest_dir), "Boot Workspace")

    return InstallResult(dest_dir, dest_config, shortcut_path, source)


def uninstall_self(
    confirm: Callable[[], bool],
    dest_dir: Optional[Path] = None,
    shortcut_path: Optional[Path] = None,
) -> bool:
    """Remove shortcut and install folder. Best effort; returns False if the user declined."""
    if not confirm():
        return False
    dest_dir = Path(dest_dir or install_dir())
    shortcut_path = Path(shortcut_path or startup_shortcut_path())

    try:
        shortcut_path.unlink()
    except FileNotFoundError:
        pass
    shutil.rmtree(dest_dir, ignore_errors=True)
    return True
