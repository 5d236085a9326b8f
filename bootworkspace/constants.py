#===============================================================================
#  BootWorkspace | constants.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Central place for default timings, file/folder naming conventions and the
#  report window theme.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

APP_TITLE = "Boot Workspace"
INSTALL_FOLDER_NAME = "BootWorkspace"
CONFIG_FILE_NAME = "workspace.json"
LOG_FILE_NAME = "bootworkspace.log"
LAST_RUN_FILE_NAME = "last_run.txt"
LOCK_FILE_NAME = "bootworkspace.lock"
STARTUP_SHORTCUT_NAME = "Boot Workspace.lnk"
SINGLE_INSTANCE_MUTEX = "Local\\BootWorkspace_SingleInstance"

# --- Timings (milliseconds unless noted) ---
DEFAULT_LAUNCH_DELAY_MS = 800
DEFAULT_LAUNCH_TIMEOUT_MS = 45_000
DEFAULT_SETTLE_DELAY_MS = 500
INPUT_IDLE_CAP_MS = 8_000
WINDOW_POLL_MS = 150
STARTUP_CUSHION_S = 5.0
RECENT_RUN_WINDOW_S = 3
SHELL_READY_TIMEOUT_S = 30.0
SHELL_READY_POLL_S = 0.5
READER_JOIN_TIMEOUT_S = 2.0

# --- Report window theme (Metro, same palette as the tiles) ---
METRO_BG = "#101010"
STATUS_COLORS = {
    "Done": "#107C10",     # green
    "Skipped": "#FFB900",  # yellow
    "Error": "#E81123",    # red
    "Pending": "#7A7A7A",  # grey
}

DEFAULT_CONFIG_JSON = """{
  "desktops": [
    { "index": 0, "name": "Thing 1" },
    { "index": 1, "name": "Thing 2" }
  ],
  "apps": [
    { "name": "Outlook", "path": "C:\\\\Program Files\\\\Microsoft Office\\\\root\\\\Office16\\\\OUTLOOK.EXE", "desktop": "Thing 1" }
  ],
  "launchDelayMs": 1500
}
"""
