#===============================================================================
#  BootWorkspace  |  Restore Virtual Desktop Workspaces
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Runs at logon (Startup-folder shortcut created by --install). Reads
#  workspace.json, makes sure the configured virtual desktops exist and are
#  named, then starts each app on its desktop, optionally waiting for its
#  window before moving on. Everything is written to bootworkspace.log.
#
#  workspace.json
#  --------------
#    {
#      "desktops": [ { "index": 0, "name": "Thing 1" }, { "index": 1, "name": "Thing 2" } ],
#      "apps": [
#        { "name": "Outlook", "path": "%ProgramFiles%\\...\\OUTLOOK.EXE",
#          "desktop": "Thing 1", "waitForWindow": true, "launchTimeoutMs": 20000 },
#        { "name": "Teams", "path": "ms-teams://", "desktop": "desktop 2" }
#      ],
#      "launchDelayMs": 800
#    }
#
#  "desktop" accepts an index ("1"), "desktop N" (1-based), a configured or
#  live desktop name.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from bootworkspace.app import main


if __name__ == "__main__":
    raise SystemExit(main())
