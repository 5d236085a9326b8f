#===============================================================================
#  BootWorkspace | errors.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-10-12
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Exceptions that abort a whole run. Per-app problems are never raised past
#  the orchestrator loop; they end up as Error/Skipped results instead.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations


class BootWorkspaceError(RuntimeError):
    pass


class ConfigError(BootWorkspaceError):
    """workspace.json is missing, unreadable, malformed or has no apps."""


class ProvisioningError(BootWorkspaceError):
    """Creating a virtual desktop did not add one."""


class WindowQueryUnavailable(BootWorkspaceError):
    """The platform cannot report input-idle / main window for a process."""
