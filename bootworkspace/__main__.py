#===============================================================================
#  BootWorkspace | __main__.py
#===============================================================================
#  `python -m bootworkspace`
#===============================================================================

from .app import main

raise SystemExit(main())
