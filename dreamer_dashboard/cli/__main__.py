# =============================================================================
# dreamer_dashboard/cli/__main__.py - Package Entry Point
# =============================================================================
#
# Lets the CLI package run as a module:
#     python -m dreamer_dashboard.cli status
#
# Python executes this file for `python -m dreamer_dashboard.cli`.  All
# argument parsing and subcommand dispatch lives in console.py; main()
# returns the process exit code (0 ok, 1 failure, 130 interrupted) and
# sys.exit hands it to the shell so scripts can branch on it.
#
# The installed `dreamer-dashboard` console script calls the same main().
# =============================================================================

"""Allow ``python -m dreamer_dashboard.cli`` execution."""

import sys

from dreamer_dashboard.cli.console import main

# Exit with main()'s return code rather than always 0.
sys.exit(main())
