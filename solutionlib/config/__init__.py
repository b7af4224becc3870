"""Module: solutionlib.config

Author: Michael Economou
Date: 2026-03-02

Configuration package for solutionlib.

This package organizes configuration into logical modules:
- app: Application info, logging
- storage: Solution file extensions, dialog filter, store settings

All settings are re-exported from this module:
    from solutionlib.config import APP_NAME, SOLUTION_XML_EXTENSION
"""

from solutionlib.config.app import *  # noqa: F401, F403
from solutionlib.config.storage import *  # noqa: F401, F403
