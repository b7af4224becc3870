"""solutionlib - save and load hierarchical solution trees (SQLite and XML).

Author: Michael Economou
Date: 2026-03-02
"""

from solutionlib.config import APP_VERSION

__version__ = APP_VERSION
