"""Module: solutionlib.config.storage

Author: Michael Economou
Date: 2026-03-02

Solution file formats and store settings.
"""

# =====================================
# SOLUTION FILE FORMATS
# =====================================

# Tree-native XML document; every other extension is a SQLite store
SOLUTION_XML_EXTENSION = ".solxml"
SOLUTION_DB_EXTENSION = ".solsqlt"

# Filter string handed to the file dialog collaborator
SOLUTION_FILE_FILTER = (
    f"Solution Files (*{SOLUTION_DB_EXTENSION});;"
    f"Solution XML Files (*{SOLUTION_XML_EXTENSION});;"
    "All Files (*.*)"
)

DEFAULT_SOLUTION_NAME = "New Solution"

# =====================================
# STORE SETTINGS
# =====================================

# Seconds sqlite3 waits on a locked database file
SQLITE_TIMEOUT = 30.0

# Saves go to "<target><STAGING_SUFFIX>" and replace the target on success
STAGING_SUFFIX = ".tmp"

XML_FORMAT_VERSION = 1

__all__ = [
    "DEFAULT_SOLUTION_NAME",
    "SOLUTION_DB_EXTENSION",
    "SOLUTION_FILE_FILTER",
    "SOLUTION_XML_EXTENSION",
    "SQLITE_TIMEOUT",
    "STAGING_SUFFIX",
    "XML_FORMAT_VERSION",
]
