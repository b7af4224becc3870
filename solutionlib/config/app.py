"""Module: solutionlib.config.app

Author: Michael Economou
Date: 2026-03-02

Application-level configuration: app info and logging settings.
"""

# =====================================
# APPLICATION INFORMATION
# =====================================

APP_NAME = "solutionlib"
APP_VERSION = "1.0"
APP_AUTHOR = "Michael Economou"

# =====================================
# LOGGING CONFIGURATION
# =====================================

# Console logging
LOG_TO_CONSOLE = True
LOG_CONSOLE_LEVEL = "INFO"

# File logging
LOG_TO_FILE = True
LOG_FILE_LEVEL = "ERROR"
LOG_FILE_MAX_BYTES = 10_000_000  # 10MB per file
LOG_FILE_BACKUP_COUNT = 5

# Debug file logging
LOG_DEBUG_FILE_ENABLED = False
LOG_DEBUG_FILE_MAX_BYTES = 20_000_000  # 20MB per debug file
LOG_DEBUG_FILE_BACKUP_COUNT = 3

# Development logging settings
SHOW_DEV_ONLY_IN_CONSOLE = False

__all__ = [
    "APP_AUTHOR",
    "APP_NAME",
    "APP_VERSION",
    "LOG_CONSOLE_LEVEL",
    "LOG_DEBUG_FILE_BACKUP_COUNT",
    "LOG_DEBUG_FILE_ENABLED",
    "LOG_DEBUG_FILE_MAX_BYTES",
    "LOG_FILE_BACKUP_COUNT",
    "LOG_FILE_LEVEL",
    "LOG_FILE_MAX_BYTES",
    "LOG_TO_CONSOLE",
    "LOG_TO_FILE",
    "SHOW_DEV_ONLY_IN_CONSOLE",
]
