"""Module: paths.py.

Author: Michael Economou
Date: 2026-03-02

Centralized path management for solutionlib.

Platform-specific user data directory:
- Windows: %LOCALAPPDATA%/solutionlib/
- Linux: $XDG_DATA_HOME/solutionlib/ or ~/.local/share/solutionlib/
- macOS: ~/Library/Application Support/solutionlib/

Usage:
    from solutionlib.utils.paths import AppPaths

    logs_dir = AppPaths.get_logs_dir()
    solutions_dir = AppPaths.get_default_solution_dir()
"""

import os
import platform
from pathlib import Path

from solutionlib.config import APP_NAME
from solutionlib.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)


class AppPaths:
    """Centralized path management for the application.

    Directory Structure:
        <user_data_dir>/
        └── logs/                # Log files
    """

    _user_data_dir: Path | None = None
    _initialized: bool = False

    @classmethod
    def _get_platform_data_dir(cls) -> Path:
        """Get platform-specific user data directory."""
        system = platform.system()

        if system == "Windows":
            base = os.environ.get("LOCALAPPDATA")
            if not base:
                return Path(os.environ.get("USERPROFILE", "")) / "AppData" / "Local" / APP_NAME
            return Path(base) / APP_NAME

        if system == "Darwin":
            return Path.home() / "Library" / "Application Support" / APP_NAME

        xdg_data = os.environ.get("XDG_DATA_HOME")
        if xdg_data:
            return Path(xdg_data) / APP_NAME
        return Path.home() / ".local" / "share" / APP_NAME

    @classmethod
    def get_user_data_dir(cls) -> Path:
        """Get the user data directory, creating it if necessary."""
        if cls._user_data_dir is None:
            cls._user_data_dir = cls._get_platform_data_dir()

        cls._user_data_dir.mkdir(parents=True, exist_ok=True)

        if not cls._initialized:
            logger.info("[AppPaths] User data directory: %s", cls._user_data_dir)
            cls._initialized = True

        return cls._user_data_dir

    @classmethod
    def set_user_data_dir(cls, path: str | os.PathLike[str] | None) -> None:
        """Override the user data directory (None restores the platform default)."""
        cls._user_data_dir = Path(path) if path is not None else None
        cls._initialized = False

    @classmethod
    def get_logs_dir(cls) -> Path:
        """Get path to logs directory."""
        logs_dir = cls.get_user_data_dir() / "logs"
        logs_dir.mkdir(parents=True, exist_ok=True)
        return logs_dir

    @staticmethod
    def get_default_solution_dir() -> Path:
        """Directory offered first by the save/open dialogs.

        The user's desktop when it exists, otherwise the home directory.
        """
        desktop = Path.home() / "Desktop"
        return desktop if desktop.is_dir() else Path.home()
