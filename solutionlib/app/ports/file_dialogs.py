"""File dialog port for choosing solution files without Qt dependencies.

Author: Michael Economou
Date: 2026-03-08
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class FileDialogPort(Protocol):
    """Protocol for the save/open file pickers of the host UI."""

    def pick_save_destination(
        self,
        default_path: str,
        default_dir: str,
        overwrite_prompt: bool,
        file_filter: str,
    ) -> str | None:
        """Ask for a destination file.

        Args:
            default_path: Pre-filled file name
            default_dir: Directory the dialog opens in
            overwrite_prompt: Ask before replacing an existing file
            file_filter: Dialog filter string ("Label (*.ext);;Label (*.ext)")

        Returns:
            Chosen path, or None if the user cancelled

        """
        ...

    def pick_open_source(
        self,
        file_filter: str,
        default_path: str,
        default_dir: str,
    ) -> str | None:
        """Ask for an existing file to open; None if the user cancelled."""
        ...
