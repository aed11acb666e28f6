"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Filesystem side effects used by the removal policy: permanent delete or move to system trash.
"""
import os
from pathlib import Path
from typing import Callable

from send2trash import send2trash


class FileService:
    """
    Cross-platform file removal.
    Both methods raise on failure so the caller can record the outcome.
    """

    @staticmethod
    def remove_file(file_path: str):
        """Permanently deletes a file."""
        os.remove(file_path)

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e

    @classmethod
    def remover(cls, use_trash: bool = False) -> Callable[[str], None]:
        """Returns the removal function matching the requested deletion mode."""
        return cls.move_to_trash if use_trash else cls.remove_file
