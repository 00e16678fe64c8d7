"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
File removal for the execution engine: permanent unlink or system trash.
"""
import os
from pathlib import Path
from send2trash import send2trash

from dedupkit.core.models import RemovalMethod
from dedupkit.core.errors import RemovalError


class FileService:
    """
    Cross-platform file removal.
    Every failure is raised as RemovalError with the original error chained.
    """

    @staticmethod
    def delete_file(file_path: str):
        """Removes a file permanently."""
        try:
            os.remove(file_path)
        except OSError as e:
            raise RemovalError(f"Failed to delete {file_path}: {e}") from e

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise RemovalError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise RemovalError(f"Failed to move to trash: {e}") from e

    @classmethod
    def remove(cls, file_path: str, method: RemovalMethod = RemovalMethod.UNLINK):
        """Removes a file with the given method."""
        if method == RemovalMethod.TRASH:
            cls.move_to_trash(file_path)
        else:
            cls.delete_file(file_path)
