"""File removal services."""

from .file_service import FileService

__all__ = ["FileService"]
