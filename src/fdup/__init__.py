"""
fdup — find and optionally remove duplicate files by content digest.

Core features:
- Any number of directory trees; nested roots are folded into the broader one
- Parallel whole-file hashing (SHA-256 by default, xxHash optional)
- Optional deletion of duplicates, permanently or to the system trash (via send2trash)
- Deletion can be limited to the last directory tree given
- CLI interface for headless/server usage
"""
from importlib.metadata import version as _version, PackageNotFoundError

# Get version
try:
    __version__ = _version("fdup")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Public API — only what users should import directly
from fdup.commands import ScanCommand
from fdup.core import (
    ScanParams, ScanCounters, ScanProgress, ScanResult, DuplicateGroup,
    HashAlgorithmName, RootSet)
from fdup.utils.convert_utils import ConvertUtils
from fdup.services.file_service import FileService

__all__ = [
    "ScanCommand",
    "ScanParams",
    "ScanCounters",
    "ScanProgress",
    "ScanResult",
    "DuplicateGroup",
    "HashAlgorithmName",
    "RootSet",
    "ConvertUtils",
    "FileService",
    "__version__",
]
