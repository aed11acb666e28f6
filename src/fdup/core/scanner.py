"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Implements tree traversal for one root.
Features:
- Uses os.walk with in-place pruning of subdirectories
- Stable pre-order: directory and file names are visited sorted
- Skips hidden entries (leading dot), a hidden root included, unless asked not to
- Never yields symbolic links or non-regular files
- Applies the extension filter before anything is queued for hashing
"""

import os
import stat
import logging
from typing import Iterator, Optional, Callable

logger = logging.getLogger(__name__)

# Local imports
from fdup.core.filters import ExtensionFilter
from fdup.core.interfaces import TreeWalker


class TreeWalkerImpl(TreeWalker):
    """
    Walks a root directory and yields the paths of files eligible for hashing.

    Attributes:
        extension_filter: Filename allow-list
        include_hidden: Process files and directories whose name starts with a period
    """

    def __init__(self, extension_filter: Optional[ExtensionFilter] = None, include_hidden: bool = False):
        self.extension_filter = extension_filter or ExtensionFilter()
        self.include_hidden = include_hidden

    def walk(self,
             root: str,
             stopped_flag: Optional[Callable[[], bool]] = None) -> Iterator[str]:
        logger.debug(f"Walking root: {root}")

        if not os.path.isdir(root):
            error_msg = f"Not a directory: {root}"
            logger.error(error_msg)
            raise RuntimeError(error_msg)

        if not self._is_visible(os.path.basename(os.path.normpath(root))):
            logger.debug(f"Skipping hidden root: {root}")
            return

        def on_error(error: OSError) -> None:
            if error.filename is not None and os.path.normpath(error.filename) == os.path.normpath(root):
                logger.error(f"Unable to traverse root {root}: {error}")
                raise RuntimeError(f"Unable to traverse '{root}': {error.strerror or error}") from error
            logger.warning(f"Skipping unreadable directory {error.filename}: {error.strerror or error}")

        for dirpath, dirs, files in os.walk(root, onerror=on_error, followlinks=False):
            if stopped_flag and stopped_flag():
                logger.debug("Walk interrupted")
                return

            # Prune subdirectories BEFORE os.walk enters them
            dirs[:] = sorted(d for d in dirs if self._is_visible(d))

            for filename in sorted(files):
                if not self._is_visible(filename):
                    continue
                if not self.extension_filter.accept(filename):
                    continue
                path = os.path.join(dirpath, filename)
                if self._is_regular_file(path):
                    yield path

    def _is_visible(self, name: str) -> bool:
        return self.include_hidden or not name.startswith(".")

    @staticmethod
    def _is_regular_file(path: str) -> bool:
        """Regular files only: symlinks, FIFOs, sockets and devices are skipped."""
        try:
            mode = os.lstat(path).st_mode
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return False
        if stat.S_ISLNK(mode):
            logger.debug(f"Skipping symbolic link: {path}")
            return False
        if not stat.S_ISREG(mode):
            logger.debug(f"Skipping special file: {path}")
            return False
        return True
