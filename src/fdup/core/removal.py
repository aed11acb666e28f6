"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/removal.py
Removal policy applied to duplicates as soon as they are discovered.
"""

import logging
import threading
from typing import List, Optional

from fdup.core.interfaces import Remover
from fdup.core.models import RemovalOutcome
from fdup.core.roots import is_within
from fdup.services.file_service import FileService
from fdup.utils.convert_utils import ConvertUtils

logger = logging.getLogger(__name__)


class RemovalPolicy:
    """
    Deletes duplicates and records the outcome of every attempt.

    Only paths the index has already classified as duplicates are handed here, so the
    first-seen copy of any content is never a candidate. With `last_root` set, files
    outside that root are left untouched and recorded nowhere.
    The delete itself runs outside any lock; only the outcome is recorded under one.
    """

    def __init__(self, remover: Optional[Remover] = None, last_root: Optional[str] = None):
        self.remover = remover or FileService.remove_file
        self.last_root = last_root
        self._removed: List[str] = []
        self._unable_to_remove: List[str] = []
        self._lock = threading.Lock()

    def is_candidate(self, path: str) -> bool:
        if self.last_root is None:
            return True
        return is_within(path, self.last_root)

    def handle(self, path: str) -> Optional[RemovalOutcome]:
        if not self.is_candidate(path):
            logger.debug(f"Keeping {path}: outside {self.last_root}")
            return None

        try:
            self.remover(path)
        except (OSError, RuntimeError) as e:
            logger.warning(f"Unable to remove {path}: {e}")
            with self._lock:
                self._unable_to_remove.append(path)
            return RemovalOutcome.UNABLE_TO_REMOVE

        logger.debug(f"Removed duplicate: {path}")
        with self._lock:
            self._removed.append(path)
        return RemovalOutcome.REMOVED

    @property
    def removed(self) -> List[str]:
        with self._lock:
            return ConvertUtils.natural_sorted(self._removed)

    @property
    def unable_to_remove(self) -> List[str]:
        with self._lock:
            return ConvertUtils.natural_sorted(self._unable_to_remove)
