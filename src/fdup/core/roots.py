"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/roots.py
Normalizes user-supplied directories into a set of non-overlapping canonical roots.

Rules:
- Every path is resolved to its canonical, absolute, symlink-free form
- A path equal to an accepted root is skipped (earliest occurrence keeps its order)
- When one root contains another, the broader (ancestor) root wins
- Unrelated roots are all kept, ordered by first occurrence
- The last resolved path is remembered as the "last root" for restricted removal
"""

import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from fdup.core.models import Root

logger = logging.getLogger(__name__)


def is_within(path: str, root: str) -> bool:
    """
    True if `path` is `root` itself or lies somewhere under it.
    Compares whole path components: "/a/bc" is not within "/a/b".
    """
    try:
        return os.path.commonpath([path, root]) == root
    except ValueError:
        # Mixed absolute/relative paths or different drives
        return False


class RootSet:
    """
    Ordered collection of canonical roots with nested entries pruned.

    Attributes:
        roots: Surviving roots ordered by their first occurrence
        last_root: Canonical form of the last path supplied, regardless of pruning
    """

    def __init__(self, paths: Optional[Sequence[str]] = None):
        paths = list(paths or [])
        if not paths:
            paths = [self._current_directory()]

        accepted: Dict[str, int] = {}
        last_root = None
        for order, path in enumerate(paths):
            actual = self.resolve(path)
            last_root = actual
            if actual in accepted:
                continue

            add = True
            for existing in list(accepted):
                if is_within(actual, existing):
                    logger.debug(f"Skipping {actual}: already covered by {existing}")
                    add = False
                    break
                if is_within(existing, actual):
                    logger.debug(f"Replacing {existing} with broader root {actual}")
                    del accepted[existing]
            if add:
                accepted[actual] = order

        self.roots: List[Root] = sorted(
            (Root(path=path, order=order) for path, order in accepted.items()),
            key=lambda r: r.order
        )
        self.last_root: str = last_root

    @staticmethod
    def _current_directory() -> str:
        try:
            return os.getcwd()
        except OSError as e:
            raise RuntimeError("Unable to determine current working directory.") from e

    @staticmethod
    def resolve(path: str) -> str:
        """
        Resolve a user-supplied path to a canonical absolute directory.
        Raises RuntimeError if it does not exist or is not a directory.
        """
        try:
            resolved = Path(path).expanduser().resolve(strict=True)
        except (OSError, RuntimeError) as e:
            logger.error(f"Unable to resolve {path}: {e}")
            raise RuntimeError(f"Unable to determine real path for '{path}'.") from e

        if not resolved.is_dir():
            raise RuntimeError(f"Not a directory: {path}")
        return str(resolved)

    @property
    def paths(self) -> List[str]:
        return [root.path for root in self.roots]

    def __iter__(self):
        return iter(self.roots)

    def __len__(self):
        return len(self.roots)

    def __repr__(self):
        return f"<RootSet roots={self.paths}, last_root={self.last_root}>"
