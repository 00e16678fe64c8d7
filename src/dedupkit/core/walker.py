"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/walker.py
Implements directory traversal for the dedupe pipeline.
Features:
- Lazy generator, depth-first, entries sorted by name in every directory
- Recursive or single-level walk
- Yields regular files only (directories, symlinks, fifos are never candidates)
- Unreadable entries are skipped and remembered, never fatal
"""

import os
import stat
import logging
from typing import Iterator, List, Optional, Callable

# Local imports
from dedupkit.core.models import FileCandidate
from dedupkit.core.errors import TraversalError
from dedupkit.core.interfaces import TreeWalker

logger = logging.getLogger(__name__)


class TreeWalkerImpl(TreeWalker):
    """
    Walks a directory tree and yields FileCandidate objects in walk order.

    The order matches a lexical depth-first walk: a subdirectory's contents are
    produced at the position of the subdirectory inside its parent listing.

    Attributes:
        skipped: paths that raised a stat/list error during the last walk
    """

    def __init__(self):
        self.skipped: List[str] = []

    def walk(
        self,
        root: str,
        recursive: bool,
        stopped_flag: Optional[Callable[[], bool]] = None
    ) -> Iterator[FileCandidate]:
        """
        Validates root eagerly, then returns a lazy iterator over its files.
        Raises TraversalError before anything is yielded if root is unusable.
        """
        self.skipped = []
        logger.debug(f"Starting walk: root={root}, recursive={recursive}")

        try:
            root_stat = os.stat(root)
        except FileNotFoundError as e:
            logger.error(f"Directory does not exist: {root}")
            raise TraversalError(f"Directory does not exist: {root}") from e
        except OSError as e:
            logger.error(f"Cannot access {root}: {e}")
            raise TraversalError(f"Cannot access {root}: {e}") from e

        if not stat.S_ISDIR(root_stat.st_mode):
            logger.error(f"Not a directory: {root}")
            raise TraversalError(f"Not a directory: {root}")

        try:
            entries = self._list_dir(root)
        except OSError as e:
            logger.error(f"Cannot read directory {root}: {e}")
            raise TraversalError(f"Cannot read directory {root}: {e}") from e

        return self._walk_entries(root, entries, recursive, stopped_flag)

    def _walk_entries(
        self,
        directory: str,
        entries: List[os.DirEntry],
        recursive: bool,
        stopped_flag: Optional[Callable[[], bool]]
    ) -> Iterator[FileCandidate]:
        for entry in entries:
            if stopped_flag and stopped_flag():
                logger.debug("Walk interrupted by caller")
                return

            try:
                st = entry.stat(follow_symlinks=False)
            except OSError as e:
                self._skip(entry.path, e)
                continue

            if stat.S_ISDIR(st.st_mode):
                if not recursive:
                    logger.debug(f"Not descending into {entry.path} (non-recursive walk)")
                    continue
                try:
                    children = self._list_dir(entry.path)
                except OSError as e:
                    self._skip(entry.path, e)
                    continue
                yield from self._walk_entries(entry.path, children, recursive, stopped_flag)
                continue

            if not stat.S_ISREG(st.st_mode):
                logger.debug(f"Skipping non-regular file: {entry.path}")
                continue

            yield FileCandidate(path=entry.path, size=st.st_size)

    @staticmethod
    def _list_dir(directory: str) -> List[os.DirEntry]:
        """Returns the directory entries sorted by name."""
        with os.scandir(directory) as it:
            return sorted(it, key=lambda e: e.name)

    def _skip(self, path: str, error: OSError) -> None:
        logger.debug(f"Skipping {path}: {error}")
        self.skipped.append(path)
