"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
Groups files sharing a key and drops keys with a single file.
Used both for the final identity-key grouping and for the pre-screen stages.
"""

import logging
from typing import List, Dict, Tuple, Any, Callable, Iterable
from collections import defaultdict

from dedupkit.core.models import FileCandidate
from dedupkit.core.errors import SkippedEntryError
from dedupkit.core.interfaces import Hasher
from dedupkit.core.hasher import HasherImpl

logger = logging.getLogger(__name__)


class DuplicateGrouper:
    """
    Builds an ordered multi-map from key to paths.
    Key order is first-seen order; path order per key is input order.
    """

    def __init__(self, hasher: Hasher = None):
        self.hasher = hasher or HasherImpl()
        self.skipped: List[str] = []

    @staticmethod
    def group(pairs: Iterable[Tuple[str, str]]) -> Dict[str, List[str]]:
        """
        Groups (key, path) pairs.
        Returns:
            Dict[key, List[path]] holding only keys with 2+ paths
        """
        groups = defaultdict(list)
        for key, path in pairs:
            groups[key].append(path)

        # dicts keep insertion order, so the result follows first discovery
        return {key: paths for key, paths in groups.items() if len(paths) >= 2}

    def group_by_size(self, candidates: List[FileCandidate]) -> Dict[int, List[FileCandidate]]:
        """Groups candidates by their size."""
        return self._group_by(candidates, lambda c: c.size)

    def group_by_front_hash(self, candidates: List[FileCandidate]) -> Dict[bytes, List[FileCandidate]]:
        """Groups candidates by the xxHash64 of their leading chunk."""
        return self._group_by(candidates, self.hasher.compute_front_hash)

    def _group_by(
        self,
        candidates: List[FileCandidate],
        key_func: Callable[[FileCandidate], Any]
    ) -> Dict[Any, List[FileCandidate]]:
        """
        Helper method to group candidates by any computed key.
        Unreadable candidates are left out and recorded in self.skipped.
        """
        groups = defaultdict(list)
        for candidate in candidates:
            try:
                key = key_func(candidate)
            except SkippedEntryError as e:
                logger.debug(f"Skipping {candidate.path}: {e}")
                self.skipped.append(candidate.path)
                continue
            groups[key].append(candidate)

        return {key: group for key, group in groups.items() if len(group) >= 2}
