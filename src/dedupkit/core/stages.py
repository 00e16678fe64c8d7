"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Pre-screen stages run before full-content hashing.

STAGE CONTRACTS
---------------
Each stage takes the surviving candidates (in walk order) and returns the
ones that can still have a duplicate, again in walk order.
  • SizeStage      : drops files whose size is unique
  • FrontHashStage : drops files whose (size, xxHash64 of first 64 KiB) is unique

A file removed here cannot share a SHA-256 with any other file, so the final
duplicate groups are the same with or without pre-screening. Only the number
of full-file reads changes.
"""

from typing import List, Optional, Callable

from dedupkit.core.models import FileCandidate
from dedupkit.core.grouper import DuplicateGrouper


def _in_walk_order(candidates: List[FileCandidate], survivors) -> List[FileCandidate]:
    kept = {id(c) for group in survivors for c in group}
    return [c for c in candidates if id(c) in kept]


class SizeStage:
    def __init__(self, grouper: DuplicateGrouper):
        self.grouper = grouper

    def get_stage_name(self) -> str:
        return "Size grouping"

    def process(
        self,
        candidates: List[FileCandidate],
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[FileCandidate]:
        size_groups = self.grouper.group_by_size(candidates)
        if progress_callback:
            progress_callback(self.get_stage_name(), len(candidates), len(candidates))
        return _in_walk_order(candidates, size_groups.values())


class FrontHashStage:
    def __init__(self, grouper: DuplicateGrouper):
        self.grouper = grouper

    def get_stage_name(self) -> str:
        return "Front-chunk Hash"

    def process(
        self,
        candidates: List[FileCandidate],
        progress_callback: Optional[Callable[[str, int, object], None]] = None
    ) -> List[FileCandidate]:
        total = len(candidates)
        processed = 0
        survivors = []

        for size_group in self.grouper.group_by_size(candidates).values():
            survivors.extend(self.grouper.group_by_front_hash(size_group).values())
            processed += len(size_group)
            if progress_callback:
                progress_callback(self.get_stage_name(), processed, total)

        return _in_walk_order(candidates, survivors)
