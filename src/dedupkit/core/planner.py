"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/planner.py
Keep/drop decision for duplicate groups.

The policy is fixed: the first file discovered by the walk is kept, every
later file with the same key is removable. Modification time, size and path
depth are never looked at.
"""
from typing import List, Dict, Iterator

from dedupkit.core.models import DuplicateGroup


class DispositionPlanner:

    @staticmethod
    def plan(grouped: Dict[str, List[str]]) -> List[DuplicateGroup]:
        """Turns the grouper's mapping into DuplicateGroups (members[0] is kept)."""
        return [DuplicateGroup(key=key, members=list(paths)) for key, paths in grouped.items()]

    @staticmethod
    def removable(groups: List[DuplicateGroup]) -> Iterator[str]:
        """Removable paths in group order, then member order."""
        for group in groups:
            yield from group.duplicates
