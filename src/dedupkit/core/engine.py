"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/engine.py
Executes a removal plan, or only describes it in preview mode.

There is no rollback. Every removal is its own filesystem operation, so a
failed file is recorded and the batch moves on to the next one.
"""

import logging
from typing import List, Optional, Callable, Iterable

from dedupkit.core.models import DuplicateGroup, DedupeParams, DedupeReport, RemovalOutcome
from dedupkit.core.planner import DispositionPlanner
from dedupkit.core.errors import RemovalError
from dedupkit.services.file_service import FileService

logger = logging.getLogger(__name__)


class ExecutionEngine:

    def __init__(self, file_service: FileService = None):
        self.file_service = file_service or FileService()

    def execute(
        self,
        groups: List[DuplicateGroup],
        params: DedupeParams,
        stopped_flag: Optional[Callable[[], bool]] = None,
        progress_callback: Optional[Callable[[str, int, object], None]] = None,
        skipped: Iterable[str] = ()
    ) -> DedupeReport:
        """
        Builds the report and, in apply mode, removes every removable member.

        Args:
            groups: planned duplicate groups (members[0] is kept)
            params: run configuration; params.apply_mode selects preview or apply
            stopped_flag: checked before each removal; True stops the batch
            progress_callback: (stage, current, total)
            skipped: paths left out earlier in the pass, copied into the report
        """
        report = DedupeReport(
            root_path=params.root_path,
            key_strategy=params.key_strategy,
            groups=groups,
            preview_mode=not params.apply_mode,
            action=params.action,
            dry_run=params.dry_run,
            skipped=list(skipped),
        )

        if not params.apply_mode:
            logger.debug(f"Preview mode: {report.to_delete} file(s) would be removed")
            return report

        to_remove = list(DispositionPlanner.removable(groups))
        total = len(to_remove)

        for i, path in enumerate(to_remove, 1):
            if stopped_flag and stopped_flag():
                logger.warning(f"Removal stopped by caller after {i - 1}/{total} file(s)")
                report.interrupted = True
                break

            try:
                self.file_service.remove(path, params.removal_method)
                report.removal_outcomes.append(RemovalOutcome(path=path, removed=True))
                logger.debug(f"Removed {path}")
            except RemovalError as e:
                logger.warning(f"Failed to remove {path}: {e}")
                report.removal_outcomes.append(RemovalOutcome(path=path, removed=False, error=str(e)))

            if progress_callback:
                progress_callback("Removing duplicates", i, total)

        return report
