"""
Unified command orchestrator for dedupe.
This is the SINGLE source of truth for the pipeline — the CLI only builds
params and renders the returned report.
"""
import time
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Callable, Tuple, Iterator

from dedupkit.core.models import DedupeParams, DedupeReport, FileCandidate, KeyStrategy
from dedupkit.core.walker import TreeWalkerImpl
from dedupkit.core.extractor import get_key_extractor
from dedupkit.core.grouper import DuplicateGrouper
from dedupkit.core.stages import SizeStage, FrontHashStage
from dedupkit.core.planner import DispositionPlanner
from dedupkit.core.engine import ExecutionEngine
from dedupkit.core.errors import SkippedEntryError
from dedupkit.core.interfaces import KeyExtractor

logger = logging.getLogger(__name__)


class DedupeCommand:
    """
    Orchestrates the entire dedupe workflow:
    1. Walk the root directory
    2. Pre-screen by size and front chunk (hash strategy only)
    3. Compute identity keys, optionally on a worker pool
    4. Group, plan (retain-first) and execute

    Usage:
        params = DedupeParams(root_path="~/Downloads", action=Action.DELETE, dry_run=True)
        report = DedupeCommand().execute(
            params,
            progress_callback=cli_progress_printer,
            stopped_flag=signal_handler_check
        )
    """

    def __init__(self, walker: TreeWalkerImpl = None, engine: ExecutionEngine = None):
        self._walker = walker or TreeWalkerImpl()
        self._engine = engine or ExecutionEngine()

    def execute(
            self,
            params: DedupeParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> DedupeReport:
        """
        Execute dedupe with given parameters.

        Args:
            params: Validated dedupe parameters
            progress_callback: (stage: str, current: int, total: Optional[int]) -> None
            stopped_flag: () -> bool (returns True if operation should stop)

        Returns:
            DedupeReport for the reporter

        Raises:
            TraversalError: If the root path cannot be walked
        """
        start_time = time.time()

        # Step 1: Walk (TraversalError propagates from here, before any grouping)
        candidates = list(self._walker.walk(params.root_path, params.recursive, stopped_flag=stopped_flag))
        skipped = list(self._walker.skipped)
        if progress_callback:
            progress_callback("Walking", len(candidates), None)
        logger.debug(f"Walk found {len(candidates)} file(s), skipped {len(skipped)}")

        # Step 2: Pre-screen
        grouper = DuplicateGrouper()
        if params.key_strategy == KeyStrategy.HASH and params.prescreen:
            candidates = SizeStage(grouper).process(candidates, progress_callback)
            candidates = FrontHashStage(grouper).process(candidates, progress_callback)
            skipped.extend(grouper.skipped)
            logger.debug(f"{len(candidates)} file(s) left after pre-screen")

        # Step 3: Keys, in walk order
        extractor = get_key_extractor(params.key_strategy)
        pairs = []
        for i, (candidate, key) in enumerate(self._compute_keys(extractor, candidates, params.workers), 1):
            if key is None:
                skipped.append(candidate.path)
            else:
                pairs.append((key, candidate.path))
            if progress_callback:
                progress_callback("Computing keys", i, len(candidates))

        # Step 4: Group, plan, execute
        groups = DispositionPlanner.plan(grouper.group(pairs))
        logger.debug(f"Found {len(groups)} duplicate group(s) in {time.time() - start_time:.3f}s")

        return self._engine.execute(
            groups,
            params,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback,
            skipped=skipped,
        )

    def apply(
            self,
            preview: DedupeReport,
            params: DedupeParams,
            progress_callback: Optional[Callable[[str, int, Optional[int]], None]] = None,
            stopped_flag: Optional[Callable[[], bool]] = None
    ) -> DedupeReport:
        """
        Executes an already computed plan with params (usually after the user
        confirmed the preview). Files are not walked or hashed again.
        """
        return self._engine.execute(
            preview.groups,
            params,
            stopped_flag=stopped_flag,
            progress_callback=progress_callback,
            skipped=preview.skipped,
        )

    @staticmethod
    def _compute_keys(
            extractor: KeyExtractor,
            candidates: List[FileCandidate],
            workers: int
    ) -> Iterator[Tuple[FileCandidate, Optional[str]]]:
        """
        Yields (candidate, key) in walk order; key is None for unreadable files.
        With workers > 1 keys are computed concurrently, but executor.map hands
        results back in submission order, so walk order is kept.
        """
        def safe_key(candidate: FileCandidate) -> Optional[str]:
            try:
                return extractor.compute_key(candidate)
            except SkippedEntryError as e:
                logger.debug(f"Skipping {candidate.path}: {e}")
                return None

        if workers <= 1 or len(candidates) < 2:
            for candidate in candidates:
                yield candidate, safe_key(candidate)
            return

        executor = ThreadPoolExecutor(max_workers=workers)
        try:
            yield from zip(candidates, executor.map(safe_key, candidates))
        except BaseException:
            # Ctrl+C or an abandoned generator: drop queued files, only running reads finish
            executor.shutdown(wait=False, cancel_futures=True)
            raise
        executor.shutdown()
