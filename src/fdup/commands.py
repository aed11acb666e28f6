"""
Unified command orchestrator for a duplicate scan.
This is the SINGLE source of truth for business logic — used by the CLI and library callers.
"""
from typing import Optional, Callable
from fdup.core.models import ScanParams, ScanCounters, ScanResult
from fdup.core.roots import RootSet
from fdup.core.filters import ExtensionFilter
from fdup.core.scanner import TreeWalkerImpl
from fdup.core.hasher import HasherImpl, algorithm_for
from fdup.core.removal import RemovalPolicy
from fdup.core.engine import DuplicateFinderImpl
from fdup.services.file_service import FileService


class ScanCommand:
    """
    Orchestrates the whole workflow:
    1. Normalize the roots
    2. Build walker, hasher and (in deletion mode) removal policy from params
    3. Run the engine with cancellation support

    Usage:
        params = ScanParams(roots=["~/Photos", "~/Backup"], delete=True, last_only=True)
        counters = ScanCounters()          # poll counters.snapshot() from another thread
        result = ScanCommand().execute(params, counters=counters)
    """

    def __init__(self):
        self._root_set: Optional[RootSet] = None

    def execute(
            self,
            params: ScanParams,
            stopped_flag: Optional[Callable[[], bool]] = None,
            counters: Optional[ScanCounters] = None
    ) -> ScanResult:
        """
        Execute a scan with given parameters.

        Args:
            params: Validated scan parameters
            stopped_flag: () -> bool (returns True if operation should stop)
            counters: Counters to update during the run

        Returns:
            ScanResult with duplicate groups or removal lists

        Raises:
            RuntimeError: If a root cannot be resolved or traversed
        """
        # Step 1: Roots are finalized before any traversal starts
        self._root_set = RootSet(params.roots)

        # Step 2: Wire the engine
        walker = TreeWalkerImpl(
            extension_filter=ExtensionFilter(params.extensions, params.case_sensitive),
            include_hidden=params.include_hidden
        )
        removal_policy = None
        if params.delete:
            removal_policy = RemovalPolicy(
                remover=FileService.remover(params.use_trash),
                last_root=self._root_set.last_root if params.last_only else None
            )

        finder = DuplicateFinderImpl(
            walker=walker,
            hasher=HasherImpl(algorithm_for(params.algorithm)),
            removal_policy=removal_policy,
            counters=counters,
            workers=params.workers,
            queue_size=params.queue_size
        )

        # Step 3: Run
        return finder.find_duplicates(self._root_set.roots, stopped_flag=stopped_flag)

    @property
    def root_set(self) -> Optional[RootSet]:
        """Roots of the last execution."""
        return self._root_set
