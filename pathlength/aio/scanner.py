"""Async path length scanner.

PathLength walks a directory tree, records the length of every path that
passes the configured filter, and notifies subscribers as it goes.

Sibling entries are visited concurrently. A directory is only complete
once its whole subtree has been visited, and the final result list is
sorted by path, so the outcome does not depend on scheduling order.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from .adapter import AsyncPathAdapter, FileSystemAdapter
from .collector import ResultCollector
from .error_handling import ErrorHandlingAdapter, create_resilient_adapter
from .events import (
    EventDispatcher,
    EventHandler,
    EventType,
    CheckStartedEvent,
    PathCheckingEvent,
    PathFoundEvent,
    ScanEndedEvent,
)
from .node import PathNode
from ..config import DEFAULT_MAX_CONCURRENT, ScanOptions
from ..core import Result

logger = logging.getLogger(__name__)


class ScanState(Enum):
    """Lifecycle of a single scan."""
    IDLE = "idle"
    RESOLVING = "resolving"
    TRAVERSING = "traversing"
    FINALIZING = "finalizing"
    DONE = "done"
    FAILED = "failed"


@dataclass
class _Scan:
    """State owned by one invocation of PathLength.check()."""
    options: ScanOptions
    adapter: ErrorHandlingAdapter
    collector: ResultCollector
    root: str = ''
    state: ScanState = ScanState.IDLE
    nodes_checked: int = 0

    def transition(self, state: ScanState):
        logger.debug("Scan of %s: %s -> %s", self.options.cwd, self.state.value, state.value)
        self.state = state

    def summary(self) -> Dict[str, Any]:
        policy = self.adapter.get_policy()
        errors = policy.get_statistics()['total_errors'] if hasattr(policy, 'get_statistics') else 0
        return {
            'state': self.state,
            'root': self.root,
            'nodes_checked': self.nodes_checked,
            'results': len(self.collector),
            'errors_ignored': errors,
        }


class PathLength:
    """Checks the lengths of paths beneath a root directory.

    Each call to check() allocates its own result collection, so one
    instance can run several scans concurrently. Subscribers registered
    on the instance receive the events of every scan it runs.

    Example:
        >>> engine = PathLength()
        >>> engine.subscribe(EventType.PATH_FOUND, lambda e: print(e.path))
        >>> results = await engine.check(cwd='/tmp', filter='gte 40', recursive=True)
    """

    def __init__(
        self,
        adapter: Optional[AsyncPathAdapter] = None,
        max_concurrent: int = DEFAULT_MAX_CONCURRENT,
        verbose: bool = False
    ):
        """Initialize the engine.

        Args:
            adapter: Path adapter to scan through (a FileSystemAdapter is
                created per scan if omitted)
            max_concurrent: Maximum concurrent filesystem calls for the
                default adapter
            verbose: Log directories skipped in force mode as warnings
        """
        self._adapter = adapter
        self.max_concurrent = max_concurrent
        self.verbose = verbose
        self._dispatcher = EventDispatcher()
        self._last_stats: Dict[str, Any] = {}

        logger.debug("Initialized PathLength")

    def subscribe(self, event_type: EventType, handler: EventHandler) -> EventHandler:
        """Register handler to be called for every event of event_type."""
        return self._dispatcher.subscribe(event_type, handler)

    def unsubscribe(self, event_type: EventType, handler: EventHandler) -> bool:
        """Remove a handler registered with subscribe()."""
        return self._dispatcher.unsubscribe(event_type, handler)

    async def check(self, options: Any = None, **overrides: Any) -> List[Result]:
        """Check the lengths of paths beneath the configured root.

        Args:
            options: ScanOptions or a mapping of option values
            **overrides: Option values (cwd, filter, force, limit, recursive)

        Returns:
            Accepted results, sorted by path

        Raises:
            InvalidExpressionError: If the filter expression is invalid
            InvalidArgumentError: If another option is invalid
            PathResolutionError: If the root cannot be resolved
            OSError: If a path cannot be stat'ed, or a directory cannot be
                listed and force is disabled
        """
        try:
            options = ScanOptions.coerce(options, **overrides)
        except ValueError as e:
            logger.debug("Failed to build scan options: %s", e)
            raise

        logger.debug('Checking path lengths using filter "%s" with options: %s', options.filter, options)

        scan = _Scan(
            options=options,
            adapter=create_resilient_adapter(
                self._adapter if self._adapter is not None else FileSystemAdapter(self.max_concurrent),
                force=options.force,
                verbose=self.verbose,
            ),
            collector=ResultCollector(options.limit),
        )

        try:
            self._dispatcher.emit(EventType.CHECK_STARTED, CheckStartedEvent(options))

            scan.transition(ScanState.RESOLVING)
            scan.root = await scan.adapter.resolve_path(options.cwd)

            scan.transition(ScanState.TRAVERSING)
            await self._visit_node(scan.root, scan)

            scan.transition(ScanState.FINALIZING)
            results = scan.collector.get_result()
        except BaseException:
            scan.transition(ScanState.FAILED)
            self._last_stats = scan.summary()
            raise

        logger.debug("Check completed with %d result(s)", len(results))

        self._dispatcher.emit(EventType.SCAN_ENDED, ScanEndedEvent(options, results))

        scan.transition(ScanState.DONE)
        self._last_stats = scan.summary()

        return results

    async def find(self, options: Any = None, **overrides: Any) -> List[str]:
        """Like check(), but return only the sorted accepted paths."""
        results = await self.check(options, **overrides)
        return [result.path for result in results]

    def get_stats(self) -> Dict[str, Any]:
        """Get statistics of the most recently finished scan.

        Returns:
            Dictionary with state, root, nodes_checked, results and
            errors_ignored (empty before the first scan finishes)
        """
        return dict(self._last_stats)

    async def _visit_node(self, path: str, scan: _Scan):
        """Check path against the filter, then visit its children if eligible."""
        logger.debug('Checking path "%s"', path)

        scan.nodes_checked += 1
        self._dispatcher.emit(EventType.PATH_CHECKING, PathCheckingEvent(path, scan.options))

        node = await scan.adapter.get_node(path)
        is_directory = node.is_directory()
        path_filter = scan.options.filter

        if path_filter is None or path_filter.check(path):
            result = scan.collector.collect(path, is_directory)
            if result is not None:
                logger.debug("Path found: %s", result)
                self._dispatcher.emit(EventType.PATH_FOUND, PathFoundEvent(result))
            else:
                logger.debug("Result limit reached, ignoring path: %s", path)
        else:
            logger.debug("Path did not match filter: %s", path)

        if not self._should_descend(node, scan):
            return

        children = await scan.adapter.list_children(node)
        await self._visit_children(path, children, scan)

    async def _visit_children(self, path: str, children: List[str], scan: _Scan):
        """Visit every child concurrently and wait for all of them.

        If one child fails, its still running siblings are cancelled and
        awaited before the error propagates.
        """
        if not children:
            return

        tasks = [
            asyncio.ensure_future(self._visit_node(scan.adapter.join(path, name), scan))
            for name in children
        ]

        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    def _should_descend(self, node: PathNode, scan: _Scan) -> bool:
        """Check whether the children of node should be visited.

        The root's own entries are always listed; deeper levels require
        recursive mode. Symbolic links are never followed.
        """
        if not node.is_directory() or node.is_symlink():
            return False
        if scan.collector.has_reached_limit():
            return False
        return scan.options.recursive or node.path == scan.root
