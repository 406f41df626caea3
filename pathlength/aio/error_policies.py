"""Policies deciding what a failed adapter call means for a scan.

Two policies exist. FailFastPolicy ends the scan on the first error.
ContinueOnErrorsPolicy, used in force mode, treats a directory that
cannot be listed as empty and keeps a record of it. Resolving the root
and stat'ing a path are never recoverable.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Tuple

logger = logging.getLogger(__name__)

# Adapter methods whose failure can be downgraded to "no children"
LISTING_METHODS: Tuple[str, ...] = ('list_children',)


class ErrorPolicy(ABC):
    """Strategy consulted by ErrorHandlingAdapter when a call fails."""

    @abstractmethod
    async def handle(self, error: Exception, method_name: str, node: Any, *args, **kwargs) -> Any:
        """Decide the outcome of a failed async adapter call.

        Args:
            error: Exception raised by the adapter
            method_name: Adapter method that raised (e.g. 'list_children')
            node: Node or path the call was made for
            *args: Positional arguments of the call
            **kwargs: Keyword arguments of the call

        Returns:
            Value to use in place of the call's result

        Raises:
            The error itself when the scan must stop
        """
        pass

    def handle_sync(self, error: Exception, method_name: str, node: Any, *args, **kwargs) -> Any:
        """Decide the outcome of a failed synchronous call.

        Synchronous adapter methods do no I/O, so their errors are bugs
        and always propagate.
        """
        raise error


class FailFastPolicy(ErrorPolicy):
    """Stop the scan on the first error. Used unless force is enabled."""

    async def handle(self, error: Exception, method_name: str, node: Any, *args, **kwargs) -> Any:
        raise error


class ContinueOnErrorsPolicy(ErrorPolicy):
    """Skip directories that cannot be listed.

    Only OSErrors from listing methods are absorbed; the directory itself
    stays in the results, its entries are simply never visited.

    Attributes:
        errors: One record per absorbed error
        skipped_paths: Paths of the directories that were skipped
    """

    def __init__(self, verbose: bool = False):
        """
        Args:
            verbose: Log skipped directories at WARNING instead of DEBUG
        """
        self.errors: List[Dict[str, Any]] = []
        self.skipped_paths: List[str] = []
        self.verbose = verbose

    async def handle(self, error: Exception, method_name: str, node: Any, *args, **kwargs) -> Any:
        if method_name not in LISTING_METHODS or not isinstance(error, OSError):
            raise error

        path = getattr(node, 'path', node)

        self.errors.append({
            'path': path,
            'method': method_name,
            'error': error,
            'error_type': type(error).__name__,
            'error_message': str(error),
        })
        self.skipped_paths.append(path)

        level = logging.WARNING if self.verbose else logging.DEBUG
        if isinstance(error, PermissionError):
            logger.log(level, "Skipping inaccessible path '%s': %s", path, error)
        else:
            logger.log(level, "Ignoring error since force is enabled: %s", error)

        return []

    def get_statistics(self) -> Dict[str, Any]:
        """Summarize the errors absorbed so far.

        Returns:
            Dictionary with total_errors, permission_errors, skipped_paths
            and the error records
        """
        return {
            'total_errors': len(self.errors),
            'permission_errors': sum(1 for record in self.errors if record['error_type'] == 'PermissionError'),
            'skipped_paths': len(self.skipped_paths),
            'errors': self.errors,
        }
