"""Result collector for a single scan.

The collector is the only mutable state shared between the concurrent
branches of a scan. It is append-only while the scan runs and sorted once
when it finishes.
"""

from typing import List, Optional

from ..config import DEFAULT_LIMIT
from ..core import Result


class ResultCollector:
    """Collects accepted paths, enforcing the result limit at append time.

    Appends happen on the event loop thread between awaits, so concurrent
    visits never interleave inside collect().
    """

    def __init__(self, limit: int = DEFAULT_LIMIT):
        """Initialize collector.

        Args:
            limit: Maximum number of results (negative for unlimited)
        """
        self.limit = limit
        self.reset()

    def reset(self):
        """Reset collected results.

        Called before starting a new scan.
        """
        self.results: List[Result] = []

    def has_reached_limit(self) -> bool:
        """Check whether no further results may be added."""
        return self.limit >= 0 and len(self.results) >= self.limit

    def collect(self, path: str, is_directory: bool) -> Optional[Result]:
        """Record an accepted path unless the limit has been reached.

        Args:
            path: Accepted path
            is_directory: Whether the path is a directory

        Returns:
            The new Result, or None if the limit was already reached
        """
        if self.has_reached_limit():
            return None

        result = Result.for_path(path, is_directory)
        self.results.append(result)
        return result

    def get_result(self) -> List[Result]:
        """Sort collected results by path and return them."""
        self.results.sort(key=lambda result: result.path)
        return self.results

    def __len__(self) -> int:
        return len(self.results)
