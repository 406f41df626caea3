"""Async filesystem adapter.

Adapters bridge the traversal engine and the filesystem. The engine only
needs four operations: resolve the root, stat a path without following
links, list a directory, and join a child name onto its parent. Blocking
calls run in worker threads, bounded by a semaphore.
"""

import asyncio
import logging
import os
from abc import ABC, abstractmethod
from typing import List

from .node import PathNode
from ..config import DEFAULT_MAX_CONCURRENT
from ..errors import PathResolutionError

logger = logging.getLogger(__name__)


class AsyncPathAdapter(ABC):
    """Abstract base class for async path adapters.

    Subclasses provide the filesystem operations the engine needs. A
    different implementation (an in-memory tree, a remote store) can be
    handed to the engine in place of the real filesystem.
    """

    def __init__(self, max_concurrent: int = DEFAULT_MAX_CONCURRENT):
        """Initialize adapter with concurrency control.

        Args:
            max_concurrent: Maximum concurrent I/O operations
        """
        self.max_concurrent = max_concurrent
        self.semaphore = asyncio.Semaphore(max_concurrent)

    @abstractmethod
    async def resolve_path(self, path: str) -> str:
        """Resolve path to its canonical (absolute, symlink-free) form.

        Raises:
            PathResolutionError: If the path cannot be resolved
        """
        pass

    @abstractmethod
    async def get_node(self, path: str) -> PathNode:
        """Stat path without following symbolic links.

        Raises:
            OSError: If the path cannot be stat'ed
        """
        pass

    @abstractmethod
    async def list_children(self, node: PathNode) -> List[str]:
        """List the entry names of a directory node.

        Raises:
            OSError: If the directory cannot be listed
        """
        pass

    def join(self, base: str, name: str) -> str:
        """Join a child entry name onto its parent path."""
        return os.path.join(base, name)


class FileSystemAdapter(AsyncPathAdapter):
    """Adapter over the local filesystem.

    Uses os.scandir for listings and os.lstat for metadata, both run via
    asyncio.to_thread so sibling directories are processed concurrently.
    """

    async def resolve_path(self, path: str) -> str:
        """Resolve path with os.path.realpath in strict mode.

        Args:
            path: Path to resolve, absolute or relative to the working directory

        Returns:
            Canonical absolute path

        Raises:
            PathResolutionError: If path does not exist, cannot be read, or
                is a symbolic link loop
        """
        async with self.semaphore:
            try:
                return await asyncio.to_thread(os.path.realpath, path, strict=True)
            except OSError as e:
                logger.debug("Failed to resolve path %s: %s", path, e)
                raise PathResolutionError.from_os_error(path, e) from e

    async def get_node(self, path: str) -> PathNode:
        """Create a node for path with its lstat result."""
        node = PathNode(path)
        async with self.semaphore:
            await node.get_stat()
        return node

    async def list_children(self, node: PathNode) -> List[str]:
        """List entry names of a directory.

        Errors (missing directory, permission denied) propagate so the
        error handling layer can apply its policy.
        """
        async with self.semaphore:
            return await asyncio.to_thread(_scan_directory_sync, node.path)


def _scan_directory_sync(path: str) -> List[str]:
    """List entry names, to be run in a worker thread."""
    with os.scandir(path) as iterator:
        return [entry.name for entry in iterator]
