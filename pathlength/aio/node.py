"""Async filesystem node.

Represents one checked path with its lstat information. Symbolic links are
never followed: a link to a directory is reported as a link, not as a
directory.
"""

import asyncio
import os
import stat as stat_module  # To avoid name collision with stat results
from typing import Optional


class PathNode:
    """A filesystem path and its (not followed) stat result.

    Nodes are created by the filesystem adapter once the stat call has
    completed, so the type queries below never block.
    """

    def __init__(self, path: str, stat: Optional[os.stat_result] = None):
        """Initialize node.

        Args:
            path: Path as it will be reported (resolved root plus joined names)
            stat: lstat result for path, fetched lazily if omitted
        """
        self.path = path
        self._stat_cache = stat

    async def get_stat(self) -> os.stat_result:
        """Get cached or fresh lstat information.

        Raises:
            OSError: If the path cannot be stat'ed
        """
        if self._stat_cache is None:
            self._stat_cache = await asyncio.to_thread(os.lstat, self.path)
        return self._stat_cache

    def is_directory(self) -> bool:
        """Check if this node is a real directory (not a link to one)."""
        return self._stat_cache is not None and stat_module.S_ISDIR(self._stat_cache.st_mode)

    def is_symlink(self) -> bool:
        """Check if this node is a symbolic link."""
        return self._stat_cache is not None and stat_module.S_ISLNK(self._stat_cache.st_mode)

    def __repr__(self) -> str:
        return f"PathNode({self.path!r})"
