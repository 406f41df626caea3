"""High-level async API for pathlength.

This module provides simple functions for common path length checks.
Each call creates a fresh PathLength engine.
"""

import os
from typing import Any, List, Optional, Union

from .scanner import PathLength
from ..config import DEFAULT_MAX_CONCURRENT
from ..core import Filter, GREATER_THAN_OR_EQUAL_TO, Result

PathSpec = Union[str, os.PathLike, None]


async def check_path_lengths(
    cwd: PathSpec = None,
    filter: Union[Filter, str, None] = None,
    force: bool = False,
    limit: Optional[int] = None,
    recursive: bool = False,
    max_concurrent: int = DEFAULT_MAX_CONCURRENT
) -> List[Result]:
    """Check the length of every path beneath cwd.

    Args:
        cwd: Root directory (defaults to the working directory)
        filter: Filter or expression such as "gte 20" (None keeps all paths)
        force: Treat directories that cannot be listed as empty
        limit: Maximum number of results (None for unlimited)
        recursive: Descend below the root's immediate children
        max_concurrent: Maximum concurrent filesystem calls

    Returns:
        Accepted results, sorted by path

    Example:
        >>> results = await check_path_lengths('/srv/data', filter='gt 200', recursive=True)
        >>> for result in results:
        ...     print(result.length, result.path)
    """
    engine = PathLength(max_concurrent=max_concurrent)
    return await engine.check(
        cwd=cwd,
        filter=filter,
        force=force,
        limit=limit,
        recursive=recursive,
    )


async def find_paths(cwd: PathSpec = None, **options: Any) -> List[str]:
    """Get the sorted paths accepted by a scan of cwd.

    Args:
        cwd: Root directory (defaults to the working directory)
        **options: Any option accepted by check_path_lengths()

    Returns:
        Accepted paths, sorted
    """
    results = await check_path_lengths(cwd, **options)
    return [result.path for result in results]


async def find_long_paths(
    cwd: PathSpec,
    min_length: int,
    recursive: bool = True,
    **options: Any
) -> List[Result]:
    """Find paths at least min_length characters long.

    Useful for spotting paths that break platform limits (e.g. 260
    characters on Windows) before copying a tree.

    Args:
        cwd: Root directory
        min_length: Minimum path length to report
        recursive: Descend through the whole tree (default True)
        **options: Other options accepted by check_path_lengths()

    Returns:
        Results whose path length is >= min_length, sorted by path
    """
    return await check_path_lengths(
        cwd,
        filter=Filter(GREATER_THAN_OR_EQUAL_TO, min_length),
        recursive=recursive,
        **options,
    )
