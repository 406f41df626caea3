"""Shared fixtures for pathlength tests."""

import asyncio
import errno
import os
import stat
from typing import Dict, List, Optional, Tuple

import pytest

from pathlength.aio import AsyncPathAdapter, EventType, PathNode
from pathlength.errors import PathResolutionError


class InMemoryAdapter(AsyncPathAdapter):
    """Adapter over a dict of paths, for deterministic engine tests.

    ``tree`` maps each path to the list of its entry names, or to None
    for a file. ``failures`` maps (method name, path) to the exception
    that call should raise. Paths in ``symlinks`` are reported as
    symbolic links.
    """

    def __init__(
        self,
        tree: Dict[str, Optional[List[str]]],
        failures: Optional[Dict[Tuple[str, str], Exception]] = None,
        symlinks: Tuple[str, ...] = (),
        delay: float = 0
    ):
        super().__init__(max_concurrent=10)
        self.tree = tree
        self.failures = failures or {}
        self.symlinks = symlinks
        self.delay = delay
        self.calls: List[Tuple[str, str]] = []

    async def resolve_path(self, path: str) -> str:
        self.calls.append(('resolve_path', path))
        if path not in self.tree:
            error = FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), path)
            raise PathResolutionError.from_os_error(path, error) from error
        return path

    async def get_node(self, path: str) -> PathNode:
        self.calls.append(('get_node', path))
        await asyncio.sleep(self.delay)
        self._maybe_fail('get_node', path)

        mode = stat.S_IFREG | 0o644
        if self.tree[path] is not None:
            mode = stat.S_IFDIR | 0o755
        if path in self.symlinks:
            mode = stat.S_IFLNK | 0o777

        return PathNode(path, os.stat_result((mode, 0, 0, 1, 0, 0, 0, 0, 0, 0)))

    async def list_children(self, node: PathNode) -> List[str]:
        self.calls.append(('list_children', node.path))
        await asyncio.sleep(self.delay)
        self._maybe_fail('list_children', node.path)
        return list(self.tree[node.path])

    def join(self, base: str, name: str) -> str:
        return base.rstrip('/') + '/' + name

    def _maybe_fail(self, method: str, path: str):
        error = self.failures.get((method, path))
        if error is not None:
            raise error


# Paths of MEMORY_TREE:
#   /data             (dir)   length 5
#   /data/notes.txt   (file)  length 15
#   /data/src         (dir)   length 9
#   /data/src/main.py (file)  length 17
MEMORY_TREE = {
    '/data': ['notes.txt', 'src'],
    '/data/notes.txt': None,
    '/data/src': ['main.py'],
    '/data/src/main.py': None,
}


@pytest.fixture
def memory_adapter():
    """In-memory adapter over MEMORY_TREE."""
    return InMemoryAdapter(dict(MEMORY_TREE))


@pytest.fixture
def sample_tree(tmp_path):
    """Create a small directory tree and return its resolved root.

    Layout:
        root/
            a.txt
            sub/
                b.txt
                deeper/
                    c.txt
    """
    root = tmp_path / "root"
    (root / "sub" / "deeper").mkdir(parents=True)
    (root / "a.txt").write_text("a")
    (root / "sub" / "b.txt").write_text("b")
    (root / "sub" / "deeper" / "c.txt").write_text("c")
    return os.path.realpath(root)


class EventRecorder:
    """Records every event an engine emits, in order."""

    def __init__(self, engine):
        self.events = []
        for event_type in EventType:
            engine.subscribe(event_type, self._recorder(event_type))

    def _recorder(self, event_type):
        def record(event):
            self.events.append((event_type, event))
        return record

    def of_type(self, event_type):
        return [event for kind, event in self.events if kind is event_type]

    def types(self):
        return [kind for kind, _ in self.events]


@pytest.fixture
def recorder_factory():
    return EventRecorder
