"""Tests for the PathLength engine."""

import asyncio
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from conftest import MEMORY_TREE, InMemoryAdapter
from pathlength import (
    EventType,
    InvalidArgumentError,
    InvalidExpressionError,
    PathLength,
    PathResolutionError,
    Result,
    ScanOptions,
)
from pathlength.aio import ScanState


def paths_of(results):
    return [result.path for result in results]


def deny_listing(*denied):
    """Patch os.scandir so listing any of denied raises PermissionError."""
    real_scandir = os.scandir

    def fake_scandir(path):
        if path in denied:
            raise PermissionError(13, "Permission denied", path)
        return real_scandir(path)

    return patch('os.scandir', side_effect=fake_scandir)


class TestFilesystemScans:
    """Scans of a real directory tree."""

    @pytest.mark.asyncio
    async def test_non_recursive_lists_root_entries(self, sample_tree):
        results = await PathLength().check(cwd=sample_tree)

        assert paths_of(results) == [
            sample_tree,
            os.path.join(sample_tree, 'a.txt'),
            os.path.join(sample_tree, 'sub'),
        ]

    @pytest.mark.asyncio
    async def test_recursive_visits_whole_tree(self, sample_tree):
        results = await PathLength().check(cwd=sample_tree, recursive=True)

        assert paths_of(results) == sorted([
            sample_tree,
            os.path.join(sample_tree, 'a.txt'),
            os.path.join(sample_tree, 'sub'),
            os.path.join(sample_tree, 'sub', 'b.txt'),
            os.path.join(sample_tree, 'sub', 'deeper'),
            os.path.join(sample_tree, 'sub', 'deeper', 'c.txt'),
        ])

    @pytest.mark.asyncio
    async def test_results_carry_length_and_type(self, sample_tree):
        results = await PathLength().check(cwd=sample_tree)

        by_path = {result.path: result for result in results}
        a_txt = os.path.join(sample_tree, 'a.txt')
        assert by_path[a_txt] == Result(a_txt, len(a_txt), False)
        assert by_path[sample_tree].is_directory

    @pytest.mark.asyncio
    async def test_filter_applies_to_every_path(self, sample_tree):
        # Only paths longer than the root itself
        results = await PathLength().check(
            cwd=sample_tree, filter=f"gt {len(sample_tree)}", recursive=True)

        assert sample_tree not in paths_of(results)
        assert len(results) == 5

    @pytest.mark.asyncio
    async def test_rejected_directories_are_still_descended(self, sample_tree):
        deepest = os.path.join(sample_tree, 'sub', 'deeper', 'c.txt')

        results = await PathLength().check(cwd=sample_tree, filter=f"eq {len(deepest)}", recursive=True)

        assert deepest in paths_of(results)
        assert all(result.length == len(deepest) for result in results)

    @pytest.mark.asyncio
    async def test_limit_caps_results(self, tmp_path):
        root = os.path.realpath(tmp_path)
        for name in 'abcde':
            (tmp_path / name).write_text(name)

        results = await PathLength().check(cwd=root, limit=2)

        assert len(results) == 2
        assert root in paths_of(results)

    @pytest.mark.asyncio
    async def test_recursive_limit(self, sample_tree):
        results = await PathLength().check(cwd=sample_tree, recursive=True, limit=3)

        assert len(results) == 3
        assert paths_of(results) == sorted(paths_of(results))

    @pytest.mark.asyncio
    async def test_root_may_be_a_file(self, sample_tree):
        a_txt = os.path.join(sample_tree, 'a.txt')

        assert paths_of(await PathLength().check(cwd=a_txt, recursive=True)) == [a_txt]

    @pytest.mark.asyncio
    async def test_relative_root(self, sample_tree, monkeypatch):
        monkeypatch.chdir(sample_tree)

        results = await PathLength().check(cwd='sub')

        assert results[0].path == os.path.join(sample_tree, 'sub')

    @pytest.mark.asyncio
    async def test_path_like_root_overrides_options(self, sample_tree):
        options = ScanOptions.create(cwd=os.path.join(sample_tree, 'sub'))

        results = await PathLength().check(options, cwd=Path(sample_tree))

        assert results[0].path == sample_tree

    @pytest.mark.asyncio
    async def test_missing_root(self, sample_tree):
        with pytest.raises(PathResolutionError):
            await PathLength().check(cwd=os.path.join(sample_tree, 'missing'))

    @pytest.mark.asyncio
    async def test_scans_are_repeatable(self, sample_tree):
        engine = PathLength()

        first = await engine.check(cwd=sample_tree, recursive=True)
        second = await engine.check(cwd=sample_tree, recursive=True)

        assert first == second


@pytest.mark.skipif(os.name == 'nt', reason="symlinks require POSIX")
class TestSymlinks:

    @pytest.mark.asyncio
    async def test_links_are_reported_but_not_followed(self, sample_tree):
        link = os.path.join(sample_tree, 'link')
        os.symlink(os.path.join(sample_tree, 'sub'), link)

        results = await PathLength().check(cwd=sample_tree, recursive=True)

        by_path = {result.path: result for result in results}
        assert by_path[link].is_directory is False
        assert not any(path.startswith(link + os.sep) for path in by_path)

    @pytest.mark.asyncio
    async def test_symlinked_root_is_resolved(self, sample_tree):
        link = os.path.join(sample_tree, 'link')
        os.symlink(os.path.join(sample_tree, 'sub'), link)

        results = await PathLength().check(cwd=link)

        assert results[0].path == os.path.join(sample_tree, 'sub')
        assert results[0].is_directory


class TestForceMode:

    @pytest.mark.asyncio
    async def test_unreadable_directory_fails_scan(self, sample_tree):
        sub = os.path.join(sample_tree, 'sub')

        with deny_listing(sub):
            with pytest.raises(PermissionError):
                await PathLength().check(cwd=sample_tree, recursive=True)

    @pytest.mark.asyncio
    async def test_force_treats_unreadable_directory_as_empty(self, sample_tree):
        sub = os.path.join(sample_tree, 'sub')
        engine = PathLength()

        with deny_listing(sub):
            results = await engine.check(cwd=sample_tree, recursive=True, force=True)

        assert paths_of(results) == [sample_tree, os.path.join(sample_tree, 'a.txt'), sub]
        assert engine.get_stats()['errors_ignored'] == 1

    @pytest.mark.asyncio
    async def test_force_does_not_hide_resolution_errors(self, sample_tree):
        with pytest.raises(PathResolutionError):
            await PathLength().check(cwd=os.path.join(sample_tree, 'missing'), force=True)

    @pytest.mark.asyncio
    async def test_force_does_not_hide_stat_errors(self):
        adapter = InMemoryAdapter(
            dict(MEMORY_TREE),
            failures={('get_node', '/data/src'): PermissionError(13, "Permission denied")},
        )

        with pytest.raises(PermissionError):
            await PathLength(adapter).check(cwd='/data', force=True)


class TestInvalidOptions:

    @pytest.mark.asyncio
    async def test_invalid_filter_fails_before_any_io(self, memory_adapter, recorder_factory):
        engine = PathLength(memory_adapter)
        recorder = recorder_factory(engine)

        with pytest.raises(InvalidExpressionError):
            await engine.check(cwd='/data', filter='20gte')

        assert memory_adapter.calls == []
        assert recorder.events == []

    @pytest.mark.asyncio
    async def test_invalid_limit(self, memory_adapter):
        with pytest.raises(InvalidArgumentError):
            await PathLength(memory_adapter).check(cwd='/data', limit='ten')

    @pytest.mark.asyncio
    async def test_options_object(self, memory_adapter):
        options = ScanOptions.create(cwd='/data', recursive=True)

        results = await PathLength(memory_adapter).check(options, filter='gt 9')

        assert paths_of(results) == ['/data/notes.txt', '/data/src/main.py']


class TestEngineSemantics:
    """Behavior checked against an in-memory tree."""

    @pytest.mark.asyncio
    async def test_non_recursive(self, memory_adapter):
        results = await PathLength(memory_adapter).check(cwd='/data')

        assert results == [
            Result('/data', 5, True),
            Result('/data/notes.txt', 15, False),
            Result('/data/src', 9, True),
        ]

    @pytest.mark.asyncio
    async def test_find_returns_paths(self, memory_adapter):
        paths = await PathLength(memory_adapter).find(cwd='/data', recursive=True, filter='gte 15')

        assert paths == ['/data/notes.txt', '/data/src/main.py']

    @pytest.mark.asyncio
    async def test_non_recursive_scan_of_child_directory(self, memory_adapter):
        results = await PathLength(memory_adapter).check(cwd='/data/src')

        assert paths_of(results) == ['/data/src', '/data/src/main.py']

    @pytest.mark.asyncio
    async def test_symlinked_directory_is_not_listed(self):
        adapter = InMemoryAdapter(dict(MEMORY_TREE), symlinks=('/data/src',))

        results = await PathLength(adapter).check(cwd='/data', recursive=True)

        assert Result('/data/src', 9, False) in results
        assert ('list_children', '/data/src') not in adapter.calls

    @pytest.mark.asyncio
    async def test_limit_is_soft(self, recorder_factory):
        tree = {'/r': ['a', 'b', 'c', 'd', 'e']}
        tree.update({f'/r/{name}': None for name in 'abcde'})
        engine = PathLength(InMemoryAdapter(tree))
        recorder = recorder_factory(engine)

        results = await engine.check(cwd='/r', limit=2)

        # Root and all five children are checked, only two are kept
        assert len(results) == 2
        assert len(recorder.of_type(EventType.PATH_CHECKING)) == 6
        assert len(recorder.of_type(EventType.PATH_FOUND)) == 2

    @pytest.mark.asyncio
    async def test_full_limit_stops_descent(self, memory_adapter, recorder_factory):
        engine = PathLength(memory_adapter)
        recorder = recorder_factory(engine)

        results = await engine.check(cwd='/data', limit=1, recursive=True)

        assert paths_of(results) == ['/data']
        assert [event.path for event in recorder.of_type(EventType.PATH_CHECKING)] == ['/data']

    @pytest.mark.asyncio
    async def test_zero_limit(self, memory_adapter, recorder_factory):
        engine = PathLength(memory_adapter)
        recorder = recorder_factory(engine)

        assert await engine.check(cwd='/data', limit=0, recursive=True) == []
        assert len(recorder.of_type(EventType.PATH_CHECKING)) == 1

    @pytest.mark.asyncio
    async def test_failed_child_cancels_siblings(self):
        tree = {'/r': ['bad', 'slow1', 'slow2']}
        tree.update({'/r/bad': None, '/r/slow1': ['x'], '/r/slow2': ['y'],
                     '/r/slow1/x': None, '/r/slow2/y': None})
        adapter = InMemoryAdapter(
            tree,
            failures={('get_node', '/r/bad'): OSError(5, "Input/output error")},
        )
        engine = PathLength(adapter)
        recorder_events = []
        engine.subscribe(EventType.SCAN_ENDED, recorder_events.append)

        with pytest.raises(OSError, match="Input/output error"):
            await engine.check(cwd='/r', recursive=True)

        assert recorder_events == []
        assert engine.get_stats()['state'] is ScanState.FAILED
        # Cancelled siblings make no further adapter calls
        calls = list(adapter.calls)
        await asyncio.sleep(0.01)
        assert adapter.calls == calls

    @pytest.mark.asyncio
    async def test_concurrent_scans_on_one_engine(self, memory_adapter):
        engine = PathLength(memory_adapter)

        data, src = await asyncio.gather(
            engine.check(cwd='/data'),
            engine.check(cwd='/data/src'),
        )

        assert paths_of(data) == ['/data', '/data/notes.txt', '/data/src']
        assert paths_of(src) == ['/data/src', '/data/src/main.py']

    @pytest.mark.asyncio
    async def test_results_sorted_regardless_of_completion_order(self):
        tree = {'/r': ['z', 'm', 'a']}
        tree.update({'/r/z': None, '/r/m': None, '/r/a': None})

        results = await PathLength(InMemoryAdapter(tree, delay=0.001)).check(cwd='/r')

        assert paths_of(results) == ['/r', '/r/a', '/r/m', '/r/z']

    @pytest.mark.asyncio
    async def test_stats(self, memory_adapter):
        engine = PathLength(memory_adapter)
        assert engine.get_stats() == {}

        await engine.check(cwd='/data', recursive=True)

        stats = engine.get_stats()
        assert stats['state'] is ScanState.DONE
        assert stats['root'] == '/data'
        assert stats['nodes_checked'] == 4
        assert stats['results'] == 4
        assert stats['errors_ignored'] == 0


class TestEvents:

    @pytest.mark.asyncio
    async def test_event_order(self, memory_adapter, recorder_factory):
        engine = PathLength(memory_adapter)
        recorder = recorder_factory(engine)

        results = await engine.check(cwd='/data', recursive=True)

        types = recorder.types()
        assert types[0] is EventType.CHECK_STARTED
        assert types[-1] is EventType.SCAN_ENDED
        assert types.count(EventType.CHECK_STARTED) == 1
        assert types.count(EventType.SCAN_ENDED) == 1

        checking = [event.path for event in recorder.of_type(EventType.PATH_CHECKING)]
        assert checking[0] == '/data'
        assert sorted(checking) == paths_of(results)

        # Every path is announced before it is reported
        for index, (kind, event) in enumerate(recorder.events):
            if kind is EventType.PATH_FOUND:
                announced = [e.path for k, e in recorder.events[:index] if k is EventType.PATH_CHECKING]
                assert event.path in announced

    @pytest.mark.asyncio
    async def test_event_payloads(self, memory_adapter, recorder_factory):
        engine = PathLength(memory_adapter)
        recorder = recorder_factory(engine)

        results = await engine.check(cwd='/data', filter='gt 5')

        started = recorder.of_type(EventType.CHECK_STARTED)[0]
        assert started.options.cwd == '/data'
        assert str(started.options.filter) == 'gt 5'

        found = recorder.of_type(EventType.PATH_FOUND)
        assert sorted(event.path for event in found) == paths_of(results)
        assert all(event.length == len(event.path) for event in found)

        ended = recorder.of_type(EventType.SCAN_ENDED)[0]
        assert ended.results == results

    @pytest.mark.asyncio
    async def test_resolution_failure_emits_only_start(self, memory_adapter, recorder_factory):
        engine = PathLength(memory_adapter)
        recorder = recorder_factory(engine)

        with pytest.raises(PathResolutionError):
            await engine.check(cwd='/missing')

        assert recorder.types() == [EventType.CHECK_STARTED]

    @pytest.mark.asyncio
    async def test_unsubscribe(self, memory_adapter):
        engine = PathLength(memory_adapter)
        seen = []
        handler = engine.subscribe(EventType.PATH_FOUND, seen.append)

        assert engine.unsubscribe(EventType.PATH_FOUND, handler)
        assert not engine.unsubscribe(EventType.PATH_FOUND, handler)

        await engine.check(cwd='/data')
        assert seen == []

    @pytest.mark.asyncio
    async def test_handler_errors_propagate(self, memory_adapter):
        engine = PathLength(memory_adapter)

        def explode(event):
            raise RuntimeError("handler failed")

        engine.subscribe(EventType.PATH_FOUND, explode)

        with pytest.raises(RuntimeError, match="handler failed"):
            await engine.check(cwd='/data')

    @pytest.mark.asyncio
    async def test_failing_start_handler_marks_scan_failed(self, memory_adapter):
        engine = PathLength(memory_adapter)
        await engine.check(cwd='/data')

        def explode(event):
            raise RuntimeError("start handler failed")

        engine.subscribe(EventType.CHECK_STARTED, explode)

        with pytest.raises(RuntimeError, match="start handler failed"):
            await engine.check(cwd='/data/src')

        stats = engine.get_stats()
        assert stats['state'] is ScanState.FAILED
        assert stats['nodes_checked'] == 0
        assert ('resolve_path', '/data/src') not in memory_adapter.calls


    def test_subscribe_by_name(self):
        engine = PathLength()
        seen = []

        engine.subscribe('result', seen.append)

        assert engine._dispatcher.handlers(EventType.PATH_FOUND) == [seen.append]

    def test_subscribe_requires_callable(self):
        with pytest.raises(TypeError):
            PathLength().subscribe(EventType.PATH_FOUND, "not callable")
