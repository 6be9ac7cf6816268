"""Tests for the async iterators, adapters and API."""

import asyncio
import io
import shutil
import tempfile
from pathlib import Path

import pytest

from dazzlewalklib.aio import (
    AsyncCachingChildren,
    AsyncChildIteratorStack,
    AsyncFileSystemChildren,
    AsyncGraphIterator,
    AsyncIteratorBasedGraphIterator,
    EventCollector,
    IterationMode,
    PrintListener,
    build_tree_async,
    count_nodes_async,
    get_leaf_nodes_async,
    get_tree_paths_async,
    walk_async,
    walk_children_async,
)


TREE = {
    "X": ["a", "b"],
    "a": ["a1", "a2"],
    "b": ["b1", "b2"],
}


async def async_next_node(parent, previous):
    await asyncio.sleep(0)
    kids = TREE.get(parent, [])
    if previous is None:
        return kids[0] if kids else None
    i = kids.index(previous) + 1
    return kids[i] if i < len(kids) else None


async def async_children(node):
    """Children as an async generator; leaves yield nothing."""
    for child in TREE.get(node, []):
        await asyncio.sleep(0)
        yield child


async def awaitable_children(node):
    await asyncio.sleep(0)
    return TREE.get(node)


async def collect(aiterable):
    return [item async for item in aiterable]


class TestAsyncGraphIterator:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("mode, expected", [
        (IterationMode.ENTER, ["X", "a", "b"]),
        (IterationMode.EXIT, ["a", "b", "X"]),
        (IterationMode.LEAF, ["a1", "a2", "b1", "b2"]),
        (IterationMode.SIBLING_STEP, ["a", "X", "b"]),
        (IterationMode.DEFAULT, ["X", "a", "a1", "a2", "b", "b1", "b2"]),
        (IterationMode.DEPTH_FIRST, ["a1", "a2", "a", "b1", "b2", "b", "X"]),
        (~IterationMode.LEAF, ["X", "a", "a", "a", "X", "b", "b", "b", "X"]),
    ])
    async def test_modes(self, mode, expected):
        iterator = AsyncGraphIterator(async_next_node, "X", mode=mode)
        assert await collect(iterator) == expected

    @pytest.mark.asyncio
    async def test_sync_next_node_accepted(self):
        def next_node(parent, previous):
            return "child" if parent == "root" and previous is None else None

        iterator = AsyncGraphIterator(next_node, "root")
        assert await collect(iterator) == ["root", "child"]

    @pytest.mark.asyncio
    async def test_has_next_is_idempotent(self):
        iterator = AsyncGraphIterator(async_next_node, "X", mode=IterationMode.LEAF)
        assert await iterator.has_next()
        assert await iterator.has_next()
        assert await iterator.__anext__() == "a1"
        assert iterator.walker.path == ("X", "a", "a1")

    @pytest.mark.asyncio
    async def test_stop_async_iteration(self):
        iterator = AsyncGraphIterator(async_next_node, "a1")
        assert await iterator.__anext__() == "a1"
        with pytest.raises(StopAsyncIteration):
            await iterator.__anext__()
        assert not await iterator.has_next()

    @pytest.mark.asyncio
    async def test_trace_matches_sync_walk(self):
        buffer = io.StringIO()
        listener = PrintListener(indent=False, stream=buffer)
        iterator = AsyncGraphIterator(async_next_node, "X", mode=IterationMode.SIBLING_STEP,
                                      listener=listener)
        async for node in iterator:
            listener.print(f"[{node}]")

        assert buffer.getvalue() == (
            "<X><a><a1></a1>[a]<a2></a2></a>[X]<b><b1></b1>[b]<b2></b2></b></X>"
        )

    def test_remove_is_not_supported(self):
        iterator = AsyncGraphIterator(async_next_node, "X")
        with pytest.raises(NotImplementedError):
            iterator.remove()


class TestAsyncIteratorBasedGraphIterator:

    @pytest.mark.asyncio
    async def test_async_generator_children(self):
        async with AsyncIteratorBasedGraphIterator(async_children, "X") as iterator:
            assert await collect(iterator) == ["X", "a", "a1", "a2", "b", "b1", "b2"]

    @pytest.mark.asyncio
    async def test_awaitable_children(self):
        iterator = AsyncIteratorBasedGraphIterator(awaitable_children, "X",
                                                   mode=IterationMode.DEPTH_FIRST)
        assert await collect(iterator) == ["a1", "a2", "a", "b1", "b2", "b", "X"]

    @pytest.mark.asyncio
    async def test_plain_children(self):
        iterator = AsyncIteratorBasedGraphIterator(TREE.get, "X", mode=IterationMode.LEAF)
        assert await collect(iterator) == ["a1", "a2", "b1", "b2"]

    @pytest.mark.asyncio
    async def test_abandoned_walk_closes_async_generators(self):
        closed = []

        async def children(node):
            try:
                for child in TREE.get(node, []):
                    yield child
            finally:
                closed.append(node)

        async with AsyncIteratorBasedGraphIterator(children, "X") as iterator:
            assert await iterator.__anext__() == "X"
            assert await iterator.__anext__() == "a"

        assert iterator.child_stack.depth == 0
        assert closed == ["a", "X"]

    @pytest.mark.asyncio
    async def test_child_stack_mirrors_walker(self):
        stack = AsyncChildIteratorStack(awaitable_children)
        assert await stack("X", None) == "a"
        assert await stack("a", None) == "a1"
        assert await stack("a1", None) is None
        assert stack.depth == 3
        assert await stack("a", "a1") == "a2"
        assert stack.depth == 2
        await stack.aclose()
        assert stack.depth == 0


class TestAsyncApi:

    @pytest.mark.asyncio
    async def test_walk_async_max_depth(self):
        nodes = await collect(walk_async("X", async_next_node, max_depth=1))
        assert nodes == ["X", "a", "b"]

    @pytest.mark.asyncio
    async def test_walk_async_filter(self):
        nodes = await collect(walk_async("X", async_next_node, include_filter=lambda n: n != "a"))
        assert nodes == ["X", "b", "b1", "b2"]

    @pytest.mark.asyncio
    async def test_walk_children_async_filter(self):
        nodes = await collect(walk_children_async(
            "X", async_children, include_filter=lambda n: not n.endswith("1")
        ))
        assert nodes == ["X", "a", "a2", "b", "b2"]

    @pytest.mark.asyncio
    async def test_walk_children_async_listener(self):
        collector = EventCollector(include_transitions=False)
        await collect(walk_children_async("X", awaitable_children, listener=collector))
        assert collector.ended() == ["a1", "a2", "a", "b1", "b2", "b", "X"]

    @pytest.mark.asyncio
    async def test_leaves_paths_and_count(self):
        assert await get_leaf_nodes_async("X", async_children) == ["a1", "a2", "b1", "b2"]
        assert await count_nodes_async("X", async_children) == 7
        assert await count_nodes_async("X", async_children, max_depth=1) == 3

        paths = await collect(get_tree_paths_async("X", awaitable_children))
        assert paths == [
            ("X", "a", "a1"),
            ("X", "a", "a2"),
            ("X", "b", "b1"),
            ("X", "b", "b2"),
        ]

    @pytest.mark.asyncio
    async def test_build_tree_async_from_async_paths(self):
        roots = await build_tree_async(get_tree_paths_async("X", async_children))
        assert [r.to_tuple() for r in roots] == [
            ("X", [("a", [("a1", []), ("a2", [])]), ("b", [("b1", []), ("b2", [])])]),
        ]

    @pytest.mark.asyncio
    async def test_build_tree_async_from_plain_paths(self):
        roots = await build_tree_async([["a", "b"], ["a", "c"]])
        assert [r.to_tuple() for r in roots] == [("a", [("b", []), ("c", [])])]


class TestAsyncCachingChildren:

    @pytest.mark.asyncio
    async def test_second_walk_served_from_cache(self):
        calls = []

        async def children(node):
            calls.append(node)
            return TREE.get(node)

        cached = AsyncCachingChildren(children)
        first = await collect(walk_children_async("X", cached))
        second = await collect(walk_children_async("X", cached))

        assert first == second
        assert len(calls) == 7
        assert cached.cache_hits == 7
        assert cached.cache_misses == 7

    @pytest.mark.asyncio
    async def test_concurrent_requests_share_one_scan(self):
        started = asyncio.Event()
        release = asyncio.Event()
        calls = []

        async def slow_children(node):
            calls.append(node)
            started.set()
            await release.wait()
            return ["child"]

        cached = AsyncCachingChildren(slow_children)
        first = asyncio.ensure_future(cached("root"))
        await started.wait()
        second = asyncio.ensure_future(cached("root"))
        await asyncio.sleep(0)
        release.set()

        assert await first == ["child"]
        assert await second == ["child"]
        assert calls == ["root"]
        assert cached.concurrent_waits == 1

    @pytest.mark.asyncio
    async def test_error_shared_and_not_cached(self):
        attempts = []
        started = asyncio.Event()
        release = asyncio.Event()

        async def failing(node):
            attempts.append(node)
            if len(attempts) == 1:
                started.set()
                await release.wait()
                raise OSError("listing failed")
            return ["ok"]

        cached = AsyncCachingChildren(failing)
        first = asyncio.ensure_future(cached("root"))
        await started.wait()
        second = asyncio.ensure_future(cached("root"))
        await asyncio.sleep(0)
        release.set()

        with pytest.raises(OSError):
            await first
        with pytest.raises(OSError):
            await second

        assert await cached("root") == ["ok"]
        assert len(cached) == 1

    @pytest.mark.asyncio
    async def test_materialises_async_generators(self):
        cached = AsyncCachingChildren(async_children)
        assert await cached("X") == ["a", "b"]
        assert await cached("X") == ["a", "b"]
        assert cached.cache_hits == 1

    @pytest.mark.asyncio
    async def test_invalidate(self):
        cached = AsyncCachingChildren(awaitable_children)
        await cached("X")
        await cached("a")
        cached.invalidate("X")
        assert len(cached) == 1
        cached.invalidate()
        assert len(cached) == 0


class TestAsyncFileSystemChildren:

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.root = Path(self.temp_dir)
        (self.root / "sub").mkdir()
        (self.root / "sub" / "inner.txt").write_text("inner")
        (self.root / "top.txt").write_text("top")
        (self.root / ".cache").mkdir()

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    @pytest.mark.asyncio
    async def test_lists_sorted_entries(self):
        entries = await AsyncFileSystemChildren()(self.root)
        assert [p.name for p in entries] == [".cache", "sub", "top.txt"]

    @pytest.mark.asyncio
    async def test_files_have_no_children(self):
        assert await AsyncFileSystemChildren()(self.root / "top.txt") is None

    @pytest.mark.asyncio
    async def test_walk(self):
        children = AsyncFileSystemChildren(include_hidden=False)
        nodes = await collect(walk_children_async(self.root, children))
        assert [p.relative_to(self.root).as_posix() for p in nodes[1:]] == [
            "sub", "sub/inner.txt", "top.txt"
        ]

    @pytest.mark.asyncio
    async def test_with_caching(self):
        children = AsyncCachingChildren(AsyncFileSystemChildren(include_hidden=False))
        first = await count_nodes_async(self.root, children)
        second = await count_nodes_async(self.root, children)
        assert first == second == 4
        assert children.cache_hits == children.cache_misses
