"""Tests for GraphIterator iteration modes and stepping semantics."""

import io
from collections import Counter

import pytest

from dazzlewalklib.sync import (
    GraphIterator,
    IterationMode,
    IteratorBasedGraphIterator,
    PrintListener,
)


TREE = {
    "X": ["a", "b"],
    "a": ["a1", "a2"],
    "b": ["b1", "b2"],
}


def tree_next_node(tree):
    """Build a ``next_node`` function over a dict of child lists."""
    def next_node(parent, previous):
        kids = tree.get(parent, [])
        if previous is None:
            return kids[0] if kids else None
        i = kids.index(previous) + 1
        return kids[i] if i < len(kids) else None
    return next_node


def generated_next_node(parent, previous):
    """Children of "1" are "11" and "12"; two-character nodes are leaves."""
    if len(parent) >= 2:
        return None
    if previous is None:
        return parent + "1"
    last = previous[-1]
    if last < "2":
        return previous[:-1] + chr(ord(last) + 1)
    return None


def trace(mode):
    """Return the XML trace of walking "1" with ``[node]`` at each yield."""
    buffer = io.StringIO()
    listener = PrintListener(indent=False, stream=buffer)
    iterator = GraphIterator(generated_next_node, "1", mode=mode, listener=listener)
    while iterator.has_next():
        node = next(iterator)
        listener.print(f"[{node}]")
    return buffer.getvalue()


class TestModes:
    """What each mode yields for X{a{a1,a2}, b{b1,b2}}."""

    @pytest.mark.parametrize("mode, expected", [
        (IterationMode.ENTER, ["X", "a", "b"]),
        (IterationMode.EXIT, ["a", "b", "X"]),
        (IterationMode.LEAF, ["a1", "a2", "b1", "b2"]),
        (IterationMode.SIBLING_STEP, ["a", "X", "b"]),
        (IterationMode.ENTER | IterationMode.LEAF,
         ["X", "a", "a1", "a2", "b", "b1", "b2"]),
        (IterationMode.EXIT | IterationMode.LEAF,
         ["a1", "a2", "a", "b1", "b2", "b", "X"]),
        (~IterationMode.LEAF, ["X", "a", "a", "a", "X", "b", "b", "b", "X"]),
        (~2, ["X", "a", "a", "a", "X", "b", "b", "b", "X"]),
    ])
    def test_mode(self, mode, expected):
        iterator = GraphIterator(tree_next_node(TREE), "X", mode=mode)
        assert list(iterator) == expected

    def test_default_is_pre_order(self):
        iterator = GraphIterator(tree_next_node(TREE), "X")
        assert list(iterator) == ["X", "a", "a1", "a2", "b", "b1", "b2"]

    def test_depth_first_alias(self):
        iterator = GraphIterator(tree_next_node(TREE), "X", mode=IterationMode.DEPTH_FIRST)
        assert list(iterator) == ["a1", "a2", "a", "b1", "b2", "b", "X"]

    def test_mode_none_yields_nothing_but_walks_everything(self):
        buffer = io.StringIO()
        listener = PrintListener(indent=False, stream=buffer)
        iterator = GraphIterator(tree_next_node(TREE), "X", mode=0, listener=listener)

        assert list(iterator) == []
        assert buffer.getvalue() == (
            "<X><a><a1></a1><a2></a2></a><b><b1></b1><b2></b2></b></X>"
        )

    def test_all_mode_visit_counts(self):
        # Each node is yielded once on entry, once per sibling step
        # between its children, and once on exit.
        counts = Counter(GraphIterator(tree_next_node(TREE), "X", mode=IterationMode.ALL))
        assert counts == Counter({"X": 3, "a": 3, "b": 3,
                                  "a1": 1, "a2": 1, "b1": 1, "b2": 1})

    def test_mode_is_stored_as_int(self):
        iterator = GraphIterator(tree_next_node(TREE), "X", mode=IterationMode.LEAF)
        assert iterator.mode == 2
        iterator.mode = IterationMode.EXIT
        assert iterator.mode == 4


class TestTraces:
    """Full XML traces interleaved with yields on the generated "1" tree."""

    @pytest.mark.parametrize("mode, expected", [
        (IterationMode.ENTER | IterationMode.LEAF,
         "<1>[1]<11>[11]</11><12>[12]</12></1>"),
        (IterationMode.SIBLING_STEP, "<1><11></11>[1]<12></12></1>"),
        (IterationMode.ENTER, "<1>[1]<11></11><12></12></1>"),
        (IterationMode.EXIT, "<1><11></11><12></12>[1]</1>"),
        (IterationMode.EXIT | IterationMode.LEAF,
         "<1><11>[11]</11><12>[12]</12>[1]</1>"),
        (IterationMode.LEAF, "<1><11>[11]</11><12>[12]</12></1>"),
        (IterationMode.ALL, "<1>[1]<11>[11]</11>[1]<12>[12]</12>[1]</1>"),
        (0, "<1><11></11><12></12></1>"),
        (~IterationMode.LEAF, "<1>[1]<11></11>[1]<12></12>[1]</1>"),
    ])
    def test_trace(self, mode, expected):
        assert trace(mode) == expected


class TestStepping:

    def test_has_next_is_idempotent(self):
        iterator = GraphIterator(tree_next_node(TREE), "X")
        assert iterator.has_next()
        assert iterator.has_next()
        assert iterator.current == "X"
        assert next(iterator) == "X"
        assert next(iterator) == "a"

    def test_stop_iteration_after_exhaustion(self):
        iterator = GraphIterator(tree_next_node(TREE), "X", mode=IterationMode.ENTER)
        assert list(iterator) == ["X", "a", "b"]
        assert not iterator.has_next()
        with pytest.raises(StopIteration):
            next(iterator)
        # Still exhausted
        assert not iterator.has_next()

    def test_no_top_yields_nothing(self):
        iterator = GraphIterator(tree_next_node(TREE))
        assert not iterator.has_next()
        assert list(iterator) == []

    def test_begin_sets_top_later(self):
        iterator = GraphIterator(tree_next_node(TREE))
        iterator.begin("a")
        assert list(iterator) == ["a", "a1", "a2"]

    def test_status_reflects_last_step(self):
        iterator = GraphIterator(tree_next_node(TREE), "X", mode=IterationMode.ALL)
        assert iterator.status == IterationMode.NONE

        next(iterator)
        assert iterator.status == IterationMode.ENTER
        next(iterator)  # a
        next(iterator)  # a1
        assert iterator.status == IterationMode.LEAF
        next(iterator)  # back at a, moving to a2
        assert iterator.status == IterationMode.SIBLING_STEP
        assert iterator.previous == "a1"

    def test_remove_is_not_supported(self):
        iterator = GraphIterator(tree_next_node(TREE), "X")
        with pytest.raises(NotImplementedError, match="does not support removal"):
            iterator.remove()

    def test_walker_path_during_iteration(self):
        iterator = GraphIterator(tree_next_node(TREE), "X", mode=IterationMode.LEAF)
        paths = [iterator.walker.path for _ in iterator]
        assert paths == [
            ("X", "a", "a1"),
            ("X", "a", "a2"),
            ("X", "b", "b1"),
            ("X", "b", "b2"),
        ]

    def test_single_node(self):
        iterator = GraphIterator(tree_next_node({}), "only", mode=IterationMode.ALL)
        assert list(iterator) == ["only"]

    def test_failing_next_node_propagates(self):
        def next_node(parent, previous):
            if parent == "a":
                raise RuntimeError("cannot list a")
            return tree_next_node(TREE)(parent, previous)

        iterator = GraphIterator(next_node, "X")
        assert next(iterator) == "X"
        with pytest.raises(RuntimeError, match="cannot list a"):
            next(iterator)
        # The failed candidate is not re-activated
        assert iterator.walker.path == ("X", "a")

    def test_lazy_enumeration(self):
        calls = []

        def next_node(parent, previous):
            calls.append((parent, previous))
            return tree_next_node(TREE)(parent, previous)

        iterator = GraphIterator(next_node, "X")
        next(iterator)
        assert calls == [("X", None)]

    def test_shared_walker(self):
        iterator = GraphIterator(tree_next_node(TREE), "X")
        other = GraphIterator(tree_next_node(TREE), walker=iterator.walker)
        assert other.walker is iterator.walker


@pytest.mark.slow
class TestLargeTrees:

    def test_deep_chain_does_not_recurse(self):
        depth = 50000

        def next_node(parent, previous):
            if previous is None and parent < depth:
                return parent + 1
            return None

        iterator = GraphIterator(next_node, 0, mode=IterationMode.LEAF)
        assert list(iterator) == [depth]

    def test_wide_tree_visits_every_node(self):
        def children(node):
            if node == "root":
                return ("n%d" % i for i in range(100000))
            return None

        with IteratorBasedGraphIterator(children, "root") as iterator:
            assert sum(1 for _ in iterator) == 100001
