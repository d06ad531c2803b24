"""Tests for the thread-safe registry."""

import threading
from concurrent.futures import ThreadPoolExecutor
from itertools import product

import library_tree
from library_tree.registry import Registry, get_registry, resolve_registry


class TestNodes:
    """Node creation and lookup."""

    def test_ensure_node_is_get_or_create(self, registry, units):
        (a,) = units("A")

        first = registry.ensure_node(a)
        second = registry.ensure_node(a)

        assert first is second
        assert first.unit is a
        assert len(registry) == 1

    def test_units_are_keyed_by_identity(self, registry):
        class Same:
            def __eq__(self, other):
                return True

            def __hash__(self):
                return 0

        first, second = Same(), Same()

        assert registry.ensure_node(first) is not registry.ensure_node(second)
        assert len(registry) == 2

    def test_is_tracked_does_not_create(self, registry, units):
        (a,) = units("A")

        assert not registry.is_tracked(a)
        assert a not in registry
        assert registry.get(a) is None
        assert registry.all() == []

    def test_mark_tracked(self, registry, units):
        (a,) = units("A")

        registry.mark_tracked(a)

        assert registry.is_tracked(a)
        assert [n.unit for n in registry.roots()] == [a]


class TestEdges:
    """Edge recording."""

    def test_record_edge_creates_both_nodes(self, registry, units):
        a, b = units("A B")

        registry.record_edge(a, b)

        parent, child = registry.get(a), registry.get(b)
        assert parent.children == [child]
        assert child.parents == [parent]

    def test_record_edge_is_idempotent(self, registry, units):
        a, b = units("A B")

        registry.record_edge(a, b)
        registry.record_edge(a, b)

        assert len(registry.get(a).children) == 1
        assert len(registry.get(b).parents) == 1

    def test_roots_are_units_without_recorded_parents(self, registry, units):
        a, b, c, d = units("A B C D")
        registry.record_edge(a, b)
        registry.record_edge(b, c)
        registry.mark_tracked(d)

        assert sorted(n.name for n in registry.roots()) == ["A", "D"]
        assert sorted(n.name for n in registry.all()) == ["A", "B", "C", "D"]

    def test_cycle_has_no_roots(self, registry, units):
        a, b = units("A B")
        registry.record_edge(a, b)
        registry.record_edge(b, a)

        assert registry.roots() == []
        assert len(registry.all()) == 2


class TestReset:
    def test_reset_empties_registry(self, registry, units):
        for parent, child in zip(units("A B C D"), units("E F G H")):
            registry.record_edge(parent, child)

        registry.reset()

        assert registry.roots() == []
        assert registry.all() == []
        assert len(registry) == 0

    def test_old_nodes_keep_their_edges(self, registry, units):
        a, b = units("A B")
        registry.record_edge(a, b)
        old = registry.get(a)

        registry.reset()
        registry.record_edge(a, b)

        assert [c.unit for c in old.children] == [b]
        assert registry.get(a) is not old


class TestStats:
    def test_counts(self, registry, units):
        a, b, c, d = units("A B C D")
        registry.record_edge(a, b)
        registry.record_edge(a, c)
        registry.record_edge(b, c)
        registry.mark_tracked(d)

        stats = registry.get_stats()

        assert stats.to_dict() == {
            "total_nodes": 4,
            "roots": 2,
            "leaves": 2,
            "edges": 3,
        }


class TestConcurrency:
    """Concurrent writers never lose or duplicate edges."""

    def test_concurrent_record_edge(self, registry, units):
        parents = units(" ".join(f"P{i}" for i in range(20)))
        children = units(" ".join(f"C{i}" for i in range(20)))
        pairs = list(product(parents, children)) * 3

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda pair: registry.record_edge(*pair), pairs))

        assert len(registry) == 40
        for parent in parents:
            assert len(registry.get(parent).children) == 20
        for child in children:
            assert len(registry.get(child).parents) == 20

    def test_concurrent_ensure_node_returns_one_node(self, registry, units):
        (a,) = units("A")

        with ThreadPoolExecutor(max_workers=8) as pool:
            nodes = list(pool.map(lambda _: registry.ensure_node(a), range(200)))

        assert all(node is nodes[0] for node in nodes)
        assert len(registry) == 1

    def test_render_while_edges_are_recorded(self, registry, units):
        """Walks over live nodes tolerate edges appended mid-walk."""
        (root,) = units("Root")
        leaves = units(" ".join(f"U{i}" for i in range(300)))
        registry.mark_tracked(root)
        errors: list[BaseException] = []
        done = threading.Event()

        def write():
            try:
                for leaf in leaves:
                    registry.record_edge(root, leaf)
            except BaseException as e:
                errors.append(e)
            finally:
                done.set()

        def read():
            try:
                for _ in range(200):
                    for node in registry.roots():
                        node.render()
                        node.to_tree()
            except BaseException as e:
                errors.append(e)

        writer = threading.Thread(target=write)
        reader = threading.Thread(target=read)
        writer.start()
        reader.start()
        writer.join()
        reader.join()

        assert done.is_set()
        assert errors == []
        assert len(registry.get(root).children) == 300
        assert library_tree.render(registry).count("\n") == 301


class TestDefaultRegistry:
    def test_get_registry_returns_shared_instance(self):
        assert get_registry() is get_registry()

    def test_resolve_registry_keeps_empty_registry(self, registry):
        assert len(registry) == 0
        assert resolve_registry(registry) is registry
        assert resolve_registry(None) is get_registry()
