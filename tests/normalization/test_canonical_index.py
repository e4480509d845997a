"""
Canonical Index Tests
=====================

Building and merging canonical graphs from ordered record batches.
"""

import pytest

from kg_engine.contracts import CanonicalGraph, NodeKind
from kg_engine.normalization import build_canonical_graph, merge_canonical_graphs


RECORDS = [
    {"uuid": "n:alice", "name": "Alice", "labels": ["Entity", "Person"]},
    {"uuid": "ep1", "name": "Standup", "type": "episode", "valid_at": "2024-03-01T09:00:00Z"},
    {"source_node_uuid": "alice", "target_node_uuid": "acme", "type": "WORKS_AT", "episodes": ["ep1"]},
    {"uuid": "acme", "name": "Acme", "labels": ["Organization"]},
    {"name": "no id here"},
    {"uuid": "alice", "name": "Alice (again)"},
    {"source": "alice", "target": None, "name": "half edge"},
]


class TestBuildCanonicalGraph:

    @pytest.fixture
    def built(self):
        return build_canonical_graph(RECORDS)

    def test_nodes_in_first_seen_order(self, built):
        graph, _ = built
        assert [n.node_id for n in graph.nodes] == ["alice", "ep1", "acme"]

    def test_first_seen_wins(self, built):
        graph, _ = built
        assert graph.get_node("alice").name == "Alice"

    def test_edges_collected(self, built):
        graph, _ = built
        assert len(graph.edges) == 1
        assert graph.edges[0].relationship_type == "WORKS_AT"

    def test_report_counts(self, built):
        _, report = built
        assert report.processed_count == 7
        assert report.node_count == 3
        assert report.edge_count == 1
        assert report.duplicate_node_count == 1
        # the id-less record and the record with a null target (tried as a node, no id)
        assert report.skipped_count == 2

    def test_kind_views(self, built):
        graph, _ = built
        assert [n.node_id for n in graph.episodes] == ["ep1"]
        assert {n.node_id for n in graph.entities} == {"alice", "acme"}
        assert graph.get_node("ep1").kind is NodeKind.EPISODE

    def test_lookup_helpers(self, built):
        graph, _ = built
        assert graph.has_node("acme")
        assert not graph.has_node("n:acme")
        assert graph.get_node("missing") is None
        assert graph.node_ids == frozenset({"alice", "ep1", "acme"})

    def test_edges_not_filtered_against_nodes(self):
        graph, _ = build_canonical_graph([{"source": "x", "target": "y"}])
        assert graph.node_count == 0
        assert graph.edge_count == 1

    def test_empty_input(self):
        graph, report = build_canonical_graph([])
        assert graph == CanonicalGraph()
        assert report.processed_count == 0

    def test_none_input(self):
        graph, report = build_canonical_graph(None)
        assert graph.node_count == 0
        assert report.to_dict()["processed_count"] == 0


class TestMergeCanonicalGraphs:

    def test_none_handling(self):
        graph, _ = build_canonical_graph([{"uuid": "a"}])
        assert merge_canonical_graphs(None, graph) is graph
        assert merge_canonical_graphs(graph, None) is graph
        assert merge_canonical_graphs(None, None) == CanonicalGraph()

    def test_nodes_dedup_base_wins(self):
        base, _ = build_canonical_graph([{"uuid": "a", "name": "base"}])
        incoming, _ = build_canonical_graph([
            {"uuid": "n:a", "name": "incoming"},
            {"uuid": "b"},
        ])
        merged = merge_canonical_graphs(base, incoming)
        assert [n.node_id for n in merged.nodes] == ["a", "b"]
        assert merged.get_node("a").name == "base"

    def test_edges_dedup_by_endpoints_and_type(self):
        base, _ = build_canonical_graph([
            {"source": "a", "target": "b", "type": "KNOWS"},
        ])
        incoming, _ = build_canonical_graph([
            {"source": "n:a", "target": "n:b", "type": "KNOWS", "fact": "dup"},
            {"source": "a", "target": "b", "type": "LIKES"},
            {"source": "b", "target": "a", "type": "KNOWS"},
        ])
        merged = merge_canonical_graphs(base, incoming)
        assert [e.key for e in merged.edges] == [
            ("a", "b", "KNOWS"),
            ("a", "b", "LIKES"),
            ("b", "a", "KNOWS"),
        ]
        assert merged.edges[0].fact is None

    def test_inputs_untouched(self):
        base, _ = build_canonical_graph([{"uuid": "a"}])
        incoming, _ = build_canonical_graph([{"uuid": "b"}])
        merge_canonical_graphs(base, incoming)
        assert base.node_count == 1
        assert incoming.node_count == 1
