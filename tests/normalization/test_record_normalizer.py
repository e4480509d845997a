"""
Record Normalizer Tests
=======================

Alias resolution, kind inference and property flattening for
heterogeneous upstream records.
"""

import pytest
from dataclasses import FrozenInstanceError

from kg_engine.contracts import NodeKind, CanonicalNode, CanonicalEdge
from kg_engine.normalization import (
    NormalizationConfig,
    normalize_node, normalize_edge, resolve_node_kind, build_properties,
    resolve_episode_refs, is_edge_record, normalize_node_id,
)


class TestNodeIdResolution:

    def test_uuid_takes_priority(self):
        node = normalize_node({"uuid": "u1", "id": "i1", "node_uuid": "nu1"})
        assert node.node_id == "u1"

    @pytest.mark.parametrize("key", ["uuid", "id", "node_uuid", "nodeId"])
    def test_each_alias_resolves(self, key):
        node = normalize_node({key: "abc"})
        assert node is not None
        assert node.node_id == "abc"

    def test_prefix_is_stripped(self):
        node = normalize_node({"uuid": "n:abc"})
        assert node.node_id == "abc"

    def test_missing_id_returns_none(self):
        """Unusable record is signalled by None, not an exception."""
        assert normalize_node({"name": "orphan"}) is None

    def test_bare_prefix_returns_none(self):
        assert normalize_node({"uuid": "n:"}) is None

    def test_empty_alias_falls_through_to_next(self):
        node = normalize_node({"uuid": "", "id": "i1"})
        assert node.node_id == "i1"

    def test_non_mapping_returns_none(self):
        assert normalize_node(None) is None
        assert normalize_node(["uuid", "x"]) is None

    def test_numeric_id_is_stringified(self):
        node = normalize_node({"id": 42})
        assert node.node_id == "42"

    def test_custom_prefix(self):
        node = normalize_node({"uuid": "node/x"}, NormalizationConfig(node_id_prefix="node/"))
        assert node.node_id == "x"

    def test_normalize_node_id_handles_none(self):
        assert normalize_node_id(None) == ""
        assert normalize_node_id("n:x") == "x"
        assert normalize_node_id("x") == "x"


class TestNodeNameResolution:

    def test_name_priority_chain(self):
        raw = {"uuid": "u", "label": "L", "title": "T", "summary": "S"}
        assert normalize_node(raw).name == "L"
        raw = {"uuid": "u", "title": "T", "summary": "S"}
        assert normalize_node(raw).name == "T"
        raw = {"uuid": "u", "summary": "S"}
        assert normalize_node(raw).name == "S"

    def test_name_falls_back_to_id(self):
        assert normalize_node({"uuid": "n:u1"}).name == "u1"

    def test_passthrough_fields(self):
        node = normalize_node({
            "uuid": "e1",
            "summary": "a summary",
            "content": "body",
            "valid_at": "2024-01-15T10:00:00Z",
        })
        assert node.summary == "a summary"
        assert node.content == "body"
        assert node.valid_at == "2024-01-15T10:00:00Z"


class TestKindResolution:

    def test_type_hint_episode(self):
        assert resolve_node_kind("Episode", []) is NodeKind.EPISODE
        assert resolve_node_kind("EpisodicNode", []) is NodeKind.ENTITY

    def test_type_hint_substring(self):
        assert resolve_node_kind("episode_node", []) is NodeKind.EPISODE
        assert resolve_node_kind("EntityNode", []) is NodeKind.ENTITY

    def test_episode_substring_wins_over_entity(self):
        assert resolve_node_kind("entity-episode", []) is NodeKind.EPISODE

    def test_type_hint_beats_labels(self):
        assert resolve_node_kind("entity", ["Episode"]) is NodeKind.ENTITY

    def test_label_fallback_is_case_insensitive(self):
        assert resolve_node_kind(None, ["EPISODE"]) is NodeKind.EPISODE
        assert resolve_node_kind(None, ["episode"]) is NodeKind.EPISODE

    def test_label_must_match_exactly(self):
        assert resolve_node_kind(None, ["episodes"]) is NodeKind.ENTITY

    def test_default_is_entity(self):
        assert resolve_node_kind(None, []) is NodeKind.ENTITY
        assert resolve_node_kind(17, ["Person"]) is NodeKind.ENTITY

    def test_differently_cased_inputs_classify_identically(self):
        assert resolve_node_kind("EPISODE", []) is resolve_node_kind("episode", [])
        assert resolve_node_kind(None, ["Episode"]) is resolve_node_kind(None, ["episode"])

    def test_node_reads_type_aliases(self):
        assert normalize_node({"uuid": "a", "node_type": "episode"}).kind is NodeKind.EPISODE
        assert normalize_node({"uuid": "a", "entity_type": "episode"}).kind is NodeKind.EPISODE
        assert normalize_node({"uuid": "a", "labels": ["Episode"]}).kind is NodeKind.EPISODE


class TestLabels:

    def test_non_string_labels_dropped(self):
        node = normalize_node({"uuid": "a", "labels": ["Person", 3, None, "User"]})
        assert node.labels == ("Person", "User")

    def test_non_list_labels_ignored(self):
        node = normalize_node({"uuid": "a", "labels": "Person"})
        assert node.labels == ()

    def test_label_set_is_lowercased(self):
        node = normalize_node({"uuid": "a", "labels": ["Person", "USER"]})
        assert node.label_set == frozenset({"person", "user"})


class TestPropertiesMerge:

    def test_nested_properties_flattened(self):
        merged = build_properties({"uuid": "a", "properties": {"role": "admin"}})
        assert merged["role"] == "admin"
        assert merged["uuid"] == "a"

    def test_nested_values_win_on_conflict(self):
        merged = build_properties({"name": "top", "properties": {"name": "nested"}})
        assert merged["name"] == "nested"

    def test_non_mapping_properties_not_merged(self):
        merged = build_properties({"name": "top", "properties": ["x"]})
        assert merged["properties"] == ["x"]
        assert merged["name"] == "top"

    def test_input_is_not_mutated(self):
        raw = {"name": "top", "properties": {"name": "nested"}}
        build_properties(raw)
        assert raw == {"name": "top", "properties": {"name": "nested"}}


class TestEdgeNormalization:

    @pytest.mark.parametrize("source_key,target_key", [
        ("source", "target"),
        ("source_uuid", "target_uuid"),
        ("source_node_uuid", "target_node_uuid"),
        ("from_uuid", "to_uuid"),
        ("from", "to"),
    ])
    def test_endpoint_aliases(self, source_key, target_key):
        edge = normalize_edge({source_key: "n:a", target_key: "b"})
        assert edge.source_id == "a"
        assert edge.target_id == "b"

    def test_missing_endpoint_returns_none(self):
        assert normalize_edge({"source": "a"}) is None
        assert normalize_edge({"target": "b"}) is None
        assert normalize_edge({"source": "", "target": "b"}) is None

    def test_relationship_type_chain(self):
        assert normalize_edge({"source": "a", "target": "b", "relationship": "KNOWS"}).relationship_type == "KNOWS"
        assert normalize_edge({"source": "a", "target": "b", "relationship_type": "WORKS_AT"}).relationship_type == "WORKS_AT"
        assert normalize_edge({"source": "a", "target": "b", "label": "LIKES"}).relationship_type == "LIKES"
        assert normalize_edge({"source": "a", "target": "b", "type": "T", "label": "L"}).relationship_type == "T"

    def test_relationship_type_default(self):
        edge = normalize_edge({"source": "a", "target": "b"})
        assert edge.relationship_type == "related_to"

    def test_custom_default_relationship(self):
        config = NormalizationConfig(default_relationship_type="linked")
        assert normalize_edge({"source": "a", "target": "b"}, config).relationship_type == "linked"

    def test_fact_and_name_carried(self):
        edge = normalize_edge({"source": "a", "target": "b", "fact": "A knows B", "name": "KNOWS"})
        assert edge.fact == "A knows B"
        assert edge.name == "KNOWS"

    def test_returns_canonical_edge(self):
        assert isinstance(normalize_edge({"source": "a", "target": "b"}), CanonicalEdge)


class TestEpisodeRefs:

    def test_top_level_episodes(self):
        assert resolve_episode_refs({"episodes": ["n:e1", "e2"]}) == ("e1", "e2")

    def test_nested_episodes(self):
        assert resolve_episode_refs({"properties": {"episodes": ["e1"]}}) == ("e1",)

    def test_absent_or_not_list(self):
        assert resolve_episode_refs({}) is None
        assert resolve_episode_refs({"episodes": "e1"}) is None

    def test_empty_list_is_empty_tuple(self):
        assert resolve_episode_refs({"episodes": []}) == ()

    def test_edge_carries_refs(self):
        edge = normalize_edge({"source": "a", "target": "b", "episodes": ["ep1"]})
        assert edge.episode_refs == ("ep1",)


class TestRecordShape:

    def test_edge_shape_requires_both_sides(self):
        assert is_edge_record({"source_node_uuid": "a", "target_node_uuid": "b"})
        assert not is_edge_record({"source": "a"})
        assert not is_edge_record({"uuid": "a", "source": None, "target": "b"})
        assert not is_edge_record("not a record")

    def test_node_is_frozen(self):
        node = normalize_node({"uuid": "a"})
        assert isinstance(node, CanonicalNode)
        with pytest.raises(FrozenInstanceError):
            node.node_id = "b"
