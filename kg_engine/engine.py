"""
Engine Orchestration Module

Unified interface that runs the whole pipeline over one batch of raw
records while keeping every layer independent.

DESIGN PRINCIPLES:
==================
1. Layers communicate ONLY through contracts
2. The engine holds its immutable configuration and nothing else
3. Every run builds fresh outputs; nothing carries over between runs
4. Re-running on identical input gives structurally identical output,
   except synthetic edge ids and placeholder coordinates
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Union

import networkx as nx

from .analytics import compute_graph_statistics
from .config import EngineConfig
from .contracts.graph import CanonicalGraph, GraphElement
from .contracts.stats import GraphStatistics
from .core import build_graph_elements
from .normalization import NormalizationReport, build_canonical_graph
from .observability import get_logger
from .visualization import NodeColorConfig, build_visualization_graph


logger = get_logger(__name__)


@dataclass(frozen=True)
class EngineResult:
    """Everything one pipeline run produces."""
    graph: CanonicalGraph
    elements: tuple
    visualization: nx.MultiDiGraph
    statistics: GraphStatistics
    report: NormalizationReport

    @property
    def dropped_edge_count(self) -> int:
        return self.visualization.graph.get("dropped_edge_count", 0)


class KnowledgeGraphEngine:
    """
    Knowledge graph canonicalization and visualization engine.

    LAYER FLOW:
    ===========
    1. Normalization: raw records -> CanonicalGraph
    2. Core: CanonicalGraph -> GraphElements (+ synthetic MENTIONS)
    3. Visualization: GraphElements -> renderable multigraph
    4. Analytics: CanonicalGraph -> GraphStatistics
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self._config = config or EngineConfig()

    @property
    def config(self) -> EngineConfig:
        return self._config

    def normalize(self, records: Iterable[Any]) -> CanonicalGraph:
        graph, _ = build_canonical_graph(records, self._config.normalization)
        return graph

    def build_elements(self, graph: CanonicalGraph) -> List[GraphElement]:
        return build_graph_elements(graph, self._config.include_episodic_edges)

    def visualize(
        self,
        elements: Iterable[GraphElement],
        node_colors: Union[NodeColorConfig, Mapping[str, Any], None] = None
    ) -> nx.MultiDiGraph:
        return build_visualization_graph(
            elements,
            node_colors if node_colors is not None else self._config.node_colors,
            self._config.visualization,
        )

    def statistics(
        self,
        graph: CanonicalGraph,
        hub_limit: Optional[int] = None
    ) -> GraphStatistics:
        return compute_graph_statistics(graph, hub_limit, self._config.analytics)

    def run(
        self,
        records: Iterable[Any],
        node_colors: Union[NodeColorConfig, Mapping[str, Any], None] = None,
        hub_limit: Optional[int] = None
    ) -> EngineResult:
        """
        Run the full pipeline over one batch of raw records.

        Unusable records are skipped and counted, never raised.
        """
        graph, report = build_canonical_graph(records, self._config.normalization)
        if report.skipped_count:
            logger.debug("Skipped %d unusable record(s)", report.skipped_count)

        elements = self.build_elements(graph)
        visualization = self.visualize(elements, node_colors)
        statistics = self.statistics(graph, hub_limit)

        result = EngineResult(
            graph=graph,
            elements=tuple(elements),
            visualization=visualization,
            statistics=statistics,
            report=report,
        )
        logger.info(
            "Processed %d record(s): %d node(s), %d edge(s), %d skipped, "
            "%d rendered edge(s)",
            report.processed_count, report.node_count, report.edge_count,
            report.skipped_count, visualization.number_of_edges(),
        )
        return result
