"""
graphmapper/analysis/results.py

Result types returned by the graph analyses.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Path:
    """One simple path; ``len(edges) == len(nodes) - 1``."""

    nodes: list[str]
    edges: list[str]
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass
class PathMetrics:
    total_paths: int = 0
    shortest_path_length: int = 0   # in nodes
    longest_path_length: int = 0    # in nodes


@dataclass
class PathAnalysisResult:
    """Outcome of find_paths().

    Attributes:
        paths:         Every simple path found, in discovery order.
        metrics:       Path count and min/max node counts (0 when empty).
        skipped_pairs: (source, target) pairs not searched because an
                       endpoint is not in the graph.
        truncated:     True when enumeration stopped at the path budget.
    """

    paths: list[Path] = field(default_factory=list)
    metrics: PathMetrics = field(default_factory=PathMetrics)
    skipped_pairs: int = 0
    truncated: bool = False


@dataclass
class ImpactMetrics:
    total_impacted_nodes: int = 0
    # Hops of the longest recorded critical path, not the requested bound.
    max_depth: int = 0
    critical_paths: int = 0


@dataclass
class ImpactAnalysisResult:
    """Outcome of analyze_impact().

    Attributes:
        direct_impact:   Entities one hop downstream of the sources.
        indirect_impact: Entities further downstream, within the depth bound.
                         Disjoint from direct_impact and the sources.
        metrics:         Totals; see ImpactMetrics.
        critical_paths:  Source-to-node id chains ending at each node whose
                         fan-out exceeds the critical threshold.
        missing_sources: Requested sources that are not in the graph.
    """

    direct_impact: list[str] = field(default_factory=list)
    indirect_impact: list[str] = field(default_factory=list)
    metrics: ImpactMetrics = field(default_factory=ImpactMetrics)
    critical_paths: list[list[str]] = field(default_factory=list)
    missing_sources: list[str] = field(default_factory=list)
