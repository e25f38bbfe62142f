"""
graphmapper/analysis/impact.py

Downstream impact (bounded reachability) analysis.

Depth convention
----------------
Depth counts hops from the source set.  Direct neighbours of the sources are
depth 1; layers are expanded only while the current depth is below
``max_depth``.  So ``max_depth=1`` yields direct impact only, and every
impacted node is at most ``max_depth`` hops from some source.

Steps
-----
1. Mark every source visited.
2. Merge the direct neighbourhoods of all sources, in source order.  A
   neighbour shared by two sources is attributed to the first one.
3. Expand layer by layer (iterative BFS) into indirect impact.
4. Any source or reached node with more than ``critical_fan_out`` outgoing
   edges is critical; its BFS parent chain from a source is recorded.

``metrics.max_depth`` reports the hop count of the longest recorded critical
path (0 when none), i.e. the deepest critical node observed, not the bound
that was requested.
"""
from __future__ import annotations

from collections.abc import Sequence

import structlog

from graphmapper.analysis.results import ImpactAnalysisResult, ImpactMetrics
from graphmapper.graph.adjacency import AdjacencyIndex, build_adjacency
from graphmapper.models.graph import Dataset

logger = structlog.get_logger(__name__)

DEFAULT_MAX_DEPTH = 5
CRITICAL_FAN_OUT = 5


def _trace(parents: dict[str, str], node: str) -> list[str]:
    """Follow BFS parent links from *node* back to its source."""
    chain = [node]
    while chain[-1] in parents:
        chain.append(parents[chain[-1]])
    chain.reverse()
    return chain


def _check_critical(
    index: AdjacencyIndex,
    node: str,
    parents: dict[str, str],
    critical_fan_out: int,
    critical_paths: list[list[str]],
) -> None:
    if index.fan_out(node) > critical_fan_out:
        critical_paths.append(_trace(parents, node))


def analyze_impact(
    dataset: Dataset,
    source_ids: Sequence[str],
    max_depth: int = DEFAULT_MAX_DEPTH,
    *,
    critical_fan_out: int = CRITICAL_FAN_OUT,
) -> ImpactAnalysisResult:
    """Compute direct and indirect downstream impact of *source_ids*.

    Args:
        dataset:          Graph to analyse.
        source_ids:       Entities whose impact is measured.
        max_depth:        Maximum hops from the sources (direct layer = 1).
        critical_fan_out: Fan-out above which a node is flagged critical.

    Returns:
        ImpactAnalysisResult; the zero result when *source_ids* is empty.
    """
    result = ImpactAnalysisResult()
    if not source_ids:
        logger.info("impact_analysis_noop")
        return result

    sources = list(dict.fromkeys(source_ids))
    index = build_adjacency(dataset)
    visited: set[str] = set(sources)
    parents: dict[str, str] = {}

    # ── Direct layer ──────────────────────────────────────────────────────
    for source in sources:
        if source not in index:
            logger.warning("impact_source_missing", source=source)
            result.missing_sources.append(source)
            continue

        _check_critical(index, source, parents, critical_fan_out, result.critical_paths)

        for neighbour, _edge_id in index.outgoing(source):
            if neighbour not in visited:
                visited.add(neighbour)
                parents[neighbour] = source
                result.direct_impact.append(neighbour)

    # ── Indirect layers ───────────────────────────────────────────────────
    layer = list(result.direct_impact)
    depth = 1
    while layer:
        next_layer: list[str] = []
        for node in layer:
            _check_critical(index, node, parents, critical_fan_out, result.critical_paths)

            if depth >= max_depth:
                continue

            for neighbour, _edge_id in index.outgoing(node):
                if neighbour not in visited:
                    visited.add(neighbour)
                    parents[neighbour] = node
                    result.indirect_impact.append(neighbour)
                    next_layer.append(neighbour)

        layer = next_layer
        depth += 1

    result.metrics = ImpactMetrics(
        total_impacted_nodes=len(result.direct_impact) + len(result.indirect_impact),
        max_depth=max((len(p) - 1 for p in result.critical_paths), default=0),
        critical_paths=len(result.critical_paths),
    )

    logger.info(
        "impact_analysis_complete",
        sources=len(source_ids),
        max_depth=max_depth,
        direct=len(result.direct_impact),
        indirect=len(result.indirect_impact),
        critical_paths=result.metrics.critical_paths,
        missing_sources=len(result.missing_sources),
    )
    return result
