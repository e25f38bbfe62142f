"""
graphmapper/graph/filter.py

Derive reduced Datasets from analysis results.

filter_dataset
    Sources and targets → keep only what lies on a simple path between them.
    Sources only        → keep the sources and their downstream impact.
    Neither             → the input Dataset, unchanged.

filter_by_node_types
    Resolve target entity types to ids, then filter_dataset().

extract_reachable_subgraph
    Forward BFS from all sources at once, induced on every node within
    ``max_depth`` hops.

All three are pure: the input Dataset is never modified, and the output
keeps the input's entity and relationship order.
"""
from __future__ import annotations

from collections import deque
from collections.abc import Sequence

import structlog

from graphmapper.analysis.impact import DEFAULT_MAX_DEPTH, analyze_impact
from graphmapper.analysis.paths import find_paths
from graphmapper.graph.adjacency import build_adjacency
from graphmapper.models.graph import Dataset

logger = structlog.get_logger(__name__)


def filter_dataset(
    dataset: Dataset,
    source_ids: Sequence[str],
    target_ids: Sequence[str] = (),
    max_depth: int = DEFAULT_MAX_DEPTH,
    *,
    max_paths: int | None = None,
) -> Dataset:
    """Reduce *dataset* to what connects *source_ids* to *target_ids*.

    With targets, *max_depth* is used as the path-length bound (in nodes)
    for path analysis.  Without targets it is the impact-analysis depth.

    Args:
        dataset:    Dataset to filter.
        source_ids: Entity ids to start from.
        target_ids: Entity ids to reach (optional).
        max_depth:  Traversal bound, see above.
        max_paths:  Optional path budget forwarded to find_paths().

    Returns:
        A new Dataset, or *dataset* itself when no filter applies.
    """
    if not source_ids and not target_ids:
        return dataset

    if source_ids and target_ids:
        path_result = find_paths(
            dataset, source_ids, target_ids, max_depth, max_paths=max_paths
        )
        node_ids: set[str] = set()
        edge_ids: set[str] = set()
        for path in path_result.paths:
            node_ids.update(path.nodes)
            edge_ids.update(path.edges)

        filtered = Dataset(
            entities=tuple(e for e in dataset.entities if e.id in node_ids),
            relationships=tuple(r for r in dataset.relationships if r.id in edge_ids),
        )
        logger.info(
            "dataset_filtered_by_paths",
            paths=path_result.metrics.total_paths,
            entities=len(filtered.entities),
            relationships=len(filtered.relationships),
        )
        return filtered

    if source_ids:
        impact = analyze_impact(dataset, source_ids, max_depth)
        impacted = set(source_ids) | set(impact.direct_impact) | set(impact.indirect_impact)
        filtered = dataset.induced(impacted)
        logger.info(
            "dataset_filtered_by_impact",
            entities=len(filtered.entities),
            relationships=len(filtered.relationships),
        )
        return filtered

    # Targets without sources select nothing to filter on.
    return dataset


def filter_by_node_types(
    dataset: Dataset,
    source_ids: Sequence[str],
    target_types: Sequence[str] = (),
    max_depth: int = DEFAULT_MAX_DEPTH,
    *,
    max_paths: int | None = None,
) -> Dataset:
    """Filter to paths from *source_ids* to any entity of *target_types*.

    Returns *dataset* unchanged when either argument is empty.
    """
    if not source_ids or not target_types:
        return dataset

    wanted = set(target_types)
    target_ids = [entity.id for entity in dataset.entities if entity.type in wanted]
    logger.debug("target_types_resolved", types=sorted(wanted), targets=len(target_ids))

    # No entity of the requested types falls back to the impact filter.
    return filter_dataset(dataset, source_ids, target_ids, max_depth, max_paths=max_paths)


def extract_reachable_subgraph(
    dataset: Dataset,
    source_ids: Sequence[str],
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> Dataset:
    """Return the subgraph reachable from *source_ids* within *max_depth* hops.

    Follows outgoing edges only.  Sources are always kept, even when they
    are not entities of *dataset* (they then simply match nothing).
    """
    if not source_ids:
        return dataset

    index = build_adjacency(dataset)
    reachable: set[str] = set(source_ids)
    queue: deque[tuple[str, int]] = deque((source, 0) for source in dict.fromkeys(source_ids))

    while queue:
        node, depth = queue.popleft()
        if depth >= max_depth:
            continue
        for neighbour, _edge_id in index.outgoing(node):
            if neighbour not in reachable:
                reachable.add(neighbour)
                queue.append((neighbour, depth + 1))

    subgraph = dataset.induced(reachable)
    logger.info(
        "reachable_subgraph_extracted",
        sources=len(source_ids),
        max_depth=max_depth,
        entities=len(subgraph.entities),
        relationships=len(subgraph.relationships),
    )
    return subgraph
