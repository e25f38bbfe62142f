"""
graphmapper/analysis/paths.py

All-simple-paths enumeration between two entity sets.

Strategy
--------
For every (source, target) pair in ``source_ids × target_ids`` with
``source != target``, run a depth-first search with backtracking over the
outgoing edges of a freshly built AdjacencyIndex:

  - A path is recorded as soon as it reaches the target and is never
    extended past it.
  - A path that already holds ``max_length`` nodes without reaching the
    target is pruned.
  - A node already on the current path is never revisited, which keeps
    every path simple and makes cycles harmless.

The search keeps an explicit stack of edge iterators (one per node on the
current path) instead of recursing, so deep graphs are not limited by the
interpreter's recursion limit.  Enumeration is exponential in the worst
case; ``max_length`` and the optional ``max_paths`` budget are the only
bounds.
"""
from __future__ import annotations

from collections.abc import Iterator, Sequence

import structlog

from graphmapper.analysis.results import Path, PathAnalysisResult, PathMetrics
from graphmapper.graph.adjacency import AdjacencyIndex, build_adjacency
from graphmapper.models.graph import Dataset

logger = structlog.get_logger(__name__)

DEFAULT_MAX_LENGTH = 10


def _make_path(nodes: list[str], edges: list[str]) -> Path:
    return Path(
        nodes=list(nodes),
        edges=list(edges),
        metadata={"length": len(nodes), "hops": len(nodes) - 1},
    )


def _enumerate_pair(
    index: AdjacencyIndex,
    source: str,
    target: str,
    max_length: int,
    paths: list[Path],
    max_paths: int | None,
) -> bool:
    """Append every simple path from *source* to *target* to *paths*.

    Returns True when the ``max_paths`` budget was exhausted.
    """
    if max_length <= 1:
        return False

    nodes: list[str] = [source]
    edges: list[str] = []
    visited: set[str] = {source}
    # stack[i] iterates the outgoing edges of nodes[i].
    stack: list[Iterator[tuple[str, str]]] = [iter(index.outgoing(source))]

    while stack:
        step = next(stack[-1], None)

        if step is None:
            # Exhausted this node: backtrack.
            stack.pop()
            if len(nodes) > 1:
                visited.discard(nodes.pop())
                edges.pop()
            continue

        next_node, edge_id = step
        if next_node in visited:
            continue

        if next_node == target:
            nodes.append(next_node)
            edges.append(edge_id)
            paths.append(_make_path(nodes, edges))
            nodes.pop()
            edges.pop()
            if max_paths is not None and len(paths) >= max_paths:
                return True
            continue

        # A non-target node at the length bound would be a dead end.
        if len(nodes) + 1 >= max_length:
            continue

        nodes.append(next_node)
        edges.append(edge_id)
        visited.add(next_node)
        stack.append(iter(index.outgoing(next_node)))

    return False


def find_paths(
    dataset: Dataset,
    source_ids: Sequence[str],
    target_ids: Sequence[str],
    max_length: int = DEFAULT_MAX_LENGTH,
    *,
    max_paths: int | None = None,
) -> PathAnalysisResult:
    """Enumerate all simple paths from *source_ids* to *target_ids*.

    Args:
        dataset:    Graph to search.
        source_ids: Entity ids to start from.
        target_ids: Entity ids to reach.
        max_length: Maximum number of nodes in a path (hops + 1).
        max_paths:  Optional budget; enumeration stops once this many paths
                    have been recorded and the result is marked truncated.

    Returns:
        PathAnalysisResult.  Pairs with identical or unknown endpoints are
        skipped, so empty inputs simply yield the zero result.
    """
    result = PathAnalysisResult()
    if not source_ids or not target_ids:
        logger.info(
            "path_analysis_noop",
            sources=len(source_ids),
            targets=len(target_ids),
        )
        return result

    index = build_adjacency(dataset)

    for source in source_ids:
        for target in target_ids:
            if source == target:
                logger.debug("path_pair_identical", node=source)
                continue

            if source not in index or target not in index:
                logger.warning(
                    "path_pair_skipped",
                    source=source,
                    target=target,
                    source_known=source in index,
                    target_known=target in index,
                )
                result.skipped_pairs += 1
                continue

            before = len(result.paths)
            exhausted = _enumerate_pair(
                index, source, target, max_length, result.paths, max_paths
            )
            logger.debug(
                "path_pair_searched",
                source=source,
                target=target,
                paths=len(result.paths) - before,
            )
            if exhausted:
                result.truncated = True
                logger.warning("path_budget_exhausted", max_paths=max_paths)
                break
        if result.truncated:
            break

    lengths = [len(path.nodes) for path in result.paths]
    result.metrics = PathMetrics(
        total_paths=len(result.paths),
        shortest_path_length=min(lengths) if lengths else 0,
        longest_path_length=max(lengths) if lengths else 0,
    )

    logger.info(
        "path_analysis_complete",
        sources=len(source_ids),
        targets=len(target_ids),
        max_length=max_length,
        total_paths=result.metrics.total_paths,
        skipped_pairs=result.skipped_pairs,
        truncated=result.truncated,
    )
    return result
