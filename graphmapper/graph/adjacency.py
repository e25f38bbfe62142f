"""
graphmapper/graph/adjacency.py

Directed adjacency index over a Dataset.

The index is derived and ephemeral: path analysis, impact analysis and the
reachable-subgraph filter each call build_adjacency() on the Dataset they
were handed instead of sharing one, so an index can never be used against a
Dataset it was not built from.
"""
from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

import structlog

from graphmapper.models.graph import Dataset

logger = structlog.get_logger(__name__)


@dataclass
class AdjacencyRecord:
    outgoing: list[tuple[str, str]] = field(default_factory=list)   # (target_id, edge_id)
    incoming: list[tuple[str, str]] = field(default_factory=list)   # (source_id, edge_id)


@dataclass
class AdjacencyIndex:
    """Entity id → outgoing/incoming edge lists.

    Every entity has a record, isolated ones included.  Relationships whose
    source or target is not a known entity are left out and their ids kept
    in ``skipped_edges``.
    """

    records: dict[str, AdjacencyRecord] = field(default_factory=dict)
    skipped_edges: list[str] = field(default_factory=list)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self.records

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[str]:
        return iter(self.records)

    def outgoing(self, entity_id: str) -> list[tuple[str, str]]:
        record = self.records.get(entity_id)
        return record.outgoing if record is not None else []

    def incoming(self, entity_id: str) -> list[tuple[str, str]]:
        record = self.records.get(entity_id)
        return record.incoming if record is not None else []

    def fan_out(self, entity_id: str) -> int:
        return len(self.outgoing(entity_id))


def build_adjacency(dataset: Dataset) -> AdjacencyIndex:
    """Build a fresh AdjacencyIndex for *dataset*.

    Runs in O(entities + relationships).  Relationships with an unknown
    endpoint are skipped with a warning; they never abort the build.
    """
    index = AdjacencyIndex(
        records={entity.id: AdjacencyRecord() for entity in dataset.entities}
    )

    for rel in dataset.relationships:
        source = index.records.get(rel.source) if rel.source else None
        target = index.records.get(rel.target) if rel.target else None
        if source is None or target is None:
            logger.warning(
                "adjacency_edge_skipped",
                relationship_id=rel.id,
                source=rel.source,
                target=rel.target,
                source_known=source is not None,
                target_known=target is not None,
            )
            index.skipped_edges.append(rel.id)
            continue

        source.outgoing.append((rel.target, rel.id))
        target.incoming.append((rel.source, rel.id))

    return index
