"""
graphmapper/models/graph.py

In-memory graph data model shared by the builder, analysis and filter layers.

Dataset
-------
  An immutable snapshot of entities and relationships, both ordered and
  unique by id.  Builders and filters always produce a new Dataset; nothing
  in the core mutates one in place.

Mapping
-------
  ClassDefinition / RelationshipDefinition describe how the columns of a
  RawData table become typed entities and relationships.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class Entity:
    """A typed node in the graph, built from one data row."""

    id: str                 # "<class_id>:<source value>", globally unique
    type: str               # class tag (the ClassDefinition id)
    label: str
    metadata: dict[str, Any] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class Relationship:
    """A typed directed edge between two entities."""

    id: str
    source: str
    target: str
    type: str
    metadata: dict[str, Any] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class Dataset:
    entities: tuple[Entity, ...] = ()
    relationships: tuple[Relationship, ...] = ()

    @classmethod
    def of(
        cls,
        entities: list[Entity] | tuple[Entity, ...],
        relationships: list[Relationship] | tuple[Relationship, ...] = (),
    ) -> Dataset:
        return cls(entities=tuple(entities), relationships=tuple(relationships))

    def entity_ids(self) -> set[str]:
        return {entity.id for entity in self.entities}

    def relationship_ids(self) -> set[str]:
        return {rel.id for rel in self.relationships}

    def induced(self, node_ids: set[str]) -> Dataset:
        """Return the subgraph induced on *node_ids*.

        Keeps every entity in *node_ids* and every relationship whose source
        and target both survive, preserving the original order.
        """
        return Dataset(
            entities=tuple(e for e in self.entities if e.id in node_ids),
            relationships=tuple(
                r for r in self.relationships
                if r.source in node_ids and r.target in node_ids
            ),
        )


@dataclass
class ClassDefinition:
    """How one group of rows becomes entities of one type."""

    id: str
    name: str
    source_column: str      # column holding the entity id
    label_column: str       # column holding the display label
    metadata_columns: list[str] = field(default_factory=list)
    color: str | None = None
    icon: str | None = None


@dataclass
class RelationshipDefinition:
    """How one row maps to zero or one relationship."""

    id: str
    name: str
    source_class: str
    target_class: str
    source_column: str
    target_column: str
    metadata_columns: list[str] = field(default_factory=list)


@dataclass
class MappingConfiguration:
    classes: list[ClassDefinition] = field(default_factory=list)
    relationships: list[RelationshipDefinition] = field(default_factory=list)


@dataclass
class RawData:
    """Decoded tabular input handed over by the file parser."""

    columns: list[str] = field(default_factory=list)
    rows: list[dict[str, Any]] = field(default_factory=list)
