"""
graphmapper/graph/builder.py

Converts RawData rows plus a MappingConfiguration into a Dataset.

Entities
--------
  For every ClassDefinition (mapping order) and every row (input order) the
  value of ``source_column`` becomes an entity id ``<class_id>:<value>``.
  Rows with a missing / empty / "undefined" / "null" id are skipped, and an
  id seen earlier in the same build is never emitted twice (first row wins).

Relationships
-------------
  For every RelationshipDefinition and every row, the source and target
  column values are resolved against the entities built above.  Rows whose
  endpoints are missing, were never built, or point at the same entity are
  skipped.  Relationship ids are ``<rel_id>:<source>-<target>``; the first
  occurrence wins.

Nothing here raises on bad data.  Every skipped row is tallied by reason in
the BuildReport instead.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any

import structlog

from graphmapper.graph.palette import ColorPalette
from graphmapper.models.graph import (
    Dataset,
    Entity,
    MappingConfiguration,
    RawData,
    Relationship,
)

logger = structlog.get_logger(__name__)

# String forms that mean "no value" once a cell is stringified.
_INVALID_IDS: frozenset[str] = frozenset({"", "undefined", "null"})


@dataclass
class BuildReport:
    """Outcome counters for one build.

    Attributes:
        entities_created:      Number of entities emitted.
        relationships_created: Number of relationships emitted.
        skipped:               Tally of skipped rows keyed by reason:
                               ``missing_id``, ``duplicate_entity``,
                               ``missing_endpoint``, ``unknown_entity``,
                               ``self_loop``, ``duplicate_relationship``.
    """

    entities_created: int = 0
    relationships_created: int = 0
    skipped: Counter[str] = field(default_factory=Counter)

    @property
    def skipped_rows(self) -> int:
        return sum(self.skipped.values())


def stringify(value: Any) -> str | None:
    """Render a cell the way it appears in entity ids.

    Integral floats lose their decimal part and booleans render lowercase so
    that ``1.0`` and ``1`` (or ``True`` and ``"true"``) address the same
    entity.  Text is kept as-is, surrounding whitespace included.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def coerce_value(value: Any) -> str | None:
    """Stringify a cell for identity comparisons.

    Returns None for cells that cannot name an entity.
    """
    text = stringify(value)
    if text in _INVALID_IDS:
        return None
    return text


def _metadata(row: dict[str, Any], columns: list[str]) -> dict[str, Any]:
    return {column: row[column] for column in columns if column in row}


class GraphBuilder:
    """Builds Datasets under a user-defined mapping.

    The builder owns a ColorPalette; class colors from the mapping are
    registered in it so repeated builds with the same builder agree on
    type colors while separate builders stay independent.
    """

    def __init__(self, palette: ColorPalette | None = None) -> None:
        self.palette = palette if palette is not None else ColorPalette()

    def build(self, raw_data: RawData, mapping: MappingConfiguration) -> Dataset:
        dataset, _report = self.build_with_report(raw_data, mapping)
        return dataset

    def build_with_report(
        self,
        raw_data: RawData,
        mapping: MappingConfiguration,
    ) -> tuple[Dataset, BuildReport]:
        """Build a Dataset and return it with its BuildReport.

        Args:
            raw_data: Decoded rows; values may be any scalar.
            mapping:  Class and relationship definitions.

        Returns:
            ``(dataset, report)``.
        """
        report = BuildReport()
        entities: list[Entity] = []
        relationships: list[Relationship] = []
        emitted: set[str] = set()

        # ── Entities ──────────────────────────────────────────────────────
        for class_def in mapping.classes:
            self.palette.register(class_def.id, class_def.color)

            for row in raw_data.rows:
                source_value = coerce_value(row.get(class_def.source_column))
                if source_value is None:
                    report.skipped["missing_id"] += 1
                    continue

                full_id = f"{class_def.id}:{source_value}"
                if full_id in emitted:
                    report.skipped["duplicate_entity"] += 1
                    continue

                label = stringify(row.get(class_def.label_column))
                entities.append(
                    Entity(
                        id=full_id,
                        type=class_def.id,
                        label=label or source_value,
                        metadata=_metadata(row, class_def.metadata_columns),
                    )
                )
                emitted.add(full_id)

        # ── Relationships ─────────────────────────────────────────────────
        created_rel_ids: set[str] = set()

        for rel_def in mapping.relationships:
            created_for_def = 0

            for index, row in enumerate(raw_data.rows):
                source_value = coerce_value(row.get(rel_def.source_column))
                target_value = coerce_value(row.get(rel_def.target_column))
                if source_value is None or target_value is None:
                    report.skipped["missing_endpoint"] += 1
                    continue

                source_id = f"{rel_def.source_class}:{source_value}"
                target_id = f"{rel_def.target_class}:{target_value}"

                if source_id not in emitted or target_id not in emitted:
                    report.skipped["unknown_entity"] += 1
                    logger.debug(
                        "relationship_endpoint_unknown",
                        relationship=rel_def.id,
                        source=source_id,
                        target=target_id,
                        row=index,
                    )
                    continue

                if source_id == target_id:
                    report.skipped["self_loop"] += 1
                    continue

                rel_id = f"{rel_def.id}:{source_value}-{target_value}"
                if rel_id in created_rel_ids:
                    report.skipped["duplicate_relationship"] += 1
                    continue

                relationships.append(
                    Relationship(
                        id=rel_id,
                        source=source_id,
                        target=target_id,
                        type=rel_def.id,
                        metadata=_metadata(row, rel_def.metadata_columns),
                    )
                )
                created_rel_ids.add(rel_id)
                created_for_def += 1

            logger.debug(
                "relationships_built",
                relationship=rel_def.id,
                created=created_for_def,
            )

        report.entities_created = len(entities)
        report.relationships_created = len(relationships)

        logger.info(
            "dataset_built",
            entities=report.entities_created,
            relationships=report.relationships_created,
            skipped_rows=report.skipped_rows,
        )
        return Dataset.of(entities, relationships), report


def build_dataset(
    raw_data: RawData,
    mapping: MappingConfiguration,
    *,
    palette: ColorPalette | None = None,
) -> Dataset:
    """Build a Dataset with a fresh (or the given) palette."""
    return GraphBuilder(palette).build(raw_data, mapping)


def extract_unique_values(raw_data: RawData, column: str) -> list[str]:
    """Return the distinct non-null values of *column* in first-seen order.

    Values are rendered with :func:`stringify`, so each one matches the id
    suffix an entity built from that column would carry.
    """
    seen: dict[str, None] = {}
    for row in raw_data.rows:
        value = stringify(row.get(column))
        if value is None:
            continue
        seen.setdefault(value, None)
    return list(seen)
