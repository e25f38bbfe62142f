from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, Field

from graphmapper.graph.builder import BuildReport, coerce_value
from graphmapper.models.graph import (
    ClassDefinition,
    Dataset,
    Entity,
    MappingConfiguration,
    RawData,
    Relationship,
    RelationshipDefinition,
)


def _check_id(value: str) -> str:
    if coerce_value(value) is None:
        raise ValueError(f"{value!r} is not a usable id")
    return value


# Entity and relationship ids posted by callers follow the same rules as built ones.
UsableId = Annotated[str, Field(min_length=1), AfterValidator(_check_id)]


class EntityModel(BaseModel):
    """A typed graph node."""
    id: UsableId
    type: str
    label: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class RelationshipModel(BaseModel):
    """A typed directed edge between two entity ids."""
    id: UsableId
    source: str
    target: str
    type: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class DatasetModel(BaseModel):
    """Entities and relationships of one graph snapshot."""
    entities: list[EntityModel] = Field(default_factory=list)
    relationships: list[RelationshipModel] = Field(default_factory=list)

    def to_domain(self) -> Dataset:
        return Dataset.of(
            [Entity(**e.model_dump()) for e in self.entities],
            [Relationship(**r.model_dump()) for r in self.relationships],
        )

    @classmethod
    def from_domain(cls, dataset: Dataset) -> "DatasetModel":
        return cls(
            entities=[
                EntityModel(id=e.id, type=e.type, label=e.label, metadata=e.metadata)
                for e in dataset.entities
            ],
            relationships=[
                RelationshipModel(
                    id=r.id, source=r.source, target=r.target, type=r.type, metadata=r.metadata
                )
                for r in dataset.relationships
            ],
        )


class RawDataModel(BaseModel):
    """Decoded table rows as produced by the upstream file parser."""
    columns: list[str] = Field(default_factory=list)
    rows: list[dict[str, Any]] = Field(default_factory=list)

    def to_domain(self) -> RawData:
        return RawData(columns=list(self.columns), rows=list(self.rows))


class ClassDefinitionModel(BaseModel):
    id: str = Field(..., min_length=1, description="Class id; becomes the entity type and id prefix")
    name: str
    source_column: str = Field(..., description="Column holding the entity id")
    label_column: str = Field(..., description="Column holding the entity label")
    metadata_columns: list[str] = Field(default_factory=list)
    color: str | None = None
    icon: str | None = None


class RelationshipDefinitionModel(BaseModel):
    id: UsableId
    name: str
    source_class: str
    target_class: str
    source_column: str
    target_column: str
    metadata_columns: list[str] = Field(default_factory=list)


class MappingModel(BaseModel):
    """User-authored mapping from columns to classes and relationships."""
    classes: list[ClassDefinitionModel] = Field(default_factory=list)
    relationships: list[RelationshipDefinitionModel] = Field(default_factory=list)

    def to_domain(self) -> MappingConfiguration:
        return MappingConfiguration(
            classes=[ClassDefinition(**c.model_dump()) for c in self.classes],
            relationships=[RelationshipDefinition(**r.model_dump()) for r in self.relationships],
        )


class BuildRequest(BaseModel):
    """Request body for building a dataset."""
    raw_data: RawDataModel
    mapping: MappingModel


class BuildReportModel(BaseModel):
    entities_created: int
    relationships_created: int
    skipped_rows: int
    skipped: dict[str, int] = Field(default_factory=dict, description="Skipped rows by reason")

    @classmethod
    def from_domain(cls, report: BuildReport) -> "BuildReportModel":
        return cls(
            entities_created=report.entities_created,
            relationships_created=report.relationships_created,
            skipped_rows=report.skipped_rows,
            skipped=dict(report.skipped),
        )


class BuildResponse(BaseModel):
    """A freshly built dataset with its build diagnostics."""
    dataset: DatasetModel
    report: BuildReportModel
    type_colors: dict[str, str] = Field(default_factory=dict, description="Entity type → color")


class UniqueValuesRequest(BaseModel):
    raw_data: RawDataModel
    column: str = Field(..., min_length=1)


class UniqueValuesResponse(BaseModel):
    column: str
    values: list[str]
