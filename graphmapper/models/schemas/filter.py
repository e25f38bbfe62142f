from pydantic import BaseModel, Field

from graphmapper.config import settings
from graphmapper.models.schemas.dataset import DatasetModel


def _max_depth_field():
    return Field(
        default=settings.default_max_depth,
        ge=1,
        le=settings.max_traversal_bound,
        description="Traversal bound (path length in nodes when targets are given, hops otherwise)",
    )


class FilterRequest(BaseModel):
    """Filter by explicit source and target ids."""
    dataset: DatasetModel
    source_ids: list[str] = Field(default_factory=list)
    target_ids: list[str] = Field(default_factory=list)
    max_depth: int = _max_depth_field()


class NodeTypeFilterRequest(BaseModel):
    """Filter by source ids and target entity types."""
    dataset: DatasetModel
    source_ids: list[str] = Field(default_factory=list)
    target_types: list[str] = Field(default_factory=list)
    max_depth: int = _max_depth_field()


class ReachableRequest(BaseModel):
    """Extract the subgraph reachable from the sources."""
    dataset: DatasetModel
    source_ids: list[str] = Field(default_factory=list)
    max_depth: int = _max_depth_field()


class FilterResponse(BaseModel):
    dataset: DatasetModel
