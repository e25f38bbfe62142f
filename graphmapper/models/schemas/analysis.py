from typing import Any

from pydantic import BaseModel, Field

from graphmapper.analysis.results import ImpactAnalysisResult, PathAnalysisResult
from graphmapper.config import settings
from graphmapper.models.schemas.dataset import DatasetModel


class PathAnalysisRequest(BaseModel):
    """Request body for path enumeration."""
    dataset: DatasetModel
    source_ids: list[str] = Field(default_factory=list)
    target_ids: list[str] = Field(default_factory=list)
    max_length: int = Field(
        default=settings.default_max_length,
        ge=1,
        le=settings.max_traversal_bound,
        description="Maximum number of nodes per path",
    )


class PathModel(BaseModel):
    nodes: list[str]
    edges: list[str]
    metadata: dict[str, Any] = Field(default_factory=dict)


class PathMetricsModel(BaseModel):
    total_paths: int
    shortest_path_length: int
    longest_path_length: int


class PathAnalysisResponse(BaseModel):
    paths: list[PathModel]
    metrics: PathMetricsModel
    skipped_pairs: int = 0
    truncated: bool = False

    @classmethod
    def from_domain(cls, result: PathAnalysisResult) -> "PathAnalysisResponse":
        return cls(
            paths=[
                PathModel(nodes=p.nodes, edges=p.edges, metadata=p.metadata)
                for p in result.paths
            ],
            metrics=PathMetricsModel(
                total_paths=result.metrics.total_paths,
                shortest_path_length=result.metrics.shortest_path_length,
                longest_path_length=result.metrics.longest_path_length,
            ),
            skipped_pairs=result.skipped_pairs,
            truncated=result.truncated,
        )


class ImpactAnalysisRequest(BaseModel):
    """Request body for impact analysis."""
    dataset: DatasetModel
    source_ids: list[str] = Field(default_factory=list)
    max_depth: int = Field(
        default=settings.default_max_depth,
        ge=1,
        le=settings.max_traversal_bound,
        description="Maximum hops from the sources (direct neighbours = 1)",
    )


class ImpactMetricsModel(BaseModel):
    total_impacted_nodes: int
    max_depth: int = Field(..., description="Hops of the deepest critical node observed")
    critical_paths: int


class ImpactAnalysisResponse(BaseModel):
    direct_impact: list[str]
    indirect_impact: list[str]
    metrics: ImpactMetricsModel
    critical_paths: list[list[str]] = Field(default_factory=list)
    missing_sources: list[str] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, result: ImpactAnalysisResult) -> "ImpactAnalysisResponse":
        return cls(
            direct_impact=result.direct_impact,
            indirect_impact=result.indirect_impact,
            metrics=ImpactMetricsModel(
                total_impacted_nodes=result.metrics.total_impacted_nodes,
                max_depth=result.metrics.max_depth,
                critical_paths=result.metrics.critical_paths,
            ),
            critical_paths=result.critical_paths,
            missing_sources=result.missing_sources,
        )
