from graphmapper.models.schemas.dataset import (
    BuildReportModel,
    BuildRequest,
    BuildResponse,
    ClassDefinitionModel,
    DatasetModel,
    EntityModel,
    MappingModel,
    RawDataModel,
    RelationshipDefinitionModel,
    RelationshipModel,
    UniqueValuesRequest,
    UniqueValuesResponse,
)
from graphmapper.models.schemas.analysis import (
    ImpactAnalysisRequest,
    ImpactAnalysisResponse,
    PathAnalysisRequest,
    PathAnalysisResponse,
)
from graphmapper.models.schemas.filter import (
    FilterRequest,
    FilterResponse,
    NodeTypeFilterRequest,
    ReachableRequest,
)

__all__ = [
    "BuildReportModel",
    "BuildRequest",
    "BuildResponse",
    "ClassDefinitionModel",
    "DatasetModel",
    "EntityModel",
    "MappingModel",
    "RawDataModel",
    "RelationshipDefinitionModel",
    "RelationshipModel",
    "UniqueValuesRequest",
    "UniqueValuesResponse",
    "ImpactAnalysisRequest",
    "ImpactAnalysisResponse",
    "PathAnalysisRequest",
    "PathAnalysisResponse",
    "FilterRequest",
    "FilterResponse",
    "NodeTypeFilterRequest",
    "ReachableRequest",
]
