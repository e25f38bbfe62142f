"""
graphmapper/api/routes/analysis.py

Graph analysis endpoints.

POST /analysis/paths
    Enumerate every simple path from the source ids to the target ids,
    bounded by ``max_length`` nodes and the configured path budget.

POST /analysis/impact
    Direct and indirect downstream impact of the source ids within
    ``max_depth`` hops, with critical (high fan-out) nodes flagged.

Both return a zero result rather than an error when the ids are empty or
unknown to the dataset.
"""
from __future__ import annotations

import structlog
from fastapi import APIRouter

from graphmapper.analysis.impact import analyze_impact
from graphmapper.analysis.paths import find_paths
from graphmapper.api.routes import offload
from graphmapper.config import settings
from graphmapper.models.schemas.analysis import (
    ImpactAnalysisRequest,
    ImpactAnalysisResponse,
    PathAnalysisRequest,
    PathAnalysisResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post(
    "/paths",
    response_model=PathAnalysisResponse,
    summary="Find all simple paths between two node sets",
)
async def paths(body: PathAnalysisRequest) -> PathAnalysisResponse:
    result = await offload(
        find_paths,
        body.dataset.to_domain(),
        body.source_ids,
        body.target_ids,
        body.max_length,
        max_paths=settings.max_paths,
    )
    logger.info(
        "path_analysis_served",
        total_paths=result.metrics.total_paths,
        truncated=result.truncated,
    )
    return PathAnalysisResponse.from_domain(result)


@router.post(
    "/impact",
    response_model=ImpactAnalysisResponse,
    summary="Compute downstream impact of a node set",
)
async def impact(body: ImpactAnalysisRequest) -> ImpactAnalysisResponse:
    result = await offload(
        analyze_impact,
        body.dataset.to_domain(),
        body.source_ids,
        body.max_depth,
        critical_fan_out=settings.critical_fan_out,
    )
    logger.info(
        "impact_analysis_served",
        impacted=result.metrics.total_impacted_nodes,
        critical_paths=result.metrics.critical_paths,
    )
    return ImpactAnalysisResponse.from_domain(result)
