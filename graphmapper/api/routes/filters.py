"""
graphmapper/api/routes/filters.py

Dataset filtering endpoints.  Each returns a new, reduced dataset that can
be fed straight back into the analysis endpoints.

POST /filter            by source ids and (optional) target ids
POST /filter/types      by source ids and target entity types
POST /filter/reachable  everything reachable from the source ids
"""
from __future__ import annotations

import structlog
from fastapi import APIRouter

from graphmapper.api.routes import offload
from graphmapper.config import settings
from graphmapper.graph.filter import (
    extract_reachable_subgraph,
    filter_by_node_types,
    filter_dataset,
)
from graphmapper.models.schemas.dataset import DatasetModel
from graphmapper.models.schemas.filter import (
    FilterRequest,
    FilterResponse,
    NodeTypeFilterRequest,
    ReachableRequest,
)

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post("", response_model=FilterResponse, summary="Filter by sources and targets")
async def filter_by_ids(body: FilterRequest) -> FilterResponse:
    filtered = await offload(
        filter_dataset,
        body.dataset.to_domain(),
        body.source_ids,
        body.target_ids,
        body.max_depth,
        max_paths=settings.max_paths,
    )
    logger.info("filter_served", mode="ids", entities=len(filtered.entities))
    return FilterResponse(dataset=DatasetModel.from_domain(filtered))


@router.post("/types", response_model=FilterResponse, summary="Filter by target entity types")
async def filter_by_types(body: NodeTypeFilterRequest) -> FilterResponse:
    filtered = await offload(
        filter_by_node_types,
        body.dataset.to_domain(),
        body.source_ids,
        body.target_types,
        body.max_depth,
        max_paths=settings.max_paths,
    )
    logger.info("filter_served", mode="types", entities=len(filtered.entities))
    return FilterResponse(dataset=DatasetModel.from_domain(filtered))


@router.post("/reachable", response_model=FilterResponse, summary="Extract the reachable subgraph")
async def reachable(body: ReachableRequest) -> FilterResponse:
    filtered = await offload(
        extract_reachable_subgraph,
        body.dataset.to_domain(),
        body.source_ids,
        body.max_depth,
    )
    logger.info("filter_served", mode="reachable", entities=len(filtered.entities))
    return FilterResponse(dataset=DatasetModel.from_domain(filtered))
