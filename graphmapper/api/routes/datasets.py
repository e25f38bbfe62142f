"""
graphmapper/api/routes/datasets.py

Dataset construction endpoints.

POST /datasets/build
    Apply a mapping configuration to decoded table rows and return the
    resulting entity/relationship graph, the build report (rows skipped by
    reason) and the color assigned to each entity type.

POST /datasets/unique-values
    List the distinct values of one column, to help users author mappings.

Bad rows never fail a build; they are only counted in the report.
"""
from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends

from graphmapper.api.routes import get_builder, offload
from graphmapper.graph.builder import GraphBuilder, extract_unique_values
from graphmapper.models.schemas.dataset import (
    BuildReportModel,
    BuildRequest,
    BuildResponse,
    DatasetModel,
    UniqueValuesRequest,
    UniqueValuesResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter()


@router.post(
    "/build",
    response_model=BuildResponse,
    summary="Build a graph dataset from rows and a mapping",
)
async def build(
    body: BuildRequest,
    builder: GraphBuilder = Depends(get_builder),
) -> BuildResponse:
    mapping = body.mapping.to_domain()
    dataset, report = await offload(
        builder.build_with_report, body.raw_data.to_domain(), mapping
    )

    type_colors = {
        class_def.id: builder.palette.color_for(class_def.id)
        for class_def in mapping.classes
    }

    logger.info(
        "dataset_build_served",
        rows=len(body.raw_data.rows),
        entities=report.entities_created,
        relationships=report.relationships_created,
        skipped_rows=report.skipped_rows,
    )
    return BuildResponse(
        dataset=DatasetModel.from_domain(dataset),
        report=BuildReportModel.from_domain(report),
        type_colors=type_colors,
    )


@router.post(
    "/unique-values",
    response_model=UniqueValuesResponse,
    summary="List the distinct values of a column",
)
async def unique_values(body: UniqueValuesRequest) -> UniqueValuesResponse:
    values = extract_unique_values(body.raw_data.to_domain(), body.column)
    return UniqueValuesResponse(column=body.column, values=values)
