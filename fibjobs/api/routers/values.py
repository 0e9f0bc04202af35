"""
API Router for Fibonacci jobs ("values")

Responsibility:
    HTTP interface for submitting jobs and reading their state.

Architecture Notes:
    - Part of API Layer (Presentation)
    - Thin wrappers around Application Layer handlers (injected via Depends)
    - Sync endpoints: FastAPI runs each request in its own threadpool worker,
      so concurrent submissions really run in parallel against the stores
    - Error mapping is global (see fibjobs.api.main exception handlers)

Contains:
    - POST /values          - submit a job
    - GET  /values/all      - every accepted submission (Durable Log)
    - GET  /values/current  - current state snapshot (Fast State Store)
"""

import logging
from typing import Dict, List

from fastapi import APIRouter, Depends, status

from fibjobs.api.dependencies import (
    get_current_values_handler,
    get_list_jobs_handler,
    get_submit_job_handler,
)
from fibjobs.api.schemas.common import ErrorResponse
from fibjobs.api.schemas.values import (
    SubmitValueRequest,
    SubmitValueResponse,
    ValueRecord,
)
from fibjobs.application.commands.submit_job import SubmitJobCommand, SubmitJobHandler
from fibjobs.application.queries.current_values import CurrentValuesQueryHandler
from fibjobs.application.queries.list_jobs import ListJobsQueryHandler

# Configure logger
logger = logging.getLogger(__name__)


router = APIRouter(
    prefix="/values",
    tags=["values"],
    responses={
        500: {"model": ErrorResponse, "description": "Internal Server Error"},
    },
)


@router.get(
    "/all",
    response_model=List[ValueRecord],
    summary="List accepted jobs",
    description="Every accepted submission, duplicates included, in no particular order.",
)
def list_all_values(
    handler: ListJobsQueryHandler = Depends(get_list_jobs_handler),
) -> List[ValueRecord]:
    logger.info("all handler")
    return [ValueRecord(number=job.number) for job in handler.handle()]


@router.get(
    "/current",
    response_model=Dict[str, str],
    summary="Current state snapshot",
    description=(
        "Index -> current value. Jobs not computed yet show the placeholder "
        "'Nothing yet!'. Poll this endpoint to observe results."
    ),
)
def current_values(
    handler: CurrentValuesQueryHandler = Depends(get_current_values_handler),
) -> Dict[str, str]:
    logger.info("current handler")
    return handler.handle()


@router.post(
    "",
    status_code=status.HTTP_200_OK,
    response_model=SubmitValueResponse,
    summary="Submit a job",
    description=(
        "Validates the index (integer, 0-40), writes the placeholder, notifies "
        "the worker and logs the submission. Returns before computing anything."
    ),
    responses={
        400: {"model": ErrorResponse, "description": "Index invalid or out of range"},
    },
)
def submit_value(
    body: SubmitValueRequest,
    handler: SubmitJobHandler = Depends(get_submit_job_handler),
) -> SubmitValueResponse:
    """
    Submit a job.

    Examples:
        >>> curl -X POST localhost:5000/values -d '{"index": "10"}'
        {"working": true}

        >>> curl -X POST localhost:5000/values -d '{"index": "41"}'
        {"code": "OUT_OF_RANGE", "message": "index too high", "details": {...}}
    """
    logger.info("set handler")
    handler.handle(SubmitJobCommand(index=body.index))
    return SubmitValueResponse(working=True)
