"""
Job routes.

Anyone can list and read jobs, with optional title, salary and equity
filters; only admins can create, update and delete them.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Path, Request
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import Principal, ensure_admin
from app.core.validation import validate_payload
from app.crud import job as job_crud
from app.schemas.common import MAX_INT, DeletedResponse
from app.schemas.job import (
    JobDetail,
    JobDetailEnvelope,
    JobEnvelope,
    JobListEnvelope,
    JobNew,
    JobResponse,
    JobSearch,
    JobUpdate,
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=JobEnvelope)
def create_job(
    payload: Any = Body(None),
    admin: Principal = Depends(ensure_admin),
    db: Session = Depends(get_db)
):
    """
    Create a job posting.

    Data should include { title, companyHandle } and may include { salary, equity }.
    """
    job_data = validate_payload(payload, JobNew)
    job = job_crud.create(db, job_data)

    logger.info(f"Created job {job.id}: {job.title} at {job.company_handle}")
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.get("", response_model=JobListEnvelope)
def list_jobs(request: Request, db: Session = Depends(get_db)):
    """
    List jobs.

    Optional query filters: title (substring), minSalary, hasEquity (true/false).
    """
    filters = validate_payload(dict(request.query_params), JobSearch)
    jobs = job_crud.find_all(db, filters)
    return JobListEnvelope(jobs=[JobResponse.model_validate(j) for j in jobs])


@router.get("/{job_id}", response_model=JobDetailEnvelope)
def get_job(job_id: int = Path(..., ge=0, le=MAX_INT), db: Session = Depends(get_db)):
    """Retrieve a job, including the company that posted it."""
    job = job_crud.get(db, job_id)
    return JobDetailEnvelope(job=JobDetail.model_validate(job))


@router.patch("/{job_id}", response_model=JobEnvelope)
def update_job(
    job_id: int = Path(..., ge=0, le=MAX_INT),
    payload: Any = Body(None),
    admin: Principal = Depends(ensure_admin),
    db: Session = Depends(get_db)
):
    """Update a job. Data can include { title, salary, equity }."""
    job_data = validate_payload(payload, JobUpdate)
    job = job_crud.update(db, job_id, job_data)

    logger.info(f"Updated job {job_id}")
    return JobEnvelope(job=JobResponse.model_validate(job))


@router.delete("/{job_id}", response_model=DeletedResponse)
def delete_job(
    job_id: int = Path(..., ge=0, le=MAX_INT),
    admin: Principal = Depends(ensure_admin),
    db: Session = Depends(get_db)
):
    """Delete a job by ID."""
    job_crud.remove(db, job_id)

    logger.info(f"Deleted job {job_id}")
    return DeletedResponse(deleted=job_id)
