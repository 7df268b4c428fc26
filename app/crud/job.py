"""
CRUD operations for the Job model.

Implements the Repository pattern to encapsulate all database operations
for jobs, providing a clean interface for the API layer.
"""

from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.errors import BadRequestError, NotFoundError
from app.crud.sql import escape_like
from app.models.company import Company
from app.models.job import Job
from app.schemas.job import JobNew, JobSearch, JobUpdate


def create(db: Session, job_data: JobNew) -> Job:
    """
    Create a new job in the database.

    Args:
        db: Database session
        job_data: Validated job creation data

    Returns:
        Created Job instance with id

    Raises:
        BadRequestError: If company_handle does not name an existing company
    """
    if db.get(Company, job_data.company_handle) is None:
        raise BadRequestError(f"No company: {job_data.company_handle}")

    db_job = Job(
        title=job_data.title,
        salary=job_data.salary,
        equity=job_data.equity,
        company_handle=job_data.company_handle,
    )

    db.add(db_job)
    db.commit()
    db.refresh(db_job)

    return db_job


def find_all(db: Session, filters: Optional[JobSearch] = None) -> List[Job]:
    """
    List jobs ordered by title, optionally filtered.

    Filters:
        title: case-insensitive substring match
        min_salary: inclusive lower bound on salary
        has_equity: when true, only jobs with equity > 0
    """
    query = db.query(Job)

    if filters is not None:
        if filters.title:
            query = query.filter(Job.title.ilike(f"%{escape_like(filters.title)}%", escape="\\"))
        if filters.min_salary is not None:
            query = query.filter(Job.salary >= filters.min_salary)
        if filters.has_equity:
            query = query.filter(Job.equity > 0)

    return query.order_by(Job.title, Job.id).all()


def get(db: Session, job_id: int) -> Job:
    """
    Retrieve a job by its ID.

    Raises:
        NotFoundError: If no such job
    """
    job = db.get(Job, job_id)
    if job is None:
        raise NotFoundError(f"No job: {job_id}")
    return job


def update(db: Session, job_id: int, job_data: JobUpdate) -> Job:
    """
    Apply a partial update to a job.

    Raises:
        NotFoundError: If no such job
    """
    job = get(db, job_id)

    for field, value in job_data.model_dump(exclude_unset=True).items():
        setattr(job, field, value)

    db.commit()
    db.refresh(job)

    return job


def remove(db: Session, job_id: int) -> None:
    """
    Delete a job by ID.

    Raises:
        NotFoundError: If no such job
    """
    job = get(db, job_id)
    db.delete(job)
    db.commit()
