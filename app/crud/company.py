"""
CRUD operations for the Company model.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import BadRequestError, NotFoundError
from app.crud.sql import escape_like
from app.models.company import Company
from app.schemas.company import CompanyNew, CompanySearch, CompanyUpdate

logger = logging.getLogger(__name__)


def create(db: Session, company_data: CompanyNew) -> Company:
    """
    Create a company.

    Raises:
        BadRequestError: If the handle or name is already used
    """
    if db.get(Company, company_data.handle) is not None:
        raise BadRequestError(f"Duplicate company: {company_data.handle}")
    if db.query(Company).filter(Company.name == company_data.name).first() is not None:
        raise BadRequestError(f"Duplicate company name: {company_data.name}")

    db_company = Company(**company_data.model_dump())

    db.add(db_company)
    try:
        db.commit()
    except IntegrityError:
        # Another request took the handle or name after the checks above
        db.rollback()
        raise BadRequestError(f"Duplicate company: {company_data.handle}")

    db.refresh(db_company)

    return db_company


def find_all(db: Session, filters: Optional[CompanySearch] = None) -> List[Company]:
    """
    List companies ordered by name, optionally filtered.

    Filters:
        name: case-insensitive substring match
        min_employees / max_employees: inclusive bounds on num_employees

    Raises:
        BadRequestError: If min_employees > max_employees
    """
    query = db.query(Company)

    if filters is not None:
        min_employees = filters.min_employees
        max_employees = filters.max_employees

        if min_employees is not None and max_employees is not None and min_employees > max_employees:
            raise BadRequestError("Min employees cannot be greater than max")

        if filters.name:
            query = query.filter(Company.name.ilike(f"%{escape_like(filters.name)}%", escape="\\"))
        if min_employees is not None:
            query = query.filter(Company.num_employees >= min_employees)
        if max_employees is not None:
            query = query.filter(Company.num_employees <= max_employees)

    return query.order_by(Company.name).all()


def get(db: Session, handle: str) -> Company:
    """
    Retrieve a company (with its jobs) by handle.

    Raises:
        NotFoundError: If no such company
    """
    company = db.get(Company, handle)
    if company is None:
        raise NotFoundError(f"No company: {handle}")
    return company


def update(db: Session, handle: str, company_data: CompanyUpdate) -> Company:
    """
    Apply a partial update to a company.

    Raises:
        NotFoundError: If no such company
        BadRequestError: If the new name belongs to another company
    """
    company = get(db, handle)
    changes = company_data.model_dump(exclude_unset=True)

    new_name = changes.get("name")
    if new_name is not None and new_name != company.name:
        if db.query(Company).filter(Company.name == new_name).first() is not None:
            raise BadRequestError(f"Duplicate company name: {new_name}")

    for field, value in changes.items():
        setattr(company, field, value)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Duplicate company name: {new_name}")

    db.refresh(company)

    return company


def remove(db: Session, handle: str) -> None:
    """
    Delete a company and, by cascade, its jobs.

    Raises:
        NotFoundError: If no such company
    """
    company = get(db, handle)
    db.delete(company)
    db.commit()
