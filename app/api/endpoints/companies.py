"""
Company routes.

Reading is public; creating, updating and deleting require an admin.
"""

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.deps import Principal, ensure_admin
from app.core.validation import validate_payload
from app.crud import company as company_crud
from app.schemas.common import DeletedResponse
from app.schemas.company import (
    CompanyDetail,
    CompanyDetailEnvelope,
    CompanyEnvelope,
    CompanyListEnvelope,
    CompanyNew,
    CompanyResponse,
    CompanySearch,
    CompanyUpdate,
)

router = APIRouter(prefix="/companies", tags=["Companies"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201, response_model=CompanyEnvelope)
def create_company(
    payload: Any = Body(None),
    admin: Principal = Depends(ensure_admin),
    db: Session = Depends(get_db)
):
    """
    Create a company.

    Requires { handle, name, description } and accepts { numEmployees, logoUrl }.
    """
    company_data = validate_payload(payload, CompanyNew)
    company = company_crud.create(db, company_data)

    logger.info(f"Admin {admin.username} created company {company.handle}")
    return CompanyEnvelope(company=CompanyResponse.model_validate(company))


@router.get("", response_model=CompanyListEnvelope)
def list_companies(request: Request, db: Session = Depends(get_db)):
    """
    List companies.

    Optional query filters: name (substring), minEmployees, maxEmployees.
    """
    filters = validate_payload(dict(request.query_params), CompanySearch)
    companies = company_crud.find_all(db, filters)
    return CompanyListEnvelope(companies=[CompanyResponse.model_validate(c) for c in companies])


@router.get("/{handle}", response_model=CompanyDetailEnvelope)
def get_company(handle: str, db: Session = Depends(get_db)):
    """Get a company and its jobs."""
    company = company_crud.get(db, handle)
    return CompanyDetailEnvelope(company=CompanyDetail.model_validate(company))


@router.patch("/{handle}", response_model=CompanyEnvelope)
def update_company(
    handle: str,
    payload: Any = Body(None),
    admin: Principal = Depends(ensure_admin),
    db: Session = Depends(get_db)
):
    """Update a company. Data can include { name, description, numEmployees, logoUrl }."""
    company_data = validate_payload(payload, CompanyUpdate)
    company = company_crud.update(db, handle, company_data)

    logger.info(f"Admin {admin.username} updated company {handle}")
    return CompanyEnvelope(company=CompanyResponse.model_validate(company))


@router.delete("/{handle}", response_model=DeletedResponse)
def delete_company(
    handle: str,
    admin: Principal = Depends(ensure_admin),
    db: Session = Depends(get_db)
):
    """Delete a company and its jobs."""
    company_crud.remove(db, handle)

    logger.info(f"Admin {admin.username} deleted company {handle}")
    return DeletedResponse(deleted=handle)
