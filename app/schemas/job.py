from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from app.schemas.common import MAX_INT, RequestSchema, ResponseSchema, format_decimal, reject_null
from app.schemas.company import CompanyResponse


class JobNew(RequestSchema):
    """Schema for creating a new job"""
    title: str = Field(..., min_length=1)
    salary: Optional[int] = Field(None, ge=0, le=MAX_INT)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)
    company_handle: str = Field(..., min_length=1, max_length=25)


class JobUpdate(RequestSchema):
    """Schema for updating a job. id and companyHandle cannot change."""
    title: Optional[str] = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0, le=MAX_INT)
    equity: Optional[Decimal] = Field(None, ge=0, le=1)

    @field_validator("title")
    @classmethod
    def validate_not_null(cls, v):
        return reject_null(v)


class JobSearch(RequestSchema):
    """Query-string filters for listing jobs"""
    title: Optional[str] = None
    min_salary: Optional[int] = Field(None, ge=0, le=MAX_INT)
    has_equity: Optional[bool] = None


class JobResponse(ResponseSchema):
    """Schema for job response"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None
    company_handle: str

    @field_serializer("equity")
    def serialize_equity(self, equity: Optional[Decimal]) -> Optional[str]:
        return format_decimal(equity)


class JobDetail(JobResponse):
    """Job with its owning company"""
    company: CompanyResponse


class JobEnvelope(BaseModel):
    job: JobResponse


class JobDetailEnvelope(BaseModel):
    job: JobDetail


class JobListEnvelope(BaseModel):
    jobs: List[JobResponse]
