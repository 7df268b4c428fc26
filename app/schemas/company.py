from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_serializer, field_validator

from app.schemas.common import MAX_INT, RequestSchema, ResponseSchema, format_decimal, reject_null


class CompanyNew(RequestSchema):
    """Schema for creating a company"""
    handle: str = Field(..., min_length=1, max_length=25)
    name: str = Field(..., min_length=1)
    description: str
    num_employees: Optional[int] = Field(None, ge=0, le=MAX_INT)
    logo_url: Optional[str] = None


class CompanyUpdate(RequestSchema):
    """Schema for updating a company. The handle cannot change."""
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    num_employees: Optional[int] = Field(None, ge=0, le=MAX_INT)
    logo_url: Optional[str] = None

    @field_validator("name", "description")
    @classmethod
    def validate_not_null(cls, v):
        return reject_null(v)


class CompanySearch(RequestSchema):
    """Query-string filters for listing companies"""
    name: Optional[str] = None
    min_employees: Optional[int] = Field(None, ge=0, le=MAX_INT)
    max_employees: Optional[int] = Field(None, ge=0, le=MAX_INT)


class CompanyResponse(ResponseSchema):
    handle: str
    name: str
    description: str
    num_employees: Optional[int] = None
    logo_url: Optional[str] = None


class CompanyJob(ResponseSchema):
    """Job as listed under its company"""
    id: int
    title: str
    salary: Optional[int] = None
    equity: Optional[Decimal] = None

    @field_serializer("equity")
    def serialize_equity(self, equity: Optional[Decimal]) -> Optional[str]:
        return format_decimal(equity)


class CompanyDetail(CompanyResponse):
    jobs: List[CompanyJob] = []


class CompanyEnvelope(BaseModel):
    company: CompanyResponse


class CompanyDetailEnvelope(BaseModel):
    company: CompanyDetail


class CompanyListEnvelope(BaseModel):
    companies: List[CompanyResponse]
