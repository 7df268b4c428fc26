"""
Shared schema building blocks.

API payloads use camelCase keys; Python code uses snake_case attributes.
"""

from decimal import Decimal
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Largest value an INTEGER column holds
MAX_INT = 2_147_483_647


class RequestSchema(BaseModel):
    """Base for request bodies and query strings. Unknown keys are rejected."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class ResponseSchema(BaseModel):
    """Base for response payloads, readable straight from ORM objects."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def format_decimal(value: Optional[Decimal]) -> Optional[str]:
    """Render a Decimal without trailing zeros ("0.1000000000" -> "0.1")."""
    if value is None:
        return None
    return format(Decimal(value).normalize(), "f")


class DeletedResponse(BaseModel):
    """Response schema for delete operations."""
    deleted: Union[int, str]


def reject_null(v):
    """Field validator for patch fields that may be omitted but not nulled."""
    if v is None:
        raise ValueError("Value may not be null")
    return v
