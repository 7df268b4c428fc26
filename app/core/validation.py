"""
Request payload validation against the declared pydantic schemas.

Routes accept raw JSON/query mappings and validate them here so that the
authorization guards always run first and schema errors come back as 400s.
"""

from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel, ValidationError

from app.core.errors import BadRequestError, format_validation_errors

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def validate_payload(payload: Any, schema: Type[SchemaT]) -> SchemaT:
    """
    Validate a request body or query mapping against a schema.

    Args:
        payload: Decoded JSON body or dict of query parameters
        schema: Pydantic model describing the accepted shape

    Returns:
        Parsed schema instance

    Raises:
        BadRequestError: With the ordered list of validation messages
    """
    if not isinstance(payload, Mapping):
        raise BadRequestError(["Request body must be a JSON object"])

    try:
        return schema.model_validate(dict(payload))
    except ValidationError as e:
        raise BadRequestError(format_validation_errors(e.errors()))
