"""
Shared pydantic plumbing for request and response schemas.
"""

from typing import Any, Type, TypeVar
from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel

from jobly.core.exceptions import BadRequestError

SchemaT = TypeVar("SchemaT", bound=BaseModel)


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase keys on the wire. Either spelling is accepted on input."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


def parse_payload(schema: Type[SchemaT], data: Any) -> SchemaT:
    """
    Validate raw input against a schema.

    Raises:
        BadRequestError: with the pydantic error list in ``details``
    """
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data if data is not None else {})
    except ValidationError as exc:
        raise BadRequestError(
            f"Invalid {schema.__name__} payload",
            details=exc.errors(include_url=False, include_context=False),
        ) from exc
