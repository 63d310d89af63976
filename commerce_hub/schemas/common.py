"""
Shared base model for API payloads: snake_case attributes, camelCase on the wire.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PartialUpdate(CamelModel):
    """
    Base for PATCH/PUT bodies.

    Fields may be omitted, but those listed in ``non_nullable`` back NOT NULL
    columns and reject an explicit null.
    """

    non_nullable: ClassVar[frozenset[str]] = frozenset()

    @model_validator(mode="after")
    def reject_explicit_nulls(self):
        nulls = sorted(name for name in self.model_fields_set & self.non_nullable if getattr(self, name) is None)
        if nulls:
            raise ValueError(f"Fields cannot be null: {', '.join(to_camel(name) for name in nulls)}")
        return self


class ErrorResponse(BaseModel):
    """Error body returned by every exception handler."""

    error: bool = True
    message: str
    status_code: int
    code: str | None = None
    details: dict | None = None
