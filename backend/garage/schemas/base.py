"""Shared pydantic bases for request and response schemas.

The JSON contract is camelCase (``toolkitId``, ``createdAt``) while Python
code uses snake_case attribute names. Request bodies accept either spelling.
"""

from typing import ClassVar, FrozenSet

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase aliases."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PartialUpdate(CamelModel):
    """Base for partial-update bodies.

    Only the fields the client actually sent are applied (see
    ``model_dump(exclude_unset=True)``). Unknown fields are rejected, and
    fields listed in ``non_nullable`` may be omitted but never set to null.
    """

    model_config = ConfigDict(extra="forbid")

    non_nullable: ClassVar[FrozenSet[str]] = frozenset()

    @model_validator(mode="after")
    def _reject_nulls(self):
        for name in self.model_fields_set & self.non_nullable:
            if getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be null")
        return self

    def patch(self) -> dict:
        """The supplied fields as a plain dict, ready to merge over a record."""
        return self.model_dump(exclude_unset=True)
