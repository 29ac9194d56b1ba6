"""Shared schema bases"""

from typing import ClassVar, Tuple

from pydantic import BaseModel, model_validator


class UpdateModel(BaseModel):
    """
    Partial update body.

    Every field may be omitted, but the fields named in ``non_nullable``
    back NOT NULL columns and may not be sent as an explicit null.
    """

    non_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_nulls(self):
        nulls = [
            name for name in self.non_nullable
            if name in self.model_fields_set and getattr(self, name) is None
        ]
        if nulls:
            raise ValueError(f"{', '.join(nulls)} may not be null")
        return self
