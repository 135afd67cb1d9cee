from typing import Annotated

from fastapi import Path
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

# Largest value a signed 64-bit INTEGER column holds.
MAX_DATABASE_ID = 2**63 - 1

DatabaseId = Annotated[int, Field(ge=1, le=MAX_DATABASE_ID)]
DatabaseIdPath = Annotated[int, Path(ge=1, le=MAX_DATABASE_ID)]


class CamelModel(BaseModel):
    """Reads snake_case attributes and speaks camelCase JSON."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
