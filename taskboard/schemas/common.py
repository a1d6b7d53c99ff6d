from typing import Annotated, Optional

from pydantic import AfterValidator, BaseModel
from pydantic.alias_generators import to_camel

def _not_blank(value: Optional[str]) -> Optional[str]:
    if value is not None and not value.strip():
        raise ValueError("id must not be blank")
    return value

# a parent reference: omitted or null means none, "" is rejected
ParentId = Annotated[Optional[str], AfterValidator(_not_blank)]

class CamelModel(BaseModel):
    """snake_case attributes in Python, camelCase on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True

class UpdateResult(BaseModel):
    affected: int
