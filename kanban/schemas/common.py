from math import ceil
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Base commune: camelCase côté JSON, snake_case côté Python

class CamelModel(BaseModel):
    model_config = ConfigDict(from_attributes=True, populate_by_name=True, alias_generator=to_camel)

class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int

def build_pagination(page: int, limit: int, total: int) -> dict:
    return Pagination(page=page, limit=limit, total=total, total_pages=ceil(total / limit)).model_dump(by_alias=True)

def dump(schema: type[CamelModel], obj: Any) -> dict:
    """Sérialise un objet ORM en dict JSON (clés camelCase)."""
    return schema.model_validate(obj).model_dump(by_alias=True, mode="json")

def success(data: Optional[dict] = None, message: Optional[str] = None) -> dict:
    body = {"status": "success"}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body
