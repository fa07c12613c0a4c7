# backend/schemas/common.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


# Base configuration for transport models: camelCase on the wire, snake_case in Python
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# Page metadata shared by every paginated response
class PageMeta(CamelModel):
    page_number: int
    page_size: int
    total_elements: int
    total_pages: int
    last_page: bool
