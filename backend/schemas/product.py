# backend/schemas/product.py
from typing import List, Optional

from pydantic import Field

from schemas.common import CamelModel, PageMeta


# Schema for creating a new product (admin)
class ProductCreate(CamelModel):
    product_name: str = Field(min_length=3)
    description: Optional[str] = None
    image: Optional[str] = None
    quantity: int = Field(ge=0)
    price: float = Field(ge=0)
    discount: float = Field(default=0, ge=0, le=100)


# Full product representation including ID
class ProductDTO(CamelModel):
    product_id: int
    product_name: str
    image: Optional[str] = None
    description: Optional[str] = None
    quantity: int
    price: float
    discount: float
    special_price: float


# Paginated response for product listings
class ProductResponse(PageMeta):
    content: List[ProductDTO]
