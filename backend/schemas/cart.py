from typing import List

from schemas.common import CamelModel
from schemas.product import ProductDTO


# Response schema for a single cart line
class CartItemDTO(CamelModel):
    cart_item_id: int
    product: ProductDTO
    quantity: int
    discount: float
    product_price: float


# Response schema for the entire cart summary
class CartDTO(CamelModel):
    cart_id: int
    total_price: float
    products: List[CartItemDTO]
