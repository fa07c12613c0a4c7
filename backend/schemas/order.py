from datetime import date
from typing import List, Optional

from schemas.common import CamelModel, PageMeta
from schemas.coupon import CouponDTO
from schemas.product import ProductDTO


class PaymentDTO(CamelModel):
    payment_id: int
    payment_method: str


# Output schema for an individual order line snapshot
class OrderItemDTO(CamelModel):
    order_item_id: int
    product: ProductDTO
    quantity: int
    discount: float
    ordered_product_price: float


# Output schema representing the full order details
class OrderDTO(CamelModel):
    order_id: int
    email: str
    order_items: List[OrderItemDTO] = []
    order_date: date
    payment: Optional[PaymentDTO] = None
    total_amount: float
    order_status: str
    coupons: List[CouponDTO] = []


# Schema for paginated order lists
class OrderResponse(PageMeta):
    content: List[OrderDTO]
