# backend/services/product_service.py
import logging

from sqlalchemy.orm import Session

from models.product import Product
from schemas.product import ProductCreate, ProductDTO, ProductResponse
from services.mapper import product_to_dto
from utils.pagination import paginate, resolve_sort

logger = logging.getLogger(__name__)

PRODUCT_SORT_FIELDS = {
    "productId": Product.id,
    "product_id": Product.id,
    "productName": Product.name,
    "product_name": Product.name,
    "quantity": Product.quantity,
    "price": Product.price,
    "discount": Product.discount,
    "specialPrice": Product.special_price,
    "special_price": Product.special_price,
}


def special_price(price: float, discount: float) -> float:
    return round(price - price * discount / 100.0, 2)


class ProductService:
    def __init__(self, db: Session):
        self.db = db

    def add_product(self, payload: ProductCreate) -> ProductDTO:
        product = Product(
            name=payload.product_name,
            description=payload.description,
            image=payload.image or "default.png",
            quantity=payload.quantity,
            price=payload.price,
            discount=payload.discount,
            special_price=special_price(payload.price, payload.discount),
        )
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        logger.info("Added product %s '%s'", product.id, product.name)
        return product_to_dto(product)

    def get_products(self, page_number: int, page_size: int, sort_by: str, sort_order: str) -> ProductResponse:
        order_by = resolve_sort(PRODUCT_SORT_FIELDS, sort_by, sort_order)
        rows, meta = paginate(self.db.query(Product), page_number, page_size, order_by, Product.id.asc())
        return ProductResponse(content=[product_to_dto(p) for p in rows], **meta)
