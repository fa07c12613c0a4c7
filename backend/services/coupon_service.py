# backend/services/coupon_service.py
import logging

from sqlalchemy.orm import Session

from models.coupon import Coupon
from schemas.coupon import CouponDTO, CouponRequest, CouponResponse
from services.mapper import coupon_to_dto
from utils.exceptions import ResourceNotFoundException
from utils.pagination import paginate, resolve_sort

logger = logging.getLogger(__name__)

# Fields a coupon listing may be sorted by (camelCase as exposed, snake_case accepted)
COUPON_SORT_FIELDS = {
    "couponId": Coupon.id,
    "coupon_id": Coupon.id,
    "couponName": Coupon.name,
    "coupon_name": Coupon.name,
    "discountPercentage": Coupon.discount_percentage,
    "discount_percentage": Coupon.discount_percentage,
}


class CouponService:
    def __init__(self, db: Session):
        self.db = db

    def _get(self, coupon_id: int) -> Coupon:
        coupon = self.db.get(Coupon, coupon_id)
        if coupon is None:
            raise ResourceNotFoundException("Coupon", "couponId", coupon_id)
        return coupon

    def create_coupon(self, payload: CouponRequest) -> CouponDTO:
        coupon = Coupon(name=payload.coupon_name, discount_percentage=payload.discount_percentage)
        self.db.add(coupon)
        self.db.commit()
        self.db.refresh(coupon)
        logger.info("Created coupon %s (%s%%)", coupon.id, coupon.discount_percentage)
        return coupon_to_dto(coupon)

    def get_coupons(self, page_number: int, page_size: int, sort_by: str, sort_order: str) -> CouponResponse:
        order_by = resolve_sort(COUPON_SORT_FIELDS, sort_by, sort_order)
        rows, meta = paginate(self.db.query(Coupon), page_number, page_size, order_by, Coupon.id.asc())
        return CouponResponse(content=[coupon_to_dto(c) for c in rows], **meta)

    def update_coupon(self, coupon_id: int, payload: CouponRequest) -> CouponDTO:
        coupon = self._get(coupon_id)
        coupon.name = payload.coupon_name
        coupon.discount_percentage = payload.discount_percentage
        self.db.commit()
        self.db.refresh(coupon)
        logger.info("Updated coupon %s", coupon_id)
        return coupon_to_dto(coupon)

    def delete_coupon(self, coupon_id: int) -> str:
        coupon = self._get(coupon_id)
        # Association rows in order_coupons go with it; the orders stay
        self.db.delete(coupon)
        self.db.commit()
        logger.info("Deleted coupon %s", coupon_id)
        return f"Coupon with couponId: {coupon_id} deleted successfully !!!"
