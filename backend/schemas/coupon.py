from typing import List

from pydantic import Field, field_validator

from schemas.common import CamelModel, PageMeta


# Request body for creating or replacing a coupon
class CouponRequest(CamelModel):
    coupon_name: str
    discount_percentage: int = Field(ge=0, le=100)

    @field_validator("coupon_name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v.strip()


class CouponDTO(CamelModel):
    coupon_id: int
    coupon_name: str
    discount_percentage: int


class CouponResponse(PageMeta):
    content: List[CouponDTO]
