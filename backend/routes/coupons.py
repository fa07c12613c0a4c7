# backend/routes/coupons.py
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from deps import get_coupon_service
from models.users import User
from schemas.coupon import CouponDTO, CouponRequest, CouponResponse
from services.coupon_service import CouponService
from utils.audit import client_ip, write_log
from utils.tokenJWT import ADMIN, role_required

router = APIRouter(prefix="/api", tags=["Coupons"])


# Create a coupon (Admin only)
@router.post("/admin/coupon", response_model=CouponDTO, status_code=status.HTTP_201_CREATED)
def create_coupon(
    payload: CouponRequest,
    request: Request,
    db: Session = Depends(get_db),
    service: CouponService = Depends(get_coupon_service),
    current_user: User = Depends(role_required(ADMIN)),
):
    coupon = service.create_coupon(payload)
    write_log(db, user_id=current_user.id, action="COUPON_CREATE", resource="coupons",
              ip=client_ip(request), meta={"coupon_id": coupon.coupon_id})
    return coupon


# List coupons with pagination and sorting
@router.get("/public/coupons", response_model=CouponResponse)
def get_coupons(
    page_number: int = Query(settings.PAGE_NUMBER, alias="pageNumber", ge=0),
    page_size: int = Query(settings.PAGE_SIZE, alias="pageSize", ge=1, le=100),
    sort_by: str = Query(settings.SORT_COUPONS_BY, alias="sortBy"),
    sort_order: str = Query(settings.SORT_DIR, alias="sortOrder"),
    service: CouponService = Depends(get_coupon_service),
):
    return service.get_coupons(page_number, page_size, sort_by, sort_order)


# Replace a coupon's fields (Admin only)
@router.put("/admin/coupons/{coupon_id}", response_model=CouponDTO)
def update_coupon(
    coupon_id: int,
    payload: CouponRequest,
    request: Request,
    db: Session = Depends(get_db),
    service: CouponService = Depends(get_coupon_service),
    current_user: User = Depends(role_required(ADMIN)),
):
    coupon = service.update_coupon(coupon_id, payload)
    write_log(db, user_id=current_user.id, action="COUPON_UPDATE", resource="coupons",
              ip=client_ip(request), meta={"coupon_id": coupon_id})
    return coupon


# Delete a coupon (Admin only)
@router.delete("/admin/coupons/{coupon_id}", response_model=str)
def delete_coupon(
    coupon_id: int,
    request: Request,
    db: Session = Depends(get_db),
    service: CouponService = Depends(get_coupon_service),
    current_user: User = Depends(role_required(ADMIN)),
):
    message = service.delete_coupon(coupon_id)
    write_log(db, user_id=current_user.id, action="COUPON_DELETE", resource="coupons",
              ip=client_ip(request), meta={"coupon_id": coupon_id})
    return message
