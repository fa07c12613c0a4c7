# backend/routes/orders.py
from typing import List, Optional
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from deps import get_order_service
from models.users import User
from schemas.order import OrderDTO, OrderResponse
from services.order_service import OrderService
from utils.audit import client_ip, write_log
from utils.tokenJWT import ADMIN, ensure_self_or_admin, get_current_user, normalize_email, role_required

router = APIRouter(prefix="/api", tags=["Orders"])


# Place an order from the user's cart, optionally applying a coupon
@router.post(
    "/public/users/{email}/carts/{cart_id}/payments/{payment_method}/order",
    response_model=OrderDTO,
    status_code=status.HTTP_201_CREATED,
)
def order_products(
    email: str,
    cart_id: int,
    payment_method: str,
    request: Request,
    coupon_id: Optional[int] = Query(None, alias="couponId"),
    db: Session = Depends(get_db),
    service: OrderService = Depends(get_order_service),
    current_user: User = Depends(get_current_user),
):
    email = normalize_email(email)
    ensure_self_or_admin(current_user, email)
    order = service.place_order(email, cart_id, coupon_id, payment_method)
    write_log(db, user_id=current_user.id, action="ORDER_PLACE", resource="orders",
              ip=client_ip(request),
              meta={"order_id": order.order_id, "cart_id": cart_id, "coupon_id": coupon_id,
                    "total": order.total_amount})
    return order


# List every order (Admin only)
@router.get("/admin/orders", response_model=OrderResponse)
def get_all_orders(
    page_number: int = Query(settings.PAGE_NUMBER, alias="pageNumber", ge=0),
    page_size: int = Query(settings.PAGE_SIZE, alias="pageSize", ge=1, le=100),
    sort_by: str = Query(settings.SORT_ORDERS_BY, alias="sortBy"),
    sort_order: str = Query(settings.SORT_DIR, alias="sortOrder"),
    service: OrderService = Depends(get_order_service),
    current_user: User = Depends(role_required(ADMIN)),
):
    return service.get_all_orders(page_number, page_size, sort_by, sort_order)


# List orders that used a given coupon (Admin only)
@router.get("/admin/coupons/{coupon_id}/orders", response_model=OrderResponse)
def get_orders_by_coupon(
    coupon_id: int,
    page_number: int = Query(settings.PAGE_NUMBER, alias="pageNumber", ge=0),
    page_size: int = Query(settings.PAGE_SIZE, alias="pageSize", ge=1, le=100),
    sort_by: str = Query(settings.SORT_ORDERS_BY, alias="sortBy"),
    sort_order: str = Query(settings.SORT_DIR, alias="sortOrder"),
    service: OrderService = Depends(get_order_service),
    current_user: User = Depends(role_required(ADMIN)),
):
    return service.get_orders_by_coupon(coupon_id, page_number, page_size, sort_by, sort_order)


# List the orders of one user
@router.get("/public/users/{email}/orders", response_model=List[OrderDTO])
def get_orders_by_user(
    email: str,
    service: OrderService = Depends(get_order_service),
    current_user: User = Depends(get_current_user),
):
    email = normalize_email(email)
    ensure_self_or_admin(current_user, email)
    return service.get_orders_by_user(email)


# Get details of a specific order
@router.get("/public/users/{email}/orders/{order_id}", response_model=OrderDTO)
def get_order_by_user(
    email: str,
    order_id: int,
    service: OrderService = Depends(get_order_service),
    current_user: User = Depends(get_current_user),
):
    email = normalize_email(email)
    ensure_self_or_admin(current_user, email)
    return service.get_order(email, order_id)


# Set an order's status (Admin only)
@router.put("/admin/users/{email}/orders/{order_id}/orderStatus/{order_status}", response_model=OrderDTO)
def update_order_by_user(
    email: str,
    order_id: int,
    order_status: str,
    request: Request,
    db: Session = Depends(get_db),
    service: OrderService = Depends(get_order_service),
    current_user: User = Depends(role_required(ADMIN)),
):
    order = service.update_order(normalize_email(email), order_id, order_status)
    write_log(db, user_id=current_user.id, action="ORDER_STATUS_CHANGE", resource="orders",
              ip=client_ip(request), meta={"order_id": order_id, "new": order_status})
    return order
