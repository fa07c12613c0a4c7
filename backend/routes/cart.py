# backend/routes/cart.py
from fastapi import APIRouter, Depends, HTTPException, Path, Request, status
from sqlalchemy.orm import Session

from database import get_db
from deps import get_cart_service
from models.cart import Cart
from models.users import User
from schemas.cart import CartDTO
from services.cart_service import CartService
from utils.audit import client_ip, write_log
from utils.tokenJWT import ensure_self_or_admin, get_current_user, is_admin, normalize_email

router = APIRouter(prefix="/api/public", tags=["Cart"])

def _ensure_cart_access(db: Session, user: User, cart_id: int):
    # Carts addressed by id alone must belong to the caller (admins may touch any)
    if is_admin(user):
        return
    cart = db.get(Cart, cart_id)
    if cart is not None and cart.user_id != user.id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

@router.post(
    "/carts/{cart_id}/products/{product_id}/quantity/{quantity}",
    response_model=CartDTO,
    status_code=status.HTTP_201_CREATED,
)
def add_product_to_cart(
    cart_id: int,
    product_id: int,
    request: Request,
    quantity: int = Path(gt=0),
    db: Session = Depends(get_db),
    service: CartService = Depends(get_cart_service),
    current_user: User = Depends(get_current_user),
):
    _ensure_cart_access(db, current_user, cart_id)
    cart = service.add_product_to_cart(cart_id, product_id, quantity)
    write_log(db, user_id=current_user.id, action="CART_ADD", resource="carts",
              ip=client_ip(request), meta={"cart_id": cart_id, "product_id": product_id, "qty": quantity})
    return cart

@router.get("/users/{email}/carts/{cart_id}", response_model=CartDTO)
def get_cart_by_id(
    email: str,
    cart_id: int,
    service: CartService = Depends(get_cart_service),
    current_user: User = Depends(get_current_user),
):
    email = normalize_email(email)
    ensure_self_or_admin(current_user, email)
    return service.get_cart(email, cart_id)

@router.put("/carts/{cart_id}/products/{product_id}/quantity/{quantity}", response_model=CartDTO)
def update_cart_product(
    cart_id: int,
    product_id: int,
    request: Request,
    quantity: int = Path(gt=0),
    db: Session = Depends(get_db),
    service: CartService = Depends(get_cart_service),
    current_user: User = Depends(get_current_user),
):
    _ensure_cart_access(db, current_user, cart_id)
    cart = service.update_product_quantity_in_cart(cart_id, product_id, quantity)
    write_log(db, user_id=current_user.id, action="CART_UPDATE", resource="carts",
              ip=client_ip(request), meta={"cart_id": cart_id, "product_id": product_id, "qty": quantity})
    return cart

@router.delete("/carts/{cart_id}/product/{product_id}", response_model=str)
def delete_product_from_cart(
    cart_id: int,
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    service: CartService = Depends(get_cart_service),
    current_user: User = Depends(get_current_user),
):
    _ensure_cart_access(db, current_user, cart_id)
    message = service.delete_product_from_cart(cart_id, product_id)
    write_log(db, user_id=current_user.id, action="CART_DELETE", resource="carts",
              ip=client_ip(request), meta={"cart_id": cart_id, "product_id": product_id})
    return message
