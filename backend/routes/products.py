# backend/routes/products.py
from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from deps import get_product_service
from models.users import User
from schemas.product import ProductCreate, ProductDTO, ProductResponse
from services.product_service import ProductService
from utils.audit import client_ip, write_log
from utils.tokenJWT import ADMIN, role_required

router = APIRouter(prefix="/api", tags=["Products"])


# Add a product to the catalogue (Admin only)
@router.post("/admin/products", response_model=ProductDTO, status_code=status.HTTP_201_CREATED)
def add_product(
    payload: ProductCreate,
    request: Request,
    db: Session = Depends(get_db),
    service: ProductService = Depends(get_product_service),
    current_user: User = Depends(role_required(ADMIN)),
):
    product = service.add_product(payload)
    write_log(db, user_id=current_user.id, action="PRODUCT_CREATE", resource="products",
              ip=client_ip(request), meta={"product_id": product.product_id})
    return product


@router.get("/public/products", response_model=ProductResponse)
def get_products(
    page_number: int = Query(settings.PAGE_NUMBER, alias="pageNumber", ge=0),
    page_size: int = Query(settings.PAGE_SIZE, alias="pageSize", ge=1, le=100),
    sort_by: str = Query(settings.SORT_PRODUCTS_BY, alias="sortBy"),
    sort_order: str = Query(settings.SORT_DIR, alias="sortOrder"),
    service: ProductService = Depends(get_product_service),
):
    return service.get_products(page_number, page_size, sort_by, sort_order)
