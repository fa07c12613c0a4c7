# backend/config.py
from pydantic_settings import BaseSettings
from typing import ClassVar, Optional
from pathlib import Path

# Resolve absolute path to the .env file for reliable loading
env_path = Path(__file__).parent.parent / ".env"

class Settings(BaseSettings):
    SECRET_KEY: str = "dev-secret-change-me"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    DATABASE_URL: str = "sqlite:///./database_shop.db"

    # Paging defaults shared by every paginated endpoint
    PAGE_NUMBER: int = 0
    PAGE_SIZE: int = 2
    SORT_DIR: str = "asc"
    SORT_COUPONS_BY: str = "discountPercentage"
    SORT_ORDERS_BY: str = "totalAmount"
    SORT_PRODUCTS_BY: str = "productId"

    LOG_LEVEL: str = "INFO"
    FRONTEND_URL: Optional[str] = None

    class Config:
        env_file: ClassVar[str] = str(env_path)
        extra: ClassVar[str] = "ignore"

settings = Settings()
