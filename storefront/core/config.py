"""
Application configuration management using Pydantic Settings
Handles all environment variables and application settings
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List, Literal
from functools import lru_cache


class Settings(BaseSettings):
    """Main application settings"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Application Settings
    APP_NAME: str = "Storefront API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    WORKERS: int = 1

    # Database Configuration
    DATABASE_URL: str = "sqlite:///./storefront.db"
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 40
    DATABASE_POOL_TIMEOUT: int = 30
    DATABASE_ECHO: bool = False

    # CORS Configuration
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Payment Gateway
    PAYMENT_MODE: Literal["demo", "sandbox", "live"] = "sandbox"
    PAYPAL_CLIENT_ID: Optional[str] = None
    PAYPAL_CLIENT_SECRET: Optional[str] = None
    PAYMENT_CURRENCY: str = "USD"
    PAYMENT_RETURN_URL: str = "http://localhost:5173/shop/paypal-return"
    PAYMENT_CANCEL_URL: str = "http://localhost:5173/shop/paypal-cancel"
    PAYMENT_TIMEOUT_SECONDS: float = 30.0
    MOCK_PAYMENT_LATENCY: float = 1.0  # multiplier for simulated gateway delay

    # Cart limits
    MAX_CART_ITEMS: int = 50
    MAX_CART_QUANTITY: int = 100
    MAX_LINE_QUANTITY: int = 999
    GUEST_CART_EXPIRY_DAYS: int = 30

    @property
    def database_url_async(self) -> str:
        """Convert sync database URL to async"""
        if self.DATABASE_URL.startswith("postgresql://"):
            return self.DATABASE_URL.replace("postgresql://", "postgresql+asyncpg://")
        elif self.DATABASE_URL.startswith("sqlite://"):
            return self.DATABASE_URL.replace("sqlite://", "sqlite+aiosqlite://")
        return self.DATABASE_URL

    @property
    def is_demo_payment(self) -> bool:
        return self.PAYMENT_MODE == "demo"


@lru_cache()
def get_settings() -> Settings:
    """
    Create cached settings instance
    This ensures settings are loaded only once
    """
    return Settings()


# Global settings instance
settings = get_settings()
