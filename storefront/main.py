"""Main FastAPI application"""

from fastapi import FastAPI
from contextlib import asynccontextmanager
from datetime import datetime, timezone
import logging

from storefront.core.config import settings
from storefront.core.database import init_db, close_db
from storefront.core.exceptions import register_exception_handlers
from storefront.core.middleware import setup_middleware
from storefront.api import api_router
from storefront.api.v1.payments.services import create_payment_service

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager"""
    logger.info(f"Starting up {settings.APP_NAME} ({settings.ENVIRONMENT})...")
    await init_db()

    yield

    logger.info(f"Shutting down {settings.APP_NAME}...")
    await close_db()


# Create FastAPI app
app = FastAPI(
    title=settings.APP_NAME,
    description="Storefront API with guest carts, checkout validation and payments",
    version=settings.APP_VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
    openapi_url="/api/openapi.json",
    lifespan=lifespan
)

register_exception_handlers(app)
setup_middleware(app)

# Payment gateway is chosen once, from configuration
app.state.payment_service = create_payment_service(settings)

app.include_router(api_router, prefix="/api")


@app.get("/api/health")
async def health_check():
    return {"ok": True, "timestamp": datetime.now(timezone.utc).isoformat()}


@app.get("/")
async def root():
    return {
        "app": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/api/docs",
        "health": "/api/health"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "storefront.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        workers=settings.WORKERS
    )
