"""
Custom exception classes and error handlers
Provides consistent error responses across the application
"""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from typing import Any, Dict, List, Optional
import logging

from .config import settings

logger = logging.getLogger(__name__)


class StorefrontException(HTTPException):
    """Base exception class for the storefront application"""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code

    def extra_content(self) -> Dict[str, Any]:
        """Additional fields merged into the error response body"""
        return {}


class BadRequestException(StorefrontException):
    """400 Bad Request"""

    def __init__(self, detail: str, error_code: str = "BAD_REQUEST"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code
        )


class NotFoundException(StorefrontException):
    """404 Not Found"""

    def __init__(self, detail: str = "Not found", error_code: str = "NOT_FOUND"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            error_code=error_code
        )


class ConflictException(StorefrontException):
    """409 Conflict"""

    def __init__(self, detail: str, error_code: str = "CONFLICT"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code=error_code
        )


# Business logic exceptions
class InsufficientStockException(BadRequestException):
    """Product stock insufficient"""

    def __init__(self, product_name: str, available: int):
        super().__init__(
            detail=f"Insufficient stock for {product_name}. Only {available} available.",
            error_code="INSUFFICIENT_STOCK"
        )
        self.available = available


class CartValidationException(BadRequestException):
    """One or more cart lines failed checkout validation"""

    def __init__(
        self,
        errors: List[Dict[str, Any]],
        validated_items: List[Dict[str, Any]],
        detail: str = "Some items in your cart are not available",
    ):
        super().__init__(detail=detail, error_code="CART_VALIDATION_FAILED")
        self.errors = errors
        self.validated_items = validated_items

    def extra_content(self) -> Dict[str, Any]:
        return {"errors": self.errors, "validatedItems": self.validated_items}


class StaleCartException(ConflictException):
    """Cart was modified by another request"""

    def __init__(self, detail: str = "Cart was modified concurrently, reload and try again"):
        super().__init__(detail=detail, error_code="STALE_CART")


class PaymentGatewayException(StorefrontException):
    """Upstream payment provider failure"""

    def __init__(self, detail: str, error: Optional[str] = None):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            error_code="PAYMENT_GATEWAY_ERROR"
        )
        self.error = error

    def extra_content(self) -> Dict[str, Any]:
        return {"error": self.error} if self.error else {}


class InvalidOrderTransitionException(BadRequestException):
    """Order cannot move to the requested status"""

    def __init__(self, current: str, requested: str):
        super().__init__(
            detail=f"Order cannot change from {current} to {requested}",
            error_code="INVALID_ORDER_TRANSITION"
        )


async def storefront_exception_handler(request: Request, exc: StorefrontException) -> JSONResponse:
    content = {
        "success": False,
        "message": exc.detail,
        "code": exc.error_code,
    }
    content.update(exc.extra_content())
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(content), headers=exc.headers)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    fields = [".".join(str(part) for part in err["loc"] if part != "body") for err in errors]
    message = "Missing or invalid fields: " + ", ".join(f for f in fields if f) if fields else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "message": message, "code": "VALIDATION_ERROR"},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")

    # Don't expose internal errors in production
    detail = str(exc) if settings.DEBUG else "An unexpected error occurred"

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "success": False,
            "message": detail,
            "code": "INTERNAL_ERROR",
            "request_id": getattr(request.state, "request_id", None),
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error handlers that render every failure as {success: false, message}"""
    app.add_exception_handler(StorefrontException, storefront_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
