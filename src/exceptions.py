"""
Global exception handlers and custom exception classes.
"""
from typing import Any, Dict, List, Optional
from fastapi import Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
import logging

# Set up logging
logger = logging.getLogger(__name__)

class AppException(Exception):
    """
    Base exception class for application-specific exceptions.
    """
    def __init__(self, status_code: int, detail: str, code: Optional[str] = None):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail
        self.code = code


class ResourceNotFoundException(AppException):
    """
    Raised when a resource does not exist or belongs to another identity.
    Both cases share the same response on purpose.
    """
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ReferenceValidationException(AppException):
    """
    Raised when a payload references rows that do not exist.
    Rendered with the same shape as request validation errors.
    """
    def __init__(self, errors: List[Dict[str, Any]]):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail="Validation error")
        self.errors = errors


class StorageFailureException(AppException):
    """Raised when the persistence layer fails unexpectedly."""
    def __init__(self, detail: str = "Server error"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def _format_validation_errors(errors) -> List[Dict[str, Any]]:
    return [
        {
            "loc": list(error.get("loc", ())),
            "msg": error.get("msg"),
            "type": error.get("type"),
        }
        for error in errors
    ]


async def app_exception_handler(request: Request, exc: AppException):
    """
    Handler for application-specific exceptions.
    
    Args:
        request: The request that caused the exception
        exc: The exception instance
        
    Returns:
        JSONResponse: Standardized error response
    """
    if exc.status_code >= 500:
        logger.error(f"Application error on {request.method} {request.url.path}: {exc.detail}")
    else:
        logger.info(f"Request rejected on {request.method} {request.url.path}: {exc.status_code} {exc.detail}")

    content: Dict[str, Any] = {"detail": exc.detail}
    if exc.code:
        content["code"] = exc.code
    if isinstance(exc, ReferenceValidationException):
        content["errors"] = exc.errors
    return JSONResponse(status_code=exc.status_code, content=content)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """
    Handler for request validation exceptions.
    
    Every violated constraint is reported, not just the first one.
    
    Args:
        request: The request that caused the exception
        exc: The validation exception instance
        
    Returns:
        JSONResponse: 400 response with field-level validation details
    """
    errors = _format_validation_errors(exc.errors())
    logger.info(f"Validation error on {request.method} {request.url.path}: {len(errors)} violation(s)")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=jsonable_encoder({
            "detail": "Validation error",
            "errors": errors
        })
    )


async def storage_exception_handler(request: Request, exc: SQLAlchemyError):
    """
    Handler for persistence errors that escaped the service layer.
    
    The storage error is logged but never echoed back to the caller.
    """
    logger.error(f"Storage failure on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Server error"}
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Last-resort handler so one failing request never takes the worker down."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Server error"}
    )


# Register exception handlers with FastAPI app
def register_exception_handlers(app):
    """
    Register all exception handlers with the FastAPI application.
    
    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, storage_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
