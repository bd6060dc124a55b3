"""
FastAPI dependencies for authentication.

The gate runs before every resource route. It resolves the calling identity
from the token header without touching storage.
"""
import logging
from typing import Optional
from fastapi import Depends, Request
from fastapi.security import APIKeyHeader

from ..config import settings
from ..core.security import TokenService
from .exceptions import InvalidTokenException, NotAuthenticatedException
from .schemas import CurrentIdentity

# Set up logging
logger = logging.getLogger(__name__)

# Token header scheme, also documents the header in OpenAPI
token_header = APIKeyHeader(name=settings.auth_header_name, auto_error=False)

def get_token_service(request: Request) -> TokenService:
    """Return the process-wide token service built at startup."""
    return request.app.state.token_service

def get_current_identity(
    request: Request,
    token: Optional[str] = Depends(token_header),
    token_service: TokenService = Depends(get_token_service)
) -> CurrentIdentity:
    """
    Resolve the identity behind the request token.
    
    Args:
        request: Incoming request, receives the identity in its state
        token: Raw token from the auth header
        token_service: Process-wide token service
        
    Returns:
        CurrentIdentity: The verified caller
        
    Raises:
        NotAuthenticatedException: If no token was sent
        InvalidTokenException: If the token is invalid or expired
    """
    if not token:
        logger.warning(f"Rejected {request.method} {request.url.path}: no token")
        raise NotAuthenticatedException()

    try:
        identity_id = token_service.verify(token)
    except InvalidTokenException:
        # Expired and tampered tokens share one outward response
        logger.warning(f"Rejected {request.method} {request.url.path}: invalid token")
        raise InvalidTokenException()

    request.state.identity_id = identity_id
    return CurrentIdentity(id=identity_id)
