"""
Authentication routes: registration and login.

These are the only resource-adjacent routes that do not pass through the token gate.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..core.security import TokenService
from .dependencies import get_token_service
from .schemas import UserRegistration, UserLogin, TokenResponse
from .service import register_user, login_user

router = APIRouter()

@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED, summary="Register")
async def register_route(
    registration: UserRegistration,
    db: AsyncSession = Depends(get_db),
    token_service: TokenService = Depends(get_token_service)
):
    """
    Register a new identity.
    
    Returns a token for the new identity. A duplicate email yields 409.
    """
    token = await register_user(
        db=db,
        token_service=token_service,
        name=registration.name,
        email=registration.email,
        password=registration.password
    )
    return TokenResponse(token=token)

@router.post("/login", response_model=TokenResponse, summary="Login")
async def login_route(
    login_data: UserLogin,
    db: AsyncSession = Depends(get_db),
    token_service: TokenService = Depends(get_token_service)
):
    """
    Exchange email and password for a token.
    
    Unknown emails and wrong passwords produce the same 401 response.
    """
    token = await login_user(
        db=db,
        token_service=token_service,
        email=login_data.email,
        password=login_data.password
    )
    return TokenResponse(token=token)
