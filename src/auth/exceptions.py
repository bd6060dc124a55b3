"""
Authentication-specific exceptions.
"""
from typing import Optional
from fastapi import status
from ..exceptions import AppException

class AuthException(AppException):
    """Base class for authentication exceptions."""
    def __init__(self, status_code: int, detail: str, code: Optional[str] = None):
        super().__init__(status_code=status_code, detail=detail, code=code)

class NotAuthenticatedException(AuthException):
    """Exception raised when a request carries no token at all."""
    def __init__(self, detail: str = "No token, authorization denied"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail, code="token_missing")

class InvalidTokenException(AuthException):
    """Exception raised when a token is malformed, unsigned or tampered with."""
    def __init__(self, detail: str = "Token is not valid"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail, code="token_invalid")

class TokenExpiredException(InvalidTokenException):
    """
    Exception raised when a correctly signed token has expired.
    
    Subclasses InvalidTokenException so callers outside the token service
    see the same outward response for both failures.
    """

class InvalidCredentialsException(AuthException):
    """Exception raised when login credentials are invalid."""
    def __init__(self, detail: str = "Invalid credentials"):
        super().__init__(status_code=status.HTTP_401_UNAUTHORIZED, detail=detail)

class EmailAlreadyExistsException(AuthException):
    """Exception raised when email already exists."""
    def __init__(self, detail: str = "User already exists"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)
