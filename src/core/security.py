"""
Core security utilities for authentication and password handling.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool
import logging

from ..config import Settings
from ..auth.exceptions import InvalidTokenException, TokenExpiredException

# Set up logging
logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.
    
    Args:
        password: Plain text password
        
    Returns:
        str: Salted password hash
    """
    return pwd_context.hash(password)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a password against a hash.
    
    Args:
        plain_password: Plain text password
        hashed_password: Hashed password to compare against
        
    Returns:
        bool: True if password matches hash
    """
    return pwd_context.verify(plain_password, hashed_password)

async def hash_password_async(password: str) -> str:
    """Hash a password without blocking the event loop."""
    return await run_in_threadpool(hash_password, password)

async def verify_password_async(plain_password: str, hashed_password: str) -> bool:
    """Verify a password without blocking the event loop."""
    return await run_in_threadpool(verify_password, plain_password, hashed_password)


class TokenService:
    """
    Issues and verifies signed, time-limited identity tokens.
    
    The signing key is fixed at construction time. Instances hold no
    mutable state and are shared by all concurrent requests.
    
    Attributes:
        secret_key: Symmetric signing secret
        algorithm: JWT signing algorithm
        expires_delta: Lifetime of every issued token
    """
    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_delta: timedelta = timedelta(hours=1)):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        """Build the process-wide token service from application settings."""
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
        )

    def issue(self, identity_id: int, now: Optional[datetime] = None) -> str:
        """
        Create a JWT bound to one identity.
        
        Args:
            identity_id: ID of the identity the token proves
            now: Issuance time, defaults to the current UTC time
            
        Returns:
            str: Encoded JWT token
        """
        issued_at = now or datetime.now(timezone.utc)
        to_encode = {
            "id": identity_id,
            "iat": issued_at,
            "exp": issued_at + self.expires_delta,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> int:
        """
        Verify a JWT and return the identity it was issued for.
        
        Args:
            token: JWT token string
            
        Returns:
            int: Identity ID carried by the token
            
        Raises:
            TokenExpiredException: If the signature is valid but the token expired
            InvalidTokenException: If the token is malformed, unsigned or tampered with
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise TokenExpiredException()
        except JWTError:
            raise InvalidTokenException()

        identity_id = payload.get("id")
        # bool is an int subclass and never a valid id
        if not isinstance(identity_id, int) or isinstance(identity_id, bool):
            raise InvalidTokenException()
        return identity_id
