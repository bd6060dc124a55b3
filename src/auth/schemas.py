"""
User Schemas - Pydantic models for authentication payloads and the resolved identity.
"""
from dataclasses import dataclass
from pydantic import BaseModel, EmailStr, Field

class UserRegistration(BaseModel):
    """
    User Registration Schema - Used for self-registration
    
    Fields:
    - name: Display name
    - email: User's email address
    - password: Plain text password (hashed before storage)
    """
    name: str = Field(..., min_length=1, max_length=100, description="Name is required")
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72, description="Password must be at least 6 characters")

class UserLogin(BaseModel):
    """
    User Login Schema - Used for authentication
    
    Fields:
    - email: User's email address
    - password: User's plain text password
    """
    email: EmailStr
    password: str

class TokenResponse(BaseModel):
    """Token returned by registration and login."""
    token: str


@dataclass(frozen=True)
class CurrentIdentity:
    """Identity resolved from a verified token and attached to the request."""
    id: int
