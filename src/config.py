"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.
    
    Attributes:
        database_url: SQLAlchemy async connection string
        sql_echo: Whether SQLAlchemy should log emitted SQL
        
        secret_key: Secret key for JWT token signing
        algorithm: Algorithm used for JWT signing (typically HS256)
        access_token_expire_minutes: Token lifetime in minutes
        auth_header_name: Request header that carries the token
        
        cors_origins: Origins allowed by the CORS middleware
        log_level: Root logging level
    """
    # Database settings
    database_url: str = "sqlite+aiosqlite:///./clinic.db"
    sql_echo: bool = False
    
    # JWT settings
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60
    auth_header_name: str = "x-auth-token"
    
    # HTTP settings
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False

# Create settings instance
settings = Settings()
