"""
Authentication service layer for business logic.
"""
import logging
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.security import TokenService, hash_password, hash_password_async, verify_password_async
from ..exceptions import StorageFailureException
from .models import User
from .exceptions import InvalidCredentialsException, EmailAlreadyExistsException

# Set up logging
logger = logging.getLogger(__name__)

# Checked when the email is unknown so both failure paths cost one bcrypt verify
DUMMY_PASSWORD_HASH = hash_password("clinic-records-dummy-password")

async def register_user(
    db: AsyncSession,
    token_service: TokenService,
    name: str,
    email: str,
    password: str
) -> str:
    """
    Register a new identity and issue its first token.
    
    Args:
        db: Database session
        token_service: Process-wide token service
        name: Display name
        email: User's email address
        password: User's password
        
    Returns:
        str: Signed token for the new identity
        
    Raises:
        EmailAlreadyExistsException: If the email is already registered
        StorageFailureException: If the user could not be stored
    """
    existing = await db.scalar(select(User.id).where(User.email == email))
    if existing is not None:
        logger.warning(f"Registration failed: Email {email} already registered")
        raise EmailAlreadyExistsException()

    user = User(
        name=name,
        email=email,
        password_hash=await hash_password_async(password)
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError:
        # A concurrent registration claimed the email after the check above
        await db.rollback()
        logger.warning(f"Registration failed: Email {email} registered concurrently")
        raise EmailAlreadyExistsException()
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"Error registering user {email}: {str(e)}")
        raise StorageFailureException()

    logger.info(f"User registered: {user.id}")
    return token_service.issue(user.id)

async def login_user(
    db: AsyncSession,
    token_service: TokenService,
    email: str,
    password: str
) -> str:
    """
    Authenticate a user and issue a token.
    
    Args:
        db: Database session
        token_service: Process-wide token service
        email: User's email address
        password: User's password
        
    Returns:
        str: Signed token for the identity
        
    Raises:
        InvalidCredentialsException: If the email is unknown or the password is wrong
    """
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()

    password_hash = user.password_hash if user else DUMMY_PASSWORD_HASH
    password_ok = await verify_password_async(password, password_hash)

    if not user or not password_ok:
        logger.warning(f"Login failed: Invalid credentials for {email}")
        raise InvalidCredentialsException()

    logger.info(f"Login successful: User {user.id}")
    return token_service.issue(user.id)
