"""FastAPI dependencies for authentication and service injection."""

from datetime import datetime, timedelta, timezone
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from meterbill.api.config import get_settings
from meterbill.api.database import Database, get_database
from meterbill.api.models.auth import TokenData
from meterbill.api.services.cache import HybridCache, get_cache
from meterbill.api.services.repository import Repository

# Security setup
security = HTTPBearer()
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def create_access_token(user_id: int, username: str) -> tuple[str, int]:
    """Create JWT access token for a user.

    Parameters
    ----------
    user_id : int
        Database id of the user
    username : str
        Account username

    Returns
    -------
    tuple[str, int]
        Tuple of (access_token, expires_in_seconds)

    Notes
    -----
    The token contains:
    - sub (user id as a string)
    - username
    - exp (expiration timestamp)
    """
    settings = get_settings()

    expire = datetime.now(timezone.utc) + timedelta(seconds=settings.JWT_EXPIRATION)
    token_data = {
        "sub": str(user_id),
        "username": username,
        "exp": expire,
    }

    access_token = jwt.encode(token_data, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
    return access_token, settings.JWT_EXPIRATION


def verify_token(token: str) -> TokenData:
    """Verify JWT token and extract data.

    Parameters
    ----------
    token : str
        JWT access token

    Returns
    -------
    TokenData
        Extracted token data

    Raises
    ------
    HTTPException
        If token is invalid or expired (401)
    """
    settings = get_settings()

    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid token: {e!s}",
            headers={"WWW-Authenticate": "Bearer"},
        ) from e

    subject: str | None = payload.get("sub")
    username: str | None = payload.get("username")
    exp_timestamp: int | None = payload.get("exp")

    if not subject or not subject.isdigit() or not username or exp_timestamp is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: missing required fields",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return TokenData(
        user_id=int(subject),
        username=username,
        exp=datetime.fromtimestamp(exp_timestamp, tz=timezone.utc),
    )


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hashed password.

    Parameters
    ----------
    plain_password : str
        Plain text password
    hashed_password : str
        Bcrypt hashed password

    Returns
    -------
    bool
        True if password matches
    """
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash password using bcrypt.

    Parameters
    ----------
    password : str
        Plain text password

    Returns
    -------
    str
        Bcrypt hashed password
    """
    return pwd_context.hash(password)


async def get_current_token(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(security)],
) -> TokenData:
    """Extract and verify JWT token from Authorization header.

    Parameters
    ----------
    credentials : HTTPAuthorizationCredentials
        Authorization credentials from request header

    Returns
    -------
    TokenData
        Verified token data

    Raises
    ------
    HTTPException
        If token is invalid or expired (401)
    """
    return verify_token(credentials.credentials)


async def get_database_service() -> Database:
    """Get database instance."""
    return get_database()


async def get_cache_service() -> HybridCache:
    """Get cache service instance."""
    return get_cache()


async def get_repository(
    db: Annotated[Database, Depends(get_database_service)],
) -> Repository:
    """Build the repository over the shared database."""
    return Repository(db)


# Type aliases for cleaner endpoint signatures
CurrentToken = Annotated[TokenData, Depends(get_current_token)]
CacheService = Annotated[HybridCache, Depends(get_cache_service)]
RepositoryService = Annotated[Repository, Depends(get_repository)]
