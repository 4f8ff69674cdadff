"""Authentication routes."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from meterbill.api.dependencies import (
    CurrentToken,
    RepositoryService,
    create_access_token,
    get_password_hash,
    verify_password,
)
from meterbill.api.models.auth import (
    LoginRequest,
    RegisterRequest,
    TokenResponse,
    TokenVerifyResponse,
    UserResponse,
)
from meterbill.exceptions.errors import LoginError

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, repository: RepositoryService) -> UserResponse:
    """Create an account.

    Parameters
    ----------
    request : RegisterRequest
        Desired username and password
    repository : Repository
        Data access

    Returns
    -------
    UserResponse
        The new user

    Raises
    ------
    UserExistsError
        409 if the username is taken

    Examples
    --------
    ```bash
    curl -X POST "http://localhost:8000/auth/register" \\
        -H "Content-Type: application/json" \\
        -d '{"username": "ayesha", "password": "mypassword"}'
    ```
    """
    user_id = await repository.create_user(request.username, get_password_hash(request.password))
    return UserResponse(id=user_id, username=request.username)


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, repository: RepositoryService) -> TokenResponse:
    """Authenticate user and return JWT access token.

    Parameters
    ----------
    request : LoginRequest
        Login credentials (username and password)
    repository : Repository
        Data access

    Returns
    -------
    TokenResponse
        JWT access token with expiration time

    Raises
    ------
    LoginError
        401 if credentials are invalid

    Examples
    --------
    ```bash
    curl -X POST "http://localhost:8000/auth/login" \\
        -H "Content-Type: application/json" \\
        -d '{"username": "ayesha", "password": "mypassword"}'
    ```
    """
    user = await repository.get_user_by_username(request.username)
    if user is None or not verify_password(request.password, user["password_hash"]):
        raise LoginError("Invalid username or password")

    access_token, expires_in = create_access_token(user["id"], user["username"])
    return TokenResponse(access_token=access_token, token_type="bearer", expires_in=expires_in)


@router.get("/verify", response_model=TokenVerifyResponse)
async def verify(token: CurrentToken) -> TokenVerifyResponse:
    """Verify JWT token validity.

    Examples
    --------
    ```bash
    curl -X GET "http://localhost:8000/auth/verify" \\
        -H "Authorization: Bearer YOUR_TOKEN"
    ```
    """
    return TokenVerifyResponse(
        valid=True, user_id=token.user_id, username=token.username, expires_at=token.exp
    )


@router.post("/logout")
async def logout(token: CurrentToken) -> JSONResponse:
    """Logout user.

    Tokens are stateless, so the client is expected to discard its token.
    """
    return JSONResponse(content={"message": "Logged out successfully", "user_id": token.user_id})


@router.post("/refresh", response_model=TokenResponse)
async def refresh_token(token: CurrentToken) -> TokenResponse:
    """Issue a new token with a fresh expiration time.

    Examples
    --------
    ```bash
    curl -X POST "http://localhost:8000/auth/refresh" \\
        -H "Authorization: Bearer YOUR_TOKEN"
    ```
    """
    new_token, expires_in = create_access_token(token.user_id, token.username)
    return TokenResponse(access_token=new_token, token_type="bearer", expires_in=expires_in)
