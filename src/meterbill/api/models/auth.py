"""Pydantic models for authentication."""

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

BCRYPT_MAX_BYTES = 72


class LoginRequest(BaseModel):
    """Request model for user login.

    Attributes
    ----------
    username : str
        Account username
    password : str
        Account password
    """

    username: str = Field(..., description="Account username", min_length=1)
    password: str = Field(..., description="Account password", min_length=1)

    model_config = {"json_schema_extra": {"example": {"username": "ayesha", "password": "mypassword"}}}


class RegisterRequest(BaseModel):
    """Request model for creating an account.

    Attributes
    ----------
    username : str
        Desired username, 3 to 64 characters
    password : str
        Password of at least 8 characters and at most 72 bytes in UTF-8
        (bcrypt ignores anything longer)
    """

    username: str = Field(..., description="Account username", min_length=3, max_length=64)
    password: str = Field(..., description="Account password", min_length=8)

    model_config = {"json_schema_extra": {"example": {"username": "ayesha", "password": "mypassword"}}}

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password must be at most {BCRYPT_MAX_BYTES} bytes in UTF-8")
        return value


class UserResponse(BaseModel):
    """Response model for a registered user."""

    id: int
    username: str


class TokenResponse(BaseModel):
    """Response model for successful authentication.

    Attributes
    ----------
    access_token : str
        JWT access token
    token_type : str
        Token type (always "bearer")
    expires_in : int
        Token expiration time in seconds
    """

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiration in seconds")

    model_config = {
        "json_schema_extra": {
            "example": {
                "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
                "token_type": "bearer",
                "expires_in": 86400,
            }
        }
    }


class TokenData(BaseModel):
    """Data extracted from JWT token.

    Attributes
    ----------
    user_id : int
        Database id of the user
    username : str
        Account username
    exp : datetime
        Token expiration timestamp
    """

    user_id: int
    username: str
    exp: datetime


class TokenVerifyResponse(BaseModel):
    """Response for token verification.

    Attributes
    ----------
    valid : bool
        Whether the token is valid
    user_id : int | None
        User ID if token is valid
    username : str | None
        Username if token is valid
    expires_at : datetime | None
        Token expiration time if valid
    """

    valid: bool
    user_id: int | None = None
    username: str | None = None
    expires_at: datetime | None = None
