"""
SocialHub Backend — Authentication Schemas
===========================================

What:  Payloads for register/login/validate and the token response.

Passwords only ever appear in request models. No response model in this
package declares a password field.
"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from socialhub.security.passwords import MAX_PASSWORD_BYTES, exceeds_bcrypt_limit


class RegisterRequest(BaseModel):
    username: str = Field(min_length=3, max_length=50, examples=["alice_smith"])
    email: EmailStr = Field(examples=["alice.smith@email.com"])
    password: str = Field(min_length=6, max_length=MAX_PASSWORD_BYTES)
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    bio: Optional[str] = Field(default=None, max_length=500)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        # Characters can be multibyte; the limit is on encoded bytes
        if exceeds_bcrypt_limit(v):
            raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return v


class LoginRequest(BaseModel):
    username_or_email: str = Field(min_length=1, examples=["alice_smith"])
    password: str = Field(min_length=1)


class AuthResponse(BaseModel):
    """
    Returned by login and registration.

    Example:
        {
            "token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9...",
            "type": "Bearer",
            "id": 1,
            "username": "alice_smith",
            "email": "alice.smith@email.com",
            "first_name": "Alice",
            "last_name": "Smith"
        }
    """
    token: str
    type: str = "Bearer"
    id: int
    username: str
    email: str
    first_name: str
    last_name: str


class TokenValidateRequest(BaseModel):
    token: Optional[str] = None


class TokenValidateResponse(BaseModel):
    valid: bool
    username: Optional[str] = None
