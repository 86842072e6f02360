"""
SocialHub Backend — Authentication Service
===========================================

What:  Registration, login and token validation.
How:   Composes UserRepository (credential store), PasswordHasher and
       TokenService. Both collaborators are injected so tests can swap a
       low-cost hasher or a fixed-clock token service.
Who:   Called by the /api/auth routes.

Flows:
    register:  hash once → INSERT → CONFLICT? → 409 naming the taken field
                                   → CREATED  → issue token
    login:     lookup by username or email → verify once → issue token
               unknown account and wrong password produce the same 401
    validate:  TokenService.validate; never raises for a bad token
"""

import logging
from typing import Optional

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from socialhub.exceptions import AuthenticationError, ConflictError, ValidationError
from socialhub.models.user import User
from socialhub.repositories.user_repository import UserRepository
from socialhub.schemas.auth import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    TokenValidateResponse,
)
from socialhub.security.passwords import PasswordHasher, get_password_hasher
from socialhub.security.tokens import TokenService, get_token_service
from socialhub.services.errors import translate_database_errors

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid username/email or password"


class AuthService:
    """
    Args:
        hasher: password hasher used for registration and login
        tokens: bearer token issuer/validator
    """

    def __init__(self, hasher: PasswordHasher, tokens: TokenService):
        self.hasher = hasher
        self.tokens = tokens

    def _auth_response(self, user: User) -> AuthResponse:
        return AuthResponse(
            token=self.tokens.issue(user.username),
            id=user.id,
            username=user.username,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
        )

    @translate_database_errors("registering an account")
    async def register(self, db: AsyncSession, request: RegisterRequest) -> AuthResponse:
        """
        Create an account and return a token for it.

        Raises:
            ConflictError: username or email already taken (→ 409)
        """
        users = UserRepository(db)
        result = await users.create(
            username=request.username,
            email=str(request.email),
            password_hash=self.hasher.hash(request.password),
            first_name=request.first_name,
            last_name=request.last_name,
            bio=request.bio,
        )

        if result.conflict:
            # The INSERT already failed; look up which column collided for the message
            if await users.username_exists(request.username):
                raise ConflictError(message="Username is already taken", field="username")
            raise ConflictError(message="Email is already in use", field="email")

        user = result.entity
        logger.info("Registered user %s (id=%s)", user.username, user.id)
        return self._auth_response(user)

    @translate_database_errors("logging in")
    async def login(self, db: AsyncSession, request: LoginRequest) -> AuthResponse:
        """
        Exchange credentials for a token.

        Raises:
            AuthenticationError: unknown account or wrong password (→ 401)
        """
        user = await UserRepository(db).get_by_username_or_email(request.username_or_email)
        if user is None or not self.hasher.verify(request.password, user.password_hash):
            logger.info("Failed login attempt")
            raise AuthenticationError(message=INVALID_CREDENTIALS_MESSAGE)

        logger.info("User %s logged in", user.username)
        return self._auth_response(user)

    def validate(self, token: Optional[str]) -> TokenValidateResponse:
        """
        Report whether `token` is currently valid.

        Raises:
            ValidationError: token missing or blank (→ 400)
        """
        if token is None or not token.strip():
            raise ValidationError(message="Token is required", field="token")

        result = self.tokens.validate(token.strip())
        return TokenValidateResponse(valid=result.valid, username=result.subject)


def get_auth_service(
    hasher: PasswordHasher = Depends(get_password_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    """FastAPI dependency assembling AuthService from its injected parts."""
    return AuthService(hasher=hasher, tokens=tokens)
