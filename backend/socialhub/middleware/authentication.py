"""
SocialHub Backend — Bearer Token Authentication Middleware
===========================================================

What:  Resolves the caller's identity from `Authorization: Bearer <token>`.
How:   Validates the token with TokenService, loads the account named by the
       token subject, and attaches it to request.state.identity and to
       current_identity_var for the rest of the request.
Who:   Applied to every request via Starlette middleware.
When:  After RequestIDMiddleware and RequestLoggingMiddleware.

States (single pass, never rejects):
    NoHeader                               → anonymous
    MalformedHeader (no "Bearer " prefix)  → anonymous
    TokenPresent → Invalid                 → anonymous
    TokenPresent → Valid, user missing     → anonymous
    TokenPresent → Valid, user found       → authenticated

    Rejection is the route's job: privileged routes depend on
    require_identity (see socialhub.security.dependencies).

The identity lives for one request only. The ContextVar is reset when the
response returns; nothing is stored between requests.
"""

import logging
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from socialhub.database import async_session_factory
from socialhub.middleware.request_id import request_id_var
from socialhub.models.user import User
from socialhub.repositories.user_repository import UserRepository
from socialhub.security.dependencies import current_identity_var
from socialhub.security.tokens import TokenService, token_service as default_token_service

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(header_value: Optional[str]) -> Optional[str]:
    """Token part of an Authorization header, or None if absent/malformed."""
    if not header_value or not header_value.startswith(BEARER_PREFIX):
        return None
    token = header_value[len(BEARER_PREFIX):].strip()
    return token or None


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """
    Permissive bearer token filter.

    Args:
        token_service: validator to use (defaults to the application instance)
    """

    def __init__(self, app, token_service: Optional[TokenService] = None, **kwargs):
        super().__init__(app, **kwargs)
        self.token_service = token_service or default_token_service

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request.state.identity = None
        identity = await self._resolve_identity(request)
        request.state.identity = identity

        ctx_token = current_identity_var.set(identity)
        try:
            return await call_next(request)
        finally:
            current_identity_var.reset(ctx_token)

    async def _resolve_identity(self, request: Request) -> Optional[User]:
        token = extract_bearer_token(request.headers.get("Authorization"))
        if token is None:
            return None

        result = self.token_service.validate(token)
        if not result.valid:
            logger.info("[%s] Ignoring invalid bearer token", request_id_var.get(""))
            return None

        factory = getattr(request.app.state, "session_factory", async_session_factory)
        async with factory() as session:
            user = await UserRepository(session).get_by_username(result.subject)

        if user is None:
            logger.info(
                "[%s] Bearer token subject no longer exists", request_id_var.get("")
            )
            return None

        if not self.token_service.verify_matches_identity(token, user.username):
            return None

        return user
