"""
SocialHub Backend — Bearer Token Service
=========================================

What:  Issues and validates signed, time-limited bearer tokens.
How:   PyJWT compact JWS, HMAC-SHA256 with the server-held JWT_SECRET.
Who:   AuthService (issue at login/registration), AuthenticationMiddleware
       (validate on every request carrying a bearer header), and
       POST /api/auth/validate.

Token claims:
    {
        "sub": "alice_smith",   # username
        "iat": 1705312800,      # issued-at, seconds since epoch (UTC)
        "exp": 1705399200       # iat + JWT_EXPIRATION_SECONDS (24h default)
    }

Validation contract:
    validate() fails closed and never raises. Every call checks:
        1. the token is a non-empty string with three JWS segments
        2. the HMAC signature matches (PyJWT)
        3. sub/iat/exp are present and sub is a non-empty string
        4. exp is still in the future (PyJWT, then again against this
           service's clock)
    Nothing is cached between calls. There is no revocation list: a token
    stays valid until it expires.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import jwt

from socialhub.config import settings

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "iat", "exp"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class TokenValidation:
    """Outcome of TokenService.validate(); `subject` is set only when valid."""

    valid: bool
    subject: Optional[str] = None

    @classmethod
    def invalid(cls) -> "TokenValidation":
        return cls(valid=False, subject=None)


class TokenService:
    """
    Stateless bearer token issuer/validator.

    Args:
        secret:     HMAC key (defaults to settings.jwt_secret)
        algorithm:  HS256/HS384/HS512 (defaults to settings.jwt_algorithm)
        expiration: token lifetime (defaults to settings.jwt_expiration_seconds)
        clock:      returns the current aware UTC datetime; tests pass a fixed one
    """

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: Optional[str] = None,
        expiration: Optional[timedelta] = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._secret = secret or settings.jwt_secret
        self.algorithm = algorithm or settings.jwt_algorithm
        self.expiration = expiration or timedelta(seconds=settings.jwt_expiration_seconds)
        self._clock = clock

    def issue(self, subject: str) -> str:
        """Return a compact signed token for `subject` valid for `expiration`."""
        issued_at = self._clock()
        payload = {
            "sub": subject,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self.expiration).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def validate(self, token: Optional[str]) -> TokenValidation:
        """
        Check signature, required claims and expiry.

        Returns TokenValidation(valid=False) for any failure: None or empty
        input, structural corruption, wrong signature, missing claims,
        expired token.
        """
        if not isinstance(token, str) or not token:
            return TokenValidation.invalid()

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired bearer token")
            return TokenValidation.invalid()
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected bearer token: %s", type(e).__name__)
            return TokenValidation.invalid()

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            return TokenValidation.invalid()

        # PyJWT compares exp to the wall clock; repeat against the injected clock
        try:
            expires_at = int(payload["exp"])
        except (TypeError, ValueError):
            return TokenValidation.invalid()
        if expires_at <= int(self._clock().timestamp()):
            return TokenValidation.invalid()

        return TokenValidation(valid=True, subject=subject)

    def verify_matches_identity(self, token: Optional[str], expected_username: str) -> bool:
        """True iff the token is valid and its subject equals `expected_username`."""
        result = self.validate(token)
        return result.valid and result.subject == expected_username


# Default instance built from settings
token_service = TokenService()


def get_token_service() -> TokenService:
    """FastAPI dependency returning the application's token service."""
    return token_service
