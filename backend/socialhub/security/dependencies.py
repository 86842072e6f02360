"""
SocialHub Backend — Route Access Policy
========================================

What:  FastAPI dependencies through which every route declares its policy.
How:   AuthenticationMiddleware has already resolved the caller (or left the
       request anonymous). These helpers only read that result.

Policy vocabulary:
    public              no dependency
    requires identity   identity: User = Depends(require_identity)
                        → 401 when the request is anonymous
    acting user         ensure_actor(identity, user_id) inside the handler
                        → 403 when the path names someone else

Example:
    @router.post("/{follower_id}/follow/{following_id}")
    async def follow_user(
        follower_id: int,
        following_id: int,
        identity: User = Depends(require_identity),
        ...
    ):
        ensure_actor(identity, follower_id)
"""

from contextvars import ContextVar
from typing import Optional

from fastapi import Request

from socialhub.exceptions import AuthenticationError, ForbiddenError
from socialhub.models.user import User

# Coroutine-local caller identity, set and reset by AuthenticationMiddleware
current_identity_var: ContextVar[Optional[User]] = ContextVar("current_identity", default=None)


def get_optional_identity(request: Request) -> Optional[User]:
    """The authenticated caller, or None for anonymous requests (require_identity builds on it)."""
    return getattr(request.state, "identity", None)


def require_identity(request: Request) -> User:
    """The authenticated caller; raises AuthenticationError when anonymous."""
    identity = get_optional_identity(request)
    if identity is None:
        raise AuthenticationError(
            message="Authentication required. Send 'Authorization: Bearer <token>'."
        )
    return identity


def ensure_actor(identity: User, user_id: int) -> None:
    """Raise ForbiddenError unless the caller is the user the path acts for."""
    if identity.id != user_id:
        raise ForbiddenError(
            message="You can only perform this action for your own account",
            context={"caller_id": identity.id, "target_user_id": user_id},
        )
