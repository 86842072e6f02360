"""
SocialHub Backend — Database Error Translation
===============================================

What:  Decorator that converts SQLAlchemy failures escaping a service method
       into DatabaseError, logging the original server-side.
Who:   Applied to every public service method.

Application exceptions (SocialHubError) pass through untouched.
"""

import functools
import logging

from sqlalchemy.exc import SQLAlchemyError

from socialhub.exceptions import DatabaseError

logger = logging.getLogger(__name__)


def translate_database_errors(operation: str):
    """
    Wrap an async service method so driver errors become DatabaseError.

    Args:
        operation: short description used in the server-side log line
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except SQLAlchemyError as e:
                logger.error("Database error while %s: %s", operation, str(e), exc_info=True)
                raise DatabaseError(
                    context={"original_error": type(e).__name__},
                ) from e

        return wrapper

    return decorator
