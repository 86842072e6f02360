"""
SocialHub Backend — ORM Models
===============================

One module per table. Models hold foreign-key ids only; there are no ORM
relationship() back-references between them. Importing this package
registers every table on Base.metadata (used by Alembic and the tests).
"""

from socialhub.models.user import User
from socialhub.models.post import Post
from socialhub.models.follow import Follow
from socialhub.models.like import Like
from socialhub.models.comment import Comment

__all__ = ["User", "Post", "Follow", "Like", "Comment"]
