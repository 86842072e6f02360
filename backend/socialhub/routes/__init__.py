"""
SocialHub Backend — HTTP Routes
================================

One APIRouter per resource, mounted by create_app():

    /api/auth       auth.py       register, login, validate, me
    /api/users      users.py      profiles, search, follow lists
    /api/posts      posts.py      posts, listings, feed
    /api/follows    follows.py    follow graph
    /api/likes      likes.py      likes and statistics
    /api/comments   comments.py   comments
    /health         health.py     liveness and database probe

Handlers stay thin: parse parameters, apply the access policy
(require_identity / ensure_actor), delegate to a service.
"""
