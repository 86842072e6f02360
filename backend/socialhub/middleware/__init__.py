"""
SocialHub Backend — Middleware Package
=======================================

What:  Cross-cutting concerns applied to every request.

Middleware Chain (order matters!):
    Request → [Request ID] → [Logging] → [Authentication] → [GZip] → [CORS] → Route Handler

    1. Request ID: correlation ID for logging and tracing
    2. Logging: logs method, path, status and duration with that ID
    3. Authentication: bearer token → request.state.identity (never rejects)
    4. GZip / CORS: applied by Starlette/FastAPI middleware

    The order is reversed for responses, so the logged status and duration
    include everything the inner layers did.
"""
