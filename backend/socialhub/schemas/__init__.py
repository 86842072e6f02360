"""
SocialHub Backend — Pydantic Request/Response Schemas
======================================================

API contracts, kept separate from the ORM models so that internal columns
(password_hash above all) can never be serialized by accident.
"""
