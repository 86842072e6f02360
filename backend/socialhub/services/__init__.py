"""
SocialHub Backend — Service Layer
==================================

What:  Business rules between the HTTP routes and the repositories.
How:   Stateless classes with one module-level instance each. Every method
       takes the request's AsyncSession as its first argument, builds the
       repositories it needs, and turns their explicit outcomes (None,
       CONFLICT, False) into SocialHubError subclasses.

Error translation:
    Repository returns None       → NotFoundError       (404)
    Repository returns CONFLICT   → ConflictError       (409)
    Business rule broken          → ValidationError     (400)
    SQLAlchemyError escapes       → DatabaseError       (500, see errors.py)
"""
