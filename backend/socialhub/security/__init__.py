"""
SocialHub Backend — Security Package
=====================================

    passwords.py     PasswordHasher: bcrypt digest + verification (passlib)
    tokens.py        TokenService: issue/validate signed bearer tokens (PyJWT)
    dependencies.py  Per-route access policy: optional/required identity,
                     acting-user checks
"""
