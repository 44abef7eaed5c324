# Session tokens are not stored.
# This module only documents the cookie contract; see tokens.py and session.py

"""
Session cookie:
- name: token (COOKIE_NAME setting)
- value: HS256 JWT with claims sub (user id), iat, exp (iat + 7 days)
- attributes: HttpOnly, Max-Age=604800, SameSite=Strict, Path=/,
  Secure when ENVIRONMENT=production

Logout overwrites the cookie with an empty value and Max-Age=0. The signing
key is not rotated on logout, so a copied token stays valid until it expires.
"""
