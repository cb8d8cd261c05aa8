"""Authentication module for daisyauth.

This module provides authentication functionality:
- Token issuance, validation and revocation (token.TokenAuthenticator)
- The per-request authentication gate (gate.AuthenticationGate)
- Password hashing and user registration (service)
- Schema validation for auth operations (schemas)

Auth endpoints live in daisyauth.api.users:
- POST /api/register - Create an account
- POST /api/login - Authenticate and return a bearer token
- GET /api/users - List users (authenticated)
- POST /api/logout - Revoke the presented token (authenticated)
"""

from . import schemas, token

__all__ = ["schemas", "token"]
