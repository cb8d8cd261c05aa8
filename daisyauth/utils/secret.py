"""Random identifier and key generation.

This is the only module that should touch uuid4 or the secrets module.
"""

import secrets
from uuid import uuid4

from ..config import settings


def generate_uuid() -> str:
    """Generate a random UUID v4 as a string."""
    return str(uuid4())


def generate_signing_key(nbytes: int | None = None) -> bytes:
    """Generate a random symmetric key for HMAC token signatures.

    HS512 wants at least 64 bytes of key material, which is the default.
    """
    return secrets.token_bytes(nbytes or settings.jwt_signing_key_bytes)
