"""Utility functions for daisyauth.

Import convention: use module-level imports for clarity.

    from ..utils import isodatetime, secret
    timestamp = isodatetime.now()
    key = secret.generate_signing_key()
"""

from . import isodatetime, secret

__all__ = ["isodatetime", "secret"]
