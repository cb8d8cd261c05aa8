"""HTTP API for daisyauth.

The users blueprint is registered in main.create_app under settings.api_prefix.
"""

from .users import users_bp

__all__ = ["users_bp"]
