"""daisyauth: user registration, login and revocable bearer tokens."""

__version__ = "0.1.0"
