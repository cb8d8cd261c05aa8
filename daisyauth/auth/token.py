"""JWT token issuance, validation and revocation.

TokenAuthenticator is the single owner of:
- the HMAC signing key (random per instance, never persisted or rotated)
- the revocation set (tokens explicitly invalidated before natural expiry)

Tokens are compact JWS strings signed with HS512 and carry the claims
sub (username), iat, exp and jti. Every validation re-verifies the token's
own bytes against the key, the clock and the revocation set; nothing is cached.

validate() reports failures as a TokenInvalid result. revoke() and
subject_of() raise the matching TokenError instead.
"""

import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from enum import Enum
from typing import Literal

import jwt
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from ..config import settings
from ..exceptions import (
    EmptyTokenError,
    InvalidOrExpiredTokenError,
    TokenError,
    TokenRevokedError,
)
from ..utils import isodatetime, secret
from .blacklist import RevocationSet
from .schemas import IssuedToken, TokenClaims

logger = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class TokenFailure(str, Enum):
    EMPTY_TOKEN = "empty_token"
    REVOKED = "revoked"
    INVALID_OR_EXPIRED = "invalid_or_expired"


_FAILURE_ERRORS: dict[TokenFailure, type[TokenError]] = {
    TokenFailure.EMPTY_TOKEN: EmptyTokenError,
    TokenFailure.REVOKED: TokenRevokedError,
    TokenFailure.INVALID_OR_EXPIRED: InvalidOrExpiredTokenError,
}


class TokenValid(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: Literal[True] = True
    subject: str


class TokenInvalid(BaseModel):
    model_config = ConfigDict(frozen=True)

    valid: Literal[False] = False
    failure: TokenFailure
    message: str

    @classmethod
    def of(cls, failure: TokenFailure) -> "TokenInvalid":
        return cls(failure=failure, message=_FAILURE_ERRORS[failure].default_message)

    def to_exception(self) -> TokenError:
        return _FAILURE_ERRORS[self.failure](self.message, {"code": self.failure.value})


ValidationResult = TokenValid | TokenInvalid


class TokenAuthenticator:
    """Mints, validates and revokes bearer tokens.

    One instance is shared by all request threads of an application. The
    revocation set is the only mutable state and is itself thread-safe.

    Args:
        revocation_set: Container for revoked tokens; a new empty one by default
        signing_key: HMAC key; generated randomly when omitted
        algorithm: JWT algorithm (default: settings.jwt_algorithm, HS512)
        ttl: Token lifetime (default: settings.jwt_expiry_seconds, 24h)
        clock: Returns the current aware UTC datetime; used for iat/exp, expiry
            checks and eviction
        evict_on_revoke: Run an eviction pass after each successful revoke
            (default: settings.revocation_eviction)
    """

    def __init__(
        self,
        revocation_set: RevocationSet | None = None,
        *,
        signing_key: bytes | None = None,
        algorithm: str | None = None,
        ttl: timedelta | None = None,
        clock: Callable[[], datetime] | None = None,
        evict_on_revoke: bool | None = None,
    ):
        self._signing_key = signing_key if signing_key is not None else secret.generate_signing_key()
        self._algorithm = algorithm or settings.jwt_algorithm
        self._ttl = ttl if ttl is not None else timedelta(seconds=settings.jwt_expiry_seconds)
        self._clock = clock or isodatetime.now_utc
        self._revoked = revocation_set if revocation_set is not None else RevocationSet()
        self._evict_on_revoke = (
            settings.revocation_eviction if evict_on_revoke is None else evict_on_revoke
        )

    @property
    def revocation_set(self) -> RevocationSet:
        return self._revoked

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, subject: str) -> IssuedToken:
        """Mint a signed token for `subject`, valid from now for the TTL.

        Nothing is stored: the token is self-contained.

        Raises:
            ValueError: If subject is empty
        """
        if not isinstance(subject, str) or not subject:
            raise ValueError("Token subject must be a non-empty string")

        # JWT timestamps have second precision
        issued_at = self._clock().replace(microsecond=0)
        expires_at = issued_at + self._ttl
        raw = jwt.encode(
            {
                "sub": subject,
                "iat": issued_at,
                "exp": expires_at,
                "jti": secret.generate_uuid(),
            },
            self._signing_key,
            algorithm=self._algorithm,
        )

        logger.debug(f"Issued token for {subject}, expires {isodatetime.to_timestamp(expires_at)}")
        return IssuedToken(raw=raw, subject=subject, issued_at=issued_at, expires_at=expires_at)

    def validate(self, token: str | None) -> ValidationResult:
        """Check emptiness, revocation, signature and expiry, in that order."""
        checked = self._check(token)
        if isinstance(checked, TokenInvalid):
            return checked
        return TokenValid(subject=checked.sub)

    def revoke(self, token: str | None) -> None:
        """Add a currently valid token to the revocation set.

        Revocation is not idempotent: revoking an already revoked, expired or
        forged token raises and leaves the set unchanged.

        Raises:
            EmptyTokenError: If token is None or empty
            TokenRevokedError: If the token was already revoked
            InvalidOrExpiredTokenError: If the token fails verification
        """
        checked = self._check(token)
        if isinstance(checked, TokenInvalid):
            logger.warning(f"Refused to revoke token: {checked.message}")
            raise checked.to_exception()

        if not self._revoked.add(token, checked.exp):
            # Lost a race with a concurrent revoke of the same token
            raise TokenInvalid.of(TokenFailure.REVOKED).to_exception()

        logger.info(f"Token revoked for {checked.sub}")

        if self._evict_on_revoke:
            self.evict_expired()

    def subject_of(self, token: str | None) -> str:
        """Return the verified subject without consulting the revocation set.

        Raises:
            InvalidOrExpiredTokenError: On any parse, signature or expiry failure
        """
        try:
            return self._decode(token).sub
        except (jwt.InvalidTokenError, PydanticValidationError) as e:
            logger.debug(f"Could not decode token subject: {e}")
            raise TokenInvalid.of(TokenFailure.INVALID_OR_EXPIRED).to_exception() from e

    def evict_expired(self) -> int:
        """Drop revoked entries whose own expiry has passed."""
        evicted = self._revoked.evict_expired(self._clock().timestamp())
        if evicted:
            logger.info(f"Evicted {evicted} expired token(s) from revocation set")
        return evicted

    def _decode(self, token: str | None) -> TokenClaims:
        # Expiry is checked against the injected clock so that it agrees
        # with eviction of the revocation set
        payload = jwt.decode(
            token,
            self._signing_key,
            algorithms=[self._algorithm],
            options={"require": REQUIRED_CLAIMS, "verify_exp": False, "verify_iat": False},
        )
        claims = TokenClaims.model_validate(payload)
        if isodatetime.from_unix(claims.exp) <= self._clock():
            raise jwt.ExpiredSignatureError("Signature has expired")
        return claims

    def _check(self, token: str | None) -> TokenClaims | TokenInvalid:
        if not token:
            return TokenInvalid.of(TokenFailure.EMPTY_TOKEN)
        if token in self._revoked:
            return TokenInvalid.of(TokenFailure.REVOKED)
        try:
            return self._decode(token)
        except (jwt.InvalidTokenError, PydanticValidationError) as e:
            logger.debug(f"Token verification failed: {e}")
            return TokenInvalid.of(TokenFailure.INVALID_OR_EXPIRED)
