"""In-memory revocation set for bearer tokens.

Each TokenAuthenticator owns one RevocationSet; there is no module-level
instance. Entries are raw token strings mapped to the token's encoded expiry
(unix seconds) so that an eviction pass can drop entries whose token would be
rejected as expired anyway.
"""

import threading


class RevocationSet:
    """Thread-safe set of revoked token strings."""

    def __init__(self):
        self._entries: dict[str, int] = {}
        self._lock = threading.Lock()

    def add(self, token: str, expires_at: int) -> bool:
        """Insert a token, returning False if it was already present.

        Check and insert happen under one lock acquisition, so concurrent
        callers adding the same token see exactly one True.
        """
        with self._lock:
            if token in self._entries:
                return False
            self._entries[token] = expires_at
            return True

    def __contains__(self, token: object) -> bool:
        with self._lock:
            return token in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def evict_expired(self, now: float) -> int:
        """Remove entries whose token expired at or before `now`.

        Still-valid tokens are never removed. Returns the number of entries dropped.
        """
        with self._lock:
            expired = [t for t, exp in self._entries.items() if exp <= now]
            for token in expired:
                del self._entries[token]
            return len(expired)
