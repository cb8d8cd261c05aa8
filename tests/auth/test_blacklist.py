"""Tests for the RevocationSet and concurrent revocation."""

import threading
from concurrent.futures import ThreadPoolExecutor

from daisyauth.auth.blacklist import RevocationSet
from daisyauth.auth.token import TokenAuthenticator, TokenFailure
from daisyauth.exceptions import TokenRevokedError


class TestRevocationSet:
    """Tests for the container itself."""

    def test_add_and_contains(self):
        revoked = RevocationSet()

        assert revoked.add("token-a", 100) is True
        assert "token-a" in revoked
        assert "token-b" not in revoked
        assert len(revoked) == 1

    def test_add_existing_returns_false(self):
        revoked = RevocationSet()
        revoked.add("token-a", 100)

        assert revoked.add("token-a", 200) is False
        assert len(revoked) == 1

    def test_evict_expired(self):
        revoked = RevocationSet()
        revoked.add("old", 100)
        revoked.add("boundary", 150)
        revoked.add("live", 200)

        assert revoked.evict_expired(150) == 2
        assert "old" not in revoked
        assert "boundary" not in revoked
        assert "live" in revoked

    def test_evict_on_empty_set(self):
        assert RevocationSet().evict_expired(1_000_000) == 0


class TestConcurrentRevocation:
    """Revocations from many threads must not lose entries."""

    def test_distinct_tokens_from_many_threads(self):
        authenticator = TokenAuthenticator()
        tokens = [authenticator.issue(f"user{i}").raw for i in range(50)]
        barrier = threading.Barrier(len(tokens))

        def revoke(token):
            barrier.wait()
            authenticator.revoke(token)

        with ThreadPoolExecutor(max_workers=len(tokens)) as pool:
            list(pool.map(revoke, tokens))

        assert len(authenticator.revocation_set) == len(tokens)
        for token in tokens:
            assert authenticator.validate(token).failure == TokenFailure.REVOKED

    def test_same_token_revoked_once(self):
        authenticator = TokenAuthenticator()
        token = authenticator.issue("alice").raw
        workers = 16
        barrier = threading.Barrier(workers)
        outcomes = []
        outcomes_lock = threading.Lock()

        def revoke():
            barrier.wait()
            try:
                authenticator.revoke(token)
                result = "ok"
            except TokenRevokedError:
                result = "revoked"
            with outcomes_lock:
                outcomes.append(result)

        threads = [threading.Thread(target=revoke) for _ in range(workers)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert outcomes.count("ok") == 1
        assert outcomes.count("revoked") == workers - 1
        assert len(authenticator.revocation_set) == 1
