"""In-memory registry of logged-in access tokens."""
from __future__ import annotations

import logging
from threading import Lock
from typing import Set

from messenger.core.security import peek_username

logger = logging.getLogger(__name__)


class TokenRegistry:
    """Set of active token strings shared by all requests.

    A token must be present here in addition to being validly signed and
    unexpired. Logout and user deletion remove entries immediately.
    """

    def __init__(self) -> None:
        self._tokens: Set[str] = set()
        self._lock = Lock()

    def add(self, token: str) -> None:
        with self._lock:
            self._tokens.add(token)

    def remove(self, token: str) -> None:
        """Discard the token; absent tokens are ignored."""
        with self._lock:
            self._tokens.discard(token)

    def contains(self, token: str) -> bool:
        if not token:
            return False
        with self._lock:
            return token in self._tokens

    def remove_for_user(self, username: str) -> int:
        """Drop every token issued to ``username`` and return how many were removed."""
        with self._lock:
            stale = {t for t in self._tokens if peek_username(t) == username}
            self._tokens -= stale
        if stale:
            logger.info(f"Revoked {len(stale)} active token(s) for '{username}'")
        return len(stale)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)
