from __future__ import annotations

import threading
import time
from typing import Dict, Tuple

from fastapi import Request

from devlink.core.config import get_settings
from devlink.core.errors import RateLimitedError


class _RateLimiter:
    """Fixed-window hit counter keyed by scope and client address."""

    def __init__(self) -> None:
        self._hits: Dict[str, Tuple[int, float]] = {}
        self._lock = threading.Lock()

    def check(self, key: str, limit: int, window_seconds: int) -> None:
        if limit <= 0:
            return
        now = time.time()
        with self._lock:
            self._evict(now)
            count, reset = self._hits.get(key, (0, now + window_seconds))
            count += 1
            self._hits[key] = (count, reset)
            if count > limit:
                raise RateLimitedError()

    def _evict(self, now: float) -> None:
        expired = [key for key, (_count, reset) in self._hits.items() if now > reset]
        for key in expired:
            del self._hits[key]

    def __len__(self) -> int:
        with self._lock:
            return len(self._hits)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


_limiter = _RateLimiter()


def _client_ip(request: Request) -> str:
    """Peer address; X-Forwarded-For only counts when the peer is a trusted proxy."""
    peer = request.client.host if request.client and request.client.host else "unknown"
    trusted = get_settings().forwarded_allow_ips
    if peer in trusted or "*" in trusted:
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip() or peer
    return peer


def rate_limit_ip(request: Request, scope: str, *, limit: int, window_seconds: int) -> None:
    key = f"{scope}:{_client_ip(request)}"
    _limiter.check(key, limit, window_seconds)


def reset_limits() -> None:
    _limiter.reset()
