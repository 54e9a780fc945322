import math
import time
import logging
from collections import deque
from typing import Callable, Iterable
from fastapi import Request
from fastapi.responses import JSONResponse
from jose import jwt, JWTError
from docscan.auth.deps import get_token
from docscan.utils.security import ALGORITHM

logger = logging.getLogger("docscan.ratelimit")


class SlidingWindow:
    """Call timestamps per key over the last ``window_seconds``.

    Keys with no calls left in the window are dropped, both when they are
    touched and by a sweep over all keys at most once per window.
    """

    def __init__(self, window_seconds: float, max_calls: int, clock: Callable[[], float] = time.monotonic):
        self.window = window_seconds
        self.max_calls = max_calls
        self.clock = clock
        self._hits: dict[str, deque[float]] = {}
        self._next_sweep = 0.0

    def __len__(self) -> int:
        return len(self._hits)

    def _live_hits(self, key: str, now: float) -> deque[float] | None:
        hits = self._hits.get(key)
        if hits is None:
            return None
        cutoff = now - self.window
        while hits and hits[0] <= cutoff:
            hits.popleft()
        if not hits:
            del self._hits[key]
            return None
        return hits

    def sweep(self, now: float) -> None:
        for key in list(self._hits):
            self._live_hits(key, now)
        self._next_sweep = now + self.window

    def hit(self, key: str, now: float | None = None) -> int | None:
        """Record a call for ``key``.

        Returns None when the call is allowed, otherwise the number of
        seconds until the oldest call in the window expires.
        """
        if now is None:
            now = self.clock()
        if now >= self._next_sweep:
            self.sweep(now)

        hits = self._live_hits(key, now)
        if hits is not None and len(hits) >= self.max_calls:
            return max(1, math.ceil(hits[0] + self.window - now))
        self._hits.setdefault(key, deque()).append(now)
        return None


class RateLimitMiddleware:
    """Answers 429 once a caller exceeds its quota on the guarded paths."""

    def __init__(
        self,
        app,
        *,
        window_seconds: int,
        max_calls: int,
        key_func: Callable[[Request], str],
        include_path_prefixes: Iterable[str] = ("/scanUpload", "/matches"),
    ):
        self.app = app
        self.key_func = key_func
        self.include_paths = tuple(include_path_prefixes)
        self.limiter = SlidingWindow(window_seconds, max_calls)

    async def __call__(self, scope, receive, send):
        path = scope.get("path", "") if scope["type"] == "http" else ""
        if not path.startswith(self.include_paths):
            return await self.app(scope, receive, send)

        key = self.key_func(Request(scope, receive=receive))
        # no await between check and record, so the event loop serialises callers
        retry_after = self.limiter.hit(key)
        if retry_after is None:
            return await self.app(scope, receive, send)

        logger.warning("rate limit hit for %s on %s", key, path)
        resp = JSONResponse(
            status_code=429,
            content={
                "detail": "Too Many Requests",
                "window_seconds": self.limiter.window,
                "max_calls": self.limiter.max_calls,
                "try_again_in": retry_after,
            },
            headers={"Retry-After": str(retry_after)},
        )
        return await resp(scope, receive, send)


def make_key_func(secret_key: str) -> Callable[[Request], str]:
    """Key requests by session subject when the token verifies, else by client IP."""
    def _key(req: Request) -> str:
        token = get_token(req)
        if token:
            try:
                sub = jwt.decode(token, secret_key, algorithms=[ALGORITHM]).get("sub")
            except JWTError:
                sub = None
            if sub:
                return f"user:{sub}"
        return f"ip:{req.client.host if req.client else 'unknown'}"
    return _key
