"""
Rate Limiter - Control request frequency per client.

Simple in-memory sliding window, keyed by client IP. Keeps LLM
API costs bounded when the endpoint is public.

For deployments with multiple instances, upgrade to a Redis-backed limiter.
"""
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Tuple
import threading

from src.core.logging_config import get_logger

logger = get_logger(__name__)


class RateLimiter:
    """
    Sliding window rate limiter.

    Example:
        >>> limiter = RateLimiter(requests_per_minute=30)
        >>> limiter.is_allowed("10.0.0.1")
        (True, 29)
    """

    def __init__(
        self,
        requests_per_minute: int = 30,
        cleanup_interval_minutes: int = 5
    ):
        self.limit = requests_per_minute
        self.window = timedelta(minutes=1)
        self.cleanup_interval = timedelta(minutes=cleanup_interval_minutes)

        self._requests: Dict[str, List[datetime]] = {}
        self._lock = threading.RLock()
        self._last_cleanup = datetime.utcnow()

        logger.info(f"RateLimiter initialized: {requests_per_minute} requests/minute")

    def is_allowed(self, identifier: str) -> Tuple[bool, int]:
        """
        Check if a request is allowed for the given identifier.

        Args:
            identifier: Client IP address

        Returns:
            Tuple of (is_allowed, remaining_requests)
        """
        with self._lock:
            self._maybe_cleanup()

            now = datetime.utcnow()
            cutoff = now - self.window

            recent = [t for t in self._requests.get(identifier, []) if t > cutoff]
            self._requests[identifier] = recent

            if len(recent) >= self.limit:
                logger.warning(f"Rate limit exceeded for: {identifier}")
                return False, 0

            recent.append(now)
            return True, self.limit - len(recent)

    def get_reset_time(self, identifier: str) -> datetime:
        """
        Get when the oldest request in the window expires.

        Args:
            identifier: Client IP address

        Returns:
            Datetime when the limit frees a slot
        """
        with self._lock:
            if not self._requests.get(identifier):
                return datetime.utcnow()

            oldest = min(self._requests[identifier])
            return oldest + self.window

    def reset(self) -> None:
        """Forget all recorded requests."""
        with self._lock:
            self._requests.clear()

    def _maybe_cleanup(self) -> None:
        """Remove old entries periodically."""
        now = datetime.utcnow()

        if now - self._last_cleanup < self.cleanup_interval:
            return

        cutoff = now - self.window

        for identifier in list(self._requests.keys()):
            self._requests[identifier] = [
                t for t in self._requests[identifier] if t > cutoff
            ]
            if not self._requests[identifier]:
                del self._requests[identifier]

        self._last_cleanup = now
        logger.debug(f"Rate limiter cleanup: {len(self._requests)} active clients")


# Global rate limiter instance
_rate_limiter: Optional[RateLimiter] = None


def get_rate_limiter() -> RateLimiter:
    """Get or create the global rate limiter."""
    global _rate_limiter
    if _rate_limiter is None:
        from src.core.config import get_settings
        settings = get_settings()
        _rate_limiter = RateLimiter(
            requests_per_minute=settings.rate_limit_per_minute
        )
    return _rate_limiter


def reset_rate_limiter() -> None:
    """Drop the global limiter so the next call rebuilds it from settings."""
    global _rate_limiter
    _rate_limiter = None
