"""
Rate Limiting
Throttle credential endpoints (signin, company signup) per client address
"""

from typing import Deque, Dict, Optional, Tuple
from fastapi import Request, HTTPException
from datetime import datetime, timedelta, timezone
import asyncio
from collections import defaultdict, deque
from loguru import logger

from config import settings


class RateLimiter:
    """
    In-memory sliding-window rate limiter
    One process only; a multi-worker deployment needs a shared store
    """

    def __init__(self):
        # {(identifier, endpoint): deque of request timestamps, oldest first}
        self.requests: Dict[Tuple[str, str], Deque[datetime]] = defaultdict(deque)
        self.cleanup_task = None

    def _get_identifier(self, request: Request) -> str:
        """Client address, honouring the first X-Forwarded-For hop"""
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return f"ip:{forwarded.split(',')[0].strip()}"

        client_ip = request.client.host if request.client else "unknown"
        return f"ip:{client_ip}"

    def _prune(self, history: Deque[datetime], now: datetime) -> None:
        hour_ago = now - timedelta(hours=1)
        while history and history[0] <= hour_ago:
            history.popleft()

    def _cleanup_old_requests(self):
        """Drop windows with no request in the last hour"""
        now = datetime.now(timezone.utc)
        for key in list(self.requests.keys()):
            self._prune(self.requests[key], now)
            if not self.requests[key]:
                del self.requests[key]

        logger.debug(f"Rate limiter cleanup: {len(self.requests)} active windows")

    async def check_rate_limit(
        self,
        request: Request,
        max_per_minute: Optional[int] = None,
        max_per_hour: Optional[int] = None
    ) -> bool:
        """
        Check if request should be rate limited

        Args:
            request: FastAPI request
            max_per_minute: Max requests per minute (default from config)
            max_per_hour: Max requests per hour (default from config)

        Returns:
            True if allowed, raises HTTPException(429) if rate limited
        """
        if not settings.RATE_LIMIT_ENABLED:
            return True

        identifier = self._get_identifier(request)
        endpoint = request.url.path
        now = datetime.now(timezone.utc)

        history = self.requests[(identifier, endpoint)]
        self._prune(history, now)

        minute_ago = now - timedelta(minutes=1)
        requests_last_minute = sum(1 for ts in history if ts > minute_ago)
        requests_last_hour = len(history)

        max_minute = max_per_minute or settings.RATE_LIMIT_PER_MINUTE
        max_hour = max_per_hour or settings.RATE_LIMIT_PER_HOUR

        if requests_last_minute >= max_minute:
            logger.warning(f"Rate limit exceeded (minute) for {identifier} on {endpoint}")
            raise HTTPException(
                status_code=429,
                detail=f"Rate limit exceeded: {max_minute} requests per minute. Try again in 60 seconds.",
                headers={"Retry-After": "60"}
            )

        if requests_last_hour >= max_hour:
            logger.warning(f"Rate limit exceeded (hour) for {identifier} on {endpoint}")
            raise HTTPException(
                status_code=429,
                detail=f"Rate limit exceeded: {max_hour} requests per hour. Try again later.",
                headers={"Retry-After": "3600"}
            )

        history.append(now)
        return True

    def reset(self):
        """Forget all recorded requests"""
        self.requests.clear()

    async def start_cleanup_task(self):
        """Start background cleanup task"""
        if self.cleanup_task is None:
            self.cleanup_task = asyncio.create_task(self._periodic_cleanup())
            logger.info("Rate limiter cleanup task started")

    async def _periodic_cleanup(self):
        """Periodic cleanup every 5 minutes"""
        while True:
            try:
                await asyncio.sleep(300)
                self._cleanup_old_requests()
            except asyncio.CancelledError:
                break

    async def stop_cleanup_task(self):
        """Stop background cleanup task"""
        if self.cleanup_task:
            self.cleanup_task.cancel()
            try:
                await self.cleanup_task
            except asyncio.CancelledError:
                pass
            self.cleanup_task = None
            logger.info("Rate limiter cleanup task stopped")


# Global instance
rate_limiter = RateLimiter()


# Dependency for FastAPI routes
async def check_rate_limit(request: Request):
    """FastAPI dependency for rate limiting"""
    await rate_limiter.check_rate_limit(request)
