"""Redis access for the access-token blacklist and public edit rate limits."""

import logging
from typing import Optional

import redis.asyncio as redis
from redis.exceptions import RedisError

from ..config import get_settings

logger = logging.getLogger(__name__)

BLACKLIST_PREFIX = "blacklist"
RATE_LIMIT_PREFIX = "ratelimit:share"


def blacklist_key(token_jti: str) -> str:
    return f"{BLACKLIST_PREFIX}:{token_jti}"


def rate_limit_key(share_token: str, client_id: str) -> str:
    """Counter key for anonymous writes through one share link by one client."""
    return f"{RATE_LIMIT_PREFIX}:{share_token}:{client_id}"


class RedisClient:
    """Connection holder.

    Nothing here is allowed to take the API down: while disconnected,
    or when a command fails, lookups answer "not blacklisted" and
    counters answer 0.
    """

    def __init__(self):
        self.settings = get_settings()
        self.redis: Optional[redis.Redis] = None

    @property
    def is_connected(self) -> bool:
        return self.redis is not None

    async def connect(self) -> None:
        try:
            self.redis = redis.from_url(
                self.settings.redis_url,
                max_connections=self.settings.redis_max_connections,
                decode_responses=True,
            )
            await self.redis.ping()
            logger.info("Connected to Redis")
        except (RedisError, OSError) as e:
            logger.error(f"Failed to connect to Redis: {e}")
            self.redis = None
            raise

    async def disconnect(self) -> None:
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            logger.info("Disconnected from Redis")

    async def add_to_blacklist(self, token_jti: str, expire: int = 900) -> bool:
        """Revoke an access token until it would have expired anyway."""
        if not self.redis:
            logger.warning(f"Redis unavailable, token {token_jti} not blacklisted")
            return False
        try:
            return bool(await self.redis.setex(blacklist_key(token_jti), max(expire, 1), "1"))
        except RedisError as e:
            logger.error(f"Could not blacklist token {token_jti}: {e}")
            return False

    async def is_token_blacklisted(self, token_jti: str) -> bool:
        if not self.redis:
            return False
        try:
            return await self.redis.exists(blacklist_key(token_jti)) > 0
        except RedisError as e:
            logger.error(f"Blacklist lookup failed for token {token_jti}: {e}")
            return False

    async def increment_rate_limit(self, key: str, expire: int = 60) -> int:
        """Count one hit on ``key`` and return the count in the current window.

        The window opens with the first hit and is not extended by later
        ones, so the counter starts over ``expire`` seconds after it began.
        """
        if not self.redis:
            return 0
        try:
            async with self.redis.pipeline() as pipe:
                pipe.incr(key)
                pipe.ttl(key)
                count, ttl = await pipe.execute()
            # -1: no expiry yet, either a new window or a lost EXPIRE
            if ttl == -1:
                await self.redis.expire(key, expire)
            return int(count)
        except RedisError as e:
            logger.error(f"Rate limit error for key {key}: {e}")
            return 0


_redis_client: Optional[RedisClient] = None


def get_redis_client() -> RedisClient:
    """Process wide client, connected by the app lifespan."""
    global _redis_client
    if _redis_client is None:
        _redis_client = RedisClient()
    return _redis_client
