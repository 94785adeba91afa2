"""Redis cache service — short-lived copies of exchange-rate provider payloads."""

import json
import logging

import redis.asyncio as redis
from redis.exceptions import RedisError

from app.config import settings

logger = logging.getLogger(__name__)

TTL_RATES = 60 * 60  # provider refreshes "latest" hourly

_CONNECTION_ERRORS = (RedisError, OSError)


class CacheService:
    """Redis-backed rate cache. An unreachable Redis behaves like an empty cache."""

    def __init__(self):
        self._redis: redis.Redis | None = None
        self._unavailable = False

    async def _connection(self) -> redis.Redis | None:
        if self._unavailable:
            return None
        if self._redis is None:
            client = redis.from_url(settings.redis_url, encoding="utf-8", decode_responses=True)
            try:
                await client.ping()
            except _CONNECTION_ERRORS as e:
                logger.warning(f"Redis unavailable at {settings.redis_url}, rate cache disabled: {e}")
                self._unavailable = True
                await client.aclose()
                return None
            self._redis = client
        return self._redis

    @staticmethod
    def rates_key(base_currency: str) -> str:
        return f"fx:latest:{base_currency.upper()}"

    async def get_latest_rates(self, base_currency: str) -> dict | None:
        conn = await self._connection()
        if conn is None:
            return None
        try:
            raw = await conn.get(self.rates_key(base_currency))
        except _CONNECTION_ERRORS as e:
            logger.debug(f"Rate cache read failed for {base_currency}: {e}")
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning(f"Discarding unreadable cached rates for {base_currency}")
            return None

    async def set_latest_rates(self, base_currency: str, rates: dict, ttl: int = TTL_RATES) -> bool:
        conn = await self._connection()
        if conn is None:
            return False
        try:
            await conn.set(self.rates_key(base_currency), json.dumps(rates), ex=ttl)
        except _CONNECTION_ERRORS as e:
            logger.debug(f"Rate cache write failed for {base_currency}: {e}")
            return False
        return True

    async def close(self):
        if self._redis:
            await self._redis.aclose()
            self._redis = None
        self._unavailable = False


cache_service = CacheService()
