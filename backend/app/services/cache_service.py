# services/cache_service.py
"""
Cache service implementation using Redis
"""
import json
from datetime import timedelta
from typing import Any, Optional
import logging

from .interfaces.cache_service import CacheServiceInterface
from ..core.config import AppSettings

logger = logging.getLogger(__name__)


class RedisCacheService(CacheServiceInterface):
    """Redis-based cache implementation; errors behave as cache misses"""

    def __init__(self, redis_client, settings: AppSettings):
        self.redis = redis_client
        self.settings = settings
        self.default_expire = timedelta(seconds=settings.cache_ttl_seconds)

    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache"""
        if not self.redis:
            return None

        try:
            value = await self.redis.get(key)
            if value is None:
                return None

            return json.loads(value)

        except Exception as e:
            logger.warning(f"Cache get error for key {key}: {e}")
            return None

    async def set(
        self, key: str, value: Any, expire: Optional[timedelta] = None
    ) -> bool:
        """Set value in cache with optional expiration"""
        if not self.redis:
            return False

        try:
            serialized_value = json.dumps(value)

            expire_seconds = None
            if expire:
                expire_seconds = int(expire.total_seconds())
            elif self.default_expire:
                expire_seconds = int(self.default_expire.total_seconds())

            await self.redis.set(key, serialized_value, ex=expire_seconds)
            return True

        except Exception as e:
            logger.warning(f"Cache set error for key {key}: {e}")
            return False

    async def ping(self) -> str:
        """Report Redis connectivity"""
        if not self.redis:
            return "disabled"

        try:
            await self.redis.ping()
            return "healthy"
        except Exception as e:
            return f"unhealthy: {str(e)}"
