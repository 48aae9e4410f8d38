# services/interfaces/cache_service.py
"""
Cache service interface
"""
from abc import ABC, abstractmethod
from typing import Any, Optional
from datetime import timedelta


class CacheServiceInterface(ABC):
    """Abstract interface for caching operations"""

    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Get value from cache"""
        pass

    @abstractmethod
    async def set(
        self, key: str, value: Any, expire: Optional[timedelta] = None
    ) -> bool:
        """Set value in cache with optional expiration"""
        pass

    @abstractmethod
    async def ping(self) -> str:
        """Report backend status for health checks"""
        pass
