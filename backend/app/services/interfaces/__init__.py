# services/interfaces/__init__.py
"""
Service interfaces package
"""
from .cache_service import CacheServiceInterface

__all__ = [
    "CacheServiceInterface",
]
