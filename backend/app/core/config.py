"""
Core configuration management for the course search service
Supports multiple environments and tunable relevance weights
"""

import os
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from enum import Enum
from functools import lru_cache

from ..models.search import ScoringWeights


class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class AppSettings(BaseSettings):
    """Base configuration settings"""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, env_nested_delimiter="__"
    )

    # Application
    app_name: str = "CourseSearch"
    app_version: str = "1.0.0"
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False

    # API Configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_prefix: str = "/api/v1"

    # Cache
    redis_url: str = "redis://localhost:6379"
    cache_ttl_seconds: int = 3600  # 1 hour

    # Course catalog (JSON records); sample courses are used when unset
    course_catalog_path: Optional[str] = None

    # Relevance scoring
    search_weights: ScoringWeights = Field(default_factory=ScoringWeights)
    min_query_length: int = 2
    suggestion_limit: int = 5

    # Autocomplete
    autocomplete_min_length: int = 2
    autocomplete_match_limit: int = 10
    autocomplete_result_limit: int = 8


class DevelopmentSettings(AppSettings):
    """Development environment settings"""

    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True


class TestingSettings(AppSettings):
    """Testing environment settings"""

    environment: Environment = Environment.TESTING
    debug: bool = True

    # In-memory cache for testing
    redis_url: str = "memory://"

    # Fast testing
    cache_ttl_seconds: int = 1


class ProductionSettings(AppSettings):
    """Staging/production settings"""

    environment: Environment = Environment.PRODUCTION
    debug: bool = False


@lru_cache()
def get_settings() -> AppSettings:
    """
    Get settings based on environment variable
    Cached for performance
    """
    environment = Environment(os.getenv("ENVIRONMENT", "development"))

    if environment == Environment.TESTING:
        return TestingSettings()
    elif environment == Environment.DEVELOPMENT:
        return DevelopmentSettings()
    elif environment == Environment.STAGING:
        return ProductionSettings(environment=Environment.STAGING)
    else:
        return ProductionSettings()


# Configuration validation
def validate_configuration(settings: Optional[AppSettings] = None):
    """Validate that the loaded configuration is usable"""
    settings = settings or get_settings()
    errors = []

    for name, value in settings.search_weights.model_dump().items():
        if value < 0:
            errors.append(f"search_weights.{name} must not be negative")

    if settings.min_query_length < 1:
        errors.append("MIN_QUERY_LENGTH must be at least 1")

    if settings.suggestion_limit < 0:
        errors.append("SUGGESTION_LIMIT must not be negative")

    if settings.autocomplete_result_limit < 0:
        errors.append("AUTOCOMPLETE_RESULT_LIMIT must not be negative")

    if errors:
        raise ValueError(f"Configuration errors: {', '.join(errors)}")

    return True
