"""Tests for configuration loading and validation."""

import pytest

from app.core import config
from app.core.config import (
    AppSettings,
    DevelopmentSettings,
    Environment,
    ProductionSettings,
    get_settings,
    validate_configuration,
)
from app.models.search import ScoringWeights


@pytest.fixture
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestScoringWeightsDefaults:
    def test_default_weights(self) -> None:
        weights = ScoringWeights()
        assert weights.title_weight == 0.40
        assert weights.subtitle_weight == 0.25
        assert weights.description_weight == 0.20
        assert weights.category_weight == 0.10
        assert weights.popularity_weight == 0.05
        assert weights.lecture_cap == 0.10
        assert weights.semantic_cap == 0.20

    def test_weighted_signals_sum_to_one(self) -> None:
        weights = ScoringWeights()
        total = (
            weights.title_weight
            + weights.subtitle_weight
            + weights.description_weight
            + weights.category_weight
            + weights.popularity_weight
        )
        assert total == pytest.approx(1.0)


class TestGetSettings:
    def test_testing_environment(self, fresh_settings, monkeypatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "testing")
        settings = get_settings()
        assert isinstance(settings, config.TestingSettings)
        assert settings.redis_url == "memory://"

    def test_development_environment(self, fresh_settings, monkeypatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "development")
        assert isinstance(get_settings(), DevelopmentSettings)

    def test_staging_environment(self, fresh_settings, monkeypatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "staging")
        settings = get_settings()
        assert isinstance(settings, ProductionSettings)
        assert settings.environment == Environment.STAGING

    def test_nested_weight_override(self, monkeypatch) -> None:
        monkeypatch.setenv("SEARCH_WEIGHTS__TITLE_WEIGHT", "0.5")
        settings = config.TestingSettings()
        assert settings.search_weights.title_weight == 0.5
        assert settings.search_weights.subtitle_weight == 0.25


class TestValidateConfiguration:
    def test_defaults_valid(self) -> None:
        assert validate_configuration(AppSettings()) is True

    def test_negative_weight_rejected(self) -> None:
        settings = AppSettings(search_weights=ScoringWeights(title_weight=-0.1))
        with pytest.raises(ValueError, match="title_weight"):
            validate_configuration(settings)

    def test_zero_query_length_rejected(self) -> None:
        with pytest.raises(ValueError, match="MIN_QUERY_LENGTH"):
            validate_configuration(AppSettings(min_query_length=0))
