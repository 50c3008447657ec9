"""Shared test fixtures."""

from datetime import UTC, datetime

import pytest

from fitcoach_advice.config import Settings
from fitcoach_advice.containers import AppContainer, build_container
from fitcoach_advice.domain.advice import (
    AdviceRequest,
    CoachingContext,
    NutritionGoals,
    NutritionTotals,
)
from fitcoach_advice.services.advice import AdviceService

FIXED_NOW = datetime(2024, 5, 17, 9, 30, tzinfo=UTC)


class SequenceRandom:
    """Deterministic stand-in generator cycling through fixed values."""

    def __init__(self, *values: float) -> None:
        self.values = values or (0.0,)
        self.calls = 0

    def __call__(self) -> float:
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


def fixed_clock() -> datetime:
    return FIXED_NOW


def example_request(**context: object) -> AdviceRequest:
    """Request with every macro well under its goal."""
    return AdviceRequest(
        totals=NutritionTotals(kcal=1200, protein=60, fat=40, carbs=100),
        goals=NutritionGoals(
            kcal_target=2000,
            protein_target=140,
            fat_target=70,
            carbs_target=250,
        ),
        context=CoachingContext(**context),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(port=10000, cors_allow_origins="*", environment="test")


@pytest.fixture
def advice_service() -> AdviceService:
    return AdviceService(clock=fixed_clock)


@pytest.fixture
def container(settings: Settings, advice_service: AdviceService) -> AppContainer:
    built = build_container(settings)
    built.advice_service = advice_service
    return built
