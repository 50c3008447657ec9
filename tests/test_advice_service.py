"""Tests for the advice pipeline."""

from dataclasses import replace
from datetime import UTC, datetime

from fitcoach_advice.domain.advice import (
    AdviceRequest,
    BodyMetrics,
    CoachingContext,
    NutritionExtras,
)
from fitcoach_advice.services.advice import AdviceService
from fitcoach_advice.services.rendering import BULLETS
from tests.conftest import example_request, fixed_clock


def _rich_request(nonce: str) -> AdviceRequest:
    request = example_request(
        is_training_day=True,
        sleep_hours_avg=5,
        streak_days=9,
        nonce=nonce,
    )
    return replace(
        request,
        extras=NutritionExtras(fiber_total=10, sugar_total=70, sodium_total=3000),
        body=BodyMetrics(weight=82.4, body_fat=24),
        weight_goal=75,
        user_id="user-1",
    )


def test_generate_is_deterministic(advice_service: AdviceService) -> None:
    first = advice_service.generate(_rich_request("n1"))
    second = AdviceService(clock=fixed_clock).generate(_rich_request("n1"))

    assert first.text == second.text
    assert first.topics_used == second.topics_used


def test_generate_varies_with_nonce(advice_service: AdviceService) -> None:
    texts = {advice_service.generate(_rich_request(f"n{i}")).text for i in range(6)}
    assert len(texts) > 1


def test_generate_varies_with_day() -> None:
    request = _rich_request("n1")
    today = AdviceService(clock=fixed_clock).generate(request)
    other_day = AdviceService(
        clock=lambda: datetime(2024, 5, 18, 9, 30, tzinfo=UTC)
    ).generate(request)
    assert today.text != other_day.text


def test_output_cardinality(advice_service: AdviceService) -> None:
    for index in range(30):
        result = advice_service.generate(_rich_request(str(index)))
        assert len(result.lines) in {4, 5, 6}
        assert len(result.topics_used) == len(result.lines)
        assert all(line.startswith(BULLETS) for line in result.lines)


def test_text_contains_every_line(advice_service: AdviceService) -> None:
    result = advice_service.generate(example_request(nonce="abc"))
    text_lines = result.text.split("\n")
    assert text_lines[-len(result.lines) :] == result.lines
    assert len(text_lines) - len(result.lines) in {0, 1}


def test_small_pool_is_returned_whole(advice_service: AdviceService) -> None:
    request = AdviceRequest(context=CoachingContext(is_training_day=True))
    result = advice_service.generate(request)
    assert len(result.lines) == 1


def test_no_goals_uses_fallback_content(advice_service: AdviceService) -> None:
    result = advice_service.generate(AdviceRequest())
    assert 4 <= len(result.lines) <= 6
    assert result.text


def test_recent_topics_are_avoided(advice_service: AdviceService) -> None:
    first = advice_service.generate(_rich_request("first"))
    second_request = _rich_request("second")
    followup = replace(
        second_request,
        context=replace(
            second_request.context, recent_topics=tuple(first.topics_used)
        ),
    )
    second = advice_service.generate(followup)
    assert not set(first.topics_used) & set(second.topics_used)


def test_post_process_hook_applies_to_text() -> None:
    service = AdviceService(clock=fixed_clock, post_process=str.upper)
    plain = AdviceService(clock=fixed_clock).generate(example_request(nonce="x"))
    shouted = service.generate(example_request(nonce="x"))

    assert shouted.text == plain.text.upper()
    assert shouted.lines == plain.lines
