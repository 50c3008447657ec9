"""Pydantic models for advice request payloads.

Every field is optional and coerced leniently: numbers that are missing,
non-numeric, negative or non-finite become 0, and sections that are not JSON
objects are treated as empty.
"""

import math
from typing import Annotated

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    model_validator,
)

from fitcoach_advice.domain.advice import (
    AdviceRequest,
    BodyMetrics,
    CoachingContext,
    NutritionExtras,
    NutritionGoals,
    NutritionTotals,
)
from fitcoach_advice.services.rng import format_number


def coerce_number(value: object) -> float:
    """Return a non-negative finite float, or 0 for anything else."""
    if isinstance(value, bool) or not isinstance(value, int | float | str):
        return 0.0
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (ValueError, OverflowError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


def coerce_flag(value: object) -> bool:
    """Accept only explicit truthy markers as true."""
    if isinstance(value, str):
        return value.strip().lower() in {"true", "1", "yes"}
    if isinstance(value, bool):
        return value
    return isinstance(value, int | float) and value == 1


def coerce_text(value: object) -> str | None:
    """Stringify scalars used as identifiers."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return format_number(value)


def coerce_topics(value: object) -> list[str]:
    """Keep only string entries of a topic list."""
    if not isinstance(value, list | tuple):
        return []
    return [item for item in value if isinstance(item, str)]


def coerce_list(value: object) -> list[object]:
    """Treat anything but a list as an empty list."""
    return list(value) if isinstance(value, list | tuple) else []


SafeNumber = Annotated[float, BeforeValidator(coerce_number)]
SafeFlag = Annotated[bool, BeforeValidator(coerce_flag)]
SafeText = Annotated[str | None, BeforeValidator(coerce_text)]
TopicList = Annotated[list[str], BeforeValidator(coerce_topics)]


class _Section(BaseModel):
    """Base for payload sections that tolerate any input shape."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def non_object_is_empty(cls, data: object) -> object:
        return data if isinstance(data, dict) else {}


class TotalsPayload(_Section):
    """Consumed macros (``kcal``, ``p``, ``f``, ``c``)."""

    kcal: SafeNumber = 0.0
    protein: SafeNumber = Field(
        default=0.0, validation_alias=AliasChoices("p", "protein")
    )
    fat: SafeNumber = Field(default=0.0, validation_alias=AliasChoices("f", "fat"))
    carbs: SafeNumber = Field(
        default=0.0, validation_alias=AliasChoices("c", "carbs")
    )


class GoalsPayload(_Section):
    """Macro targets."""

    kcal_target: SafeNumber = Field(default=0.0, alias="kcalTarget")
    protein_target: SafeNumber = Field(default=0.0, alias="proteinTarget")
    fat_target: SafeNumber = Field(default=0.0, alias="fatTarget")
    carbs_target: SafeNumber = Field(default=0.0, alias="carbsTarget")


class MealPayload(_Section):
    """Per-meal micronutrients."""

    fiber: SafeNumber = 0.0
    sugar: SafeNumber = 0.0
    sodium: SafeNumber = 0.0


class NutritionExtrasPayload(_Section):
    """Aggregate micronutrients for the day."""

    fiber_total: SafeNumber = Field(default=0.0, alias="fiberTotal")
    sugar_total: SafeNumber = Field(default=0.0, alias="sugarTotal")
    sodium_total: SafeNumber = Field(default=0.0, alias="sodiumTotal")


class ContextPayload(_Section):
    """Lifestyle context."""

    is_training_day: SafeFlag = Field(default=False, alias="isTrainingDay")
    sleep_hours_avg: SafeNumber = Field(default=0.0, alias="sleepHoursAvg")
    streak_days: SafeNumber = Field(default=0.0, alias="streakDays")
    recent_topics: TopicList = Field(default_factory=list, alias="recentTopics")
    nonce: SafeText = None


class BodyPayload(_Section):
    """Latest body measurement."""

    weight: SafeNumber = 0.0
    body_fat: SafeNumber = Field(default=0.0, alias="bodyFat")


class WeightGoalPayload(_Section):
    """Long-term goals."""

    weight_goal: SafeNumber = Field(default=0.0, alias="weightGoal")


class UserPayload(_Section):
    """Caller identity used only for seeding."""

    id: SafeText = None


class ExtraContextPayload(_Section):
    """Optional context bag."""

    nutrition_extras: NutritionExtrasPayload = Field(
        default_factory=NutritionExtrasPayload, alias="nutritionExtras"
    )
    context: ContextPayload = Field(default_factory=ContextPayload)
    latest_body: BodyPayload = Field(default_factory=BodyPayload, alias="latestBody")
    goals: WeightGoalPayload = Field(default_factory=WeightGoalPayload)
    user: UserPayload = Field(default_factory=UserPayload)


class AdviceRequestPayload(_Section):
    """Body of ``POST /advice``."""

    totals: TotalsPayload = Field(default_factory=TotalsPayload)
    goals: GoalsPayload = Field(default_factory=GoalsPayload)
    meals: Annotated[list[MealPayload], BeforeValidator(coerce_list)] = Field(
        default_factory=list
    )
    extra_context: ExtraContextPayload = Field(
        default_factory=ExtraContextPayload, alias="extraContext"
    )
    seed: SafeText = None
    variant: SafeText = None

    def to_domain(self) -> AdviceRequest:
        """Convert the payload into the pipeline's request type.

        Meal-level micronutrients are summed and used for any aggregate that
        is absent.
        """
        extras = self.extra_context.nutrition_extras
        context = self.extra_context.context
        body = self.extra_context.latest_body
        return AdviceRequest(
            totals=NutritionTotals(
                kcal=self.totals.kcal,
                protein=self.totals.protein,
                fat=self.totals.fat,
                carbs=self.totals.carbs,
            ),
            goals=NutritionGoals(
                kcal_target=self.goals.kcal_target,
                protein_target=self.goals.protein_target,
                fat_target=self.goals.fat_target,
                carbs_target=self.goals.carbs_target,
            ),
            extras=NutritionExtras(
                fiber_total=extras.fiber_total
                or sum(meal.fiber for meal in self.meals),
                sugar_total=extras.sugar_total
                or sum(meal.sugar for meal in self.meals),
                sodium_total=extras.sodium_total
                or sum(meal.sodium for meal in self.meals),
            ),
            context=CoachingContext(
                is_training_day=context.is_training_day,
                sleep_hours_avg=context.sleep_hours_avg,
                streak_days=context.streak_days,
                recent_topics=tuple(context.recent_topics),
                nonce=context.nonce,
            ),
            body=BodyMetrics(weight=body.weight, body_fat=body.body_fat),
            weight_goal=self.extra_context.goals.weight_goal,
            user_id=self.extra_context.user.id,
            seed=self.seed,
            variant=self.variant,
        )
