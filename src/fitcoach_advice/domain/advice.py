"""Domain models for advice generation."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NutritionTotals:
    """Consumed macros for the day."""

    kcal: float = 0.0
    protein: float = 0.0
    fat: float = 0.0
    carbs: float = 0.0


@dataclass(frozen=True)
class NutritionGoals:
    """Target macros; zero means the goal is not set."""

    kcal_target: float = 0.0
    protein_target: float = 0.0
    fat_target: float = 0.0
    carbs_target: float = 0.0


@dataclass(frozen=True)
class NutritionExtras:
    """Micronutrient totals in grams (sodium in milligrams)."""

    fiber_total: float = 0.0
    sugar_total: float = 0.0
    sodium_total: float = 0.0


@dataclass(frozen=True)
class CoachingContext:
    """Lifestyle signals supplied by the client."""

    is_training_day: bool = False
    sleep_hours_avg: float = 0.0
    streak_days: float = 0.0
    recent_topics: tuple[str, ...] = ()
    nonce: str | None = None


@dataclass(frozen=True)
class BodyMetrics:
    """Latest body measurement."""

    weight: float = 0.0
    body_fat: float = 0.0


@dataclass(frozen=True)
class MacroGaps:
    """Goal minus actual per macro; None when the goal is not set."""

    kcal: float | None
    protein: float | None
    fat: float | None
    carbs: float | None


@dataclass(frozen=True)
class AdviceRequest:
    """Everything the advice pipeline needs for one call."""

    totals: NutritionTotals = field(default_factory=NutritionTotals)
    goals: NutritionGoals = field(default_factory=NutritionGoals)
    extras: NutritionExtras = field(default_factory=NutritionExtras)
    context: CoachingContext = field(default_factory=CoachingContext)
    body: BodyMetrics = field(default_factory=BodyMetrics)
    weight_goal: float = 0.0
    user_id: str | None = None
    seed: str | None = None
    variant: str | None = None


@dataclass(frozen=True)
class AdviceResult:
    """Rendered advice plus the topic keys of the selected lines."""

    lines: list[str]
    topics_used: list[str]
    text: str
