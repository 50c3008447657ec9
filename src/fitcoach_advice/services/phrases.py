"""Candidate phrase construction from nutrition gaps and context."""

import math
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from fitcoach_advice.domain.advice import (
    AdviceRequest,
    MacroGaps,
    NutritionGoals,
    NutritionTotals,
)
from fitcoach_advice.services.rng import RandomSource, one_of, pick_n

KCAL_TOLERANCE = 150
PROTEIN_TOLERANCE = 20
FAT_TOLERANCE = 5
CARBS_TOLERANCE = 20
FIBER_MINIMUM_G = 18
SUGAR_LIMIT_G = 50
SODIUM_LIMIT_MG = 2400
SHORT_SLEEP_HOURS = 6
WEIGHT_TOLERANCE_KG = 0.5
DEFAULT_HYDRATION_KCAL = 1800


class ConditionKind(Enum):
    """Conditions that can contribute a phrase to the pool."""

    KCAL_UNDER = "kcal_under"
    KCAL_OVER = "kcal_over"
    KCAL_ON_TARGET = "kcal_on_target"
    PROTEIN_FAR_UNDER = "protein_far_under"
    PROTEIN_SLIGHTLY_UNDER = "protein_slightly_under"
    PROTEIN_MET = "protein_met"
    FAT_OVER = "fat_over"
    FAT_UNDER = "fat_under"
    CARBS_UNDER = "carbs_under"
    CARBS_OVER = "carbs_over"
    FIBER_LOW = "fiber_low"
    SUGAR_HIGH = "sugar_high"
    SODIUM_HIGH = "sodium_high"
    TRAINING_DAY = "training_day"
    SLEEP_SHORT = "sleep_short"
    SLEEP_ADEQUATE = "sleep_adequate"
    STREAK = "streak"
    WEIGHT_ABOVE_GOAL = "weight_above_goal"
    WEIGHT_BELOW_GOAL = "weight_below_goal"
    WEIGHT_ON_TRACK = "weight_on_track"
    BODY_FAT = "body_fat"
    GENERAL_TIP = "general_tip"


FOOD_IDEAS: dict[str, tuple[str, ...]] = {
    "protein": (
        "100 g chicken breast (22 g protein)",
        "150 g Greek yogurt (15 g protein)",
        "a pack of natto (8 g protein)",
        "a can of tuna in water (12 g protein)",
        "2 eggs (12 g protein)",
    ),
    "fat_down": (
        "Swap frying for grilling or steaming",
        "Toss salads in half the dressing instead of pouring it on",
        "Switch dairy to low-fat or fat-free versions",
    ),
    "slow_carb": (
        "a small portion of oatmeal, brown rice or whole-grain bread",
        "100 g of sweet potato as the staple",
        "buckwheat soba instead of udon",
    ),
    "fiber": (
        "a bagged salad with a handful of seaweed",
        "some microwaved frozen broccoli",
        "a piece of fruit such as an apple or banana",
    ),
    "eating_out": (
        "at a rice-bowl shop, get the regular size with a side salad and go easy on the sauce",
        "pick a set meal with less rice and grilled fish or sashimi",
        "for ramen, order half noodles with an extra egg and more seaweed",
    ),
    "konbini": (
        "shredded salad chicken with a bagged salad",
        "a salad fish pack with a cup of miso soup",
        "a bran roll, a boiled egg and an unsweetened vegetable juice",
    ),
}


@dataclass(frozen=True)
class PhraseRule:
    """A gated phrase list: fires when ``applies`` holds for its signal."""

    kind: ConditionKind
    signal: str
    applies: Callable[[float], bool]
    templates: tuple[str, ...]
    ideas: str | None = None
    idea_count: int = 1


@dataclass(frozen=True)
class PhraseCandidate:
    """Advice line tagged with the condition that produced it."""

    kind: ConditionKind
    text: str


RULES: tuple[PhraseRule, ...] = (
    PhraseRule(
        ConditionKind.KCAL_UNDER,
        "kcal_gap",
        lambda gap: gap > KCAL_TOLERANCE,
        (
            "You still have about {amount} kcal of room today. A balanced snack keeps energy steady.",
            "Calories are running {amount} kcal under target. Add a small meal rather than skipping it.",
            "Plenty of energy budget left ({amount} kcal). Fuel up so tomorrow's hunger doesn't snowball.",
        ),
    ),
    PhraseRule(
        ConditionKind.KCAL_OVER,
        "kcal_gap",
        lambda gap: gap < -KCAL_TOLERANCE,
        (
            "Today ran about {amount} kcal over target. Halve the snacks or go lighter on the staple at dinner.",
            "Calories are {amount} kcal above the goal. Skip oily dishes tonight to rebalance.",
            "Energy intake is over by {amount} kcal. One lighter meal tomorrow evens it out, no need to fast.",
        ),
    ),
    PhraseRule(
        ConditionKind.KCAL_ON_TARGET,
        "kcal_gap",
        lambda gap: -KCAL_TOLERANCE <= gap <= KCAL_TOLERANCE,
        (
            "Calories are right on target. Keep the same rhythm tomorrow.",
            "Energy intake is within range today, nice control.",
            "Solid calorie day: you landed close to the goal.",
        ),
    ),
    PhraseRule(
        ConditionKind.PROTEIN_FAR_UNDER,
        "protein_gap",
        lambda gap: gap > PROTEIN_TOLERANCE,
        (
            "Protein is about {amount} g short. Add {idea} to close the gap.",
            "Still {amount} g of protein to go: {idea} would cover most of it.",
        ),
        ideas="protein",
        idea_count=2,
    ),
    PhraseRule(
        ConditionKind.PROTEIN_SLIGHTLY_UNDER,
        "protein_gap",
        lambda gap: 0 < gap <= PROTEIN_TOLERANCE,
        (
            "Protein is only {shortfall} g short. A glass of milk or a yogurt finishes the job.",
            "Almost there on protein with {shortfall} g to go.",
        ),
    ),
    PhraseRule(
        ConditionKind.PROTEIN_MET,
        "protein_gap",
        lambda gap: gap <= 0,
        (
            "Protein goal reached. Your muscles have what they need for recovery.",
            "Great protein intake today, keep spreading it across meals.",
        ),
    ),
    PhraseRule(
        ConditionKind.FAT_OVER,
        "fat_gap",
        lambda gap: gap < -FAT_TOLERANCE,
        (
            "Fat is running {amount} g over. {idea} to bring it back in line tomorrow.",
            "A little heavy on fat today (+{amount} g). {idea}.",
        ),
        ideas="fat_down",
    ),
    PhraseRule(
        ConditionKind.FAT_UNDER,
        "fat_gap",
        lambda gap: gap > FAT_TOLERANCE,
        (
            "Fat is {amount} g below target. A handful of nuts or a drizzle of olive oil supports hormone health.",
            "Don't fear healthy fats: add {amount} g via avocado, eggs or oily fish.",
        ),
    ),
    PhraseRule(
        ConditionKind.CARBS_UNDER,
        "carbs_gap",
        lambda gap: gap > CARBS_TOLERANCE,
        (
            "Carbs are {amount} g under target; add {idea} around training to keep energy stable.",
            "Room for {amount} g more carbohydrate. Go for slow-release options like {idea}.",
        ),
        ideas="slow_carb",
    ),
    PhraseRule(
        ConditionKind.CARBS_OVER,
        "carbs_gap",
        lambda gap: gap < -CARBS_TOLERANCE,
        (
            "Carbs are {amount} g over target. Trim the rice or bread portion at the next meal.",
            "Carbohydrate intake ran {amount} g high. Pair starches with protein and vegetables to blunt the spike.",
        ),
    ),
    PhraseRule(
        ConditionKind.FIBER_LOW,
        "fiber",
        lambda total: total < FIBER_MINIMUM_G,
        (
            "Fiber is low at {amount} g. Add {idea} for fullness and gut health.",
            "Only {amount} g of fiber so far; {idea} is an easy fix.",
        ),
        ideas="fiber",
    ),
    PhraseRule(
        ConditionKind.SUGAR_HIGH,
        "sugar",
        lambda total: total > SUGAR_LIMIT_G,
        (
            "Sugar reached {amount} g today. Move sweets to right after a meal to soften blood-sugar spikes.",
            "High sugar day ({amount} g). Swap sweet drinks for sparkling water or tea.",
        ),
    ),
    PhraseRule(
        ConditionKind.SODIUM_HIGH,
        "sodium",
        lambda total: total > SODIUM_LIMIT_MG,
        (
            "Sodium is at {amount} mg. Leave the soup broth and ask for sauces on the side.",
            "Salty day ({amount} mg sodium). Drink extra water and lean on potassium-rich vegetables.",
        ),
    ),
    PhraseRule(
        ConditionKind.TRAINING_DAY,
        "training_day",
        lambda flag: flag > 0,
        (
            "Training day: get 20-30 g of protein within a couple of hours after the session.",
            "On training days, put most of your carbs around the workout.",
            "Workout today, so hydrate well and don't skip the post-training meal.",
        ),
    ),
    PhraseRule(
        ConditionKind.SLEEP_SHORT,
        "sleep",
        lambda hours: hours < SHORT_SLEEP_HOURS,
        (
            "Sleep averaged only {tenths} h. Short sleep raises appetite, so keep protein high and snacks planned.",
            "Running on about {tenths} h of sleep. Prioritise an earlier night over late-night snacking.",
        ),
    ),
    PhraseRule(
        ConditionKind.SLEEP_ADEQUATE,
        "sleep",
        lambda hours: hours >= SHORT_SLEEP_HOURS,
        (
            "Sleep looks solid at about {amount} h. Good recovery makes appetite easier to manage.",
            "With around {amount} h of sleep you're set up for steady energy.",
        ),
    ),
    PhraseRule(
        ConditionKind.STREAK,
        "streak",
        lambda days: days > 0,
        (
            "{amount}-day logging streak! Consistency beats perfection.",
            "Day {amount} in a row of tracking. Keep the chain going.",
        ),
    ),
    PhraseRule(
        ConditionKind.WEIGHT_ABOVE_GOAL,
        "weight_diff",
        lambda diff: diff > WEIGHT_TOLERANCE_KG,
        (
            "You're {decimal} kg above your goal weight. A steady 300-500 kcal daily deficit gets you there.",
            "{decimal} kg left to reach your goal weight. Small, consistent deficits win.",
        ),
    ),
    PhraseRule(
        ConditionKind.WEIGHT_BELOW_GOAL,
        "weight_diff",
        lambda diff: diff < -WEIGHT_TOLERANCE_KG,
        (
            "You're {decimal} kg below your goal weight. Nudge calories up with protein-rich foods.",
            "Currently {decimal} kg under goal weight; keep intake at or slightly above maintenance.",
        ),
    ),
    PhraseRule(
        ConditionKind.WEIGHT_ON_TRACK,
        "weight_diff",
        lambda diff: -WEIGHT_TOLERANCE_KG <= diff <= WEIGHT_TOLERANCE_KG,
        (
            "Weight is right on track with your goal. Maintain the current routine.",
            "You're within half a kilo of your goal weight, great work.",
        ),
    ),
    PhraseRule(
        ConditionKind.BODY_FAT,
        "body_fat",
        lambda percent: percent > 0,
        (
            "Body fat is at {amount}%. Protein plus resistance training keeps losses coming from fat, not muscle.",
            "With body fat around {amount}%, aim for slow, steady changes of about 0.5% a month.",
        ),
    ),
)

GENERAL_TIPS: tuple[str, ...] = (
    "Overall balance looks fine today. Tomorrow, try eating your protein first at each meal.",
    "If you're feeling run down, put sleep first and aim for about 1.6 g of protein per kg of body weight.",
    "Fight idle snacking with sparkling water or tea, and halve your usual snack portion.",
    "Keep sweet cravings for a small treat right after a meal rather than a standalone snack.",
    "Switching from frying or butter to steaming, grilling or the microwave trims fat effortlessly.",
)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves upward."""
    return math.floor(value + 0.5)


def round_one_decimal(value: float) -> float:
    """Round to one decimal place, halves upward."""
    return math.floor(value * 10 + 0.5) / 10


def compute_gaps(totals: NutritionTotals, goals: NutritionGoals) -> MacroGaps:
    """Return goal minus actual per macro, skipping goals that are not set."""

    def gap(target: float, actual: float) -> float | None:
        return target - actual if target else None

    return MacroGaps(
        kcal=gap(goals.kcal_target, totals.kcal),
        protein=gap(goals.protein_target, totals.protein),
        fat=gap(goals.fat_target, totals.fat),
        carbs=gap(goals.carbs_target, totals.carbs),
    )


def collect_signals(request: AdviceRequest) -> dict[str, float]:
    """Collect the numeric signals rules are evaluated against.

    A signal is only present when its input was provided; absent signals
    keep their rules silent.
    """
    signals: dict[str, float] = {}
    gaps = compute_gaps(request.totals, request.goals)
    for name, value in (
        ("kcal_gap", gaps.kcal),
        ("protein_gap", gaps.protein),
        ("fat_gap", gaps.fat),
        ("carbs_gap", gaps.carbs),
    ):
        if value is not None:
            signals[name] = value

    extras = request.extras
    for name, value in (
        ("fiber", extras.fiber_total),
        ("sugar", extras.sugar_total),
        ("sodium", extras.sodium_total),
        ("sleep", request.context.sleep_hours_avg),
        ("streak", request.context.streak_days),
        ("body_fat", request.body.body_fat),
    ):
        if value:
            signals[name] = value

    if request.context.is_training_day:
        signals["training_day"] = 1.0
    if request.body.weight and request.weight_goal:
        signals["weight_diff"] = round_one_decimal(
            request.body.weight - request.weight_goal
        )
    return signals


def _render_rule(rule: PhraseRule, value: float, rng: RandomSource) -> str:
    template = one_of(rng, rule.templates)
    idea = ""
    if rule.ideas:
        idea = " or ".join(pick_n(rng, FOOD_IDEAS[rule.ideas], rule.idea_count))
    return template.format(
        amount=round_half_up(abs(value)),
        decimal=f"{abs(value):.1f}",
        shortfall=math.ceil(abs(value)),
        tenths=f"{math.floor(abs(value) * 10 + 1e-9) / 10:.1f}",
        idea=idea,
    )


def general_tips(request: AdviceRequest, rng: RandomSource) -> list[PhraseCandidate]:
    """Context-free tips used when no condition produced any phrase."""
    kcal = request.totals.kcal or DEFAULT_HYDRATION_KCAL
    liters = min(max(round_one_decimal(kcal / 1000 * 1.2), 1.2), 3.0)
    tips = [
        *GENERAL_TIPS,
        f"Sip water throughout the day, about {liters:.1f} L in total. "
        "A glass before meals also curbs overeating.",
        f"Eating out tip: {one_of(rng, FOOD_IDEAS['eating_out'])}.",
        f"Convenience store pick: {one_of(rng, FOOD_IDEAS['konbini'])}.",
    ]
    return [PhraseCandidate(ConditionKind.GENERAL_TIP, tip) for tip in tips]


def build_candidates(
    request: AdviceRequest, rng: RandomSource
) -> list[PhraseCandidate]:
    """Evaluate every rule against the request's signals."""
    signals = collect_signals(request)
    candidates: list[PhraseCandidate] = []
    seen: set[str] = set()
    for rule in RULES:
        value = signals.get(rule.signal)
        if value is None or not rule.applies(value):
            continue
        text = _render_rule(rule, value, rng)
        if text in seen:
            continue
        seen.add(text)
        candidates.append(PhraseCandidate(rule.kind, text))
    if not candidates:
        return general_tips(request, rng)
    return candidates


def build_phrase_pool(request: AdviceRequest, rng: RandomSource) -> list[str]:
    """Return the deduplicated candidate lines for a request."""
    return [candidate.text for candidate in build_candidates(request, rng)]
