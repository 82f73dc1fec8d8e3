"""Scan scoring: simulated tree metrics and the tiered EcoCoin reward.

The uploaded image is never inspected. Metrics are drawn from an injected
``random.Random`` so callers (and tests) control the sequence; the reward
rules themselves live in ``score_metrics`` and are deterministic.
"""
import random
from typing import Callable, Optional

from ecogrow.domain.scan.models import Bonus, ScanAnalysis, ScanMetrics, SoilCondition

BASE_REWARD = 10

GROWTH_RANGE = (15, 39)
HUMIDITY_RANGE = (40, 79)
SOIL_CONDITIONS = (
    SoilCondition.EXCELLENT,
    SoilCondition.GOOD,
    SoilCondition.FAIR,
    SoilCondition.POOR,
)

HIGH_GROWTH_THRESHOLD = 30
GOOD_GROWTH_THRESHOLD = 20
OPTIMAL_HUMIDITY_THRESHOLD = 65
GOOD_HUMIDITY_THRESHOLD = 50

SOIL_BONUSES = {
    SoilCondition.EXCELLENT: Bonus(name="Excellent Soil", amount=7),
    SoilCondition.GOOD: Bonus(name="Good Soil", amount=4),
}

ScoringFunction = Callable[[random.Random], ScanMetrics]


def growth_bonus(growth: int) -> Optional[Bonus]:
    """Growth tier bonus; thresholds are strict."""
    if growth > HIGH_GROWTH_THRESHOLD:
        return Bonus(name="High Growth", amount=5)
    if growth > GOOD_GROWTH_THRESHOLD:
        return Bonus(name="Good Growth", amount=3)
    return None


def humidity_bonus(humidity: int) -> Optional[Bonus]:
    """Humidity tier bonus; thresholds are strict."""
    if humidity > OPTIMAL_HUMIDITY_THRESHOLD:
        return Bonus(name="Optimal Humidity", amount=5)
    if humidity > GOOD_HUMIDITY_THRESHOLD:
        return Bonus(name="Good Humidity", amount=3)
    return None


def soil_bonus(soil_condition: SoilCondition) -> Optional[Bonus]:
    """Soil bonus for excellent and good soil only."""
    bonus = SOIL_BONUSES.get(SoilCondition(soil_condition))
    return Bonus(name=bonus.name, amount=bonus.amount) if bonus else None


def analyze(growth: int, humidity: int, soil_condition: SoilCondition) -> ScanAnalysis:
    """Qualitative labels at the same thresholds as the bonuses."""
    if growth > HIGH_GROWTH_THRESHOLD:
        growth_quality = "Excellent"
    elif growth > GOOD_GROWTH_THRESHOLD:
        growth_quality = "Good"
    else:
        growth_quality = "Fair"

    if humidity > OPTIMAL_HUMIDITY_THRESHOLD:
        humidity_status = "Optimal"
    elif humidity > GOOD_HUMIDITY_THRESHOLD:
        humidity_status = "Good"
    else:
        humidity_status = "Needs Attention"

    return ScanAnalysis(
        growth_quality=growth_quality,
        humidity_status=humidity_status,
        soil_quality=SoilCondition(soil_condition).value,
    )


def score_metrics(growth: int, humidity: int, soil_condition: SoilCondition) -> ScanMetrics:
    """Compute the reward and ordered bonus list for fixed metrics.

    Bonuses are collected growth, humidity, soil, in that order; the reward
    is ``BASE_REWARD`` plus the sum of the applied amounts.
    """
    soil_condition = SoilCondition(soil_condition)
    bonuses = [
        bonus
        for bonus in (
            growth_bonus(growth),
            humidity_bonus(humidity),
            soil_bonus(soil_condition),
        )
        if bonus is not None
    ]
    return ScanMetrics(
        growth=growth,
        humidity=humidity,
        soil_condition=soil_condition,
        reward=BASE_REWARD + sum(b.amount for b in bonuses),
        bonuses=bonuses,
        analysis=analyze(growth, humidity, soil_condition),
    )


def random_scoring(rng: random.Random) -> ScanMetrics:
    """Default scoring function: uniform growth, humidity and soil draws."""
    growth = rng.randint(*GROWTH_RANGE)
    humidity = rng.randint(*HUMIDITY_RANGE)
    soil_condition = rng.choice(SOIL_CONDITIONS)
    return score_metrics(growth, humidity, soil_condition)


def fixed_scoring(growth: int, humidity: int, soil_condition: SoilCondition) -> ScoringFunction:
    """Scoring function that ignores the generator and always returns the given metrics."""
    def _score(_rng: random.Random) -> ScanMetrics:
        return score_metrics(growth, humidity, soil_condition)
    return _score
