import math
from typing import List, Optional

from risk_profiler.scoring.config import DEFAULT_SCORING_CONFIG, RampThreshold, ScoringConfig
from risk_profiler.scoring.models import PENALTY, Adjustment, NutrientRecord, numeric_or_default


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (2.5 -> 3), unlike round()."""
    return int(math.floor(value + 0.5))


def format_whole(value: float) -> str:
    """Rounded whole-number text for display; infinities print as 'inf'/'-inf'."""
    if math.isinf(value):
        return f"{value:.0f}"
    return str(round_half_up(value))


def linear_ramp(value: float, low: float, high: float, max_points: int) -> int:
    """
    Map a value onto 0..max_points linearly between low and high.

    Below low the result is 0, above high it is max_points.
    """
    if value <= low:
        return 0
    if value >= high:
        return max_points
    return round_half_up(((value - low) / (high - low)) * max_points)


class PenaltyScoreCalculator:
    """Ramp penalties for energy, sugar, saturated fat, other fat and sodium."""

    def __init__(self, config: ScoringConfig = DEFAULT_SCORING_CONFIG):
        self.config = config

    def get_points(self, value: float, ramp: RampThreshold) -> int:
        return linear_ramp(value, ramp.low, ramp.high, ramp.max_points)

    def _adjustment(self, label: str, display_value: str, points: int) -> Optional[Adjustment]:
        if points == 0:
            return None
        return Adjustment(label=label, display_value=display_value, points=points, kind=PENALTY)

    def energy_penalty(self, record: NutrientRecord) -> Optional[Adjustment]:
        energy = numeric_or_default(record.energy_kcal_100g)
        points = self.get_points(energy, self.config.energy)
        return self._adjustment('Calories', f"{format_whole(energy)} kcal", points)

    def sugar_penalty(self, record: NutrientRecord) -> Optional[Adjustment]:
        sugar = numeric_or_default(record.sugars_100g)
        points = self.get_points(sugar, self.config.sugar)
        return self._adjustment('Sugars', f"{sugar:.1f}g", points)

    def saturated_fat_penalty(self, record: NutrientRecord) -> Optional[Adjustment]:
        saturated_fat = numeric_or_default(record.saturated_fat_100g)
        points = self.get_points(saturated_fat, self.config.saturated_fat)
        return self._adjustment('Saturated Fat', f"{saturated_fat:.1f}g", points)

    @staticmethod
    def other_fat(record: NutrientRecord) -> Optional[float]:
        """
        Fat that is not saturated: max(0, total - saturated).

        Saturated fat already has its own, stricter ramp; penalising total fat
        on top of it would count the saturated part twice. None when total fat
        was not reported.
        """
        total = numeric_or_default(record.fat_100g, default=None)
        if total is None:
            return None
        return max(0.0, total - numeric_or_default(record.saturated_fat_100g))

    def other_fat_penalty(self, record: NutrientRecord) -> Optional[Adjustment]:
        other_fat = self.other_fat(record)
        if other_fat is None:
            return None
        points = self.get_points(other_fat, self.config.other_fat)
        return self._adjustment('Other Fat', f"{other_fat:.1f}g", points)

    def sodium_penalty(self, record: NutrientRecord) -> Optional[Adjustment]:
        sodium = numeric_or_default(record.sodium_100g)
        points = self.get_points(sodium, self.config.sodium)
        return self._adjustment('Sodium', f"{format_whole(sodium * 1000)}mg", points)

    def calculate(self, record: NutrientRecord) -> List[Adjustment]:
        """Return the non-zero ramp penalties in display order."""
        penalties = [
            self.energy_penalty(record),
            self.sugar_penalty(record),
            self.saturated_fat_penalty(record),
            self.other_fat_penalty(record),
            self.sodium_penalty(record),
        ]
        return [adj for adj in penalties if adj is not None]
