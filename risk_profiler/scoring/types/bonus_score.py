from typing import List, Optional, Sequence

from risk_profiler.scoring.config import DEFAULT_SCORING_CONFIG, BonusTier, ScoringConfig
from risk_profiler.scoring.models import BONUS, Adjustment, NutrientRecord, numeric_or_default
from risk_profiler.scoring.types.penalty_score import format_whole, round_half_up


def tiered_points(value: float, tiers: Sequence[BonusTier]) -> int:
    """Points of the first tier (sorted by descending min) that value strictly exceeds."""
    for tier in tiers:
        if value > tier.min:
            return tier.points
    return 0


class BonusScoreCalculator:
    """
    Step-function bonuses for fiber, protein and fruit/vegetable/nut content.

    Two overrides keep unhealthy products from earning bonuses:
    - dirty bulk: protein bonus is halved when saturated fat or sugar is high
    - sugar trap: fruit/veg bonus is dropped entirely when sugar is high
    """

    def __init__(self, config: ScoringConfig = DEFAULT_SCORING_CONFIG):
        self.config = config

    def is_dirty_bulk(self, record: NutrientRecord) -> bool:
        saturated_fat = numeric_or_default(record.saturated_fat_100g)
        sugar = numeric_or_default(record.sugars_100g)
        return (saturated_fat > self.config.dirty_bulk_saturated_fat
                or sugar > self.config.dirty_bulk_sugar)

    def is_sugar_trap(self, record: NutrientRecord) -> bool:
        return numeric_or_default(record.sugars_100g) > self.config.sugar_trap_sugar

    def fiber_bonus(self, record: NutrientRecord) -> Optional[Adjustment]:
        fiber = numeric_or_default(record.fiber_100g)
        points = tiered_points(fiber, self.config.fiber_tiers)
        if not points:
            return None
        return Adjustment(label='Fiber', display_value=f"{fiber:.1f}g", points=points, kind=BONUS)

    def protein_bonus(self, record: NutrientRecord) -> Optional[Adjustment]:
        protein = numeric_or_default(record.protein_100g)
        points = tiered_points(protein, self.config.protein_tiers)
        if not points:
            return None

        display_value = f"{protein:.1f}g"
        if self.is_dirty_bulk(record):
            points = round_half_up(points * self.config.dirty_bulk_factor)
            display_value += " (reduced: high fat/sugar)"
            if not points:
                return None

        return Adjustment(label='Protein', display_value=display_value, points=points, kind=BONUS)

    def fruit_veg_bonus(self, record: NutrientRecord) -> Optional[Adjustment]:
        if self.is_sugar_trap(record):
            return None
        fruit_veg = numeric_or_default(record.fruit_veg_nut_estimate_100g)
        points = tiered_points(fruit_veg, self.config.fruit_veg_tiers)
        if not points:
            return None
        return Adjustment(label='Fruits/Vegetables', display_value=f"{format_whole(fruit_veg)}%", points=points, kind=BONUS)

    def calculate(self, record: NutrientRecord) -> List[Adjustment]:
        """Return the non-zero bonuses in display order (fiber, protein, fruit/veg)."""
        bonuses = [
            self.fiber_bonus(record),
            self.protein_bonus(record),
            self.fruit_veg_bonus(record),
        ]
        return [adj for adj in bonuses if adj is not None]
