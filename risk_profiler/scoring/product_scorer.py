#!/usr/bin/env python3
"""
Risk score calculation for a single product.

Combines the validator, the penalty calculators and the bonus calculator:

    100 - ramp penalties - additive penalty + bonuses, clamped to 0..100

The result keeps every non-zero adjustment in a fixed order (calories,
sugars, saturated fat, other fat, sodium, additives, then fiber, protein,
fruits/vegetables) so a caller can show how the score was reached.
"""

from typing import Any, Dict, Iterable, List, Optional

from risk_profiler.helpers.map_nutritional_info import map_product_to_record
from risk_profiler.scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from risk_profiler.scoring.models import Adjustment, NutrientRecord, ScoreResult
from risk_profiler.scoring.types.additives_score import AdditivesPenaltyCalculator
from risk_profiler.scoring.types.bonus_score import BonusScoreCalculator
from risk_profiler.scoring.types.penalty_score import PenaltyScoreCalculator, round_half_up
from risk_profiler.scoring.validation import validate_record


class RiskScoreCalculator:
    """
    Stateless scorer bound to one ScoringConfig.

    A single instance may be shared between threads; nothing is mutated
    after construction.
    """

    def __init__(self, config: ScoringConfig = DEFAULT_SCORING_CONFIG):
        self.config = config
        self.penalty_calc = PenaltyScoreCalculator(config)
        self.additives_calc = AdditivesPenaltyCalculator(config)
        self.bonus_calc = BonusScoreCalculator(config)

    def clamp(self, value: float) -> int:
        return max(self.config.min_score, min(self.config.max_score, round_half_up(value)))

    def calculate(self, record: NutrientRecord) -> Optional[ScoreResult]:
        """
        Score a nutrient record.

        Args:
            record: Per-100g nutrients and additives of the product

        Returns:
            ScoreResult, or None when a required nutrient is missing
        """
        validation = validate_record(record, self.config)
        if not validation.scoreable:
            return None

        adjustments: List[Adjustment] = []
        adjustments.extend(self.penalty_calc.calculate(record))

        additives = self.additives_calc.calculate(record)
        if additives is not None:
            adjustments.append(additives)

        adjustments.extend(self.bonus_calc.calculate(record))

        running = self.config.base_score
        for adj in adjustments:
            running += adj.signed_points

        return ScoreResult(
            final_score=self.clamp(running),
            base_score=self.config.base_score,
            adjustments=tuple(adjustments),
            warnings=validation.warnings,
        )

    def calculate_score(self, record: NutrientRecord) -> Optional[int]:
        result = self.calculate(record)
        return result.final_score if result is not None else None

    def calculate_batch(self, records: Iterable[NutrientRecord]) -> List[Optional[ScoreResult]]:
        """Score each record independently; the output is aligned with the input."""
        return [self.calculate(record) for record in records]

    def calculate_from_product(self, product_data: Dict[str, Any], sodium_unit: str = 'g') -> Optional[ScoreResult]:
        """Map a product database record onto a NutrientRecord and score it."""
        record = map_product_to_record(product_data, sodium_unit=sodium_unit)
        if record is None:
            return None
        return self.calculate(record)


def calculate_risk_score(record: NutrientRecord, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> Optional[ScoreResult]:
    return RiskScoreCalculator(config).calculate(record)
