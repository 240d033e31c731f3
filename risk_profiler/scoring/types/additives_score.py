import math
from typing import Any, Dict, Iterable, Optional

from risk_profiler.scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from risk_profiler.scoring.models import PENALTY, Adjustment, NutrientRecord, numeric_or_default
from risk_profiler.scoring.types.penalty_score import format_whole, round_half_up


class AdditivesPenaltyCalculator:
    def __init__(self, config: ScoringConfig = DEFAULT_SCORING_CONFIG):
        self.config = config
        self.rules = config.additives

    def is_high_risk(self, tag: str) -> bool:
        return tag.strip().lower() in self.rules.high_risk_tags

    def get_additive_points(self, tag: str) -> int:
        if self.is_high_risk(tag):
            return self.rules.per_high_risk
        return self.rules.per_other

    def calculate_breakdown(self, additives_count: int, additives_tags: Iterable[str]) -> Dict[str, Any]:
        """
        Work out the capped additive penalty.

        Every additive costs base_per_additive; each tag then adds per_high_risk
        or per_other depending on whether it is a known high-risk code. The
        total never exceeds max_points.

        Args:
            additives_count: Number of additives reported for the product
            additives_tags: Additive codes such as 'en:e250'

        Returns:
            Dictionary with penalty, raw_penalty, high_risk_additives and count
        """
        tags = list(additives_tags)
        high_risk = [tag for tag in tags if self.is_high_risk(tag)]

        raw_penalty = additives_count * self.rules.base_per_additive if self.rules.base_per_additive else 0
        raw_penalty += sum(self.get_additive_points(tag) for tag in tags)

        return {
            'penalty': min(raw_penalty, self.rules.max_points),
            'raw_penalty': raw_penalty,
            'high_risk_additives': high_risk,
            'count': additives_count,
        }

    def calculate(self, record: NutrientRecord) -> Optional[Adjustment]:
        tags = record.additives_tags or ()
        count = numeric_or_default(record.additives_count)
        if not math.isinf(count):
            count = round_half_up(count)

        result = self.calculate_breakdown(count, tags)
        if result['penalty'] <= 0:
            return None

        high_risk_count = len(result['high_risk_additives'])
        if high_risk_count:
            display_value = f"{format_whole(count)} ({high_risk_count} high-risk)"
        else:
            display_value = f"{format_whole(count)} additives"

        return Adjustment(label='Additives', display_value=display_value, points=result['penalty'], kind=PENALTY)
