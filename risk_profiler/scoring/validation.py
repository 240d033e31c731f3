import math
from typing import List

from risk_profiler.scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from risk_profiler.scoring.models import NutrientRecord, ValidationResult

REQUIRED_NUTRIENTS = (
    'energy_kcal_100g',
    'sugars_100g',
    'saturated_fat_100g',
    'sodium_100g',
)


def _is_missing(value) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def validate_record(record: NutrientRecord, config: ScoringConfig = DEFAULT_SCORING_CONFIG) -> ValidationResult:
    """
    Check that a record carries every nutrient the score depends on.

    Zero is a valid value; only None (or NaN) counts as missing. Values are
    not range-checked, apart from a warning for sodium reported in what look
    like milligrams.
    """
    missing = tuple(name for name in REQUIRED_NUTRIENTS if _is_missing(getattr(record, name)))

    warnings: List[str] = []
    sodium = record.sodium_100g
    if not _is_missing(sodium) and sodium > config.sodium_unit_warning_threshold:
        warnings.append(
            f"sodium_100g={sodium:g} exceeds {config.sodium_unit_warning_threshold:g}g per 100g; "
            f"value is probably in mg rather than g"
        )

    return ValidationResult(scoreable=not missing, missing_fields=missing, warnings=tuple(warnings))


def is_scoreable(record: NutrientRecord) -> bool:
    return validate_record(record).scoreable
