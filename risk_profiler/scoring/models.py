from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

PENALTY = 'penalty'
BONUS = 'bonus'


def numeric_or_default(value: Any, default: float = 0.0) -> float:
    """
    Return value as float, or default when it is None or NaN.

    Infinities are kept so they saturate at the ramp and tier extremes.
    """
    if value is None:
        return default
    value = float(value)
    if math.isnan(value):
        return default
    return value


@dataclass(frozen=True)
class NutrientRecord:
    """
    Per-100g nutrient composition and additive list of a single product.

    Sodium is in grams, not milligrams. None means "not reported" and is
    distinct from 0.
    """

    energy_kcal_100g: Optional[float] = None
    sugars_100g: Optional[float] = None
    saturated_fat_100g: Optional[float] = None
    sodium_100g: Optional[float] = None
    fat_100g: Optional[float] = None
    carbohydrates_100g: Optional[float] = None
    fiber_100g: Optional[float] = None
    protein_100g: Optional[float] = None
    fruit_veg_nut_estimate_100g: Optional[float] = None
    additives_count: Optional[int] = None
    additives_tags: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Adjustment:
    """One labeled contribution to the score. points is always a magnitude."""

    label: str
    display_value: str
    points: int
    kind: str

    @property
    def signed_points(self) -> int:
        return -self.points if self.kind == PENALTY else self.points

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "display_value": self.display_value,
            "points": self.points,
            "kind": self.kind,
        }


@dataclass(frozen=True)
class ScoreResult:
    final_score: int
    base_score: int
    adjustments: Tuple[Adjustment, ...]
    warnings: Tuple[str, ...] = ()

    @property
    def penalties(self) -> List[Adjustment]:
        return [adj for adj in self.adjustments if adj.kind == PENALTY]

    @property
    def bonuses(self) -> List[Adjustment]:
        return [adj for adj in self.adjustments if adj.kind == BONUS]

    def find(self, label: str) -> Optional[Adjustment]:
        """Return the adjustment with the given label, if it was emitted."""
        for adj in self.adjustments:
            if adj.label == label:
                return adj
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "final_score": self.final_score,
            "base_score": self.base_score,
            "adjustments": [adj.to_dict() for adj in self.adjustments],
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class ValidationResult:
    scoreable: bool
    missing_fields: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = field(default_factory=tuple)
