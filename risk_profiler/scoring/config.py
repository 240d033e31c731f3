"""
Scoring configuration.

All thresholds used by the risk score live here as immutable values. A
ScoringConfig is handed to each calculator at construction, so alternate
threshold sets can be scored side by side without touching shared state.

Overrides can be loaded from a JSON file whose path is passed explicitly or
read from the SCORING_CONFIG_PATH environment variable (.env is honoured).
"""

import json
import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, FrozenSet, Optional, Tuple

from dotenv import load_dotenv

HIGH_RISK_ADDITIVES = frozenset([
    'en:e250', 'en:e251', 'en:e252',             # nitrites/nitrates
    'en:e320', 'en:e321',                        # BHA, BHT
    'en:e102', 'en:e110', 'en:e129', 'en:e133',  # artificial colours
    'en:e171',                                   # titanium dioxide
    'en:e950', 'en:e951', 'en:e954',             # artificial sweeteners
    'en:e621',                                   # MSG
    'en:e407',                                   # carrageenan
    'en:e338', 'en:e339', 'en:e340', 'en:e341',  # phosphates
    'en:e450', 'en:e451', 'en:e452',
])


@dataclass(frozen=True)
class RampThreshold:
    low: float
    high: float
    max_points: int


@dataclass(frozen=True)
class BonusTier:
    min: float
    points: int


@dataclass(frozen=True)
class AdditivePenaltyConfig:
    base_per_additive: int = 1
    per_high_risk: int = 5
    per_other: int = 2
    max_points: int = 40
    high_risk_tags: FrozenSet[str] = HIGH_RISK_ADDITIVES


def _tiers(*pairs) -> Tuple[BonusTier, ...]:
    return tuple(BonusTier(min_value, points) for min_value, points in pairs)


@dataclass(frozen=True)
class ScoringConfig:
    base_score: int = 100
    min_score: int = 0
    max_score: int = 100

    energy: RampThreshold = field(default_factory=lambda: RampThreshold(300, 700, 40))
    sugar: RampThreshold = field(default_factory=lambda: RampThreshold(5, 50, 70))
    saturated_fat: RampThreshold = field(default_factory=lambda: RampThreshold(1, 20, 50))
    other_fat: RampThreshold = field(default_factory=lambda: RampThreshold(5, 35, 30))
    sodium: RampThreshold = field(default_factory=lambda: RampThreshold(0.2, 2, 35))
    additives: AdditivePenaltyConfig = field(default_factory=AdditivePenaltyConfig)

    fiber_tiers: Tuple[BonusTier, ...] = field(default_factory=lambda: _tiers((8, 10), (5, 7), (3, 4)))
    protein_tiers: Tuple[BonusTier, ...] = field(default_factory=lambda: _tiers((15, 15), (10, 10), (5, 5)))
    fruit_veg_tiers: Tuple[BonusTier, ...] = field(default_factory=lambda: _tiers((80, 15), (60, 10), (40, 5)))

    # Protein bonus is scaled by dirty_bulk_factor above either threshold
    dirty_bulk_saturated_fat: float = 10
    dirty_bulk_sugar: float = 20
    dirty_bulk_factor: float = 0.5

    # Fruit/veg bonus is dropped above this sugar level
    sugar_trap_sugar: float = 30

    # grams of sodium per 100g; anything above is almost certainly milligrams
    sodium_unit_warning_threshold: float = 100


RAMP_FIELDS = ('energy', 'sugar', 'saturated_fat', 'other_fat', 'sodium')
TIER_FIELDS = ('fiber_tiers', 'protein_tiers', 'fruit_veg_tiers')
INTEGER_FIELDS = ('base_score', 'min_score', 'max_score')


def validate_scoring_config(config: ScoringConfig) -> ScoringConfig:
    """
    Check the invariants every calculator relies on.

    Raises:
        ValueError: naming the first offending setting
    """
    if config.min_score > config.max_score:
        raise ValueError(f"min_score ({config.min_score}) must not exceed max_score ({config.max_score})")

    for name in RAMP_FIELDS:
        ramp = getattr(config, name)
        if ramp.low >= ramp.high:
            raise ValueError(f"{name}: low ({ramp.low}) must be below high ({ramp.high})")
        if ramp.max_points < 0:
            raise ValueError(f"{name}: max_points must not be negative")

    for name in TIER_FIELDS:
        tiers = getattr(config, name)
        minimums = [tier.min for tier in tiers]
        if minimums != sorted(minimums, reverse=True) or len(set(minimums)) != len(minimums):
            raise ValueError(f"{name}: tiers must be sorted by strictly descending min")
        if any(tier.points < 0 for tier in tiers):
            raise ValueError(f"{name}: tier points must not be negative")

    additives = config.additives
    for name in ('base_per_additive', 'per_high_risk', 'per_other', 'max_points'):
        if getattr(additives, name) < 0:
            raise ValueError(f"additives.{name} must not be negative")

    if not 0 <= config.dirty_bulk_factor <= 1:
        raise ValueError("dirty_bulk_factor must be between 0 and 1")

    return config


DEFAULT_SCORING_CONFIG = validate_scoring_config(ScoringConfig())


def _require_number(key: str, value: Any, integer: bool = False) -> Any:
    """Reject non-numeric override values with a ValueError naming the key."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key} must be a number, got {value!r}")
    if value != value:
        raise ValueError(f"{key} must be a number, got NaN")
    if integer and not float(value).is_integer():
        raise ValueError(f"{key} must be a whole number, got {value!r}")
    return int(value) if integer else value


def _parse_ramp(name: str, value: Any, current: RampThreshold) -> RampThreshold:
    if not isinstance(value, dict):
        raise ValueError(f"{name} must be an object with low/high/max_points")
    unknown = set(value) - {'low', 'high', 'max_points'}
    if unknown:
        raise ValueError(f"{name}: unknown keys {sorted(unknown)}")
    overrides = {
        key: _require_number(f"{name}.{key}", item, integer=(key == "max_points"))
        for key, item in value.items()
    }
    return replace(current, **overrides)


def _parse_tiers(name: str, value: Any) -> Tuple[BonusTier, ...]:
    if not isinstance(value, list):
        raise ValueError(f"{name} must be a list of {{min, points}} objects")
    tiers = []
    for item in value:
        if not isinstance(item, dict) or set(item) != {'min', 'points'}:
            raise ValueError(f"{name}: each tier needs exactly 'min' and 'points'")
        tiers.append(BonusTier(
            _require_number(f"{name}.min", item["min"]),
            _require_number(f"{name}.points", item["points"], integer=True),
        ))
    return tuple(tiers)


def _parse_additives(value: Any, current: AdditivePenaltyConfig) -> AdditivePenaltyConfig:
    if not isinstance(value, dict):
        raise ValueError("additives must be an object")
    known = {f.name for f in fields(AdditivePenaltyConfig)}
    unknown = set(value) - known
    if unknown:
        raise ValueError(f"additives: unknown keys {sorted(unknown)}")
    overrides = {}
    for key, item in value.items():
        if key == "high_risk_tags":
            if not isinstance(item, list) or not all(isinstance(tag, str) for tag in item):
                raise ValueError("additives.high_risk_tags must be a list of strings")
            overrides[key] = frozenset(tag.strip().lower() for tag in item)
        else:
            overrides[key] = _require_number(f"additives.{key}", item, integer=True)
    return replace(current, **overrides)


def scoring_config_from_dict(data: Dict[str, Any], base: ScoringConfig = DEFAULT_SCORING_CONFIG) -> ScoringConfig:
    """
    Build a config by overriding fields of base with the values in data.

    Args:
        data: Mapping of ScoringConfig field names to override values
        base: Config to start from

    Returns:
        Validated ScoringConfig
    """
    known = {f.name for f in fields(ScoringConfig)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown scoring config keys: {sorted(unknown)}")

    overrides = {}
    for name, value in data.items():
        if name in RAMP_FIELDS:
            overrides[name] = _parse_ramp(name, value, getattr(base, name))
        elif name in TIER_FIELDS:
            overrides[name] = _parse_tiers(name, value)
        elif name == 'additives':
            overrides[name] = _parse_additives(value, base.additives)
        else:
            overrides[name] = _require_number(name, value, integer=(name in INTEGER_FIELDS))

    return validate_scoring_config(replace(base, **overrides))


def load_scoring_config(path: Optional[str] = None) -> ScoringConfig:
    """Load config overrides from path, or SCORING_CONFIG_PATH, or use defaults."""
    load_dotenv()
    path = path or os.getenv('SCORING_CONFIG_PATH')
    if not path:
        return DEFAULT_SCORING_CONFIG

    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Scoring config in {path} must be a JSON object")
    return scoring_config_from_dict(data)
