import math
import numbers
import re
from typing import Any, Dict, List, Optional

from risk_profiler.scoring.models import NutrientRecord

# Product database nutriment keys -> NutrientRecord fields
NUTRIMENTS_MAPPINGS = {
    'energy-kcal_100g': 'energy_kcal_100g',
    'carbohydrates_100g': 'carbohydrates_100g',
    'sugars_100g': 'sugars_100g',
    'fat_100g': 'fat_100g',
    'saturated-fat_100g': 'saturated_fat_100g',
    'sodium_100g': 'sodium_100g',
    'fiber_100g': 'fiber_100g',
    'proteins_100g': 'protein_100g',
    'fruits-vegetables-nuts-estimate-from-ingredients_100g': 'fruit_veg_nut_estimate_100g',
}

ENERGY_KJ_KEYS = ('energy-kj_100g', 'energy_100g')
KJ_PER_KCAL = 4.184
SALT_TO_SODIUM = 2.5
SODIUM_UNITS = {'g': 1.0, 'mg': 1000.0}


def clean_value(value: Any) -> Optional[float]:
    """
    Turn a nutriment value into a float, or None if it is not usable.

    Numbers pass through; strings like '8.0g' yield their first number;
    NaN, infinities, empty strings and anything else become None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, numbers.Number):
        value = float(value)
        if math.isnan(value) or math.isinf(value):
            return None
        return value
    if isinstance(value, str):
        match = re.search(r'(-?\d+\.?\d*)', value)
        if match:
            return float(match.group(1))
    return None


def extract_nutritional_value(nutriments: Dict[str, Any], key: str) -> Optional[float]:
    if not nutriments:
        return None
    return clean_value(nutriments.get(key))


def parse_additives_tags(value: Any) -> List[str]:
    """Accept a list of tags or a comma-separated string; return lowercase tags."""
    if value is None:
        return []
    if isinstance(value, str):
        items = value.split(',')
    elif isinstance(value, (list, tuple)):
        items = value
    else:
        return []
    return [str(item).strip().lower() for item in items if item is not None and str(item).strip()]


def parse_additives_count(value: Any) -> Optional[int]:
    count = clean_value(value)
    if count is None:
        return None
    return int(count)


def map_product_to_record(product_data: Any, sodium_unit: str = 'g') -> Optional[NutrientRecord]:
    """
    Build a NutrientRecord from a product database record.

    Args:
        product_data: Either an API response ({'product': {...}}) or the product itself
        sodium_unit: Unit sodium_100g is reported in ('g' or 'mg')

    Returns:
        NutrientRecord, or None if there is no nutriments block to read
    """
    if sodium_unit not in SODIUM_UNITS:
        raise ValueError(f"Unsupported sodium unit: {sodium_unit}")

    if not isinstance(product_data, dict):
        return None
    if isinstance(product_data.get('product'), dict):
        product_data = product_data['product']

    nutriments = product_data.get('nutriments')
    if not isinstance(nutriments, dict):
        return None

    values = {
        field: extract_nutritional_value(nutriments, key)
        for key, field in NUTRIMENTS_MAPPINGS.items()
    }

    if values['energy_kcal_100g'] is None:
        for key in ENERGY_KJ_KEYS:
            energy_kj = extract_nutritional_value(nutriments, key)
            if energy_kj is not None:
                values['energy_kcal_100g'] = energy_kj / KJ_PER_KCAL
                break

    if values['sodium_100g'] is None:
        salt = extract_nutritional_value(nutriments, 'salt_100g')
        if salt is not None:
            values['sodium_100g'] = salt / SALT_TO_SODIUM
    elif sodium_unit != 'g':
        values['sodium_100g'] = values['sodium_100g'] / SODIUM_UNITS[sodium_unit]

    return NutrientRecord(
        additives_count=parse_additives_count(product_data.get('additives_n')),
        additives_tags=tuple(parse_additives_tags(product_data.get('additives_tags'))),
        **values
    )
