#!/usr/bin/env python3
"""
Risk Score Filler for CSV files.

Scores every product row of a CSV export from the product database and
writes risk_score and risk_label columns. Columns are expected to use the
database's flat export names (energy-kcal_100g, sugars_100g, ...,
additives_n, additives_tags).
"""

from typing import Any, Dict, Optional

import pandas as pd

from risk_profiler.helpers.map_nutritional_info import ENERGY_KJ_KEYS, NUTRIMENTS_MAPPINGS
from risk_profiler.scoring.classifier import get_score_label
from risk_profiler.scoring.config import DEFAULT_SCORING_CONFIG, ScoringConfig
from risk_profiler.scoring.product_scorer import RiskScoreCalculator

NUTRIMENT_COLUMNS = list(NUTRIMENTS_MAPPINGS) + list(ENERGY_KJ_KEYS) + ['salt_100g']


def row_to_product(row: pd.Series) -> Dict[str, Any]:
    """Rebuild the nested product shape the mapper reads from one CSV row."""
    return {
        'nutriments': {col: row[col] for col in NUTRIMENT_COLUMNS if col in row.index},
        'additives_n': row.get('additives_n'),
        'additives_tags': row.get('additives_tags'),
    }


def fill_risk_scores_in_csv(
    csv_path: str,
    output_path: Optional[str] = None,
    config: ScoringConfig = DEFAULT_SCORING_CONFIG,
    sodium_unit: str = 'g'
) -> Optional[Dict[str, Any]]:
    """
    Calculate and add risk scores to a CSV file.

    Args:
        csv_path: Path to the CSV file to process
        output_path: Where to write the result (defaults to csv_path)
        config: Scoring thresholds to use
        sodium_unit: Unit of the sodium_100g column ('g' or 'mg')

    Returns:
        Statistics dictionary, or None if the CSV could not be read
    """
    print(f"\n🏷️  Calculating risk scores for {csv_path}")
    print("=" * 60)

    try:
        df = pd.read_csv(csv_path)
        print(f"📊 Loaded {len(df)} products from CSV")
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        print(f"❌ Error reading CSV file: {e}")
        return None

    calculator = RiskScoreCalculator(config)
    stats = {
        'total': len(df),
        'scored': 0,
        'unscored': 0,
        'errors': [],
    }

    scores = []
    labels = []
    for idx, row in df.iterrows():
        product_name = row.get('product_name', f'Product {idx + 1}')
        try:
            result = calculator.calculate_from_product(row_to_product(row), sodium_unit=sodium_unit)
        except (ValueError, TypeError) as e:
            print(f"  ❌ [{idx + 1}/{len(df)}] {product_name}: {e}")
            stats['errors'].append(f"Row {idx + 1}: {e}")
            result = None

        if result is None:
            stats['unscored'] += 1
            scores.append(None)
            labels.append(get_score_label(None))
            continue

        for warning in result.warnings:
            print(f"  ⚠️  [{idx + 1}/{len(df)}] {product_name}: {warning}")

        stats['scored'] += 1
        scores.append(result.final_score)
        labels.append(get_score_label(result.final_score))

    df['risk_score'] = pd.Series(scores, index=df.index, dtype='Int64')
    df['risk_label'] = labels

    target = output_path or csv_path
    df.to_csv(target, index=False)

    print(f"\n✅ Saved {len(df)} products to {target}")
    print(f"   Scored: {stats['scored']}")
    print(f"   Unscored (missing nutrients): {stats['unscored']}")
    print(f"   Errors: {len(stats['errors'])}")

    return stats
