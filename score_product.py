#!/usr/bin/env python3
"""
Script to score a single product from a JSON file and show how the score
was reached.

The file may hold a product database API response ({"product": {...}}) or
the product object itself.

Usage:
    python score_product.py <product.json> [--config PATH] [--sodium-unit mg] [--json]
"""

import os
import sys
import argparse
import json
from typing import Any, Dict, Optional

# Add the project root to the path for cleaner imports
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)

from risk_profiler.scoring.classifier import classify_score
from risk_profiler.scoring.config import load_scoring_config
from risk_profiler.scoring.models import ScoreResult
from risk_profiler.scoring.product_scorer import RiskScoreCalculator


def load_product(path: str) -> Optional[Dict[str, Any]]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        print(f"❌ Could not read product file {path}: {e}")
        return None

    if not isinstance(data, dict):
        print(f"❌ Product file {path} must contain a JSON object")
        return None
    return data


def print_breakdown(result: Optional[ScoreResult]) -> None:
    category = classify_score(result.final_score if result else None)

    if result is None:
        print("❌ Not enough nutrition data to score this product")
        print(f"   Score: {category.label}")
        return

    print(f"   Base Score: {result.base_score}")

    if result.penalties:
        print("\n   Penalties:")
        for adj in result.penalties:
            print(f"     - {adj.label} ({adj.display_value}): -{adj.points}")

    if result.bonuses:
        print("\n   Bonuses:")
        for adj in result.bonuses:
            print(f"     + {adj.label} ({adj.display_value}): +{adj.points}")

    print(f"\n✅ Final Score: {result.final_score} ({category.label})")

    for warning in result.warnings:
        print(f"⚠️  {warning}")


def main():
    parser = argparse.ArgumentParser(description='Score a product and show the breakdown')
    parser.add_argument('product_file', help='Path to a product JSON file')
    parser.add_argument('--config', help='Scoring config JSON (defaults to SCORING_CONFIG_PATH)')
    parser.add_argument('--sodium-unit', choices=['g', 'mg'], default='g',
                        help='Unit the sodium_100g value is reported in')
    parser.add_argument('--json', action='store_true', help='Print the result as JSON')

    args = parser.parse_args()

    product = load_product(args.product_file)
    if product is None:
        return 1

    try:
        config = load_scoring_config(args.config)
    except (OSError, ValueError) as e:
        print(f"❌ Invalid scoring config: {e}")
        return 1

    calculator = RiskScoreCalculator(config)
    result = calculator.calculate_from_product(product, sodium_unit=args.sodium_unit)

    if args.json:
        payload = result.to_dict() if result else None
        print(json.dumps({
            'result': payload,
            'label': classify_score(result.final_score if result else None).label,
        }, indent=2))
        return 0

    product_info = product['product'] if isinstance(product.get('product'), dict) else product
    name = product_info.get('product_name', 'Unknown Product')
    print(f"🔍 Scoring product: {name}")
    print_breakdown(result)
    return 0


if __name__ == '__main__':
    sys.exit(main())
