#!/usr/bin/env python3
"""
Script to add risk_score and risk_label columns to a product CSV export.

Usage:
    python score_csv.py <products.csv> [--output PATH] [--config PATH] [--sodium-unit mg]
"""

import os
import sys
import argparse

# Add the project root to the path for cleaner imports
project_root = os.path.abspath(os.path.dirname(__file__))
sys.path.insert(0, project_root)

from risk_profiler.scoring.config import load_scoring_config
from risk_profiler.scoring.risk_score_filler import fill_risk_scores_in_csv


def main():
    parser = argparse.ArgumentParser(description='Fill risk scores for every product in a CSV file')
    parser.add_argument('csv_path', help='Path to the product CSV file')
    parser.add_argument('--output', help='Output CSV path (defaults to overwriting the input)')
    parser.add_argument('--config', help='Scoring config JSON (defaults to SCORING_CONFIG_PATH)')
    parser.add_argument('--sodium-unit', choices=['g', 'mg'], default='g',
                        help='Unit the sodium_100g column is reported in')

    args = parser.parse_args()

    try:
        config = load_scoring_config(args.config)
    except (OSError, ValueError) as e:
        print(f"❌ Invalid scoring config: {e}")
        return 1

    stats = fill_risk_scores_in_csv(args.csv_path, output_path=args.output, config=config,
                                    sodium_unit=args.sodium_unit)
    if stats is None:
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
