#!/usr/bin/env python3
"""
Test script for nutrient record validation.
"""

import sys
import unittest
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[3]))
from risk_profiler.scoring.config import ScoringConfig
from risk_profiler.scoring.models import NutrientRecord
from risk_profiler.scoring.validation import REQUIRED_NUTRIENTS, is_scoreable, validate_record


class TestValidateRecord(unittest.TestCase):

    def setUp(self):
        """Set up test fixtures."""
        self.complete = NutrientRecord(energy_kcal_100g=250, sugars_100g=12,
                                       saturated_fat_100g=2, sodium_100g=0.3)

    def test_complete_record(self):
        result = validate_record(self.complete)
        self.assertTrue(result.scoreable)
        self.assertEqual(result.missing_fields, ())
        self.assertEqual(result.warnings, ())

    def test_empty_record(self):
        result = validate_record(NutrientRecord())
        self.assertFalse(result.scoreable)
        self.assertEqual(result.missing_fields, REQUIRED_NUTRIENTS)

    def test_optional_fields_not_required(self):
        record = NutrientRecord(energy_kcal_100g=0, sugars_100g=0, saturated_fat_100g=0, sodium_100g=0)
        self.assertTrue(is_scoreable(record))

    def test_reports_missing_field(self):
        record = NutrientRecord(energy_kcal_100g=250, sugars_100g=12, saturated_fat_100g=2)
        result = validate_record(record)
        self.assertFalse(result.scoreable)
        self.assertEqual(result.missing_fields, ('sodium_100g',))

    def test_nan_counts_as_missing(self):
        record = NutrientRecord(energy_kcal_100g=float('nan'), sugars_100g=12,
                                saturated_fat_100g=2, sodium_100g=0.3)
        self.assertEqual(validate_record(record).missing_fields, ('energy_kcal_100g',))

    def test_negative_values_accepted(self):
        record = NutrientRecord(energy_kcal_100g=-10, sugars_100g=-1, saturated_fat_100g=-1, sodium_100g=-1)
        self.assertTrue(is_scoreable(record))

    def test_sodium_in_milligrams_warns(self):
        record = NutrientRecord(energy_kcal_100g=250, sugars_100g=12, saturated_fat_100g=2, sodium_100g=450)
        result = validate_record(record)
        self.assertTrue(result.scoreable)
        self.assertEqual(len(result.warnings), 1)
        self.assertIn('sodium_100g=450', result.warnings[0])

    def test_sodium_warning_threshold_configurable(self):
        record = NutrientRecord(energy_kcal_100g=250, sugars_100g=12, saturated_fat_100g=2, sodium_100g=5)
        self.assertEqual(validate_record(record).warnings, ())
        config = ScoringConfig(sodium_unit_warning_threshold=3)
        self.assertEqual(len(validate_record(record, config).warnings), 1)


def run_tests():
    """Run all tests."""
    unittest.main(verbosity=2)


if __name__ == '__main__':
    run_tests()
