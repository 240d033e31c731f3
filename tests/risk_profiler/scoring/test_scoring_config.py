#!/usr/bin/env python3
"""
Test script for scoring configuration loading and validation.
"""

import json
import os
import sys
import tempfile
import unittest
from unittest.mock import patch
from pathlib import Path

sys.path.append(str(Path(__file__).resolve().parents[3]))
from risk_profiler.scoring.config import (
    DEFAULT_SCORING_CONFIG,
    BonusTier,
    RampThreshold,
    ScoringConfig,
    load_scoring_config,
    scoring_config_from_dict,
    validate_scoring_config,
)


class TestScoringConfig(unittest.TestCase):

    def test_defaults(self):
        config = DEFAULT_SCORING_CONFIG
        self.assertEqual(config.base_score, 100)
        self.assertEqual(config.energy, RampThreshold(300, 700, 40))
        self.assertEqual(config.sugar, RampThreshold(5, 50, 70))
        self.assertEqual(config.saturated_fat, RampThreshold(1, 20, 50))
        self.assertEqual(config.other_fat, RampThreshold(5, 35, 30))
        self.assertEqual(config.sodium, RampThreshold(0.2, 2, 35))
        self.assertEqual(config.additives.max_points, 40)
        self.assertEqual(config.fiber_tiers, (BonusTier(8, 10), BonusTier(5, 7), BonusTier(3, 4)))
        self.assertEqual(config.dirty_bulk_saturated_fat, 10)
        self.assertEqual(config.dirty_bulk_sugar, 20)
        self.assertEqual(config.sugar_trap_sugar, 30)

    def test_from_dict_overrides(self):
        config = scoring_config_from_dict({
            'base_score': 90,
            'energy': {'high': 900},
            'protein_tiers': [{'min': 20, 'points': 20}, {'min': 10, 'points': 5}],
            'additives': {'max_points': 25, 'high_risk_tags': ['EN:E330']},
        })
        self.assertEqual(config.base_score, 90)
        self.assertEqual(config.energy, RampThreshold(300, 900, 40))
        self.assertEqual(config.protein_tiers, (BonusTier(20, 20), BonusTier(10, 5)))
        self.assertEqual(config.additives.max_points, 25)
        self.assertEqual(config.additives.high_risk_tags, frozenset(['en:e330']))
        self.assertEqual(config.additives.per_high_risk, 5)

        # defaults untouched
        self.assertEqual(DEFAULT_SCORING_CONFIG.base_score, 100)

    def test_unknown_keys_rejected(self):
        invalid = [
            {'bogus': 1},
            {'energy': {'lowest': 1}},
            {'additives': {'per_additive': 3}},
        ]
        for data in invalid:
            with self.subTest(data=data):
                with self.assertRaises(ValueError):
                    scoring_config_from_dict(data)

    def test_ramp_low_must_be_below_high(self):
        with self.assertRaises(ValueError) as context:
            scoring_config_from_dict({'sugar': {'low': 50, 'high': 5}})
        self.assertIn('sugar', str(context.exception))

    def test_tiers_must_descend(self):
        with self.assertRaises(ValueError) as context:
            scoring_config_from_dict({'fiber_tiers': [{'min': 3, 'points': 4}, {'min': 8, 'points': 10}]})
        self.assertIn('fiber_tiers', str(context.exception))

    def test_tier_shape_checked(self):
        with self.assertRaises(ValueError):
            scoring_config_from_dict({'fiber_tiers': [{'min': 3}]})
        with self.assertRaises(ValueError):
            scoring_config_from_dict({'fiber_tiers': {'min': 3, 'points': 4}})

    def test_non_numeric_values_rejected(self):
        test_cases = [
            ({'sugar': {'low': 'x'}}, 'sugar.low'),
            ({'energy': {'max_points': 12.5}}, 'energy.max_points'),
            ({'base_score': '90'}, 'base_score'),
            ({'dirty_bulk_factor': True}, 'dirty_bulk_factor'),
            ({'sugar_trap_sugar': None}, 'sugar_trap_sugar'),
            ({'fiber_tiers': [{'min': 8, 'points': 'ten'}]}, 'fiber_tiers.points'),
            ({'protein_tiers': [{'min': [20], 'points': 15}]}, 'protein_tiers.min'),
            ({'additives': {'per_high_risk': '5'}}, 'additives.per_high_risk'),
            ({'additives': {'high_risk_tags': 'en:e250'}}, 'additives.high_risk_tags'),
            ({'additives': {'high_risk_tags': ['en:e250', 250]}}, 'additives.high_risk_tags'),
        ]
        for data, key in test_cases:
            with self.subTest(data=data):
                with self.assertRaises(ValueError) as context:
                    scoring_config_from_dict(data)
                self.assertIn(key, str(context.exception))

    def test_whole_float_points_accepted(self):
        config = scoring_config_from_dict({'base_score': 90.0, 'fiber_tiers': [{'min': 2.5, 'points': 4.0}]})
        self.assertEqual(config.base_score, 90)
        self.assertIsInstance(config.base_score, int)
        self.assertIsInstance(config.fiber_tiers[0].points, int)
        self.assertEqual(config.fiber_tiers[0].min, 2.5)

    def test_validate_rejects_negative_caps(self):
        with self.assertRaises(ValueError):
            validate_scoring_config(ScoringConfig(energy=RampThreshold(300, 700, -1)))
        with self.assertRaises(ValueError):
            validate_scoring_config(ScoringConfig(min_score=50, max_score=10))
        with self.assertRaises(ValueError):
            validate_scoring_config(ScoringConfig(dirty_bulk_factor=2))

    @patch('risk_profiler.scoring.config.load_dotenv')
    def test_load_without_path_uses_defaults(self, mock_load_dotenv):
        with patch.dict('os.environ', {}, clear=True):
            self.assertIs(load_scoring_config(), DEFAULT_SCORING_CONFIG)
        mock_load_dotenv.assert_called_once()

    @patch('risk_profiler.scoring.config.load_dotenv')
    def test_load_from_file_and_env(self, mock_load_dotenv):
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = os.path.join(tmp_dir, 'scoring.json')
            with open(path, 'w', encoding='utf-8') as f:
                json.dump({'sugar_trap_sugar': 25}, f)

            self.assertEqual(load_scoring_config(path).sugar_trap_sugar, 25)

            with patch.dict('os.environ', {'SCORING_CONFIG_PATH': path}):
                self.assertEqual(load_scoring_config().sugar_trap_sugar, 25)

    @patch('risk_profiler.scoring.config.load_dotenv')
    def test_load_rejects_non_object(self, mock_load_dotenv):
        with tempfile.TemporaryDirectory() as tmp_dir:
            path = os.path.join(tmp_dir, 'scoring.json')
            with open(path, 'w', encoding='utf-8') as f:
                json.dump([1, 2, 3], f)
            with self.assertRaises(ValueError):
                load_scoring_config(path)


def run_tests():
    """Run all tests."""
    unittest.main(verbosity=2)


if __name__ == '__main__':
    run_tests()
