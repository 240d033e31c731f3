"""
Display lookups for scores and individual nutrient values.

Score bands:
- 90-100: Excellent
- 70-89: Good
- 40-69: Moderate
- 20-39: Poor
- 0-19: Bad
"""

from collections import namedtuple
from typing import Optional

ScoreCategory = namedtuple('ScoreCategory', ['label', 'severity', 'color'])

SCORE_CATEGORIES = (
    (90, ScoreCategory('Excellent', 'excellent', 'emerald')),
    (70, ScoreCategory('Good', 'good', 'green')),
    (40, ScoreCategory('Moderate', 'moderate', 'yellow')),
    (20, ScoreCategory('Poor', 'poor', 'red')),
)
BAD_CATEGORY = ScoreCategory('Bad', 'bad', 'dark-red')
UNKNOWN_CATEGORY = ScoreCategory('Unknown', 'unknown', 'gray')

# Per-100g display thresholds; a value strictly above 'high' is high, above 'medium' is medium
NUTRIENT_LEVELS = {
    'sugar': {'high': 22.5, 'medium': 5},
    'added-sugars': {'high': 12.5, 'medium': 5},
    'fat': {'high': 17.5, 'medium': 3},
    'saturated-fat': {'high': 5, 'medium': 1.5},
    'trans-fat': {'high': 1, 'medium': 0.1},
    'sodium': {'high': 0.6, 'medium': 0.1},
    'fiber': {'good': 3},
    'protein': {'good': 8},
}


def classify_score(score: Optional[float]) -> ScoreCategory:
    if score is None:
        return UNKNOWN_CATEGORY
    for minimum, category in SCORE_CATEGORIES:
        if score >= minimum:
            return category
    return BAD_CATEGORY


def get_score_label(score: Optional[float]) -> str:
    return classify_score(score).label


def get_nutrient_level(nutrient: str, value: Optional[float]) -> str:
    """
    Classify a nutrient amount as high/medium/low, or good/neutral for
    nutrients where more is better.
    """
    if value is None:
        return 'unknown'

    levels = NUTRIENT_LEVELS.get(nutrient)
    if levels is None:
        return 'neutral'

    if 'good' in levels:
        return 'good' if value > levels['good'] else 'neutral'

    if value > levels['high']:
        return 'high'
    if value > levels['medium']:
        return 'medium'
    return 'low'
