"""
Feature Schema for the Travel Place Model

Single source of truth for the feature vector layout consumed by the
travel recommendation classifier. The column order below is the wire
contract shared with the on-device model: 6 numeric features, 6 activity
scores, then season, personality and age-group one-hot blocks (25 total).
"""

from typing import Dict, List, Tuple

# Numeric block
DEFAULT_COST = 100
DEFAULT_DURATION = 1
# Social/behavioural signals are not captured for submitted places, so the
# model sees the population defaults it was trained with.
DEFAULT_GROUP_SIZE = 2
DEFAULT_TRAVEL_FREQUENCY = 3
DEFAULT_LIKED_POSTS = 10
DEFAULT_SHARED_POSTS = 5

NUMERIC_FEATURES: List[str] = [
    'log_budget',
    'duration_days',
    'group_size',
    'travel_frequency',
    'liked_posts',
    'shared_posts',
]

# Activity block
ACTIVITY_KEYWORDS: Dict[str, List[str]] = {
    'adventure': ['hiking', 'climbing', 'trekking', 'adventure', 'explore'],
    'cultural': ['temple', 'museum', 'cultural', 'heritage', 'traditional'],
    'relaxation': ['relax', 'peaceful', 'calm', 'spa', 'quiet'],
    'food': ['food', 'restaurant', 'taste', 'delicious', 'cuisine'],
    'nature': ['nature', 'forest', 'park', 'garden', 'waterfall'],
    'urban': ['city', 'urban', 'shopping', 'modern', 'downtown'],
}
ACTIVITY_CATEGORIES: List[str] = ['adventure', 'cultural', 'relaxation', 'food', 'nature', 'urban']
# A category with no keyword hits scores as neutral rather than absent.
NEUTRAL_ACTIVITY_SCORE = 0.5

# One-hot blocks
SEASONS: List[str] = ['spring', 'summer', 'autumn', 'winter']
PERSONALITIES: List[str] = ['adventurous', 'cultural', 'relaxed', 'social']
AGE_GROUPS: List[str] = ['teen', 'young_adult', 'adult', 'middle_aged', 'senior']

DEFAULT_SEASON = 'summer'
DEFAULT_AGE_GROUP = 'adult'
DEFAULT_PERSONALITY = 'cultural'

PERSONALITY_BY_TYPE: Dict[str, str] = {
    'adventure': 'adventurous',
    'cultural': 'cultural',
    'relaxation': 'relaxed',
    'food_tourism': 'social',
    'nature': 'adventurous',
    'urban': 'social',
    'beach': 'relaxed',
    'mountain': 'adventurous',
    'historical': 'cultural',
    'wildlife': 'adventurous',
}

# Labels
PLACE_TYPE_LABELS: Dict[str, int] = {
    'adventure': 0,
    'cultural': 1,
    'relaxation': 2,
    'food_tourism': 3,
    'nature': 4,
    'urban': 5,
    'beach': 6,
    'mountain': 7,
    'historical': 8,
    'wildlife': 9,
}
DEFAULT_LABEL = PLACE_TYPE_LABELS['cultural']
PLACE_TYPES: List[str] = list(PLACE_TYPE_LABELS)

FEATURE_BLOCKS: List[Tuple[str, List[str]]] = [
    ('numeric', NUMERIC_FEATURES),
    ('activity', [f'{c}_score' for c in ACTIVITY_CATEGORIES]),
    ('season', [f'season_{s}' for s in SEASONS]),
    ('personality', [f'personality_{p}' for p in PERSONALITIES]),
    ('age_group', [f'age_{a}' for a in AGE_GROUPS]),
]

FEATURE_NAMES: List[str] = [name for _, names in FEATURE_BLOCKS for name in names]
FEATURE_VECTOR_LENGTH = len(FEATURE_NAMES)
