# Feature Extraction Module
"""
Feature encoding and labelling for submitted travel places.
"""

from travel_ml.features.encoder import (
    analyze_activities_and_caption,
    extract_features_from_place,
    infer_personality_from_type,
)
from travel_ml.features.labels import map_place_type_to_label
from travel_ml.features.schema import FEATURE_NAMES, FEATURE_VECTOR_LENGTH

__all__ = [
    'extract_features_from_place',
    'analyze_activities_and_caption',
    'infer_personality_from_type',
    'map_place_type_to_label',
    'FEATURE_NAMES',
    'FEATURE_VECTOR_LENGTH',
]
