"""
Feature Encoder for Submitted Places

Turns a pending place document into the fixed-width feature vector the
travel recommendation classifier expects. Every field is optional; missing
values fall back to the defaults in ``travel_ml.features.schema``.

Usage:
    features = extract_features_from_place({'type': 'beach', 'cost': 40})
    assert len(features) == FEATURE_VECTOR_LENGTH
"""

from typing import Any, Iterable, List, Mapping, Optional

import numpy as np

from travel_ml.features import schema


def extract_features_from_place(place: Mapping[str, Any]) -> List[float]:
    """
    Encode a place document as a 25-element feature vector.

    Args:
        place: Pending place document (name, cost, duration, type,
            activities, caption, ...)

    Returns:
        List of floats ordered as ``schema.FEATURE_NAMES``
    """
    features: List[float] = []

    # Numerical features
    features.append(float(np.log1p(place.get('cost') or schema.DEFAULT_COST)))
    features.append(float(place.get('duration') or schema.DEFAULT_DURATION))
    features.append(float(schema.DEFAULT_GROUP_SIZE))
    features.append(float(schema.DEFAULT_TRAVEL_FREQUENCY))
    features.append(float(schema.DEFAULT_LIKED_POSTS))
    features.append(float(schema.DEFAULT_SHARED_POSTS))

    # Activity scores
    features.extend(analyze_activities_and_caption(
        place.get('activities') or [],
        place.get('caption') or '',
    ))

    # One-hot encoded features
    features.extend(encode_season(schema.DEFAULT_SEASON))
    features.extend(encode_personality(infer_personality_from_type(place.get('type'))))
    features.extend(encode_age_group(schema.DEFAULT_AGE_GROUP))

    return features


def analyze_activities_and_caption(activities: Iterable[Any] = (), caption: str = '') -> List[float]:
    """
    Score each activity category by the share of its keywords found in the
    activities and caption text. Categories with no hits score 0.5.
    """
    text = (' '.join(str(a) for a in activities) + ' ' + str(caption)).lower()

    scores = []
    for category in schema.ACTIVITY_CATEGORIES:
        keywords = schema.ACTIVITY_KEYWORDS[category]
        hits = sum(1 for keyword in keywords if keyword in text)
        score = hits / len(keywords)
        scores.append(score or schema.NEUTRAL_ACTIVITY_SCORE)

    return scores


def one_hot(value: Optional[str], categories: List[str]) -> List[float]:
    """Encode ``value`` against ``categories``; unknown values encode as all zeros."""
    return [1.0 if category == value else 0.0 for category in categories]


def encode_season(season: str) -> List[float]:
    return one_hot(season, schema.SEASONS)


def encode_personality(personality: str) -> List[float]:
    return one_hot(personality, schema.PERSONALITIES)


def encode_age_group(age_group: str) -> List[float]:
    return one_hot(age_group, schema.AGE_GROUPS)


def infer_personality_from_type(place_type: Optional[str]) -> str:
    """Map a place type to the traveller personality it attracts."""
    if not isinstance(place_type, str):
        return schema.DEFAULT_PERSONALITY
    return schema.PERSONALITY_BY_TYPE.get(place_type, schema.DEFAULT_PERSONALITY)
