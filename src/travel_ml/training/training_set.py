"""
Training Set Builder

Converts pending place documents into labelled training samples for the
travel recommendation classifier. Places explicitly rejected by review
(``verified is False``) are skipped; places never reviewed still qualify.
A place that fails to encode is logged and skipped without stopping the
batch.

Usage:
    samples = prepare_training_data(store.query(PENDING_COLLECTION, [('trained', '==', False)]))
    X, y = samples_to_arrays(samples)
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

import numpy as np
import pandas as pd

from travel_ml.features.encoder import extract_features_from_place
from travel_ml.features.labels import map_place_type_to_label
from travel_ml.features.schema import FEATURE_NAMES, FEATURE_VECTOR_LENGTH
from travel_ml.store.base import DocumentSnapshot

logger = logging.getLogger(__name__)

PlaceSource = Union[DocumentSnapshot, Mapping[str, Any]]


@dataclass
class TrainingSample:
    """One encoded place with its class label."""
    features: List[float]
    label: int
    place_data: Dict[str, Any]

    @property
    def place_name(self) -> str:
        return str(self.place_data.get('name', ''))


def _place_data(place: PlaceSource) -> Mapping[str, Any]:
    if isinstance(place, DocumentSnapshot):
        return place.data
    return place


def is_training_eligible(place_data: Mapping[str, Any]) -> bool:
    """Only an explicit ``verified: False`` keeps a place out of training."""
    return place_data.get('verified') is not False


def prepare_training_data(places: Iterable[PlaceSource]) -> List[TrainingSample]:
    """
    Build training samples from pending places, preserving input order.

    Args:
        places: Pending place snapshots or raw place documents

    Returns:
        List of TrainingSample for every eligible place that encoded cleanly
    """
    samples = []
    skipped = 0

    for place in places:
        place_data = _place_data(place)

        if not is_training_eligible(place_data):
            skipped += 1
            continue

        try:
            features = extract_features_from_place(place_data)
            label = map_place_type_to_label(place_data.get('type'))
        except Exception as e:
            logger.error(f"Error processing place {place_data.get('name')}: {e}")
            continue

        samples.append(TrainingSample(features=features, label=label, place_data=dict(place_data)))

    if skipped:
        logger.info(f"Skipped {skipped} unverified places")
    if not samples:
        logger.warning("No samples found for training dataset")
    return samples


def samples_to_frame(samples: List[TrainingSample]) -> pd.DataFrame:
    """Tabulate samples with one named column per feature plus label and place name."""
    df = pd.DataFrame([s.features for s in samples], columns=FEATURE_NAMES)
    df['label'] = pd.Series([s.label for s in samples], dtype='int64')
    df['place_name'] = pd.Series([s.place_name for s in samples], dtype='object')
    return df


def samples_to_arrays(samples: List[TrainingSample]) -> Tuple[np.ndarray, np.ndarray]:
    """Stack samples into an ``(n, 25)`` feature matrix and ``(n,)`` label vector."""
    if not samples:
        return np.zeros((0, FEATURE_VECTOR_LENGTH)), np.zeros((0,), dtype=np.int64)

    X = np.array([s.features for s in samples], dtype=np.float64)
    y = np.array([s.label for s in samples], dtype=np.int64)
    return X, y
