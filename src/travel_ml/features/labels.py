"""Place type to class label mapping for the travel recommendation classifier."""

from typing import Any

from travel_ml.features import schema


def map_place_type_to_label(place_type: Any) -> int:
    """Return the class label for a place type, defaulting to cultural (1)."""
    if not isinstance(place_type, str):
        return schema.DEFAULT_LABEL
    return schema.PLACE_TYPE_LABELS.get(place_type, schema.DEFAULT_LABEL)
