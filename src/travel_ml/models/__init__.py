# ML Models Module
"""
Model metadata and reload signalling for the travel recommendation model.
"""

from travel_ml.models.model_registry import (
    ModelMetadata,
    ModelRegistry,
    ModelStatus,
    ReloadSignal,
)

__all__ = ['ModelMetadata', 'ModelRegistry', 'ModelStatus', 'ReloadSignal']
