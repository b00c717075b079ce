# ML Training Module
"""
Training pipeline for the travel recommendation model.

This module turns pending places into training samples, runs the
(simulated) training step and drives threshold-based retraining.
"""

from travel_ml.training.retraining import RetrainingOrchestrator, RetrainResult, StepResult
from travel_ml.training.trainer import PlaceModelTrainer, TrainingRun
from travel_ml.training.training_set import (
    TrainingSample,
    is_training_eligible,
    prepare_training_data,
    samples_to_arrays,
    samples_to_frame,
)

__all__ = [
    'RetrainingOrchestrator',
    'RetrainResult',
    'StepResult',
    'PlaceModelTrainer',
    'TrainingRun',
    'TrainingSample',
    'is_training_eligible',
    'prepare_training_data',
    'samples_to_arrays',
    'samples_to_frame',
]
