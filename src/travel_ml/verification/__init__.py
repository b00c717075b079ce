# Verification Module
"""
Manual and scheduled verification of submitted places.
"""

from travel_ml.verification.gate import (
    AutoVerificationResult,
    auto_verify_places,
    meets_auto_verification_criteria,
    verify_place,
)

__all__ = [
    'AutoVerificationResult',
    'auto_verify_places',
    'meets_auto_verification_criteria',
    'verify_place',
]
