# Travel ML Package
"""
Retraining backend for the travel place recommendation model.

Watches submitted places, encodes verified ones as feature vectors, runs a
(simulated) retraining cycle when new places arrive, and serves stats,
verification and model-download callables.
"""

__version__ = '1.0.0'
