# ML API Module
"""
Callable handlers and the Flask service for the travel retraining backend.
"""
