# ML Monitoring Module
"""
Training backlog statistics for the travel recommendation model.
"""

from travel_ml.monitoring.stats import ModelStats, get_model_stats

__all__ = ['ModelStats', 'get_model_stats']
