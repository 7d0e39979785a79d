"""
Storage Module
"""
from .store import MetricStore, validate_profit_share
from .seed import seed_sample_data

__all__ = [
    "MetricStore",
    "validate_profit_share",
    "seed_sample_data",
]
