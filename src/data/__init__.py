"""
Data Generation Module
"""
from .generators import GeneratorConfig, SalesDataGenerator

__all__ = [
    "GeneratorConfig",
    "SalesDataGenerator",
]
