"""
Utility helpers for the mechanic validator.
"""

from .id_generator import IDGenerator

__all__ = [
    "IDGenerator",
]
