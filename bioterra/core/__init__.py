"""
Core module for the Region Explorer.

Contains configuration and base utilities.
"""

from bioterra.core.config import *
from bioterra.core.utils import bucket, clean_text, contains_any

__all__ = [
    'bucket',
    'clean_text',
    'contains_any',
]
