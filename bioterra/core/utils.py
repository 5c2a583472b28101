"""
Utility functions for threshold bucketing and text matching.
"""

import re
import logging
from typing import Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')


def bucket(value: float, upper_bounds: Sequence[float], labels: Sequence[T]) -> T:
    """Classify ``value`` into inclusive upper-bounded bands.

    ``labels`` has one more entry than ``upper_bounds``; the last label is
    used for anything above the final bound.

        >>> bucket(50, [50, 100], ['low', 'medium', 'high'])
        'low'
        >>> bucket(101, [50, 100], ['low', 'medium', 'high'])
        'high'
    """
    if len(labels) != len(upper_bounds) + 1:
        raise ValueError("bucket() needs exactly one more label than bounds")
    for bound, label in zip(upper_bounds, labels):
        if value <= bound:
            return label
    return labels[-1]


def clean_text(text) -> str:
    """Collapse whitespace in a free-text descriptor."""
    if text is None:
        return ""
    return re.sub(r'\s+', ' ', str(text)).strip()


def contains_any(text, words: Sequence[str]) -> bool:
    """Case-sensitive substring test against several words."""
    text = clean_text(text)
    return any(w in text for w in words)
