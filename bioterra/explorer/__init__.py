"""
Selection State Machine.
"""

from .state_machine import RegionExplorer

__all__ = ['RegionExplorer']
