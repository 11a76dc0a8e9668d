"""
Utilities Module

Shared helpers for hybrid collection operations:
- Section timing of request stages
"""

from .timing import TimeRecorder, SectionTiming

__all__ = [
    'TimeRecorder',
    'SectionTiming',
]
