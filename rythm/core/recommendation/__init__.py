"""
Recommendation module for sleep and mood insights.

This module contains the daily motivation message selector.
"""

from rythm.core.recommendation.motivation_message import build_motivation_context, get_motivation_message

__all__ = ['build_motivation_context', 'get_motivation_message']
