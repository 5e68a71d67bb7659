"""
Core modules for the Rythm sleep & mood insights engine.

This package contains the functionality for:
- Entry and derived-statistics models
- Windowed averages, rolling trends and correlation analysis
- Tag drivers, streaks and achievement badges
- Motivation messages and report data
"""

__version__ = "0.4.0"
