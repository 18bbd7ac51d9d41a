"""Worship Log - service song history and catalog analytics.

This package provides tools for:
- Searching the song catalog while assembling a service
- Tracking which songs were sung at each service
- Reporting most-sung and never-sung songs
"""

__version__ = "0.1.0"
