"""Wedding Songs - Ceremony song planner for couples and choirs.

This package provides tools for:
- Choosing one song per wedding-ceremony moment from a fixed catalog
- Previewing audio and lyrics
- Downloading, sharing, or submitting the finished selection to the choir
"""

__version__ = "0.1.0"
