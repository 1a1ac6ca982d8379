"""
Auto-organize engine for TV episodes and movies.

Scans watch folders, decides where each file belongs in the TV or movie
library, moves it there, keeps an audit log of every attempt and learns
from user corrections.
"""

__version__ = "1.0.0"
