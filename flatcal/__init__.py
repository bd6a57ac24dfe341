"""
.. include:: ../README.md
"""

__all__ = [
    "appointment",
    "calendar_math",
    "exceptions",
    "grid",
    "lanes",
    "segment",
    "task",
    "util",
]
