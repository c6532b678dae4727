"""
WordScan: forbidden-word scanner and redactor.

Walks a directory tree, masks forbidden words in eligible text files,
and writes a report ranked by replacement count. Scans run as background
sessions that can be paused, resumed, and cancelled.
"""

__version__ = "1.0.0"

__all__ = [
    "__version__",
]
