"""
Ilios jewelry catalog core.

Product-code grammar, scan matching, recursive BOM cost rollup and
wholesale pricing over an in-memory catalog.
"""

import logging

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
