"""Utility functions."""

from .datetime import now_utc
from .slug import generate_filename, slugify

__all__ = [
    "generate_filename",
    "now_utc",
    "slugify",
]
