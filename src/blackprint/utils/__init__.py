#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/blackprint/utils/__init__.py
"""Utility modules for the blackprint package."""

from blackprint.utils.security import is_relative_url, is_url_safe, is_url_scheme_dangerous, sanitize_url

__all__ = [
    "is_relative_url",
    "is_url_safe",
    "is_url_scheme_dangerous",
    "sanitize_url",
]
