"""
Core exception types raised by shape validation, encoding updates and option checks.

Provides typed exceptions for core-domain failures:
- SpecShapeError for operations applied on the wrong view shape (single/layered/multi).
- ChannelNotFoundError for strict encoding operations on a channel that is not encoded.
- OptionsError for unknown, duplicated or invalid plot options.
- DatasetError and ThemeError for failed lookups in the dataset/theme registries.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - All errors subclass ValueError: every core failure is a usage error raised
      synchronously to the immediate caller.
    - Geometric argument errors (e.g. a degenerate rectangle) raise plain ValueError.

Examples:
    Catch a shape violation.

    >>> from tucan.core.errors import SpecShapeError
    >>> from tucan.core.view import validate_single_view
    >>> try:
    ...     validate_single_view({"hconcat": []}, "demo/1")
    ... except SpecShapeError as e:
    ...     msg = str(e)
    >>> "hconcat" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "SpecShapeError",
    "ChannelNotFoundError",
    "OptionsError",
    "DatasetError",
    "ThemeError",
]


class SpecShapeError(ValueError):
    """Operation applied on a specification of the wrong shape (names the offending key)."""


class ChannelNotFoundError(ValueError):
    """Strict encoding operation on a channel that is not encoded in the specification."""


class OptionsError(ValueError):
    """Unknown, duplicated or invalid plot option."""


class DatasetError(ValueError):
    """Unknown dataset name requested from the dataset registry."""


class ThemeError(ValueError):
    """Unknown or malformed theme."""
