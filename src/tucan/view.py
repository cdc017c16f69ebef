"""
Plot view helpers.
"""

from __future__ import annotations

from .core.encoding import put_in_spec
from .core.merge import deep_merge
from .core.typing import Spec

__all__ = ["set_background", "set_view_background"]


def set_background(spec: Spec, color: str) -> Spec:
    """Sets the background color of the whole plot."""
    return put_in_spec(spec, "background", color)


def set_view_background(spec: Spec, color: str) -> Spec:
    """Sets the fill color of the data rectangle of every view."""
    return {**spec, "config": deep_merge(spec.get("config"), {"view": {"fill": color}})}
