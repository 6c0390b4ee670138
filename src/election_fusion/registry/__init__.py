"""Constituency registry and place resolution."""
from __future__ import annotations

from .constituencies import (
    DEFAULT_ALIASES,
    DEFAULT_DISTRICT_KEYWORDS,
    STATEWIDE,
    ConstituencyRegistry,
    Resolution,
)

__all__ = [
    "ConstituencyRegistry",
    "DEFAULT_ALIASES",
    "DEFAULT_DISTRICT_KEYWORDS",
    "Resolution",
    "STATEWIDE",
]
