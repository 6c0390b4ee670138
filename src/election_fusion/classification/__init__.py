"""Keyword based classification of text signals."""
from __future__ import annotations

from .classifier import NEUTRAL_SCORE, TextClassifier, build_signal, classify
from .keywords import DEFAULT_CATEGORY, DEFAULT_IMPACT, DEFAULT_KEYWORDS, KeywordSet, TRACKED_PARTIES

__all__ = [
    "DEFAULT_CATEGORY",
    "DEFAULT_IMPACT",
    "DEFAULT_KEYWORDS",
    "KeywordSet",
    "NEUTRAL_SCORE",
    "TRACKED_PARTIES",
    "TextClassifier",
    "build_signal",
    "classify",
]
