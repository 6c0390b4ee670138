"""Campaign issues attached to a constituency prediction."""
from __future__ import annotations

from typing import Dict, Optional, Tuple

DISTRICT_ISSUES: Dict[str, Tuple[str, ...]] = {
    "Kolkata": ("Urban Development", "Jobs", "Traffic", "Law & Order"),
    "Howrah": ("Industrial Growth", "Infrastructure", "Employment"),
    "North 24 Parganas": ("Development", "Connectivity", "Jobs"),
    "South 24 Parganas": ("Flood Control", "Agriculture", "Roads"),
    "Darjeeling": ("Gorkhaland Issue", "Tourism", "Tea Industry"),
    "Purba Bardhaman": ("Coal Mining", "Jobs", "Healthcare"),
    "Paschim Bardhaman": ("Industrial Growth", "Employment", "Environment"),
    "Bankura": ("Agriculture", "Irrigation", "Rural Roads"),
    "Purulia": ("Tribal Welfare", "Water Crisis", "Jobs"),
    "Hooghly": ("Industry", "Agriculture", "Education"),
    "Nadia": ("Border Issues", "Agriculture", "Floods"),
    "Murshidabad": ("Minority Welfare", "Bidi Industry", "Jobs"),
    "Malda": ("Border Security", "Agriculture", "Development"),
    "Paschim Medinipur": ("TMC vs BJP", "Law & Order", "Development"),
    "Purba Medinipur": ("Land Rights", "Industry", "Agriculture"),
    "Birbhum": ("TMC Dominance", "Jobs", "Law & Order"),
}

DEFAULT_ISSUES: Tuple[str, ...] = ("Development", "Jobs", "Infrastructure")


def key_issues(
    district: str,
    last_winner: Optional[str],
    tracked_party: str,
    opposing_party: str,
) -> Tuple[str, ...]:
    """District issues followed by an incumbency tag for the latest winner."""

    base = DISTRICT_ISSUES.get(district, DEFAULT_ISSUES)
    if last_winner == tracked_party:
        return base + (f"{tracked_party} Performance",)
    return base + (f"{opposing_party} Anti-incumbency",)


__all__ = ["DEFAULT_ISSUES", "DISTRICT_ISSUES", "key_issues"]
