"""Bundled sample of West Bengal constituency results.

2021 assembly and 2024 general-election shares are rounded percentages; the
two by-election rows are illustrative. Two constituencies deliberately lack
2024 data so that the synthesized baseline path is exercised.
"""
from __future__ import annotations

from typing import Any, Dict, List

from ..core.types import ElectoralRecord

_BASELINES = (
    # id, name, district, total 2021 votes, (BJP, TMC) 2021, (BJP, TMC) 2024 or None
    ("wb_kolkata_bhowanipore", "Bhowanipore", "Kolkata", 192701, (29.5, 58.4), (32.1, 55.2)),
    ("wb_kolkata_ballygunge", "Ballygunge", "Kolkata", 165035, (29.2, 59.7), (31.5, 56.8)),
    ("wb_kolkata_jadavpur", "Jadavpur", "Kolkata", 174677, (24.9, 62.3), (27.2, 60.1)),
    ("wb_kolkata_tollygunge", "Tollygunge", "Kolkata", 174542, (28.6, 60.4), (30.9, 58.1)),
    ("wb_howrah_shibpur", "Shibpur", "Howrah", 162062, (36.4, 54.1), (38.7, 51.8)),
    ("wb_howrah_uttarpara", "Uttarpara", "Howrah", 163591, (44.2, 48.2), (46.5, 45.9)),
    ("wb_n24_barrackpore", "Barrackpore", "North 24 Parganas", 164802, (41.2, 50.0), (43.5, 47.7)),
    ("wb_n24_bidhannagar", "Bidhannagar", "North 24 Parganas", 162677, (30.0, 60.4), (32.3, 58.1)),
    ("wb_s24_diamond_harbour", "Diamond Harbour", "South 24 Parganas", 174073, (22.3, 66.3), (24.6, 64.0)),
    ("wb_hooghly_chinsurah", "Chinsurah", "Hooghly", 162590, (38.3, 52.7), (40.6, 50.4)),
    ("wb_darjeeling_darjeeling", "Darjeeling", "Darjeeling", 140122, (56.3, 23.2), (58.6, 20.9)),
    ("wb_darjeeling_siliguri", "Siliguri", "Darjeeling", 149257, (48.5, 30.6), (50.8, 28.3)),
    ("wb_bardhaman_asansol", "Asansol", "Purba Bardhaman", 160740, (47.6, 40.7), (49.9, 38.4)),
    ("wb_bardhaman_durgapur", "Durgapur", "Purba Bardhaman", 157789, (45.1, 43.7), None),
    ("wb_purulia_purulia", "Purulia", "Purulia", 157035, (45.4, 46.1), (47.7, 43.8)),
    ("wb_nadia_ranaghat", "Ranaghat", "Nadia", 160986, (36.5, 53.1), None),
)

_BYELECTIONS = (
    # id, total votes, (BJP, TMC)
    ("wb_howrah_uttarpara", 151204, (47.9, 44.1)),
    ("wb_n24_barrackpore", 149877, (42.0, 49.6)),
)


def _shares(bjp: float, tmc: float) -> Dict[str, float]:
    return {"BJP": bjp, "TMC": tmc, "OTHERS": round(100.0 - bjp - tmc, 1)}


def sample_rows() -> List[Dict[str, Any]]:
    """Return the sample dataset as plain dictionaries (one per epoch)."""

    rows: List[Dict[str, Any]] = []
    names = {}
    for identifier, name, district, total_votes, shares_2021, shares_2024 in _BASELINES:
        names[identifier] = (name, district)
        rows.append(
            {
                "constituency_id": identifier,
                "constituency_name": name,
                "district": district,
                "epoch": "E2021",
                "party_share": _shares(*shares_2021),
                "total_votes": total_votes,
            }
        )
        if shares_2024 is not None:
            rows.append(
                {
                    "constituency_id": identifier,
                    "constituency_name": name,
                    "district": district,
                    "epoch": "E2024",
                    "party_share": _shares(*shares_2024),
                }
            )
    for identifier, total_votes, shares in _BYELECTIONS:
        name, district = names[identifier]
        rows.append(
            {
                "constituency_id": identifier,
                "constituency_name": name,
                "district": district,
                "epoch": "E2025_BYELECTION",
                "party_share": _shares(*shares),
                "total_votes": total_votes,
            }
        )
    return rows


def sample_records() -> List[ElectoralRecord]:
    return [ElectoralRecord.from_dict(row) for row in sample_rows()]


__all__ = ["sample_records", "sample_rows"]
