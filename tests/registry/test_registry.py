from __future__ import annotations

import pytest

from election_fusion.core.types import Constituency, ResolutionLevel
from election_fusion.records import sample_records
from election_fusion.registry import STATEWIDE, ConstituencyRegistry


@pytest.fixture()
def registry() -> ConstituencyRegistry:
    return ConstituencyRegistry.from_records(sample_records())


def test_registry_deduplicates_records_per_constituency(registry):
    assert len(registry) == 16
    assert "wb_howrah_uttarpara" in registry
    assert registry.get("wb_howrah_uttarpara").name == "Uttarpara"


def test_district_lookup_is_sorted(registry):
    assert registry.members("Kolkata") == (
        "wb_kolkata_ballygunge",
        "wb_kolkata_bhowanipore",
        "wb_kolkata_jadavpur",
        "wb_kolkata_tollygunge",
    )
    assert registry.representative("Kolkata") == "wb_kolkata_ballygunge"
    assert registry.representative("Atlantis") is None
    assert "Purulia" in registry.districts()


def test_representative_does_not_depend_on_registration_order():
    forward = ConstituencyRegistry(
        [Constituency("b", "Beta", "North"), Constituency("a", "Alpha", "North")]
    )
    backward = ConstituencyRegistry(
        [Constituency("a", "Alpha", "North"), Constituency("b", "Beta", "North")]
    )

    assert forward.representative("North") == backward.representative("North") == "a"


def test_duplicate_ids_are_rejected():
    with pytest.raises(ValueError):
        ConstituencyRegistry([Constituency("a", "Alpha", "North"), Constituency("a", "Other", "South")])


def test_resolve_by_constituency_name(registry):
    resolution = registry.resolve("Huge rally in Shibpur tonight")

    assert resolution.level is ResolutionLevel.CONSTITUENCY
    assert resolution.constituency_id == "wb_howrah_shibpur"
    assert resolution.district == "Howrah"


def test_resolve_by_alias(registry):
    resolution = registry.resolve("Traffic jam in Salt Lake Sector V")

    assert resolution.level is ResolutionLevel.CONSTITUENCY
    assert resolution.constituency_id == "wb_n24_bidhannagar"


def test_resolve_by_bengali_alias(registry):
    resolution = registry.resolve("ভবানীপুর কেন্দ্রে উপনির্বাচন")

    assert resolution.constituency_id == "wb_kolkata_bhowanipore"


def test_name_takes_precedence_over_district_keyword(registry):
    resolution = registry.resolve("Howrah: residents of Uttarpara queue early")

    assert resolution.level is ResolutionLevel.CONSTITUENCY
    assert resolution.constituency_id == "wb_howrah_uttarpara"


def test_resolve_by_district_keyword(registry):
    resolution = registry.resolve("Calcutta high court hearing adjourned")

    assert resolution.level is ResolutionLevel.DISTRICT
    assert resolution.constituency_id is None
    assert resolution.district == "Kolkata"


def test_unmatched_text_is_statewide(registry):
    assert registry.resolve("Statewide fuel prices unchanged") == STATEWIDE
    assert registry.resolve("") == STATEWIDE


def test_district_names_are_keywords_without_explicit_table():
    registry = ConstituencyRegistry([Constituency("x1", "Xanadu", "Coastal Belt")])

    resolution = registry.resolve("Storm warning for the coastal belt")

    assert resolution.level is ResolutionLevel.DISTRICT
    assert resolution.district == "Coastal Belt"


def test_keywords_of_unregistered_districts_are_ignored():
    registry = ConstituencyRegistry(
        [Constituency("c1", "Ranaghat", "Nadia")],
        {"Nadia": ("krishnanagar",), "Kolkata": ("kolkata", "calcutta")},
    )

    assert registry.resolve("BJP rally in Kolkata") == STATEWIDE
    assert registry.resolve("Krishnanagar market").district == "Nadia"


def test_longer_names_win_over_contained_names():
    registry = ConstituencyRegistry(
        [
            Constituency("c1", "Bally", "Howrah"),
            Constituency("c2", "Ballygunge", "Kolkata"),
        ]
    )

    assert registry.resolve("Ballygunge market").constituency_id == "c2"
    assert registry.resolve("Bally bridge").constituency_id == "c1"
