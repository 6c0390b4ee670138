"""Constituency registry and text-to-place resolution."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from ..core.types import Constituency, ElectoralRecord, ResolutionLevel

DEFAULT_ALIASES: Dict[str, Tuple[str, ...]] = {
    "wb_kolkata_bhowanipore": ("bhawanipore", "bhowanipor", "ভবানীপুর", "kalighat", "কালীঘাট"),
    "wb_kolkata_ballygunge": ("ballygunj", "বালিগঞ্জ"),
    "wb_kolkata_jadavpur": ("যাদবপুর", "jadavpur university"),
    "wb_kolkata_tollygunge": ("tollygunj", "টালিগঞ্জ", "টলিগঞ্জ"),
    "wb_howrah_shibpur": ("sibpur", "শিবপুর"),
    "wb_howrah_uttarpara": ("উত্তরপাড়া", "kotrung"),
    "wb_n24_barrackpore": ("barrackpur", "ব্যারাকপুর"),
    "wb_n24_bidhannagar": ("বিধাননগর", "salt lake", "সল্ট লেক", "sector v"),
    "wb_s24_diamond_harbour": ("diamond harbor", "ডায়মন্ড হারবার"),
    "wb_hooghly_chinsurah": ("chinsura", "চুঁচুড়া"),
    "wb_darjeeling_darjeeling": ("দার্জিলিং", "darjeeling hills", "gorkhaland"),
    "wb_darjeeling_siliguri": ("শিলিগুড়ি", "shiliguri"),
    "wb_bardhaman_asansol": ("আসানসোল",),
    "wb_bardhaman_durgapur": ("দুর্গাপুর",),
    "wb_purulia_purulia": ("পুরুলিয়া",),
    "wb_nadia_ranaghat": ("রানাঘাট",),
}

DEFAULT_DISTRICT_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "Kolkata": ("kolkata", "calcutta", "কলকাতা", "कोलकाता"),
    "Howrah": ("howrah", "হাওড়া"),
    "North 24 Parganas": ("north 24 parganas", "barasat", "dum dum", "উত্তর ২৪ পরগনা"),
    "South 24 Parganas": ("south 24 parganas", "sonarpur", "দক্ষিণ ২৪ পরগনা"),
    "Hooghly": ("hooghly", "hugli", "হুগলি"),
    "Darjeeling": ("darjeeling", "দার্জিলিং"),
    "Purba Bardhaman": ("bardhaman", "burdwan", "বর্ধমান"),
    "Purulia": ("purulia",),
    "Nadia": ("nadia", "krishnanagar", "নদিয়া"),
}


@dataclass(frozen=True, slots=True)
class Resolution:
    """Where a piece of text was attributed to."""

    level: ResolutionLevel
    constituency_id: Optional[str] = None
    district: Optional[str] = None


STATEWIDE = Resolution(level=ResolutionLevel.STATEWIDE)


def _longest_first(pairs: Iterable[Tuple[str, str]]) -> List[Tuple[str, str]]:
    # Longer keywords first so "ballygunge" beats "bally"; ties broken by target.
    return sorted(
        {(keyword.lower(), target) for keyword, target in pairs if keyword},
        key=lambda pair: (-len(pair[0]), pair[1], pair[0]),
    )


class ConstituencyRegistry:
    """Known constituencies, their aliases and the district lookup table.

    :meth:`resolve` applies a fixed precedence: constituency display name,
    then constituency alias, then district keyword. Text matching none of
    them resolves to the state-wide bucket.
    """

    def __init__(
        self,
        constituencies: Iterable[Constituency],
        district_keywords: Optional[Mapping[str, Sequence[str]]] = None,
    ) -> None:
        self._by_id: Dict[str, Constituency] = {}
        for constituency in constituencies:
            if constituency.id in self._by_id:
                raise ValueError(f"Duplicate constituency id {constituency.id}")
            self._by_id[constituency.id] = constituency

        members: Dict[str, List[str]] = {}
        for constituency in self._by_id.values():
            members.setdefault(constituency.district, []).append(constituency.id)
        self._district_members: Dict[str, Tuple[str, ...]] = {
            district: tuple(sorted(ids)) for district, ids in members.items()
        }

        self._name_matchers = _longest_first((c.name, c.id) for c in self._by_id.values())
        self._alias_matchers = _longest_first(
            (alias, c.id) for c in self._by_id.values() for alias in c.aliases
        )
        district_pairs = [(district, district) for district in self._district_members if district]
        # Only districts with registered constituencies get keyword matchers.
        for district, keywords in (district_keywords or {}).items():
            if district not in self._district_members:
                continue
            district_pairs.extend((keyword, district) for keyword in keywords)
        self._district_matchers = _longest_first(district_pairs)

    @classmethod
    def from_records(
        cls,
        records: Iterable[ElectoralRecord],
        *,
        aliases: Mapping[str, Sequence[str]] = DEFAULT_ALIASES,
        district_keywords: Mapping[str, Sequence[str]] = DEFAULT_DISTRICT_KEYWORDS,
    ) -> "ConstituencyRegistry":
        """Derive the registry from electoral records (one entry per constituency)."""

        seen: Dict[str, Constituency] = {}
        for record in records:
            if record.constituency_id in seen:
                continue
            seen[record.constituency_id] = Constituency(
                id=record.constituency_id,
                name=record.constituency_name,
                district=record.district,
                aliases=tuple(aliases.get(record.constituency_id, ())),
            )
        return cls(seen.values(), district_keywords)

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[Constituency]:
        return iter(sorted(self._by_id.values(), key=lambda c: c.id))

    def __contains__(self, constituency_id: object) -> bool:
        return constituency_id in self._by_id

    def get(self, constituency_id: str) -> Optional[Constituency]:
        return self._by_id.get(constituency_id)

    def districts(self) -> List[str]:
        return sorted(self._district_members)

    def members(self, district: str) -> Tuple[str, ...]:
        return self._district_members.get(district, ())

    def representative(self, district: str) -> Optional[str]:
        """Return the constituency that stands in for district-level signals.

        This is the first id of the district in sorted order, so the choice
        never depends on registration order.
        """

        members = self.members(district)
        return members[0] if members else None

    def resolve(self, text: str) -> Resolution:
        lowered = (text or "").lower()
        if not lowered:
            return STATEWIDE
        for matchers in (self._name_matchers, self._alias_matchers):
            for keyword, constituency_id in matchers:
                if keyword in lowered:
                    constituency = self._by_id[constituency_id]
                    return Resolution(
                        level=ResolutionLevel.CONSTITUENCY,
                        constituency_id=constituency.id,
                        district=constituency.district,
                    )
        for keyword, district in self._district_matchers:
            if keyword in lowered:
                return Resolution(level=ResolutionLevel.DISTRICT, district=district)
        return STATEWIDE


__all__ = [
    "ConstituencyRegistry",
    "DEFAULT_ALIASES",
    "DEFAULT_DISTRICT_KEYWORDS",
    "Resolution",
    "STATEWIDE",
]
