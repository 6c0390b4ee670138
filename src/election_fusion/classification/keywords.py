"""Keyword dictionaries used by the rule based classifier.

Every category is a flat union of spellings across Latin, Bengali and
Devanagari script. A text is matched against all of them at once; there is no
language detection step.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Tuple

TRACKED_PARTIES: Tuple[str, ...] = ("BJP", "TMC", "INC", "CPIM")

PARTY_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    "BJP": (
        "bjp",
        "bharatiya janata",
        "narendra modi",
        "pm modi",
        "modi",
        "amit shah",
        "sukanta majumdar",
        "suvendu adhikari",
        "dilip ghosh",
        "বিজেপি",
        "ভারতীয় জনতা",
        "মোদী",
        "শুভেন্দু",
        "সুকান্ত",
        "भाजपा",
        "भारतीय जनता पार्टी",
    ),
    "TMC": (
        "tmc",
        "trinamool",
        "mamata",
        "abhishek banerjee",
        "didi",
        "তৃণমূল",
        "মমতা",
        "দিদি",
        "অভিষেক",
        "টিএমসি",
        "तृणमूल",
        "ममता",
    ),
    # Bare "congress" would also fire on "Trinamool Congress".
    "INC": (
        "indian national congress",
        "pradesh congress",
        "congress party",
        "adhir ranjan",
        "rahul gandhi",
        "राहुल गांधी",
    ),
    "CPIM": (
        "cpim",
        "cpi(m)",
        "cpi-m",
        "left front",
        "md salim",
        "communist party of india (marxist)",
        "সিপিএম",
        "বামফ্রন্ট",
    ),
}

POSITIVE_WORDS: Tuple[str, ...] = (
    "win",
    "success",
    "victory",
    "support",
    "growth",
    "development",
    "progress",
    "achievement",
    "উন্নয়ন",
    "সাফল্য",
    "বিজয়",
    "जीत",
    "विकास",
)

NEGATIVE_WORDS: Tuple[str, ...] = (
    "corruption",
    "scam",
    "arrest",
    "protest",
    "violence",
    "failure",
    "crisis",
    "defeat",
    "দুর্নীতি",
    "গ্রেপ্তার",
    "বিতর্ক",
    "भ्रष्टाचार",
    "हिंसा",
)

ELECTION_KEYWORDS: Tuple[str, ...] = (
    "election",
    "vote",
    "polling",
    "candidate",
    "campaign",
    "assembly",
    "bypoll",
    "নির্বাচন",
    "ভোট",
    "প্রচার",
    "चुनाव",
    "मतदान",
)

# First matching rule wins; texts matching none fall back to the defaults.
CATEGORY_RULES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("Protest", ("protest", "rally", "demonstration", "strike", "dharna")),
    ("Civic", ("water", "drainage", "road", "infrastructure", "civic", "municipal")),
    ("Event", ("inauguration", "ceremony", "festival", "celebration", "event")),
    ("Political", ("election", "campaign", "political", "party", "mla", "mp")),
    ("Development", ("development", "project", "scheme", "construction")),
)
DEFAULT_CATEGORY = "Social"

IMPACT_RULES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("High", ("major", "massive", "large scale", "thousands", "crisis", "emergency")),
    ("Low", ("minor", "small", "limited", "few")),
)
DEFAULT_IMPACT = "Medium"


@dataclass(frozen=True, slots=True)
class KeywordSet:
    """Bundle of the keyword categories consulted by one classifier."""

    parties: Mapping[str, Tuple[str, ...]]
    positive: Tuple[str, ...]
    negative: Tuple[str, ...]
    election: Tuple[str, ...]
    categories: Tuple[Tuple[str, Tuple[str, ...]], ...] = CATEGORY_RULES
    impacts: Tuple[Tuple[str, Tuple[str, ...]], ...] = IMPACT_RULES

    def normalized(self) -> "KeywordSet":
        """Return a copy with every keyword lower-cased and de-duplicated."""

        def _norm(words: Tuple[str, ...]) -> Tuple[str, ...]:
            return tuple(dict.fromkeys(word.lower() for word in words if word))

        return KeywordSet(
            parties={party: _norm(tuple(words)) for party, words in self.parties.items()},
            positive=_norm(self.positive),
            negative=_norm(self.negative),
            election=_norm(self.election),
            categories=tuple((label, _norm(words)) for label, words in self.categories),
            impacts=tuple((label, _norm(words)) for label, words in self.impacts),
        )


DEFAULT_KEYWORDS = KeywordSet(
    parties=PARTY_KEYWORDS,
    positive=POSITIVE_WORDS,
    negative=NEGATIVE_WORDS,
    election=ELECTION_KEYWORDS,
)


__all__ = [
    "CATEGORY_RULES",
    "DEFAULT_CATEGORY",
    "DEFAULT_IMPACT",
    "DEFAULT_KEYWORDS",
    "ELECTION_KEYWORDS",
    "IMPACT_RULES",
    "KeywordSet",
    "NEGATIVE_WORDS",
    "PARTY_KEYWORDS",
    "POSITIVE_WORDS",
    "TRACKED_PARTIES",
]
