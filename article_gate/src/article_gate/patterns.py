"""
Language-specific pattern sets for claim, disclaimer and citation detection.

The checkers never hard-code phrasing: they take a PatternSet. New languages
are added with register_pattern_set() without touching gate control flow.

Detection is heuristic by nature:
- claim verbs are matched as whole words in tag-stripped text
- disclaimer indicators are matched case-insensitively anywhere
- a citation marker is a bracketed integer such as [1] or [12]
"""

import re
from dataclasses import dataclass, field
from typing import Optional

CITATION_MARKER = r"\[\d+\]"

ENGLISH_CLAIM_VERBS = [
    r"reduces?",
    r"increases?",
    r"prevents?",
    r"treats?",
    r"improves?",
    r"leads?\s+to",
    r"cures?",
]

ENGLISH_DISCLAIMER_INDICATORS = [
    r"disclaimer",
    r"medical\s+warning",
    r"not\s+a\s+substitute\s+for\s+(?:professional\s+)?medical\s+advice",
]

ARABIC_CLAIM_VERBS = [
    r"يقلل",
    r"يزيد",
    r"يمنع",
    r"يعالج",
    r"يحسن",
    r"يؤدي\s+إلى",
]

ARABIC_DISCLAIMER_INDICATORS = [
    r"إخلاء\s*المسؤولية",
    r"تنبيه\s*طبي",
]


def _alternation(patterns: tuple[str, ...]) -> str:
    return "|".join(f"(?:{p})" for p in patterns)


@dataclass(frozen=True)
class PatternSet:
    """Claim verbs, disclaimer indicators and citation marker for one language."""
    name: str
    claim_verbs: tuple[str, ...]
    disclaimer_indicators: tuple[str, ...]
    citation_marker: str = CITATION_MARKER

    _claim_re: re.Pattern = field(init=False, repr=False, compare=False)
    _disclaimer_re: re.Pattern = field(init=False, repr=False, compare=False)
    _citation_re: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # Frozen dataclass: compiled patterns are cached via object.__setattr__
        object.__setattr__(
            self, "_claim_re",
            re.compile(rf"\b(?:{_alternation(self.claim_verbs)})\b", re.IGNORECASE),
        )
        object.__setattr__(
            self, "_disclaimer_re",
            re.compile(_alternation(self.disclaimer_indicators), re.IGNORECASE),
        )
        object.__setattr__(self, "_citation_re", re.compile(self.citation_marker))

    def has_claim(self, text: str) -> bool:
        return bool(self._claim_re.search(text or ""))

    def find_claims(self, text: str) -> list[str]:
        """Return the matched claim phrases in order of appearance."""
        return [m.group(0) for m in self._claim_re.finditer(text or "")]

    def has_disclaimer(self, text: str) -> bool:
        return bool(self._disclaimer_re.search(text or ""))

    def has_citation(self, text: str) -> bool:
        return bool(self._citation_re.search(text or ""))

    def extended(self, other: "PatternSet", name: Optional[str] = None) -> "PatternSet":
        """Combine with another set, e.g. to add an English fallback."""
        return PatternSet(
            name=name or f"{self.name}+{other.name}",
            claim_verbs=self.claim_verbs + other.claim_verbs,
            disclaimer_indicators=self.disclaimer_indicators + other.disclaimer_indicators,
            citation_marker=self.citation_marker,
        )


ENGLISH = PatternSet(
    name="english",
    claim_verbs=tuple(ENGLISH_CLAIM_VERBS),
    disclaimer_indicators=tuple(ENGLISH_DISCLAIMER_INDICATORS),
)

# Arabic phrasing with the English fallback: generated Arabic articles often
# keep an English "Disclaimer" heading or English sentences.
ARABIC = PatternSet(
    name="arabic",
    claim_verbs=tuple(ARABIC_CLAIM_VERBS),
    disclaimer_indicators=tuple(ARABIC_DISCLAIMER_INDICATORS),
).extended(ENGLISH, name="arabic")

DEFAULT_PATTERN_SET = ARABIC

_REGISTRY: dict[str, PatternSet] = {}


def register_pattern_set(pattern_set: PatternSet, *aliases: str) -> None:
    """Register a pattern set under its name and any language aliases."""
    for key in (pattern_set.name, *aliases):
        _REGISTRY[key.strip().lower()] = pattern_set


def get_pattern_set(language: Optional[str]) -> PatternSet:
    """
    Resolve a pattern set from a language name or code.

    Unknown or missing languages fall back to DEFAULT_PATTERN_SET.
    """
    if not language:
        return DEFAULT_PATTERN_SET
    return _REGISTRY.get(language.strip().lower(), DEFAULT_PATTERN_SET)


register_pattern_set(ENGLISH, "en", "english", "الإنجليزية")
register_pattern_set(ARABIC, "ar", "arabic", "العربية")
