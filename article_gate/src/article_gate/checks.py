"""
Post-generation checks for article bodies.

StructuralChecker:
- minimum word count of the tag-stripped body
- presence of a medical disclaimer
- minimum number of secondary keywords

ClaimScanner:
- assertive health-outcome verbs without any numbered citation marker

Both only report Findings. Blocking is decided by the gate.
"""

import re

from .logging_conf import get_logger
from .models import Findings, GeneratedArticle
from .patterns import PatternSet, DEFAULT_PATTERN_SET

logger = get_logger(__name__)

_TAG_RE = re.compile(r"<[^>]+>")

REASON_TOO_SHORT = "عدد الكلمات أقل من {min_words}."
REASON_MISSING_DISCLAIMER = "لا يوجد إخلاء مسؤولية طبي."
REASON_FEW_SECONDARY_KEYWORDS = "كلمات ثانوية غير كافية."
CLAIMS_WITHOUT_CITATIONS = "ادعاءات بدون إحالات مرقمة."


def strip_html(html: str) -> str:
    """Replace every tag with a space."""
    return _TAG_RE.sub(" ", html or "")


def count_words(html: str) -> int:
    """Count whitespace-separated tokens in tag-stripped text."""
    return len(strip_html(html).split())


class StructuralChecker:
    """Length, disclaimer and secondary-keyword checks."""

    def __init__(
        self,
        patterns: PatternSet = DEFAULT_PATTERN_SET,
        min_words: int = 1200,
        min_secondary_keywords: int = 3,
    ):
        self.patterns = patterns
        self.min_words = min_words
        self.min_secondary_keywords = min_secondary_keywords

    def check(self, article: GeneratedArticle) -> Findings:
        findings = Findings()
        text = strip_html(article.article_html_content)

        word_count = len(text.split())
        if word_count < self.min_words:
            findings.reasons.append(REASON_TOO_SHORT.format(min_words=self.min_words))

        if not self.patterns.has_disclaimer(text):
            findings.reasons.append(REASON_MISSING_DISCLAIMER)

        keywords = article.secondary_keywords
        if not isinstance(keywords, list) or len(keywords) < self.min_secondary_keywords:
            findings.reasons.append(REASON_FEW_SECONDARY_KEYWORDS)

        logger.debug(
            "structural_check_complete",
            word_count=word_count,
            secondary_keywords=len(keywords or []),
            reasons=len(findings.reasons),
        )

        return findings


class ClaimScanner:
    """
    Flags articles that make assertive claims but carry no [n] citation.

    The check is article-wide: one marker anywhere covers every claim.
    """

    def __init__(self, patterns: PatternSet = DEFAULT_PATTERN_SET):
        self.patterns = patterns

    def scan(self, html: str) -> Findings:
        findings = Findings()

        claims = self.patterns.find_claims(strip_html(html))
        has_citations = self.patterns.has_citation(html or "")

        if claims and not has_citations:
            findings.claims_needing_citations.append(CLAIMS_WITHOUT_CITATIONS)
            logger.debug("uncited_claims_found", examples=claims[:3])

        return findings
