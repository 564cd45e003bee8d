"""
Article gate: pre-validation, generation, post-validation, aggregation.

    PRE_VALIDATING -> BLOCKED_PRE                      (sources/shape rejected)
    PRE_VALIDATING -> GENERATING -> BLOCKED_POST       (content rejected)
    PRE_VALIDATING -> GENERATING -> ACCEPTED

Unverified input never reaches the generator. A blocked verdict is a normal
result, not an error; generator failures propagate as GenerationError.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from .checks import ClaimScanner, StructuralChecker
from .config import Settings, get_settings
from .logging_conf import get_logger
from .models import (
    ArticleGenerationPayload,
    ArticleRequest,
    ArticleResponse,
    GateVerdict,
    GeneratedArticle,
    Metadata,
)
from .patterns import get_pattern_set
from .source_policy import SourcePolicy

logger = get_logger(__name__)

REASON_MISSING_FIELDS = "topic/primaryKeyword/outline مطلوبة"
REASON_SOURCE_COUNT = "عدد المصادر يجب أن يكون بين {min_sources} و{max_sources}"
REASON_UNTRUSTED_SOURCES = "مصادر غير موثوقة: "


class GateState(str, Enum):
    PRE_VALIDATING = "pre_validating"
    BLOCKED_PRE = "blocked_pre"
    GENERATING = "generating"
    BLOCKED_POST = "blocked_post"
    ACCEPTED = "accepted"


class ArticleGenerator(Protocol):
    async def generate_article(self, request: ArticleRequest) -> ArticleGenerationPayload:
        ...


@dataclass
class GateOutcome:
    """Terminal state plus the response returned to the caller."""
    state: GateState
    response: ArticleResponse


class ArticleGate:
    """
    Runs one article request through the full gate.

    Holds configuration only; every verdict is built per call.
    """

    def __init__(
        self,
        generator: ArticleGenerator,
        settings: Optional[Settings] = None,
        source_policy: Optional[SourcePolicy] = None,
    ):
        self.generator = generator
        self.settings = settings or get_settings()
        self.source_policy = source_policy or SourcePolicy()

    def pre_validate(self, request: ArticleRequest) -> list[str]:
        """
        Check required fields, source count and source allow-list.

        Args:
            request: Normalized article request

        Returns:
            Reasons in detection order (empty when the request may proceed)
        """
        reasons = []
        s = self.settings

        if not request.topic or not request.primary_keyword or not request.outline:
            reasons.append(REASON_MISSING_FIELDS)

        sources = request.sources
        if sources is None or not s.min_sources <= len(sources) <= s.max_sources:
            reasons.append(REASON_SOURCE_COUNT.format(
                min_sources=s.min_sources,
                max_sources=s.max_sources,
            ))

        bad = self.source_policy.disallowed(sources or [])
        if bad:
            reasons.append(REASON_UNTRUSTED_SOURCES + ", ".join(bad))

        return reasons

    def post_validate(self, payload: ArticleGenerationPayload, language: Optional[str]) -> GateVerdict:
        """Merge structural and claim findings into the generator's verdict."""
        patterns = get_pattern_set(language)
        structural = StructuralChecker(
            patterns,
            min_words=self.settings.min_word_count,
            min_secondary_keywords=self.settings.min_secondary_keywords,
        )
        scanner = ClaimScanner(patterns)

        verdict = payload.gate
        verdict = verdict.merged(structural.check(payload.article))
        verdict = verdict.merged(scanner.scan(payload.article.article_html_content))
        return verdict.finalized()

    async def evaluate(self, request: ArticleRequest) -> GateOutcome:
        request = request.normalized(self.settings.default_language)

        reasons = self.pre_validate(request)
        if reasons:
            logger.info(
                "article_pre_gate_blocked",
                topic=(request.topic or "")[:60],
                reasons=reasons,
            )
            response = ArticleResponse(
                article=GeneratedArticle.empty(title=request.topic or ""),
                metadata=Metadata.empty(),
                gate=GateVerdict(blocked=True, reasons=reasons, claims_needing_citations=[]),
            )
            return GateOutcome(state=GateState.BLOCKED_PRE, response=response)

        logger.info(
            "article_generation_started",
            topic=request.topic[:60],
            sources=len(request.sources),
            language=request.language,
        )
        payload = await self.generator.generate_article(request)

        verdict = self.post_validate(payload, request.language)
        state = GateState.BLOCKED_POST if verdict.blocked else GateState.ACCEPTED

        logger.info(
            "article_gate_verdict",
            state=state.value,
            reasons=verdict.reasons,
            claims_needing_citations=len(verdict.claims_needing_citations),
        )

        return GateOutcome(
            state=state,
            response=ArticleResponse(
                article=payload.article,
                metadata=payload.metadata,
                gate=verdict,
            ),
        )

    async def run(self, request: ArticleRequest) -> ArticleResponse:
        outcome = await self.evaluate(request)
        return outcome.response
