"""
Request, article and verdict records exchanged with callers and the generator.

Wire names are camelCase (``primaryKeyword``, ``articleHtmlContent``); Python
attributes are snake_case. Either form is accepted on input.
"""

from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_INTRO_STYLE = "مباشرة"
DEFAULT_CONCLUSION_STYLE = "تلخيصية"


class CamelModel(BaseModel):
    """Base model serialising to camelCase JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class StrictCamelModel(CamelModel):
    """camelCase model that rejects unknown fields."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


# =====================================================
# REQUESTS
# =====================================================

class OutlineRequest(CamelModel):
    topic: Optional[str] = None
    language: Optional[str] = None


class OutlineResponse(CamelModel):
    outline: str = ""


class ArticleRequest(CamelModel):
    """
    Caller-supplied article request.

    topic, primary_keyword, outline and sources are optional in the type so
    that their absence is reported as a gate reason rather than a parse error.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    topic: Optional[str] = None
    primary_keyword: Optional[str] = None
    language: Optional[str] = None
    outline: Optional[str] = None
    intro_style: Optional[str] = None
    conclusion_style: Optional[str] = None
    include_faq: bool = False
    sources: Optional[list[str]] = None
    internal_links: list[str] = Field(default_factory=list)

    def normalized(self, default_language: str = "العربية") -> "ArticleRequest":
        """
        Apply defaults and trim text fields.

        Run once at the boundary, before any validation. Sources are kept
        as sent so that rejection reasons quote them verbatim.
        """
        def clean(value: Optional[str]) -> Optional[str]:
            if value is None:
                return None
            return value.strip()

        return self.model_copy(update={
            "topic": clean(self.topic),
            "primary_keyword": clean(self.primary_keyword),
            "outline": clean(self.outline),
            "language": clean(self.language) or default_language,
            "intro_style": clean(self.intro_style) or DEFAULT_INTRO_STYLE,
            "conclusion_style": clean(self.conclusion_style) or DEFAULT_CONCLUSION_STYLE,
            "internal_links": [u.strip() for u in self.internal_links if u.strip()],
        })


# =====================================================
# GENERATED CONTENT
# =====================================================

class GeneratedArticle(StrictCamelModel):
    article_title: str
    article_html_content: str
    secondary_keywords: list[str]

    @classmethod
    def empty(cls, title: str = "") -> "GeneratedArticle":
        return cls(article_title=title, article_html_content="", secondary_keywords=[])


class Metadata(StrictCamelModel):
    meta_title: str
    meta_description: str
    social_title: str
    social_description: str

    @classmethod
    def empty(cls) -> "Metadata":
        return cls(meta_title="", meta_description="", social_title="", social_description="")


@dataclass
class Findings:
    """Reasons and uncited-claim notes reported by a single checker."""
    reasons: list[str] = field(default_factory=list)
    claims_needing_citations: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.reasons or self.claims_needing_citations)


class GateVerdict(StrictCamelModel):
    """
    Accept/block verdict for one article.

    Findings from the generator's self-report and from the local checkers are
    combined append-only via merged(); finalized() OR-reduces the blocked flag.
    """

    blocked: bool = False
    reasons: list[str] = Field(default_factory=list)
    claims_needing_citations: list[str] = Field(default_factory=list)

    def merged(self, findings: Findings) -> "GateVerdict":
        return GateVerdict(
            blocked=self.blocked,
            reasons=[*self.reasons, *findings.reasons],
            claims_needing_citations=[
                *self.claims_needing_citations,
                *findings.claims_needing_citations,
            ],
        )

    def finalized(self) -> "GateVerdict":
        blocked = self.blocked or bool(self.reasons) or bool(self.claims_needing_citations)
        return self.model_copy(update={"blocked": blocked})


class ArticleGenerationPayload(StrictCamelModel):
    """Exact object shape required from the generation backend."""
    article: GeneratedArticle
    metadata: Metadata
    gate: GateVerdict


class ArticleResponse(CamelModel):
    """Returned to the caller; gate.blocked is the publish/do-not-publish signal."""
    article: GeneratedArticle
    metadata: Metadata
    gate: GateVerdict
