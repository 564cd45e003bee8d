"""
Shared fixtures: article builders and a counting generator double.
"""

import pytest

from article_gate.config import Settings
from article_gate.models import (
    ArticleGenerationPayload,
    ArticleRequest,
    GateVerdict,
    GeneratedArticle,
    Metadata,
)

DISCLAIMER_SENTENCE = "إخلاء المسؤولية الطبية: هذا المحتوى للتثقيف ولا يغني عن استشارة الطبيب."

VALID_SOURCES = [
    "https://www.cdc.gov/diabetes/basics/index.html",
    "https://medlineplus.gov/diabetes.html",
    "https://www.niddk.nih.gov/health-information/diabetes",
]


def build_html(words: int, filler: str = "صحة", extra: str = "") -> str:
    """Build article HTML with `words` filler tokens plus optional extra text."""
    body = " ".join([filler] * words)
    return f"<h2>مقدمة</h2><p>{body}</p>{extra}"


class StubGenerator:
    """Records calls and returns a fixed payload (or raises)."""

    def __init__(self, payload: ArticleGenerationPayload = None, error: Exception = None):
        self.payload = payload
        self.error = error
        self.calls = 0
        self.requests = []

    async def generate_article(self, request: ArticleRequest) -> ArticleGenerationPayload:
        self.calls += 1
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def settings():
    return Settings(openai_api_key="test-key", _env_file=None)


@pytest.fixture
def make_payload():
    """Factory for generator payloads."""
    def _make(
        words: int = 1300,
        keywords: list = None,
        disclaimer: bool = True,
        extra: str = "",
        gate: GateVerdict = None,
    ) -> ArticleGenerationPayload:
        tail = f"<p>{DISCLAIMER_SENTENCE}</p>" if disclaimer else ""
        return ArticleGenerationPayload(
            article=GeneratedArticle(
                article_title="السكري: دليل شامل",
                article_html_content=build_html(words, extra=extra + tail),
                secondary_keywords=keywords if keywords is not None else [
                    "أعراض السكري", "علاج السكري", "سكر الدم", "الأنسولين",
                ],
            ),
            metadata=Metadata(
                meta_title="السكري",
                meta_description="كل ما تحتاج معرفته عن السكري",
                social_title="السكري",
                social_description="دليل السكري",
            ),
            gate=gate or GateVerdict(),
        )
    return _make


@pytest.fixture
def make_generator():
    return StubGenerator


@pytest.fixture
def article_request():
    return ArticleRequest(
        topic="سكري",
        primary_keyword="سكري",
        outline="...",
        sources=list(VALID_SOURCES),
    )
