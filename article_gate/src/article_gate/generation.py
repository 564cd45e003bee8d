"""
OpenAI-backed outline and article generator.

Requests structured JSON output and validates that the returned article
payload has exactly the expected shape. Failures are raised as
GenerationError and are never retried here.
"""

import json
from typing import Optional

from openai import AsyncOpenAI, OpenAIError
from pydantic import ValidationError

from .config import get_settings
from .logging_conf import get_logger
from .models import ArticleGenerationPayload, ArticleRequest
from .prompts import (
    ARTICLE_SCHEMA,
    OUTLINE_SCHEMA,
    SYSTEM_PROMPT,
    build_article_prompt,
    build_outline_prompt,
)

logger = get_logger(__name__)


class GenerationError(Exception):
    """The generation backend could not produce a conforming result."""


class GenerationClient:
    """
    Produces outlines and article payloads from prompts using OpenAI.

    The OpenAI client is created on first use so that a missing API key
    surfaces as a GenerationError on the request that needs it.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[AsyncOpenAI] = None,
    ):
        settings = get_settings()
        self.api_key = api_key or settings.openai_api_key
        self.model = model or settings.openai_model
        self.timeout = timeout or settings.openai_timeout
        self.target_words = settings.target_word_count
        self.min_keywords = settings.min_secondary_keywords
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            try:
                self._client = AsyncOpenAI(
                    api_key=self.api_key,
                    timeout=self.timeout,
                    max_retries=0,
                )
            except OpenAIError as e:
                raise GenerationError(str(e)) from e
            logger.info("generation_client_initialized", model=self.model)
        return self._client

    async def generate_structured(self, system: str, user: str, schema: dict) -> dict:
        """
        Run one structured-output completion.

        Args:
            system: System instruction
            user: User instruction
            schema: json_schema definition ({"name": ..., "schema": {...}})

        Returns:
            Parsed JSON object from the first choice
        """
        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": user},
                ],
                response_format={"type": "json_schema", "json_schema": schema},
            )
        except OpenAIError as e:
            logger.error("generation_failed", schema=schema.get("name"), error=str(e))
            raise GenerationError(str(e)) from e

        content = (response.choices[0].message.content if response.choices else None) or "{}"

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            logger.error("generation_json_error", schema=schema.get("name"), error=str(e))
            raise GenerationError(f"JSON parse error: {e}") from e

        if not isinstance(data, dict):
            raise GenerationError("Generator returned a non-object JSON value")

        return data

    async def generate_outline(self, topic: str, language: str) -> str:
        """Generate a raw-text H2/H3 outline for a topic."""
        data = await self.generate_structured(
            system=SYSTEM_PROMPT,
            user=build_outline_prompt(topic, language, target_words=self.target_words),
            schema=OUTLINE_SCHEMA,
        )
        outline = data.get("outline") or ""
        logger.info("outline_generated", topic=topic[:60], chars=len(outline))
        return outline

    async def generate_article(self, request: ArticleRequest) -> ArticleGenerationPayload:
        """
        Generate an article payload for a validated, normalized request.

        Raises:
            GenerationError: transport failure or non-conforming payload
        """
        data = await self.generate_structured(
            system=SYSTEM_PROMPT,
            user=build_article_prompt(
                request,
                target_words=self.target_words,
                min_keywords=self.min_keywords,
            ),
            schema=ARTICLE_SCHEMA,
        )

        try:
            payload = ArticleGenerationPayload.model_validate(data)
        except ValidationError as e:
            logger.error("generation_payload_invalid", errors=e.error_count())
            raise GenerationError(f"Generator returned a non-conforming article: {e}") from e

        logger.info(
            "article_generated",
            title=payload.article.article_title[:60],
            self_reported_blocked=payload.gate.blocked,
        )
        return payload
