"""
FastAPI server exposing the outline and article gate endpoints.

Provides:
- Health check endpoint
- Outline generation endpoint
- Gated article generation endpoint

A blocked article is returned with status 200; callers must branch on
gate.blocked. Generator failures are returned as 400 with the message.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from . import __version__
from .config import get_settings
from .logging_conf import bind_context, clear_context, get_logger, setup_logging
from .gate import ArticleGate
from .generation import GenerationClient, GenerationError
from .models import ArticleRequest, ArticleResponse, OutlineRequest, OutlineResponse

logger = get_logger(__name__)


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    version: str = __version__


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()

    setup_logging(
        level=settings.log_level,
        json_output=settings.log_json,
    )

    logger.info("server_starting", model=settings.openai_model)

    yield

    logger.info("server_stopped")


class BodySizeLimitMiddleware:
    """
    Reject request bodies larger than max_bytes with 413.

    Counts the bytes actually received, so chunked uploads without a
    Content-Length header are limited too. The buffered body is replayed
    to the application unchanged.
    """

    def __init__(self, app, max_bytes: int):
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        too_large = JSONResponse(status_code=413, content={"detail": "Request body too large"})

        for name, value in scope.get("headers", []):
            if name == b"content-length" and value.isdigit() and int(value) > self.max_bytes:
                await too_large(scope, receive, send)
                return

        messages = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            messages.append(message)
            if message["type"] != "http.request":
                break
            received += len(message.get("body", b""))
            if received > self.max_bytes:
                logger.warning("request_body_too_large", path=scope.get("path"), received=received)
                await too_large(scope, receive, send)
                return
            more_body = message.get("more_body", False)

        async def replay():
            if messages:
                return messages.pop(0)
            return await receive()

        await self.app(scope, replay, send)


app = FastAPI(
    title="YMYL Article Gate",
    description="Gated outline/article generation for health content",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(BodySizeLimitMiddleware, max_bytes=get_settings().max_body_bytes)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins_list,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(request: Request, call_next):
    """Bind a request id for logging."""
    clear_context()
    bind_context(request_id=uuid.uuid4().hex[:12], path=request.url.path)
    try:
        return await call_next(request)
    finally:
        clear_context()


def get_generation_client() -> GenerationClient:
    return GenerationClient()


def get_article_gate(client: GenerationClient = Depends(get_generation_client)) -> ArticleGate:
    return ArticleGate(client)


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(
        status="ok",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@app.post("/api/gpt5/outline", response_model=OutlineResponse)
async def create_outline(
    request: Optional[OutlineRequest] = None,
    client: GenerationClient = Depends(get_generation_client),
):
    """Generate an SEO outline for a topic."""
    if request is None:
        request = OutlineRequest()
    topic = (request.topic or "").strip()
    if not topic:
        raise HTTPException(status_code=400, detail="topic مطلوب")

    language = request.language or get_settings().default_language

    try:
        outline = await client.generate_outline(topic, language)
    except GenerationError as e:
        raise HTTPException(status_code=400, detail=str(e) or "Bad Request")

    return OutlineResponse(outline=outline)


@app.post("/api/gpt5/article", response_model=ArticleResponse)
async def create_article(
    request: Optional[ArticleRequest] = None,
    gate: ArticleGate = Depends(get_article_gate),
):
    """
    Generate an article and return it with its gate verdict.

    A missing body is treated as an empty request and blocked by the gate.
    """
    if request is None:
        request = ArticleRequest()

    try:
        outcome = await gate.evaluate(request)
    except GenerationError as e:
        raise HTTPException(status_code=400, detail=str(e) or "Bad Request")

    return outcome.response


def run_server(
    host: str = "0.0.0.0",
    port: Optional[int] = None,
):
    """
    Run the FastAPI server.

    Args:
        host: Host to bind to
        port: Port to bind to (defaults to settings.port)
    """
    import uvicorn

    settings = get_settings()
    port = port or settings.port

    logger.info("starting_server", host=host, port=port)

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level="info",
    )
