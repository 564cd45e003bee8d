#!/usr/bin/env python3
"""
Deployment entry point - exposes the article gate server.

The FastAPI `app` is exposed at module level for uvicorn or a serverless
ASGI host to import:
    uvicorn app:app --host 0.0.0.0 --port 8787

Running this file directly starts a listener unless VERCEL=1, in which case
the host invokes `app` on demand.
"""
import os
import sys

# Add the article_gate source to the path BEFORE any imports
_project_root = os.path.dirname(os.path.abspath(__file__))
_src_path = os.path.join(_project_root, "article_gate", "src")
if _src_path not in sys.path:
    sys.path.insert(0, _src_path)

from article_gate.config import get_settings  # noqa: E402
from article_gate.server import app  # noqa: E402

__all__ = ["app"]

if __name__ == "__main__":
    settings = get_settings()

    if not settings.is_serverless:
        import uvicorn
        uvicorn.run(app, host="0.0.0.0", port=settings.port)
