#!/usr/bin/env python3
"""
FastAPI server for the Andor episode summary service.

Serves the REST endpoints plus the MCP tool over SSE (/sse) and
streamable HTTP (/mcp).
"""

# Load environment variables first
import os
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

from pipelines.episode_summary import shutdown_pipeline
from routes import episodes, health
from tools.episode_summary import mcp

load_dotenv()

# Built before the lifespan runs: the streamable HTTP app creates the MCP session manager
mcp_http_app = mcp.streamable_http_app()
mcp_sse_app = mcp.sse_app()


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with mcp.session_manager.run():
        try:
            yield
        finally:
            await shutdown_pipeline()


# Initialize
app = FastAPI(
    title="Andor Search API",
    description="Andor season 2 episode summaries scraped from the Star Wars wiki",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Include routers
app.include_router(health.router)
app.include_router(episodes.router)

# MCP transports, after the routers above so those take precedence.
# Streamable HTTP is added as a plain route: a mount would only match /mcp/...
app.router.routes.extend(mcp_http_app.routes)
app.mount("/", mcp_sse_app)


if __name__ == "__main__":
    import uvicorn

    port = int(os.environ.get("PORT", 8080))

    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=port,
        reload=False,
        log_level="info",
    )
