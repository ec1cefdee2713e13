"""Health check and service info endpoints."""

from fastapi import APIRouter

from common.config import config
from common.logging import get_logger
from pipelines.episode_summary import get_pipeline

logger = get_logger(__name__)
router = APIRouter(tags=["health"])


@router.get("/")
async def root():
    """Root endpoint with basic info."""
    return {
        "service": "Andor Search",
        "version": "1.0.0",
        "status": "running",
        "description": "Andor season 2 episode summaries scraped from the Star Wars wiki",
        "endpoints": {
            "health": "/health",
            "docs": "/docs",
            "episode_summary": "/api/episode-summary",
            "mcp_sse": "/sse",
            "mcp_streamable_http": "/mcp",
        },
        "example_request": {"episode": "1"},
    }


@router.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "andor-search"}


@router.get("/health/debug")
async def debug_check():
    """Debug endpoint to verify configuration and browser session state."""
    session_manager = get_pipeline().session_manager

    checks = {
        "config": {
            "episodes_index_url": config.episodes_index_url,
            "openai_model": config.openai_model,
            "openai_endpoint_set": bool(config.openai_endpoint),
            "openai_key_set": bool(config.openai_key.get_secret_value()),
            "browser_cdp_endpoint_set": bool(config.browser_cdp_endpoint),
        },
        "browser": {
            "state": session_manager.state.value,
            "ttl_seconds": session_manager.ttl_seconds,
        },
    }
    checks["status"] = "healthy" if checks["config"]["openai_key_set"] else "unhealthy"

    logger.info(f"Debug check result: {checks}")
    return checks
