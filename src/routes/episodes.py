"""Episode summary endpoints."""

from fastapi import APIRouter

from common.logging import get_logger
from models.episode import EpisodeSummaryRequest, EpisodeSummaryResponse
from pipelines.episode_summary import summarize_episode

logger = get_logger(__name__)
router = APIRouter(prefix="/api", tags=["episodes"])


@router.post("/episode-summary", response_model=EpisodeSummaryResponse)
async def episode_summary_endpoint(request: EpisodeSummaryRequest):
    """
    Summarize an Andor season 2 episode.

    Same operation as the `get_andor_episode_summary` MCP tool: failures and
    unknown episodes are reported in `text`, never as an HTTP error.

    Example request:
        ```json
        {"episode": "1"}
        ```
    """
    logger.debug(f"Episode summary request: {request.model_dump_json()}")

    text = await summarize_episode(request.episode)

    return EpisodeSummaryResponse(episode=request.episode, text=text)
