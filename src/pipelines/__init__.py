"""Episode summary pipelines."""

from pipelines.episode_summary import EpisodeSummaryPipeline, get_pipeline, shutdown_pipeline, summarize_episode

__all__ = [
    "EpisodeSummaryPipeline",
    "get_pipeline",
    "summarize_episode",
    "shutdown_pipeline",
]
