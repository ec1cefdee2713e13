"""
Episode summary pipeline.

1. Acquire - get the shared browser session
2. Scrape - find the episode and extract its plot summary
3. Summarize - ask the LLM for a prose summary

Every outcome, including failures, is returned as text for the tool caller.
"""

from common.errors import BrowserUnavailableError
from common.logging import get_logger
from services.browser.launcher import PlaywrightLauncher
from services.browser.session_manager import BrowserSessionManager
from services.episode_scraper.client import EpisodeScraperClient
from services.summarizer.client import EpisodeSummarizer

logger = get_logger(__name__)

BROWSER_UNAVAILABLE_MESSAGE = (
    "Error: Browser functionality is not available. This could be due to:\n"
    "1. Playwright browsers are not installed (run `playwright install chromium`)\n"
    "2. The remote browser endpoint (BROWSER_CDP_ENDPOINT) is unreachable\n"
    "3. Browser initialization failed\n\n"
    "Please check the service configuration and logs."
)


def format_error(error: Exception) -> str:
    return f"Error getting Andor episode summary: {error}"


class EpisodeSummaryPipeline:
    """Runs acquire -> scrape -> summarize for one episode query."""

    def __init__(
        self,
        session_manager: BrowserSessionManager,
        scraper: EpisodeScraperClient,
        summarizer: EpisodeSummarizer,
    ):
        self.session_manager = session_manager
        self.scraper = scraper
        self.summarizer = summarizer

    async def run(self, episode: str) -> str:
        logger.info(f"[Pipeline] Summary requested for episode: {episode}")

        try:
            session = await self.session_manager.acquire()
        except BrowserUnavailableError as e:
            logger.error(f"[Pipeline] Browser unavailable: {e} (state={self.session_manager.state.value})")
            return BROWSER_UNAVAILABLE_MESSAGE

        try:
            result = await self.scraper.run(episode, session)
            if not result.found:
                logger.info(f"[Pipeline] {result.not_found_message()}")
                return result.not_found_message()

            return await self.summarizer.summarize(episode, result.text)

        except Exception as e:
            logger.opt(exception=e).error(f"[Pipeline] Error getting episode summary for {episode}: {e}")
            return format_error(e)

    async def shutdown(self) -> None:
        await self.session_manager.release()


_pipeline: EpisodeSummaryPipeline | None = None


def get_pipeline() -> EpisodeSummaryPipeline:
    """Process-wide pipeline, built on first use."""
    global _pipeline
    if _pipeline is None:
        _pipeline = EpisodeSummaryPipeline(
            session_manager=BrowserSessionManager(PlaywrightLauncher()),
            scraper=EpisodeScraperClient(),
            summarizer=EpisodeSummarizer(),
        )
    return _pipeline


async def summarize_episode(episode: str) -> str:
    return await get_pipeline().run(episode)


async def shutdown_pipeline() -> None:
    if _pipeline is not None:
        await _pipeline.shutdown()
