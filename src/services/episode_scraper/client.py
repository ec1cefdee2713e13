import asyncio
from urllib.parse import urljoin

from playwright.async_api import Page

from common.config import config
from common.errors import NavigationError
from common.logging import get_logger
from services.browser.launcher import BrowserSession
from services.browser.schemas import PageProfile
from services.episode_scraper.extraction import extract_plot_summary, find_episode_href, parse_document
from services.episode_scraper.schemas import ExtractionResult, NotFoundReason

logger = get_logger(__name__)

# 304 serves the cached document
EPISODE_PAGE_OK_STATUSES = (200, 304)


class EpisodeScraperClient:
    """Finds an episode on the season index page and scrapes its plot summary.

    Example:
        scraper = EpisodeScraperClient()
        result = await scraper.run("1", session)
        if result.found:
            print(result.text)
    """

    def __init__(
        self,
        index_url: str | None = None,
        profile: PageProfile | None = None,
        navigation_timeout_ms: int | None = None,
        max_attempts: int | None = None,
        retry_delay: float | None = None,
    ):
        self.index_url = index_url or config.episodes_index_url
        self.profile = profile or PageProfile()
        self.navigation_timeout_ms = navigation_timeout_ms or config.navigation_timeout_ms
        self.max_attempts = max_attempts or config.episode_page_max_attempts
        self.retry_delay = config.episode_page_retry_delay if retry_delay is None else retry_delay

    async def run(self, episode: str, session: BrowserSession) -> ExtractionResult:
        """Scrape the plot summary of `episode`.

        Returns a not-found result when the episode row, its link, or the plot
        summary content is missing.

        Raises:
            NavigationError: The index page did not load with 200, or the
                episode page failed every attempt.
        """
        logger.info(f"[Scraper] Creating new page for episode: {episode}")
        page = await session.new_page(self.profile)
        page.on("pageerror", lambda error: logger.warning(f"[Scraper] Page error: {error}"))

        try:
            return await self._scrape(page, episode)
        finally:
            await self._close_page(page)

    async def _scrape(self, page: Page, episode: str) -> ExtractionResult:
        await self._goto_index(page)

        href = find_episode_href(parse_document(await page.content()), episode)
        if not href:
            logger.info(f"[Scraper] No episode link found for: {episode}")
            return ExtractionResult.missing(episode, NotFoundReason.EPISODE_NOT_FOUND)

        episode_url = urljoin(self.index_url, href)
        logger.info(f"[Scraper] Navigating to episode page: {episode_url}")
        await self._goto_episode_page(page, episode_url)

        sections = extract_plot_summary(parse_document(await page.content()))
        result = ExtractionResult.from_sections(episode, sections, episode_url)

        if result.found:
            logger.info(f"[Scraper] Extracted {len(result.sections)} sections ({len(result.text)} chars)")
        else:
            logger.info(f"[Scraper] No plot summary content extracted for: {episode}")
        return result

    async def _goto(self, page: Page, url: str) -> int | None:
        response = await page.goto(url, wait_until="networkidle", timeout=self.navigation_timeout_ms)
        return response.status if response is not None else None

    async def _goto_index(self, page: Page) -> None:
        logger.info(f"[Scraper] Loading episode index: {self.index_url}")
        try:
            status = await self._goto(page, self.index_url)
        except Exception as e:
            raise NavigationError(f"Failed to load page: {type(e).__name__}: {e}") from e

        if status != 200:
            raise NavigationError(f"Failed to load page: {status}", status=status)

    async def _goto_episode_page(self, page: Page, url: str) -> None:
        last_status: int | None = None

        for attempt in range(1, self.max_attempts + 1):
            try:
                last_status = await self._goto(page, url)
                if last_status in EPISODE_PAGE_OK_STATUSES:
                    logger.info("[Scraper] Successfully loaded episode page")
                    return
                logger.warning(f"[Scraper] Attempt {attempt}/{self.max_attempts} failed with status: {last_status}")
            except Exception as e:
                logger.warning(f"[Scraper] Attempt {attempt}/{self.max_attempts} failed with error: {e!r}")

            if attempt < self.max_attempts:
                await asyncio.sleep(self.retry_delay)

        raise NavigationError(
            f"Failed to load episode page after {self.max_attempts} attempts. Last status: {last_status}",
            status=last_status,
            attempts=self.max_attempts,
        )

    async def _close_page(self, page: Page) -> None:
        # Each page owns its browser context
        try:
            await page.context.close()
        except Exception as e:
            logger.warning(f"[Scraper] Failed to close page: {e}")
