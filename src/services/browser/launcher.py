"""Playwright-backed browser sessions.

Example:
    launcher = PlaywrightLauncher()
    session = await launcher.launch()
    page = await session.new_page(PageProfile())
"""

import time
from typing import Protocol

from playwright.async_api import Browser, Page, Playwright, async_playwright

from common.config import config
from common.logging import get_logger
from services.browser.schemas import PageProfile

logger = get_logger(__name__)


class BrowserSession:
    """Handle to one running browser instance."""

    def __init__(self, browser: Browser, playwright: Playwright | None = None, created_at: float | None = None):
        self.browser = browser
        self.playwright = playwright
        self.created_at = time.monotonic() if created_at is None else created_at

    @property
    def is_connected(self) -> bool:
        return self.browser.is_connected()

    async def new_page(self, profile: PageProfile) -> Page:
        """Open a page in its own browser context configured with the given profile."""
        context = await self.browser.new_context(
            user_agent=profile.user_agent,
            extra_http_headers=profile.extra_http_headers,
            viewport={"width": profile.viewport.width, "height": profile.viewport.height},
            device_scale_factor=profile.viewport.device_scale_factor,
            java_script_enabled=profile.java_script_enabled,
            bypass_csp=profile.bypass_csp,
        )
        try:
            return await context.new_page()
        except Exception:
            await context.close()
            raise

    async def close(self) -> None:
        try:
            await self.browser.close()
        finally:
            if self.playwright is not None:
                await self.playwright.stop()


class BrowserLauncher(Protocol):
    async def launch(self) -> BrowserSession: ...


class PlaywrightLauncher:
    """Starts chromium locally, or attaches to a remote browser over CDP when an endpoint is given."""

    def __init__(self, headless: bool | None = None, cdp_endpoint: str | None = None):
        self.headless = config.browser_headless if headless is None else headless
        self.cdp_endpoint = config.browser_cdp_endpoint if cdp_endpoint is None else cdp_endpoint

    async def launch(self) -> BrowserSession:
        playwright = await async_playwright().start()
        try:
            if self.cdp_endpoint:
                logger.info(f"[Browser] Connecting to remote browser at {self.cdp_endpoint}")
                browser = await playwright.chromium.connect_over_cdp(self.cdp_endpoint)
            else:
                logger.info(f"[Browser] Launching chromium (headless={self.headless})")
                browser = await playwright.chromium.launch(headless=self.headless)
        except Exception:
            await playwright.stop()
            raise

        return BrowserSession(browser=browser, playwright=playwright)
