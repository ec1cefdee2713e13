import asyncio
import time
from typing import Callable

from common.config import config
from common.errors import BrowserUnavailableError
from common.logging import get_logger
from services.browser.launcher import BrowserLauncher, BrowserSession
from services.browser.schemas import SessionState

logger = get_logger(__name__)


class BrowserSessionManager:
    """Lazily created, expiring single browser session.

    State moves EMPTY -> INITIALIZING -> READY and back to EMPTY on expiry,
    release or a failed launch. Only one initialization runs at a time:
    callers arriving while it is in flight await the same task and see the
    same session (or the same error).

    Example:
        manager = BrowserSessionManager(PlaywrightLauncher())
        session = await manager.acquire()
        ...
        await manager.release()
    """

    def __init__(
        self,
        launcher: BrowserLauncher | None,
        ttl_seconds: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.launcher = launcher
        self.ttl_seconds = config.browser_session_ttl_seconds if ttl_seconds is None else ttl_seconds
        self._clock = clock

        self.state = SessionState.EMPTY
        self._session: BrowserSession | None = None
        self._created_at: float = 0.0
        self._pending: asyncio.Task[BrowserSession] | None = None

    @property
    def session(self) -> BrowserSession | None:
        return self._session

    def _is_fresh(self) -> bool:
        if self._session is None or not self._session.is_connected:
            return False
        return self._clock() - self._created_at < self.ttl_seconds

    async def acquire(self) -> BrowserSession:
        """Return a live session, launching a new one when none is cached or it has expired.

        Raises:
            BrowserUnavailableError: No launcher is configured or the launch failed.
        """
        if self._pending is not None:
            logger.info("[Browser] Initialization in progress, waiting...")
            return await asyncio.shield(self._pending)

        if self.state is SessionState.READY and self._is_fresh():
            logger.debug("[Browser] Using existing browser session")
            return self._session

        self.state = SessionState.INITIALIZING
        self._pending = asyncio.create_task(self._initialize())
        # Shielded so one cancelled caller does not abort the launch for the others
        return await asyncio.shield(self._pending)

    async def _initialize(self) -> BrowserSession:
        try:
            logger.info("[Browser] Starting browser initialization...")
            await self._teardown()

            if self.launcher is None:
                raise BrowserUnavailableError("No browser launcher configured")

            try:
                session = await self.launcher.launch()
            except Exception as e:
                raise BrowserUnavailableError(f"Browser launch failed: {type(e).__name__}: {e}") from e

            self._session = session
            self._created_at = self._clock()
            self.state = SessionState.READY
            logger.info("[Browser] Browser launched successfully")
            return session

        except BrowserUnavailableError as e:
            logger.error(f"[Browser] Initialization failed: {e}")
            raise

        finally:
            if self.state is not SessionState.READY:
                self._session = None
                self._created_at = 0.0
                self.state = SessionState.EMPTY
            self._pending = None

    async def _teardown(self) -> None:
        session, self._session = self._session, None
        self._created_at = 0.0
        if session is None:
            return

        try:
            logger.info("[Browser] Closing browser session")
            await session.close()
        except Exception as e:
            logger.opt(exception=e).warning(f"[Browser] Error during browser cleanup: {e}")

    async def release(self) -> None:
        """Close the cached session if there is one. Safe to call repeatedly; never raises.

        A launch still in flight is awaited first so the session it produces is closed too.
        """
        if self._pending is not None:
            logger.info("[Browser] Waiting for initialization to finish before release")
            try:
                await asyncio.shield(self._pending)
            except BrowserUnavailableError:
                # Logged by _initialize; nothing to close
                pass

        await self._teardown()
        if self.state is SessionState.READY:
            self.state = SessionState.EMPTY
