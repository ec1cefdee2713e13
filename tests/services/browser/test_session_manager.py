import asyncio

import pytest

from common.errors import BrowserUnavailableError
from services.browser.schemas import SessionState
from services.browser.session_manager import BrowserSessionManager

TTL = 300.0


class FakeSession:
    def __init__(self, name: str, fail_on_close: bool = False):
        self.name = name
        self.is_connected = True
        self.closed = False
        self.fail_on_close = fail_on_close

    async def close(self):
        self.closed = True
        if self.fail_on_close:
            raise RuntimeError("browser already gone")


class FakeLauncher:
    """Counts launches; optionally blocks on `gate` and fails after it opens."""

    def __init__(self, fail: bool = False, gate: asyncio.Event | None = None, fail_on_close: bool = False):
        self.fail = fail
        self.gate = gate
        self.fail_on_close = fail_on_close
        self.launch_count = 0
        self.sessions: list[FakeSession] = []

    async def launch(self):
        self.launch_count += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.fail:
            raise RuntimeError("chromium not installed")
        session = FakeSession(f"session-{self.launch_count}", fail_on_close=self.fail_on_close)
        self.sessions.append(session)
        return session


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def launcher():
    return FakeLauncher()


@pytest.fixture
def manager(launcher, clock):
    return BrowserSessionManager(launcher, ttl_seconds=TTL, clock=clock)


@pytest.mark.asyncio
async def test_acquire_launches_session_on_first_use(manager, launcher):
    assert manager.state is SessionState.EMPTY

    session = await manager.acquire()

    assert session is launcher.sessions[0]
    assert manager.session is session
    assert manager.state is SessionState.READY
    assert launcher.launch_count == 1


@pytest.mark.asyncio
async def test_acquire_reuses_session_within_ttl(manager, launcher, clock):
    first = await manager.acquire()
    clock.now += TTL - 1

    second = await manager.acquire()

    assert second is first
    assert launcher.launch_count == 1
    assert not first.closed


@pytest.mark.asyncio
async def test_acquire_replaces_expired_session(manager, launcher, clock):
    first = await manager.acquire()
    clock.now += TTL + 1

    second = await manager.acquire()

    assert second is not first
    assert first.closed is True
    assert launcher.launch_count == 2
    assert manager.state is SessionState.READY


@pytest.mark.asyncio
async def test_acquire_expires_exactly_at_ttl(manager, launcher, clock):
    await manager.acquire()
    clock.now += TTL

    await manager.acquire()

    assert launcher.launch_count == 2


@pytest.mark.asyncio
async def test_acquire_replaces_disconnected_session(manager, launcher):
    first = await manager.acquire()
    first.is_connected = False

    second = await manager.acquire()

    assert second is not first
    assert launcher.launch_count == 2


@pytest.mark.asyncio
async def test_concurrent_acquire_launches_once(clock):
    gate = asyncio.Event()
    launcher = FakeLauncher(gate=gate)
    manager = BrowserSessionManager(launcher, ttl_seconds=TTL, clock=clock)

    tasks = [asyncio.create_task(manager.acquire()) for _ in range(5)]
    await asyncio.sleep(0)
    assert manager.state is SessionState.INITIALIZING

    gate.set()
    sessions = await asyncio.gather(*tasks)

    assert launcher.launch_count == 1
    assert all(session is sessions[0] for session in sessions)
    assert manager.state is SessionState.READY


@pytest.mark.asyncio
async def test_concurrent_acquire_shares_failure(clock):
    gate = asyncio.Event()
    launcher = FakeLauncher(fail=True, gate=gate)
    manager = BrowserSessionManager(launcher, ttl_seconds=TTL, clock=clock)

    tasks = [asyncio.create_task(manager.acquire()) for _ in range(3)]
    await asyncio.sleep(0)
    gate.set()
    results = await asyncio.gather(*tasks, return_exceptions=True)

    assert launcher.launch_count == 1
    assert all(isinstance(result, BrowserUnavailableError) for result in results)
    assert manager.state is SessionState.EMPTY
    assert manager.session is None


@pytest.mark.asyncio
async def test_failed_launch_clears_state_and_next_acquire_retries(manager, launcher):
    launcher.fail = True
    with pytest.raises(BrowserUnavailableError, match="chromium not installed"):
        await manager.acquire()

    assert manager.state is SessionState.EMPTY
    assert manager.session is None

    launcher.fail = False
    session = await manager.acquire()

    assert session is launcher.sessions[0]
    assert launcher.launch_count == 2


@pytest.mark.asyncio
async def test_acquire_without_launcher_raises(clock):
    manager = BrowserSessionManager(None, ttl_seconds=TTL, clock=clock)

    with pytest.raises(BrowserUnavailableError, match="No browser launcher configured"):
        await manager.acquire()

    assert manager.state is SessionState.EMPTY


@pytest.mark.asyncio
async def test_release_closes_session_and_is_idempotent(manager, launcher):
    session = await manager.acquire()

    await manager.release()
    await manager.release()

    assert session.closed is True
    assert manager.session is None
    assert manager.state is SessionState.EMPTY

    await manager.acquire()
    assert launcher.launch_count == 2


@pytest.mark.asyncio
async def test_release_swallows_close_errors(clock):
    launcher = FakeLauncher(fail_on_close=True)
    manager = BrowserSessionManager(launcher, ttl_seconds=TTL, clock=clock)
    await manager.acquire()

    await manager.release()

    assert manager.session is None
    assert manager.state is SessionState.EMPTY
    assert (await manager.acquire()) is launcher.sessions[1]


@pytest.mark.asyncio
async def test_expired_session_close_error_does_not_block_relaunch(clock):
    launcher = FakeLauncher(fail_on_close=True)
    manager = BrowserSessionManager(launcher, ttl_seconds=TTL, clock=clock)
    first = await manager.acquire()
    clock.now += TTL + 1

    second = await manager.acquire()

    assert first.closed is True
    assert second is launcher.sessions[1]


@pytest.mark.asyncio
async def test_release_during_launch_closes_the_launched_session(clock):
    gate = asyncio.Event()
    launcher = FakeLauncher(gate=gate)
    manager = BrowserSessionManager(launcher, ttl_seconds=TTL, clock=clock)

    acquire_task = asyncio.create_task(manager.acquire())
    await asyncio.sleep(0)
    release_task = asyncio.create_task(manager.release())
    await asyncio.sleep(0)
    assert not release_task.done()

    gate.set()
    await release_task
    session = await acquire_task

    assert session.closed is True
    assert manager.session is None
    assert manager.state is SessionState.EMPTY


@pytest.mark.asyncio
async def test_release_during_failing_launch_does_not_raise(clock):
    gate = asyncio.Event()
    launcher = FakeLauncher(fail=True, gate=gate)
    manager = BrowserSessionManager(launcher, ttl_seconds=TTL, clock=clock)

    acquire_task = asyncio.create_task(manager.acquire())
    await asyncio.sleep(0)
    release_task = asyncio.create_task(manager.release())
    await asyncio.sleep(0)

    gate.set()
    await release_task

    with pytest.raises(BrowserUnavailableError):
        await acquire_task
    assert manager.session is None
    assert manager.state is SessionState.EMPTY
