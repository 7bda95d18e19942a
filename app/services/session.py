"""Keeps a Supabase Auth session alive.

Every `check_interval` seconds the session expiry is compared against
`refresh_threshold`; when it is close the refresh token is exchanged for
a new session.
"""

import asyncio
import logging
from datetime import datetime, timezone

from app.schemas.auth import AuthSession
from app.services.supabase_auth import SupabaseAuthService

logger = logging.getLogger(__name__)


class SessionMonitor:
    def __init__(
        self,
        auth: SupabaseAuthService,
        session: AuthSession,
        check_interval: float = 60.0,
        refresh_threshold: float = 300.0,
    ) -> None:
        self._auth = auth
        self._session = session
        self._check_interval = check_interval
        self._refresh_threshold = refresh_threshold
        self._task: asyncio.Task | None = None

    @property
    def session(self) -> AuthSession:
        return self._session

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def seconds_until_expiry(self, now: datetime | None = None) -> float:
        if now is None:
            now = datetime.now(timezone.utc)
        return self._session.expires_at - now.timestamp()

    def needs_refresh(self, now: datetime | None = None) -> bool:
        return self.seconds_until_expiry(now) <= self._refresh_threshold

    async def check(self, now: datetime | None = None) -> bool:
        """Refresh if close to expiry. Returns True when a refresh happened."""
        if not self.needs_refresh(now):
            return False

        logger.info(
            "Session expires in %.0fs, refreshing", self.seconds_until_expiry(now)
        )
        self._session = await self._auth.refresh_session(self._session.refresh_token)
        return True

    async def _run(self) -> None:
        while True:
            try:
                await self.check()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Session refresh failed, retrying next tick")
            await asyncio.sleep(self._check_interval)

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
