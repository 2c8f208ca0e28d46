from datetime import datetime, timezone
from typing import Callable, Dict, Optional

from loguru import logger

from ..datasources.base import DataSource
from ..errors import NotFound, RateLimited
from ..renderers import render_dashboard
from ..renderers.formatting import escape_html
from ..schemas import DashboardView, ErrorView, Panel, SessionState
from .charts import ChartEngine, ChartInstance, ChartSlot, DeclarativeChartEngine
from .pipeline import load_dashboard


def classify_error(exc: Exception, username: str) -> ErrorView:
    if isinstance(exc, NotFound):
        return ErrorView(
            title="User not found",
            message=f'GitHub user "{escape_html(username)}" does not exist or is not accessible.',
        )
    if isinstance(exc, RateLimited):
        return ErrorView(
            title="API rate limit reached",
            message="The GitHub API rate limit has been reached. Wait a while and try again.",
        )
    return ErrorView(
        title="Failed to load data",
        message=f"Check your network connection and try again. ({escape_html(exc)})",
    )


class DashboardController:
    """Search / loading / error / dashboard panels for one browser session.

    Every search takes a new generation number. When a search finishes
    after a newer one (or a back action) started, its outcome is dropped so
    the visible dashboard never mixes two accounts.
    """

    def __init__(
        self,
        source: DataSource,
        engine: Optional[ChartEngine] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.source = source
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        engine = engine or DeclarativeChartEngine()
        self.slots: Dict[str, ChartSlot] = {
            "language": ChartSlot("language", engine),
            "activity": ChartSlot("activity", engine),
        }
        self.panel = Panel.SEARCH
        self.generation = 0
        self.last_username: Optional[str] = None
        self.busy = False
        self.dashboard: Optional[DashboardView] = None
        self.error: Optional[ErrorView] = None

    def _enter(self, panel: Panel) -> None:
        if self.panel == Panel.DASHBOARD and panel != Panel.DASHBOARD:
            self._release_charts()
        self.panel = panel

    def _release_charts(self) -> None:
        for slot in self.slots.values():
            slot.release()

    def visible(self) -> Dict[Panel, bool]:
        return {panel: panel == self.panel for panel in Panel}

    def state(self) -> SessionState:
        charts = [
            slot.handle.view()
            for slot in self.slots.values()
            if isinstance(slot.handle, ChartInstance)
        ]
        return SessionState(
            panel=self.panel,
            visible=self.visible(),
            last_username=self.last_username,
            generation=self.generation,
            busy=self.busy,
            dashboard=self.dashboard if self.panel == Panel.DASHBOARD else None,
            error=self.error if self.panel == Panel.ERROR else None,
            charts=charts,
        )

    async def submit(self, username: str) -> SessionState:
        username = (username or "").strip()
        if not username:
            return self.state()
        return await self.load(username)

    async def quick_select(self, username: str) -> SessionState:
        return await self.submit(username)

    async def retry(self) -> SessionState:
        if not self.last_username:
            return self.state()
        return await self.load(self.last_username)

    def back(self) -> SessionState:
        # an in-flight search must not pull the view back to its result
        self.generation += 1
        self.busy = False
        self.dashboard = None
        self.error = None
        self._enter(Panel.SEARCH)
        return self.state()

    def close(self) -> None:
        """Drop the session: release charts and ignore any search still running."""
        self.generation += 1
        self.busy = False
        self.dashboard = None
        self.error = None
        self._release_charts()

    async def load(self, username: str) -> SessionState:
        self.generation += 1
        generation = self.generation
        self.last_username = username
        self.busy = True
        self.dashboard = None
        self.error = None
        self._enter(Panel.LOADING)

        try:
            data = await load_dashboard(self.source, username, now=self.clock())
        except Exception as exc:
            if generation != self.generation:
                logger.warning(f"[dashboard] dropping stale failure for {username} (generation {generation})")
                return self.state()
            if isinstance(exc, (NotFound, RateLimited)):
                logger.info(f"[dashboard] {username}: {exc}")
            else:
                logger.exception(f"[dashboard] {username}: fetch failed")
            self.error = classify_error(exc, username)
            self.busy = False
            self._enter(Panel.ERROR)
            return self.state()

        if generation != self.generation:
            logger.warning(f"[dashboard] dropping stale result for {username} (generation {generation})")
            return self.state()

        view = render_dashboard(data)
        self.slots["language"].render(view.languages.chart)
        self.slots["activity"].render(view.activity.chart)
        self.dashboard = view
        self.busy = False
        self._enter(Panel.DASHBOARD)
        return self.state()
