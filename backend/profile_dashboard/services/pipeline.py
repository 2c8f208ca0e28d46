import asyncio
from datetime import datetime, timezone
from typing import Optional

from loguru import logger

from ..datasources.base import DataSource
from ..schemas import DashboardData
from .aggregator import aggregate


async def load_dashboard(source: DataSource, login: str, now: Optional[datetime] = None) -> DashboardData:
    """Fetch everything for ``login`` and reduce it to one DashboardData.

    Account and repository list are fetched together; the language batch
    only starts once the repository list is known.
    """
    logger.info(f"[dashboard] loading {login}")
    account, projects = await asyncio.gather(
        source.fetch_account(login),
        source.fetch_all_projects(login),
    )
    usage = await source.fetch_aggregated_languages(login, projects)
    data = aggregate(account, projects, usage, now or datetime.now(timezone.utc))
    logger.info(
        f"[dashboard] {login}: {len(projects)} repos, {data.total_stars} stars, {len(usage)} languages"
    )
    return data
