from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import ACTIVITY_MONTHS, TOP_LANGUAGES, TOP_PROJECTS
from ..renderers.formatting import MONTH_ABBR, language_color
from ..schemas import Account, ActivityBucket, DashboardData, LanguageShare, Project


def total_stars(projects: Sequence[Project]) -> int:
    return sum(p.stars for p in projects)


def total_forks(projects: Sequence[Project]) -> int:
    return sum(p.forks for p in projects)


def top_projects(projects: Sequence[Project], limit: int = TOP_PROJECTS) -> List[Project]:
    return sorted(projects, key=lambda p: p.stars, reverse=True)[:limit]


def language_histogram(usage: Dict[str, int], limit: int = TOP_LANGUAGES) -> List[LanguageShare]:
    """Largest languages first, with percentages of the kept entries only.

    The truncated set is the denominator, so the shares always add up to
    100 even though the dropped languages are ignored.
    """
    ranked = sorted(usage.items(), key=lambda kv: kv[1], reverse=True)[:limit]
    total = sum(size for _, size in ranked)
    return [
        LanguageShare(
            language=lang,
            bytes=size,
            percent=(size / total * 100) if total else 0.0,
            color=language_color(lang),
        )
        for lang, size in ranked
    ]


def _month_key(year: int, month: int) -> str:
    return f"{year}-{month:02d}"


def trailing_months(now: datetime, months: int = ACTIVITY_MONTHS) -> List[Tuple[int, int]]:
    """(year, month) pairs ending at ``now``'s month, oldest first."""
    out: List[Tuple[int, int]] = []
    for back in range(months - 1, -1, -1):
        index = now.year * 12 + (now.month - 1) - back
        out.append((index // 12, index % 12 + 1))
    return out


def activity_histogram(
    projects: Sequence[Project], now: Optional[datetime] = None, months: int = ACTIVITY_MONTHS
) -> List[ActivityBucket]:
    now = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)
    window = trailing_months(now, months)
    counts = {_month_key(y, m): 0 for y, m in window}

    for project in projects:
        if project.pushed_at is None:
            continue
        pushed = project.pushed_at
        if pushed.tzinfo is None:
            pushed = pushed.replace(tzinfo=timezone.utc)
        pushed = pushed.astimezone(timezone.utc)
        key = _month_key(pushed.year, pushed.month)
        if key in counts:
            counts[key] += 1

    return [
        ActivityBucket(month=_month_key(y, m), label=MONTH_ABBR[m - 1], count=counts[_month_key(y, m)])
        for y, m in window
    ]


def aggregate(
    account: Account,
    projects: Sequence[Project],
    usage: Dict[str, int],
    now: Optional[datetime] = None,
) -> DashboardData:
    now = now or datetime.now(timezone.utc)
    return DashboardData(
        account=account,
        projects=list(projects),
        total_stars=total_stars(projects),
        total_forks=total_forks(projects),
        top_projects=top_projects(projects),
        languages=language_histogram(usage),
        activity=activity_histogram(projects, now),
        generated_at=now,
    )
