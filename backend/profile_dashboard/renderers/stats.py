from ..config import COUNTER_DURATION_MS
from ..schemas import CounterView, DashboardData, StatsView
from .formatting import counter_frames, format_number


def _counter(key: str, label: str, value: int) -> CounterView:
    return CounterView(
        key=key,
        label=label,
        value=value,
        display=format_number(value),
        frames=counter_frames(value, COUNTER_DURATION_MS),
    )


def render_stats(data: DashboardData) -> StatsView:
    return StatsView(
        counters=[
            _counter("stars", "Total stars", data.total_stars),
            _counter("repos", "Public repositories", data.account.public_repos),
            _counter("followers", "Followers", data.account.followers),
            _counter("forks", "Total forks", data.total_forks),
        ],
        duration_ms=COUNTER_DURATION_MS,
    )
