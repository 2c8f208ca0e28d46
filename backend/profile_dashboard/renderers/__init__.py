from ..schemas import DashboardData, DashboardView
from .charts import render_activity_chart, render_language_chart
from .profile import render_profile
from .projects import render_projects
from .stats import render_stats


def render_dashboard(data: DashboardData) -> DashboardView:
    return DashboardView(
        profile=render_profile(data.account),
        stats=render_stats(data),
        projects=render_projects(data.top_projects),
        languages=render_language_chart(data.languages),
        activity=render_activity_chart(data.activity),
    )


__all__ = [
    "render_activity_chart",
    "render_dashboard",
    "render_language_chart",
    "render_profile",
    "render_projects",
    "render_stats",
]
