from typing import Sequence

from ..schemas import ActivityBucket, ActivityChartView, ChartConfig, LanguageChartView, LanguageShare, LegendItem

NO_LANGUAGE_DATA = "No language data"

_TOOLTIP_STYLE = {
    "backgroundColor": "#161b22",
    "borderColor": "#30363d",
    "borderWidth": 1,
    "titleColor": "#e6edf3",
    "bodyColor": "#8b949e",
}
_GRID = {"color": "rgba(48, 54, 61, 0.5)", "drawBorder": False}
_TICKS = {"color": "#8b949e", "font": {"size": 11}}


def render_language_chart(shares: Sequence[LanguageShare]) -> LanguageChartView:
    if not shares:
        return LanguageChartView(empty_message=NO_LANGUAGE_DATA)

    chart = ChartConfig(
        type="doughnut",
        labels=[s.language for s in shares],
        data=[s.bytes for s in shares],
        colors=[s.color for s in shares],
        tooltips=[f" {s.language}: {s.percent:.1f}%" for s in shares],
        options={
            "responsive": False,
            "cutout": "70%",
            "borderColor": "#0d1117",
            "borderWidth": 2,
            "hoverBorderWidth": 3,
            "hoverOffset": 6,
            "legend": {"display": False},
            "tooltip": _TOOLTIP_STYLE,
            "animation": {"animateRotate": True, "duration": 800, "easing": "easeOutQuart"},
        },
    )
    legend = [LegendItem(language=s.language, color=s.color, percent=f"{s.percent:.1f}%") for s in shares]
    return LanguageChartView(chart=chart, legend=legend)


def render_activity_chart(buckets: Sequence[ActivityBucket]) -> ActivityChartView:
    chart = ChartConfig(
        type="bar",
        labels=[b.label for b in buckets],
        data=[b.count for b in buckets],
        colors=["rgba(57, 211, 83, 0.8)", "rgba(57, 211, 83, 0.15)"],
        series_label="Repositories updated",
        tooltips=[f" {b.count} repositories updated" for b in buckets],
        options={
            "responsive": True,
            "maintainAspectRatio": False,
            "borderColor": "rgba(57, 211, 83, 0.9)",
            "borderWidth": 1,
            "borderRadius": 4,
            "legend": {"display": False},
            "tooltip": _TOOLTIP_STYLE,
            "scales": {
                "x": {"grid": _GRID, "ticks": _TICKS},
                "y": {"beginAtZero": True, "grid": _GRID, "ticks": {**_TICKS, "stepSize": 1, "precision": 0}},
            },
            "animation": {"duration": 800, "easing": "easeOutQuart"},
        },
    )
    return ActivityChartView(chart=chart)
