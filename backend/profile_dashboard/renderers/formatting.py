import html
import math
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import List

from ..config import COUNTER_DURATION_MS

MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)

# GitHub linguist colors
LANGUAGE_COLORS = {
    "JavaScript": "#f1e05a",
    "TypeScript": "#3178c6",
    "Python": "#3572A5",
    "Java": "#b07219",
    "Ruby": "#701516",
    "Go": "#00ADD8",
    "Rust": "#dea584",
    "PHP": "#4F5D95",
    "C++": "#f34b7d",
    "C": "#555555",
    "C#": "#178600",
    "Swift": "#FA7343",
    "Kotlin": "#A97BFF",
    "Shell": "#89e051",
    "HTML": "#e34c26",
    "CSS": "#563d7c",
    "Dart": "#00B4AB",
    "Scala": "#c22d40",
    "R": "#198CE7",
    "Vue": "#41b883",
    "Jupyter Notebook": "#DA5B0B",
}
DEFAULT_COLOR = "#8b949e"

FRAME_MS = 16


def language_color(language: str | None) -> str:
    return LANGUAGE_COLORS.get(language or "", DEFAULT_COLOR)


def escape_html(text: object) -> str:
    return html.escape(str(text), quote=True)


def _one_decimal(value: Decimal) -> str:
    return str(value.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def format_number(n: int) -> str:
    """1500 -> '1.5k', 1250 -> '1.3k' (ties round up), 2_300_000 -> '2.3M'."""
    if n >= 1_000_000:
        return f"{_one_decimal(Decimal(n) / 1_000_000)}M"
    if n >= 1_000:
        return f"{_one_decimal(Decimal(n) / 1_000)}k"
    return str(n)


def format_join_date(created_at: datetime) -> str:
    return f"Joined {MONTH_NAMES[created_at.month - 1]} {created_at.year}"


def ease_out_cubic(progress: float) -> float:
    progress = min(max(progress, 0.0), 1.0)
    return 1 - (1 - progress) ** 3


def counter_value(target: int, elapsed_ms: float, duration_ms: int = COUNTER_DURATION_MS) -> int:
    progress = min(elapsed_ms / duration_ms, 1.0) if duration_ms > 0 else 1.0
    return math.floor(ease_out_cubic(progress) * target + 0.5)


def counter_frames(target: int, duration_ms: int = COUNTER_DURATION_MS, frame_ms: int = FRAME_MS) -> List[str]:
    """Formatted count-up values from 0 to ``target``, one per frame."""
    frames: List[str] = []
    elapsed = 0
    while True:
        frames.append(format_number(counter_value(target, elapsed, duration_ms)))
        if elapsed >= duration_ms:
            break
        elapsed = min(elapsed + frame_ms, duration_ms)
    return frames
