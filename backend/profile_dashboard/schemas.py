from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Account(BaseModel):
    model_config = ConfigDict(frozen=True)

    login: str
    name: Optional[str] = None
    avatar_url: str = ""
    bio: Optional[str] = None
    location: Optional[str] = None
    blog: Optional[str] = None
    html_url: str = ""
    created_at: datetime
    public_repos: int = 0
    followers: int = 0


class Project(BaseModel):
    model_config = ConfigDict(frozen=True)

    owner: str
    name: str
    description: Optional[str] = None
    language: Optional[str] = None
    stars: int = Field(default=0, ge=0)
    forks: int = Field(default=0, ge=0)
    pushed_at: Optional[datetime] = None
    html_url: str = ""


class LanguageShare(BaseModel):
    language: str
    bytes: int
    percent: float
    color: str


class ActivityBucket(BaseModel):
    month: str  # YYYY-MM
    label: str
    count: int


class DashboardData(BaseModel):
    """Everything derived for one account in one search cycle."""

    account: Account
    projects: List[Project]
    total_stars: int
    total_forks: int
    top_projects: List[Project]
    languages: List[LanguageShare]
    activity: List[ActivityBucket]
    generated_at: datetime


# ---- view models ----


class Panel(str, Enum):
    SEARCH = "search"
    LOADING = "loading"
    ERROR = "error"
    DASHBOARD = "dashboard"


class ProfileView(BaseModel):
    avatar_url: str
    avatar_alt: str
    display_name: str
    login: str
    bio: str
    location: Optional[str] = None
    blog_url: Optional[str] = None
    blog_text: Optional[str] = None
    joined: str
    profile_url: str


class CounterView(BaseModel):
    key: str
    label: str
    value: int
    display: str
    frames: List[str]


class StatsView(BaseModel):
    counters: List[CounterView]
    duration_ms: int
    easing: str = "easeOutCubic"


class ProjectCardView(BaseModel):
    name: str
    description: str
    language: Optional[str] = None
    language_color: Optional[str] = None
    stars: str
    forks: str
    url: str
    aria_label: str
    html: str


class ProjectsView(BaseModel):
    cards: List[ProjectCardView]
    empty_message: Optional[str] = None


class ChartConfig(BaseModel):
    """Declarative chart description handed to the charting engine."""

    type: str
    labels: List[str]
    data: List[float]
    colors: List[str]
    series_label: Optional[str] = None
    tooltips: List[str] = []
    options: Dict[str, Any] = {}


class LegendItem(BaseModel):
    language: str
    color: str
    percent: str


class LanguageChartView(BaseModel):
    chart: Optional[ChartConfig] = None
    legend: List[LegendItem] = []
    empty_message: Optional[str] = None


class ActivityChartView(BaseModel):
    chart: ChartConfig


class DashboardView(BaseModel):
    profile: ProfileView
    stats: StatsView
    projects: ProjectsView
    languages: LanguageChartView
    activity: ActivityChartView


class ErrorView(BaseModel):
    title: str
    message: str


class ChartInstanceView(BaseModel):
    id: int
    slot: str
    config: ChartConfig


class SessionState(BaseModel):
    panel: Panel
    visible: Dict[Panel, bool]
    last_username: Optional[str] = None
    generation: int
    busy: bool = False
    dashboard: Optional[DashboardView] = None
    error: Optional[ErrorView] = None
    charts: List[ChartInstanceView] = []


class SearchRequest(BaseModel):
    username: str
