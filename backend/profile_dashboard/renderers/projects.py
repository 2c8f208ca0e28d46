from typing import Sequence

from ..schemas import Project, ProjectCardView, ProjectsView
from .formatting import DEFAULT_COLOR, escape_html, format_number, language_color

EMPTY_MESSAGE = "No public repositories"
NO_DESCRIPTION = "No description provided"


def _card_html(project: Project, stars: str, forks: str, color: str) -> str:
    lang = ""
    if project.language:
        lang = (
            '<span class="repo-meta">'
            f'<span class="repo-lang-dot" style="background:{color}"></span>'
            f"{escape_html(project.language)}</span>"
        )
    return (
        f'<div class="repo-name">{escape_html(project.name)}</div>'
        f'<p class="repo-desc">{escape_html(project.description or NO_DESCRIPTION)}</p>'
        '<div class="repo-footer">'
        f"{lang}"
        f'<span class="repo-meta repo-stars">{stars}</span>'
        f'<span class="repo-meta repo-forks">{forks}</span>'
        "</div>"
    )


def render_project_card(project: Project) -> ProjectCardView:
    stars = format_number(project.stars)
    forks = format_number(project.forks)
    color = language_color(project.language) if project.language else DEFAULT_COLOR
    return ProjectCardView(
        name=project.name,
        description=project.description or NO_DESCRIPTION,
        language=project.language,
        language_color=color if project.language else None,
        stars=stars,
        forks=forks,
        url=project.html_url,
        aria_label=f"Open repository {project.name}",
        html=_card_html(project, stars, forks, color),
    )


def render_projects(top: Sequence[Project]) -> ProjectsView:
    if not top:
        return ProjectsView(cards=[], empty_message=EMPTY_MESSAGE)
    return ProjectsView(cards=[render_project_card(p) for p in top])
