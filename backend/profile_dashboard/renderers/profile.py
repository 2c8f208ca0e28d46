import re

from ..schemas import Account, ProfileView
from .formatting import format_join_date

_SCHEME = re.compile(r"^https?://")


def render_profile(account: Account) -> ProfileView:
    blog_url = blog_text = None
    if account.blog:
        blog_url = account.blog if account.blog.startswith("http") else f"https://{account.blog}"
        blog_text = _SCHEME.sub("", account.blog)

    return ProfileView(
        avatar_url=account.avatar_url,
        avatar_alt=f"{account.login}'s avatar",
        display_name=account.name or account.login,
        login=f"@{account.login}",
        bio=account.bio or "",
        location=account.location or None,
        blog_url=blog_url,
        blog_text=blog_text,
        joined=format_join_date(account.created_at),
        profile_url=account.html_url,
    )
