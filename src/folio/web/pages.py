"""Minimal HTML pages for the listing, a single post and not-found.

Every value except the pre-rendered body is escaped.
"""

from __future__ import annotations

from html import escape
from urllib.parse import urlencode

from folio.content.models import ParsedDocument

_LAYOUT = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
{body}
</body>
</html>
"""


def _page(title: str, body: str) -> str:
    return _LAYOUT.format(title=escape(title), body=body)


def _tag_links(tags: list[str], active: str | None) -> str:
    if not tags:
        return ""
    items = []
    for tag in tags:
        label = f"<strong>{escape(tag)}</strong>" if tag == active else escape(tag)
        items.append(f'<li><a href="/?{urlencode({"tag": tag})}">{label}</a></li>')
    return f'<ul class="tags">{"".join(items)}</ul>'


def render_index(
    posts: list[ParsedDocument],
    tags: list[str],
    free_text: str | None = None,
    tag: str | None = None,
) -> str:
    """The home page: search form, tag filters and the post list."""
    search = (
        '<form method="get" action="/">'
        f'<input type="search" name="q" value="{escape(free_text or "", quote=True)}">'
        + (f'<input type="hidden" name="tag" value="{escape(tag, quote=True)}">' if tag else "")
        + '<button type="submit">Search</button></form>'
    )
    if posts:
        rows = "".join(
            f'<li><a href="/posts/{escape(p.id, quote=True)}">{escape(p.title)}</a> - {escape(p.published_at)}</li>'
            for p in posts
        )
        listing = f'<ul class="posts">{rows}</ul>'
    else:
        listing = "<p>No posts found.</p>"

    body = f"<h1>Blog Posts</h1>{search}{_tag_links(tags, tag)}{listing}"
    return _page("Blog Posts", body)


def render_post(post: ParsedDocument) -> str:
    """A single post page."""
    tags = ""
    if post.tags:
        tags = _tag_links(sorted(post.tags), None)
    body = (
        f"<article><h1>{escape(post.title)}</h1>"
        f"<p>Date: {escape(post.published_at)}</p>"
        f"{tags}<div>{post.rendered_body}</div></article>"
        '<p><a href="/">Back</a></p>'
    )
    return _page(post.title, body)


def render_not_found() -> str:
    return _page("Not Found", "<h1>404 - Post Not Found</h1>")
