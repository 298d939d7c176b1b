"""Stateless helpers used by blog templates.

None of these run inside the widget isolation boundary: malformed input
(reply payloads missing keys, unknown time zone names) raises to the caller.
"""
from __future__ import annotations

from datetime import datetime, tzinfo
from html import escape
from html.parser import HTMLParser
from typing import Mapping
from zoneinfo import ZoneInfo

from django.utils.html import format_html

TWITTER_URL = "https://twitter.com"
TWITTER_CREATED_AT_FORMAT = "%a %b %d %H:%M:%S %z %Y"
REPLY_TIMESTAMP_FORMAT = "%d/%m/%Y at %Hh%M"

NOINDEX_PARAMS = ("year", "page")


def should_noindex(blog, params: Mapping, controller_name: str = "") -> bool:
    """Whether the current listing should carry a robots ``noindex`` hint."""
    for key in NOINDEX_PARAMS:
        value = params.get(key)
        if value is not None and str(value).strip():
            return True
    if controller_name == "tags":
        return bool(blog.unindex_tags)
    if controller_name == "categories":
        return bool(blog.unindex_categories)
    return False


def _rel_tokens(value: str | None) -> list[str]:
    return (value or "").split()


def _has_nofollow(attrs) -> bool:
    return any(
        name == "rel" and "nofollow" in (token.lower() for token in _rel_tokens(value))
        for name, value in attrs
    )


def _with_nofollow(attrs) -> list[tuple[str, str | None]]:
    rewritten = []
    found = False
    for name, value in attrs:
        if name == "rel" and not found:
            value = " ".join(_rel_tokens(value) + ["nofollow"])
            found = True
        rewritten.append((name, value))
    if not found:
        rewritten.append(("rel", "nofollow"))
    return rewritten


def _format_attrs(attrs) -> str:
    parts = []
    for name, value in attrs:
        if value is None:
            parts.append(f" {name}")
        else:
            parts.append(f' {name}="{escape(value, quote=True)}"')
    return "".join(parts)


class _NofollowRewriter(HTMLParser):
    """Copies markup through unchanged except for ``<a>`` start tags."""

    def __init__(self):
        super().__init__(convert_charrefs=False)
        self.parts: list[str] = []

    def rewrite(self, html: str) -> str:
        self.feed(html)
        self.close()
        return "".join(self.parts)

    def _start_tag(self, tag, attrs, end: str) -> str:
        if tag != "a" or _has_nofollow(attrs):
            return self.get_starttag_text()
        return f"<a{_format_attrs(_with_nofollow(attrs))}{end}"

    def handle_starttag(self, tag, attrs):
        self.parts.append(self._start_tag(tag, attrs, ">"))

    def handle_startendtag(self, tag, attrs):
        self.parts.append(self._start_tag(tag, attrs, " />"))

    def handle_endtag(self, tag):
        self.parts.append(f"</{tag}>")

    def handle_data(self, data):
        self.parts.append(data)

    def handle_entityref(self, name):
        self.parts.append(f"&{name};")

    def handle_charref(self, name):
        self.parts.append(f"&#{name};")

    def handle_comment(self, data):
        self.parts.append(f"<!--{data}-->")

    def handle_decl(self, decl):
        self.parts.append(f"<!{decl}>")

    def handle_pi(self, data):
        self.parts.append(f"<?{data}>")

    def unknown_decl(self, data):
        self.parts.append(f"<![{data}]>")


def apply_nofollow(html: str, dofollow_enabled: bool) -> str:
    if dofollow_enabled or not html:
        return html
    return _NofollowRewriter().rewrite(html)
def link_to_permalink(item, title, anchor=None, css_class=None, nofollow=False) -> str:
    url = item.permalink_url
    if anchor:
        url = f"{url}#{anchor}"
    if css_class and nofollow:
        return format_html('<a href="{}" class="{}" rel="nofollow">{}</a>', url, css_class, title)
    if css_class:
        return format_html('<a href="{}" class="{}">{}</a>', url, css_class, title)
    if nofollow:
        return format_html('<a href="{}" rel="nofollow">{}</a>', url, title)
    return format_html('<a href="{}">{}</a>', url, title)


def _first_expanded_url(user: Mapping) -> str | None:
    urls = ((user.get("entities") or {}).get("url") or {}).get("urls") or []
    for entry in urls:
        expanded = entry.get("expanded_url")
        if expanded:
            return expanded
    return None


def reply_context_url(reply: Mapping) -> str:
    user = reply["user"]
    url = _first_expanded_url(user)
    if url is None:
        handle = user.get("screen_name") or user["name"]
        url = f"{TWITTER_URL}/{handle}"
    return format_html('<a href="{}">{}</a>', url, user["name"])


def _resolve_tz(tz: tzinfo | str) -> tzinfo:
    if isinstance(tz, str):
        return ZoneInfo(tz)
    return tz


def reply_context_twitter_link(reply: Mapping, tz: tzinfo | str) -> str:
    created_at = datetime.strptime(reply["created_at"], TWITTER_CREATED_AT_FORMAT)
    local = created_at.astimezone(_resolve_tz(tz))
    url = f"{TWITTER_URL}/{reply['user']['screen_name']}/status/{reply['id_str']}"
    return format_html('<a href="{}">{}</a>', url, local.strftime(REPLY_TIMESTAMP_FORMAT))


def _localize(value, tz: tzinfo | str | None):
    if tz is None or not isinstance(value, datetime) or value.tzinfo is None:
        return value
    return value.astimezone(_resolve_tz(tz))


def display_date(value, blog, tz: tzinfo | str | None = None) -> str:
    """Format ``value`` with the blog's date format, in ``tz`` when it is aware."""
    if value is None:
        return ""
    return _localize(value, tz).strftime(blog.date_format)


def display_time(value, blog, tz: tzinfo | str | None = None) -> str:
    if value is None:
        return ""
    return _localize(value, tz).strftime(blog.time_format)
