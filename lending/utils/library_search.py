from __future__ import annotations

from typing import Any, Optional


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def media_matches_keyword(item: Any, keyword: Optional[str]) -> bool:
    """Return True if `keyword` is a substring of the item's title or author.

    Author is matched for any item that carries one, so new media variants
    with an author become searchable without touching this helper.
    """

    if not keyword:
        return True

    needle = keyword.lower()
    title = _as_text(getattr(item, "title", None)).lower()
    author = _as_text(getattr(item, "author", None)).lower()
    return needle in title or needle in author


def member_matches_keyword(member: Any, keyword: Optional[str]) -> bool:
    """Return True if `keyword` is a substring of the member's name."""
    if not keyword:
        return True
    return keyword.lower() in _as_text(getattr(member, "name", None)).lower()


def title_sort_key(item: Any) -> str:
    return _as_text(getattr(item, "title", None)).casefold()


def name_sort_key(member: Any) -> str:
    return _as_text(getattr(member, "name", None)).casefold()
