# Utils package for the lending core

from .clock import FixedClock, make_clock, today_in
from .library_search import (
    media_matches_keyword,
    member_matches_keyword,
    name_sort_key,
    title_sort_key,
)

__all__ = [
    'FixedClock',
    'make_clock',
    'today_in',
    'media_matches_keyword',
    'member_matches_keyword',
    'name_sort_key',
    'title_sort_key',
]
