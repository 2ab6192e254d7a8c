"""
CSV record importer.

Turns rows of catalogue and member CSV exports into domain objects and hands
them to a Library. Row layouts (after the header):

- books:     title, author, year, categories
- dvds:      title, year, duration, rating, categories
- magazines: title, publisher, year, categories
- members:   name, email

Categories are a single cell separated by ``;`` or ``|``.
"""

from __future__ import annotations

import csv
import logging
import re
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Sequence, TypeVar, Union

from ..domain.models import Book, Dvd, Magazine, MediaItem, Member
from ..services.library_service import Library

logger = logging.getLogger(__name__)

T = TypeVar('T')
RowFactory = Callable[[Sequence[str]], T]

_CATEGORY_SEPARATORS = re.compile(r'[;|]')


def parse_int(raw: Optional[str], default: int = 0) -> int:
    """Parse an integer cell, falling back to ``default`` for blank or bad input."""
    if raw is None:
        return default
    raw = raw.strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def split_categories(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [part.strip() for part in _CATEGORY_SEPARATORS.split(raw) if part.strip()]


def _require(row: Sequence[str], count: int, kind: str) -> None:
    if len(row) < count:
        raise ValueError(f"{kind} row needs {count} fields, got {len(row)}")


def book_from_row(row: Sequence[str]) -> Book:
    _require(row, 4, 'book')
    return Book(
        title=row[0].strip(),
        author=row[1].strip(),
        year=parse_int(row[2]),
        categories=split_categories(row[3]),
    )


def dvd_from_row(row: Sequence[str]) -> Dvd:
    _require(row, 5, 'dvd')
    return Dvd(
        title=row[0].strip(),
        year=parse_int(row[1]),
        duration=parse_int(row[2]),
        rating=row[3].strip(),
        categories=split_categories(row[4]),
    )


def magazine_from_row(row: Sequence[str]) -> Magazine:
    _require(row, 4, 'magazine')
    return Magazine(
        title=row[0].strip(),
        publisher=row[1].strip(),
        year=parse_int(row[2]),
        categories=split_categories(row[3]),
    )


def member_from_row(row: Sequence[str]) -> Member:
    _require(row, 2, 'member')
    return Member(name=row[0].strip(), email=row[1].strip())


MEDIA_FACTORIES: Dict[str, RowFactory[MediaItem]] = {
    'book': book_from_row,
    'dvd': dvd_from_row,
    'magazine': magazine_from_row,
}


def read_rows(path: Union[str, Path], factory: RowFactory[T], skip_header: bool = True) -> Iterator[T]:
    """Yield one object per usable row. Blank and malformed rows are logged and skipped."""
    with open(path, 'r', encoding='utf-8', newline='') as csvfile:
        reader = csv.reader(csvfile)
        if skip_header:
            next(reader, None)
        for row in reader:
            if not any(cell.strip() for cell in row):
                continue
            try:
                yield factory(row)
            except ValueError as e:
                logger.warning(f"Skipping {path} line {reader.line_num}: {e}")


def import_catalogue(library: Library, path: Union[str, Path], kind: str) -> int:
    """Add every item in a catalogue CSV of the given kind; return how many were added."""
    try:
        factory = MEDIA_FACTORIES[kind.lower()]
    except KeyError:
        raise ValueError(f"Unknown media kind: {kind}") from None

    count = 0
    for item in read_rows(path, factory):
        library.add_item(item)
        count += 1
    logger.info(f"Imported {count} {kind} records from {path}")
    return count


def import_members(library: Library, path: Union[str, Path]) -> int:
    count = 0
    for member in read_rows(path, member_from_row):
        library.add_member(member)
        count += 1
    logger.info(f"Imported {count} members from {path}")
    return count
