"""Plain-text tables for the command-line output."""

from typing import Iterable, List, Sequence

from cgmlst_scraper.registry import SchemeSummary
from cgmlst_scraper.version import VersionInfo, last_change_report

LISTING_HEADERS = ('scheme_ID', 'Scheme', 'Target_Count', 'CT_Count')


def _is_numeric(value: str) -> bool:
    return value.replace(',', '').replace('.', '', 1).isdigit()


def format_table(headers: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    """
    Render rows as a pipe table; numeric columns are right-aligned.

    Example:
        >>> print(format_table(['a', 'n'], [['x', '10']]))
        |a  |  n|
        |:--|--:|
        |x  | 10|
    """
    rows = [[str(cell) for cell in row] for row in rows]
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))

    numeric = [
        bool(rows) and all(_is_numeric(row[i]) for row in rows if row[i])
        and any(row[i] for row in rows)
        for i in range(len(headers))
    ]

    def _line(cells: Sequence[str]) -> str:
        padded = [
            cell.rjust(widths[i]) if numeric[i] else cell.ljust(widths[i])
            for i, cell in enumerate(cells)
        ]
        return '|' + '|'.join(padded) + '|'

    # widths are at least 3 so the alignment markers always fit
    widths = [max(width, 3) for width in widths]
    rule = '|' + '|'.join(
        '-' * (w - 1) + ':' if numeric[i] else ':' + '-' * (w - 1)
        for i, w in enumerate(widths)
    ) + '|'

    lines = [_line(list(headers)), rule]
    lines.extend(_line(row) for row in rows)
    return '\n'.join(lines)


def _count(value) -> str:
    return '' if value is None else str(value)


def format_scheme_listing(schemes: Iterable[SchemeSummary]) -> str:
    """Table of scheme ids, names and counts."""
    rows: List[List[str]] = [
        [scheme.id, scheme.name, _count(scheme.target_count), _count(scheme.ct_count)]
        for scheme in schemes
    ]
    return format_table(LISTING_HEADERS, rows)


def format_last_change(info: VersionInfo) -> str:
    """One-row table with Name, Version and, when known, Last Change."""
    columns = last_change_report(info)
    return format_table([label for label, _ in columns], [[value for _, value in columns]])
