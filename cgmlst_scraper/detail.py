"""
Per-scheme detail pages.

A detail page lists scheme properties in a two-column (label, value) table.
Multi-line properties only carry the label on their first line, and some
labels repeat; both are folded into a single ordered key/value mapping.
Which labels exist varies from scheme to scheme.
"""

import logging
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence

from cgmlst_scraper.downloader import DEFAULT_TIMEOUT, fetch_html
from cgmlst_scraper.errors import DetailFetchError
from cgmlst_scraper.tables import extract_table

DETAIL_URL_TEMPLATE = 'https://www.cgmlst.org/ncs/scheme/scheme/{scheme_id}/'
VALUE_SEPARATOR = '; '


class SchemeDetail(Mapping[str, str]):
    """Read-only, insertion-ordered mapping of detail page labels to values."""

    def __init__(self, items: Optional[Mapping[str, str]] = None):
        self._items: Dict[str, str] = dict(items or {})

    def __getitem__(self, key: str) -> str:
        return self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"SchemeDetail({self._items!r})"


def fold_detail_rows(rows: Iterable[Sequence[str]]) -> SchemeDetail:
    """
    Fold (label, value) rows into a SchemeDetail.

    A blank label continues the nearest label above it. Values of a label
    that occurs more than once are joined with '; ' in row order.

    Args:
        rows: Table rows; the first cell is the label, the second the value.

    Returns:
        The folded SchemeDetail, keys in order of first appearance.
    """
    grouped: Dict[str, List[str]] = {}
    current_key = None
    for row in rows:
        if not row:
            continue
        label = row[0].strip()
        value = row[1] if len(row) > 1 else ''

        if label:
            current_key = label
        elif current_key is None:
            logging.debug(f"Dropping detail row without a label: {list(row)}")
            continue

        grouped.setdefault(current_key, []).append(value)

    return SchemeDetail({key: VALUE_SEPARATOR.join(values) for key, values in grouped.items()})


def parse_scheme_detail(html: str) -> SchemeDetail:
    """
    Parse a scheme detail page into a SchemeDetail.

    Raises:
        NoTableFound: If the page has no table.
    """
    table = extract_table(html)
    rows = table.rows[1:] if table.has_header else table.rows
    return fold_detail_rows(rows)


def detail_url(scheme_id: str) -> str:
    return DETAIL_URL_TEMPLATE.format(scheme_id=scheme_id)


def fetch_detail(
    scheme_id: str,
    timeout: int = DEFAULT_TIMEOUT,
    user_agent: Optional[str] = None
) -> SchemeDetail:
    """
    Fetch and parse the detail page of a scheme.

    Args:
        scheme_id: Scheme id as listed by the registry.
        timeout: Request timeout in seconds. Defaults to 30.
        user_agent: Custom User-Agent string. If None, uses the default.

    Returns:
        The scheme's SchemeDetail.

    Raises:
        DetailFetchError: If the page cannot be retrieved.
        NoTableFound: If the page has no table.
    """
    url = detail_url(scheme_id)
    html = fetch_html(url, DetailFetchError, timeout=timeout, user_agent=user_agent)
    detail = parse_scheme_detail(html)
    logging.debug(f"Scheme {scheme_id} detail keys: {list(detail)}")
    return detail
