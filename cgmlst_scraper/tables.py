"""
Extraction of the first HTML table on a page.

Both registry pages (the scheme index and the per-scheme detail page) carry
their data in a single table, so callers only ever need the first one.
"""

import re
from dataclasses import dataclass, field
from typing import List

from bs4 import BeautifulSoup

from cgmlst_scraper.errors import NoTableFound

_WHITESPACE = re.compile(r'\s+')


@dataclass
class ExtractedTable:
    """
    Rows and hyperlinks of one HTML table.

    Attributes:
        rows: Cell texts of every row in document order, header row included.
        anchors: Every anchor href found inside the table, in document order.
        has_header: True when the first row is made of <th> cells only.
    """

    rows: List[List[str]] = field(default_factory=list)
    anchors: List[str] = field(default_factory=list)
    has_header: bool = False


def _cell_text(cell) -> str:
    return _WHITESPACE.sub(' ', cell.get_text(' ', strip=True)).strip()


def extract_table(html: str) -> ExtractedTable:
    """
    Parse the first <table> of an HTML document.

    Args:
        html: Raw HTML text.

    Returns:
        An ExtractedTable with the table's rows and anchor hrefs.

    Raises:
        NoTableFound: If the document contains no table.
    """
    soup = BeautifulSoup(html, 'html.parser')
    table = soup.find('table')
    if table is None:
        raise NoTableFound("No <table> element found in the page")

    rows = []
    has_header = False
    for tr in table.find_all('tr'):
        cells = tr.find_all(['th', 'td'], recursive=False)
        if not cells:
            continue
        if not rows:
            has_header = all(cell.name == 'th' for cell in cells)
        rows.append([_cell_text(cell) for cell in cells])

    anchors = [a['href'].strip() for a in table.find_all('a', href=True)]

    return ExtractedTable(rows=rows, anchors=anchors, has_header=has_header)
