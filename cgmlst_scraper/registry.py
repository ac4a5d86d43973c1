"""
Listing of the schemes published on cgMLST.org.

The index page holds one table with a row per scheme. The table cells carry
the display values; the scheme identifier used everywhere else (detail page,
allele download) only appears in each row's hyperlink, so it is derived from
the href.
"""

import re
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional
from urllib.parse import urljoin

from cgmlst_scraper.downloader import DEFAULT_TIMEOUT, fetch_html
from cgmlst_scraper.errors import RegistryFetchError, UnknownSchemeId
from cgmlst_scraper.tables import extract_table

REGISTRY_URL = 'https://www.cgmlst.org/ncs/scheme/'
SCHEME_URL_PREFIX = 'https://www.cgmlst.org/ncs/scheme/schema/'

# Some hrefs end in a numeric scheme-version suffix, e.g. ".../Abaumannii1469/"
_VERSION_SUFFIX = re.compile(r'(?<=\D)\d+/$')


@dataclass(frozen=True)
class SchemeSummary:
    """
    One row of the registry index.

    Attributes:
        id: Identifier derived from the row's hyperlink (e.g. 'Abaumannii').
        name: Display name from the 'Scheme' column.
        target_count: Number of target loci, None if the cell is not a number.
        ct_count: Number of complex types, None if the cell is not a number.
        source_url: Absolute href the id was derived from.
        columns: Every cell of the row keyed by its header name.
    """

    id: str
    name: str
    target_count: Optional[int]
    ct_count: Optional[int]
    source_url: str
    columns: Dict[str, str] = field(default_factory=dict, compare=False)


def rename_header(cell: str) -> str:
    """Turn a header cell into a field name ('Target Count' -> 'Target_Count')."""
    return cell.strip().replace(' ', '_')


def parse_count(cell: Optional[str]) -> Optional[int]:
    """Parse an integer cell such as '1,497'; return None if it is not a number."""
    if cell is None:
        return None
    digits = re.sub(r'[\s,]', '', cell)
    if not digits.isdigit():
        return None
    return int(digits)


def derive_scheme_id(href: str) -> str:
    """
    Derive the scheme identifier from a registry hyperlink.

    Strips the scheme URL prefix, a trailing run of digits directly before the
    final slash (only when a non-digit stem remains), then any trailing slashes.
    Applying it to its own result returns the same value.

    Example:
        >>> derive_scheme_id('https://www.cgmlst.org/ncs/scheme/schema/Abaumannii1469/')
        'Abaumannii'
    """
    scheme_id = href.strip()
    if scheme_id.startswith(SCHEME_URL_PREFIX):
        scheme_id = scheme_id[len(SCHEME_URL_PREFIX):]
    scheme_id = _VERSION_SUFFIX.sub('/', scheme_id)
    return scheme_id.rstrip('/')


def parse_scheme_index(html: str, base_url: str = REGISTRY_URL) -> List[SchemeSummary]:
    """
    Turn the registry index HTML into SchemeSummary records, in page order.

    Args:
        html: Raw HTML of the index page.
        base_url: URL the page was fetched from, used to resolve relative links.

    Returns:
        A list of SchemeSummary with unique, non-empty ids.

    Raises:
        NoTableFound: If the page has no table.
    """
    table = extract_table(html)
    if not table.rows:
        return []

    header = [rename_header(cell) for cell in table.rows[0]]
    data_rows = table.rows[1:]
    anchors = table.anchors

    if len(anchors) != len(data_rows):
        logging.warning(
            f"Registry table has {len(data_rows)} rows but {len(anchors)} links; "
            f"pairing the first {min(len(anchors), len(data_rows))}"
        )

    schemes = []
    seen = set()
    for row, href in zip(data_rows, anchors):
        columns = dict(zip(header, row))
        source_url = urljoin(base_url, href)
        scheme_id = derive_scheme_id(source_url)

        if not scheme_id:
            logging.warning(f"Skipping registry row with unusable link: {href}")
            continue
        if scheme_id in seen:
            logging.warning(f"Duplicate scheme id {scheme_id!r} from {href}, keeping the first")
            continue
        seen.add(scheme_id)

        schemes.append(SchemeSummary(
            id=scheme_id,
            name=columns.get('Scheme', ''),
            target_count=parse_count(columns.get('Target_Count')),
            ct_count=parse_count(columns.get('CT_Count')),
            source_url=source_url,
            columns=columns,
        ))

    return schemes


def list_schemes(
    url: str = REGISTRY_URL,
    timeout: int = DEFAULT_TIMEOUT,
    user_agent: Optional[str] = None
) -> List[SchemeSummary]:
    """
    Fetch the registry index and return every published scheme.

    Args:
        url: Registry index URL. Defaults to REGISTRY_URL.
        timeout: Request timeout in seconds. Defaults to 30.
        user_agent: Custom User-Agent string. If None, uses the default.

    Returns:
        A list of SchemeSummary in registry page order.

    Raises:
        RegistryFetchError: If the index page cannot be retrieved.
        NoTableFound: If the page has no table.
    """
    html = fetch_html(url, RegistryFetchError, timeout=timeout, user_agent=user_agent)
    schemes = parse_scheme_index(html, base_url=url)
    logging.info(f"Found {len(schemes)} schemes on {url}")
    return schemes


def scheme_ids(schemes: Iterable[SchemeSummary]) -> List[str]:
    """Return the ids of the given schemes, in order."""
    return [scheme.id for scheme in schemes]


def find_scheme(schemes: Iterable[SchemeSummary], scheme_id: str) -> SchemeSummary:
    """
    Look up a scheme by id.

    Raises:
        UnknownSchemeId: If no scheme has that id.
    """
    schemes = list(schemes)
    for scheme in schemes:
        if scheme.id == scheme_id:
            return scheme
    raise UnknownSchemeId(scheme_id, scheme_ids(schemes))
