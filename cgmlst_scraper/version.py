"""
Resolution of a scheme's version and last-change timestamp.

Everything here is pure and total: a detail page missing some or all of the
expected labels yields a VersionInfo with None in the missing places, and an
unreadable timestamp only leaves the parsed value empty.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from typing import List, Mapping, Optional, Tuple

NAME_KEY = 'Name'
VERSION_KEY = 'Version'
LAST_CHANGE_KEY = 'Last Change'

STAMP_FORMAT = '%Y-%m-%d-%H-%M'

# Accepted after normalisation, e.g. "January 5 2024 10:30" or "Jan 5 2024 10:30 AM"
LAST_CHANGE_FORMATS = (
    '%B %d %Y %H:%M',
    '%b %d %Y %H:%M',
    '%B %d %Y %I:%M %p',
    '%b %d %Y %I:%M %p',
)


@dataclass(frozen=True)
class VersionInfo:
    """Name, version and last change of a scheme; any of them may be missing."""

    name: Optional[str] = None
    version: Optional[str] = None
    last_change_raw: Optional[str] = None
    last_change_parsed: Optional[datetime] = None

    @property
    def last_change_stamp(self) -> Optional[str]:
        """The parsed last change as YYYY-MM-DD-HH-MM, or None."""
        if self.last_change_parsed is None:
            return None
        return self.last_change_parsed.strftime(STAMP_FORMAT)


def _normalize_last_change(text: str) -> str:
    text = text.replace(',', ' ')
    text = re.sub(r'\s+', ' ', text).strip()
    text = re.sub(r'\bnoon\b', '12:00 PM', text, flags=re.IGNORECASE)
    text = re.sub(r'\bmidnight\b', '12:00 AM', text, flags=re.IGNORECASE)
    # "10:30am" -> "10:30 am"
    text = re.sub(r'(\d)(?=[ap]\.?m\.?$)', r'\1 ', text, flags=re.IGNORECASE)
    text = re.sub(r'\ba\.?m\.?(?=\s|$)', 'AM', text, flags=re.IGNORECASE)
    text = re.sub(r'\bp\.?m\.?(?=\s|$)', 'PM', text, flags=re.IGNORECASE)
    # "Jan." / "Sept." month abbreviations
    text = re.sub(r'^([A-Za-z]+)\.', r'\1', text)
    text = re.sub(r'^Sept\b', 'Sep', text, flags=re.IGNORECASE)
    # "10 AM" -> "10:00 AM"
    text = re.sub(r'(\s\d{1,2}) (AM|PM)$', r'\1:00 \2', text)
    return text


def parse_last_change(text: Optional[str]) -> Optional[datetime]:
    """
    Parse a 'Last Change' value such as 'January 5, 2024, 10:30'.

    Full and abbreviated month names are accepted, with a 24-hour time or a
    12-hour time followed by AM/PM (also written 'a.m.'/'p.m.').

    Args:
        text: The raw value from the detail page.

    Returns:
        The parsed datetime, or None if text is missing or not in a known format.
    """
    if not text:
        return None
    normalized = _normalize_last_change(text)
    for fmt in LAST_CHANGE_FORMATS:
        try:
            return datetime.strptime(normalized, fmt)
        except ValueError:
            continue
    return None


def resolve_version(detail: Mapping[str, str]) -> VersionInfo:
    """
    Extract name, version and last change from a scheme detail mapping.

    Never raises; labels absent from the page come back as None.
    """
    last_change_raw = detail.get(LAST_CHANGE_KEY)
    return VersionInfo(
        name=detail.get(NAME_KEY),
        version=detail.get(VERSION_KEY),
        last_change_raw=last_change_raw,
        last_change_parsed=parse_last_change(last_change_raw),
    )


def last_change_report(info: VersionInfo) -> List[Tuple[str, str]]:
    """
    Columns of the 'last change' report for one scheme.

    Name and Version are always reported (empty when missing); Last Change
    only when the page has one.
    """
    columns = [
        (NAME_KEY, info.name or ''),
        (VERSION_KEY, info.version or ''),
    ]
    if info.last_change_raw is not None:
        columns.append((LAST_CHANGE_KEY, info.last_change_raw))
    return columns
