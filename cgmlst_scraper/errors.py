"""
Exceptions raised by cgmlst_scraper.

Fetch and extraction problems are fatal to the current operation and are
raised to the caller. Missing fields on a scheme detail page are not errors;
they show up as ``None`` on the resolved values instead.
"""

from typing import Iterable, Optional


class CgmlstError(Exception):
    """Base class for every error raised by this package."""


class FetchError(CgmlstError):
    """A registry page could not be retrieved."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class RegistryFetchError(FetchError):
    """The scheme index page could not be retrieved."""


class DetailFetchError(FetchError):
    """A per-scheme detail page could not be retrieved."""


class NoTableFound(CgmlstError):
    """The fetched HTML does not contain a <table> element."""


class MissingVersionInfo(CgmlstError):
    """Version or last-change timestamp needed to name an archive is absent."""


class DownloadError(CgmlstError):
    """The allele archive could not be downloaded."""


class ExtractError(CgmlstError):
    """The downloaded archive could not be unpacked."""


class UnknownSchemeId(CgmlstError):
    """The requested scheme id is not part of the live registry listing."""

    def __init__(self, scheme_id: str, valid_ids: Iterable[str] = ()):
        self.scheme_id = scheme_id
        self.valid_ids = list(valid_ids)
        super().__init__(f"Unknown scheme id: {scheme_id!r}")


class InvalidFunctionArgument(CgmlstError):
    """The requested CLI function is not one of the supported ones."""

    def __init__(self, function: str, choices: Iterable[str] = ()):
        self.function = function
        self.choices = list(choices)
        super().__init__(f"Invalid function: {function!r}")
