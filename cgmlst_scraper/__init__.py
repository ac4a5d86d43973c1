"""
cgmlst_scraper - A Python client for the cgMLST.org scheme registry.

This library lists the typing schemes published on cgMLST.org, resolves the
version and last change of a scheme, and downloads and unpacks a scheme's
allele archive.
"""

__version__ = "0.1.0"

from cgmlst_scraper.errors import (
    CgmlstError,
    FetchError,
    RegistryFetchError,
    DetailFetchError,
    NoTableFound,
    MissingVersionInfo,
    DownloadError,
    ExtractError,
    UnknownSchemeId,
    InvalidFunctionArgument,
)
from cgmlst_scraper.tables import ExtractedTable, extract_table
from cgmlst_scraper.registry import (
    SchemeSummary,
    derive_scheme_id,
    list_schemes,
    find_scheme,
    scheme_ids,
)
from cgmlst_scraper.detail import SchemeDetail, fetch_detail
from cgmlst_scraper.version import VersionInfo, parse_last_change, resolve_version
from cgmlst_scraper.archive import ArchiveDestination, ExtractResult, fetch_and_extract
from cgmlst_scraper.downloader import set_default_user_agent, get_default_user_agent

__all__ = [
    # Main API
    "list_schemes",
    "fetch_detail",
    "resolve_version",
    "fetch_and_extract",
    # Data types
    "ExtractedTable",
    "SchemeSummary",
    "SchemeDetail",
    "VersionInfo",
    "ArchiveDestination",
    "ExtractResult",
    # Helpers
    "extract_table",
    "derive_scheme_id",
    "find_scheme",
    "scheme_ids",
    "parse_last_change",
    "set_default_user_agent",
    "get_default_user_agent",
    # Errors
    "CgmlstError",
    "FetchError",
    "RegistryFetchError",
    "DetailFetchError",
    "NoTableFound",
    "MissingVersionInfo",
    "DownloadError",
    "ExtractError",
    "UnknownSchemeId",
    "InvalidFunctionArgument",
    # Version
    "__version__",
]
