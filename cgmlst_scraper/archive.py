"""
Download and extraction of a scheme's allele archive.

The archive and the directory it is unpacked into are named after the scheme
id, version and last-change timestamp, so a name that already exists means
that exact release is on disk and nothing is fetched.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from cgmlst_scraper.downloader import DEFAULT_TIMEOUT, download_file
from cgmlst_scraper.errors import ExtractError, MissingVersionInfo
from cgmlst_scraper.file_utils import (
    check_dir_exists,
    check_file_exists,
    extract_zip,
    sanitize_path_component,
)
from cgmlst_scraper.version import VersionInfo

ARCHIVE_URL_TEMPLATE = 'https://www.cgmlst.org/ncs/schema/{scheme_id}/alleles/'

STATUS_DOWNLOADED = 'downloaded'
STATUS_EXISTS = 'exists'


@dataclass(frozen=True)
class ArchiveDestination:
    """Where a scheme release is stored and whether it is already there."""

    base_name: str
    zip_path: str
    directory: str
    zip_exists: bool
    dir_exists: bool

    @property
    def exists(self) -> bool:
        return self.zip_exists or self.dir_exists


@dataclass(frozen=True)
class ExtractResult:
    """Outcome of fetch_and_extract."""

    destination: ArchiveDestination
    status: str
    files: List[str] = field(default_factory=list)


def archive_url(scheme_id: str) -> str:
    return ARCHIVE_URL_TEMPLATE.format(scheme_id=scheme_id)


def archive_base_name(scheme_id: str, version_info: VersionInfo) -> str:
    """
    Build '<id>_v<version>_LastChange_<YYYY-MM-DD-HH-MM>'.

    Raises:
        MissingVersionInfo: If the version or the parsed last change is absent.
    """
    stamp = version_info.last_change_stamp
    if not version_info.version:
        raise MissingVersionInfo(f"Scheme {scheme_id} has no version; cannot name its archive")
    if stamp is None:
        raise MissingVersionInfo(
            f"Scheme {scheme_id} has no readable last change "
            f"({version_info.last_change_raw!r}); cannot name its archive"
        )
    return sanitize_path_component(f"{scheme_id}_v{version_info.version}_LastChange_{stamp}")


def archive_destination(scheme_id: str, version_info: VersionInfo, output_dir: str = '.') -> ArchiveDestination:
    """Compute the archive and directory paths and check whether either exists."""
    base_name = archive_base_name(scheme_id, version_info)
    zip_path = os.path.join(output_dir, base_name + '.zip')
    directory = os.path.join(output_dir, base_name)
    return ArchiveDestination(
        base_name=base_name,
        zip_path=zip_path,
        directory=directory,
        zip_exists=check_file_exists(zip_path),
        dir_exists=check_dir_exists(directory),
    )


def fetch_and_extract(
    scheme_id: str,
    version_info: VersionInfo,
    output_dir: str = '.',
    timeout: int = DEFAULT_TIMEOUT,
    user_agent: Optional[str] = None,
    show_progress: bool = False
) -> ExtractResult:
    """
    Download a scheme's allele archive and unpack it next to the zip.

    Nothing is requested when the zip or the directory already exists.

    Args:
        scheme_id: Scheme id as listed by the registry.
        version_info: Resolved version of the scheme.
        output_dir: Directory receiving the zip and the extracted directory.
        timeout: Request timeout in seconds. Defaults to 30.
        user_agent: Custom User-Agent string. If None, uses the default.
        show_progress: Whether to show a download progress bar.

    Returns:
        An ExtractResult with status 'exists' or 'downloaded'.

    Raises:
        MissingVersionInfo: If the archive name cannot be built.
        DownloadError: If the download fails; no directory is created.
        ExtractError: If the archive cannot be unpacked; the zip is removed.
    """
    destination = archive_destination(scheme_id, version_info, output_dir)

    if destination.zip_exists:
        logging.info(f"{destination.zip_path} exists. Downloading aborted.")
        return ExtractResult(destination=destination, status=STATUS_EXISTS)
    if destination.dir_exists:
        logging.info(f"{destination.directory} exists. Downloading aborted.")
        return ExtractResult(destination=destination, status=STATUS_EXISTS)

    os.makedirs(output_dir, exist_ok=True)

    url = archive_url(scheme_id)
    logging.info(f"Downloading {url} to {destination.zip_path}")
    download_file(
        url,
        destination.zip_path,
        timeout=timeout,
        user_agent=user_agent,
        show_progress=show_progress,
    )

    logging.info(f"Unzipping into {destination.directory}")
    try:
        files = extract_zip(destination.zip_path, destination.directory)
    except ExtractError:
        # an unreadable zip must not count as an existing release
        os.remove(destination.zip_path)
        raise

    return ExtractResult(destination=destination, status=STATUS_DOWNLOADED, files=files)
