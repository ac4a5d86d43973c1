import os
import re
import shutil
import logging
import zipfile
from pathlib import PurePosixPath
from typing import List

from cgmlst_scraper.errors import ExtractError


def check_file_exists(file_path: str) -> bool:
    """Return True if file_path is an existing regular file."""
    return os.path.isfile(file_path)


def check_dir_exists(dir_path: str) -> bool:
    """Return True if dir_path is an existing directory."""
    return os.path.isdir(dir_path)


def sanitize_path_component(value: str) -> str:
    """
    Make a string safe to use as a single file or directory name.

    Path separators, null bytes and characters that are invalid on common
    filesystems are replaced with underscores, and leading dots are removed.

    Args:
        value: The string to sanitize.

    Returns:
        A name that cannot escape its parent directory.
    """
    value = value.replace('/', '_').replace('\\', '_').replace('\x00', '')
    value = re.sub(r'[<>:"|?*\s]', '_', value)
    value = value.lstrip('.')
    return value or '_'


def _member_target(member_name: str, destination: str) -> str:
    """Resolve an archive member below destination, rejecting unsafe paths."""
    relative = PurePosixPath(member_name.replace('\\', '/'))
    if relative.is_absolute() or any(part == '..' for part in relative.parts):
        raise ExtractError(f"Unsafe path in archive: {member_name}")
    parts = [part for part in relative.parts if part not in ('', '.')]
    if not parts:
        raise ExtractError(f"Empty path in archive: {member_name}")
    return os.path.join(destination, *parts)


def extract_zip(zip_path: str, destination: str) -> List[str]:
    """
    Extract a ZIP archive into a directory that must not exist yet.

    Members with absolute paths or '..' components are rejected. On any
    failure the partially filled destination directory is removed.

    Args:
        zip_path: Path to the archive.
        destination: Directory to create and extract into.

    Returns:
        Paths of the extracted files.

    Raises:
        ExtractError: If the archive is corrupt or contains unsafe paths, or
                      the destination cannot be created.
    """
    try:
        os.makedirs(destination)
    except OSError as e:
        raise ExtractError(f"Could not create directory {destination}: {e}") from e

    extracted = []
    try:
        with zipfile.ZipFile(zip_path) as archive:
            for member in archive.infolist():
                target = _member_target(member.filename, destination)
                if member.is_dir():
                    os.makedirs(target, exist_ok=True)
                    continue
                os.makedirs(os.path.dirname(target), exist_ok=True)
                with archive.open(member) as source, open(target, 'wb') as handle:
                    shutil.copyfileobj(source, handle)
                extracted.append(target)
    except (zipfile.BadZipFile, zipfile.LargeZipFile, NotImplementedError, RuntimeError, OSError) as e:
        shutil.rmtree(destination, ignore_errors=True)
        raise ExtractError(f"Could not extract {zip_path}: {e}") from e
    except ExtractError:
        shutil.rmtree(destination, ignore_errors=True)
        raise

    logging.debug(f"Extracted {len(extracted)} files from {zip_path} into {destination}")
    return extracted
