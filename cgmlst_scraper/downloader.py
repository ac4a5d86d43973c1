import os
import logging
import requests
from tqdm import tqdm
from typing import Optional, Type

from cgmlst_scraper.errors import DownloadError, FetchError

# Define constants
DEFAULT_TIMEOUT = 30
DOWNLOAD_CHUNK_SIZE = 64 * 1024

# Default User-Agent string - identifies the client properly for site operators
DEFAULT_USER_AGENT = 'cgmlst-scraper/0.1.0 (+https://www.cgmlst.org/ncs)'

# Module-level variable to track the current default user agent
_default_user_agent = DEFAULT_USER_AGENT


def set_default_user_agent(agent_string: str) -> None:
    """
    Set the User-Agent sent to cgMLST.org when a call passes none.

    Args:
        agent_string: The User-Agent string, e.g. from --user-agent.
    """
    global _default_user_agent
    _default_user_agent = agent_string


def get_default_user_agent() -> str:
    """Return the User-Agent used for registry and archive requests."""
    return _default_user_agent


def _headers(user_agent: Optional[str]) -> dict:
    return {'User-Agent': user_agent or get_default_user_agent()}


def fetch_html(
    url: str,
    error_class: Type[FetchError] = FetchError,
    timeout: int = DEFAULT_TIMEOUT,
    user_agent: Optional[str] = None
) -> str:
    """
    Fetch an HTML page and return its text.

    Args:
        url: The URL of the page.
        error_class: FetchError subclass raised on failure, so callers can tell
                     the index page apart from detail pages.
        timeout: Request timeout in seconds. Defaults to 30.
        user_agent: Custom User-Agent string. If None, uses the default.

    Returns:
        The decoded response body.

    Raises:
        FetchError: (or the given subclass) on network failure or a non-2xx status.
    """
    logging.debug(f"Fetching {url}")
    try:
        response = requests.get(url, headers=_headers(user_agent), timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else None
        raise error_class(f"HTTP {status} while fetching {url}", url=url, status_code=status) from e
    except requests.exceptions.Timeout as e:
        raise error_class(f"Request timed out: {url}", url=url) from e
    except requests.exceptions.RequestException as e:
        raise error_class(f"Error fetching {url}: {e}", url=url) from e

    return response.text


def download_file(
    url: str,
    destination: str,
    timeout: int = DEFAULT_TIMEOUT,
    user_agent: Optional[str] = None,
    show_progress: bool = False
) -> int:
    """
    Stream a remote file to disk.

    The body is written to ``destination + '.part'`` and only renamed to
    ``destination`` once it is complete, so an interrupted transfer never
    leaves a file under the final name.

    Args:
        url: The URL of the file.
        destination: Final path of the downloaded file.
        timeout: Request timeout in seconds. Defaults to 30.
        user_agent: Custom User-Agent string. If None, uses the default.
        show_progress: Whether to show a progress bar. Defaults to False.

    Returns:
        The number of bytes written.

    Raises:
        DownloadError: On network failure, a non-2xx status or a short body.
    """
    part_path = destination + '.part'
    written = 0
    try:
        with requests.get(url, headers=_headers(user_agent), timeout=timeout, stream=True) as response:
            response.raise_for_status()

            expected = response.headers.get('Content-Length')
            expected = int(expected) if expected and expected.isdigit() else None

            with open(part_path, 'wb') as handle, tqdm(
                total=expected,
                unit='B',
                unit_scale=True,
                desc=os.path.basename(destination),
                disable=not show_progress,
            ) as progress:
                for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                    if not chunk:
                        continue
                    handle.write(chunk)
                    written += len(chunk)
                    progress.update(len(chunk))

        # Content-Length counts encoded bytes, only compare for identity transfers
        encoding = response.headers.get('Content-Encoding', 'identity')
        if expected is not None and encoding == 'identity' and written != expected:
            raise DownloadError(f"Incomplete download from {url}: got {written} of {expected} bytes")

        os.replace(part_path, destination)

    except requests.exceptions.HTTPError as e:
        _remove_quietly(part_path)
        status = e.response.status_code if e.response is not None else None
        raise DownloadError(f"HTTP {status} while downloading {url}") from e
    except requests.exceptions.RequestException as e:
        _remove_quietly(part_path)
        raise DownloadError(f"Error downloading {url}: {e}") from e
    except OSError as e:
        _remove_quietly(part_path)
        raise DownloadError(f"Could not write {destination}: {e}") from e
    except DownloadError:
        _remove_quietly(part_path)
        raise

    logging.debug(f"Downloaded {written} bytes from {url} to {destination}")
    return written


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
