import logging
from pathlib import Path

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from error_control.exceptions import ResourceError
from error_control.infrastructure import io

logger = logging.getLogger(__name__)


class _TransientDownloadError(Exception):
    pass


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=8),
    retry=retry_if_exception_type(_TransientDownloadError),
    reraise=True,
)
def _download(url: str, timeout: float) -> str:
    try:
        response = requests.get(url, timeout=timeout)
    except (requests.ConnectionError, requests.Timeout) as e:
        raise _TransientDownloadError(str(e)) from e

    if response.status_code >= 500:
        raise _TransientDownloadError(f"Server error {response.status_code} for {url}")
    try:
        response.raise_for_status()
    except requests.HTTPError as e:
        msg = f"Could not download {url}: {e}"
        raise ResourceError(msg) from e
    return response.text


def fetch_resource(url: str, path: Path, timeout: float = 10.0) -> Path:
    """
    Return ``path``, downloading it from ``url`` first if it is not present.

    A local copy always wins, so the notes keep working offline once the
    resource has been fetched.
    """
    if path.exists():
        logger.debug(f"Using local copy of {url} at {path}")
        return path

    logger.info(f"Downloading {url} to {path}")
    try:
        text = _download(url, timeout)
    except (_TransientDownloadError, requests.RequestException) as e:
        msg = f"Could not download {url}: {e}"
        raise ResourceError(msg) from e

    try:
        io.write_text(path, text)
    except OSError as e:
        msg = f"Could not write {path}: {e}"
        raise ResourceError(msg) from e
    return path
