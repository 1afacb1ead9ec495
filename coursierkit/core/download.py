"""
Network download of release binaries.

Downloads are streamed to disk with `requests`, optionally verifying a
SHA256 checksum while the bytes arrive. There is no retry: a failed
download fails the caller.
"""

import hashlib
import logging
from pathlib import Path
from typing import Optional, Union

import requests
from requests.exceptions import RequestException

from coursierkit.core.exceptions import CoursierKitError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192


class DownloadError(CoursierKitError):
    """Exception raised when download fails."""

    pass


class ChecksumError(DownloadError):
    """Exception raised when checksum verification fails."""

    pass


def download_file(
    url: str,
    destination: Union[str, Path],
    expected_sha256: Optional[str] = None,
    timeout: int = 30,
) -> Path:
    """
    Download file from URL to destination.

    Args:
        url: URL to download from
        destination: Local path to save file
        expected_sha256: Expected SHA256 hash (verified during download)
        timeout: Request timeout in seconds

    Returns:
        Path to downloaded file

    Raises:
        DownloadError: If the request fails or returns an error status
        ChecksumError: If checksum doesn't match expected value
        ValueError: If URL or destination is invalid

    Example:
        >>> from coursierkit.core.download import download_file
        >>> url = "https://github.com/coursier/launchers/raw/master/cs-x86_64-pc-linux.gz"
        >>> download_file(url, Path.home() / "bin" / "cs.gz")
    """
    if not url:
        raise ValueError("URL cannot be empty")

    if not destination:
        raise ValueError("Destination path cannot be empty")

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    logger.debug(f"Downloading from {url}")

    hasher = hashlib.sha256() if expected_sha256 else None
    downloaded = 0

    try:
        with requests.get(
            url, stream=True, timeout=timeout, allow_redirects=True
        ) as response:
            response.raise_for_status()

            with open(destination, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
                        downloaded += len(chunk)
                        if hasher:
                            hasher.update(chunk)
    except RequestException as e:
        destination.unlink(missing_ok=True)
        raise DownloadError(f"Download of {url} failed: {e}") from e

    if expected_sha256 and hasher:
        actual_hash = hasher.hexdigest()
        if actual_hash.lower() != expected_sha256.lower():
            # Clean up corrupted file
            destination.unlink()
            raise ChecksumError(
                f"Checksum mismatch for {destination.name}: "
                f"expected {expected_sha256}, got {actual_hash}"
            )
        logger.debug("Checksum verified successfully")

    logger.debug(f"Download complete: {destination} ({downloaded} bytes)")
    return destination
