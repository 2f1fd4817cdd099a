"""Utility functions for reading schema sources and writing generated code.

This module is the I/O boundary of swiftgen: it loads raw bytes from files
and URLs with proper error handling, and writes generated code to a
destination that must not exist yet.
"""

import os
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)

SWIFT_SUFFIX = ".swift"


class SourceLoadError(Exception):
    """Raised when a schema source cannot be read."""

    pass


class DestinationExistsError(Exception):
    """Raised when the output destination is already occupied."""

    def __init__(self, path: str | Path):
        self.path = Path(path)
        super().__init__(f"Destination already exists: {self.path}")


def is_url(location: str) -> bool:
    """Return True for http(s) locations."""
    parsed = urlparse(location)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def load_bytes_from_file(file_path: str | Path) -> tuple[str, bytes]:
    """Load raw bytes from a local file.

    Args:
        file_path: Path to the schema file.

    Returns:
        Tuple of (source description, file contents).

    Raises:
        FileNotFoundError: If file doesn't exist.
        SourceLoadError: If the file cannot be read.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load schema from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning(f"File does not have .json extension: {file_path}")

    try:
        with file_path.open("rb") as f:
            data = f.read()
        logger.info(f"Loaded {len(data)} bytes from {file_path}")
        return str(file_path), data
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise SourceLoadError(f"Error reading file {file_path}: {e}") from e


def load_bytes_from_url(url: str, timeout: int = 30) -> tuple[str, bytes]:
    """Load raw bytes from a URL.

    Args:
        url: URL to fetch the schema from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, response body).

    Raises:
        SourceLoadError: If the URL is invalid or the request fails.
    """
    logger.debug(f"Attempting to load schema from URL: {url}")

    if not is_url(url):
        logger.error(f"Invalid URL format: {url}")
        raise SourceLoadError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        logger.info(f"Loaded {len(response.content)} bytes from {url}")
        return url, response.content

    except requests.exceptions.Timeout as e:
        logger.error(f"Request timeout for URL: {url}")
        raise SourceLoadError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {url}: {e}")
        raise SourceLoadError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        status = e.response.status_code if e.response is not None else "?"
        logger.error(f"HTTP error {status} for URL: {url}")
        raise SourceLoadError(f"HTTP error {status} for URL: {url}") from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}")
        raise SourceLoadError(f"Request error for URL {url}: {e}") from e


def load_bytes(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, bytes]:
    """Load schema bytes from either a file or URL.

    Args:
        file_path: Path to local file (mutually exclusive with url).
        url: URL to fetch from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, raw bytes).

    Raises:
        SourceLoadError: If neither or both parameters are provided, or loading fails.
        FileNotFoundError: If file doesn't exist.
    """
    if not file_path and not url:
        raise SourceLoadError("Either file_path or url must be provided")

    if file_path and url:
        raise SourceLoadError("Cannot specify both file_path and url")

    if file_path:
        return load_bytes_from_file(file_path)
    return load_bytes_from_url(url, timeout)


def default_destination(directory: str | Path, type_name: str) -> Path:
    """Return ``<directory>/<type_name>.swift``."""
    return Path(directory) / f"{type_name}{SWIFT_SUFFIX}"


@contextmanager
def exclusive_output(path: str | Path) -> Iterator[BinaryIO]:
    """Open ``path`` for writing, failing if it already exists.

    Missing parent directories are created. The caller owns the file for the
    duration of the block; if the block raises, the file is removed again.

    Raises:
        DestinationExistsError: If ``path`` already exists.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    try:
        f = path.open("xb")
    except FileExistsError as e:
        logger.error(f"Refusing to overwrite {path}")
        raise DestinationExistsError(path) from e

    try:
        with f:
            yield f
    except BaseException:
        logger.debug(f"Removing incomplete output {path}")
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        raise


def write_output(path: str | Path, text: str) -> Path:
    """Write ``text`` as UTF-8 to a new file at ``path``.

    Returns:
        The path written.
    """
    path = Path(path)
    with exclusive_output(path) as f:
        f.write(text.encode("utf-8"))
    logger.info(f"Wrote {path}")
    return path
