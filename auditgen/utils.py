"""Utility functions for loading generator inputs.

This module provides functions for loading the JSON manifest and the
line-oriented audit field list from files and URLs with proper error
handling and validation.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)


class ResourceLoadError(Exception):
    """Custom exception for input loading errors."""

    pass


def load_json(file_path: str | Path) -> tuple[str, Any]:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        FileNotFoundError: If file doesn't exist.
        ResourceLoadError: If file cannot be read or JSON is invalid.
    """
    file_path = Path(file_path)
    logger.debug(f"Attempting to load JSON from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise FileNotFoundError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning(f"File does not have .json extension: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        logger.info(f"Successfully loaded JSON from {file_path}")
        return str(file_path), data
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}")
        raise ResourceLoadError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}", exc_info=True)
        raise ResourceLoadError(f"Error reading file {file_path}: {e}") from e


def find_additional_file(directory: str | Path, file_name: str) -> Path | None:
    """Find a file by name in a directory, ignoring case.

    Args:
        directory: Directory to search (not recursive).
        file_name: File name to match case-insensitively.

    Returns:
        Path of the first match in sorted order, or None.
    """
    directory = Path(directory)
    if not directory.is_dir():
        return None

    wanted = file_name.lower()
    for candidate in sorted(directory.iterdir()):
        if candidate.is_file() and candidate.name.lower() == wanted:
            return candidate
    return None


def load_lines_from_file(file_path: str | Path) -> list[str] | None:
    """Read a text resource as lines.

    Args:
        file_path: Path to the text file.

    Returns:
        List of lines without line endings, or None if the file is absent.

    Raises:
        ResourceLoadError: If the file exists but cannot be read.
    """
    file_path = Path(file_path)

    if not file_path.is_file():
        logger.warning(f"Resource not found: {file_path}")
        return None

    try:
        text = file_path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        logger.error(f"Error reading resource {file_path}: {e}", exc_info=True)
        raise ResourceLoadError(f"Error reading resource {file_path}: {e}") from e

    logger.info(f"Loaded resource from {file_path}")
    return text.splitlines()


def load_lines_from_url(url: str, timeout: int = 30) -> list[str]:
    """Fetch a text resource from a URL as lines.

    Args:
        url: URL to fetch the resource from.
        timeout: Request timeout in seconds.

    Returns:
        List of lines without line endings.

    Raises:
        ResourceLoadError: If URL is invalid or the request fails.
    """
    logger.debug(f"Attempting to load resource from URL: {url}")

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error(f"Invalid URL format: {url}")
        raise ResourceLoadError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        logger.error(f"Request timeout for URL: {url}")
        raise ResourceLoadError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        logger.error(f"Connection error for URL {url}: {e}")
        raise ResourceLoadError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"HTTP error {e.response.status_code} for URL: {url}")
        raise ResourceLoadError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}", exc_info=True)
        raise ResourceLoadError(f"Request error for URL {url}: {e}") from e

    logger.info(f"Successfully loaded resource from {url}")
    return response.text.splitlines()


def load_lines(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> list[str] | None:
    """Load a line-oriented resource from either a file or URL.

    Args:
        file_path: Path to local file (mutually exclusive with url).
        url: URL to fetch from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Lines of the resource, or None if the local file is absent.

    Raises:
        ResourceLoadError: If both sources are given, or loading fails.
    """
    if file_path and url:
        logger.error("Both file_path and url provided")
        raise ResourceLoadError("Cannot specify both file_path and url")

    if url:
        return load_lines_from_url(url, timeout)
    if file_path:
        return load_lines_from_file(file_path)
    return None
