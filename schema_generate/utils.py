"""Utility functions for loading model documents.

Model documents are JSON objects read from a local file, a URL or an open
stream, with errors reported as ``DocumentLoadError``.
"""

import json
from pathlib import Path
from typing import Any, TextIO
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)


class DocumentLoadError(Exception):
    """Raised when a model document cannot be read or parsed."""

    pass


def _require_object(data: Any, source: str) -> dict[str, Any]:
    if not isinstance(data, dict):
        logger.error(f"Model document from {source} is not a JSON object")
        raise DocumentLoadError(f"Model document must be a JSON object: {source}")
    return data


def load_document_from_file(file_path: str | Path) -> tuple[str, dict[str, Any]]:
    """Load a model document from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, parsed document).

    Raises:
        FileNotFoundError: If file doesn't exist.
        DocumentLoadError: If file cannot be read or JSON is invalid.
    """
    file_path = Path(file_path)
    logger.debug(f"Loading model document from file: {file_path}")

    if not file_path.exists():
        logger.error(f"File not found: {file_path}")
        raise FileNotFoundError(f"File not found: {file_path}")

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {file_path}: {e}")
        raise DocumentLoadError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error(f"Error reading file {file_path}: {e}")
        raise DocumentLoadError(f"Error reading file {file_path}: {e}") from e

    logger.info(f"Loaded model document from {file_path}")
    return str(file_path), _require_object(data, str(file_path))


def load_document_from_url(url: str, timeout: int = 30) -> tuple[str, dict[str, Any]]:
    """Load a model document from a URL.

    Args:
        url: URL to fetch the document from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed document).

    Raises:
        DocumentLoadError: If URL is invalid, request fails, or response isn't valid JSON.
    """
    logger.debug(f"Loading model document from URL: {url}")

    parsed_url = urlparse(url)
    if not all([parsed_url.scheme, parsed_url.netloc]):
        logger.error(f"Invalid URL format: {url}")
        raise DocumentLoadError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except requests.exceptions.Timeout as e:
        logger.error(f"Request timeout for URL: {url}")
        raise DocumentLoadError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        logger.error(f"HTTP error {e.response.status_code} for URL: {url}")
        raise DocumentLoadError(
            f"HTTP error {e.response.status_code} for URL: {url}"
        ) from e
    except requests.exceptions.RequestException as e:
        logger.error(f"Request error for URL {url}: {e}")
        raise DocumentLoadError(f"Request error for URL {url}: {e}") from e
    except ValueError as e:
        # requests raises a ValueError subclass for undecodable bodies
        logger.error(f"Invalid JSON response from URL {url}: {e}")
        raise DocumentLoadError(f"Invalid JSON response from URL {url}: {e}") from e

    logger.info(f"Loaded model document from {url}")
    return url, _require_object(data, url)


def load_document_from_stream(stream: TextIO, name: str = "<stdin>") -> tuple[str, dict[str, Any]]:
    """Load a model document from an open text stream."""
    try:
        data = json.load(stream)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {name}: {e}")
        raise DocumentLoadError(f"Invalid JSON in {name}: {e}") from e
    return name, _require_object(data, name)


def load_document(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = 30,
) -> tuple[str, dict[str, Any]]:
    """Load a model document from either a file or URL.

    Args:
        file_path: Path to local JSON file (mutually exclusive with url).
        url: URL to fetch JSON from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, parsed document).

    Raises:
        DocumentLoadError: If neither or both parameters are provided, or loading fails.
        FileNotFoundError: If file doesn't exist.
    """
    if not file_path and not url:
        raise DocumentLoadError("Either file_path or url must be provided")

    if file_path and url:
        raise DocumentLoadError("Cannot specify both file_path and url")

    if file_path:
        return load_document_from_file(file_path)
    return load_document_from_url(url, timeout)
