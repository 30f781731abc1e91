#!/usr/bin/env python3
"""
Notification Source Loader

Reads the notification export from a local file or downloads it over HTTP(S).
"""

import logging
from pathlib import Path

import httpx

from ..core.errors import SourceError

logger = logging.getLogger(__name__)


def is_remote_source(source: str) -> bool:
    """Sources starting with "http" are downloaded, everything else is a local path."""
    return source.startswith("http")


def fetch_source(source: str, timeout: float = 30.0, client: httpx.Client | None = None) -> str:
    """
    Return the full text of the notification source.

    Args:
        source: Local path or http(s) URL
        timeout: HTTP timeout in seconds
        client: Optional client to issue the GET with (a new one is used otherwise)

    Returns:
        Source text

    Raises:
        SourceError: If the file cannot be read or the download fails
    """
    if is_remote_source(source):
        logger.info("Downloading notification records from %s", source)
        try:
            if client is not None:
                response = client.get(source, timeout=timeout)
            else:
                response = httpx.get(source, timeout=timeout, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise SourceError(f"Error downloading file: {e}", context={"source": source}) from e
        return response.text

    path = Path(source).expanduser()
    logger.info("Reading notification records from %s", path)
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceError(f"Error reading file: {e}", context={"source": str(path)}) from e


def load_notification_lines(
    source: str, timeout: float = 30.0, client: httpx.Client | None = None
) -> list[str]:
    """
    Load the non-empty lines of the notification source, newest first.

    The export appends new records at the end, so the lines are reversed.

    Raises:
        SourceError: If the source cannot be read
    """
    content = fetch_source(source, timeout=timeout, client=client)
    lines = [line.rstrip("\r") for line in content.split("\n")]
    lines.reverse()
    return [line for line in lines if line.strip()]
