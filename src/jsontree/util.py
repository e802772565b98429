import gzip
import json
import logging
import sys
import zlib
from pathlib import Path
from typing import Any

import httpx

logger = logging.getLogger("jsontree")

GZIP_MAGIC = b"\x1f\x8b"


class InputError(Exception):
    """The input could not be read or fetched."""


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def fetch(client: httpx.Client, url: str) -> bytes:
    """Download `url`. Any transport error or non-2xx status is an `InputError`."""
    try:
        response = client.get(url)
        response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise InputError(f"{url}: {e}") from e

    logger.debug("Fetched %d bytes from %s", len(response.content), url)
    return response.content


def read_bytes(source: str, timeout: float = 30.0) -> bytes:
    """Read raw input from `source`: '-' for stdin, an http(s) URL, or a file path."""
    logger.debug("Reading %s", "stdin" if source == "-" else source)

    if source == "-":
        return sys.stdin.buffer.read()

    if is_url(source):
        with httpx.Client(timeout=timeout, follow_redirects=True) as client:
            return fetch(client, source)

    try:
        raw = Path(source).read_bytes()
    except OSError as e:
        raise InputError(f"{source}: {e.strerror or e}") from e
    except ValueError as e:
        # e.g. embedded null byte
        raise InputError(f"{source!r}: {e}") from e

    logger.debug("Read %d bytes from %s", len(raw), source)
    return raw


def decode(raw: bytes) -> Any:
    """Decode JSON from `raw`, which may be gzipped regardless of the file name.

    Raises `ValueError` (e.g. `json.JSONDecodeError`) if the data isn't valid JSON.
    """
    if raw.startswith(GZIP_MAGIC):
        logger.debug("Input is gzipped")
        try:
            raw = gzip.decompress(raw)
        except (OSError, EOFError, zlib.error) as e:
            raise ValueError(f"invalid gzip data: {e}") from e

    return json.loads(raw)


def load(source: str, timeout: float = 30.0) -> Any:
    return decode(read_bytes(source, timeout))


def select(data: Any, path: str) -> Any:
    """Follow a dotted key path like 'data.attributes'. None if any key is missing."""
    for part in path.split("."):
        if not isinstance(data, dict) or part not in data:
            return None
        data = data[part]
    return data
