"""Persistence codec for FeedStore.

The on-disk form is one JSON object mapping each canonical URL to the full
XML text of its feed, exactly as ``Channel.to_xml()`` produces it. Loading
runs every document back through the same parser used for live fetches.
"""

import json
import os
import stat
import tempfile
from pathlib import Path

from feedstore.feeds.fetcher import FeedFetcher
from feedstore.feeds.parser import parse_channel
from feedstore.store.store import FeedStore
from feedstore.utils.errors import (
    CorruptDatabaseError,
    CorruptEntryError,
    FeedParseError,
    StorageError,
)


def dumps(store: FeedStore) -> str:
    """Serialize a store to JSON text."""
    documents = {url: channel.to_xml() for url, channel in store.items()}
    return json.dumps(documents, sort_keys=True, ensure_ascii=False)


def loads(text: str, fetcher: FeedFetcher | None = None) -> FeedStore:
    """Rebuild a store from JSON text.

    Args:
        text: Output of ``dumps``
        fetcher: Fetcher to attach to the rebuilt store

    Returns:
        FeedStore holding every persisted channel

    Raises:
        CorruptDatabaseError: If the text is not a JSON object of strings
        CorruptEntryError: If a stored document fails to parse; ``url``
            names the offending key
    """
    try:
        documents = json.loads(text)
    except json.JSONDecodeError as e:
        raise CorruptDatabaseError(f"Feed database is not valid JSON: {e}") from e

    if not isinstance(documents, dict):
        raise CorruptDatabaseError(
            f"Feed database must be a JSON object, got {type(documents).__name__}"
        )

    channels = {}
    for url, document in documents.items():
        if not url:
            raise CorruptEntryError(url, "feed URL must be a non-empty string")
        if not isinstance(document, str):
            raise CorruptEntryError(url, f"expected document text, got {type(document).__name__}")
        try:
            channels[url] = parse_channel(document)
        except FeedParseError as e:
            raise CorruptEntryError(url, str(e)) from e

    return FeedStore(fetcher=fetcher, channels=channels)


def load(path: Path | str, fetcher: FeedFetcher | None = None) -> FeedStore:
    """Load a store from a file.

    Raises:
        StorageError: If the file cannot be read (or is corrupt, via the
            CorruptDatabaseError/CorruptEntryError subclasses)
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise StorageError(f"Cannot read feed database {path}: {e}") from e
    return loads(text, fetcher=fetcher)


def save(path: Path | str, store: FeedStore) -> None:
    """Write a store to a file, replacing any existing content.

    The data goes to a temp file in the same directory first and is then
    renamed over the target, so a failed write leaves the old file intact.
    An existing file keeps its permission bits.

    Raises:
        StorageError: If the file cannot be written
    """
    path = Path(path)
    text = dumps(store)

    try:
        fd, temp_path = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    except OSError as e:
        raise StorageError(f"Cannot write feed database {path}: {e}") from e

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.chmod(temp_path, _file_mode(path))
        os.replace(temp_path, path)
    except OSError as e:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise StorageError(f"Cannot write feed database {path}: {e}") from e


def _file_mode(path: Path) -> int:
    """Permission bits for the saved file: the existing file's, else umask-based."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask
