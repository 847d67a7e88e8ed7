"""Focus session history kept in a Markdown log document."""

from __future__ import annotations

import threading
from collections.abc import Callable
from pathlib import Path

from pomolog_cli.utils.logger import get_logger

from .document import DEFAULT_TITLE, LogDocument, new_document_text, parse_document
from .state import LogEntry
from .storage import DocumentStore, FileDocumentStore

ENCODING = "utf-8"

_write_locks: dict[str, threading.RLock] = {}
_write_locks_guard = threading.Lock()


def _lock_for(key: str) -> threading.RLock:
    """One lock per underlying document, shared by every store pointing at it."""
    with _write_locks_guard:
        lock = _write_locks.get(key)
        if lock is None:
            lock = _write_locks[key] = threading.RLock()
        return lock


class SessionLogStore:
    """Appends session entries to the log document and reads them back."""

    def __init__(
        self,
        store: DocumentStore | Path | str,
        title: str = DEFAULT_TITLE,
        error_sink: Callable[[Exception], None] | None = None,
    ):
        """
        Initialize the log store.

        Args:
            store: Document store, or a filesystem path to wrap in one
            title: Title line written when the document is first created
            error_sink: Receives read failures swallowed by ``get_all_tags``;
                defaults to the application log
        """
        if not isinstance(store, DocumentStore):
            store = FileDocumentStore(store)
        self.store = store
        self.title = title
        self.logger = get_logger("history")
        self.error_sink = error_sink or self._log_error
        self._lock = _lock_for(store.key)

    def _log_error(self, error: Exception) -> None:
        self.logger.error("could not read tags from %r: %s", self.store, error)

    def _load_text(self) -> str:
        """Current document text, creating the document on first use."""
        # The existence check and create must not interleave with append.
        with self._lock:
            if not self.store.exists():
                text = new_document_text(self.title)
                self.store.create(text.encode(ENCODING))
                self.logger.info("created log document %r", self.store)
                return text
        return self.store.read().decode(ENCODING)

    def load(self) -> LogDocument:
        """Parse the current document."""
        return parse_document(self._load_text())

    def append(self, entry: LogEntry) -> None:
        """
        File *entry* under its start date and persist the whole document.

        A new day's section goes above every existing section; an existing
        day gets the row at the end of its table.
        """
        with self._lock:
            doc = self.load()
            doc.insert_entry(entry)
            self.store.write(doc.render().encode(ENCODING))

        self.logger.info(
            "logged %s min for %r on %s",
            entry.duration_minutes,
            entry.tag,
            entry.date.isoformat(),
        )

    def get_all_entries(self) -> list[LogEntry]:
        """Every parseable entry, in document order."""
        return self.load().entries

    def get_all_tags(self) -> set[str]:
        """Distinct tags used so far; an empty set if the log can't be read."""
        try:
            entries = self.get_all_entries()
        except (OSError, UnicodeDecodeError) as e:
            self.error_sink(e)
            return set()
        return {entry.tag for entry in entries}

    def get_recent_entries(self, limit: int = 20) -> list[LogEntry]:
        """Most recent entries first, ordered by start time."""
        entries = sorted(
            self.get_all_entries(), key=lambda e: e.start_timestamp, reverse=True
        )
        return entries[:limit]
