"""
In-memory dictionary storage.

One `DefinitionStore` belongs to one application instance (`app.state`).
Nothing is persisted across restarts.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable

from .schemas import DictionaryEntry


SEED_ENTRIES: tuple[tuple[str, str], ...] = (
    ("apple", "A fruit that grows on trees."),
    ("banana", "A long yellow fruit."),
    ("cat", "A small domesticated carnivorous mammal."),
)


def seed_entries() -> list[DictionaryEntry]:
    return [DictionaryEntry(word=word, definition=definition) for word, definition in SEED_ENTRIES]


class DefinitionStore:
    """
    Ordered word/definition entries, unique by case-insensitive word.
    """

    def __init__(self, entries: Iterable[DictionaryEntry] | None = None) -> None:
        self._entries: list[DictionaryEntry] = []
        self._lock = threading.Lock()
        for entry in entries if entries is not None else seed_entries():
            self.insert(entry)

    def list_all(self) -> list[DictionaryEntry]:
        with self._lock:
            return list(self._entries)

    def count(self) -> int:
        with self._lock:
            return len(self._entries)

    def find_by_word(self, word: str) -> DictionaryEntry | None:
        with self._lock:
            return self._find_unlocked(word)

    def insert(self, entry: DictionaryEntry) -> None:
        """
        Append without checking for duplicates; the caller has validated.
        """
        with self._lock:
            self._entries.append(entry)

    def insert_if_absent(self, entry: DictionaryEntry) -> tuple[bool, int]:
        """
        Check-and-append as one step. Returns (inserted, total entries).
        """
        with self._lock:
            if self._find_unlocked(entry.word) is not None:
                return False, len(self._entries)
            self._entries.append(entry)
            return True, len(self._entries)

    def _find_unlocked(self, word: str) -> DictionaryEntry | None:
        key = word.lower()
        for entry in self._entries:
            if entry.word.lower() == key:
                return entry
        return None
