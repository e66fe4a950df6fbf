"""
Dictionary business logic.

Handlers pass in the store and the request number; errors are raised as
HTTPException and rendered as `{"error": ...}` by `core.http`.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, status

from . import validators
from .repository import DefinitionStore
from .schemas import DictionaryEntry

logger = logging.getLogger(__name__)


def list_entries(store: DefinitionStore, *, request_number: int) -> dict:
    entries = store.list_all()
    return {
        "message": f"Request #{request_number}: All entries retrieved!",
        "data": [entry.model_dump() for entry in entries],
        "totalEntries": len(entries),
    }


def get_entry(store: DefinitionStore, word: str, *, request_number: int) -> dict:
    entry = store.find_by_word(word)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Word not found!")
    return {
        "message": f"Request #{request_number}: Entry retrieved!",
        "data": entry.model_dump(),
        "totalEntries": store.count(),
    }


def parse_new_entry(payload: Any) -> DictionaryEntry:
    """
    Validate a decoded POST body in order: presence, word, definition.
    """
    fields = payload if isinstance(payload, dict) else {}
    word = fields.get("word")
    definition = fields.get("definition")

    if not word or not definition:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Both 'word' and 'definition' are required",
        )
    if not validators.is_valid_word(word):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="'word' must be a non-empty string with letters only",
        )
    if not validators.is_valid_definition(definition):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="'definition' must be a non-empty string",
        )
    return DictionaryEntry(word=word, definition=definition)


def create_entry(store: DefinitionStore, payload: Any, *, request_number: int) -> dict:
    entry = parse_new_entry(payload)

    inserted, total = store.insert_if_absent(entry)
    if not inserted:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"{entry.word} already exists",
        )

    logger.info("entry_created word=%s total=%s", entry.word, total)
    return {
        "message": f"Request #{request_number}: New entry recorded!",
        "data": entry.model_dump(),
        "totalEntries": total,
    }
