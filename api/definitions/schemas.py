"""
Pydantic schemas for dictionary entries.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class DictionaryEntry(BaseModel):
    word: str = Field(..., min_length=1, pattern=r"^[A-Za-z]+$")
    definition: str = Field(..., min_length=1)
