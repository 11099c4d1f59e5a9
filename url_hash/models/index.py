"""Persisted URL index data structures."""

from __future__ import annotations

from pydantic import BaseModel, Field


class IndexSnapshot(BaseModel):
    # FullHash text form -> canonical URL
    entries: dict[str, str] = Field(default_factory=dict)
    last_updated: str = ""
