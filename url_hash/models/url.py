"""Decomposed URL produced by the parser."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ParsedUrl(BaseModel):
    """A URL split into its components.

    ``None`` marks an absent component, while an empty string marks one that is
    present but empty (``http://a/?`` keeps its ``?``). ``host`` is ``None``
    only for URLs without an authority, such as ``urn:isbn:0451450523``.
    """

    model_config = ConfigDict(frozen=True)

    scheme: str
    userinfo: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = Field(default=None, ge=0, le=65535)
    path: str = ""
    query: Optional[str] = None
    fragment: Optional[str] = None

    @property
    def has_authority(self) -> bool:
        return self.host is not None
