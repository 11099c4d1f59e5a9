"""Configuration models for URL canonicalization."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Optional

from pydantic import BaseModel, Field, field_validator

# Well-known default ports, elided from the canonical form.
DEFAULT_PORTS: dict[str, int] = {
    "http": 80,
    "https": 443,
    "ws": 80,
    "wss": 443,
    "ftp": 21,
}


Port = Annotated[int, Field(ge=0, le=65535)]


class HashConfig(BaseModel):
    # Extra scheme -> port entries, merged over DEFAULT_PORTS
    default_ports: dict[str, Port] = Field(default_factory=dict)

    @field_validator("default_ports")
    @classmethod
    def lowercase_schemes(cls, v: dict[str, int]) -> dict[str, int]:
        return {scheme.lower(): port for scheme, port in v.items()}

    def default_port(self, scheme: str) -> Optional[int]:
        """Return the default port for a scheme, or None when it has none."""
        scheme = scheme.lower()
        if scheme in self.default_ports:
            return self.default_ports[scheme]
        return DEFAULT_PORTS.get(scheme)

    @classmethod
    def load(cls, path: str | Path) -> "HashConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)
