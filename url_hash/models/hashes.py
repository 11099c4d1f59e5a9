"""Hash value hierarchy: full, short and very-short URL hashes.

A ``FullHash`` holds the 256-bit SHA-256 digest of a canonical URL as four
unsigned 64-bit words, each read from 8 consecutive digest bytes in
little-endian order. ``ShortHash`` keeps the first two words and
``VeryShortHash`` only the first, trading collision resistance for space.
A shorter value is only meaningful as a prefix of a longer one built from the
same digest.

Values support equality and hashing but no ordering.
"""

from __future__ import annotations

from typing import Annotated, ClassVar

from pydantic import BaseModel, ConfigDict, Field

WORD_BYTES = 8
MAX_WORD = 2**64 - 1

Word = Annotated[int, Field(ge=0, le=MAX_WORD)]


def _unpack(data: bytes, count: int) -> tuple[int, ...]:
    return tuple(
        int.from_bytes(data[i * WORD_BYTES:(i + 1) * WORD_BYTES], "little")
        for i in range(count)
    )


class _HashValue(BaseModel):
    model_config = ConfigDict(frozen=True)

    WORD_COUNT: ClassVar[int] = 0

    words: tuple[Word, ...]

    def __str__(self) -> str:
        return "-".join(str(w) for w in self.words)

    def to_bytes(self) -> bytes:
        """Return the raw little-endian binary form."""
        return b"".join(w.to_bytes(WORD_BYTES, "little") for w in self.words)

    @classmethod
    def from_bytes(cls, data: bytes):
        """Build a value from its raw binary form."""
        size = cls.WORD_COUNT * WORD_BYTES
        if len(data) != size:
            raise ValueError(
                f"{cls.__name__} needs exactly {size} bytes, got {len(data)}"
            )
        return cls(words=_unpack(data, cls.WORD_COUNT))

    @classmethod
    def parse(cls, text: str):
        """Parse the dash-separated decimal text form produced by ``str()``."""
        parts = text.strip().split("-")
        if len(parts) != cls.WORD_COUNT:
            raise ValueError(
                f"{cls.__name__} needs {cls.WORD_COUNT} words, got {len(parts)}: {text!r}"
            )
        words = []
        for part in parts:
            if not (part.isascii() and part.isdigit()):
                raise ValueError(f"Invalid hash word {part!r} in {text!r}")
            word = int(part)
            if word > MAX_WORD:
                raise ValueError(f"Hash word {part} exceeds 64 bits")
            words.append(word)
        return cls(words=tuple(words))


class VeryShortHash(_HashValue):
    """The first 64-bit word of a URL hash."""

    WORD_COUNT: ClassVar[int] = 1

    words: tuple[Word]

    @property
    def value(self) -> int:
        return self.words[0]


class ShortHash(_HashValue):
    """The first two 64-bit words of a URL hash."""

    WORD_COUNT: ClassVar[int] = 2

    words: tuple[Word, Word]

    def very_short(self) -> VeryShortHash:
        return VeryShortHash(words=self.words[:1])

    def starts_with(self, very_short_hash: VeryShortHash) -> bool:
        """Does this hash start with the value in the very-short hash?"""
        return self.words[0] == very_short_hash.words[0]


class FullHash(_HashValue):
    """A stable SHA-256 hash of a canonical URL."""

    WORD_COUNT: ClassVar[int] = 4

    words: tuple[Word, Word, Word, Word]

    @classmethod
    def from_digest(cls, digest: bytes) -> "FullHash":
        """Pack the leading 256 bits of a SHA-2 digest."""
        size = cls.WORD_COUNT * WORD_BYTES
        if len(digest) < size:
            raise ValueError(f"Digest too short: {len(digest)} bytes, need {size}")
        return cls(words=_unpack(digest, cls.WORD_COUNT))

    def short(self) -> ShortHash:
        return ShortHash(words=self.words[:2])

    def very_short(self) -> VeryShortHash:
        return VeryShortHash(words=self.words[:1])

    def starts_with(self, short_hash: ShortHash) -> bool:
        """Does this hash start with the two values in the short hash?"""
        return self.words[:2] == short_hash.words

    def starts_with_just(self, very_short_hash: VeryShortHash) -> bool:
        """Does this hash start with the value in the very-short hash?"""
        return self.words[0] == very_short_hash.words[0]
