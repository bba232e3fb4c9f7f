# Flagtree CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `HashType`, the hash algorithms selectable through
`Flag.hash_type_flag()`.

Example:
    HashType("sha256")  → HashType.SHA256
    HashType("SHA1")    → HashType.SHA1 (case-insensitive)
    parse_hash_type("crc32") → None
"""
from __future__ import annotations

import hashlib
from enum import Enum
from pathlib import Path


class HashType(Enum):
    """Hash algorithms accepted on the command line."""

    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA512 = "sha512"

    @classmethod
    def names(cls) -> list[str]:
        """Return the accepted spellings, in declaration order."""
        return [member.value for member in cls]

    @classmethod
    def _missing_(cls, value: object) -> HashType:
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        valid = ", ".join(cls.names())
        raise ValueError(f"Invalid {cls.__name__}: {value!r}. Must be one of: {valid}")

    def new(self) -> "hashlib._Hash":
        return hashlib.new(self.value)

    def __str__(self) -> str:
        return self.value


def parse_hash_type(value: str) -> HashType | None:
    """Return the matching `HashType`, or None if `value` names no known algorithm."""
    try:
        return HashType(value)
    except ValueError:
        return None


def hash_file(path: Path | str, hash_type: HashType, chunk_size: int = 65536) -> str:
    """Return the hexadecimal digest of a file."""
    digest = hash_type.new()
    with Path(path).open("rb") as stream:
        for chunk in iter(lambda: stream.read(chunk_size), b""):
            digest.update(chunk)
    return digest.hexdigest()
