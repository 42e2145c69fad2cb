"""Symmetric data keys handed to and returned by the metadata codec."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Final

AES256_KEY_SIZE: Final[int] = 32
DEFAULT_ALGORITHM: Final[str] = "AES"
_VALID_AES_SIZES: Final[tuple[int, ...]] = (16, 24, 32)


@dataclass(frozen=True, slots=True)
class SecretKey:
    """Raw key material plus the algorithm it is meant for.

    The material is excluded from ``repr`` so keys never end up in logs or
    tracebacks by accident.
    """

    material: bytes = field(repr=False)
    algorithm: str = DEFAULT_ALGORITHM

    def __len__(self) -> int:
        return len(self.material)


def generate_data_key(size: int = AES256_KEY_SIZE) -> SecretKey:
    if size not in _VALID_AES_SIZES:
        raise ValueError(f"AES key size must be one of {_VALID_AES_SIZES}")
    return SecretKey(material=os.urandom(size))


__all__ = ["AES256_KEY_SIZE", "DEFAULT_ALGORITHM", "SecretKey", "generate_data_key"]
