"""RFC 3394 AES key wrapping under a locally held key-encryption key."""
from __future__ import annotations

from cryptography.hazmat.primitives.keywrap import aes_key_unwrap, aes_key_wrap

from ..exceptions import ProviderConfigurationError

_VALID_KEK_SIZES = (16, 24, 32)


class AesKeyWrapProvider:
    """Wraps data keys with AES-KW; the KEK never leaves this object"""

    def __init__(self, kek: bytes) -> None:
        if len(kek) not in _VALID_KEK_SIZES:
            raise ProviderConfigurationError("AES key-encryption key must be 16, 24, or 32 bytes")
        self._kek = bytes(kek)

    def wrap(self, raw_key: bytes) -> bytes:
        return aes_key_wrap(self._kek, raw_key)

    def unwrap(self, ciphertext: bytes) -> bytes:
        return aes_key_unwrap(self._kek, ciphertext)


__all__ = ["AesKeyWrapProvider"]
