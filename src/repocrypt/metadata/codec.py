"""Versioned, provider-wrapped metadata for repository data keys.

A repository keeps its data-encryption key next to the data, but only in
wrapped form. The blob written here is a small JSON document::

    {"key": "<base64 of wrapped key>", "version": 1}

Exactly one version is readable. A blob carrying any other version, or no
version at all, is rejected outright; there is no migration path.
"""
from __future__ import annotations

import structlog

from ..exceptions import (
    InvalidKeyError,
    KeyUnwrapError,
    KeyWrapError,
    UnsupportedMetadataVersionError,
)
from ..keys import DEFAULT_ALGORITHM, SecretKey
from ..security.provider import KeyWrapProvider
from .schema import METADATA_VERSION, EncryptionKeyMetadata

logger = structlog.get_logger(__name__)


class EncryptedRepositoryMetadata:
    """Serialize data keys through a key-wrap provider and back.

    Instances hold no mutable state and may be shared between threads. Key
    material is never logged and never placed in exception messages.
    """

    VERSION = METADATA_VERSION

    def __init__(self, provider: KeyWrapProvider, *, algorithm: str = DEFAULT_ALGORITHM) -> None:
        self._provider = provider
        self._algorithm = algorithm

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def serialize(self, key: SecretKey) -> bytes:
        if not isinstance(key, SecretKey) or not key.material:
            raise InvalidKeyError("Encryption key must carry non-empty key material")
        if key.algorithm != self._algorithm:
            raise InvalidKeyError(
                f"Expected a {self._algorithm} key, got {key.algorithm}"
            )

        try:
            wrapped = self._provider.wrap(key.material)
        except Exception as exc:
            raise KeyWrapError(f"Key wrapping failed: {type(exc).__name__}") from exc
        if not isinstance(wrapped, (bytes, bytearray)) or not wrapped:
            raise KeyWrapError("Key wrapping returned no ciphertext")

        payload = EncryptionKeyMetadata.for_wrapped_key(bytes(wrapped)).to_bytes()
        logger.debug("metadata.serialized", version=self.VERSION, wrapped_len=len(wrapped))
        return payload

    def deserialize(self, data: bytes) -> SecretKey:
        metadata = EncryptionKeyMetadata.from_bytes(data)
        if not metadata.has_supported_version():
            logger.warning(
                "metadata.unsupported_version",
                expected=self.VERSION,
                found=repr(metadata.version),
            )
            raise UnsupportedMetadataVersionError(self.VERSION, metadata.version)

        wrapped = metadata.wrapped_key
        try:
            material = self._provider.unwrap(wrapped)
        except Exception as exc:
            raise KeyUnwrapError(f"Key unwrapping failed: {type(exc).__name__}") from exc
        if not isinstance(material, (bytes, bytearray)) or not material:
            raise KeyUnwrapError("Key unwrapping returned no key material")

        logger.debug("metadata.deserialized", version=self.VERSION, key_len=len(material))
        return SecretKey(material=bytes(material), algorithm=self._algorithm)


def serialize(key: SecretKey, provider: KeyWrapProvider, *, algorithm: str = DEFAULT_ALGORITHM) -> bytes:
    return EncryptedRepositoryMetadata(provider, algorithm=algorithm).serialize(key)


def deserialize(data: bytes, provider: KeyWrapProvider, *, algorithm: str = DEFAULT_ALGORITHM) -> SecretKey:
    return EncryptedRepositoryMetadata(provider, algorithm=algorithm).deserialize(data)


__all__ = ["EncryptedRepositoryMetadata", "serialize", "deserialize"]
