"""Encrypted key metadata codec."""

from .codec import EncryptedRepositoryMetadata, deserialize, serialize
from .schema import METADATA_VERSION, EncryptionKeyMetadata

__all__ = [
    "EncryptedRepositoryMetadata",
    "EncryptionKeyMetadata",
    "METADATA_VERSION",
    "deserialize",
    "serialize",
]
