"""Wrapped data-key metadata for encrypted storage repositories."""

from .exceptions import (
    KeyUnwrapError,
    KeyWrapError,
    MalformedMetadataError,
    RepoCryptError,
    UnsupportedMetadataVersionError,
)
from .keys import SecretKey, generate_data_key
from .metadata import EncryptedRepositoryMetadata, deserialize, serialize
from .security import KeyWrapProvider

__version__ = "0.1.0"

__all__ = [
    "EncryptedRepositoryMetadata",
    "KeyUnwrapError",
    "KeyWrapError",
    "KeyWrapProvider",
    "MalformedMetadataError",
    "RepoCryptError",
    "SecretKey",
    "UnsupportedMetadataVersionError",
    "deserialize",
    "generate_data_key",
    "serialize",
]
