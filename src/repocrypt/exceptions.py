"""Central exception hierarchy"""
from __future__ import annotations


class RepoCryptError(Exception):
    """Base exception for all failures"""


class MetadataError(RepoCryptError):
    """Raised when encrypted key metadata cannot be produced or accepted"""


class MalformedMetadataError(MetadataError):
    """Raised when a metadata blob cannot be parsed into the expected record"""


class UnsupportedMetadataVersionError(MetadataError):
    """Raised when a parsed metadata record carries a version we do not read"""

    def __init__(self, expected: int, found: object) -> None:
        self.expected = expected
        self.found = found
        super().__init__(
            f"Unsupported metadata version: expected {expected}, found {found!r}"
        )


class MetadataEncodingError(MetadataError):
    """Raised when the metadata record cannot be encoded to bytes"""


class InvalidKeyError(RepoCryptError):
    """Raised when a raw key is unusable for wrapping"""


class KeyWrapError(RepoCryptError):
    """Raised when the key-wrap provider fails to wrap a key"""


class KeyUnwrapError(RepoCryptError):
    """Raised when the key-wrap provider fails to unwrap a key"""


class ProviderConfigurationError(RepoCryptError):
    """Raised when a key-wrap provider cannot be built from its key material"""


class SettingsError(RepoCryptError):
    """Raised when repository settings are missing or invalid"""


__all__ = [
    "RepoCryptError",
    "MetadataError",
    "MalformedMetadataError",
    "UnsupportedMetadataVersionError",
    "MetadataEncodingError",
    "InvalidKeyError",
    "KeyWrapError",
    "KeyUnwrapError",
    "ProviderConfigurationError",
    "SettingsError",
]
