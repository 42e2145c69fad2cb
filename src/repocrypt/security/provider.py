"""Key-wrap provider contract consumed by the metadata codec."""
from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyWrapProvider(Protocol):
    """A capability that encrypts and decrypts raw data keys.

    Implementations may be backed by a local key pair, a KMS or an HSM. The
    codec calls them synchronously and imposes no locking, so a provider that
    needs serialized access must arrange it itself. ``unwrap`` must reject
    ciphertext not produced by the paired ``wrap``.
    """

    def wrap(self, raw_key: bytes) -> bytes:
        """Encrypt ``raw_key`` and return opaque ciphertext"""
        ...

    def unwrap(self, ciphertext: bytes) -> bytes:
        """Recover the raw key from ciphertext produced by :meth:`wrap`"""
        ...


__all__ = ["KeyWrapProvider"]
