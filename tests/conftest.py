from __future__ import annotations

import pytest

PAD = bytes(range(1, 33))


class XorProvider:
    """Test double that wraps by XOR with a provider-held pad"""

    def __init__(self, pad: bytes = PAD) -> None:
        self.pad = pad
        self.wrapped: list[bytes] = []
        self.unwrapped: list[bytes] = []

    def _xor(self, data: bytes) -> bytes:
        return bytes(b ^ self.pad[i % len(self.pad)] for i, b in enumerate(data))

    def wrap(self, raw_key: bytes) -> bytes:
        self.wrapped.append(raw_key)
        return self._xor(raw_key)

    def unwrap(self, ciphertext: bytes) -> bytes:
        self.unwrapped.append(ciphertext)
        return self._xor(ciphertext)


class FailingProvider:
    def __init__(self, exc: Exception) -> None:
        self.exc = exc

    def wrap(self, raw_key: bytes) -> bytes:
        raise self.exc

    def unwrap(self, ciphertext: bytes) -> bytes:
        raise self.exc


@pytest.fixture()
def xor_provider() -> XorProvider:
    return XorProvider()


@pytest.fixture()
def failing_provider_factory():
    return FailingProvider
