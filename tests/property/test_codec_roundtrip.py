import base64
import json

from hypothesis import given, strategies as st

from repocrypt.exceptions import KeyWrapError, UnsupportedMetadataVersionError
from repocrypt.keys import SecretKey
from repocrypt.metadata import EncryptedRepositoryMetadata


class _PadProvider:
    def __init__(self, pad: bytes) -> None:
        self._pad = pad

    def _xor(self, data: bytes) -> bytes:
        return bytes(b ^ self._pad[i % len(self._pad)] for i, b in enumerate(data))

    def wrap(self, raw_key: bytes) -> bytes:
        return self._xor(raw_key)

    def unwrap(self, ciphertext: bytes) -> bytes:
        return self._xor(ciphertext)


class _LeakyProvider:
    def wrap(self, raw_key: bytes) -> bytes:
        raise ValueError(f"cannot wrap {raw_key!r} {base64.b64encode(raw_key)!r}")

    def unwrap(self, ciphertext: bytes) -> bytes:
        raise ValueError(f"cannot unwrap {ciphertext!r}")


@given(
    st.binary(min_size=1, max_size=64),
    st.binary(min_size=1, max_size=32),
    st.sampled_from(["AES", "ChaCha20", "HmacSHA256"]),
)
def test_round_trip_law(material: bytes, pad: bytes, algorithm: str) -> None:
    codec = EncryptedRepositoryMetadata(_PadProvider(pad), algorithm=algorithm)
    key = SecretKey(material=material, algorithm=algorithm)
    assert codec.deserialize(codec.serialize(key)) == key


@given(st.integers().filter(lambda value: value != 1))
def test_only_version_one_is_accepted(version: int) -> None:
    blob = json.dumps({"key": "AAAA", "version": version}).encode("utf-8")
    codec = EncryptedRepositoryMetadata(_PadProvider(b"\x01"))
    try:
        codec.deserialize(blob)
    except UnsupportedMetadataVersionError as exc:
        assert exc.found == version
    else:
        raise AssertionError("unsupported version was accepted")


@given(st.binary(min_size=8, max_size=64))
def test_wrap_errors_do_not_echo_key(material: bytes) -> None:
    codec = EncryptedRepositoryMetadata(_LeakyProvider())
    try:
        codec.serialize(SecretKey(material=material))
    except KeyWrapError as exc:
        message = str(exc)
        assert repr(material) not in message
        assert base64.b64encode(material).decode("ascii") not in message
    else:
        raise AssertionError("wrap failure was swallowed")
