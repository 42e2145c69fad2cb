"""RSA-OAEP key wrapping backed by a local key pair."""
from __future__ import annotations

from pathlib import Path
from typing import Final, Optional

from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding, rsa

from ..exceptions import ProviderConfigurationError

MIN_RSA_KEY_BITS: Final[int] = 2048
DEFAULT_RSA_KEY_BITS: Final[int] = 3072


def _oaep() -> padding.OAEP:
    return padding.OAEP(
        mgf=padding.MGF1(algorithm=hashes.SHA256()),
        algorithm=hashes.SHA256(),
        label=None,
    )


class RsaKeyWrapProvider:
    """RSA-OAEP (SHA-256) provider with strict key validation.

    Either half of the pair may be absent: a node that only writes metadata
    needs the public key, a node that restores needs the private key.
    """

    def __init__(
        self,
        public_key: Optional[rsa.RSAPublicKey] = None,
        private_key: Optional[rsa.RSAPrivateKey] = None,
    ) -> None:
        if public_key is None and private_key is not None:
            public_key = private_key.public_key()
        if public_key is None:
            raise ProviderConfigurationError("RSA provider needs a public or private key")
        self._validate_key_size(public_key.key_size, "Public")
        if private_key is not None:
            self._validate_key_size(private_key.key_size, "Private")
            if private_key.public_key().public_numbers() != public_key.public_numbers():
                raise ProviderConfigurationError("RSA public and private keys do not form a pair")
        self._public = public_key
        self._private = private_key

    @classmethod
    def generate(cls, bits: int = DEFAULT_RSA_KEY_BITS) -> "RsaKeyWrapProvider":
        if bits < MIN_RSA_KEY_BITS:
            raise ProviderConfigurationError(f"RSA keys must be at least {MIN_RSA_KEY_BITS} bits")
        private_key = rsa.generate_private_key(public_exponent=65537, key_size=bits)
        return cls(private_key=private_key)

    @classmethod
    def from_pem(
        cls,
        public_pem: Optional[bytes] = None,
        private_pem: Optional[bytes] = None,
        passphrase: Optional[bytes] = None,
    ) -> "RsaKeyWrapProvider":
        public_key = None
        private_key = None
        if public_pem is not None:
            try:
                public_key = serialization.load_pem_public_key(public_pem)
            except ValueError as exc:
                raise ProviderConfigurationError("Couldn't load RSA public key") from exc
            if not isinstance(public_key, rsa.RSAPublicKey):
                raise ProviderConfigurationError("Expected RSA public key")
        if private_pem is not None:
            try:
                private_key = serialization.load_pem_private_key(private_pem, password=passphrase)
            except (ValueError, TypeError) as exc:
                raise ProviderConfigurationError("Couldn't load RSA private key") from exc
            if not isinstance(private_key, rsa.RSAPrivateKey):
                raise ProviderConfigurationError("Expected RSA private key")
        return cls(public_key=public_key, private_key=private_key)

    @classmethod
    def from_files(
        cls,
        public_key_file: Optional[Path] = None,
        private_key_file: Optional[Path] = None,
        passphrase: Optional[bytes] = None,
    ) -> "RsaKeyWrapProvider":
        public_pem = Path(public_key_file).read_bytes() if public_key_file else None
        private_pem = Path(private_key_file).read_bytes() if private_key_file else None
        return cls.from_pem(public_pem, private_pem, passphrase)

    @property
    def can_unwrap(self) -> bool:
        return self._private is not None

    def wrap(self, raw_key: bytes) -> bytes:
        return self._public.encrypt(raw_key, _oaep())

    def unwrap(self, ciphertext: bytes) -> bytes:
        if self._private is None:
            raise ProviderConfigurationError("RSA private key is required to unwrap keys")
        return self._private.decrypt(ciphertext, _oaep())

    def public_pem(self) -> bytes:
        return self._public.public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )

    def private_pem(self, passphrase: Optional[bytes] = None) -> bytes:
        if self._private is None:
            raise ProviderConfigurationError("No RSA private key to export")
        if passphrase:
            encryption = serialization.BestAvailableEncryption(passphrase)
        else:
            encryption = serialization.NoEncryption()
        return self._private.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=encryption,
        )

    @staticmethod
    def _validate_key_size(bits: int, which: str) -> None:
        if bits < MIN_RSA_KEY_BITS:
            raise ProviderConfigurationError(f"{which} key must be at least {MIN_RSA_KEY_BITS} bits")


__all__ = ["RsaKeyWrapProvider", "MIN_RSA_KEY_BITS", "DEFAULT_RSA_KEY_BITS"]
