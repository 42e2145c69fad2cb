"""Key-wrap providers usable with the metadata codec."""

from .aes import AesKeyWrapProvider
from .provider import KeyWrapProvider
from .rsa import RsaKeyWrapProvider

__all__ = ["AesKeyWrapProvider", "KeyWrapProvider", "RsaKeyWrapProvider"]
