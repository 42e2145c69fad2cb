"""Wire record for encrypted repository key metadata."""
from __future__ import annotations

import base64
import json
from typing import Any, Final

from pydantic import BaseModel, StrictStr, ValidationError

from ..exceptions import MalformedMetadataError, MetadataEncodingError

METADATA_VERSION: Final[int] = 1


class EncryptionKeyMetadata(BaseModel):
    key: StrictStr
    # Left untyped here; the codec rejects anything but METADATA_VERSION as a
    # version error rather than a parse error.
    version: Any = None

    model_config = {"frozen": True, "extra": "ignore"}

    @classmethod
    def for_wrapped_key(cls, wrapped_key: bytes) -> "EncryptionKeyMetadata":
        return cls(
            key=base64.b64encode(wrapped_key).decode("ascii"),
            version=METADATA_VERSION,
        )

    @property
    def wrapped_key(self) -> bytes:
        try:
            decoded = base64.b64decode(self.key, validate=True)
        except ValueError as exc:
            raise MalformedMetadataError("Metadata key is not valid base64") from exc
        if not decoded:
            raise MalformedMetadataError("Metadata key is empty")
        return decoded

    def has_supported_version(self) -> bool:
        # bool is an int subclass; `true` must not pass for version 1
        return type(self.version) is int and self.version == METADATA_VERSION

    def to_bytes(self) -> bytes:
        try:
            return self.model_dump_json().encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise MetadataEncodingError("Couldn't write JSON metadata") from exc

    @classmethod
    def from_bytes(cls, payload: bytes) -> "EncryptionKeyMetadata":
        try:
            data = json.loads(bytes(payload).decode("utf-8"))
        except UnicodeDecodeError as exc:
            raise MalformedMetadataError("Couldn't read JSON metadata: not UTF-8 text") from exc
        except json.JSONDecodeError as exc:
            raise MalformedMetadataError(f"Couldn't read JSON metadata: {exc.msg}") from exc
        except TypeError as exc:
            raise MalformedMetadataError("Couldn't read JSON metadata: expected bytes") from exc
        except RecursionError as exc:
            raise MalformedMetadataError("Couldn't read JSON metadata: nesting too deep") from exc
        except ValueError as exc:
            # int() refuses numbers longer than sys.get_int_max_str_digits()
            raise MalformedMetadataError("Couldn't read JSON metadata: number too large") from exc
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise MalformedMetadataError(
                f"Couldn't read JSON metadata: {_short_cause(exc)}"
            ) from exc


def _short_cause(exc: ValidationError) -> str:
    """First validation problem without the offending input value."""
    errors = exc.errors(include_url=False, include_input=False)
    if not errors:
        return "invalid record"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ())) or "record"
    return f"{location}: {first.get('msg', 'invalid value')}"


__all__ = ["EncryptionKeyMetadata", "METADATA_VERSION"]
