"""Structured logging for repocrypt with key-material redaction.

Every event passes through :func:`redact_key_material` before rendering, so a
caller that binds a key, its ciphertext or any raw bytes to a log call gets a
placeholder in the output instead of the value.
"""
from __future__ import annotations

import logging
import sys
from typing import Any, Dict, Final, MutableMapping

import structlog

from .keys import SecretKey

_DEFAULT_LEVEL = "info"

SENSITIVE_FIELDS: Final[frozenset[str]] = frozenset(
    {"key", "material", "raw_key", "wrapped_key", "ciphertext", "secret", "passphrase"}
)
REDACTED: Final[str] = "<redacted>"


def configure_logging(level: str | None = None) -> None:
    """Send JSON log lines (``ts``, ``level``, ``msg``, ``component``) to stderr.

    stdout is left to command output. Loggers are not cached so a later call
    can change the level or the destination stream.
    """

    numeric_level = _level_from_str((level or _DEFAULT_LEVEL).lower())

    logging.basicConfig(
        level=numeric_level,
        handlers=[logging.StreamHandler(sys.stderr)],
        format="%(message)s",
        force=True,
    )

    structlog.configure(
        processors=[
            redact_key_material,
            structlog.processors.TimeStamper(fmt="iso", key="ts"),
            structlog.stdlib.add_log_level,
            _component_processor,
            _rename_event_to_msg,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        cache_logger_on_first_use=False,
    )


def redact_key_material(
    _logger: Any, _name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Mask sensitive fields and any bytes or SecretKey value."""

    for field, value in list(event_dict.items()):
        if field in SENSITIVE_FIELDS:
            event_dict[field] = REDACTED
        elif isinstance(value, (bytes, bytearray, memoryview)):
            event_dict[field] = f"{REDACTED} {len(value)} bytes"
        elif isinstance(value, SecretKey):
            event_dict[field] = f"{REDACTED} {value.algorithm} key"
    return event_dict


def _component_processor(
    logger: structlog.BoundLoggerBase, _name: str, event_dict: dict[str, object]
) -> dict[str, object]:
    if event_dict.get("component") is None:
        event_dict["component"] = getattr(logger, "name", None) or "repocrypt"
    return event_dict


def _rename_event_to_msg(
    _logger: structlog.BoundLoggerBase, _name: str, event_dict: dict[str, object]
) -> dict[str, object]:
    if "msg" not in event_dict:
        event_dict["msg"] = event_dict.pop("event", "")
    return event_dict


def _level_from_str(level: str) -> int:
    mapping: Dict[str, int] = {
        "critical": logging.CRITICAL,
        "error": logging.ERROR,
        "warning": logging.WARNING,
        "info": logging.INFO,
        "debug": logging.DEBUG,
    }
    return mapping.get(level, logging.INFO)


__all__ = ["REDACTED", "SENSITIVE_FIELDS", "configure_logging", "redact_key_material"]
