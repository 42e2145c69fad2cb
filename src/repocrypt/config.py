"""Settings loading for encrypted repositories."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .exceptions import SettingsError
from .paths import local_config_path, runtime_config_dir
from .security.rsa import RsaKeyWrapProvider

_UNSET_TIMEOUT = -1


class ClientSettings(BaseModel):
    credentials_file: Optional[Path] = Field(default=None, description="Service account credentials")
    project_id: str = Field(default="")
    connection_timeout: int = Field(default=_UNSET_TIMEOUT, ge=_UNSET_TIMEOUT)
    read_timeout: int = Field(default=_UNSET_TIMEOUT, ge=_UNSET_TIMEOUT)


class StorageSettings(BaseModel):
    public_key_file: Optional[Path] = Field(default=None, description="PEM public key used to wrap keys")
    private_key_file: Optional[Path] = Field(default=None, description="PEM private key used to unwrap keys")
    client: ClientSettings = Field(default_factory=ClientSettings)

    @field_validator("public_key_file", "private_key_file")
    @classmethod
    def _expand(cls, value: Optional[Path]) -> Optional[Path]:
        if value is None:
            return None
        return value.expanduser()

    def is_empty(self) -> bool:
        return self == StorageSettings()

    def check(self) -> None:
        """Ensure every secure file setting is present and readable."""
        if self.is_empty():
            raise SettingsError("Settings for GC storage hasn't been set")
        required = {
            "gcs.client.credentials_file": self.client.credentials_file,
            "gcs.public_key_file": self.public_key_file,
            "gcs.private_key_file": self.private_key_file,
        }
        for name, value in required.items():
            if value is None:
                raise SettingsError(f"Setting {name} hasn't been set")
            if not value.expanduser().is_file():
                raise SettingsError(f"Setting {name} points to a missing file: {value}")

    def connection_timeout_ms(self) -> int:
        return self.client.connection_timeout

    def read_timeout_ms(self) -> int:
        return self.client.read_timeout


class LoggingSettings(BaseModel):
    level: str = Field(default="INFO", description="Logging verbosity level")

    def normalized_level(self) -> str:
        return self.level.upper()


class AppSettings(BaseModel):
    gcs: StorageSettings = Field(default_factory=StorageSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)


DEFAULT_SETTINGS = AppSettings()


def settings_search_paths(explicit: Optional[Path] = None) -> Iterable[Path]:
    if explicit:
        yield explicit
    yield local_config_path()
    yield runtime_config_dir() / "config.yaml"


def load_settings(path: Optional[Path] = None) -> AppSettings:
    if path is not None and not path.is_file():
        raise SettingsError(f"Settings file not found: {path}")
    for candidate in settings_search_paths(path):
        if candidate.is_file():
            with candidate.open("r", encoding="utf-8") as handle:
                try:
                    data = yaml.safe_load(handle) or {}
                except yaml.YAMLError as exc:
                    raise SettingsError(f"Invalid YAML in {candidate}") from exc
            try:
                return AppSettings.model_validate(data)
            except ValidationError as exc:
                raise SettingsError(f"Invalid settings in {candidate}: {exc}") from exc
    return DEFAULT_SETTINGS.model_copy(deep=True)


def provider_from_settings(settings: AppSettings) -> RsaKeyWrapProvider:
    storage = settings.gcs
    storage.check()
    return RsaKeyWrapProvider.from_files(storage.public_key_file, storage.private_key_file)


__all__ = [
    "AppSettings",
    "ClientSettings",
    "DEFAULT_SETTINGS",
    "LoggingSettings",
    "StorageSettings",
    "load_settings",
    "provider_from_settings",
    "settings_search_paths",
]
