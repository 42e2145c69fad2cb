from pathlib import Path

import pytest

pytest.importorskip("yaml")

from repocrypt.config import AppSettings, load_settings, provider_from_settings
from repocrypt.exceptions import SettingsError
from repocrypt.security import RsaKeyWrapProvider


def _write_key_files(tmp_path: Path) -> dict[str, Path]:
    provider = RsaKeyWrapProvider.generate(2048)
    files = {
        "public": tmp_path / "public.pem",
        "private": tmp_path / "private.pem",
        "credentials": tmp_path / "credentials.json",
    }
    files["public"].write_bytes(provider.public_pem())
    files["private"].write_bytes(provider.private_pem())
    files["credentials"].write_text("{}", encoding="utf-8")
    return files


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(body, encoding="utf-8")
    return path


def test_defaults_when_nothing_configured(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("repocrypt.config.runtime_config_dir", lambda: tmp_path / "none")
    settings = load_settings()
    assert settings == AppSettings()
    assert settings.gcs.connection_timeout_ms() == -1
    assert settings.gcs.read_timeout_ms() == -1
    assert settings.logging.normalized_level() == "INFO"


def test_local_config_is_discovered(tmp_path: Path, monkeypatch) -> None:
    local = tmp_path / ".repocrypt"
    local.mkdir()
    (local / "config.yaml").write_text("gcs:\n  client:\n    project_id: demo\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert load_settings().gcs.client.project_id == "demo"


def test_load_full_settings(tmp_path: Path) -> None:
    files = _write_key_files(tmp_path)
    config = _write_config(
        tmp_path,
        f"""
gcs:
  public_key_file: {files['public']}
  private_key_file: {files['private']}
  client:
    credentials_file: {files['credentials']}
    project_id: my-project
    connection_timeout: 5000
    read_timeout: 0
logging:
  level: debug
""",
    )
    settings = load_settings(config)
    settings.gcs.check()
    assert settings.gcs.client.project_id == "my-project"
    assert settings.gcs.connection_timeout_ms() == 5000
    assert settings.gcs.read_timeout_ms() == 0
    assert settings.logging.normalized_level() == "DEBUG"
    assert isinstance(provider_from_settings(settings), RsaKeyWrapProvider)


def test_empty_storage_settings_are_rejected() -> None:
    with pytest.raises(SettingsError, match="hasn't been set"):
        AppSettings().gcs.check()


@pytest.mark.parametrize("missing", ["public_key_file", "private_key_file", "credentials_file"])
def test_each_secure_file_is_required(tmp_path: Path, missing: str) -> None:
    files = _write_key_files(tmp_path)
    data = {
        "gcs": {
            "public_key_file": str(files["public"]),
            "private_key_file": str(files["private"]),
            "client": {"credentials_file": str(files["credentials"])},
        }
    }
    if missing == "credentials_file":
        del data["gcs"]["client"][missing]
    else:
        del data["gcs"][missing]
    settings = AppSettings.model_validate(data)
    with pytest.raises(SettingsError, match=missing):
        settings.gcs.check()


def test_configured_files_must_exist(tmp_path: Path) -> None:
    settings = AppSettings.model_validate(
        {
            "gcs": {
                "public_key_file": str(tmp_path / "absent.pem"),
                "private_key_file": str(tmp_path / "absent.pem"),
                "client": {"credentials_file": str(tmp_path / "absent.json")},
            }
        }
    )
    with pytest.raises(SettingsError, match="missing file"):
        provider_from_settings(settings)


def test_timeouts_below_minus_one_are_invalid(tmp_path: Path) -> None:
    config = _write_config(tmp_path, "gcs:\n  client:\n    read_timeout: -2\n")
    with pytest.raises(SettingsError):
        load_settings(config)


def test_invalid_yaml_is_reported(tmp_path: Path) -> None:
    config = _write_config(tmp_path, "gcs: [unclosed\n")
    with pytest.raises(SettingsError):
        load_settings(config)


def test_explicit_missing_path_is_reported(tmp_path: Path) -> None:
    with pytest.raises(SettingsError):
        load_settings(tmp_path / "nope.yaml")
