"""Typer-based command line interface for repocrypt."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import NoReturn, Optional

import click
import typer

from ..config import AppSettings, load_settings, provider_from_settings
from ..exceptions import RepoCryptError
from ..keys import generate_data_key
from ..logging import configure_logging
from ..metadata import EncryptedRepositoryMetadata, EncryptionKeyMetadata
from ..security.rsa import DEFAULT_RSA_KEY_BITS, RsaKeyWrapProvider

app = typer.Typer(help="Encrypted repository key metadata tools")


@app.callback()
def main(ctx: typer.Context, config: Optional[Path] = typer.Option(None, "--config", metavar="PATH")) -> None:
    try:
        ctx.obj = load_settings(config)
    except RepoCryptError as exc:
        _fail(exc)
    configure_logging(ctx.obj.logging.normalized_level())


def _fail(exc: RepoCryptError) -> NoReturn:
    typer.echo(f"error: {exc}", err=True)
    raise typer.Exit(code=2)


def _settings() -> AppSettings:
    return click.get_current_context().obj


@app.command()
def keygen(
    public_out: Path = typer.Option(..., "--public-out", help="Write the PEM public key here"),
    private_out: Path = typer.Option(..., "--private-out", help="Write the PEM private key here"),
    bits: int = typer.Option(DEFAULT_RSA_KEY_BITS, "--bits", help="RSA modulus size"),
) -> None:
    """Create an RSA key pair for wrapping repository keys"""
    try:
        provider = RsaKeyWrapProvider.generate(bits)
    except RepoCryptError as exc:
        _fail(exc)
    public_out.parent.mkdir(parents=True, exist_ok=True)
    private_out.parent.mkdir(parents=True, exist_ok=True)
    public_out.write_bytes(provider.public_pem())
    private_out.write_bytes(provider.private_pem())
    os.chmod(private_out, 0o600)
    typer.echo(f"Wrote {public_out} and {private_out}")


@app.command("create-metadata")
def create_metadata(
    output: Path = typer.Option(..., "-o", "--output", help="Metadata file to write"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing file"),
) -> None:
    """Generate a fresh repository key and store it wrapped"""
    if output.exists() and not force:
        typer.echo(f"error: {output} already exists", err=True)
        raise typer.Exit(code=2)
    try:
        codec = EncryptedRepositoryMetadata(provider_from_settings(_settings()))
        payload = codec.serialize(generate_data_key())
    except RepoCryptError as exc:
        _fail(exc)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(payload)
    typer.echo(f"Metadata written to {output}")


@app.command()
def inspect(path: Path = typer.Argument(..., exists=True, readable=True)) -> None:
    """Show the version and wrapped-key size of a metadata file"""
    try:
        metadata = EncryptionKeyMetadata.from_bytes(path.read_bytes())
        summary = {
            "version": metadata.version,
            "supported": metadata.has_supported_version(),
            "wrapped_key_bytes": len(metadata.wrapped_key),
        }
    except RepoCryptError as exc:
        _fail(exc)
    typer.echo(json.dumps(summary, indent=2))


@app.command()
def verify(path: Path = typer.Argument(..., exists=True, readable=True)) -> None:
    """Check that a metadata file unwraps with the configured key pair"""
    try:
        codec = EncryptedRepositoryMetadata(provider_from_settings(_settings()))
        key = codec.deserialize(path.read_bytes())
    except RepoCryptError as exc:
        _fail(exc)
    typer.echo(f"OK {key.algorithm}-{len(key) * 8}")


@app.command()
def version() -> None:
    """Print the installed repocrypt version"""
    from .. import __version__

    typer.echo(__version__)


if __name__ == "__main__":  # pragma: no cover
    app()
