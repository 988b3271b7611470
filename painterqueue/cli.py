"""
PainterQueue Command-Line Interface

Operator commands for inspecting blob storage and checking the rule seed.

Author: PainterQueue Team
Date: 2026-10-18
"""

import asyncio
import json
import mimetypes
import sys
import uuid
from pathlib import Path
from typing import Optional

import click

from painterqueue import __version__
from painterqueue.bootstrap import build_dispatcher, build_storage_service
from painterqueue.core.config_manager import ConfigManager
from painterqueue.core.logging_config import clear_correlation_id, set_correlation_id, setup_logging
from painterqueue.seeding.seeder import InMemoryRuleStore, RuleSeeder
from painterqueue.storage.facade import BlobStorageClient
from painterqueue.storage.models import BlobDetails, BlobUpload


def _load(ctx: click.Context) -> ConfigManager:
    """Load configuration, then configure logging from it for the rest of the command."""
    manager = ConfigManager()
    config_file = ctx.obj.get("config_file")
    log_level = ctx.obj.get("log_level")
    try:
        manager.load(
            config_file=str(config_file) if config_file else None,
            cli_overrides={"logging": {"level": log_level.upper()}} if log_level else None,
        )
    except ValueError as e:
        # ConfigurationError and pydantic ValidationError are both ValueErrors
        click.echo(f"[ERROR] Invalid configuration: {e}", err=True)
        sys.exit(1)

    logging_config = manager.get_config().logging
    setup_logging(
        level=logging_config.level,
        format_type=logging_config.format,
        log_file=logging_config.file,
        rotation_size=logging_config.rotation_size,
        rotation_count=logging_config.rotation_count,
        module_levels=logging_config.module_levels,
    )
    set_correlation_id(uuid.uuid4().hex)
    ctx.call_on_close(clear_correlation_id)
    return manager


@click.group()
@click.version_option(version=__version__, prog_name="painterqueue")
@click.option(
    "--config",
    "-c",
    "config_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Logging level (overrides the configured level)",
)
@click.pass_context
def cli(ctx, config_file: Optional[Path], log_level: Optional[str]):
    """
    PainterQueue - storage and telemetry tooling

    Inspect the blob storage used by the PainterQueue backend.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_file"] = config_file
    ctx.obj["log_level"] = log_level


@cli.command()
@click.pass_context
def config(ctx):
    """Show the active configuration with secrets redacted."""
    manager = _load(ctx)
    click.echo(json.dumps(manager.redacted(), indent=2))


@cli.group()
def storage():
    """Blob storage operations."""
    pass


def _run(ctx: click.Context, operation):
    """Run an async operation against a storage client built from configuration."""
    manager = _load(ctx)

    async def runner():
        async with build_storage_service(manager.get_config().storage) as service:
            return await operation(BlobStorageClient(service))

    return asyncio.run(runner())


@storage.command("get")
@click.argument("container")
@click.argument("blob")
@click.option("--output", "-o", type=click.Path(dir_okay=False, path_type=Path), help="Write content to this file")
@click.pass_context
def get_blob(ctx, container: str, blob: str, output: Optional[Path]):
    """
    Download a blob.

    Examples:
        painterqueue storage get seed rules.json -o rules.json
    """
    async def operation(client: BlobStorageClient):
        download = await client.get_blob(container, blob)
        if download is None:
            return None
        with download.content as stream:
            return download.file_name, download.content_type, stream.read()

    result = _run(ctx, operation)
    if result is None:
        click.echo(f"[ERROR] Blob {blob} not found in container {container}", err=True)
        sys.exit(1)

    file_name, content_type, content = result
    if output:
        output.write_bytes(content)
        click.echo(f"Saved {file_name} ({content_type}, {len(content)} bytes) to {output}")
    else:
        click.echo(content.decode("utf-8", errors="replace"))


@storage.command("put")
@click.argument("container")
@click.argument("blob")
@click.argument("source", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--content-type", help="Content type (guessed from the file name by default)")
@click.option("--file-name", help="Display name stored with the blob (default: source file name)")
@click.pass_context
def put_blob(ctx, container: str, blob: str, source: Path, content_type: Optional[str], file_name: Optional[str]):
    """Upload a file as a blob, creating the container if needed."""
    content_type = content_type or mimetypes.guess_type(source.name)[0] or "application/octet-stream"
    upload = BlobUpload.from_path(source, content_type)
    details = BlobDetails(file_name=file_name or source.name)

    if not _run(ctx, lambda client: client.create_blob(container, blob, upload, details)):
        click.echo(f"[ERROR] Failed to upload {source} to {container}/{blob}", err=True)
        sys.exit(1)
    click.echo(f"Uploaded {source} to {container}/{blob}")


@storage.command("delete")
@click.argument("container")
@click.argument("blob")
@click.pass_context
def delete_blob(ctx, container: str, blob: str):
    """Delete a blob. Exits with 1 if the blob did not exist."""
    if not _run(ctx, lambda client: client.delete_blob(container, blob)):
        click.echo(f"[ERROR] Blob {blob} was not deleted from container {container}", err=True)
        sys.exit(1)
    click.echo(f"Deleted {container}/{blob}")


@storage.command("delete-container")
@click.argument("container")
@click.pass_context
def delete_container(ctx, container: str):
    """Delete a container and every blob in it."""
    if not _run(ctx, lambda client: client.delete_container(container)):
        click.echo(f"[ERROR] Failed to delete container {container}", err=True)
        sys.exit(1)
    click.echo(f"Container {container} deleted")


@storage.command("list")
@click.argument("container")
@click.pass_context
def list_blobs(ctx, container: str):
    """List blob metadata in a container."""
    records = _run(ctx, lambda client: client.list_blob_metadata(container))
    if records is None:
        click.echo(f"[ERROR] Failed to list container {container}", err=True)
        sys.exit(1)

    if not records:
        click.echo(f"No blobs in container {container}")
        return

    for record in records:
        status = "ok" if record.is_success else "failed"
        click.echo(f"{record.blob_name}\t{record.file_name}\t{status}\t{record.inserted_on.isoformat()}")


@cli.command()
@click.pass_context
def seed(ctx):
    """Load and validate the rule seed file from storage."""
    manager = _load(ctx)
    config = manager.get_config()
    store = InMemoryRuleStore()

    async def runner():
        async with build_storage_service(config.storage) as service:
            seeder = RuleSeeder(BlobStorageClient(service), config.storage, build_dispatcher(config, "painterqueue.seed"))
            return await seeder.seed(store)

    try:
        count = asyncio.run(runner())
    except Exception as e:
        click.echo(f"[ERROR] Seeding failed: {e}", err=True)
        sys.exit(1)

    click.echo(f"Loaded {count} rules from {config.storage.seed_container_name}/{config.storage.rule_blob_name}")


def main():
    """Main entry point for CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
