"""``componentkit-validate``: lint a registry document before publishing."""

from __future__ import annotations

import json
from pathlib import Path

import click
import structlog

from componentkit.config import LoggingSettings, Settings
from componentkit.loader import BUNDLED_REGISTRY_PATH
from componentkit.logging_setup import configure_logging
from componentkit.models.registry import Registry
from componentkit.validator import validate_npm_dependencies, validate_registry

log = structlog.get_logger()


@click.command("validate")
@click.argument("registry_path", required=False, type=click.Path(path_type=Path))
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default=None,
    help="Override the configured log level",
)
@click.option(
    "--log-format",
    type=click.Choice(["json", "text"]),
    default=None,
    help="Override the configured log format",
)
def validate(registry_path: Path | None, log_level: str | None, log_format: str | None) -> None:
    """Validate a component registry document.

    Structural errors are fatal (exit code 1). Undeclared npm packages found
    in component sources are reported as warnings only.
    """
    settings = Settings()
    overrides = {k: v for k, v in {"level": log_level, "format": log_format}.items() if v}
    configure_logging(LoggingSettings.model_validate(settings.logging.model_dump() | overrides))

    if registry_path is None:
        configured = settings.registry.path
        registry_path = Path(configured) if configured is not None else BUNDLED_REGISTRY_PATH

    click.echo(f"Validating component registry {registry_path}\n")
    document = _read_document(registry_path)

    report = validate_registry(document)
    if not report.is_valid:
        log.error("registry_validation_failed", path=str(registry_path), errors=len(report.errors))
        click.echo("Registry validation failed:\n", err=True)
        for error in report.errors:
            click.echo(f"  • {error}", err=True)
        raise SystemExit(1)

    registry = Registry.model_validate(document)
    warning_count = 0
    for name, component in registry.components.items():
        warnings = validate_npm_dependencies(component)
        if not warnings:
            continue
        click.echo(f"Component '{name}' dependency issues:")
        for warning in warnings:
            click.echo(f"  • {warning}")
        warning_count += len(warnings)

    click.echo("Registry validation completed successfully!\n")
    click.echo("Summary:")
    click.echo(f"  • Components: {len(registry.components)}")
    click.echo(f"  • Dependency warnings: {warning_count}")
    if warning_count:
        click.echo("\nDependency warnings are not fatal but should be reviewed.")
    log.info(
        "registry_validation_passed",
        path=str(registry_path),
        components=len(registry.components),
        warnings=warning_count,
    )


def _read_document(path: Path) -> object:
    try:
        raw = path.read_text(encoding="utf-8")
    except (FileNotFoundError, IsADirectoryError):
        click.echo(f"Registry file not found: {path}", err=True)
        raise SystemExit(1) from None
    except UnicodeDecodeError as exc:
        click.echo(f"Registry file is not valid UTF-8: {exc}", err=True)
        raise SystemExit(1) from None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        click.echo(f"Invalid JSON in registry file: {exc}", err=True)
        raise SystemExit(1) from None
