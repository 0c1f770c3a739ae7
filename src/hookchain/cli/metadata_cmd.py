"""Metadata CLI commands."""

from pathlib import Path

import click

from hookchain.config import Settings
from hookchain.hooks.builtin import register_builtin_addons
from hookchain.metadata.loader import MetadataLoader
from hookchain.metadata.validator import validate_metadata_dir, validate_yaml_file


@click.group()
def metadata():
    """Metadata commands."""
    pass


@metadata.command()
@click.option(
    "--path",
    "target_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Validate a single YAML file instead of the whole metadata directory.",
)
@click.pass_obj
def validate(settings: Settings, target_path: Path | None):
    """Validate entity hook YAML files and build every configured entity."""
    metadata_path = settings.metadata_path

    # ── Schema (JSON Schema) validation ─────────────────────────────────────
    if target_path is not None:
        schema_issues = validate_yaml_file(target_path)
    else:
        if not metadata_path.exists():
            click.echo(f"Error: Metadata directory not found at {metadata_path}", err=True)
            raise SystemExit(1)
        schema_issues = validate_metadata_dir(metadata_path)

    errors = [i for i in schema_issues if i.severity == "error"]
    warnings = [i for i in schema_issues if i.severity == "warning"]

    for issue in schema_issues:
        colour = "red" if issue.severity == "error" else "yellow"
        click.echo(click.style(str(issue), fg=colour))

    if errors:
        click.echo(
            click.style(
                f"\n{len(errors)} schema error(s) found"
                + (f", {len(warnings)} warning(s)" if warnings else ""),
                fg="red",
                bold=True,
            )
        )
        raise SystemExit(1)

    # ── Semantic (loader) validation ─────────────────────────────────────────
    # Only runs for the full directory: addon names must resolve
    if target_path is None:
        register_builtin_addons()
        try:
            loader = MetadataLoader(metadata_path)
            loader.load_all()
            instances = loader.build_all()
        except (ValueError, KeyError) as e:
            click.echo(click.style(f"\nSemantic validation failed: {e}", fg="red"), err=True)
            raise SystemExit(1)

        click.echo(f"\nLoaded {len(instances)} entities:")
        for name in sorted(instances):
            instance = instances[name]
            click.echo(
                f"  ✓ {name} ({len(instance.required_keys)} required, "
                f"{len(instance.addons)} addons)"
            )

    click.echo(click.style("\nAll metadata is valid.", fg="green", bold=True))
