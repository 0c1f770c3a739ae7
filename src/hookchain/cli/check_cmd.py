"""Check CLI command: dry-run a record through an entity's hooks."""

import asyncio
import json

import click

from hookchain.config import Settings
from hookchain.core.types import ProcessRequest, UserContext
from hookchain.hooks.builtin import register_builtin_addons
from hookchain.hooks.dispatch import DispatchTable, configure_class
from hookchain.metadata.loader import MetadataLoader


@click.command()
@click.argument("entity")
@click.option("--record", "record_json", required=True, help="Record as a JSON object.")
@click.option("--delete", "is_delete", is_flag=True, default=False, help="Run the delete hooks instead of save.")
@click.option("--user", "user_id", default=None, help="Actor user ID passed to the hooks.")
@click.option("--master", is_flag=True, default=False, help="Run with master privilege.")
@click.pass_obj
def check(settings: Settings, entity: str, record_json: str, is_delete: bool,
          user_id: str | None, master: bool):
    """Run RECORD through ENTITY's save (or delete) hooks and print the result."""
    try:
        record = json.loads(record_json)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"not valid JSON: {e}", param_hint="--record")
    if not isinstance(record, dict):
        raise click.BadParameter("must be a JSON object", param_hint="--record")

    register_builtin_addons()
    loader = MetadataLoader(settings.metadata_path)
    try:
        loader.load_all()
        instance = loader.build(entity)
    except ValueError as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)

    table = DispatchTable()
    configure_class(table, entity, instance)

    req = ProcessRequest(
        entity=record,
        user=UserContext(user_id=user_id) if user_id else None,
        master=master,
    )
    run = table.delete if is_delete else table.save
    outcome = asyncio.run(run(entity, req))

    if not outcome.accepted:
        click.echo(click.style(f"Denied: {outcome.error}", fg="red"), err=True)
        raise SystemExit(1)

    click.echo(json.dumps(outcome.entity, indent=2, sort_keys=True, default=str))
