"""CLI commands for the local database file."""

from __future__ import annotations

import click

from invtrack.domain.exceptions import DomainException
from invtrack.infrastructure.bootstrap import product_store


@click.command("reset")
@click.confirmation_option(prompt="Drop the products table and lose all data?")
def db_reset() -> None:
    """Drop and recreate the products table."""
    store = product_store()
    try:
        store.open()
        store.recreate()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Database at {store.path} recreated.")
