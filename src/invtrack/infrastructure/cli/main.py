import logging

import click

from invtrack.infrastructure.cli.db_commands import db_reset
from invtrack.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_delete_all,
    product_edit,
    product_list,
    product_restock,
    product_sell,
    product_show,
)
from invtrack.infrastructure.config import get_settings


@click.group()
@click.option("-v", "--verbose", is_flag=True, default=False, help="Log at DEBUG level.")
def cli(verbose: bool) -> None:
    """invtrack: Inventory Tracker"""
    level = "DEBUG" if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def db() -> None:
    """Manage the local database."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_delete_all)
product.add_command(product_edit)
product.add_command(product_list)
product.add_command(product_restock)
product.add_command(product_sell)
product.add_command(product_show)
db.add_command(db_reset)
