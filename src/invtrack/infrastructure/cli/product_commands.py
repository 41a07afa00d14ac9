"""CLI commands for products."""

from __future__ import annotations

from pathlib import Path

import click

from invtrack.application.add_product import AddProductHandler
from invtrack.application.adjust_stock import RestockProductHandler, SellProductHandler
from invtrack.application.delete_product import DeleteAllProductsHandler, DeleteProductHandler
from invtrack.application.dto import ProductDTO
from invtrack.application.edit_product import EditProductHandler
from invtrack.application.list_products import ListProductsHandler
from invtrack.application.show_product import ShowProductHandler
from invtrack.domain.exceptions import DomainException
from invtrack.domain.model import contract
from invtrack.infrastructure.bootstrap import product_provider


def _display_product(dto: ProductDTO) -> None:
    """Shared formatting for the detail view."""
    click.echo(f"Product #{dto.id}  {dto.name}")
    click.echo(f"  Price:     {dto.price}")
    click.echo(f"  Quantity:  {dto.quantity}")
    click.echo(f"  Supplier:  {dto.supplier_phone}  ({dto.dial_uri})")
    click.echo(f"  Photo:     {dto.image_size} bytes")


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", default=0, type=int, show_default=True, help="Price in cents.")
@click.option("--quantity", default=0, type=int, show_default=True, help="Units in stock.")
@click.option("--supplier-phone", required=True, help="Supplier phone number.")
@click.option(
    "--image", "image_path", required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to the product photo.",
)
def product_add(name: str, price: int, quantity: int, supplier_phone: str, image_path: Path) -> None:
    """Add a new product to the inventory."""
    handler = AddProductHandler(product_provider())

    try:
        dto = handler.handle(
            name=name,
            price=price,
            quantity=quantity,
            supplier_phone=supplier_phone,
            image=image_path.read_bytes(),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{dto.id} '{dto.name}' added at {dto.price}")


@click.command("list")
@click.option("--in-stock", is_flag=True, default=False, help="Only products with stock left.")
def product_list(in_stock: bool) -> None:
    """List all products."""
    lines = ListProductsHandler(product_provider()).handle(in_stock_only=in_stock)

    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Price':>10} {'Quantity':>9}")
    click.echo("-" * 48)
    for line in lines:
        click.echo(f"{line.id:<6} {line.name:<20} {line.price:>10} {line.quantity:>9}")


@click.command("show")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_show(product_id: int) -> None:
    """Show details of a product."""
    try:
        dto = ShowProductHandler(product_provider()).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_product(dto)


@click.command("edit")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--name", default=None, help="New name.")
@click.option("--price", default=None, type=int, help="New price in cents.")
@click.option("--quantity", default=None, type=int, help="New quantity.")
@click.option("--supplier-phone", default=None, help="New supplier phone number.")
@click.option(
    "--image", "image_path", default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a new product photo.",
)
def product_edit(
    product_id: int,
    name: str | None,
    price: int | None,
    quantity: int | None,
    supplier_phone: str | None,
    image_path: Path | None,
) -> None:
    """Change one or more fields of a product."""
    changes = {
        contract.NAME: name,
        contract.PRICE: price,
        contract.QUANTITY: quantity,
        contract.SUPPLIER_PHONE: supplier_phone,
        contract.IMAGE: image_path.read_bytes() if image_path else None,
    }
    changes = {k: v for k, v in changes.items() if v is not None}

    try:
        dto = EditProductHandler(product_provider()).handle(product_id, **changes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not changes:
        click.echo("Nothing to change.")
    _display_product(dto)


@click.command("sell")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
def product_sell(product_id: int) -> None:
    """Sell one unit of a product."""
    try:
        dto = SellProductHandler(product_provider()).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Sold one {dto.name} - {dto.quantity} left")


@click.command("restock")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.option("--amount", default=1, type=int, show_default=True, help="Units received.")
def product_restock(product_id: int, amount: int) -> None:
    """Add units to a product's stock."""
    try:
        dto = RestockProductHandler(product_provider()).handle(product_id, amount)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Restocked {dto.name} - {dto.quantity} in stock")


@click.command("delete")
@click.option("--id", "product_id", required=True, type=int, help="Product ID.")
@click.confirmation_option(prompt="Delete this product?")
def product_delete(product_id: int) -> None:
    """Delete a product."""
    try:
        DeleteProductHandler(product_provider()).handle(product_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} deleted.")


@click.command("delete-all")
@click.confirmation_option(prompt="Delete ALL products?")
def product_delete_all() -> None:
    """Delete every product."""
    try:
        count = DeleteAllProductsHandler(product_provider()).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"{count} product(s) deleted.")
