"""CLI commands for the Product aggregate."""

from __future__ import annotations

import click

from backoffice.application.add_product import AddProductHandler
from backoffice.application.update_product import UpdateProductHandler
from backoffice.domain.exceptions import DomainException
from backoffice.infrastructure.bootstrap import Repositories


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price (e.g. 15000).")
@click.option("--sku", default="", help="Stock keeping unit.")
@click.option("--image-url", default="", help="Public image URL.")
@click.option("--description", default="", help="Free-text description.")
@click.pass_obj
def product_add(
    repos: Repositories, name: str, price: str, sku: str, image_url: str, description: str
) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(product_repo=repos.products)

    try:
        product = handler.handle(
            name=name, price=price, sku=sku, image_url=image_url, description=description
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.price}")


@click.command("list")
@click.option("--active-only", is_flag=True, default=False, help="Hide inactive products.")
@click.pass_obj
def product_list(repos: Repositories, active_only: bool) -> None:
    """List products in the catalog."""
    try:
        products = repos.products.list_all(active_only=active_only)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<26} {'Name':<20} {'SKU':<10} {'Price':>16} Active")
    click.echo("-" * 80)
    for p in products:
        active = "yes" if p.is_active else "no"
        click.echo(f"{p.id:<26} {p.name:<20} {p.sku:<10} {str(p.price):>16} {active}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 29000).")
@click.pass_obj
def product_update(repos: Repositories, product_id: str, price: str) -> None:
    """Update a product's price. Existing orders keep their price."""
    handler = UpdateProductHandler(product_repo=repos.products)

    try:
        product = handler.change_price(product_id=product_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product_id} price updated to {product.price}")


def _set_active(repos: Repositories, product_id: str, active: bool) -> None:
    handler = UpdateProductHandler(product_repo=repos.products)
    try:
        handler.set_active(product_id=product_id, active=active)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Product #{product_id} {'activated' if active else 'deactivated'}.")


@click.command("activate")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_activate(repos: Repositories, product_id: str) -> None:
    """Make a product orderable by shoppers."""
    _set_active(repos, product_id, True)


@click.command("deactivate")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.pass_obj
def product_deactivate(repos: Repositories, product_id: str) -> None:
    """Hide a product from shoppers."""
    _set_active(repos, product_id, False)
