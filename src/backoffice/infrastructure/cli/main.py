import click

from backoffice.infrastructure.bootstrap import build_repositories
from backoffice.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_delete,
    order_list,
    order_set_status,
    order_show,
)
from backoffice.infrastructure.cli.product_commands import (
    product_activate,
    product_add,
    product_deactivate,
    product_list,
    product_update,
)
from backoffice.infrastructure.cli.user_commands import user_add, user_list
from backoffice.infrastructure.config import ConfigError, Settings
from backoffice.infrastructure.logging_config import configure_logging


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Back office — orders, catalog and shoppers"""
    if ctx.obj is not None:
        # Repositories supplied by the caller (tests, embedding).
        return
    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        raise click.ClickException(str(exc))
    configure_logging(settings.log_level)
    ctx.obj = build_repositories(settings)


@cli.group()
def order() -> None:
    """Manage orders (transaksi)."""


@cli.group()
def product() -> None:
    """Manage products."""


@cli.group()
def user() -> None:
    """Manage shoppers."""


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_set_status)
order.add_command(order_show)
product.add_command(product_activate)
product.add_command(product_add)
product.add_command(product_deactivate)
product.add_command(product_list)
product.add_command(product_update)
user.add_command(user_add)
user.add_command(user_list)
