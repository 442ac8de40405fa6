"""CLI commands for the Order aggregate.

Commands run with the back-office (admin) principal unless ``--as-user``
names a shopper account to act as.
"""

from __future__ import annotations

import click

from backoffice.application.cancel_order import CancelOrderHandler
from backoffice.application.create_order import CreateOrderHandler
from backoffice.application.delete_order import DeleteOrderHandler
from backoffice.application.dto import OrderDTO, OrderItemSpec
from backoffice.application.list_orders import ListOrdersHandler
from backoffice.application.set_order_status import SetOrderStatusHandler
from backoffice.application.show_order import ShowOrderHandler
from backoffice.domain.exceptions import DomainException
from backoffice.domain.model.order import OrderStatus
from backoffice.domain.model.principal import AdminPrincipal, Principal, UserPrincipal
from backoffice.domain.model.value_objects import Money
from backoffice.infrastructure.bootstrap import Repositories

as_user_option = click.option(
    "--as-user", "as_user", default=None, metavar="USER_ID",
    help="Act as this shopper instead of the back office.",
)


def _principal(as_user: str | None) -> Principal:
    return UserPrincipal(as_user) if as_user else AdminPrincipal()


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'PRODUCT_ID:3,PRODUCT_ID:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(OrderItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _money(amount) -> str:
    return str(Money(amount))


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    customer = f"{dto.user.name} <{dto.user.email}>" if dto.user else dto.user_id
    click.echo(f"Customer: {customer}")
    click.echo(f"Created:  {dto.created_at:%Y-%m-%d %H:%M}")
    click.echo()
    click.echo(f"  {'Product':<26} {'Qty':>5} {'Price':>16} {'Total':>18}")
    click.echo(f"  {'-'*68}")
    for item in dto.items:
        name = item.product.name if item.product else item.product_id
        click.echo(
            f"  {name:<26} {item.quantity:>5} {_money(item.price):>16} {_money(item.line_total):>18}"
        )
    click.echo(f"  {'-'*68}")
    click.echo(f"  {'Order Total':<33} {_money(dto.total):>35}")


@click.command("create")
@click.option("--user", "user_id", default=None, help="Shopper the order belongs to.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@as_user_option
@click.pass_obj
def order_create(repos: Repositories, user_id: str | None, items: str, as_user: str | None) -> None:
    """Create a new pending order."""
    user_id = user_id or as_user
    if not user_id:
        raise click.UsageError("Provide --user (or --as-user to order for yourself).")
    specs = _parse_items(items)

    handler = CreateOrderHandler(
        order_repo=repos.orders,
        product_repo=repos.products,
        user_repo=repos.users,
    )

    try:
        dto = handler.handle(_principal(as_user), user_id=user_id, item_specs=specs)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Order created.")
    _display_order(dto)


@click.command("list")
@as_user_option
@click.pass_obj
def order_list(repos: Repositories, as_user: str | None) -> None:
    """List orders, newest first."""
    handler = ListOrdersHandler(order_repo=repos.orders, projector=repos.projector())
    principal = _principal(as_user)

    try:
        if isinstance(principal, UserPrincipal):
            orders = handler.list_own(principal)
        else:
            orders = handler.list_all(principal)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<26} {'Customer':<20} {'Status':<10} {'Total':>18}")
    click.echo("-" * 77)
    for dto in orders:
        customer = dto.user.name if dto.user else dto.user_id
        click.echo(f"{dto.id:<26} {customer:<20} {dto.status:<10} {_money(dto.total):>18}")


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
@as_user_option
@click.pass_obj
def order_show(repos: Repositories, order_id: str, as_user: str | None) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_repo=repos.orders, projector=repos.projector())

    try:
        dto = handler.handle(_principal(as_user), order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID to cancel.")
@click.option("--as-user", "as_user", required=True, metavar="USER_ID", help="Shopper who owns the order.")
@click.pass_obj
def order_cancel(repos: Repositories, order_id: str, as_user: str) -> None:
    """Cancel your own order while it is pending or paid."""
    handler = CancelOrderHandler(order_repo=repos.orders, projector=repos.projector())

    try:
        handler.handle(UserPrincipal(as_user), order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled.")


@click.command("set-status")
@click.option("--id", "order_id", required=True, help="Order ID.")
@click.option(
    "--status", required=True,
    help=f"New status ({', '.join(s.value for s in OrderStatus)}).",
)
@click.pass_obj
def order_set_status(repos: Repositories, order_id: str, status: str) -> None:
    """Set an order's status (back office, unrestricted)."""
    handler = SetOrderStatusHandler(order_repo=repos.orders, projector=repos.projector())

    try:
        dto = handler.handle(AdminPrincipal(), order_id, status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} is now {dto.status}.")


@click.command("delete")
@click.option("--id", "order_id", required=True, help="Order ID to delete.")
@click.confirmation_option(prompt="Delete this order permanently?")
@click.pass_obj
def order_delete(repos: Repositories, order_id: str) -> None:
    """Permanently delete an order, whatever its status."""
    handler = DeleteOrderHandler(order_repo=repos.orders)

    try:
        handler.handle(AdminPrincipal(), order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} deleted.")
