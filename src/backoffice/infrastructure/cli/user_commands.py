"""CLI commands for shopper accounts."""

from __future__ import annotations

import click

from backoffice.application.add_user import AddUserHandler
from backoffice.domain.exceptions import DomainException
from backoffice.infrastructure.bootstrap import Repositories


@click.command("add")
@click.option("--name", required=True, help="Full name.")
@click.option("--email", required=True, help="Email address (unique).")
@click.option("--phone", default="", help="Phone number.")
@click.option("--address", default="", help="Shipping address.")
@click.pass_obj
def user_add(repos: Repositories, name: str, email: str, phone: str, address: str) -> None:
    """Register a shopper account."""
    handler = AddUserHandler(user_repo=repos.users)

    try:
        user = handler.handle(name=name, email=email, phone=phone, address=address)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User #{user.id} '{user.name}' <{user.email}> added")


@click.command("list")
@click.pass_obj
def user_list(repos: Repositories) -> None:
    """List shopper accounts."""
    try:
        users = repos.users.list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not users:
        click.echo("No users found.")
        return

    click.echo(f"{'ID':<26} {'Name':<20} Email")
    click.echo("-" * 70)
    for u in users:
        click.echo(f"{u.id:<26} {u.name:<20} {u.email}")
