"""Seeding commands for users, clients and services."""

import click

from cuentatrack.cli.error_handling import handle_domain_error
from cuentatrack.cli.session import run_with_db
from cuentatrack.domain.errors import DomainError


@click.group()
def user_group():
    """Manage panel users."""
    pass


@user_group.command("create")
@click.argument("nombre")
@click.pass_context
def create_user(ctx, nombre: str):
    """Create a panel user."""
    try:
        user_id = run_with_db(ctx, lambda db: db.create_user(nombre))
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created user '{nombre}' (ID: {user_id})")


@user_group.command("list")
@click.pass_context
def list_users(ctx):
    """List panel users."""
    try:
        users = run_with_db(ctx, lambda db: db.list_users())
    except DomainError as e:
        handle_domain_error(ctx, e)
    if not users:
        click.echo("No users found.")
        return
    for u in users:
        click.echo(f"ID: {u.id:3d} | {u.nombre}")


@click.group()
def client_group():
    """Manage clients."""
    pass


@client_group.command("create")
@click.argument("nombre")
@click.argument("apellido", required=False, default="")
@click.pass_context
def create_client(ctx, nombre: str, apellido: str):
    """Create a client."""
    try:
        client_id = run_with_db(ctx, lambda db: db.create_client(nombre, apellido))
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created client '{f'{nombre} {apellido}'.strip()}' (ID: {client_id})")


@click.group()
def service_group():
    """Manage services."""
    pass


@service_group.command("create")
@click.argument("nombre")
@click.pass_context
def create_service(ctx, nombre: str):
    """Create a service."""
    try:
        service_id = run_with_db(ctx, lambda db: db.create_service(nombre))
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created service '{nombre}' (ID: {service_id})")


def register_commands(cli):
    """Register catalog commands with main CLI."""
    cli.add_command(user_group, name="usuario")
    cli.add_command(client_group, name="cliente")
    cli.add_command(service_group, name="servicio")
