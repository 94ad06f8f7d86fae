"""Account listing and seeding commands."""

import click

from cuentatrack.cli.error_handling import handle_domain_error
from cuentatrack.cli.session import run_with_db, run_workflow
from cuentatrack.domain.account import search_by_correo
from cuentatrack.domain.entities import EstadoCuenta, TipoCuenta
from cuentatrack.domain.errors import DomainError

STATUS_CHOICES = [s.value for s in EstadoCuenta]
TIPO_CHOICES = [t.value for t in TipoCuenta]


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("list")
@click.option("--status", type=click.Choice(STATUS_CHOICES, case_sensitive=False), help="Filter by status")
@click.option("--tipo", type=click.Choice(TIPO_CHOICES, case_sensitive=False), help="Filter by account type")
@click.option("--search", help="Case-insensitive correo substring")
@click.pass_context
def list_accounts(ctx, status: str | None, tipo: str | None, search: str | None):
    """List accounts.

    Examples:
        cuentatrack cuenta list --status ACTIVO --tipo INDIVIDUAL
        cuentatrack cuenta list --search netflix
    """

    async def _list(coordinator):
        accounts = coordinator.store.by_status_and_type(
            EstadoCuenta(status.upper()) if status else None,
            TipoCuenta(tipo.upper()) if tipo else None,
        )
        return search_by_correo(accounts, search)

    try:
        accounts = run_workflow(ctx, _list)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 70)
    for acc in accounts:
        click.echo(
            f"ID: {acc.id:3d} | {acc.correo:30s} | {acc.tipo_cuenta.value:10s} | {acc.status.value}"
        )


@account_group.command("create")
@click.argument("correo", metavar="CORREO")
@click.option("--tipo", type=click.Choice(TIPO_CHOICES, case_sensitive=False), required=True, help="Account type")
@click.option(
    "--status",
    type=click.Choice([EstadoCuenta.ACTIVO.value, EstadoCuenta.SINUSAR.value], case_sensitive=False),
    default=EstadoCuenta.SINUSAR.value,
    help="Initial status (default: SINUSAR)",
)
@click.option("--cliente", type=int, help="Owning client ID")
@click.option("--servicio", type=int, help="Service ID")
@click.pass_context
def create_account(ctx, correo: str, tipo: str, status: str, cliente: int | None, servicio: int | None):
    """Create a new account in stock or already active.

    Examples:
        cuentatrack cuenta create spare@mail.com --tipo INDIVIDUAL
        cuentatrack cuenta create live@mail.com --tipo COMPLETO --status ACTIVO --cliente 1
    """

    async def _create(db):
        return await db.create_account(
            correo=correo,
            tipo_cuenta=TipoCuenta(tipo.upper()),
            status=EstadoCuenta(status.upper()),
            cliente_id=cliente,
            servicio_id=servicio,
        )

    try:
        account_id = run_with_db(ctx, _create)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account '{correo}' (ID: {account_id})")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="cuenta")
