"""Replacement history command."""

import click

from cuentatrack.cli.error_handling import handle_domain_error
from cuentatrack.cli.session import run_workflow
from cuentatrack.domain.errors import DomainError
from cuentatrack.domain.history import ReplacementHistory
from cuentatrack.utils.account_resolver import resolve_account


@click.command("historial")
@click.argument("account", metavar="ACCOUNT", required=False)
@click.pass_context
def show_history(ctx, account: str | None):
    """Show replacement history, optionally for one ACCOUNT (correo or ID)."""

    async def _history(coordinator):
        history = ReplacementHistory(coordinator.db)
        if account is None:
            records = await history.load_all()
        else:
            acc = resolve_account(coordinator.accounts, account)
            records = await history.for_account(acc.id)
        return [
            (r, history.describe(r, coordinator.accounts, coordinator.users))
            for r in records
        ]

    try:
        rows = run_workflow(ctx, _history)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not rows:
        click.echo("No replacements found.")
        return

    click.echo(f"\nFound {len(rows)} replacement(s):")
    click.echo("-" * 100)
    for record, names in rows:
        anterior = names["anterior"] or f"#{record.cuenta_anterior_id}"
        nueva = names["nueva"] or f"#{record.cuenta_nueva_id}"
        usuario = names["usuario"] or "Desconocido"
        click.echo(
            f"{record.fecha_cambio.strftime('%d/%m/%Y')} | {anterior} -> {nueva} | "
            f"{usuario} | {record.motivo}"
        )


def register_commands(cli):
    """Register history command with main CLI."""
    cli.add_command(show_history)
