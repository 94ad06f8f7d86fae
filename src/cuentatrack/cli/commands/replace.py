"""Replacement commands."""

import click

from cuentatrack.cli.error_handling import handle_domain_error
from cuentatrack.cli.session import run_workflow
from cuentatrack.domain.errors import DomainError
from cuentatrack.utils.account_resolver import resolve_account, resolve_user


@click.group()
def replace_group():
    """Replace reported accounts from the spare pool."""
    pass


@replace_group.command("candidates")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def list_candidates(ctx, account: str):
    """List spare accounts that can replace a reported ACCOUNT."""

    async def _candidates(coordinator):
        old = resolve_account(coordinator.accounts, account)
        coordinator.request_replacement(old)
        return old, coordinator.replacement_candidates()

    try:
        old, candidates = run_workflow(ctx, _candidates)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not candidates:
        click.echo(
            f"No spare {old.tipo_cuenta.value} accounts available to replace '{old.correo}'."
        )
        return

    click.echo(f"\nCandidates for '{old.correo}' ({old.tipo_cuenta.value}):")
    click.echo("-" * 60)
    for acc in candidates:
        click.echo(f"ID: {acc.id:3d} | {acc.correo}")


@replace_group.command("create")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_account", metavar="NEW_ACCOUNT")
@click.option("--motivo", required=True, help="Replacement reason")
@click.pass_context
def create_replacement(ctx, account: str, new_account: str, motivo: str):
    """Replace reported ACCOUNT with spare NEW_ACCOUNT.

    Both accounts can be given by correo or ID and must have the same type.

    Examples:
        cuentatrack --user 7 reemplazo create 1 3 --motivo "Garantia por cuenta caida"
    """

    async def _replace(coordinator):
        old = resolve_account(coordinator.accounts, account)
        user = resolve_user(coordinator.users, ctx.obj["user"])
        coordinator.request_replacement(old)
        if not coordinator.can_submit():
            raise DomainError(
                f"No spare {old.tipo_cuenta.value} accounts available to replace '{old.correo}'"
            )
        new = resolve_account(coordinator.accounts, new_account)
        if not await coordinator.submit_replacement(new.id, user, motivo):
            raise DomainError(coordinator.notice)
        return old, new

    try:
        old, new = run_workflow(ctx, _replace)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Replaced '{old.correo}' (ID: {old.id}) with '{new.correo}' (ID: {new.id})")


def register_commands(cli):
    """Register replacement commands with main CLI."""
    cli.add_command(replace_group, name="reemplazo")
