"""Report commands: file reports and inspect reported accounts."""

import click

from cuentatrack.cli.error_handling import handle_domain_error
from cuentatrack.cli.session import run_workflow
from cuentatrack.domain.entities import REPORT_REASONS, TipoCuenta
from cuentatrack.domain.errors import DomainError
from cuentatrack.domain.report import NO_REPORT
from cuentatrack.utils.account_resolver import resolve_account, resolve_user

TIPO_LABELS = {
    TipoCuenta.INDIVIDUAL: "Reportadas - Individual",
    TipoCuenta.COMPLETO: "Reportadas - Completa",
}


@click.group()
def report_group():
    """Report failing accounts."""
    pass


@report_group.command("create")
@click.argument("account", metavar="ACCOUNT")
@click.option(
    "--motivo",
    required=True,
    help=f"Reason, usually one of: {', '.join(REPORT_REASONS)}",
)
@click.option("--detalle", help="Additional details")
@click.pass_context
def create_report(ctx, account: str, motivo: str, detalle: str | None):
    """Report an active account.

    ACCOUNT can be an account correo or ID. The acting user comes from
    --user or CUENTATRACK_USER.

    Examples:
        cuentatrack --user 7 reporte create 1 --motivo "CUENTA CAIDA"
        cuentatrack --user Ana reporte create a@mail.com --motivo OTRO --detalle "Pide PIN"
    """

    async def _report(coordinator):
        acc = resolve_account(coordinator.accounts, account)
        user = resolve_user(coordinator.users, ctx.obj["user"])
        coordinator.request_report()
        if not await coordinator.submit_report(acc.id, user, motivo, detalle):
            raise DomainError(coordinator.notice)
        return acc, coordinator.store.get(acc.id)

    try:
        before, after = run_workflow(ctx, _report)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Reported account '{before.correo}' (ID: {before.id})")
    if after is not None:
        click.echo(f"Status: {after.status.value}")


@report_group.command("candidates")
@click.option("--tipo", type=click.Choice([t.value for t in TipoCuenta], case_sensitive=False), help="Only one account type")
@click.option("--search", help="Case-insensitive correo substring")
@click.pass_context
def list_candidates(ctx, tipo: str | None, search: str | None):
    """List active accounts that can be reported."""

    async def _candidates(coordinator):
        return coordinator.store.reporting_candidates(
            TipoCuenta(tipo.upper()) if tipo else None, search
        )

    try:
        accounts = run_workflow(ctx, _candidates)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not accounts:
        click.echo("No active accounts to report.")
        return

    for acc in accounts:
        click.echo(f"ID: {acc.id:3d} | {acc.correo:30s} | {acc.tipo_cuenta.value}")


@report_group.command("list")
@click.option("--tipo", type=click.Choice([t.value for t in TipoCuenta], case_sensitive=False), help="Only one account type")
@click.pass_context
def list_reports(ctx, tipo: str | None):
    """List reported accounts with their most recent report."""

    async def _list(coordinator):
        partitions = coordinator.store.reported_by_type()
        return [
            (t, [(acc, coordinator.registry.most_recent_for(acc.id)) for acc in accounts])
            for t, accounts in partitions.items()
            if tipo is None or t.value == tipo.upper()
        ]

    try:
        sections = run_workflow(ctx, _list)
    except DomainError as e:
        handle_domain_error(ctx, e)

    for t, rows in sections:
        click.echo(f"\n{TIPO_LABELS[t]}:")
        click.echo("-" * 70)
        if not rows:
            click.echo("No reported accounts of this type.")
            continue
        for acc, latest in rows:
            last = latest.motivo if latest is not None else NO_REPORT
            click.echo(f"ID: {acc.id:3d} | {acc.correo:30s} | {last}")


@report_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_report(ctx, account: str):
    """Show the most recent report for an account."""

    async def _show(coordinator):
        acc = resolve_account(coordinator.accounts, account)
        latest = coordinator.registry.most_recent_for(acc.id)
        if latest is None:
            return acc, None
        coordinator.request_detail(latest)
        detail = coordinator.detail()
        coordinator.close()
        return acc, detail

    try:
        acc, detail = run_workflow(ctx, _show)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if detail is None:
        click.echo(f"{acc.correo}: {NO_REPORT}")
        return

    click.echo(f"Cuenta: {acc.correo} (ID: {acc.id})")
    click.echo(f"Motivo: {detail.report.motivo}")
    click.echo(f"Detalle: {detail.detalle}")
    click.echo(f"Reportado por: {detail.reported_by}")
    click.echo(f"Fecha: {detail.report.fecha.strftime('%d/%m/%Y')}")


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="reporte")
