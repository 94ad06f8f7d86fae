"""Main CLI entry point."""

import logging

import click
from cuentatrack.database.factories import create_database

# Import and register all commands at module level
from cuentatrack.cli.commands import account, catalog, history, replace, report


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides CUENTATRACK_DB_PATH environment variable)",
    envvar="CUENTATRACK_DB_PATH",
)
@click.option(
    "--api-url",
    help="REST API root; when set, the API is used instead of the local database",
    envvar="CUENTATRACK_API_URL",
)
@click.option(
    "--user",
    help="Acting user ID or name for reports and replacements",
    envvar="CUENTATRACK_USER",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    envvar="CUENTATRACK_LOG_LEVEL",
    help="Logging level (default: WARNING)",
)
@click.pass_context
def cli(ctx, db_path: str | None, api_url: str | None, user: str | None, log_level: str):
    """Cuentatrack - Shared-service account admin panel.

    Report failing accounts and replace them from the spare pool.
    """
    ctx.ensure_object(dict)
    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj["user"] = user

    # Build the boundary only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        try:
            ctx.obj["db"] = create_database(database_path=db_path, api_url=api_url)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            ctx.exit(1)


# Register all commands
account.register_commands(cli)
catalog.register_commands(cli)
report.register_commands(cli)
replace.register_commands(cli)
history.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
