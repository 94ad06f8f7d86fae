"""Run CLI actions against the boundary inside one event loop."""

import asyncio
from typing import Any, Awaitable, Callable

import click

from cuentatrack.database.base import Database
from cuentatrack.domain.errors import FetchError
from cuentatrack.domain.workflow import WorkflowCoordinator


def run_with_db(ctx: click.Context, action: Callable[[Database], Awaitable[Any]]) -> Any:
    """Connect, run ``action(db)`` and disconnect."""
    db: Database = ctx.obj["db"]

    async def _main():
        await db.connect()
        await db.initialize_schema()
        try:
            return await action(db)
        finally:
            await db.disconnect()

    return asyncio.run(_main())


def run_workflow(
    ctx: click.Context, action: Callable[[WorkflowCoordinator], Awaitable[Any]]
) -> Any:
    """Load a coordinator and run ``action(coordinator)``.

    Raises:
        FetchError: If the initial batch load fails
    """

    async def _with_coordinator(db: Database):
        coordinator = WorkflowCoordinator(db)
        if not await coordinator.refresh():
            raise FetchError(coordinator.load_error)
        return await action(coordinator)

    return run_with_db(ctx, _with_coordinator)
