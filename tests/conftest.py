"""Shared pytest fixtures for cuentatrack tests."""

import asyncio
import tempfile
import os
from dataclasses import replace
from datetime import datetime, UTC
from typing import Optional

import pytest

from cuentatrack.database.base import Database
from cuentatrack.database.factories import create_sqlite_database
from cuentatrack.domain.entities import (
    Account,
    Client,
    EstadoCuenta,
    ReplacementRecord,
    Report,
    Service,
    TipoCuenta,
    User,
)
from cuentatrack.domain.errors import FetchError, OperationFailed


class FakeDatabase(Database):
    """In-memory boundary with failure injection for coordinator tests.

    ``fail_reads`` names read methods that raise FetchError. ``reject_with``
    makes the next mutation raise OperationFailed. ``gate``, when set to an
    asyncio.Event, holds every mutation until the event is set.
    """

    def __init__(self, accounts=(), reports=(), users=(), clients=(), services=()):
        self.accounts = {a.id: a for a in accounts}
        self.reports = list(reports)
        self.users = list(users)
        self.clients = list(clients)
        self.services = list(services)
        self.history: list[ReplacementRecord] = []
        self.calls: list[tuple] = []
        self.fail_reads: set[str] = set()
        self.reject_with: Optional[str] = None
        self.gate: Optional[asyncio.Event] = None

    async def connect(self) -> None:
        pass

    async def disconnect(self) -> None:
        pass

    async def initialize_schema(self) -> None:
        pass

    async def _read(self, name, items):
        self.calls.append((name,))
        await asyncio.sleep(0)
        if name in self.fail_reads:
            raise FetchError(f"{name} unavailable")
        return list(items)

    async def list_accounts(self):
        return await self._read("list_accounts", self.accounts.values())

    async def list_reports(self):
        return await self._read("list_reports", self.reports)

    async def list_users(self):
        return await self._read("list_users", self.users)

    async def list_clients(self):
        return await self._read("list_clients", self.clients)

    async def list_services(self):
        return await self._read("list_services", self.services)

    async def list_history(self, cuenta_id=None):
        records = await self._read("list_history", self.history)
        if cuenta_id is None:
            return records
        return [
            r for r in records if cuenta_id in (r.cuenta_anterior_id, r.cuenta_nueva_id)
        ]

    async def _mutation(self, call):
        self.calls.append(call)
        if self.gate is not None:
            await self.gate.wait()
        if self.reject_with is not None:
            message, self.reject_with = self.reject_with, None
            raise OperationFailed(message)

    async def report_account(
        self, cuenta_id, usuario_id, motivo, detalle=None, marcar_como_vencida=True
    ):
        await self._mutation(("report_account", cuenta_id, usuario_id, motivo, detalle))
        self.reports.append(
            Report(
                id=len(self.reports) + 1,
                cuenta_id=cuenta_id,
                usuario_id=usuario_id,
                fecha=datetime.now(UTC),
                motivo=motivo,
                detalle=detalle,
            )
        )
        self.accounts[cuenta_id] = replace(
            self.accounts[cuenta_id], status=EstadoCuenta.REPORTADO
        )

    async def _replace(self, name, cuenta_id, cuenta_nueva_id, usuario_id, motivo):
        await self._mutation((name, cuenta_id, cuenta_nueva_id, usuario_id, motivo))
        self.accounts[cuenta_id] = replace(
            self.accounts[cuenta_id], status=EstadoCuenta.REEMPLAZADA
        )
        self.accounts[cuenta_nueva_id] = replace(
            self.accounts[cuenta_nueva_id], status=EstadoCuenta.ACTIVO
        )
        self.history.append(
            ReplacementRecord(
                id=len(self.history) + 1,
                cuenta_anterior_id=cuenta_id,
                cuenta_nueva_id=cuenta_nueva_id,
                usuario_id=usuario_id,
                motivo=motivo,
                fecha_cambio=datetime.now(UTC),
            )
        )

    async def replace_individual_account(self, cuenta_id, cuenta_nueva_id, usuario_id, motivo):
        await self._replace(
            "replace_individual_account", cuenta_id, cuenta_nueva_id, usuario_id, motivo
        )

    async def replace_complete_account(self, cuenta_id, cuenta_nueva_id, usuario_id, motivo):
        await self._replace(
            "replace_complete_account", cuenta_id, cuenta_nueva_id, usuario_id, motivo
        )

    async def create_account(
        self, correo, tipo_cuenta, status=EstadoCuenta.SINUSAR, cliente_id=None, servicio_id=None
    ):
        account_id = max(self.accounts, default=0) + 1
        self.accounts[account_id] = Account(
            id=account_id,
            correo=correo,
            tipo_cuenta=TipoCuenta(tipo_cuenta),
            status=EstadoCuenta(status),
            cliente_id=cliente_id,
            servicio_id=servicio_id,
        )
        return account_id

    async def create_user(self, nombre):
        self.users.append(User(id=len(self.users) + 1, nombre=nombre))
        return len(self.users)

    async def create_client(self, nombre, apellido=""):
        self.clients.append(Client(id=len(self.clients) + 1, nombre=nombre, apellido=apellido))
        return len(self.clients)

    async def create_service(self, nombre):
        self.services.append(Service(id=len(self.services) + 1, nombre=nombre))
        return len(self.services)

    def mutations(self) -> list[tuple]:
        return [c for c in self.calls if not c[0].startswith("list_")]


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    asyncio.run(db.connect())
    asyncio.run(db.initialize_schema())

    yield db

    # Cleanup
    asyncio.run(db.disconnect())
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def seeded_db(temp_db):
    """Temporary database with two users, a client, a service and a mixed pool.

    Accounts: 1 ACTIVO INDIVIDUAL, 2 SINUSAR COMPLETO, 3 SINUSAR INDIVIDUAL,
    4 ACTIVO COMPLETO.
    """

    async def _seed():
        await temp_db.create_user("Ana")
        await temp_db.create_user("Luis")
        cliente_id = await temp_db.create_client("Rosa", "Quispe")
        servicio_id = await temp_db.create_service("Netflix")
        await temp_db.create_account(
            "uno@mail.com", TipoCuenta.INDIVIDUAL, EstadoCuenta.ACTIVO, cliente_id, servicio_id
        )
        await temp_db.create_account("dos@mail.com", TipoCuenta.COMPLETO, EstadoCuenta.SINUSAR)
        await temp_db.create_account("tres@mail.com", TipoCuenta.INDIVIDUAL, EstadoCuenta.SINUSAR)
        await temp_db.create_account(
            "cuatro@mail.com", TipoCuenta.COMPLETO, EstadoCuenta.ACTIVO, cliente_id, servicio_id
        )

    asyncio.run(_seed())
    return temp_db


@pytest.fixture
def users():
    return [User(id=7, nombre="Ana"), User(id=8, nombre="Luis")]


@pytest.fixture
def fake_db(users):
    """In-memory boundary with one active, one reported and two spare accounts."""
    return FakeDatabase(
        accounts=[
            Account(1, "uno@mail.com", TipoCuenta.INDIVIDUAL, EstadoCuenta.ACTIVO),
            Account(2, "dos@mail.com", TipoCuenta.COMPLETO, EstadoCuenta.SINUSAR),
            Account(3, "tres@mail.com", TipoCuenta.INDIVIDUAL, EstadoCuenta.SINUSAR),
            Account(5, "cinco@mail.com", TipoCuenta.INDIVIDUAL, EstadoCuenta.REPORTADO),
        ],
        users=users,
        clients=[Client(1, "Rosa", "Quispe")],
        services=[Service(1, "Netflix")],
    )


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def make_fake_db():
    """Factory for in-memory boundaries with custom contents."""
    return FakeDatabase
