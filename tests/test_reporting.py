"""Tests for the reporting operation."""

import asyncio

import pytest

from cuentatrack.domain.account import AccountStore
from cuentatrack.domain.entities import Account, EstadoCuenta, TipoCuenta, User
from cuentatrack.domain.errors import OperationFailed, ValidationError
from cuentatrack.domain.report import ReportRegistry
from cuentatrack.domain.reporting import ReportingOperation


def _loaded_operation(db):
    store = AccountStore(db)
    asyncio.run(store.load_all())
    return ReportingOperation(db, store)


def test_report_active_account(make_fake_db):
    """Reporting an ACTIVO account marks it REPORTADO with exactly one new report."""
    db = make_fake_db(
        accounts=[Account(1, "uno@mail.com", TipoCuenta.INDIVIDUAL, EstadoCuenta.ACTIVO)],
        users=[User(7, "Ana")],
    )
    operation = _loaded_operation(db)

    asyncio.run(operation.execute(1, User(7, "Ana"), "CUENTA CAIDA"))

    store = AccountStore(db)
    registry = ReportRegistry(db)
    asyncio.run(store.load_all())
    asyncio.run(registry.load_all())
    assert store.get(1).status == EstadoCuenta.REPORTADO
    assert len(registry.reports) == 1
    report = registry.reports[0]
    assert (report.cuenta_id, report.usuario_id, report.motivo) == (1, 7, "CUENTA CAIDA")


def test_report_passes_detalle_and_marks_as_expired(fake_db, users):
    operation = _loaded_operation(fake_db)

    asyncio.run(operation.execute(1, users[0], "  OTRO  ", detalle="Pide PIN"))

    assert fake_db.mutations() == [("report_account", 1, 7, "OTRO", "Pide PIN")]


@pytest.mark.parametrize(
    "account_id, motivo, message",
    [
        (None, "CUENTA CAIDA", "accountId"),
        (1, "", "motivo"),
        (1, "   ", "motivo"),
        (1, None, "motivo"),
    ],
)
def test_missing_fields_fail_before_boundary(fake_db, users, account_id, motivo, message):
    operation = _loaded_operation(fake_db)

    with pytest.raises(ValidationError, match=message):
        asyncio.run(operation.execute(account_id, users[0], motivo))

    assert fake_db.mutations() == []


def test_account_id_zero_is_a_real_id(make_fake_db, users):
    db = make_fake_db(
        accounts=[Account(0, "cero@mail.com", TipoCuenta.INDIVIDUAL, EstadoCuenta.ACTIVO)],
        users=users,
    )
    operation = _loaded_operation(db)

    asyncio.run(operation.execute(0, users[0], "CUENTA CAIDA"))

    assert db.mutations() == [("report_account", 0, 7, "CUENTA CAIDA", None)]


def test_missing_acting_user_fails(fake_db):
    operation = _loaded_operation(fake_db)

    with pytest.raises(ValidationError, match="actingUser"):
        asyncio.run(operation.execute(1, None, "CUENTA CAIDA"))


@pytest.mark.parametrize("account_id", [2, 5])
def test_only_active_accounts_can_be_reported(fake_db, users, account_id):
    operation = _loaded_operation(fake_db)

    with pytest.raises(ValidationError, match="expected ACTIVO"):
        asyncio.run(operation.execute(account_id, users[0], "CUENTA CAIDA"))

    assert fake_db.mutations() == []


def test_unknown_account_fails(fake_db, users):
    operation = _loaded_operation(fake_db)

    with pytest.raises(ValidationError, match="not found"):
        asyncio.run(operation.execute(42, users[0], "CUENTA CAIDA"))


def test_boundary_rejection_surfaces_message(fake_db, users):
    fake_db.reject_with = "La cuenta ya fue reportada"
    operation = _loaded_operation(fake_db)

    with pytest.raises(OperationFailed) as exc_info:
        asyncio.run(operation.execute(1, users[0], "CUENTA CAIDA"))

    assert exc_info.value.reason == "La cuenta ya fue reportada"


def test_report_against_sqlite(seeded_db):
    operation = _loaded_operation(seeded_db)

    asyncio.run(operation.execute(1, User(1, "Ana"), "PIN INCORRECTO", "Cambio de PIN"))

    accounts = {a.id: a for a in asyncio.run(seeded_db.list_accounts())}
    reports = asyncio.run(seeded_db.list_reports())
    assert accounts[1].status == EstadoCuenta.REPORTADO
    assert len(reports) == 1
    assert reports[0].cuenta_id == 1
    assert reports[0].detalle == "Cambio de PIN"


def test_sqlite_rejects_report_of_non_active_account(seeded_db):
    """The local store enforces the ACTIVO precondition on its side too."""
    with pytest.raises(OperationFailed, match="expected ACTIVO"):
        asyncio.run(seeded_db.report_account(2, usuario_id=1, motivo="OTRO"))

    assert asyncio.run(seeded_db.list_reports()) == []
