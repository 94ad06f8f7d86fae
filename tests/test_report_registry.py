"""Tests for the report registry."""

import asyncio
from datetime import datetime, UTC

import pytest

from cuentatrack.domain.entities import Report, User
from cuentatrack.domain.report import (
    NO_DETAIL,
    UNKNOWN_USER,
    ReportDetail,
    ReportRegistry,
    most_recent,
)


def _report(report_id, cuenta_id, day, motivo="CUENTA CAIDA", detalle=None, usuario_id=7):
    return Report(
        id=report_id,
        cuenta_id=cuenta_id,
        usuario_id=usuario_id,
        fecha=datetime(2024, 5, day, tzinfo=UTC),
        motivo=motivo,
        detalle=detalle,
    )


@pytest.fixture
def registry(fake_db):
    return ReportRegistry(
        fake_db,
        [
            _report(1, 10, 3, "PIN INCORRECTO"),
            _report(2, 10, 9, "CUENTA VENCIDA"),
            _report(3, 11, 1),
            _report(4, 10, 5, "OTRO"),
        ],
    )


def test_most_recent_for_picks_max_fecha(registry):
    latest = registry.most_recent_for(10)
    assert latest.id == 2
    assert latest.motivo == "CUENTA VENCIDA"


def test_most_recent_for_absent(registry):
    assert registry.most_recent_for(99) is None


def test_most_recent_tie_keeps_first_in_input_order():
    first = _report(1, 10, 9, "PRIMERO")
    second = _report(2, 10, 9, "SEGUNDO")

    assert most_recent([first, second]) is first
    assert most_recent([second, first]) is second


def test_for_account_and_get(registry):
    assert [r.id for r in registry.for_account(10)] == [1, 2, 4]
    assert registry.get(3).cuenta_id == 11
    assert registry.get(42) is None


def test_load_all(make_fake_db):
    reports = [_report(1, 1, 1), _report(2, 1, 2)]
    registry = ReportRegistry(make_fake_db(reports=reports))

    loaded = asyncio.run(registry.load_all())

    assert loaded == reports
    assert registry.most_recent_for(1).id == 2


def test_report_detail_resolves_user_and_placeholders():
    users = [User(7, "Ana")]

    detail = ReportDetail.describe(_report(1, 10, 3, detalle="Sin acceso"), users)
    assert detail.reported_by == "Ana"
    assert detail.detalle == "Sin acceso"

    detail = ReportDetail.describe(_report(2, 10, 3, usuario_id=99), users)
    assert detail.reported_by == UNKNOWN_USER
    assert detail.detalle == NO_DETAIL
