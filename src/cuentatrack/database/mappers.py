"""Mapper functions to convert boundary records into domain entities.

ORM rows come from the local SQLAlchemy store; JSON payloads come from the
REST API, which uses camelCase field names.
"""

from datetime import datetime, UTC
from typing import Any

from dateutil import parser as date_parser

from cuentatrack.domain import entities as domain
from cuentatrack.database.models import (
    Cuenta as ORMCuenta,
    Reporte as ORMReporte,
    Usuario as ORMUsuario,
    Cliente as ORMCliente,
    Servicio as ORMServicio,
    HistorialCuenta as ORMHistorialCuenta,
)


def account_to_domain(orm_cuenta: ORMCuenta) -> domain.Account:
    """Convert SQLAlchemy Cuenta model to domain Account entity."""
    return domain.Account(
        id=orm_cuenta.id,
        correo=orm_cuenta.correo,
        tipo_cuenta=domain.TipoCuenta(orm_cuenta.tipo_cuenta),
        status=domain.EstadoCuenta(orm_cuenta.status),
        cliente_id=orm_cuenta.cliente_id,
        servicio_id=orm_cuenta.servicio_id,
    )


def report_to_domain(orm_reporte: ORMReporte) -> domain.Report:
    """Convert SQLAlchemy Reporte model to domain Report entity."""
    return domain.Report(
        id=orm_reporte.id,
        cuenta_id=orm_reporte.cuenta_id,
        usuario_id=orm_reporte.usuario_id,
        fecha=_as_utc(orm_reporte.fecha),
        motivo=orm_reporte.motivo,
        detalle=orm_reporte.detalle,
    )


def user_to_domain(orm_usuario: ORMUsuario) -> domain.User:
    """Convert SQLAlchemy Usuario model to domain User entity."""
    return domain.User(id=orm_usuario.id, nombre=orm_usuario.nombre)


def client_to_domain(orm_cliente: ORMCliente) -> domain.Client:
    """Convert SQLAlchemy Cliente model to domain Client entity."""
    return domain.Client(
        id=orm_cliente.id,
        nombre=orm_cliente.nombre,
        apellido=orm_cliente.apellido or "",
    )


def service_to_domain(orm_servicio: ORMServicio) -> domain.Service:
    """Convert SQLAlchemy Servicio model to domain Service entity."""
    return domain.Service(id=orm_servicio.id, nombre=orm_servicio.nombre)


def history_to_domain(orm_historial: ORMHistorialCuenta) -> domain.ReplacementRecord:
    """Convert SQLAlchemy HistorialCuenta model to domain ReplacementRecord."""
    return domain.ReplacementRecord(
        id=orm_historial.id,
        cuenta_anterior_id=orm_historial.cuenta_anterior_id,
        cuenta_nueva_id=orm_historial.cuenta_nueva_id,
        usuario_id=orm_historial.usuario_id,
        motivo=orm_historial.motivo,
        fecha_cambio=_as_utc(orm_historial.fecha_cambio),
    )


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on the way back
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _parse_timestamp(value: Any) -> datetime:
    if isinstance(value, datetime):
        return _as_utc(value)
    return _as_utc(date_parser.isoparse(str(value)))


def account_from_json(data: dict[str, Any]) -> domain.Account:
    """Convert an API account payload to a domain Account entity.

    Raises:
        KeyError, ValueError, TypeError: If the payload is malformed
    """
    return domain.Account(
        id=int(data["id"]),
        correo=str(data["correo"]),
        tipo_cuenta=domain.TipoCuenta(data["tipoCuenta"]),
        status=domain.EstadoCuenta(data["status"]),
        cliente_id=data.get("clienteId"),
        servicio_id=data.get("servicioId"),
    )


def report_from_json(data: dict[str, Any]) -> domain.Report:
    """Convert an API report payload to a domain Report entity."""
    return domain.Report(
        id=int(data["id"]),
        cuenta_id=int(data["cuentaId"]),
        usuario_id=int(data["usuarioId"]),
        fecha=_parse_timestamp(data["fecha"]),
        motivo=str(data["motivo"]),
        detalle=data.get("detalle"),
    )


def user_from_json(data: dict[str, Any]) -> domain.User:
    """Convert an API user payload to a domain User entity."""
    return domain.User(id=int(data["id"]), nombre=str(data["nombre"]))


def client_from_json(data: dict[str, Any]) -> domain.Client:
    """Convert an API client payload to a domain Client entity."""
    return domain.Client(
        id=int(data["id"]),
        nombre=str(data["nombre"]),
        apellido=str(data.get("apellido") or ""),
    )


def service_from_json(data: dict[str, Any]) -> domain.Service:
    """Convert an API service payload to a domain Service entity."""
    return domain.Service(id=int(data["id"]), nombre=str(data["nombre"]))


def history_from_json(data: dict[str, Any]) -> domain.ReplacementRecord:
    """Convert an API history payload to a domain ReplacementRecord."""
    return domain.ReplacementRecord(
        id=int(data["id"]),
        cuenta_anterior_id=int(data["cuentaAnteriorId"]),
        cuenta_nueva_id=int(data["cuentaNuevaId"]),
        usuario_id=int(data["usuarioId"]),
        motivo=str(data["motivo"]),
        fecha_cambio=_parse_timestamp(data["fechaCambio"]),
    )
