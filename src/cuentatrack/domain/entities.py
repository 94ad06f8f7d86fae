"""Domain model entities for cuentatrack.

These are pure data classes representing business concepts, independent of
how the data-access boundary stores or transports them. Both the local
SQLAlchemy store and the REST client map their records into these types.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class TipoCuenta(str, Enum):
    """Account kind. Immutable once the account is created."""

    INDIVIDUAL = "INDIVIDUAL"
    COMPLETO = "COMPLETO"


class EstadoCuenta(str, Enum):
    """Account lifecycle status."""

    ACTIVO = "ACTIVO"
    REPORTADO = "REPORTADO"
    SINUSAR = "SINUSAR"
    # Expired by the provider; not offered for reporting or replacement
    VENCIDO = "VENCIDO"
    # Terminal: the account was retired by a replacement
    REEMPLAZADA = "REEMPLAZADA"


REPORT_REASONS = (
    "CUENTA CAIDA",
    "SE CAYO EL METODO",
    "SOLICITUD DE REEMBOLSO",
    "PIN INCORRECTO",
    "CUENTA VENCIDA",
    "OTRO",
)


@dataclass(frozen=True)
class Account:
    """Shared-service account domain entity."""

    id: int
    correo: str
    tipo_cuenta: TipoCuenta
    status: EstadoCuenta
    cliente_id: Optional[int] = None
    servicio_id: Optional[int] = None


@dataclass(frozen=True)
class Report:
    """Immutable record that an account was flagged as failing."""

    id: int
    cuenta_id: int
    usuario_id: int
    fecha: datetime
    motivo: str
    detalle: Optional[str] = None


@dataclass(frozen=True)
class User:
    """Panel operator."""

    id: int
    nombre: str


@dataclass(frozen=True)
class Client:
    """Customer that owns accounts."""

    id: int
    nombre: str
    apellido: str = ""


@dataclass(frozen=True)
class Service:
    """Streaming service an account belongs to."""

    id: int
    nombre: str


@dataclass(frozen=True)
class ReplacementRecord:
    """History entry written when a reported account is replaced."""

    id: int
    cuenta_anterior_id: int
    cuenta_nueva_id: int
    usuario_id: int
    motivo: str
    fecha_cambio: datetime
