"""SQLAlchemy models for cuentatrack database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Cuenta(Base):
    """Shared-service account model."""

    __tablename__ = "cuentas"

    id = Column(Integer, primary_key=True)
    correo = Column(String, nullable=False)
    tipo_cuenta = Column(String, nullable=False)
    status = Column(String, nullable=False)
    cliente_id = Column(Integer, ForeignKey("clientes.id"), nullable=True)
    servicio_id = Column(Integer, ForeignKey("servicios.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    reportes = relationship("Reporte", back_populates="cuenta")
    cliente = relationship("Cliente", back_populates="cuentas")
    servicio = relationship("Servicio", back_populates="cuentas")


class Reporte(Base):
    """Account report model. Rows are never updated or deleted."""

    __tablename__ = "reportes"

    id = Column(Integer, primary_key=True)
    cuenta_id = Column(Integer, ForeignKey("cuentas.id"), nullable=False)
    usuario_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False)
    fecha = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    motivo = Column(String, nullable=False)
    detalle = Column(String, nullable=True)

    # Relationships
    cuenta = relationship("Cuenta", back_populates="reportes")


class Usuario(Base):
    """Panel operator model."""

    __tablename__ = "usuarios"

    id = Column(Integer, primary_key=True)
    nombre = Column(String, nullable=False)


class Cliente(Base):
    """Customer model."""

    __tablename__ = "clientes"

    id = Column(Integer, primary_key=True)
    nombre = Column(String, nullable=False)
    apellido = Column(String, nullable=False, default="")

    # Relationships
    cuentas = relationship("Cuenta", back_populates="cliente")


class Servicio(Base):
    """Streaming service model."""

    __tablename__ = "servicios"

    id = Column(Integer, primary_key=True)
    nombre = Column(String, nullable=False)

    # Relationships
    cuentas = relationship("Cuenta", back_populates="servicio")


class HistorialCuenta(Base):
    """Replacement history model."""

    __tablename__ = "historial_cuentas"

    id = Column(Integer, primary_key=True)
    cuenta_anterior_id = Column(Integer, ForeignKey("cuentas.id"), nullable=False)
    cuenta_nueva_id = Column(Integer, ForeignKey("cuentas.id"), nullable=False)
    usuario_id = Column(Integer, ForeignKey("usuarios.id"), nullable=False)
    motivo = Column(String, nullable=False)
    fecha_cambio = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
