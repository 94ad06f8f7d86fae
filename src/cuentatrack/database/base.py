"""Abstract data-access boundary."""

from abc import ABC, abstractmethod
from typing import Optional

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


class Database(ABC):
    """Asynchronous data-access boundary for cuentatrack.

    Read methods raise ``FetchError`` when the data cannot be loaded.
    Mutation methods raise ``OperationFailed`` when the boundary rejects
    the request; its message is shown to the operator unchanged.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Open the underlying connection."""
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Release the underlying connection."""
        pass

    @abstractmethod
    async def initialize_schema(self) -> None:
        """Initialize storage schema, where the boundary owns one."""
        pass

    # Read operations
    @abstractmethod
    async def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    @abstractmethod
    async def list_reports(self) -> list[Report]:
        """List all reports."""
        pass

    @abstractmethod
    async def list_users(self) -> list[User]:
        """List all users."""
        pass

    @abstractmethod
    async def list_clients(self) -> list[Client]:
        """List all clients."""
        pass

    @abstractmethod
    async def list_services(self) -> list[Service]:
        """List all services."""
        pass

    @abstractmethod
    async def list_history(self, cuenta_id: Optional[int] = None) -> list[ReplacementRecord]:
        """List replacement history, optionally for one account (either side)."""
        pass

    # Mutation operations
    @abstractmethod
    async def report_account(
        self,
        cuenta_id: int,
        usuario_id: int,
        motivo: str,
        detalle: Optional[str] = None,
        marcar_como_vencida: bool = True,
    ) -> None:
        """Create a report for an account and mark it REPORTADO."""
        pass

    @abstractmethod
    async def replace_individual_account(
        self, cuenta_id: int, cuenta_nueva_id: int, usuario_id: int, motivo: str
    ) -> None:
        """Replace a reported INDIVIDUAL account with a spare one."""
        pass

    @abstractmethod
    async def replace_complete_account(
        self, cuenta_id: int, cuenta_nueva_id: int, usuario_id: int, motivo: str
    ) -> None:
        """Replace a reported COMPLETO account with a spare one."""
        pass

    # Seeding operations
    @abstractmethod
    async def create_account(
        self,
        correo: str,
        tipo_cuenta: TipoCuenta,
        status: EstadoCuenta = EstadoCuenta.SINUSAR,
        cliente_id: Optional[int] = None,
        servicio_id: Optional[int] = None,
    ) -> int:
        """Create an account. Returns account ID."""
        pass

    @abstractmethod
    async def create_user(self, nombre: str) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    async def create_client(self, nombre: str, apellido: str = "") -> int:
        """Create a client. Returns client ID."""
        pass

    @abstractmethod
    async def create_service(self, nombre: str) -> int:
        """Create a service. Returns service ID."""
        pass
