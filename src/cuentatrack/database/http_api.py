"""REST implementation of the data-access boundary over httpx."""

import logging
from typing import Any, Callable, Optional

import httpx

from cuentatrack.database.base import Database
from cuentatrack.database.mappers import (
    account_from_json,
    report_from_json,
    user_from_json,
    client_from_json,
    service_from_json,
    history_from_json,
)
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

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class HttpApiDatabase(Database):
    """Boundary backed by the panel's REST API."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """Initialize the REST boundary.

        Args:
            base_url: API root, e.g. 'http://localhost:3001/api'
            token: Optional bearer token sent on every request
            timeout: Request timeout in seconds
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            headers = {"Content-Type": "application/json"}
            if self.token:
                headers["Authorization"] = f"Bearer {self.token}"
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=self.timeout,
                transport=self.transport,
            )
        return self._client

    async def connect(self) -> None:
        """Create the HTTP client."""
        self._get_client()

    async def disconnect(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def initialize_schema(self) -> None:
        """The remote API owns its schema."""
        pass

    # Read operations
    async def _get_list(self, path: str, mapper: Callable[[dict[str, Any]], Any]) -> list:
        try:
            response = await self._get_client().get(path)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as e:
            raise FetchError(f"GET {path} returned {e.response.status_code}") from e
        except httpx.RequestError as e:
            raise FetchError(f"GET {path} failed: {e}") from e
        except ValueError as e:
            raise FetchError(f"GET {path} returned invalid JSON") from e

        if not isinstance(payload, list):
            raise FetchError(f"GET {path} did not return a list")
        try:
            return [mapper(item) for item in payload]
        except (KeyError, ValueError, TypeError) as e:
            raise FetchError(f"GET {path} returned malformed data: {e}") from e

    async def list_accounts(self) -> list[Account]:
        """List all accounts."""
        return await self._get_list("/cuentas", account_from_json)

    async def list_reports(self) -> list[Report]:
        """List all reports."""
        return await self._get_list("/reportes", report_from_json)

    async def list_users(self) -> list[User]:
        """List all users."""
        return await self._get_list("/usuarios", user_from_json)

    async def list_clients(self) -> list[Client]:
        """List all clients."""
        return await self._get_list("/clientes", client_from_json)

    async def list_services(self) -> list[Service]:
        """List all services."""
        return await self._get_list("/servicios", service_from_json)

    async def list_history(self, cuenta_id: Optional[int] = None) -> list[ReplacementRecord]:
        """List replacement history, optionally for one account."""
        path = "/historial" if cuenta_id is None else f"/historial/cuenta/{cuenta_id}"
        return await self._get_list(path, history_from_json)

    # Mutation operations
    async def _post(self, path: str, payload: dict[str, Any], fallback: str) -> Any:
        try:
            response = await self._get_client().post(path, json=payload)
        except httpx.TimeoutException as e:
            logger.error("POST %s timed out", path)
            raise OperationFailed(f"Timeout connecting to {self.base_url}") from e
        except httpx.RequestError as e:
            logger.error("POST %s failed: %s", path, e)
            raise OperationFailed(f"Connection error: {e}") from e

        if response.is_success:
            # Some endpoints answer with plain text
            try:
                return response.json()
            except ValueError:
                return None

        message = fallback
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            message = str(body["message"])
        logger.warning("POST %s rejected (%s): %s", path, response.status_code, message)
        raise OperationFailed(message)

    async def report_account(
        self,
        cuenta_id: int,
        usuario_id: int,
        motivo: str,
        detalle: Optional[str] = None,
        marcar_como_vencida: bool = True,
    ) -> None:
        """Create a report for an account and mark it REPORTADO."""
        await self._post(
            f"/reportes/cuenta/{cuenta_id}",
            {
                "usuarioId": usuario_id,
                "motivo": motivo,
                "detalle": detalle or "",
                "marcarComoVencida": marcar_como_vencida,
            },
            "Error al crear el reporte.",
        )

    async def replace_individual_account(
        self, cuenta_id: int, cuenta_nueva_id: int, usuario_id: int, motivo: str
    ) -> None:
        """Replace a reported INDIVIDUAL account with a spare one."""
        await self._post(
            f"/reportes/cuenta/{cuenta_id}/reemplazar-individual",
            {"cuentaNuevaId": cuenta_nueva_id, "usuarioId": usuario_id, "motivo": motivo},
            "Error al reemplazar la cuenta.",
        )

    async def replace_complete_account(
        self, cuenta_id: int, cuenta_nueva_id: int, usuario_id: int, motivo: str
    ) -> None:
        """Replace a reported COMPLETO account with a spare one."""
        await self._post(
            f"/reportes/cuenta/{cuenta_id}/reemplazar-completa",
            {"cuentaNuevaId": cuenta_nueva_id, "usuarioId": usuario_id, "motivo": motivo},
            "Error al reemplazar la cuenta.",
        )

    # Seeding operations
    async def create_account(
        self,
        correo: str,
        tipo_cuenta: TipoCuenta,
        status: EstadoCuenta = EstadoCuenta.SINUSAR,
        cliente_id: Optional[int] = None,
        servicio_id: Optional[int] = None,
    ) -> int:
        """Create an account. Returns account ID."""
        data = await self._post(
            "/cuentas",
            {
                "correo": correo,
                "tipoCuenta": TipoCuenta(tipo_cuenta).value,
                "status": EstadoCuenta(status).value,
                "clienteId": cliente_id,
                "servicioId": servicio_id,
            },
            "Error al crear la cuenta.",
        )
        return _created_id(data)

    async def create_user(self, nombre: str) -> int:
        """Create a user. Returns user ID."""
        data = await self._post("/usuarios", {"nombre": nombre}, "Error al crear el usuario.")
        return _created_id(data)

    async def create_client(self, nombre: str, apellido: str = "") -> int:
        """Create a client. Returns client ID."""
        data = await self._post(
            "/clientes", {"nombre": nombre, "apellido": apellido}, "Error al crear el cliente."
        )
        return _created_id(data)

    async def create_service(self, nombre: str) -> int:
        """Create a service. Returns service ID."""
        data = await self._post("/servicios", {"nombre": nombre}, "Error al crear el servicio.")
        return _created_id(data)


def _created_id(data: Any) -> int:
    if not isinstance(data, dict) or "id" not in data:
        raise OperationFailed("API did not return the created id")
    return int(data["id"])
