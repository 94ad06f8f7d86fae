"""Replacement history reader."""

from typing import Optional

from cuentatrack.database.base import Database
from cuentatrack.domain.entities import ReplacementRecord


class ReplacementHistory:
    """Read access to the replacement records written by the boundary."""

    def __init__(self, db: Database):
        self.db = db

    async def load_all(self) -> list[ReplacementRecord]:
        """All replacement records, newest first."""
        return _newest_first(await self.db.list_history())

    async def for_account(self, cuenta_id: int) -> list[ReplacementRecord]:
        """Records where the account was replaced or was the replacement, newest first."""
        return _newest_first(await self.db.list_history(cuenta_id=cuenta_id))

    @staticmethod
    def describe(record: ReplacementRecord, accounts, users) -> dict[str, Optional[str]]:
        """Resolve correo and user names for display."""
        correos = {acc.id: acc.correo for acc in accounts}
        nombres = {u.id: u.nombre for u in users}
        return {
            "anterior": correos.get(record.cuenta_anterior_id),
            "nueva": correos.get(record.cuenta_nueva_id),
            "usuario": nombres.get(record.usuario_id),
        }


def _newest_first(records: list[ReplacementRecord]) -> list[ReplacementRecord]:
    return sorted(records, key=lambda r: r.fecha_cambio, reverse=True)
