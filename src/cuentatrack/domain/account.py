"""Account store: the loaded set of accounts and its derived views."""

import logging
from typing import Iterable, Optional

from cuentatrack.database.base import Database
from cuentatrack.domain.entities import Account, EstadoCuenta, TipoCuenta

logger = logging.getLogger(__name__)


def by_status_and_type(
    accounts: Iterable[Account],
    status: Optional[EstadoCuenta] = None,
    tipo: Optional[TipoCuenta] = None,
) -> list[Account]:
    """Filter accounts by status and/or type, keeping input order."""
    return [
        acc
        for acc in accounts
        if (status is None or acc.status == status)
        and (tipo is None or acc.tipo_cuenta == tipo)
    ]


def search_by_correo(accounts: Iterable[Account], term: Optional[str]) -> list[Account]:
    """Case-insensitive substring match on correo. Empty term matches all."""
    if not term:
        return list(accounts)
    needle = term.lower()
    return [acc for acc in accounts if needle in acc.correo.lower()]


class AccountStore:
    """Authoritative list of accounts as last loaded from the boundary."""

    def __init__(self, db: Database, accounts: Optional[Iterable[Account]] = None):
        """Initialize account store.

        Args:
            db: Data-access boundary
            accounts: Optional initial contents (defaults to empty)
        """
        self.db = db
        self.accounts: list[Account] = list(accounts or [])

    async def load_all(self) -> list[Account]:
        """Fetch the full current set of accounts, replacing the loaded one.

        Raises:
            FetchError: If the boundary is unreachable or returns malformed data
        """
        accounts = await self.db.list_accounts()
        self.accounts = list(accounts)
        logger.debug("Loaded %d accounts", len(self.accounts))
        return self.accounts

    def get(self, account_id: int) -> Optional[Account]:
        """Return the loaded account with this id, or None."""
        for acc in self.accounts:
            if acc.id == account_id:
                return acc
        return None

    def by_status_and_type(
        self, status: Optional[EstadoCuenta] = None, tipo: Optional[TipoCuenta] = None
    ) -> list[Account]:
        """Pure filter over the loaded accounts."""
        return by_status_and_type(self.accounts, status, tipo)

    def active(self, tipo: Optional[TipoCuenta] = None) -> list[Account]:
        """Accounts that may be reported."""
        return self.by_status_and_type(EstadoCuenta.ACTIVO, tipo)

    def spare(self, tipo: Optional[TipoCuenta] = None) -> list[Account]:
        """Accounts held in stock."""
        return self.by_status_and_type(EstadoCuenta.SINUSAR, tipo)

    def reported(self, tipo: Optional[TipoCuenta] = None) -> list[Account]:
        """Accounts waiting for a replacement."""
        return self.by_status_and_type(EstadoCuenta.REPORTADO, tipo)

    def reported_by_type(self) -> dict[TipoCuenta, list[Account]]:
        """Reported accounts partitioned into the individual and complete lists."""
        return {tipo: self.reported(tipo) for tipo in TipoCuenta}

    def reporting_candidates(
        self, tipo: Optional[TipoCuenta] = None, search: Optional[str] = None
    ) -> list[Account]:
        """Active accounts, optionally narrowed by type and a correo search term."""
        return search_by_correo(self.active(tipo), search)

    def replacement_candidates(self, old_account: Account) -> list[Account]:
        """Spare accounts of the same type as the reported account.

        An empty list is a valid state: the caller must not offer submission.
        """
        return self.spare(old_account.tipo_cuenta)
