"""Reporting operation: flags an active account as failing."""

import logging
from typing import Optional

from cuentatrack.database.base import Database
from cuentatrack.domain.account import AccountStore
from cuentatrack.domain.entities import EstadoCuenta, User
from cuentatrack.domain.errors import (
    ValidationError,
    account_not_found,
    account_not_in_status,
    required_field,
)

logger = logging.getLogger(__name__)


class ReportingOperation:
    """Transitions an ACTIVO account to REPORTADO, creating one report."""

    def __init__(self, db: Database, store: AccountStore):
        """Initialize reporting operation.

        Args:
            db: Data-access boundary
            store: Loaded accounts, used to check preconditions locally
        """
        self.db = db
        self.store = store

    def validate(
        self, account_id: Optional[int], acting_user: Optional[User], motivo: Optional[str]
    ) -> None:
        """Check inputs without contacting the boundary.

        Raises:
            ValidationError: If a required field is missing or the account
                is not a loaded ACTIVO account
        """
        if account_id is None:
            raise ValidationError(required_field("accountId"))
        if motivo is None or not motivo.strip():
            raise ValidationError(required_field("motivo"))
        if acting_user is None:
            raise ValidationError(required_field("actingUser"))

        account = self.store.get(account_id)
        if account is None:
            raise ValidationError(account_not_found(account_id))
        if account.status != EstadoCuenta.ACTIVO:
            raise ValidationError(
                account_not_in_status(account_id, account.status.value, EstadoCuenta.ACTIVO.value)
            )

    async def execute(
        self,
        account_id: Optional[int],
        acting_user: Optional[User],
        motivo: Optional[str],
        detalle: Optional[str] = None,
    ) -> None:
        """Report an account.

        The caller must reload to observe the effect; nothing is patched locally.

        Raises:
            ValidationError: Before any boundary call, on invalid input
            OperationFailed: If the boundary rejects the request
        """
        self.validate(account_id, acting_user, motivo)
        motivo = motivo.strip()
        logger.info("Reporting account %s as user %s: %s", account_id, acting_user.id, motivo)
        await self.db.report_account(
            account_id,
            usuario_id=acting_user.id,
            motivo=motivo,
            detalle=detalle or None,
            marcar_como_vencida=True,
        )
