"""Replacement operation: swaps a reported account for a compatible spare."""

import logging
from typing import Optional

from cuentatrack.database.base import Database
from cuentatrack.domain.account import AccountStore
from cuentatrack.domain.entities import Account, EstadoCuenta, TipoCuenta, User
from cuentatrack.domain.errors import (
    ValidationError,
    account_not_found,
    account_not_in_status,
    required_field,
    tipo_mismatch,
)

logger = logging.getLogger(__name__)


class ReplacementOperation:
    """Retires a REPORTADO account and promotes a SINUSAR one of the same type."""

    def __init__(self, db: Database, store: AccountStore):
        self.db = db
        self.store = store

    def candidates(self, old_account: Account) -> list[Account]:
        """Spare accounts that may replace ``old_account``."""
        return self.store.replacement_candidates(old_account)

    def can_submit(self, old_account: Account) -> bool:
        """False when no compatible spare exists."""
        return bool(self.candidates(old_account))

    def validate(
        self,
        old_account_id: Optional[int],
        new_account_id: Optional[int],
        acting_user: Optional[User],
        motivo: Optional[str],
    ) -> Account:
        """Check inputs without contacting the boundary.

        Returns:
            The loaded old account

        Raises:
            ValidationError: If a field is missing, either account is in the
                wrong status, or the types differ
        """
        if old_account_id is None:
            raise ValidationError(required_field("oldAccountId"))
        if new_account_id is None:
            raise ValidationError(required_field("newAccountId"))
        if motivo is None or not motivo.strip():
            raise ValidationError(required_field("motivo"))
        if acting_user is None:
            raise ValidationError(required_field("actingUser"))

        old = self.store.get(old_account_id)
        if old is None:
            raise ValidationError(account_not_found(old_account_id))
        if old.status != EstadoCuenta.REPORTADO:
            raise ValidationError(
                account_not_in_status(
                    old_account_id, old.status.value, EstadoCuenta.REPORTADO.value
                )
            )

        new = self.store.get(new_account_id)
        if new is None:
            raise ValidationError(account_not_found(new_account_id))
        if new.status != EstadoCuenta.SINUSAR:
            raise ValidationError(
                account_not_in_status(
                    new_account_id, new.status.value, EstadoCuenta.SINUSAR.value
                )
            )
        if new.tipo_cuenta != old.tipo_cuenta:
            raise ValidationError(
                tipo_mismatch(
                    old.id, old.tipo_cuenta.value, new.id, new.tipo_cuenta.value
                )
            )
        return old

    async def execute(
        self,
        old_account_id: Optional[int],
        new_account_id: Optional[int],
        acting_user: Optional[User],
        motivo: Optional[str],
    ) -> None:
        """Replace a reported account.

        Routed to the individual or complete endpoint by the old account's type.

        Raises:
            ValidationError: Before any boundary call, on invalid input
            OperationFailed: If the boundary rejects the request
        """
        old = self.validate(old_account_id, new_account_id, acting_user, motivo)
        motivo = motivo.strip()

        if old.tipo_cuenta == TipoCuenta.INDIVIDUAL:
            replace = self.db.replace_individual_account
        else:
            replace = self.db.replace_complete_account

        logger.info(
            "Replacing %s account %s with %s as user %s",
            old.tipo_cuenta.value,
            old.id,
            new_account_id,
            acting_user.id,
        )
        await replace(
            old.id,
            cuenta_nueva_id=new_account_id,
            usuario_id=acting_user.id,
            motivo=motivo,
        )
