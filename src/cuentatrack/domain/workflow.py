"""Workflow coordinator for the report and replacement screens.

Holds the five loaded collections and the open modal. Every mutation is
followed by a full reload of accounts and reports; nothing is patched
locally, so the caller only ever sees state confirmed by the boundary.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional, Union

from cuentatrack.database.base import Database
from cuentatrack.domain.account import AccountStore
from cuentatrack.domain.entities import (
    Account,
    Client,
    EstadoCuenta,
    Report,
    Service,
    User,
)
from cuentatrack.domain.errors import (
    FetchError,
    OperationFailed,
    ValidationError,
    account_not_in_status,
)
from cuentatrack.domain.replacement import ReplacementOperation
from cuentatrack.domain.report import ReportDetail, ReportRegistry
from cuentatrack.domain.reporting import ReportingOperation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoModal:
    """Nothing open."""


@dataclass(frozen=True)
class Reporting:
    """The report form is open."""


@dataclass(frozen=True)
class Replacing:
    """The replacement form is open for a reported account."""

    old: Account


@dataclass(frozen=True)
class ViewingDetail:
    """A report's detail is being shown."""

    report: Report


Modal = Union[NoModal, Reporting, Replacing, ViewingDetail]

LOAD_ERROR_MESSAGE = "No se pudieron cargar los datos iniciales."


class WorkflowCoordinator:
    """Orchestrates loading and the two mutations for one operator session."""

    def __init__(self, db: Database):
        self.db = db
        self.store = AccountStore(db)
        self.registry = ReportRegistry(db)
        self.users: list[User] = []
        self.clients: list[Client] = []
        self.services: list[Service] = []
        self.modal: Modal = NoModal()
        self.load_error: Optional[str] = None
        self.notice: Optional[str] = None
        self.loading = False
        self.submitting = False

    @property
    def accounts(self) -> list[Account]:
        return self.store.accounts

    @property
    def reports(self) -> list[Report]:
        return self.registry.reports

    # Loading
    async def refresh(self) -> bool:
        """Reload all five collections as one all-or-nothing batch.

        On failure every collection is cleared and ``load_error`` is set;
        retry is up to the caller.

        Returns:
            True if the batch loaded
        """
        staged_store = AccountStore(self.db)
        staged_registry = ReportRegistry(self.db)
        self.loading = True
        logger.debug("Loading accounts, reports, users, clients and services")
        try:
            _, _, users, clients, services = await asyncio.gather(
                staged_store.load_all(),
                staged_registry.load_all(),
                self.db.list_users(),
                self.db.list_clients(),
                self.db.list_services(),
            )
        except FetchError as e:
            logger.error("Batch load failed: %s", e)
            self.store = AccountStore(self.db)
            self.registry = ReportRegistry(self.db)
            self.users, self.clients, self.services = [], [], []
            self.load_error = LOAD_ERROR_MESSAGE
            return False
        finally:
            self.loading = False

        self.store = staged_store
        self.registry = staged_registry
        self.users = list(users)
        self.clients = list(clients)
        self.services = list(services)
        self.load_error = None
        logger.info(
            "Loaded %d accounts and %d reports", len(self.accounts), len(self.reports)
        )
        return True

    # Modal transitions
    def request_report(self) -> None:
        """Open the report form."""
        self.notice = None
        self.modal = Reporting()

    def request_replacement(self, old: Account) -> None:
        """Open the replacement form for a reported account.

        Raises:
            ValidationError: If the account is not REPORTADO
        """
        if old.status != EstadoCuenta.REPORTADO:
            raise ValidationError(
                account_not_in_status(old.id, old.status.value, EstadoCuenta.REPORTADO.value)
            )
        self.notice = None
        self.modal = Replacing(old)

    def request_detail(self, report: Report) -> None:
        """Show a report's detail."""
        self.notice = None
        self.modal = ViewingDetail(report)

    def close(self) -> None:
        """Close whatever is open. In-flight requests are not cancelled."""
        self.notice = None
        self.modal = NoModal()

    def dismiss_notice(self) -> None:
        self.notice = None

    # Derived views
    def replacement_candidates(self) -> list[Account]:
        """Compatible spares for the open replacement form, else empty."""
        if isinstance(self.modal, Replacing):
            return self.store.replacement_candidates(self.modal.old)
        return []

    def can_submit(self) -> bool:
        """Whether the open form may be submitted right now."""
        if self.submitting:
            return False
        if isinstance(self.modal, Reporting):
            return True
        if isinstance(self.modal, Replacing):
            return bool(self.replacement_candidates())
        return False

    def detail(self) -> Optional[ReportDetail]:
        """Display view of the report being shown, if any."""
        if isinstance(self.modal, ViewingDetail):
            return ReportDetail.describe(self.modal.report, self.users)
        return None

    def user(self, user_id: int) -> Optional[User]:
        for u in self.users:
            if u.id == user_id:
                return u
        return None

    # Mutations
    async def submit_report(
        self,
        account_id: Optional[int],
        acting_user: Optional[User],
        motivo: Optional[str],
        detalle: Optional[str] = None,
    ) -> bool:
        """Submit the open report form.

        Returns:
            True on success. On failure ``notice`` holds the message and the
            form stays open.
        """
        if not isinstance(self.modal, Reporting):
            raise ValidationError("The report form is not open")
        operation = ReportingOperation(self.db, self.store)
        return await self._submit(
            operation.execute(account_id, acting_user, motivo, detalle)
        )

    async def submit_replacement(
        self,
        new_account_id: Optional[int],
        acting_user: Optional[User],
        motivo: Optional[str],
    ) -> bool:
        """Submit the open replacement form.

        Returns:
            True on success. On failure ``notice`` holds the message and the
            form stays open.
        """
        if not isinstance(self.modal, Replacing):
            raise ValidationError("The replacement form is not open")
        if not self.replacement_candidates():
            raise ValidationError(
                f"No spare {self.modal.old.tipo_cuenta.value} accounts available"
            )
        operation = ReplacementOperation(self.db, self.store)
        return await self._submit(
            operation.execute(self.modal.old.id, new_account_id, acting_user, motivo)
        )

    async def _submit(self, call) -> bool:
        if self.submitting:
            call.close()
            raise ValidationError("Another operation is already in progress")

        opened = self.modal
        self.submitting = True
        self.notice = None
        try:
            await call
        except ValidationError as e:
            self.notice = str(e)
            return False
        except OperationFailed as e:
            logger.warning("Operation rejected: %s", e.reason)
            # The boundary was contacted; learn the true state
            await self.refresh()
            if self.modal is opened:
                self.notice = e.reason
            else:
                logger.info("Ignoring late failure for a closed form")
            return False
        finally:
            self.submitting = False

        if self.modal is opened:
            self.modal = NoModal()
        else:
            logger.info("Form closed before the response arrived")
        await self.refresh()
        return True
