"""Report registry: append-only collection of account reports."""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from cuentatrack.database.base import Database
from cuentatrack.domain.entities import Report, User

logger = logging.getLogger(__name__)

UNKNOWN_USER = "Desconocido"
NO_DETAIL = "No se proporcionaron detalles."
NO_REPORT = "Sin reporte asociado"


def most_recent(reports: Iterable[Report]) -> Optional[Report]:
    """Report with the maximum fecha; the earliest in input order wins ties."""
    latest: Optional[Report] = None
    for report in reports:
        if latest is None or report.fecha > latest.fecha:
            latest = report
    return latest


class ReportRegistry:
    """Reports as last loaded from the boundary. Never mutated locally."""

    def __init__(self, db: Database, reports: Optional[Iterable[Report]] = None):
        self.db = db
        self.reports: list[Report] = list(reports or [])

    async def load_all(self) -> list[Report]:
        """Fetch all reports, replacing the loaded ones.

        Raises:
            FetchError: If the boundary is unreachable or returns malformed data
        """
        reports = await self.db.list_reports()
        self.reports = list(reports)
        logger.debug("Loaded %d reports", len(self.reports))
        return self.reports

    def get(self, report_id: int) -> Optional[Report]:
        """Return the report with this id, or None."""
        for report in self.reports:
            if report.id == report_id:
                return report
        return None

    def for_account(self, account_id: int) -> list[Report]:
        """All reports filed against an account, in loaded order."""
        return [r for r in self.reports if r.cuenta_id == account_id]

    def most_recent_for(self, account_id: int) -> Optional[Report]:
        """Most recent report for an account, or None if it has none."""
        return most_recent(self.for_account(account_id))


@dataclass(frozen=True)
class ReportDetail:
    """Display-ready view of a single report."""

    report: Report
    reported_by: str
    detalle: str

    @classmethod
    def describe(cls, report: Report, users: Iterable[User]) -> "ReportDetail":
        """Resolve the acting user's name and fill display placeholders."""
        reported_by = next(
            (u.nombre for u in users if u.id == report.usuario_id), UNKNOWN_USER
        )
        return cls(
            report=report,
            reported_by=reported_by,
            detalle=report.detalle or NO_DETAIL,
        )
