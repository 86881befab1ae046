"""
Problem Log Service
Incident records with the open -> resolved lifecycle
"""

from datetime import date
from typing import Any, Dict, List
import logging

from foodtrace.core.exceptions import ValidationError
from foodtrace.models import ProblemLog
from foodtrace.services.repository import TenantRepository
from foodtrace.services.traceability_service import TraceabilityGraph

logger = logging.getLogger(__name__)


class ProblemLogRepository(TenantRepository):
    """
    Problem logs and their linked employees

    date_resolved is only ever set on a closed log:
    - closing without a date stamps today
    - reopening clears it
    - a date on an open log is rejected
    """

    model = ProblemLog
    entity_name = "Problem log"
    link_fields = ("employee_ids",)

    def _prepare(self, org_id: int, obj: ProblemLog, columns: Dict[str, Any], creating: bool) -> None:
        was_open = True if creating else obj.is_open
        is_open = columns.get("is_open", was_open)
        date_opened = columns.get("date_opened", obj.date_opened)

        if is_open:
            if columns.get("date_resolved") is not None:
                raise ValidationError("date_resolved can only be set when closing a problem log")
            columns["date_resolved"] = None
            obj.date_resolved = None
        else:
            resolved = columns.get("date_resolved")
            if resolved is None:
                resolved = obj.date_resolved if not was_open else None
            if resolved is None:
                resolved = date.today()
            if date_opened is not None and resolved < date_opened:
                raise ValidationError("date_resolved cannot be before date_opened")
            columns["date_resolved"] = resolved
            obj.date_resolved = resolved
            if was_open:
                logger.info(f"Problem log {obj.id} resolved on {resolved}")

        columns["is_open"] = is_open
        obj.is_open = is_open

    def _write_links(self, org_id: int, obj: ProblemLog, links: Dict[str, Any]) -> None:
        if links.get("employee_ids") is None:
            return
        TraceabilityGraph(self.db).replace_problem_employees(org_id, obj.id, links["employee_ids"])

    def list_all(self, org_id: int) -> List[ProblemLog]:
        """Newest first"""
        return self._query(org_id).order_by(ProblemLog.date_opened.desc(), ProblemLog.id.desc()).all()

    def list_open(self, org_id: int) -> List[ProblemLog]:
        return self._query(org_id).filter(
            ProblemLog.is_open == True  # noqa: E712
        ).order_by(ProblemLog.date_opened.desc(), ProblemLog.id.desc()).all()

    def list_recalls(self, org_id: int) -> List[ProblemLog]:
        return self._query(org_id).filter(
            ProblemLog.recall == True  # noqa: E712
        ).order_by(ProblemLog.date_opened.desc(), ProblemLog.id.desc()).all()
