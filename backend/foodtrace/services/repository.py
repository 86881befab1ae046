"""
Tenant-Scoped Repository
CRUD over organization-owned records

Every read, update and delete filters on org_id as well as the primary
key, and create stamps org_id from the authenticated context. A record
owned by another organization is indistinguishable from a missing one.
Cascades to link rows are left to the schema's ON DELETE CASCADE rules.
"""

from sqlalchemy import delete as sa_delete
from sqlalchemy.orm import Session
from pydantic import BaseModel
from typing import Any, Dict, List, Optional, Tuple
import logging

from foodtrace.core.database import atomic
from foodtrace.core.exceptions import NotFound, ValidationError
from foodtrace.models import Employee, Ingredient, ReceivingLog

logger = logging.getLogger(__name__)


class TenantRepository:
    """
    Base repository for a model with an org_id column

    Subclasses set `model` and `entity_name`; those that own edges list the
    payload keys in `link_fields` and handle them in `_write_links`.
    """

    model = None
    entity_name: str = "Record"
    link_fields: Tuple[str, ...] = ()
    conflict_detail: Optional[str] = None

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _query(self, org_id: int):
        return self.db.query(self.model).filter(self.model.org_id == org_id)

    def _split(self, fields: Dict[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """Separate column values from link payloads; drop anything else"""
        columns = {
            name: value for name, value in fields.items()
            if name in self.model.__table__.columns and name not in ("id", "org_id")
        }
        links = {name: fields[name] for name in self.link_fields if name in fields}
        return columns, links

    def _check_nulls(self, columns: Dict[str, Any]) -> None:
        for name, value in columns.items():
            if value is None and not self.model.__table__.columns[name].nullable:
                raise ValidationError(f"{name} may not be null")

    def _prepare(self, org_id: int, obj, columns: Dict[str, Any], creating: bool) -> None:
        """Hook for field rules; runs before anything is written"""

    def _write_links(self, org_id: int, obj, links: Dict[str, Any]) -> None:
        """Hook for edge payloads; runs inside the record's transaction"""

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def create(self, org_id: int, data: BaseModel):
        """Persist a new record owned by org_id"""
        columns, links = self._split(data.model_dump())
        self._check_nulls(columns)
        obj = self.model(**columns)
        obj.org_id = org_id
        self._prepare(org_id, obj, columns, creating=True)

        with atomic(self.db, self.conflict_detail):
            self.db.add(obj)
            self.db.flush()
            if links:
                self._write_links(org_id, obj, links)

        self.db.refresh(obj)
        logger.info(f"Created {self.entity_name} {obj.id} for organization {org_id}")
        return obj

    def get_by_id(self, org_id: int, entity_id: int):
        """Fetch one record or raise NotFound"""
        obj = self._query(org_id).filter(self.model.id == entity_id).first()
        if obj is None:
            raise NotFound(self.entity_name, entity_id)
        return obj

    def list_all(self, org_id: int) -> List:
        """All records of the organization, by id"""
        return self._query(org_id).order_by(self.model.id).all()

    def update(self, org_id: int, entity_id: int, data: BaseModel):
        """Apply the fields present in data; absent fields are left alone"""
        columns, links = self._split(data.model_dump(exclude_unset=True))
        self._check_nulls(columns)

        with atomic(self.db, self.conflict_detail):
            obj = self.get_by_id(org_id, entity_id)
            self._prepare(org_id, obj, columns, creating=False)
            for name, value in columns.items():
                setattr(obj, name, value)
            self.db.flush()
            if links:
                self._write_links(org_id, obj, links)

        self.db.refresh(obj)
        return obj

    def delete(self, org_id: int, entity_id: int) -> bool:
        """
        Delete a record

        Returns:
            True if a row was removed
        """
        with atomic(self.db):
            result = self.db.execute(
                sa_delete(self.model).where(
                    self.model.id == entity_id,
                    self.model.org_id == org_id
                )
            )

        removed = result.rowcount > 0
        if removed:
            logger.info(f"Deleted {self.entity_name} {entity_id} for organization {org_id}")
        return removed


class EmployeeRepository(TenantRepository):
    model = Employee
    entity_name = "Employee"


class IngredientRepository(TenantRepository):
    model = Ingredient
    entity_name = "Ingredient"
    conflict_detail = "Lot code already exists"

    def get_by_lotcode(self, org_id: int, lotcode: str) -> Ingredient:
        obj = self._query(org_id).filter(Ingredient.lotcode == lotcode).first()
        if obj is None:
            raise NotFound(self.entity_name, lotcode)
        return obj


class ReceivingLogRepository(TenantRepository):
    model = ReceivingLog
    entity_name = "Receiving log"

    def list_all(self, org_id: int) -> List[ReceivingLog]:
        """Most recent deliveries first"""
        return self._query(org_id).order_by(ReceivingLog.date.desc(), ReceivingLog.id.desc()).all()
