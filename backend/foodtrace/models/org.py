"""
Organization Model
Top-level tenant: every other record is owned by exactly one organization
"""

from sqlalchemy import Column, Integer, String, DateTime
from datetime import datetime

from foodtrace.core.database import Base


class Organization(Base):
    """
    Organization model
    Holds login credentials; deleting a row cascades to all tenant data
    at the schema level (ON DELETE CASCADE on every org_id foreign key)
    """
    __tablename__ = "organizations"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    # Empty until credentials are set; an empty hash never verifies
    password_hash = Column(String, nullable=False, default="")
    password_salt = Column(String, nullable=False, default="")
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    def __repr__(self):
        return f"<Organization(id={self.id}, name='{self.name}', email='{self.email}')>"

    @property
    def has_credentials(self) -> bool:
        return bool(self.password_hash) and bool(self.password_salt)
