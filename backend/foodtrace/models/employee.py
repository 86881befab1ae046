"""
Employee Model
"""

from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

from foodtrace.core.database import Base


class Employee(Base):
    """Employee model, linkable to problem logs"""
    __tablename__ = "employees"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    role = Column(String, nullable=False)
    org_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    organization = relationship("Organization")

    def __repr__(self):
        return f"<Employee(id={self.id}, name='{self.name}', role='{self.role}')>"
