"""
Ingredient Model
Received ingredient lots; the unit of physical traceability
"""

from sqlalchemy import Column, Integer, String, Date, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from foodtrace.core.database import Base


class Ingredient(Base):
    """
    Ingredient model
    lotcode is the human-assigned lot identifier, unique within an organization
    """
    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True)
    lotcode = Column(String, nullable=False)
    name = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    org_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)

    __table_args__ = (
        UniqueConstraint("org_id", "lotcode", name="uq_ingredients_org_lotcode"),
    )

    # Relationships
    organization = relationship("Organization")

    def __repr__(self):
        return f"<Ingredient(id={self.id}, lotcode='{self.lotcode}', name='{self.name}')>"
