"""
Receiving Log Model
"""

from sqlalchemy import Column, Integer, String, Date, ForeignKey
from sqlalchemy.orm import relationship

from foodtrace.core.database import Base


class ReceivingLog(Base):
    """Receiving log entry: one delivery of one item from a supplier"""
    __tablename__ = "receiving_log"

    id = Column(Integer, primary_key=True)
    lotcode = Column(String(255), nullable=False)
    company_name = Column(String(255), nullable=False)
    item_name = Column(String(255), nullable=False)
    temperature = Column(String(50), nullable=False)
    date = Column(Date, nullable=False)
    org_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    organization = relationship("Organization")

    def __repr__(self):
        return f"<ReceivingLog(id={self.id}, lotcode='{self.lotcode}', item='{self.item_name}')>"
