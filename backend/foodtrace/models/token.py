"""
Access Token Model
Opaque bearer tokens stored server-side
"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from datetime import datetime

from foodtrace.core.database import Base


class AccessToken(Base):
    """
    Access Token model

    Lifecycle:
    - Active until expires_at (checked at validation time)
    - Revoked is terminal: is_revoked never goes back to false
    """
    __tablename__ = "access_tokens"

    id = Column(Integer, primary_key=True)
    token = Column(String, unique=True, nullable=False, index=True)
    org_id = Column(Integer, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    expires_at = Column(DateTime, nullable=False)
    is_revoked = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        CheckConstraint("expires_at >= created_at", name="check_token_expiry_after_creation"),
    )

    # Relationships
    organization = relationship("Organization")

    def __repr__(self):
        return f"<AccessToken(id={self.id}, org_id={self.org_id}, revoked={self.is_revoked})>"

    def is_active(self, now: datetime) -> bool:
        """Valid only while not revoked and strictly before expiry"""
        return not self.is_revoked and now < self.expires_at
