"""
Token Service
Issues, validates and revokes opaque bearer tokens

Tokens carry no claims; validity is decided solely by the stored row, so
revocation takes effect on the very next request.
"""

from sqlalchemy.orm import Session
from datetime import datetime, timedelta
from typing import Optional
import logging
import secrets

from foodtrace.core.config import settings
from foodtrace.core.database import atomic
from foodtrace.core.exceptions import ConflictError, StorageUnavailable, ValidationError
from foodtrace.models import AccessToken

logger = logging.getLogger(__name__)


class TokenService:
    """Access token lifecycle: Active -> Expired, Active -> Revoked"""

    def __init__(self, db: Session):
        self.db = db

    def _generate(self) -> str:
        return secrets.token_urlsafe(settings.TOKEN_NBYTES)

    def issue(
        self,
        org_id: int,
        ttl: Optional[timedelta] = None,
        now: Optional[datetime] = None
    ) -> AccessToken:
        """
        Issue a new token bound to an organization

        Args:
            org_id: Owning organization
            ttl: Time to live (defaults to ACCESS_TOKEN_EXPIRE_MINUTES); zero
                yields a token that is already expired
            now: Issue time, defaults to the current UTC time

        Raises:
            ValidationError: negative ttl
            IntegrityError: organization does not exist
        """
        if ttl is None:
            ttl = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
        if ttl < timedelta(0):
            raise ValidationError("Token lifetime must not be negative")

        issued_at = now or datetime.utcnow()

        for attempt in range(settings.TOKEN_ISSUE_ATTEMPTS):
            access_token = AccessToken(
                token=self._generate(),
                org_id=org_id,
                created_at=issued_at,
                expires_at=issued_at + ttl,
                is_revoked=False
            )
            try:
                with atomic(self.db):
                    self.db.add(access_token)
            except ConflictError:
                logger.warning(f"Token collision on attempt {attempt + 1}, regenerating")
                continue

            self.db.refresh(access_token)
            logger.info(f"Issued token {access_token.id} for organization {org_id}")
            return access_token

        raise StorageUnavailable("Could not allocate a unique token")

    def validate(self, token: str, now: Optional[datetime] = None) -> Optional[int]:
        """
        Resolve a presented token to its organization

        Returns:
            The bound organization id, or None when the token is unknown,
            revoked, or expired
        """
        if not token:
            return None

        record = self.db.query(AccessToken).filter(AccessToken.token == token).first()

        if record is None:
            logger.debug("Unknown token presented")
            return None

        if not record.is_active(now or datetime.utcnow()):
            logger.debug(f"Inactive token {record.id} presented")
            return None

        return record.org_id

    def revoke(self, token: str) -> None:
        """Revoke a token; unknown or already-revoked tokens are ignored"""
        with atomic(self.db):
            revoked = self.db.query(AccessToken).filter(
                AccessToken.token == token,
                AccessToken.is_revoked == False  # noqa: E712
            ).update({AccessToken.is_revoked: True}, synchronize_session="fetch")

        if revoked:
            logger.info("Token revoked")

    def revoke_all(self, org_id: int, keep: Optional[str] = None) -> int:
        """
        Revoke every active token of an organization

        Args:
            org_id: Organization whose tokens are revoked
            keep: Optional token to leave untouched (the caller's own)

        Returns:
            Number of tokens revoked
        """
        with atomic(self.db):
            revoked = self.revoke_all_pending(org_id, keep=keep)

        logger.info(f"Revoked {revoked} tokens for organization {org_id}")
        return revoked

    def revoke_all_pending(self, org_id: int, keep: Optional[str] = None) -> int:
        """Same as revoke_all but inside the caller's transaction (no commit)"""
        query = self.db.query(AccessToken).filter(
            AccessToken.org_id == org_id,
            AccessToken.is_revoked == False  # noqa: E712
        )
        if keep is not None:
            query = query.filter(AccessToken.token != keep)
        return query.update({AccessToken.is_revoked: True}, synchronize_session="fetch")
