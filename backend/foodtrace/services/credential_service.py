"""
Credential Store
Per-organization password hash + salt

Hashing is pluggable: anything implementing PasswordHasher can replace
the argon2id default without touching CredentialStore.
"""

from sqlalchemy.orm import Session
from passlib.context import CryptContext
from functools import lru_cache
from typing import Optional, Protocol, Tuple
import logging
import secrets

from foodtrace.core.config import settings
from foodtrace.core.database import atomic
from foodtrace.core.exceptions import NotFound
from foodtrace.models import Organization

logger = logging.getLogger(__name__)


class PasswordHasher(Protocol):
    """Memory-hard password hash capability"""

    def hash(self, password: str, salt: str) -> str:
        ...

    def verify(self, password: str, salt: str, digest: str) -> bool:
        ...


class Argon2Hasher:
    """
    Argon2id via passlib

    The per-organization salt is prepended to the password; passlib adds its
    own salt inside the digest as well. Verification is constant time.
    """

    def __init__(self, context: Optional[CryptContext] = None):
        self.context = context or CryptContext(
            schemes=["argon2"],
            deprecated="auto",
            argon2__rounds=settings.PASSWORD_HASH_ROUNDS,
            argon2__memory_cost=settings.PASSWORD_HASH_MEMORY_COST,
        )

    def hash(self, password: str, salt: str) -> str:
        return self.context.hash(salt + password)

    def verify(self, password: str, salt: str, digest: str) -> bool:
        if not digest:
            return False
        try:
            return self.context.verify(salt + password, digest)
        except ValueError:
            # Digest not recognised by any configured scheme
            logger.warning("Stored password digest could not be parsed")
            return False


@lru_cache()
def get_password_hasher() -> PasswordHasher:
    """Get cached default hasher"""
    return Argon2Hasher()


class CredentialStore:
    """
    Credential storage and verification

    Hashing is CPU-bound and never runs while this session holds a
    transaction open, so slow logins do not starve the connection pool.
    """

    def __init__(self, db: Session, hasher: Optional[PasswordHasher] = None):
        self.db = db
        self.hasher = hasher or get_password_hasher()

    def derive(self, password: str) -> Tuple[str, str]:
        """
        Derive fresh credential material

        Ends the session's current transaction first, so the connection is
        back in the pool while hashing. Call it before any pending writes.

        Returns:
            (password_hash, password_salt)
        """
        self.db.rollback()
        salt = secrets.token_hex(settings.PASSWORD_SALT_NBYTES)
        return self.hasher.hash(password, salt), salt

    def set_credentials(self, org_id: int, password: str) -> None:
        """Replace the organization's credentials"""
        password_hash, password_salt = self.derive(password)

        with atomic(self.db):
            org = self.db.get(Organization, org_id)
            if org is None:
                raise NotFound("Organization", org_id)
            org.password_hash = password_hash
            org.password_salt = password_salt

        logger.info(f"Credentials updated for organization {org_id}")

    def verify(self, org_id: int, password: str) -> bool:
        """
        Check a password against stored material

        False on mismatch, unknown organization, or missing credentials.
        """
        org = self.db.get(Organization, org_id)
        if org is None or not org.has_credentials:
            self.db.rollback()
            return False

        password_hash, password_salt = org.password_hash, org.password_salt
        # Read-only; end the transaction before hashing
        self.db.rollback()

        return self.hasher.verify(password, password_salt, password_hash)

    def authenticate(self, email: str, password: str) -> Optional[int]:
        """
        Resolve login credentials to an organization id

        Unknown email and wrong password are indistinguishable to the caller.
        """
        org_id = self.db.query(Organization.id).filter(Organization.email == email).scalar()

        if org_id is None:
            # Spend the same hashing effort as a real check
            self.derive(password)
            return None

        if not self.verify(org_id, password):
            return None

        return org_id
