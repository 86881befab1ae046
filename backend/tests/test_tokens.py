"""
Tests for opaque access tokens: issue, validate, expiry and revocation.
"""

import pytest
from datetime import datetime, timedelta

from foodtrace.core.exceptions import IntegrityError, StorageUnavailable, ValidationError
from foodtrace.models import AccessToken
from foodtrace.services.token_service import TokenService


class TestIssue:
    """Test TokenService.issue()"""

    def test_issue_binds_org(self, db_session, seed_org):
        access_token = TokenService(db_session).issue(seed_org.id)
        assert access_token.org_id == seed_org.id
        assert access_token.is_revoked is False
        assert access_token.expires_at > access_token.created_at

    def test_default_lifetime_is_seven_days(self, db_session, seed_org):
        now = datetime(2024, 1, 1, 12, 0, 0)
        access_token = TokenService(db_session).issue(seed_org.id, now=now)
        assert access_token.expires_at == now + timedelta(days=7)

    def test_tokens_are_unique(self, db_session, seed_org):
        service = TokenService(db_session)
        tokens = {service.issue(seed_org.id).token for _ in range(5)}
        assert len(tokens) == 5

    def test_negative_ttl_rejected(self, db_session, seed_org):
        with pytest.raises(ValidationError):
            TokenService(db_session).issue(seed_org.id, ttl=timedelta(seconds=-1))

    def test_unknown_org_rejected(self, db_session, seed_org):
        with pytest.raises(IntegrityError):
            TokenService(db_session).issue(seed_org.id + 999)

    def test_collision_is_regenerated(self, db_session, seed_org, monkeypatch):
        """A clashing token string is replaced, not surfaced as an error."""
        service = TokenService(db_session)
        existing = service.issue(seed_org.id).token

        candidates = iter([existing, "fresh-token"])
        monkeypatch.setattr(service, "_generate", lambda: next(candidates))

        assert service.issue(seed_org.id).token == "fresh-token"

    def test_persistent_collision_gives_up(self, db_session, seed_org, monkeypatch):
        service = TokenService(db_session)
        existing = service.issue(seed_org.id).token
        monkeypatch.setattr(service, "_generate", lambda: existing)

        with pytest.raises(StorageUnavailable):
            service.issue(seed_org.id)


class TestValidate:
    """Test TokenService.validate()"""

    def test_valid_token(self, db_session, seed_org):
        service = TokenService(db_session)
        access_token = service.issue(seed_org.id)
        assert service.validate(access_token.token) == seed_org.id

    def test_unknown_token(self, db_session, seed_org):
        assert TokenService(db_session).validate("no-such-token") is None

    def test_empty_token(self, db_session, seed_org):
        assert TokenService(db_session).validate("") is None

    def test_zero_ttl_is_immediately_expired(self, db_session, seed_org):
        service = TokenService(db_session)
        now = datetime(2024, 1, 1, 12, 0, 0)
        access_token = service.issue(seed_org.id, ttl=timedelta(0), now=now)
        assert service.validate(access_token.token, now=now) is None

    def test_expiry_boundary(self, db_session, seed_org):
        """Valid strictly before expires_at, invalid at and after it."""
        service = TokenService(db_session)
        now = datetime(2024, 1, 1, 12, 0, 0)
        access_token = service.issue(seed_org.id, ttl=timedelta(hours=1), now=now)

        assert service.validate(access_token.token, now=now + timedelta(minutes=59)) == seed_org.id
        assert service.validate(access_token.token, now=now + timedelta(hours=1)) is None
        assert service.validate(access_token.token, now=now + timedelta(days=1)) is None


class TestRevoke:
    """Test TokenService.revoke() and revoke_all()"""

    def test_revoked_token_is_invalid(self, db_session, seed_org):
        service = TokenService(db_session)
        access_token = service.issue(seed_org.id)
        service.revoke(access_token.token)
        assert service.validate(access_token.token) is None

    def test_revoke_is_idempotent(self, db_session, seed_org):
        service = TokenService(db_session)
        access_token = service.issue(seed_org.id)
        service.revoke(access_token.token)
        service.revoke(access_token.token)
        service.revoke("never-issued")
        assert service.validate(access_token.token) is None

    def test_revoke_leaves_other_tokens(self, db_session, seed_org):
        service = TokenService(db_session)
        first = service.issue(seed_org.id)
        second = service.issue(seed_org.id)
        service.revoke(first.token)
        assert service.validate(second.token) == seed_org.id

    def test_revoke_all_keeps_one(self, db_session, seed_org, seed_other_org):
        service = TokenService(db_session)
        keep = service.issue(seed_org.id)
        drop = service.issue(seed_org.id)
        other = service.issue(seed_other_org.id)

        assert service.revoke_all(seed_org.id, keep=keep.token) == 1
        assert service.validate(keep.token) == seed_org.id
        assert service.validate(drop.token) is None
        assert service.validate(other.token) == seed_other_org.id

    def test_tokens_removed_with_org(self, db_session, seed_org):
        """Deleting an organization cascades to its tokens."""
        from foodtrace.services.org_service import OrganizationService

        TokenService(db_session).issue(seed_org.id)
        OrganizationService(db_session).delete(seed_org.id, seed_org.id)
        assert db_session.query(AccessToken).count() == 0
