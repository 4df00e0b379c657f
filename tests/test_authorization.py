"""
Tests for authorization — role/ownership predicates and the deny-as-empty policy.

These tests verify two properties:

1. **Predicates**: has_role and is_owner answer from account lookups and
   return False (never raise) for unknown identities.

2. **Deny as empty**: a caller who may not see or change a record gets the
   same answer as if the record did not exist: [] for lists, null for
   single items. No 403 is ever returned, so callers cannot probe which
   records exist. Anonymous callers are treated the same way.
"""

import uuid

import pytest

from app.models.account import Role
from app.services import access_service
from app.services.access_service import Decision, Operation, authorize


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------

class TestPredicates:

    async def test_has_role_unknown_identity(self, db_session):
        assert await access_service.has_role(db_session, "ghost@example.com", "ADMIN") is False

    async def test_has_role(self, db_session, account_factory):
        await account_factory("boss@example.com", role=Role.ADMIN)
        await account_factory("c1@example.com", role=Role.CLIENT)

        assert await access_service.has_role(db_session, "boss@example.com", Role.ADMIN)
        assert await access_service.has_role(db_session, "boss@example.com", "CLIENT") is False
        assert await access_service.has_role(db_session, "c1@example.com", "CLIENT")
        assert await access_service.has_role(db_session, "c1@example.com", "ROOT") is False

    async def test_is_owner(self, db_session, account_factory):
        account = await account_factory("c1@example.com")
        other = await account_factory("c2@example.com")

        assert await access_service.is_owner(db_session, "c1@example.com", account.id)
        assert await access_service.is_owner(db_session, "c1@example.com", other.id) is False
        assert await access_service.is_owner(db_session, "ghost@example.com", account.id) is False


class TestPolicy:

    @pytest.mark.parametrize("operation", list(Operation))
    async def test_admin_allowed_everything(self, db_session, account_factory, operation):
        await account_factory("boss@example.com", role=Role.ADMIN)
        decision = await authorize(db_session, "boss@example.com", operation, uuid.uuid4())
        assert decision is Decision.ALLOW

    @pytest.mark.parametrize("operation", sorted(access_service.ADMIN_ONLY))
    async def test_client_denied_admin_operations_even_on_self(
        self, db_session, account_factory, operation
    ):
        account = await account_factory("c1@example.com")
        decision = await authorize(db_session, "c1@example.com", operation, account.id)
        assert decision is Decision.DENY_AS_EMPTY

    @pytest.mark.parametrize("operation", sorted(access_service.ADMIN_OR_OWNER))
    async def test_client_allowed_on_own_records(self, db_session, account_factory, operation):
        account = await account_factory("c1@example.com")
        other = await account_factory("c2@example.com")

        assert await authorize(db_session, "c1@example.com", operation, account.id) is Decision.ALLOW
        assert await authorize(db_session, "c1@example.com", operation, other.id) is Decision.DENY_AS_EMPTY
        assert await authorize(db_session, "c1@example.com", operation, None) is Decision.DENY_AS_EMPTY

    async def test_anonymous_always_denied(self, db_session):
        for operation in Operation:
            assert await authorize(db_session, None, operation) is Decision.DENY_AS_EMPTY

    def test_every_operation_has_a_rule(self):
        assert access_service.ADMIN_ONLY | access_service.ADMIN_OR_OWNER == set(Operation)
        assert not access_service.ADMIN_ONLY & access_service.ADMIN_OR_OWNER


# ---------------------------------------------------------------------------
# HTTP: cross-owner isolation
# ---------------------------------------------------------------------------

class TestCrossOwnerAccountAccess:
    """A CLIENT cannot see or change another account."""

    async def test_cannot_view_other_account(self, client_client, other_client_account):
        response = await client_client.get(f"/accounts/{other_client_account['id']}")
        assert response.status_code == 200
        assert response.json() is None

    async def test_unknown_and_forbidden_look_the_same(self, client_client, other_client_account):
        forbidden = await client_client.get(f"/accounts/{other_client_account['id']}")
        missing = await client_client.get(f"/accounts/{uuid.uuid4()}")
        assert forbidden.status_code == missing.status_code
        assert forbidden.json() == missing.json()

    async def test_cannot_find_other_account_by_email(self, client_client, other_client_account):
        response = await client_client.get(
            "/accounts/by-email", params={"email": "bruno@example.com"}
        )
        assert response.json() is None

    async def test_cannot_list_accounts(self, client_client, other_client_account):
        response = await client_client.get("/accounts")
        assert response.status_code == 200
        assert response.json() == []

    async def test_cannot_update_other_account(
        self, client_client, other_client_client, other_client_account
    ):
        response = await client_client.patch(
            f"/accounts/{other_client_account['id']}", json={"first_name": "Hacked"}
        )
        assert response.json() is None

        own_view = await other_client_client.get(f"/accounts/{other_client_account['id']}")
        assert own_view.json()["first_name"] == "Bruno"

    async def test_cannot_change_other_password(self, client, client_client, other_client_account):
        await client_client.put(
            f"/accounts/{other_client_account['id']}/password",
            json={"new_password": "hijacked"},
        )
        login = await client.post(
            "/auth/login", json={"email": "bruno@example.com", "password": "secret2"}
        )
        assert login.status_code == 200

    async def test_client_cannot_toggle_own_active_flag(self, client_client, client_account):
        response = await client_client.put(
            f"/accounts/{client_account['id']}/active", json={"active": False}
        )
        assert response.json() is None


class TestCrossOwnerProfileAccess:
    """A CLIENT cannot see or change another client's profile."""

    async def test_cannot_view_other_profile(self, client_client, other_client_account):
        by_account = await client_client.get(f"/profiles/by-account/{other_client_account['id']}")
        by_code = await client_client.get("/profiles/by-code/CLI-002")
        by_email = await client_client.get(
            "/profiles/by-email", params={"email": "bruno@example.com"}
        )
        assert by_account.json() is None
        assert by_code.json() is None
        assert by_email.json() is None

    async def test_cannot_update_other_profile(
        self, client_client, admin_client, other_client_account
    ):
        response = await client_client.patch(
            f"/profiles/by-account/{other_client_account['id']}", json={"phone": "000"}
        )
        assert response.json() is None

        profile = await admin_client.get(f"/profiles/by-account/{other_client_account['id']}")
        assert profile.json()["phone"] is None

    async def test_client_cannot_list_create_or_generate(self, client_client, client_account):
        assert (await client_client.get("/profiles")).json() == []
        assert (await client_client.post("/profiles/codes")).json() is None
        created = await client_client.post(
            "/profiles", json={"account_id": client_account["id"], "code": "CLI-900"}
        )
        assert created.json() is None


class TestAnonymousAccess:
    """Requests without credentials see nothing."""

    async def test_anonymous_list_is_empty(self, client, client_account):
        assert (await client.get("/accounts")).json() == []
        assert (await client.get("/profiles")).json() == []

    async def test_anonymous_single_item_is_null(self, client, client_account):
        assert (await client.get(f"/accounts/{client_account['id']}")).json() is None
        assert (await client.get(f"/profiles/by-account/{client_account['id']}")).json() is None


class TestAdminAccess:
    """Admins can read any account and profile."""

    async def test_admin_reads_any_account(self, admin_client, client_account):
        response = await admin_client.get(f"/accounts/{client_account['id']}")
        assert response.json()["email"] == "ana@example.com"

    async def test_admin_reads_any_profile(self, admin_client, client_account):
        response = await admin_client.get(f"/profiles/by-account/{client_account['id']}")
        assert response.json()["account"]["id"] == client_account["id"]

    async def test_admin_lookup_of_missing_account_is_null(self, admin_client):
        response = await admin_client.get(f"/accounts/{uuid.uuid4()}")
        assert response.status_code == 200
        assert response.json() is None
