"""
Store Contract Tests.

Any store implementation MUST pass these tests.
This ensures backends are interchangeable.

To add a new backend:
1. Implement the Store interface
2. Add a test class that inherits StoreContractTests
3. Provide a `store` fixture that returns your implementation
"""

import sqlite3
from abc import ABC

import pytest

from venture_connect_api.app.storage import ConflictError

pytestmark = pytest.mark.integration


class StoreContractTests(ABC):
    """
    Contract tests that any store must pass.

    Subclass this and provide a `store` fixture.
    """

    @pytest.fixture
    def users(self, store, investor_fields, entrepreneur_fields):
        """An investor (first) and an entrepreneur (second)."""
        investor = store.create_user(investor_fields)
        entrepreneur = store.create_user(entrepreneur_fields)
        return investor, entrepreneur

    # === Users ===

    def test_create_and_get_user(self, store, investor_fields):
        created = store.create_user(investor_fields)

        loaded = store.get_user(created.id)

        assert loaded is not None
        assert loaded.email == "a@x.com"
        assert loaded.role == "investor"
        assert loaded.industries == ["FinTech", "SaaS"]
        assert loaded.portfolio_size == 12
        assert loaded.company is None
        assert loaded.created_at is not None

    def test_ids_are_distinct(self, users):
        investor, entrepreneur = users
        assert investor.id != entrepreneur.id

    def test_get_missing_user_returns_none(self, store):
        assert store.get_user(999) is None

    def test_get_user_by_email(self, store, users, investor_fields):
        investor, _ = users
        assert store.get_user_by_email("a@x.com").id == investor.id
        assert store.get_user_by_email("a@x.com").password == investor_fields["password"]
        assert store.get_user_by_email("nobody@x.com") is None

    def test_invalid_user_value_is_not_stored(self, store, investor_fields):
        with pytest.raises(ValueError):
            store.create_user({**investor_fields, "portfolio_size": -1})

        assert store.count_users() == 0
        assert store.get_user_by_email("a@x.com") is None

    def test_invalid_update_leaves_user_unchanged(self, store, users):
        investor, _ = users

        with pytest.raises(ValueError):
            store.update_user(investor.id, {"portfolio_size": -1})
        with pytest.raises(ValueError):
            store.update_user(investor.id, {"role": "admin"})

        loaded = store.get_user(investor.id)
        assert loaded.portfolio_size == 12
        assert loaded.role == "investor"

    def test_duplicate_email_conflicts(self, store, investor_fields):
        store.create_user(investor_fields)

        with pytest.raises(ConflictError):
            store.create_user({**investor_fields, "first_name": "Other"})

        assert store.count_users() == 1

    def test_unknown_user_field_is_rejected(self, store, investor_fields):
        with pytest.raises(ValueError):
            store.create_user({**investor_fields, "is_admin": True})

    def test_list_users_and_by_role(self, store, users):
        investor, entrepreneur = users

        assert {u.id for u in store.list_users()} == {investor.id, entrepreneur.id}
        assert [u.id for u in store.list_users_by_role("investor")] == [investor.id]
        assert [u.id for u in store.list_users_by_role("entrepreneur")] == [entrepreneur.id]

    def test_count_users(self, store, users):
        assert store.count_users() == 2

    def test_update_user_merges_fields(self, store, users):
        investor, _ = users

        updated = store.update_user(investor.id, {"bio": "Angel investor", "industries": ["AI"]})

        assert updated.bio == "Angel investor"
        assert updated.industries == ["AI"]
        assert updated.first_name == "Ada"
        assert updated.investment_range == "$1M - $5M"
        assert store.get_user(investor.id).bio == "Angel investor"

    def test_update_keeps_id_and_created_at(self, store, users):
        investor, _ = users

        updated = store.update_user(investor.id, {"last_name": "Lovelace"})

        assert updated.id == investor.id
        assert updated.created_at == investor.created_at

    def test_update_missing_user_returns_none(self, store):
        assert store.update_user(999, {"bio": "x"}) is None

    def test_update_to_taken_email_conflicts(self, store, users):
        investor, _ = users

        with pytest.raises(ConflictError):
            store.update_user(investor.id, {"email": "b@x.com"})

        assert store.get_user(investor.id).email == "a@x.com"

    def test_update_email_frees_old_address(self, store, users):
        investor, _ = users

        store.update_user(investor.id, {"email": "new@x.com"})

        assert store.get_user_by_email("new@x.com").id == investor.id
        assert store.get_user_by_email("a@x.com") is None

    # === Collaboration requests ===

    def test_request_defaults_to_pending(self, store, users):
        investor, entrepreneur = users

        request = store.create_collaboration_request(
            {"from_user_id": investor.id, "to_user_id": entrepreneur.id, "message": "Hello"}
        )

        assert request.status == "pending"
        assert request.message == "Hello"
        assert store.get_collaboration_request(request.id).to_user_id == entrepreneur.id

    def test_requests_for_user_include_sent_and_received(self, store, users, investor_fields):
        investor, entrepreneur = users
        third = store.create_user({**investor_fields, "email": "c@x.com"})
        sent = store.create_collaboration_request({"from_user_id": investor.id, "to_user_id": entrepreneur.id})
        received = store.create_collaboration_request({"from_user_id": third.id, "to_user_id": investor.id})
        store.create_collaboration_request({"from_user_id": third.id, "to_user_id": entrepreneur.id})

        ids = {r.id for r in store.list_collaboration_requests_for_user(investor.id)}

        assert ids == {sent.id, received.id}

    def test_requests_between_either_direction(self, store, users, investor_fields):
        investor, entrepreneur = users
        third = store.create_user({**investor_fields, "email": "c@x.com"})
        one = store.create_collaboration_request({"from_user_id": investor.id, "to_user_id": entrepreneur.id})
        two = store.create_collaboration_request({"from_user_id": entrepreneur.id, "to_user_id": investor.id})
        store.create_collaboration_request({"from_user_id": third.id, "to_user_id": investor.id})

        forward = {r.id for r in store.list_collaboration_requests_between(investor.id, entrepreneur.id)}
        backward = {r.id for r in store.list_collaboration_requests_between(entrepreneur.id, investor.id)}

        assert forward == backward == {one.id, two.id}

    def test_update_request_status(self, store, users):
        investor, entrepreneur = users
        request = store.create_collaboration_request({"from_user_id": investor.id, "to_user_id": entrepreneur.id})

        updated = store.update_collaboration_request_status(request.id, "accepted")

        assert updated.status == "accepted"
        assert updated.from_user_id == investor.id
        assert store.get_collaboration_request(request.id).status == "accepted"

    def test_update_status_is_idempotent(self, store, users):
        investor, entrepreneur = users
        request = store.create_collaboration_request({"from_user_id": investor.id, "to_user_id": entrepreneur.id})

        store.update_collaboration_request_status(request.id, "rejected")
        again = store.update_collaboration_request_status(request.id, "rejected")

        assert again.status == "rejected"

    def test_invalid_status_is_rejected_and_not_stored(self, store, users):
        investor, entrepreneur = users
        request = store.create_collaboration_request({"from_user_id": investor.id, "to_user_id": entrepreneur.id})

        with pytest.raises(ValueError):
            store.update_collaboration_request_status(request.id, "bogus")

        assert store.get_collaboration_request(request.id).status == "pending"

    def test_request_with_invalid_status_is_not_created(self, store, users):
        investor, entrepreneur = users

        with pytest.raises(ValueError):
            store.create_collaboration_request(
                {"from_user_id": investor.id, "to_user_id": entrepreneur.id, "status": "bogus"}
            )

        assert store.list_collaboration_requests_for_user(investor.id) == []

    def test_user_ids_are_stored_as_given(self, store):
        request = store.create_collaboration_request({"from_user_id": 1, "to_user_id": 999})
        message = store.create_message({"from_user_id": 1, "to_user_id": 999, "content": "hi"})
        connection = store.create_connection(1, 999)

        assert store.get_collaboration_request(request.id).to_user_id == 999
        assert store.get_message(message.id).to_user_id == 999
        assert store.get_connection(connection.id).user_id_2 == 999
        assert store.are_connected(999, 1)

    def test_update_missing_request_returns_none(self, store):
        assert store.update_collaboration_request_status(999, "accepted") is None
        assert store.get_collaboration_request(999) is None

    # === Messages ===

    def test_conversation_is_oldest_first(self, store, users):
        investor, entrepreneur = users
        contents = ["first", "second", "third"]
        senders = [investor, entrepreneur, investor]
        for sender, content in zip(senders, contents):
            recipient = entrepreneur if sender is investor else investor
            store.create_message({"from_user_id": sender.id, "to_user_id": recipient.id, "content": content})

        forward = store.list_messages_between(investor.id, entrepreneur.id)
        backward = store.list_messages_between(entrepreneur.id, investor.id)

        assert [m.content for m in forward] == contents
        assert [m.id for m in backward] == [m.id for m in forward]

    def test_conversation_excludes_other_pairs(self, store, users, investor_fields):
        investor, entrepreneur = users
        third = store.create_user({**investor_fields, "email": "c@x.com"})
        store.create_message({"from_user_id": third.id, "to_user_id": entrepreneur.id, "content": "elsewhere"})

        assert store.list_messages_between(investor.id, entrepreneur.id) == []

    def test_get_message(self, store, users):
        investor, entrepreneur = users
        message = store.create_message(
            {"from_user_id": investor.id, "to_user_id": entrepreneur.id, "content": "hi"}
        )

        assert store.get_message(message.id).content == "hi"
        assert store.get_message(999) is None

    # === Connections ===

    def test_create_connection(self, store, users):
        investor, entrepreneur = users

        connection = store.create_connection(investor.id, entrepreneur.id)

        assert store.get_connection(connection.id).user_id_1 == investor.id
        assert store.are_connected(investor.id, entrepreneur.id)
        assert store.are_connected(entrepreneur.id, investor.id)

    def test_not_connected_by_default(self, store, users):
        investor, entrepreneur = users
        assert not store.are_connected(investor.id, entrepreneur.id)

    def test_duplicate_connection_conflicts(self, store, users):
        investor, entrepreneur = users
        store.create_connection(investor.id, entrepreneur.id)

        with pytest.raises(ConflictError):
            store.create_connection(investor.id, entrepreneur.id)

    def test_reversed_pair_also_conflicts(self, store, users):
        investor, entrepreneur = users
        store.create_connection(investor.id, entrepreneur.id)

        with pytest.raises(ConflictError):
            store.create_connection(entrepreneur.id, investor.id)

        assert len(store.list_connections_for_user(investor.id)) == 1

    def test_connections_for_user_either_side(self, store, users, investor_fields):
        investor, entrepreneur = users
        third = store.create_user({**investor_fields, "email": "c@x.com"})
        one = store.create_connection(investor.id, entrepreneur.id)
        two = store.create_connection(third.id, investor.id)

        assert {c.id for c in store.list_connections_for_user(investor.id)} == {one.id, two.id}
        assert {c.id for c in store.list_connections_for_user(entrepreneur.id)} == {one.id}


class TestMemoryStoreContract(StoreContractTests):
    """Test in-memory backend passes contract."""

    @pytest.fixture
    def store(self):
        from venture_connect_api.app.storage import MemoryStore
        return MemoryStore()

    def test_stores_do_not_share_state(self, store, investor_fields):
        from venture_connect_api.app.storage import MemoryStore

        store.create_user(investor_fields)

        assert MemoryStore().count_users() == 0

    def test_returned_records_are_copies(self, store, users):
        investor, _ = users

        investor.industries.append("Mutated")

        assert store.get_user(investor.id).industries == ["FinTech", "SaaS"]


class TestSQLiteStoreContract(StoreContractTests):
    """Test SQLite backend passes contract."""

    @pytest.fixture
    def store(self, db_path):
        from venture_connect_api.app.storage import SQLiteStore
        store = SQLiteStore(db_path)
        yield store
        store.close()

    def test_data_survives_reopen(self, store, db_path, users):
        from venture_connect_api.app.storage import SQLiteStore

        investor, _ = users
        reopened = SQLiteStore(db_path)

        assert reopened.count_users() == 2
        assert reopened.get_user(investor.id).industries == ["FinTech", "SaaS"]

    def test_migrations_are_recorded(self, db_path, store):
        from venture_connect_api.app.core.db import MIGRATIONS, init_db

        assert init_db(db_path) == max(version for version, _ in MIGRATIONS)

    def test_schema_rejects_unknown_status(self, db_path, store, users):
        from venture_connect_api.app.core.db import get_connection

        investor, entrepreneur = users
        request = store.create_collaboration_request({"from_user_id": investor.id, "to_user_id": entrepreneur.id})
        conn = get_connection(db_path)
        try:
            with pytest.raises(sqlite3.IntegrityError):
                conn.execute("UPDATE collaboration_requests SET status = 'bogus' WHERE id = ?", (request.id,))
        finally:
            conn.close()

        assert store.get_collaboration_request(request.id).status == "pending"

    def test_upgrade_from_version_2_keeps_rows(self, temp_dir):
        from venture_connect_api.app.core.db import MIGRATIONS, get_cursor
        from venture_connect_api.app.storage import SQLiteStore

        old_path = str(temp_dir / "old.db")
        created = "2024-01-15T12:00:00+00:00"
        with get_cursor(old_path) as cursor:
            cursor.execute("CREATE TABLE migrations (version INTEGER PRIMARY KEY)")
            for version, sql in MIGRATIONS[:2]:
                cursor.executescript(sql)
                cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
            cursor.execute(
                "INSERT INTO collaboration_requests (from_user_id, to_user_id, status, created_at) "
                "VALUES (1, 2, 'accepted', ?)",
                (created,),
            )
            cursor.execute(
                "INSERT INTO connections (user_id_1, user_id_2, created_at) VALUES (1, 2, ?)", (created,)
            )

        upgraded = SQLiteStore(old_path)

        assert upgraded.get_collaboration_request(1).status == "accepted"
        assert upgraded.are_connected(2, 1)
        with pytest.raises(ConflictError):
            upgraded.create_connection(2, 1)
        assert upgraded.create_collaboration_request({"from_user_id": 1, "to_user_id": 2}).id == 2
