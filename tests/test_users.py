"""
Unit tests for profile sync.

Tests the rules:
1. Unknown principal => profile created with the provider's name
2. Stored name empty or identical => name written
3. Stored name different => left alone
"""

import pytest

from saunalog.errors import Unauthorized
from saunalog.models import User
from saunalog.services.users import save_user


def stored_name(database, user_id):
    with database.session() as db:
        user = db.query(User).filter(User.id == user_id).first()
        return user.name if user else None


class TestSaveUser:
    """Tests for save_user function."""

    def test_creates_user(self, database):
        with database.transaction() as db:
            save_user(db, "user-1", "Sauna Fan")
        assert stored_name(database, "user-1") == "Sauna Fan"

    def test_fills_empty_name(self, database):
        with database.transaction() as db:
            save_user(db, "user-1", None)
        with database.transaction() as db:
            save_user(db, "user-1", "Sauna Fan")
        assert stored_name(database, "user-1") == "Sauna Fan"

    def test_keeps_different_name(self, database):
        with database.transaction() as db:
            save_user(db, "user-1", "Renamed Elsewhere")
        with database.transaction() as db:
            save_user(db, "user-1", "Provider Name")
        assert stored_name(database, "user-1") == "Renamed Elsewhere"

    def test_same_name_is_idempotent(self, database):
        for _ in range(2):
            with database.transaction() as db:
                save_user(db, "user-1", "Sauna Fan")
        with database.session() as db:
            assert db.query(User).count() == 1
        assert stored_name(database, "user-1") == "Sauna Fan"

    def test_requires_user_id(self, database):
        with pytest.raises(Unauthorized):
            with database.transaction() as db:
                save_user(db, "", "Nobody")
