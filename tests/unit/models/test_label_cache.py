"""Tests for the conversation label cache."""

import pytest
from sqlalchemy import event, select
from sqlalchemy.orm import Session

from app.models import Conversation
from app.models.label_cache import (
    _sync_cached_labels,
    format_label_list,
    install_label_cache,
    parse_label_list,
)


class TestLabelFormatting:
    def test_parse_splits_and_trims(self):
        assert parse_label_list("billing, vip,urgent") == ["billing", "vip", "urgent"]

    def test_parse_drops_blanks_and_duplicates(self):
        assert parse_label_list("billing, , vip, billing") == ["billing", "vip"]

    @pytest.mark.parametrize("value", [None, "", " , "])
    def test_parse_empty(self, value):
        assert parse_label_list(value) == []

    def test_format_joins_labels(self):
        assert format_label_list(["billing", " vip "]) == "billing, vip"

    def test_format_empty_is_none(self):
        assert format_label_list([]) is None
        assert format_label_list(["  "]) is None


class TestLabelCacheMixin:
    def test_label_list_reads_cached_column(self):
        conversation = Conversation(account_id=1, cached_label_list="billing, vip")
        assert conversation.label_list == ["billing", "vip"]

    def test_assigned_labels_are_pending_until_refresh(self):
        conversation = Conversation(account_id=1, cached_label_list="old")
        conversation.label_list = ["billing", "vip", "billing"]

        assert conversation.label_list == ["billing", "vip"]
        assert conversation.cached_label_list == "old"

        conversation.refresh_cached_labels()
        assert conversation.cached_label_list == "billing, vip"

    def test_refresh_without_assignment_keeps_column(self):
        conversation = Conversation(account_id=1, cached_label_list="billing")
        conversation.refresh_cached_labels()
        assert conversation.cached_label_list == "billing"

    def test_clearing_labels(self):
        conversation = Conversation(account_id=1, cached_label_list="billing")
        conversation.label_list = []
        conversation.refresh_cached_labels()
        assert conversation.cached_label_list is None


class TestInstallLabelCache:
    def test_conversation_has_listeners(self):
        assert install_label_cache(Conversation) is True
        assert event.contains(Conversation, "before_insert", _sync_cached_labels)
        assert event.contains(Conversation, "before_update", _sync_cached_labels)

    def test_install_is_idempotent(self):
        install_label_cache(Conversation)
        install_label_cache(Conversation)
        assert event.contains(Conversation, "before_update", _sync_cached_labels)

    def test_model_without_mixin_is_skipped(self, caplog):
        class Plain:
            pass

        with caplog.at_level("WARNING"):
            assert install_label_cache(Plain) is False
        assert "does not support label caching" in caplog.text


class TestLabelCacheFlush:
    """Label cache written through a real SQLite session."""

    @pytest.fixture
    def session(self, sqlite_engine):
        Conversation.__table__.create(sqlite_engine)
        with Session(sqlite_engine) as session:
            yield session

    def _cached(self, session, conversation_id):
        return session.execute(
            select(Conversation.cached_label_list).where(
                Conversation.id == conversation_id
            )
        ).scalar_one()

    def test_insert_writes_cache(self, session):
        conversation = Conversation(id=1, account_id=1)
        conversation.label_list = ["billing", "vip"]
        session.add(conversation)
        session.commit()

        assert self._cached(session, 1) == "billing, vip"

    def test_update_writes_cache(self, session):
        conversation = Conversation(id=2, account_id=1)
        session.add(conversation)
        session.commit()

        conversation.label_list = ["urgent"]
        session.commit()

        assert self._cached(session, 2) == "urgent"
