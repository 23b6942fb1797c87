"""
Tests for the in-memory share store.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from meeting_actions.errors import ShareNotFoundError
from meeting_actions.models.action_item import ActionItem
from meeting_actions.services.share_store import ShareStore


class TestShareStore:
    def test_create_and_get(self):
        store = ShareStore()
        actions = [ActionItem(owner='John', task='send the report')]

        shared = store.create(actions)

        assert store.get(shared.share_id) is shared
        assert shared.actions == actions
        assert shared.created_at.tzinfo is not None
        assert len(store) == 1

    def test_stores_a_copy(self):
        store = ShareStore()
        actions = [ActionItem(task='book the room')]

        shared = store.create(actions)
        actions.append(ActionItem(task='later addition'))

        assert len(shared.actions) == 1

    def test_ids_are_unique(self):
        store = ShareStore()
        ids = {store.create([ActionItem(task='x')]).share_id for _ in range(5)}

        assert len(ids) == 5

    def test_unknown_id(self):
        with pytest.raises(ShareNotFoundError) as exc_info:
            ShareStore().get('missing')

        assert exc_info.value.context == {'share_id': 'missing'}


class TestShareStoreBounds:
    def test_oldest_share_evicted_at_capacity(self):
        store = ShareStore(max_shares=2)
        first = store.create([ActionItem(task='one')])
        second = store.create([ActionItem(task='two')])
        third = store.create([ActionItem(task='three')])

        assert len(store) == 2
        with pytest.raises(ShareNotFoundError):
            store.get(first.share_id)
        assert store.get(second.share_id) is second
        assert store.get(third.share_id) is third

    def test_store_never_exceeds_capacity(self):
        store = ShareStore(max_shares=10)
        for _ in range(500):
            store.create([ActionItem(task='x')])

        assert len(store) == 10

    def test_expired_share_not_found(self):
        clock = MagicMock(return_value=datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc))
        store = ShareStore(ttl_seconds=3600, now=clock)
        shared = store.create([ActionItem(task='x')])

        clock.return_value += timedelta(minutes=59)
        assert store.get(shared.share_id) is shared

        clock.return_value += timedelta(minutes=1)
        with pytest.raises(ShareNotFoundError):
            store.get(shared.share_id)
        assert len(store) == 0

    def test_expired_shares_purged_on_create(self):
        clock = MagicMock(return_value=datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc))
        store = ShareStore(ttl_seconds=60, now=clock)
        store.create([ActionItem(task='old')])
        store.create([ActionItem(task='old too')])

        clock.return_value += timedelta(minutes=5)
        fresh = store.create([ActionItem(task='new')])

        assert len(store) == 1
        assert store.get(fresh.share_id).created_at == clock.return_value

    def test_zero_ttl_keeps_shares(self):
        clock = MagicMock(return_value=datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc))
        store = ShareStore(ttl_seconds=0, now=clock)
        shared = store.create([ActionItem(task='x')])

        clock.return_value += timedelta(days=365)

        assert store.get(shared.share_id) is shared

    def test_invalid_capacity(self):
        with pytest.raises(ValueError):
            ShareStore(max_shares=0)
