"""
Unit tests for WatchlistService.

Tests cover:
- Loading, adding, removing and reordering
- Index bookkeeping
- Change notifications
- Storage failures leaving memory untouched
"""

import pytest
from unittest.mock import MagicMock

from stockboard.core.exceptions import NotFoundError, StorageError, ValidationError
from stockboard.domain.models import WatchlistItem
from stockboard.services import WatchlistService


class TestAdd:
    """Tests for adding tickers."""

    def test_add_appends_with_next_index(self, watchlist_service: WatchlistService):
        watchlist_service.add("2330", "台積電")
        item = watchlist_service.add("2317", "鴻海")

        assert item.index == 1
        assert watchlist_service.codes() == ["2330", "2317"]

    def test_add_upper_cases_and_defaults_name(self, watchlist_service: WatchlistService):
        item = watchlist_service.add("00631l")

        assert item.code == "00631L"
        assert item.name == "00631L"

    def test_duplicate_rejected(self, watchlist_service: WatchlistService):
        watchlist_service.add("2330")

        with pytest.raises(ValidationError):
            watchlist_service.add("2330")

    @pytest.mark.parametrize("code", ["", "23 30", "2330.TW", "台積電"])
    def test_invalid_code_rejected(self, watchlist_service: WatchlistService, code):
        with pytest.raises(ValidationError):
            watchlist_service.add(code)

    def test_add_persists(self, watchlist_service: WatchlistService, watchlist_repo):
        watchlist_service.add("2330", "台積電")

        reloaded = WatchlistService(watchlist_repo)
        reloaded.initialize()

        assert reloaded.codes() == ["2330"]


class TestRemoveAndReorder:
    """Tests for removal and reordering."""

    @pytest.fixture
    def populated(self, watchlist_service: WatchlistService) -> WatchlistService:
        for code in ("2330", "2317", "0050"):
            watchlist_service.add(code)
        return watchlist_service

    def test_remove_renumbers_indices(self, populated: WatchlistService):
        """
        GIVEN [2330, 2317, 0050]
        WHEN I remove 2317
        THEN the remaining indices are 0 and 1
        """
        populated.remove("2317")

        assert [(i.code, i.index) for i in populated.items()] == [("2330", 0), ("0050", 1)]

    def test_remove_missing_raises(self, populated: WatchlistService):
        with pytest.raises(NotFoundError):
            populated.remove("9999")

    def test_reorder(self, populated: WatchlistService):
        items = populated.reorder(["0050", "2330", "2317"])

        assert [(i.code, i.index) for i in items] == [("0050", 0), ("2330", 1), ("2317", 2)]

    def test_reorder_requires_every_code(self, populated: WatchlistService):
        with pytest.raises(ValidationError):
            populated.reorder(["0050", "2330"])

    def test_reorder_rejects_duplicates(self, populated: WatchlistService):
        with pytest.raises(ValidationError):
            populated.reorder(["0050", "2330", "2330"])

    def test_add_after_remove_uses_max_index(self, populated: WatchlistService):
        populated.remove("2330")

        item = populated.add("2454")

        assert item.index == 2


class TestNotifications:
    def test_listeners_receive_new_list(self, watchlist_service: WatchlistService):
        seen = []
        watchlist_service.on_change(lambda items: seen.append([i.code for i in items]))

        watchlist_service.add("2330")
        watchlist_service.add("2317")
        watchlist_service.remove("2330")

        assert seen == [["2330"], ["2330", "2317"], ["2317"]]

    def test_unsubscribe(self, watchlist_service: WatchlistService):
        listener = MagicMock()
        unsubscribe = watchlist_service.on_change(listener)

        unsubscribe()
        watchlist_service.add("2330")

        listener.assert_not_called()

    def test_failing_listener_does_not_break_mutation(self, watchlist_service: WatchlistService):
        watchlist_service.on_change(MagicMock(side_effect=RuntimeError("boom")))

        watchlist_service.add("2330")

        assert watchlist_service.contains("2330")


class TestStorageFailures:
    def test_failed_add_leaves_list_untouched(self):
        """
        GIVEN a repository that fails on write
        WHEN I add a ticker
        THEN StorageError propagates and the in-memory list is unchanged
        """
        repo = MagicMock()
        repo.list_ordered.return_value = [WatchlistItem(code="2330", name="台積電", index=0)]
        repo.add.side_effect = StorageError("Failed to add 2317 to watchlist")
        service = WatchlistService(repo)
        service.initialize()

        with pytest.raises(StorageError):
            service.add("2317")

        assert service.codes() == ["2330"]

    def test_failed_remove_leaves_list_untouched(self):
        repo = MagicMock()
        repo.list_ordered.return_value = [
            WatchlistItem(code="2330", name="", index=0),
            WatchlistItem(code="2317", name="", index=1),
        ]
        repo.delete_and_renumber.side_effect = StorageError("Failed to remove 2330")
        service = WatchlistService(repo)
        service.initialize()

        with pytest.raises(StorageError):
            service.remove("2330")

        assert service.codes() == ["2330", "2317"]


class TestNames:
    def test_update_name_records_source_name(self, watchlist_service: WatchlistService):
        watchlist_service.add("2330")

        watchlist_service.update_name("2330", "台積電")

        assert watchlist_service.items()[0].name == "台積電"

    def test_update_name_ignores_unknown_code(self, watchlist_service: WatchlistService):
        watchlist_service.update_name("2330", "台積電")

        assert watchlist_service.items() == []
