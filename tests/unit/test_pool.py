"""Tests for the row widget pool."""

from functools import partial

import pytest

from nexusview.ui.pool import ACTIVE, IDLE


@pytest.fixture
def make_row(host):
    return partial(host.create_row, kind="currency")


class TestAcquire:
    def test_constructs_when_idle_list_empty(self, host, pool, container, make_row):
        row = pool.acquire("currency", make_row, container)

        assert pool.is_pooled(row)
        assert row.pool_kind == "currency"
        assert row.pool_state == ACTIVE
        assert row.parent is container
        assert row.visible
        assert pool.constructed("currency") == 1
        assert host.created["row"] == 1

    def test_reuses_released_rows(self, host, pool, container, make_row):
        first = pool.acquire("currency", make_row, container)
        pool.release(first)
        second = pool.acquire("currency", make_row, container)

        assert second is first
        assert pool.constructed("currency") == 1
        assert host.created["row"] == 1

    def test_kinds_have_separate_idle_lists(self, host, pool, container, make_row):
        row = pool.acquire("currency", make_row, container)
        pool.release(row)
        other = pool.acquire("item", partial(host.create_row, kind="item"), container)

        assert other is not row
        assert pool.idle_count("currency") == 1
        assert pool.constructed("item") == 1


class TestRelease:
    def test_release_resets_widget(self, host, pool, container, make_row):
        row = pool.acquire("currency", make_row, container)
        host.set_fields(row, text="Kej")
        host.bind(row, "click", lambda: None)

        assert pool.release(row) is True
        assert row.pool_state == IDLE
        assert row.fields == {}
        assert row.handlers == {}
        assert not row.visible
        assert row.parent is None
        assert row not in container.children

    def test_double_release_is_noop(self, pool, container, make_row):
        row = pool.acquire("currency", make_row, container)
        assert pool.release(row) is True
        assert pool.release(row) is False
        assert pool.idle_count("currency") == 1

    def test_release_unpooled_is_noop(self, host, pool, container):
        header = host.create_header(container)
        assert pool.release(header) is False
        assert header.parent is container

    def test_release_all(self, host, pool, container, make_row):
        rows = [pool.acquire("currency", make_row, container) for _ in range(3)]
        header = host.create_header(container)
        host.show(header)

        released = pool.release_all(container)

        assert released == 3
        assert container.children == []
        assert not header.visible
        assert all(r.pool_state == IDLE for r in rows)
        assert pool.active_count("currency") == 0

    def test_release_all_on_empty_container(self, pool, container):
        assert pool.release_all(container) == 0


class TestStats:
    def test_peak_tracks_simultaneous_rows(self, pool, container, make_row):
        for _ in range(4):
            pool.acquire("currency", make_row, container)
        pool.release_all(container)
        for _ in range(2):
            pool.acquire("currency", make_row, container)

        stats = pool.stats()["currency"]
        assert stats == {"constructed": 4, "idle": 2, "active": 2, "peak": 4}
        assert stats["constructed"] <= stats["peak"]
