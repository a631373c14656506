"""Tests for the JSON state store and posts reader."""

import json
from unittest.mock import patch

import pytest

from video_sync.channel.schemas import FeedItem, SyncState
from video_sync.core.exceptions import PersistenceError
from video_sync.database import JsonStateStore, PostsReader


class TestJsonStateStore:
    """Test load/save of the sync record."""

    def test_load_missing_file_returns_empty_state(self, store):
        state = store.load()
        assert state.items == []
        assert state.last_seen_id is None
        assert not store.path.exists()

    def test_save_creates_parent_directories(self, store):
        store.save(SyncState(items=[FeedItem(id="a")], last_seen_id="a"))
        assert store.path.exists()

    def test_save_then_load(self, store):
        state = SyncState(
            items=[
                FeedItem(id="b", title="B", published_at="2024-02-01T00:00:00Z"),
                FeedItem(id="a", title="A", thumbnail_url="https://i.ytimg.com/vi/a/hq.jpg"),
            ],
            last_seen_id="b",
        )
        store.save(state)

        loaded = store.load()
        assert [item.id for item in loaded.items] == ["b", "a"]
        assert loaded.last_seen_id == "b"
        assert loaded.items[1].thumbnail_url == "https://i.ytimg.com/vi/a/hq.jpg"
        assert loaded.items[0].published_at.year == 2024

    def test_loads_existing_posts_file(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text(
            json.dumps(
                {
                    "posts": [
                        {
                            "id": "abc",
                            "title": "Existing",
                            "description": None,
                            "publishedAt": "2023-05-01T12:00:00Z",
                            "thumbnail": None,
                            "videoUrl": "https://www.youtube.com/watch?v=abc",
                        }
                    ],
                    "lastCheckedVideoId": "abc",
                }
            ),
            encoding="utf-8",
        )

        state = store.load()
        assert state.items[0].id == "abc"
        assert state.items[0].description == ""
        assert state.items[0].source_url == "https://www.youtube.com/watch?v=abc"
        assert state.last_seen_id == "abc"

    def test_empty_document_loads_as_empty_state(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{}", encoding="utf-8")
        assert store.load() == SyncState()

    @pytest.mark.parametrize("content", ["{broken", "[]", '{"posts": [{"title": "no id"}]}'])
    def test_invalid_file_raises(self, store, content):
        store.path.parent.mkdir(parents=True)
        store.path.write_text(content, encoding="utf-8")
        with pytest.raises(PersistenceError):
            store.load()

    def test_non_utf8_file_raises(self, store):
        store.path.parent.mkdir(parents=True)
        store.path.write_bytes(b"\xff\xfe garbage")
        with pytest.raises(PersistenceError):
            store.load()

    def test_failed_replace_keeps_previous_file(self, store):
        store.save(SyncState(items=[FeedItem(id="a")], last_seen_id="a"))
        before = store.path.read_bytes()

        with patch("video_sync.database.store.os.replace", side_effect=OSError("no space")):
            with pytest.raises(PersistenceError, match="no space"):
                store.save(SyncState(items=[FeedItem(id="b"), FeedItem(id="a")], last_seen_id="b"))

        assert store.path.read_bytes() == before
        assert [p.name for p in store.path.parent.iterdir()] == ["posts.json"]

    def test_ensure_exists_writes_empty_record_once(self, store):
        store.ensure_exists()
        assert json.loads(store.path.read_text(encoding="utf-8")) == {
            "posts": [],
            "lastCheckedVideoId": None,
        }

        store.save(SyncState(items=[FeedItem(id="a")], last_seen_id="a"))
        store.ensure_exists()
        assert store.load().last_seen_id == "a"


class TestPostsReader:
    """Test the read-only accessor."""

    def test_empty_when_nothing_synced(self, store):
        assert PostsReader(store).list_posts() == []

    def test_returns_items_newest_first(self, store):
        store.save(SyncState(items=[FeedItem(id="b"), FeedItem(id="a")], last_seen_id="b"))
        assert [item.id for item in PostsReader(store).list_posts()] == ["b", "a"]

    def test_serves_last_good_snapshot_when_file_breaks(self, store):
        reader = PostsReader(store)
        store.save(SyncState(items=[FeedItem(id="a")], last_seen_id="a"))
        assert [item.id for item in reader.list_posts()] == ["a"]

        store.path.write_text("{broken", encoding="utf-8")
        assert [item.id for item in reader.list_posts()] == ["a"]

    def test_returned_list_is_a_copy(self, store):
        store.save(SyncState(items=[FeedItem(id="a")], last_seen_id="a"))
        reader = PostsReader(store)
        posts = reader.list_posts()
        posts.clear()
        assert len(reader.list_posts()) == 1

    def test_unreadable_without_snapshot_returns_empty(self, tmp_path):
        path = tmp_path / "posts.json"
        path.write_text("{broken", encoding="utf-8")
        assert PostsReader(JsonStateStore(path)).list_posts() == []

    def test_non_utf8_file_serves_last_good_snapshot(self, store):
        reader = PostsReader(store)
        assert reader.list_posts() == []

        store.path.parent.mkdir(parents=True, exist_ok=True)
        store.path.write_bytes(b"\xff\xfe garbage")
        assert reader.list_posts() == []
