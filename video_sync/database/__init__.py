"""Database module for the persisted sync record.

Usage:
    store = JsonStateStore("data/posts.json")
    state = store.load()
    ...
    store.save(new_state)

    reader = PostsReader(store)
    posts = reader.list_posts()
"""

from video_sync.database.store import JsonStateStore, PostsReader

__all__ = [
    "JsonStateStore",
    "PostsReader",
]
