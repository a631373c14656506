"""Read-only posts endpoint.

Serves the synced channel uploads. There is no write path: the store is
only mutated by the sync engine.
"""

from fastapi import APIRouter, Depends

from video_sync.api.dependencies import get_posts_reader
from video_sync.api.models.responses import PostsResponse
from video_sync.database import PostsReader

router = APIRouter(tags=["posts"])


@router.get(
    "/posts",
    response_model=PostsResponse,
    summary="List posts",
    description="""
    List the synced channel uploads, newest first.

    Always answers 200: if the state file cannot be read, the last good
    snapshot (or an empty list) is returned instead of an error.
    """,
    operation_id="list_posts",
)
def list_posts(reader: PostsReader = Depends(get_posts_reader)) -> PostsResponse:
    """List synced posts."""
    return PostsResponse(posts=reader.list_posts())
