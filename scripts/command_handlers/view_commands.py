"""View counter handlers for videos."""

from __future__ import annotations

from record_store import Query, RecordManager

VIEWS_FIELD = "views"


def handle_add_views(videos: RecordManager, query: Query, number_to_add: int = 1) -> int:
    result = videos.increment(query, VIEWS_FIELD, number_to_add)
    print(f"Successfully added {number_to_add} views to {result.after.display_name}")
    return 0


def handle_show_views(videos: RecordManager, query: Query) -> int:
    video = videos.find(query)
    print(f"{video.display_name} has {video[VIEWS_FIELD]} views")
    return 0
