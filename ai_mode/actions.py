"""
AI Mode: action vocabulary - mutation kinds, request modes, and the per-workspace
field catalogue that generation, validation and execution share.
"""

from typing import Any, Dict, Tuple

# Request modes chosen by the intent classifier.
QUERY = "query"
ACTION = "action"

# Mutation kinds an Action may carry.
CREATE = "create"
UPDATE = "update"
DELETE = "delete"

ALL_KINDS = frozenset({CREATE, UPDATE, DELETE})

# Kinds that target an existing catalog entry and therefore need resolution.
TARGETED_KINDS = frozenset({UPDATE, DELETE})

MEDIA = "media"
FOOD = "food"

ALL_WORKSPACES = frozenset({MEDIA, FOOD})

# Advisory only: the catalog keeps free-text status history.
STATUS_OPTIONS: Tuple[str, ...] = (
    "Watching",
    "Finished",
    "On Hold",
    "Dropped",
    "Plan to Watch",
    "Planned",
)

MEDIUM_OPTIONS: Tuple[str, ...] = (
    "Movie",
    "TV Show",
    "Book",
    "Game",
    "Podcast",
    "Anime",
    "Documentary",
)

PLATFORM_OPTIONS: Tuple[str, ...] = (
    "Netflix",
    "Prime Video",
    "Disney+",
    "HBO Max",
    "Apple TV+",
    "Hulu",
    "YouTube",
    "Cinema",
    "Kindle",
    "Physical",
    "Steam",
    "PlayStation",
    "Xbox",
    "Nintendo Switch",
    "Spotify",
    "Other",
)

RATING_MIN = 0
RATING_MAX = 10

# Field catalogue per workspace. "title_column" is the store column that holds
# the value of payload["title"]; every other payload key maps 1:1 to a column.
WORKSPACES: Dict[str, Dict[str, Any]] = {
    MEDIA: {
        "table": "media_entries",
        "title_column": "title",
        "columns": (
            "title", "medium", "type", "status", "genre", "platform", "language",
            "start_date", "finish_date", "my_rating", "average_rating", "price",
            "length", "episodes", "episodes_watched", "season", "year", "plot",
            "poster_url", "imdb_id",
        ),
        "rating_fields": ("my_rating",),
        "date_fields": ("start_date", "finish_date"),
        "numeric_fields": ("episodes", "episodes_watched", "price", "average_rating"),
        "list_fields": ("genre", "language"),
        "has_status": True,
    },
    FOOD: {
        "table": "food_entries",
        "title_column": "name",
        "columns": (
            "name", "branch", "visit_date", "category", "address", "neighborhood",
            "city", "country", "favorite_item", "overall_rating", "food_rating",
            "ambiance_rating", "service_rating", "value_rating", "total_price",
            "currency", "price_level", "cuisine_type", "dining_type", "tags",
            "would_return", "notes",
        ),
        "rating_fields": (
            "overall_rating", "food_rating", "ambiance_rating", "service_rating", "value_rating",
        ),
        "date_fields": ("visit_date",),
        "numeric_fields": ("total_price",),
        "list_fields": ("cuisine_type", "tags"),
        "has_status": False,
    },
}


def get_workspace(workspace: str) -> Dict[str, Any]:
    """Return the field catalogue for a workspace. Raises ValueError for unknown names."""
    try:
        return WORKSPACES[workspace]
    except KeyError:
        raise ValueError(f"Unknown workspace: {workspace!r}. Must be one of: {', '.join(sorted(ALL_WORKSPACES))}")
