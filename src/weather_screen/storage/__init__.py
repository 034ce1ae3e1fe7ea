from .kv import get_value, initialize_database, set_value
from .recent import RECENT_SEARCHES_KEY, RecentSearchStore, push_recent

__all__ = [
    "RECENT_SEARCHES_KEY",
    "RecentSearchStore",
    "get_value",
    "initialize_database",
    "push_recent",
    "set_value",
]
