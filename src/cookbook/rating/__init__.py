"""Rating store factory.

Provides get_rating_store() / set_rating_store() to swap implementations:
- RepositoryRatingStore, backed by the domain repositories (default)
- FakeRatingStore for unit tests
"""

from cookbook.rating.aggregator import RatingAggregator
from cookbook.rating.port import RatingStore
from cookbook.rating.repository_adapter import RepositoryRatingStore

_current_store: RatingStore | None = None


def get_rating_store() -> RatingStore:
    """Return the current rating store. Defaults to RepositoryRatingStore."""
    global _current_store
    if _current_store is None:
        _current_store = RepositoryRatingStore()
    return _current_store


def set_rating_store(store: RatingStore) -> None:
    """Override the active rating store (useful for tests)."""
    global _current_store
    _current_store = store


def reset_rating_store() -> None:
    """Reset to default store."""
    global _current_store
    _current_store = None


def get_aggregator() -> RatingAggregator:
    return RatingAggregator(get_rating_store())
