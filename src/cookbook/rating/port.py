"""Rating store port (abstract interface).

The aggregator reads rated comments and writes a recipe's rating pair
through this contract only, so it can run against the domain repositories
or an in-memory fake without change.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RatedComment:
    """A comment that contributes to its recipe's rating."""

    comment_id: str
    rating: float


@dataclass(frozen=True)
class RatingSummary:
    """The rating pair written back to a recipe."""

    recipe_id: str
    rating: float
    ratings_count: int


class RatingStore(ABC):
    """Abstract rating store interface."""

    @abstractmethod
    def query_rated_comments(self, recipe_id: str) -> list[RatedComment]:
        """Return every comment on the recipe that carries a rating."""
        ...

    @abstractmethod
    def update_recipe_aggregate(self, recipe_id: str, rating: float, ratings_count: int) -> None:
        """Overwrite the recipe's ``rating`` and ``ratings_count``.

        Raises RecipeNotFound when the recipe no longer exists.
        """
        ...
