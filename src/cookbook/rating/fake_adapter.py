"""In-memory rating store for testing.

Holds comment ratings and recipe rating pairs in plain dictionaries. Reads
and writes can be made to fail at runtime to exercise the aggregator's
error handling.
"""

from cookbook.rating.errors import RecipeNotFound, TransientStoreError
from cookbook.rating.port import RatedComment, RatingStore


class FakeRatingStore(RatingStore):
    """Configurable in-memory rating store."""

    def __init__(self) -> None:
        self.recipes: dict[str, dict] = {}
        self.comments: dict[str, dict] = {}
        self.fail_queries: bool = False
        self.fail_writes: bool = False
        self.calls: list[dict] = []

    def configure(self, fail_queries: bool = False, fail_writes: bool = False) -> None:
        """Configure store behavior at runtime."""
        self.fail_queries = fail_queries
        self.fail_writes = fail_writes

    def add_recipe(self, recipe_id: str, rating: float = 0.0, ratings_count: int = 0) -> None:
        self.recipes[str(recipe_id)] = {"rating": rating, "ratings_count": ratings_count}

    def remove_recipe(self, recipe_id: str) -> None:
        self.recipes.pop(str(recipe_id), None)

    def add_comment(self, comment_id: str, recipe_id: str, rating: float | None = None) -> None:
        self.comments[str(comment_id)] = {"recipe_id": str(recipe_id), "rating": rating}

    def remove_comment(self, comment_id: str) -> None:
        self.comments.pop(str(comment_id), None)

    def query_rated_comments(self, recipe_id: str) -> list[RatedComment]:
        self.calls.append({"method": "query_rated_comments", "recipe_id": str(recipe_id)})

        if self.fail_queries:
            raise TransientStoreError(recipe_id, "Comment store unavailable")

        return [
            RatedComment(comment_id=comment_id, rating=comment["rating"])
            for comment_id, comment in self.comments.items()
            if comment["recipe_id"] == str(recipe_id) and comment["rating"] is not None
        ]

    def update_recipe_aggregate(self, recipe_id: str, rating: float, ratings_count: int) -> None:
        self.calls.append(
            {
                "method": "update_recipe_aggregate",
                "recipe_id": str(recipe_id),
                "rating": rating,
                "ratings_count": ratings_count,
            }
        )

        if self.fail_writes:
            raise TransientStoreError(recipe_id, "Recipe store unavailable")
        if str(recipe_id) not in self.recipes:
            raise RecipeNotFound(recipe_id)

        self.recipes[str(recipe_id)] = {"rating": rating, "ratings_count": ratings_count}
