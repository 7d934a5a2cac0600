"""Recipe rating aggregation.

A recipe's ``rating`` is the mean of its rated comments' scores, rounded
half-up to one decimal, and ``ratings_count`` is how many there are. Both
are recomputed from a full scan of the recipe's rated comments rather than
adjusted incrementally, so concurrent refreshes for one recipe converge on
the correct pair once the last one lands.

Comment workflows call the ``on_comment_*`` triggers after their own change
has committed. The triggers never raise: a failed refresh is logged and the
aggregate stays stale until the next trigger for that recipe.
"""

import math

import structlog

from cookbook.rating.errors import RatingAggregationError, RecipeNotFound
from cookbook.rating.port import RatingStore, RatingSummary

logger = structlog.get_logger(__name__)


def round_half_up(value: float, digits: int = 1) -> float:
    """Round ``value`` half-up, so 4.25 becomes 4.3 rather than 4.2."""
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def rating_of(comment) -> float | None:
    """Read a comment's numeric rating, whether it is stored bare or as a value object."""
    rating = getattr(comment, "rating", None)
    return getattr(rating, "score", rating)


class RatingAggregator:
    def __init__(self, store: RatingStore) -> None:
        self.store = store

    def recompute(self, recipe_id: str) -> RatingSummary:
        """Re-derive and store the recipe's rating pair.

        Raises RecipeNotFound or TransientStoreError; the triggers below
        are the non-raising entry points.
        """
        recipe_id = str(recipe_id)
        rated = self.store.query_rated_comments(recipe_id)

        if rated:
            ratings_count = len(rated)
            rating = round_half_up(sum(comment.rating for comment in rated) / ratings_count)
        else:
            ratings_count = 0
            rating = 0.0

        self.store.update_recipe_aggregate(recipe_id, rating, ratings_count)

        logger.info(
            "rating_recomputed",
            recipe_id=recipe_id,
            rating=rating,
            ratings_count=ratings_count,
        )
        return RatingSummary(recipe_id=recipe_id, rating=rating, ratings_count=ratings_count)

    def on_comment_created(self, comment) -> RatingSummary | None:
        if rating_of(comment) is None:
            return None
        return self._refresh(comment.recipe_id)

    def on_comment_removed(self, comment) -> RatingSummary | None:
        if rating_of(comment) is None:
            return None
        return self._refresh(comment.recipe_id)

    def on_comments_removed(self, comments) -> list[RatingSummary]:
        """Refresh once per recipe that lost at least one rated comment."""
        recipe_ids = []
        for comment in comments:
            recipe_id = str(comment.recipe_id)
            if rating_of(comment) is not None and recipe_id not in recipe_ids:
                recipe_ids.append(recipe_id)

        summaries = [self._refresh(recipe_id) for recipe_id in recipe_ids]
        return [summary for summary in summaries if summary is not None]

    def on_comment_rating_changed(self, before, after) -> RatingSummary | None:
        """Refresh when an edit added, changed or cleared the comment's rating."""
        if rating_of(before) == rating_of(after):
            return None
        return self._refresh(after.recipe_id)

    def _refresh(self, recipe_id) -> RatingSummary | None:
        try:
            return self.recompute(recipe_id)
        except RecipeNotFound:
            logger.info("rating_recompute_skipped", recipe_id=str(recipe_id), reason="recipe_not_found")
        except RatingAggregationError as exc:
            logger.error(
                "rating_recompute_failed",
                recipe_id=str(recipe_id),
                error=str(exc),
                error_type=type(exc).__name__,
            )
        return None
