"""Rating store backed by the cookbook domain's repositories."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from cookbook.comment.comment import Comment
from cookbook.rating.errors import RecipeNotFound, TransientStoreError
from cookbook.rating.port import RatedComment, RatingStore
from cookbook.recipe.recipe import Recipe
from cookbook.utils.query import fetch_all


class RepositoryRatingStore(RatingStore):
    def query_rated_comments(self, recipe_id: str) -> list[RatedComment]:
        try:
            comments = fetch_all(Comment, recipe_id=str(recipe_id))
        except Exception as exc:
            raise TransientStoreError(recipe_id, f"Could not query comments: {exc}") from exc

        return [
            RatedComment(comment_id=str(comment.id), rating=comment.score) for comment in comments if comment.is_rated()
        ]

    def update_recipe_aggregate(self, recipe_id: str, rating: float, ratings_count: int) -> None:
        repo = current_domain.repository_for(Recipe)
        try:
            recipe = repo.get(str(recipe_id))
        except ObjectNotFoundError as exc:
            raise RecipeNotFound(recipe_id) from exc
        except Exception as exc:
            raise TransientStoreError(recipe_id, f"Could not load recipe: {exc}") from exc

        try:
            recipe.record_rating(rating, ratings_count)
            repo.add(recipe)
        except Exception as exc:
            raise TransientStoreError(recipe_id, f"Could not update recipe: {exc}") from exc
