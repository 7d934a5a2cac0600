"""Errors raised while refreshing a recipe's aggregate rating."""


class RatingAggregationError(Exception):
    """Base class for rating aggregation failures."""

    def __init__(self, recipe_id, message=None):
        self.recipe_id = str(recipe_id)
        super().__init__(message or f"Rating aggregation failed for recipe {self.recipe_id}")


class RecipeNotFound(RatingAggregationError):
    """The recipe was deleted before its rating could be written back."""

    def __init__(self, recipe_id):
        super().__init__(recipe_id, f"Recipe {recipe_id} no longer exists")


class TransientStoreError(RatingAggregationError):
    """Reading comments or writing the recipe failed at the store."""
