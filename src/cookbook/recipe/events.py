"""Domain events for the Recipe aggregate.

All events are versioned, immutable facts representing state changes.
"""

from protean.fields import DateTime, Float, Identifier, Integer, String, Text

from cookbook.domain import cookbook


@cookbook.event(part_of="Recipe")
class RecipePublished:
    """An author published a new recipe."""

    __version__ = 1

    recipe_id = Identifier(required=True)
    author_id = Identifier(required=True)
    title = String(required=True)
    category = String(required=True)
    cuisine = String(required=True)
    difficulty = String(required=True)
    total_time = Integer(required=True)
    servings = Integer(required=True)
    tags = Text()
    status = String(required=True)
    published_at = DateTime(required=True)


@cookbook.event(part_of="Recipe")
class RecipeUpdated:
    """The author changed one or more recipe details."""

    __version__ = 1

    recipe_id = Identifier(required=True)
    changed_fields = Text(required=True)  # JSON array of field names
    updated_at = DateTime(required=True)


@cookbook.event(part_of="Recipe")
class RecipeDeleted:
    """The author deleted the recipe, along with its comments."""

    __version__ = 1

    recipe_id = Identifier(required=True)
    author_id = Identifier(required=True)
    deleted_at = DateTime(required=True)


@cookbook.event(part_of="Recipe")
class RecipeLiked:
    """A member liked a recipe."""

    __version__ = 1

    recipe_id = Identifier(required=True)
    member_id = Identifier(required=True)
    likes_count = Integer(required=True)
    liked_at = DateTime(required=True)


@cookbook.event(part_of="Recipe")
class RecipeUnliked:
    """A member withdrew their like."""

    __version__ = 1

    recipe_id = Identifier(required=True)
    member_id = Identifier(required=True)
    likes_count = Integer(required=True)
    unliked_at = DateTime(required=True)


@cookbook.event(part_of="Recipe")
class RecipeRatingRecalculated:
    """The recipe's aggregate rating was recomputed from its rated comments."""

    __version__ = 1

    recipe_id = Identifier(required=True)
    rating = Float(required=True)
    ratings_count = Integer(required=True)
    recalculated_at = DateTime(required=True)
