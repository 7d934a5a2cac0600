"""Recipe aggregate: the core of the Cookbook domain.

A Recipe carries the dish itself (ingredients, instructions, nutrition,
timings) together with engagement counters (likes, views) and the derived
rating pair (``rating``/``ratings_count``). The rating pair is written only
through ``record_rating()``, which the rating aggregator calls after
recomputing from the recipe's rated comments.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from cookbook.domain import cookbook
from cookbook.recipe.events import (
    RecipeDeleted,
    RecipeLiked,
    RecipePublished,
    RecipeRatingRecalculated,
    RecipeUnliked,
    RecipeUpdated,
)

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class RecipeCategory(Enum):
    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    DESSERT = "Dessert"
    SNACK = "Snack"
    APPETIZER = "Appetizer"
    BEVERAGE = "Beverage"


class Cuisine(Enum):
    ITALIAN = "Italian"
    CHINESE = "Chinese"
    MEXICAN = "Mexican"
    JAPANESE = "Japanese"
    THAI = "Thai"
    INDIAN = "Indian"
    FRENCH = "French"
    AMERICAN = "American"
    GREEK = "Greek"
    OTHER = "Other"


class Difficulty(Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class IngredientCategory(Enum):
    MAIN = "Main"
    SEASONING = "Seasoning"
    GARNISH = "Garnish"
    SAUCE = "Sauce"
    OTHER = "Other"


class RecipeStatus(Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@cookbook.value_object(part_of="Recipe")
class Nutrition:
    """Per-serving nutrition facts. Missing values default to zero."""

    calories = Float(default=0.0, min_value=0.0)
    protein = Float(default=0.0, min_value=0.0)
    carbs = Float(default=0.0, min_value=0.0)
    fat = Float(default=0.0, min_value=0.0)
    fiber = Float(default=0.0, min_value=0.0)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@cookbook.entity(part_of="Recipe")
class Ingredient:
    item = String(required=True, max_length=200)
    amount = String(required=True, max_length=100)
    category = String(choices=IngredientCategory, default=IngredientCategory.MAIN.value)


@cookbook.entity(part_of="Recipe")
class Instruction:
    step = Integer(required=True, min_value=1)
    title = String(max_length=200, default="")
    description = Text(required=True)
    time = String(max_length=50, default="")


@cookbook.entity(part_of="Recipe")
class RecipeLike:
    """A member's like on a recipe. At most one per member."""

    member_id = Identifier(required=True)
    liked_at = DateTime(required=True)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def normalize_tags(tags):
    """Lower-case, trim and de-duplicate tags, preserving first-seen order."""
    seen = []
    for tag in tags or []:
        cleaned = str(tag).strip().lower()
        if cleaned and cleaned not in seen:
            seen.append(cleaned)
    return seen


def _build_ingredients(ingredients):
    if not ingredients:
        raise ValidationError({"ingredients": ["At least one ingredient is required"]})
    return [
        Ingredient(
            item=ing["item"].strip(),
            amount=ing["amount"].strip(),
            category=ing.get("category") or IngredientCategory.MAIN.value,
        )
        for ing in ingredients
    ]


def _build_instructions(instructions):
    if not instructions:
        raise ValidationError({"instructions": ["At least one instruction is required"]})
    return [
        Instruction(
            step=ins.get("step") or position,
            title=(ins.get("title") or "").strip(),
            description=ins["description"].strip(),
            time=ins.get("time") or "",
        )
        for position, ins in enumerate(instructions, start=1)
    ]


def _build_nutrition(nutrition):
    nutrition = nutrition or {}
    return Nutrition(
        calories=nutrition.get("calories", 0.0),
        protein=nutrition.get("protein", 0.0),
        carbs=nutrition.get("carbs", 0.0),
        fat=nutrition.get("fat", 0.0),
        fiber=nutrition.get("fiber", 0.0),
    )


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@cookbook.aggregate
class Recipe:
    """A dish shared by an author, open to likes, views, and rated comments."""

    author_id = Identifier(required=True)

    # Content
    title = String(required=True, max_length=100)
    description = String(required=True, max_length=500)
    image = String(required=True, max_length=500)
    images = Text()  # JSON array of image URLs
    category = String(required=True, choices=RecipeCategory)
    cuisine = String(required=True, choices=Cuisine)
    difficulty = String(choices=Difficulty, default=Difficulty.MEDIUM.value)

    # Timings (minutes)
    prep_time = Integer(required=True, min_value=0)
    cook_time = Integer(required=True, min_value=1)
    total_time = Integer(default=0)
    servings = Integer(required=True, min_value=1, max_value=100)

    ingredients = HasMany(Ingredient)
    instructions = HasMany(Instruction)
    nutrition = ValueObject(Nutrition)
    tags = Text()  # JSON array of lower-cased strings

    # Engagement
    likes = HasMany(RecipeLike)
    likes_count = Integer(default=0)
    views = Integer(default=0)

    # Derived from rated comments
    rating = Float(default=0.0, min_value=0.0, max_value=5.0)
    ratings_count = Integer(default=0, min_value=0)

    # Visibility
    status = String(choices=RecipeStatus, default=RecipeStatus.PUBLISHED.value)
    is_public = Boolean(default=True)
    is_featured = Boolean(default=False)

    # Timestamps
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def title_minimum_length(self):
        if self.title is not None and len(self.title.strip()) < 3:
            raise ValidationError({"title": ["Title must be at least 3 characters"]})

    @invariant.post
    def description_minimum_length(self):
        if self.description is not None and len(self.description.strip()) < 10:
            raise ValidationError({"description": ["Description must be at least 10 characters"]})

    @invariant.post
    def total_time_matches_prep_and_cook(self):
        if self.prep_time is not None and self.cook_time is not None:
            if self.total_time != self.prep_time + self.cook_time:
                raise ValidationError({"total_time": ["Total time must equal prep time plus cook time"]})

    @invariant.post
    def unrated_recipe_has_zero_rating(self):
        if not self.ratings_count and self.rating:
            raise ValidationError({"rating": ["A recipe without ratings must have a zero rating"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def publish(
        cls,
        author_id,
        title,
        description,
        image,
        category,
        cuisine,
        prep_time,
        cook_time,
        servings,
        ingredients,
        instructions,
        difficulty=None,
        images=None,
        nutrition=None,
        tags=None,
        status=None,
        is_public=True,
    ):
        """Create a new recipe from plain data."""
        now = datetime.now(UTC)
        tag_list = normalize_tags(tags)

        recipe = cls(
            author_id=author_id,
            title=title.strip() if title else title,
            description=description.strip() if description else description,
            image=image,
            images=json.dumps(images) if images else None,
            category=category,
            cuisine=cuisine,
            difficulty=difficulty or Difficulty.MEDIUM.value,
            prep_time=prep_time,
            cook_time=cook_time,
            total_time=(prep_time or 0) + (cook_time or 0),
            servings=servings,
            ingredients=_build_ingredients(ingredients),
            instructions=_build_instructions(instructions),
            nutrition=_build_nutrition(nutrition),
            tags=json.dumps(tag_list),
            likes_count=0,
            views=0,
            rating=0.0,
            ratings_count=0,
            status=status or RecipeStatus.PUBLISHED.value,
            is_public=is_public,
            created_at=now,
            updated_at=now,
        )

        recipe.raise_(
            RecipePublished(
                recipe_id=str(recipe.id),
                author_id=str(author_id),
                title=recipe.title,
                category=category,
                cuisine=cuisine,
                difficulty=recipe.difficulty,
                total_time=recipe.total_time,
                servings=servings,
                tags=recipe.tags,
                status=recipe.status,
                published_at=now,
            )
        )

        return recipe

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    def tag_list(self):
        return json.loads(self.tags) if self.tags else []

    def is_liked_by(self, member_id):
        return any(str(like.member_id) == str(member_id) for like in self.likes)

    def is_visible(self):
        return self.status == RecipeStatus.PUBLISHED.value and bool(self.is_public)

    # -------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------
    def update_details(
        self,
        title=_UNSET,
        description=_UNSET,
        image=_UNSET,
        images=_UNSET,
        category=_UNSET,
        cuisine=_UNSET,
        difficulty=_UNSET,
        prep_time=_UNSET,
        cook_time=_UNSET,
        servings=_UNSET,
        ingredients=_UNSET,
        instructions=_UNSET,
        nutrition=_UNSET,
        tags=_UNSET,
        status=_UNSET,
        is_public=_UNSET,
    ):
        """Apply a partial update. Only fields that were passed change."""
        changes = {
            "title": title.strip() if isinstance(title, str) else title,
            "description": description.strip() if isinstance(description, str) else description,
            "image": image,
            "category": category,
            "cuisine": cuisine,
            "difficulty": difficulty,
            "prep_time": prep_time,
            "cook_time": cook_time,
            "servings": servings,
            "status": status,
            "is_public": is_public,
        }
        changes = {field: value for field, value in changes.items() if value is not _UNSET}

        if images is not _UNSET:
            changes["images"] = json.dumps(images) if images else None
        if tags is not _UNSET:
            changes["tags"] = json.dumps(normalize_tags(tags))
        if nutrition is not _UNSET:
            changes["nutrition"] = _build_nutrition(nutrition)
        replaced = {}
        if ingredients is not _UNSET:
            replaced["ingredients"] = _build_ingredients(ingredients)
        if instructions is not _UNSET:
            replaced["instructions"] = _build_instructions(instructions)

        if not changes and not replaced:
            return

        now = datetime.now(UTC)

        with atomic_change(self):
            for field, value in changes.items():
                setattr(self, field, value)
            for field, children in replaced.items():
                # HasMany assignment appends, so drop the old children first
                for child in list(getattr(self, field)):
                    getattr(self, f"remove_{field}")(child)
                for child in children:
                    getattr(self, f"add_{field}")(child)
            self.total_time = self.prep_time + self.cook_time
            self.updated_at = now

        self.raise_(
            RecipeUpdated(
                recipe_id=str(self.id),
                changed_fields=json.dumps(sorted([*changes, *replaced])),
                updated_at=now,
            )
        )

    def mark_deleted(self):
        self.raise_(
            RecipeDeleted(
                recipe_id=str(self.id),
                author_id=str(self.author_id),
                deleted_at=datetime.now(UTC),
            )
        )

    # -------------------------------------------------------------------
    # Engagement
    # -------------------------------------------------------------------
    def toggle_like(self, member_id):
        """Like the recipe, or withdraw the like if the member already liked it.

        Returns True when the recipe ends up liked by the member.
        """
        now = datetime.now(UTC)
        existing = next((like for like in self.likes if str(like.member_id) == str(member_id)), None)

        with atomic_change(self):
            if existing:
                self.remove_likes(existing)
            else:
                self.add_likes(RecipeLike(member_id=member_id, liked_at=now))
            self.likes_count = len(self.likes)

        if existing:
            self.raise_(
                RecipeUnliked(
                    recipe_id=str(self.id),
                    member_id=str(member_id),
                    likes_count=self.likes_count,
                    unliked_at=now,
                )
            )
            return False

        self.raise_(
            RecipeLiked(
                recipe_id=str(self.id),
                member_id=str(member_id),
                likes_count=self.likes_count,
                liked_at=now,
            )
        )
        return True

    def record_view(self):
        self.views = (self.views or 0) + 1

    # -------------------------------------------------------------------
    # Rating
    # -------------------------------------------------------------------
    def record_rating(self, rating, ratings_count):
        """Overwrite the derived rating pair.

        Touches nothing else: ``updated_at`` tracks the author's edits, not
        comment activity.
        """
        with atomic_change(self):
            self.rating = rating
            self.ratings_count = ratings_count

        self.raise_(
            RecipeRatingRecalculated(
                recipe_id=str(self.id),
                rating=rating,
                ratings_count=ratings_count,
                recalculated_at=datetime.now(UTC),
            )
        )
