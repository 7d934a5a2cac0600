"""Read-side queries over recipes and comments.

Listings only ever show published, public recipes. Results are paged with
``page`` starting at 1 and ``limit`` capped at ``MAX_LIMIT``.
"""

import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from cookbook.comment.comment import Comment
from cookbook.recipe.recipe import Recipe, RecipeStatus
from cookbook.utils.query import fetch_all

MAX_LIMIT = 50
DEFAULT_RECIPE_LIMIT = 12
DEFAULT_COMMENT_LIMIT = 20
TRENDING_WINDOW = timedelta(days=30)

_EPOCH = datetime.min.replace(tzinfo=UTC)


@dataclass
class Page:
    items: list = field(default_factory=list)
    page: int = 1
    limit: int = DEFAULT_RECIPE_LIMIT
    total: int = 0
    pages: int = 0


def _created(item):
    return item.created_at or _EPOCH


_RECIPE_SORTS = {
    "newest": (_created, True),
    "oldest": (_created, False),
    "popular": (lambda r: (r.likes_count or 0, _created(r)), True),
    "rating": (lambda r: (r.rating or 0.0, r.ratings_count or 0), True),
    "views": (lambda r: (r.views or 0, r.likes_count or 0), True),
    "time": (lambda r: r.cook_time or 0, False),
}

_COMMENT_SORTS = {
    "newest": (_created, True),
    "oldest": (_created, False),
    "popular": (lambda c: (c.likes_count or 0, _created(c)), True),
}


def _paginate(items, page, limit):
    if page < 1:
        raise ValidationError({"page": ["Page must be a positive integer"]})
    if limit < 1 or limit > MAX_LIMIT:
        raise ValidationError({"limit": [f"Limit must be between 1 and {MAX_LIMIT}"]})

    total = len(items)
    start = (page - 1) * limit
    return Page(
        items=items[start : start + limit],
        page=page,
        limit=limit,
        total=total,
        pages=math.ceil(total / limit),
    )


def _sorted(items, sorts, sort_by):
    if sort_by not in sorts:
        raise ValidationError({"sort_by": [f"Unknown sort '{sort_by}'"]})
    key, reverse = sorts[sort_by]
    return sorted(items, key=key, reverse=reverse)


def _visible_recipes(**filters):
    return fetch_all(Recipe, status=RecipeStatus.PUBLISHED.value, is_public=True, **filters)


# ---------------------------------------------------------------------------
# Recipes
# ---------------------------------------------------------------------------
def get_recipe(recipe_id):
    """Return a visible recipe. Drafts and private recipes are reported as missing."""
    recipe = current_domain.repository_for(Recipe).get(recipe_id)
    if not recipe.is_visible():
        raise ObjectNotFoundError(f"Recipe with id {recipe_id} does not exist")
    return recipe


def list_recipes(
    category=None,
    cuisine=None,
    difficulty=None,
    author_id=None,
    tag=None,
    max_time=None,
    sort_by="newest",
    page=1,
    limit=DEFAULT_RECIPE_LIMIT,
):
    filters = {
        "category": category,
        "cuisine": cuisine,
        "difficulty": difficulty,
        "author_id": str(author_id) if author_id else None,
    }
    recipes = _visible_recipes(**{key: value for key, value in filters.items() if value is not None})

    if tag:
        recipes = [r for r in recipes if tag.strip().lower() in r.tag_list()]
    if max_time is not None:
        recipes = [r for r in recipes if r.cook_time <= max_time]

    return _paginate(_sorted(recipes, _RECIPE_SORTS, sort_by), page, limit)


def search_recipes(term, page=1, limit=DEFAULT_RECIPE_LIMIT):
    """Case-insensitive substring match over title, description and tags."""
    needle = (term or "").strip().lower()
    if not needle:
        raise ValidationError({"term": ["Search term is required"]})

    matches = [
        recipe
        for recipe in _visible_recipes()
        if needle in recipe.title.lower()
        or needle in recipe.description.lower()
        or any(needle in tag for tag in recipe.tag_list())
    ]
    return _paginate(_sorted(matches, _RECIPE_SORTS, "rating"), page, limit)


def popular_recipes(limit=10):
    return _sorted(_visible_recipes(), _RECIPE_SORTS, "popular")[:limit]


def trending_recipes(limit=10, now=None):
    """Most viewed recipes published within the trending window."""
    since = (now or datetime.now(UTC)) - TRENDING_WINDOW
    recent = [r for r in _visible_recipes() if _created(r) >= since]
    return _sorted(recent, _RECIPE_SORTS, "views")[:limit]


def similar_recipes(recipe_id, limit=5):
    """Recipes sharing the category, the cuisine or a tag, best rated first."""
    recipe = current_domain.repository_for(Recipe).get(recipe_id)
    tags = set(recipe.tag_list())

    similar = [
        other
        for other in _visible_recipes()
        if str(other.id) != str(recipe.id)
        and (other.category == recipe.category or other.cuisine == recipe.cuisine or tags & set(other.tag_list()))
    ]
    return sorted(similar, key=lambda r: (r.rating or 0.0, r.likes_count or 0), reverse=True)[:limit]


def category_counts():
    """Published recipe counts per category, largest first."""
    return Counter(recipe.category for recipe in _visible_recipes()).most_common()


def cuisine_counts():
    return Counter(recipe.cuisine for recipe in _visible_recipes()).most_common()


# ---------------------------------------------------------------------------
# Comments
# ---------------------------------------------------------------------------
def recipe_comments(recipe_id, sort_by="newest", page=1, limit=DEFAULT_COMMENT_LIMIT):
    """Top-level comments on a recipe. Replies are fetched with ``comment_replies``."""
    current_domain.repository_for(Recipe).get(recipe_id)

    comments = [c for c in fetch_all(Comment, recipe_id=str(recipe_id)) if not c.is_reply()]
    return _paginate(_sorted(comments, _COMMENT_SORTS, sort_by), page, limit)


def comment_replies(comment_id, page=1, limit=DEFAULT_COMMENT_LIMIT):
    current_domain.repository_for(Comment).get(comment_id)

    replies = fetch_all(Comment, parent_id=str(comment_id))
    return _paginate(_sorted(replies, _COMMENT_SORTS, "oldest"), page, limit)


def comments_by_author(author_id, page=1, limit=DEFAULT_COMMENT_LIMIT):
    comments = fetch_all(Comment, author_id=str(author_id))
    return _paginate(_sorted(comments, _COMMENT_SORTS, "newest"), page, limit)
