"""Read-side recipe and comment queries."""

import json
from datetime import UTC, datetime, timedelta

import pytest
from cookbook import queries
from cookbook.comment.workflow import post_comment
from cookbook.recipe.engagement import RecordRecipeView, ToggleRecipeLike
from cookbook.recipe.publishing import PublishRecipe
from cookbook.recipe.recipe import Recipe
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


def _publish_recipe(**overrides):
    defaults = {
        "author_id": "member-001",
        "title": "Basic Recipe",
        "description": "A dependable recipe for everyday cooking.",
        "image": "https://cdn.example.com/basic.jpg",
        "category": "Dinner",
        "cuisine": "Italian",
        "prep_time": 10,
        "cook_time": 20,
        "servings": 2,
        "ingredients": json.dumps([{"item": "Water", "amount": "1 l"}]),
        "instructions": json.dumps([{"description": "Cook it."}]),
    }
    defaults.update(overrides)
    return current_domain.process(PublishRecipe(**defaults), asynchronous=False)


def _like(recipe_id, *member_ids):
    for member_id in member_ids:
        current_domain.process(ToggleRecipeLike(recipe_id=recipe_id, member_id=member_id), asynchronous=False)


def _titles(items):
    return [item.title for item in items]


class TestListRecipes:
    def test_only_published_public(self):
        _publish_recipe(title="Visible")
        _publish_recipe(title="Draft", status="draft")
        _publish_recipe(title="Private", is_public=False)

        page = queries.list_recipes()

        assert _titles(page.items) == ["Visible"]
        assert page.total == 1

    def test_filters(self):
        _publish_recipe(title="Pasta", category="Dinner", cuisine="Italian", tags=json.dumps(["quick"]))
        _publish_recipe(title="Pancakes", category="Breakfast", cuisine="American", difficulty="Easy")
        _publish_recipe(title="Other Pasta", category="Dinner", cuisine="Italian", author_id="member-002")

        assert sorted(_titles(queries.list_recipes(category="Dinner").items)) == ["Other Pasta", "Pasta"]
        assert _titles(queries.list_recipes(cuisine="American").items) == ["Pancakes"]
        assert _titles(queries.list_recipes(difficulty="Easy").items) == ["Pancakes"]
        assert _titles(queries.list_recipes(author_id="member-002").items) == ["Other Pasta"]
        assert _titles(queries.list_recipes(tag="Quick").items) == ["Pasta"]

    def test_max_time_filters_cook_time(self):
        _publish_recipe(title="Fast", cook_time=10)
        _publish_recipe(title="Slow", cook_time=90)

        assert _titles(queries.list_recipes(max_time=30).items) == ["Fast"]

    def test_sort_by_popular(self):
        quiet = _publish_recipe(title="Quiet")
        loved = _publish_recipe(title="Loved")
        _like(loved, "m1", "m2")
        _like(quiet, "m1")

        assert _titles(queries.list_recipes(sort_by="popular").items) == ["Loved", "Quiet"]

    def test_sort_by_rating(self):
        low = _publish_recipe(title="Low")
        high = _publish_recipe(title="High")
        post_comment(low, "m1", "Meh", rating=2)
        post_comment(high, "m1", "Great", rating=5)

        assert _titles(queries.list_recipes(sort_by="rating").items) == ["High", "Low"]

    def test_sort_by_views(self):
        _publish_recipe(title="Unseen")
        seen = _publish_recipe(title="Seen")
        current_domain.process(RecordRecipeView(recipe_id=seen), asynchronous=False)

        assert _titles(queries.list_recipes(sort_by="views").items) == ["Seen", "Unseen"]

    def test_sort_by_time(self):
        _publish_recipe(title="Slow", cook_time=60)
        _publish_recipe(title="Fast", cook_time=5)

        assert _titles(queries.list_recipes(sort_by="time").items) == ["Fast", "Slow"]

    def test_unknown_sort_rejected(self):
        with pytest.raises(ValidationError):
            queries.list_recipes(sort_by="alphabetical")

    def test_pagination(self):
        for i in range(5):
            _publish_recipe(title=f"Recipe {i}")

        page = queries.list_recipes(page=2, limit=2)

        assert len(page.items) == 2
        assert page.page == 2
        assert page.total == 5
        assert page.pages == 3

    def test_page_past_the_end(self):
        _publish_recipe()
        page = queries.list_recipes(page=3, limit=10)
        assert page.items == []
        assert page.total == 1

    @pytest.mark.parametrize("limit", [0, 51])
    def test_limit_bounds(self, limit):
        with pytest.raises(ValidationError):
            queries.list_recipes(limit=limit)

    def test_page_must_be_positive(self):
        with pytest.raises(ValidationError):
            queries.list_recipes(page=0)


class TestGetRecipe:
    def test_visible(self):
        recipe_id = _publish_recipe()
        assert queries.get_recipe(recipe_id).title == "Basic Recipe"

    def test_draft_hidden(self):
        recipe_id = _publish_recipe(status="draft")
        with pytest.raises(ObjectNotFoundError):
            queries.get_recipe(recipe_id)


class TestSearchRecipes:
    def test_matches_title_description_and_tags(self):
        _publish_recipe(title="Lemon Tart")
        _publish_recipe(title="Fish Supper", description="Crispy fish with a squeeze of LEMON.")
        _publish_recipe(title="Citrus Salad", tags=json.dumps(["lemony"]))
        _publish_recipe(title="Beef Stew")

        page = queries.search_recipes("lemon")

        assert sorted(_titles(page.items)) == ["Citrus Salad", "Fish Supper", "Lemon Tart"]

    def test_blank_term_rejected(self):
        with pytest.raises(ValidationError):
            queries.search_recipes("  ")


class TestCollections:
    def test_popular(self):
        a = _publish_recipe(title="Alpha")
        b = _publish_recipe(title="Bravo")
        _publish_recipe(title="Charlie")
        _like(b, "m1", "m2")
        _like(a, "m1")

        assert _titles(queries.popular_recipes(limit=2)) == ["Bravo", "Alpha"]

    def test_trending_ignores_old_recipes(self):
        fresh = _publish_recipe(title="Fresh")
        old = _publish_recipe(title="Old")
        repo = current_domain.repository_for(Recipe)
        recipe = repo.get(old)
        recipe.created_at = datetime.now(UTC) - timedelta(days=45)
        repo.add(recipe)
        current_domain.process(RecordRecipeView(recipe_id=old), asynchronous=False)
        current_domain.process(RecordRecipeView(recipe_id=fresh), asynchronous=False)

        assert _titles(queries.trending_recipes()) == ["Fresh"]

    def test_similar(self):
        base = _publish_recipe(title="Base", category="Dinner", cuisine="Thai", tags=json.dumps(["noodles"]))
        _publish_recipe(title="Same Category", category="Dinner", cuisine="Greek")
        _publish_recipe(title="Same Cuisine", category="Lunch", cuisine="Thai")
        _publish_recipe(title="Shared Tag", category="Snack", cuisine="French", tags=json.dumps(["noodles"]))
        _publish_recipe(title="Unrelated", category="Dessert", cuisine="French")

        similar = queries.similar_recipes(base)

        assert sorted(_titles(similar)) == ["Same Category", "Same Cuisine", "Shared Tag"]

    def test_category_and_cuisine_counts(self):
        _publish_recipe(category="Dinner", cuisine="Italian")
        _publish_recipe(category="Dinner", cuisine="Thai")
        _publish_recipe(category="Lunch", cuisine="Italian")

        assert queries.category_counts() == [("Dinner", 2), ("Lunch", 1)]
        assert queries.cuisine_counts() == [("Italian", 2), ("Thai", 1)]


class TestCommentQueries:
    def test_recipe_comments_are_top_level(self):
        recipe_id = _publish_recipe()
        parent = post_comment(recipe_id, "m1", "First")
        post_comment(recipe_id, "m2", "Reply", parent_id=parent)
        post_comment(recipe_id, "m3", "Second")

        page = queries.recipe_comments(recipe_id)

        assert sorted(c.text for c in page.items) == ["First", "Second"]
        assert page.total == 2

    def test_recipe_comments_unknown_recipe(self):
        with pytest.raises(ObjectNotFoundError):
            queries.recipe_comments("missing")

    def test_replies_oldest_first(self):
        recipe_id = _publish_recipe()
        parent = post_comment(recipe_id, "m1", "Question?")
        post_comment(recipe_id, "m2", "Answer one", parent_id=parent)
        post_comment(recipe_id, "m3", "Answer two", parent_id=parent)

        page = queries.comment_replies(parent)

        assert [c.text for c in page.items] == ["Answer one", "Answer two"]

    def test_comments_by_author(self):
        recipe_a = _publish_recipe(title="Recipe A")
        recipe_b = _publish_recipe(title="Recipe B")
        post_comment(recipe_a, "m1", "On A")
        post_comment(recipe_b, "m1", "On B")
        post_comment(recipe_b, "m2", "Someone else")

        page = queries.comments_by_author("m1")

        assert sorted(c.text for c in page.items) == ["On A", "On B"]
