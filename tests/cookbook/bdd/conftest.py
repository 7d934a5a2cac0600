"""Shared BDD fixtures and step definitions for the Cookbook domain."""

import json

import pytest
from cookbook.comment.comment import Comment
from cookbook.comment.workflow import delete_comment, post_comment
from cookbook.recipe.publishing import PublishRecipe
from cookbook.recipe.recipe import Recipe
from cookbook.utils.query import fetch_all
from protean import current_domain
from pytest_bdd import given, parsers, then, when


def _publish(title):
    return current_domain.process(
        PublishRecipe(
            author_id="chef",
            title=title,
            description="A recipe written for behaviour scenarios.",
            image="https://cdn.example.com/bdd.jpg",
            category="Dinner",
            cuisine="Italian",
            prep_time=5,
            cook_time=10,
            servings=2,
            ingredients=json.dumps([{"item": "Garlic", "amount": "2 cloves"}]),
            instructions=json.dumps([{"description": "Cook."}]),
        ),
        asynchronous=False,
    )


@pytest.fixture()
def comments():
    """Comment id per author, most recent comment wins."""
    return {}


@pytest.fixture()
def error():
    """Container for captured validation errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a published recipe", target_fixture="recipe_id")
def published_recipe():
    return _publish("BDD Garlic Pasta")


@given("another published recipe", target_fixture="other_recipe_id")
def another_published_recipe():
    return _publish("BDD Other Recipe")


@given(parsers.cfparse('"{author}" commented with rating {rating:d}'))
@when(parsers.cfparse('"{author}" comments with rating {rating:d}'))
def author_comments_with_rating(recipe_id, comments, author, rating):
    comments[author] = post_comment(recipe_id, author, f"Comment by {author}", rating=rating)


@given(parsers.cfparse('"{author}" commented without a rating'))
@when(parsers.cfparse('"{author}" comments without a rating'))
def author_comments_without_rating(recipe_id, comments, author):
    comments[author] = post_comment(recipe_id, author, f"Comment by {author}")


@given(parsers.cfparse('"{author}" replied to "{parent_author}" with rating {rating:d}'))
@when(parsers.cfparse('"{author}" replies to "{parent_author}" with rating {rating:d}'))
def author_replies(recipe_id, comments, author, parent_author, rating):
    comments[author] = post_comment(
        recipe_id,
        author,
        f"Reply by {author}",
        rating=rating,
        parent_id=comments[parent_author],
    )


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('"{author}" deletes their comment'))
def author_deletes_comment(comments, author):
    delete_comment(comments[author], requested_by=author)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the recipe rating is {rating:f} from {count:d} ratings"))
def recipe_rating_is(recipe_id, rating, count):
    recipe = current_domain.repository_for(Recipe).get(recipe_id)
    assert recipe.rating == rating
    assert recipe.ratings_count == count


@then(parsers.cfparse("the recipe has {count:d} comments"))
def recipe_has_comments(recipe_id, count):
    assert len(fetch_all(Comment, recipe_id=recipe_id)) == count
