"""Application tests for the comment command handlers."""

import json

import pytest
from cookbook.comment.comment import Comment
from cookbook.comment.deletion import DeleteComment, collect_thread
from cookbook.comment.editing import EditComment
from cookbook.comment.likes import ToggleCommentLike
from cookbook.comment.posting import PostComment
from cookbook.recipe.publishing import PublishRecipe
from protean import current_domain
from protean.exceptions import ObjectNotFoundError, ValidationError


def _publish_recipe(title="Miso Ramen"):
    return current_domain.process(
        PublishRecipe(
            author_id="member-001",
            title=title,
            description="Rich miso broth with noodles and soft eggs.",
            image="https://cdn.example.com/ramen.jpg",
            category="Dinner",
            cuisine="Japanese",
            prep_time=30,
            cook_time=60,
            servings=2,
            ingredients=json.dumps([{"item": "Miso", "amount": "3 tbsp"}]),
            instructions=json.dumps([{"description": "Build the broth."}]),
        ),
        asynchronous=False,
    )


def _post(recipe_id, **overrides):
    defaults = {"recipe_id": recipe_id, "author_id": "member-002", "text": "Slurp-worthy."}
    defaults.update(overrides)
    return current_domain.process(PostComment(**defaults), asynchronous=False)


def _get(comment_id):
    return current_domain.repository_for(Comment).get(comment_id)


class TestPostComment:
    def test_persists_comment(self):
        recipe_id = _publish_recipe()
        comment = _get(_post(recipe_id, rating=4))
        assert str(comment.recipe_id) == recipe_id
        assert comment.score == 4
        assert comment.text == "Slurp-worthy."

    def test_unknown_recipe(self):
        with pytest.raises(ObjectNotFoundError):
            _post("missing-recipe")

    def test_reply(self):
        recipe_id = _publish_recipe()
        parent_id = _post(recipe_id)
        reply = _get(_post(recipe_id, parent_id=parent_id, author_id="member-003"))
        assert str(reply.parent_id) == parent_id

    def test_unknown_parent(self):
        recipe_id = _publish_recipe()
        with pytest.raises(ObjectNotFoundError):
            _post(recipe_id, parent_id="missing-comment")

    def test_parent_on_other_recipe_rejected(self):
        recipe_a = _publish_recipe("Recipe A")
        recipe_b = _publish_recipe("Recipe B")
        parent_id = _post(recipe_a)

        with pytest.raises(ValidationError) as exc:
            _post(recipe_b, parent_id=parent_id)
        assert "different recipe" in str(exc.value)

    def test_rating_out_of_range(self):
        recipe_id = _publish_recipe()
        with pytest.raises(ValidationError):
            _post(recipe_id, rating=7)


class TestEditComment:
    def test_author_edits(self):
        recipe_id = _publish_recipe()
        comment_id = _post(recipe_id, rating=3)

        current_domain.process(
            EditComment(comment_id=comment_id, requested_by="member-002", text="Better with chilli oil.", rating=4),
            asynchronous=False,
        )

        comment = _get(comment_id)
        assert comment.text == "Better with chilli oil."
        assert comment.score == 4
        assert comment.is_edited is True

    def test_omitted_rating_kept(self):
        recipe_id = _publish_recipe()
        comment_id = _post(recipe_id, rating=3)

        current_domain.process(
            EditComment(comment_id=comment_id, requested_by="member-002", text="Just the text."),
            asynchronous=False,
        )

        assert _get(comment_id).score == 3

    def test_other_member_rejected(self):
        recipe_id = _publish_recipe()
        comment_id = _post(recipe_id)

        with pytest.raises(ValidationError) as exc:
            current_domain.process(
                EditComment(comment_id=comment_id, requested_by="member-999", text="Not mine"),
                asynchronous=False,
            )
        assert "Only the comment author can edit" in str(exc.value)


class TestDeleteComment:
    def test_thread_collected_level_by_level(self):
        recipe_id = _publish_recipe()
        root = _post(recipe_id)
        depth = {root: 0}
        for first_level in (_post(recipe_id, parent_id=root), _post(recipe_id, parent_id=root)):
            depth[first_level] = 1
            second_level = _post(recipe_id, parent_id=first_level)
            depth[second_level] = 2
            depth[_post(recipe_id, parent_id=second_level)] = 3

        thread = collect_thread(_get(root))

        levels = [depth[str(c.id)] for c in thread]
        assert levels == sorted(levels)
        assert len(thread) == 7

    def test_returns_removed_thread(self):
        recipe_id = _publish_recipe()
        parent_id = _post(recipe_id)
        reply_id = _post(recipe_id, parent_id=parent_id, author_id="member-003")
        sibling_id = _post(recipe_id, author_id="member-004")

        removed = current_domain.process(
            DeleteComment(comment_id=parent_id, requested_by="member-002"),
            asynchronous=False,
        )

        assert sorted(str(c.id) for c in removed) == sorted([parent_id, reply_id])
        with pytest.raises(ObjectNotFoundError):
            _get(reply_id)
        assert _get(sibling_id) is not None

    def test_other_member_rejected(self):
        recipe_id = _publish_recipe()
        comment_id = _post(recipe_id)

        with pytest.raises(ValidationError):
            current_domain.process(
                DeleteComment(comment_id=comment_id, requested_by="member-999"),
                asynchronous=False,
            )
        assert _get(comment_id) is not None


class TestToggleCommentLike:
    def test_like_and_unlike(self):
        recipe_id = _publish_recipe()
        comment_id = _post(recipe_id)

        liked = current_domain.process(
            ToggleCommentLike(comment_id=comment_id, member_id="member-005"),
            asynchronous=False,
        )
        assert liked == {"liked": True, "likes_count": 1}
        assert _get(comment_id).is_liked_by("member-005")

        unliked = current_domain.process(
            ToggleCommentLike(comment_id=comment_id, member_id="member-005"),
            asynchronous=False,
        )
        assert unliked == {"liked": False, "likes_count": 0}
