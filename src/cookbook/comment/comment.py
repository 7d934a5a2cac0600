"""Comment aggregate: member feedback on a recipe.

A comment carries free text and, optionally, a 1-5 star ``rating``. Rated
comments are what the recipe's aggregate rating is derived from. Comments
may reply to another comment on the same recipe through ``parent_id``.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Identifier,
    Integer,
    Text,
    ValueObject,
)

from cookbook.comment.events import (
    CommentDeleted,
    CommentEdited,
    CommentLiked,
    CommentPosted,
    CommentUnliked,
)
from cookbook.domain import cookbook

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

MAX_TEXT_LENGTH = 1000


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@cookbook.value_object(part_of="Comment")
class Rating:
    """A star rating from 1 to 5."""

    score = Float(required=True)

    @invariant.post
    def score_must_be_in_range(self):
        if self.score is not None and (self.score < 1 or self.score > 5):
            raise ValidationError({"score": ["Rating must be between 1 and 5"]})


def _build_rating(score):
    return Rating(score=score) if score is not None else None


def _clean_text(text):
    cleaned = (text or "").strip()
    if not cleaned:
        raise ValidationError({"text": ["Comment text is required"]})
    if len(cleaned) > MAX_TEXT_LENGTH:
        raise ValidationError({"text": [f"Comment cannot exceed {MAX_TEXT_LENGTH} characters"]})
    return cleaned


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@cookbook.entity(part_of="Comment")
class CommentLike:
    member_id = Identifier(required=True)
    liked_at = DateTime(required=True)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@cookbook.aggregate
class Comment:
    recipe_id = Identifier(required=True)
    author_id = Identifier(required=True)
    parent_id = Identifier()

    text = Text(required=True)
    rating = ValueObject(Rating)

    likes = HasMany(CommentLike)
    likes_count = Integer(default=0)

    is_edited = Boolean(default=False)
    edited_at = DateTime()

    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def cannot_reply_to_itself(self):
        if self.parent_id is not None and str(self.parent_id) == str(self.id):
            raise ValidationError({"parent_id": ["A comment cannot reply to itself"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def post(cls, recipe_id, author_id, text, rating=None, parent_id=None):
        now = datetime.now(UTC)

        comment = cls(
            recipe_id=recipe_id,
            author_id=author_id,
            parent_id=parent_id,
            text=_clean_text(text),
            rating=_build_rating(rating),
            likes_count=0,
            is_edited=False,
            created_at=now,
            updated_at=now,
        )

        comment.raise_(
            CommentPosted(
                comment_id=str(comment.id),
                recipe_id=str(recipe_id),
                author_id=str(author_id),
                parent_id=str(parent_id) if parent_id else None,
                text=comment.text,
                rating=comment.score,
                posted_at=now,
            )
        )

        return comment

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def score(self):
        """The numeric rating, or None for a plain comment."""
        return self.rating.score if self.rating else None

    def is_rated(self):
        return self.rating is not None

    def is_reply(self):
        return self.parent_id is not None

    def is_liked_by(self, member_id):
        return any(str(like.member_id) == str(member_id) for like in self.likes)

    # -------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------
    def edit(self, text=_UNSET, rating=_UNSET):
        """Change the text and/or the rating. Passing ``rating=None`` clears it."""
        previous = self.score
        changes = {}
        if text is not _UNSET and text is not None:
            changes["text"] = _clean_text(text)
        if rating is not _UNSET:
            changes["rating"] = _build_rating(rating)

        if not changes:
            return

        now = datetime.now(UTC)

        with atomic_change(self):
            for field, value in changes.items():
                setattr(self, field, value)
            self.is_edited = True
            self.edited_at = now
            self.updated_at = now

        self.raise_(
            CommentEdited(
                comment_id=str(self.id),
                recipe_id=str(self.recipe_id),
                text=self.text,
                previous_rating=previous,
                rating=self.score,
                edited_at=now,
            )
        )

    def mark_deleted(self):
        self.raise_(
            CommentDeleted(
                comment_id=str(self.id),
                recipe_id=str(self.recipe_id),
                author_id=str(self.author_id),
                rating=self.score,
                deleted_at=datetime.now(UTC),
            )
        )

    # -------------------------------------------------------------------
    # Likes
    # -------------------------------------------------------------------
    def toggle_like(self, member_id):
        """Like the comment, or withdraw an existing like. Returns True when liked."""
        now = datetime.now(UTC)
        existing = next((like for like in self.likes if str(like.member_id) == str(member_id)), None)

        with atomic_change(self):
            if existing:
                self.remove_likes(existing)
            else:
                self.add_likes(CommentLike(member_id=member_id, liked_at=now))
            self.likes_count = len(self.likes)

        if existing:
            self.raise_(
                CommentUnliked(
                    comment_id=str(self.id),
                    member_id=str(member_id),
                    likes_count=self.likes_count,
                    unliked_at=now,
                )
            )
            return False

        self.raise_(
            CommentLiked(
                comment_id=str(self.id),
                member_id=str(member_id),
                likes_count=self.likes_count,
                liked_at=now,
            )
        )
        return True
