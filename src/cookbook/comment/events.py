"""Domain events for the Comment aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer, Text

from cookbook.domain import cookbook


@cookbook.event(part_of="Comment")
class CommentPosted:
    """A member commented on a recipe, optionally rating it."""

    __version__ = 1

    comment_id = Identifier(required=True)
    recipe_id = Identifier(required=True)
    author_id = Identifier(required=True)
    parent_id = Identifier()
    text = Text(required=True)
    rating = Float()
    posted_at = DateTime(required=True)


@cookbook.event(part_of="Comment")
class CommentEdited:
    """The author changed the comment's text or rating."""

    __version__ = 1

    comment_id = Identifier(required=True)
    recipe_id = Identifier(required=True)
    text = Text(required=True)
    previous_rating = Float()
    rating = Float()
    edited_at = DateTime(required=True)


@cookbook.event(part_of="Comment")
class CommentDeleted:
    """The comment was deleted, by its author or along with its recipe or parent."""

    __version__ = 1

    comment_id = Identifier(required=True)
    recipe_id = Identifier(required=True)
    author_id = Identifier(required=True)
    rating = Float()
    deleted_at = DateTime(required=True)


@cookbook.event(part_of="Comment")
class CommentLiked:
    __version__ = 1

    comment_id = Identifier(required=True)
    member_id = Identifier(required=True)
    likes_count = Integer(required=True)
    liked_at = DateTime(required=True)


@cookbook.event(part_of="Comment")
class CommentUnliked:
    __version__ = 1

    comment_id = Identifier(required=True)
    member_id = Identifier(required=True)
    likes_count = Integer(required=True)
    unliked_at = DateTime(required=True)
