"""Comment workflows: process a comment command, then refresh the recipe rating.

Each command runs in its own unit of work, which commits when the handler
returns. The rating refresh happens only after that, so it always scans a
comment set that includes the change. Nothing after the commit fails the
workflow: a comment that cannot be re-read is logged and its refresh skipped.
"""

import structlog
from protean.utils.globals import current_domain

from cookbook.comment.comment import Comment
from cookbook.comment.deletion import DeleteComment
from cookbook.comment.editing import EditComment
from cookbook.comment.posting import PostComment
from cookbook.rating import get_aggregator

logger = structlog.get_logger(__name__)


def _reload(comment_id):
    try:
        return current_domain.repository_for(Comment).get(comment_id)
    except Exception as exc:
        logger.error(
            "comment_reload_failed",
            comment_id=str(comment_id),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return None


def post_comment(recipe_id, author_id, text, rating=None, parent_id=None) -> str:
    """Post a comment and return its id."""
    comment_id = current_domain.process(
        PostComment(
            recipe_id=recipe_id,
            author_id=author_id,
            text=text,
            rating=rating,
            parent_id=parent_id,
        ),
        asynchronous=False,
    )

    comment = _reload(comment_id)
    if comment is not None:
        get_aggregator().on_comment_created(comment)
    return comment_id


def edit_comment(comment_id, requested_by, text=None, rating=None, clear_rating=False) -> None:
    before = current_domain.repository_for(Comment).get(comment_id)

    current_domain.process(
        EditComment(
            comment_id=comment_id,
            requested_by=requested_by,
            text=text,
            rating=rating,
            clear_rating=clear_rating,
        ),
        asynchronous=False,
    )

    after = _reload(comment_id)
    if after is not None:
        get_aggregator().on_comment_rating_changed(before, after)


def delete_comment(comment_id, requested_by) -> int:
    """Delete a comment and its replies. Returns how many comments were removed."""
    removed = current_domain.process(
        DeleteComment(comment_id=comment_id, requested_by=requested_by),
        asynchronous=False,
    )

    get_aggregator().on_comments_removed(removed)
    return len(removed)
