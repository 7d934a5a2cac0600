"""DeleteComment: remove a comment together with every reply beneath it.

Only the comment's author can delete. The handler returns the removed
comments so the caller can refresh the recipe's rating afterwards.
"""

from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from cookbook.comment.comment import Comment
from cookbook.domain import cookbook
from cookbook.utils.query import fetch_all


def collect_thread(comment):
    """Return ``comment`` followed by its replies, level by level."""
    thread = [comment]
    pending = [comment]
    while pending:
        current = pending.pop(0)
        replies = fetch_all(Comment, parent_id=str(current.id))
        thread.extend(replies)
        pending.extend(replies)
    return thread


def remove_comments(comments):
    repo = current_domain.repository_for(Comment)
    for comment in comments:
        comment.mark_deleted()
        repo.add(comment)
        repo._dao.delete(comment)


@cookbook.command(part_of="Comment")
class DeleteComment:
    comment_id = Identifier(required=True)
    requested_by = Identifier(required=True)


@cookbook.command_handler(part_of=Comment)
class DeleteCommentHandler:
    @handle(DeleteComment)
    def delete_comment(self, command):
        repo = current_domain.repository_for(Comment)
        comment = repo.get(command.comment_id)

        if str(comment.author_id) != str(command.requested_by):
            raise ValidationError({"author_id": ["Only the comment author can delete this comment"]})

        removed = collect_thread(comment)
        remove_comments(removed)
        return removed
