"""EditComment: change a comment's text and/or rating.

Only the comment's author can edit. ``clear_rating`` removes an existing
rating; otherwise a missing ``rating`` leaves it unchanged.
"""

from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from cookbook.comment.comment import _UNSET, Comment
from cookbook.domain import cookbook


@cookbook.command(part_of="Comment")
class EditComment:
    comment_id = Identifier(required=True)
    requested_by = Identifier(required=True)
    text = Text()
    rating = Float()
    clear_rating = Boolean(default=False)


@cookbook.command_handler(part_of=Comment)
class EditCommentHandler:
    @handle(EditComment)
    def edit_comment(self, command):
        repo = current_domain.repository_for(Comment)
        comment = repo.get(command.comment_id)

        if str(comment.author_id) != str(command.requested_by):
            raise ValidationError({"author_id": ["Only the comment author can edit this comment"]})

        if command.clear_rating:
            rating = None
        elif command.rating is not None:
            rating = command.rating
        else:
            rating = _UNSET

        comment.edit(
            text=command.text if command.text is not None else _UNSET,
            rating=rating,
        )

        repo.add(comment)
