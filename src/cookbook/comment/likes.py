"""ToggleCommentLike: like a comment, or withdraw the like."""

from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from cookbook.comment.comment import Comment
from cookbook.domain import cookbook


@cookbook.command(part_of="Comment")
class ToggleCommentLike:
    comment_id = Identifier(required=True)
    member_id = Identifier(required=True)


@cookbook.command_handler(part_of=Comment)
class ToggleCommentLikeHandler:
    @handle(ToggleCommentLike)
    def toggle_like(self, command):
        repo = current_domain.repository_for(Comment)
        comment = repo.get(command.comment_id)

        liked = comment.toggle_like(command.member_id)

        repo.add(comment)
        return {"liked": liked, "likes_count": comment.likes_count}
