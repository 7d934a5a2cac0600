"""PostComment: comment on a recipe, optionally with a star rating.

The recipe must exist. A reply's parent must exist and belong to the same
recipe.
"""

from protean.exceptions import ValidationError
from protean.fields import Float, Identifier, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from cookbook.comment.comment import Comment
from cookbook.domain import cookbook
from cookbook.recipe.recipe import Recipe


@cookbook.command(part_of="Comment")
class PostComment:
    recipe_id = Identifier(required=True)
    author_id = Identifier(required=True)
    text = Text(required=True)
    rating = Float()  # 1-5; omitted for a plain comment
    parent_id = Identifier()


@cookbook.command_handler(part_of=Comment)
class PostCommentHandler:
    @handle(PostComment)
    def post_comment(self, command):
        # Raises ObjectNotFoundError for an unknown recipe
        current_domain.repository_for(Recipe).get(command.recipe_id)

        repo = current_domain.repository_for(Comment)

        if command.parent_id:
            parent = repo.get(command.parent_id)
            if str(parent.recipe_id) != str(command.recipe_id):
                raise ValidationError({"parent_id": ["Parent comment belongs to a different recipe"]})

        comment = Comment.post(
            recipe_id=command.recipe_id,
            author_id=command.author_id,
            text=command.text,
            rating=command.rating,
            parent_id=command.parent_id,
        )

        repo.add(comment)
        return str(comment.id)
