"""DeleteRecipe: remove a recipe and every comment on it.

Only the recipe's author can delete. No rating refresh follows: the recipe
the aggregate lives on is gone.
"""

from protean.exceptions import ValidationError
from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from cookbook.comment.comment import Comment
from cookbook.comment.deletion import remove_comments
from cookbook.domain import cookbook, logger
from cookbook.recipe.recipe import Recipe
from cookbook.utils.query import fetch_all


@cookbook.command(part_of="Recipe")
class DeleteRecipe:
    recipe_id = Identifier(required=True)
    requested_by = Identifier(required=True)


@cookbook.command_handler(part_of=Recipe)
class DeleteRecipeHandler:
    @handle(DeleteRecipe)
    def delete_recipe(self, command):
        repo = current_domain.repository_for(Recipe)
        recipe = repo.get(command.recipe_id)

        if str(recipe.author_id) != str(command.requested_by):
            raise ValidationError({"author_id": ["Only the recipe author can delete this recipe"]})

        comments = fetch_all(Comment, recipe_id=str(recipe.id))
        remove_comments(comments)

        recipe.mark_deleted()
        repo.add(recipe)
        repo._dao.delete(recipe)
        logger.info("recipe_deleted", recipe_id=str(recipe.id), comments_removed=len(comments))
        return len(comments)
