"""ToggleRecipeLike and RecordRecipeView: member engagement with a recipe."""

from protean.fields import Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from cookbook.domain import cookbook
from cookbook.recipe.recipe import Recipe


@cookbook.command(part_of="Recipe")
class ToggleRecipeLike:
    recipe_id = Identifier(required=True)
    member_id = Identifier(required=True)


@cookbook.command(part_of="Recipe")
class RecordRecipeView:
    recipe_id = Identifier(required=True)


@cookbook.command_handler(part_of=Recipe)
class RecipeEngagementHandler:
    @handle(ToggleRecipeLike)
    def toggle_like(self, command):
        repo = current_domain.repository_for(Recipe)
        recipe = repo.get(command.recipe_id)

        liked = recipe.toggle_like(command.member_id)

        repo.add(recipe)
        return {"liked": liked, "likes_count": recipe.likes_count}

    @handle(RecordRecipeView)
    def record_view(self, command):
        repo = current_domain.repository_for(Recipe)
        recipe = repo.get(command.recipe_id)

        recipe.record_view()

        repo.add(recipe)
        return recipe.views
