"""Saved recipes: commands and handler.

Recipe ids are taken as given; the cookbook context owns recipe existence.
"""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from members.domain import members
from members.member.member import Member


@members.command(part_of="Member")
class SaveRecipe:
    member_id: Identifier(required=True)
    recipe_id: Identifier(required=True)


@members.command(part_of="Member")
class UnsaveRecipe:
    member_id: Identifier(required=True)
    recipe_id: Identifier(required=True)


@members.command_handler(part_of=Member)
class SavedRecipesHandler:
    @handle(SaveRecipe)
    def save_recipe(self, command):
        repo = current_domain.repository_for(Member)
        member = repo.get(command.member_id)
        member.save_recipe(command.recipe_id)
        repo.add(member)

    @handle(UnsaveRecipe)
    def unsave_recipe(self, command):
        repo = current_domain.repository_for(Member)
        member = repo.get(command.member_id)
        member.unsave_recipe(command.recipe_id)
        repo.add(member)
