"""UpdateRecipe: edit an existing recipe.

Only the recipe's author can edit. Fields left unset on the command keep
their current values.
"""

import json

from protean.exceptions import ValidationError
from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from cookbook.domain import cookbook
from cookbook.recipe.recipe import Recipe

_PLAIN_FIELDS = (
    "title",
    "description",
    "image",
    "category",
    "cuisine",
    "difficulty",
    "prep_time",
    "cook_time",
    "servings",
    "status",
    "is_public",
)
_JSON_FIELDS = ("ingredients", "instructions", "images", "nutrition", "tags")


@cookbook.command(part_of="Recipe")
class UpdateRecipe:
    recipe_id = Identifier(required=True)
    requested_by = Identifier(required=True)  # Must match the author
    title = String(max_length=100)
    description = String(max_length=500)
    image = String(max_length=500)
    category = String()
    cuisine = String()
    difficulty = String()
    prep_time = Integer()
    cook_time = Integer()
    servings = Integer()
    ingredients = Text()  # JSON array
    instructions = Text()  # JSON array
    images = Text()  # JSON array
    nutrition = Text()  # JSON object
    tags = Text()  # JSON array
    status = String()
    is_public = Boolean()


@cookbook.command_handler(part_of=Recipe)
class UpdateRecipeHandler:
    @handle(UpdateRecipe)
    def update_recipe(self, command):
        repo = current_domain.repository_for(Recipe)
        recipe = repo.get(command.recipe_id)

        if str(recipe.author_id) != str(command.requested_by):
            raise ValidationError({"author_id": ["Only the recipe author can edit this recipe"]})

        kwargs = {}
        for field in _PLAIN_FIELDS:
            value = getattr(command, field)
            if value is not None:
                kwargs[field] = value
        for field in _JSON_FIELDS:
            value = getattr(command, field)
            if value is not None:
                kwargs[field] = json.loads(value)

        recipe.update_details(**kwargs)
        repo.add(recipe)
