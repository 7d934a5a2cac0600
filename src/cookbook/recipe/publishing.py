"""PublishRecipe: create a new recipe.

List-shaped inputs (ingredients, instructions, images, tags) and the
nutrition facts arrive as JSON text, keeping the command flat.
"""

import json

from protean.fields import Boolean, Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from cookbook.domain import cookbook
from cookbook.recipe.recipe import Recipe


@cookbook.command(part_of="Recipe")
class PublishRecipe:
    author_id = Identifier(required=True)
    title = String(required=True, max_length=100)
    description = String(required=True, max_length=500)
    image = String(required=True, max_length=500)
    category = String(required=True)
    cuisine = String(required=True)
    prep_time = Integer(required=True)
    cook_time = Integer(required=True)
    servings = Integer(required=True)
    ingredients = Text(required=True)  # JSON array of {item, amount, category}
    instructions = Text(required=True)  # JSON array of {step, title, description, time}
    difficulty = String()
    images = Text()  # JSON array of URLs
    nutrition = Text()  # JSON object of {calories, protein, carbs, fat, fiber}
    tags = Text()  # JSON array of strings
    status = String()
    is_public = Boolean(default=True)


@cookbook.command_handler(part_of=Recipe)
class PublishRecipeHandler:
    @handle(PublishRecipe)
    def publish_recipe(self, command):
        recipe = Recipe.publish(
            author_id=command.author_id,
            title=command.title,
            description=command.description,
            image=command.image,
            category=command.category,
            cuisine=command.cuisine,
            prep_time=command.prep_time,
            cook_time=command.cook_time,
            servings=command.servings,
            ingredients=json.loads(command.ingredients),
            instructions=json.loads(command.instructions),
            difficulty=command.difficulty,
            images=json.loads(command.images) if command.images else None,
            nutrition=json.loads(command.nutrition) if command.nutrition else None,
            tags=json.loads(command.tags) if command.tags else None,
            status=command.status,
            is_public=command.is_public,
        )
        current_domain.repository_for(Recipe).add(recipe)
        return str(recipe.id)
