"""Recipe-related MCP tools."""

import json
import logging
from typing import Any

from tandoor_mcp.client import get_client
from tandoor_mcp.models import IngredientCreate, NamedRef, RecipeCreate, StepCreate
from tandoor_mcp.tools.arguments import (
    optional_int,
    optional_int_list,
    optional_text,
    require_int,
    require_text,
)

logger = logging.getLogger(__name__)

PLACEHOLDER_UNIT = "unit"
PLACEHOLDER_AMOUNT = "1"
DEFAULT_RECIPE_LIMIT = 10


def parse_ingredients_block(block: str) -> list[IngredientCreate]:
    """Turn a free-text ingredient block into ingredient records.

    Each non-blank line becomes one ingredient: the whole line is the food
    name and the note, with a placeholder unit and amount. No quantity or unit
    is extracted from the text.
    """
    # TODO: split "2 cups flour" into amount, unit and food once Tandoor's
    # ingredient parser endpoint is wired into the client.
    lines = [line.strip() for line in block.splitlines()]
    return [
        IngredientCreate(
            food=NamedRef(name=line),
            unit=NamedRef(name=PLACEHOLDER_UNIT),
            amount=PLACEHOLDER_AMOUNT,
            note=line,
        )
        for line in lines
        if line
    ]


async def create_recipe(arguments: dict[str, Any]) -> str:
    """Create a new recipe from a name, an ingredient block and instructions.

    Args:
        arguments: name, ingredients_block, instructions_block (required),
            description, servings (optional)

    Returns:
        Confirmation naming the recipe and its new id
    """
    name = require_text(arguments, "name")
    ingredients_block = require_text(arguments, "ingredients_block")
    instructions_block = require_text(arguments, "instructions_block")
    description = optional_text(arguments, "description")
    servings = optional_int(arguments, "servings")

    recipe = RecipeCreate(
        name=name,
        description=description,
        servings=servings,
        steps=[
            StepCreate(
                instruction=instructions_block,
                ingredients=parse_ingredients_block(ingredients_block),
            )
        ],
    )

    client = get_client()
    result = await client.create_recipe(recipe)

    message = (
        f'Successfully created recipe "{name}" in Tandoor '
        f"(ID: {result.get('id') or 'unknown'})."
    )
    logger.info(message)
    return message


async def get_recipes(arguments: dict[str, Any]) -> str:
    """Search for recipes.

    Args:
        arguments: query, keywords (ids, any-of), foods (ids, any-of),
            rating (0-5), limit (default 10); all optional

    Returns:
        One block per recipe with id, name, description and rating
    """
    query = optional_text(arguments, "query")
    keywords = optional_int_list(arguments, "keywords")
    foods = optional_int_list(arguments, "foods")
    rating = optional_int(arguments, "rating", minimum=0, maximum=5)
    limit = optional_int(arguments, "limit") or DEFAULT_RECIPE_LIMIT

    client = get_client()
    page = await client.search_recipes(
        query=query,
        keywords=keywords,
        foods=foods,
        rating=rating,
        page_size=limit,
    )

    if not page.results:
        return "No recipes found matching the criteria."

    blocks = []
    for recipe in page.results:
        block = f"ID: {recipe.id} - {recipe.name}"
        if recipe.description:
            block += f"\nDescription: {recipe.description}"
        block += f"\nRating: {recipe.rating or 'Not rated'}"
        blocks.append(block)

    return (
        f"Found {page.count} recipes (showing {len(page.results)}):\n\n"
        + "\n\n".join(blocks)
    )


async def get_recipe_details(arguments: dict[str, Any]) -> str:
    """Get the full JSON of one recipe, pretty-printed."""
    recipe_id = require_int(arguments, "recipe_id")

    client = get_client()
    result = await client.get_recipe(recipe_id)

    return json.dumps(result, indent=2)
