"""Meal planning MCP tools."""

import logging
from typing import Any

from tandoor_mcp.client import TandoorClient, get_client
from tandoor_mcp.errors import (
    ReferenceNotFoundError,
    TandoorAPIError,
    ToolExecutionError,
    ToolInputError,
)
from tandoor_mcp.models import (
    MealPlanBatchResult,
    MealPlanCreate,
    MealPlanRecipeRef,
    MealType,
)
from tandoor_mcp.resolver import RECIPE, resolve_reference
from tandoor_mcp.tools.arguments import (
    check_date,
    optional_date,
    optional_int,
    optional_number,
    optional_text,
    require_text,
)

logger = logging.getLogger(__name__)

DEFAULT_RECIPE_NAME = "Recipe"


def _format_servings(servings: int | float) -> str:
    # Tandoor takes servings as text
    if isinstance(servings, float) and servings.is_integer():
        return str(int(servings))
    return str(servings)


def _recipe_refs(arguments: dict[str, Any]) -> list[str | int]:
    recipes = arguments.get("recipes")
    if not isinstance(recipes, list) or not recipes:
        raise ToolInputError(
            "Missing required arguments: recipes (array), start_date, meal_type."
        )
    for ref in recipes:
        if isinstance(ref, bool) or not isinstance(ref, (str, int)) or ref == "":
            raise ToolInputError(
                f"Invalid argument: recipes must contain recipe names or IDs, got {ref!r}."
            )
    return recipes


async def find_meal_type(client: TandoorClient, name: str) -> MealType:
    """Find a meal type by case-insensitive exact name.

    Raises:
        ToolInputError: no meal type has that name
    """
    meal_types = await client.list_meal_types()
    for meal_type in meal_types:
        if meal_type.name.lower() == name.lower():
            logger.info(f'Found Meal Type ID: {meal_type.id} for "{name}"')
            return meal_type

    logger.error(f'Meal type "{name}" not found in received data.')
    raise ToolInputError(f'Meal type "{name}" not found in Tandoor.')


async def _recipe_name_and_keywords(
    client: TandoorClient, recipe_id: int
) -> tuple[str, list[dict[str, Any]]]:
    """Best-effort lookup of what Tandoor wants echoed back for a recipe."""
    try:
        recipe = await client.get_recipe(recipe_id) or {}
    except TandoorAPIError as e:
        logger.warning(f"Could not fetch recipe details for ID {recipe_id}: {e}")
        return DEFAULT_RECIPE_NAME, []
    return recipe.get("name") or DEFAULT_RECIPE_NAME, recipe.get("keywords") or []


async def create_meal_plan(arguments: dict[str, Any]) -> str:
    """Add one or more recipes to the meal plan for a date and meal type.

    Recipes are resolved and submitted one at a time, in the order given. A
    recipe that cannot be found or submitted is reported in the result text
    and does not stop the others.

    Args:
        arguments: recipes (names or ids), start_date (YYYY-MM-DD), meal_type
            (required); title, servings (default 1), note (optional)

    Returns:
        Success lines, followed by an "Errors encountered" section if any
        recipe failed

    Raises:
        ToolInputError: bad arguments or unknown meal type
        ToolExecutionError: none of the recipes could be resolved
    """
    recipe_refs = _recipe_refs(arguments)
    start_date = check_date(require_text(arguments, "start_date"), "start_date")
    meal_type_name = require_text(arguments, "meal_type")
    title = optional_text(arguments, "title")
    servings = optional_number(arguments, "servings", default=1)
    note = optional_text(arguments, "note")

    client = get_client()
    meal_type = await find_meal_type(client, meal_type_name)

    batch = MealPlanBatchResult()
    recipe_ids: list[int] = []
    for ref in recipe_refs:
        try:
            resolved = await resolve_reference(client, RECIPE, ref, recover_name=False)
        except ReferenceNotFoundError as e:
            batch.add_failure(str(ref), e.message)
            continue
        except TandoorAPIError as e:
            logger.error(f'Failed searching recipe "{ref}": {e}')
            batch.add_failure(str(ref), f'Error searching for recipe "{ref}": {e}')
            continue
        recipe_ids.append(resolved.id)

    if not recipe_ids:
        raise ToolExecutionError(
            "Could not resolve any recipe IDs. Errors: "
            + "; ".join(batch.failure_messages())
        )

    for recipe_id in recipe_ids:
        recipe_name, keywords = await _recipe_name_and_keywords(client, recipe_id)
        entry = MealPlanCreate(
            recipe=MealPlanRecipeRef(id=recipe_id, name=recipe_name, keywords=keywords),
            meal_type=meal_type,
            from_date=f"{start_date}T00:00:00",
            servings=_format_servings(servings),
            title=title,
            note=note,
        )
        try:
            await client.create_meal_plan(entry)
        except TandoorAPIError as e:
            message = (
                f"Failed to add recipe ID {recipe_id} to meal plan: {e} "
                f"- API Response: {e.response_detail}"
            )
            logger.error(message)
            batch.add_failure(f"recipe {recipe_id}", message)
            continue

        logger.info(f"Added recipe ID {recipe_id} to meal plan.")
        batch.add_success(
            f"Added recipe ID {recipe_id} to meal plan for {start_date} ({meal_type.name})."
        )

    return batch.render()


async def get_meal_plans(arguments: dict[str, Any]) -> str:
    """Retrieve meal plan entries, optionally filtered by dates and meal type."""
    from_date = optional_date(arguments, "from_date")
    to_date = optional_date(arguments, "to_date")
    meal_type_id = optional_int(arguments, "meal_type_id")

    client = get_client()
    entries = await client.get_meal_plans(
        from_date=from_date, to_date=to_date, meal_type=meal_type_id
    )

    if not entries:
        return "No meal plans found matching the criteria."

    blocks = []
    for entry in entries:
        recipe_name = entry.recipe.name if entry.recipe and entry.recipe.name else "Unknown Recipe"
        recipe_id = entry.recipe.id if entry.recipe else None
        meal_type = (
            entry.meal_type.name
            if entry.meal_type and entry.meal_type.name
            else "Unknown Meal Type"
        )

        block = f"ID: {entry.id}"
        if entry.title:
            block += f" - {entry.title}"
        block += (
            f"\nRecipe: {recipe_name} (ID: {recipe_id})"
            f"\nMeal Type: {meal_type}"
            f"\nDate: {entry.from_date.split('T')[0]}"
            f"\nServings: {entry.servings}"
        )
        if entry.note:
            block += f"\nNote: {entry.note}"
        blocks.append(block)

    return f"Found {len(blocks)} meal plans:\n\n" + "\n\n".join(blocks)


async def get_meal_types(arguments: dict[str, Any]) -> str:
    """List all meal types."""
    client = get_client()
    meal_types = await client.list_meal_types()

    if not meal_types:
        return "No meal types found."

    return "Available Meal Types:\n" + "\n".join(
        f"ID: {mt.id} - Name: {mt.name}" for mt in meal_types
    )
