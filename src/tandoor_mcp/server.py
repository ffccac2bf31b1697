"""Main MCP server entry point for Tandoor integration."""

import logging
import os
import sys

from dotenv import load_dotenv
from fastmcp import FastMCP

from tandoor_mcp.client import read_settings
from tandoor_mcp.dispatcher import dispatch

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)

# Create the MCP server
mcp = FastMCP(
    name="tandoor",
    instructions="""You are connected to a self-hosted Tandoor recipe manager.
You can create and search recipes, manage the meal plan, and work with the shopping list.

## TOOLS REFERENCE

**Recipes:**
- create_tandoor_recipe: Create a recipe from a name, an ingredient block (one per line) and instructions
- get_recipes: Search by text, keyword ids, food ids or minimum rating
- get_recipe_details: Full recipe JSON

**Meal Planning:**
- get_meal_types: Names accepted by create_tandoor_meal_plan
- create_tandoor_meal_plan: Add recipes (names or ids) to a date and meal type
- get_meal_plans: View planned meals

**Reference data:**
- get_keywords, get_foods, get_units: Look up ids for filters and shopping items

**Shopping:**
- get_shopping_list: View items (filter: recent, true, false, both)
- add_shopping_list_item, update_shopping_list_item, remove_shopping_list_item""",
)


# Register recipe tools
@mcp.tool(name="create_tandoor_recipe")
async def tool_create_tandoor_recipe(
    name: str,
    ingredients_block: str,
    instructions_block: str,
    description: str | None = None,
    servings: int | None = None,
) -> str | dict:
    """Create a new recipe in Tandoor.

    Args:
        name: The name of the recipe
        ingredients_block: Ingredients, one per line (e.g., "1 cup flour\\n2 eggs")
        instructions_block: The recipe instructions
        description: Optional description for the recipe
        servings: Optional number of servings

    Returns:
        Confirmation with the new recipe id
    """
    return await dispatch(
        "create_tandoor_recipe",
        {
            "name": name,
            "ingredients_block": ingredients_block,
            "instructions_block": instructions_block,
            "description": description,
            "servings": servings,
        },
    )


@mcp.tool(name="get_recipes")
async def tool_get_recipes(
    query: str | None = None,
    keywords: list[int] | None = None,
    foods: list[int] | None = None,
    rating: int | None = None,
    limit: int = 10,
) -> str | dict:
    """Search for recipes in Tandoor based on various criteria.

    Args:
        query: Search term for recipe names
        keywords: Keyword IDs (match ANY)
        foods: Food IDs (match ANY)
        rating: Minimum rating (0-5)
        limit: Max number of recipes to return (default 10)

    Returns:
        Matching recipes with id, name, description and rating
    """
    return await dispatch(
        "get_recipes",
        {"query": query, "keywords": keywords, "foods": foods, "rating": rating, "limit": limit},
    )


@mcp.tool(name="get_recipe_details")
async def tool_get_recipe_details(recipe_id: int) -> str | dict:
    """Retrieve the full details of a specific recipe.

    Args:
        recipe_id: The ID of the recipe to retrieve

    Returns:
        The recipe as pretty-printed JSON
    """
    return await dispatch("get_recipe_details", {"recipe_id": recipe_id})


# Register meal plan tools
@mcp.tool(name="create_tandoor_meal_plan")
async def tool_create_tandoor_meal_plan(
    recipes: list[str | int],
    start_date: str,
    meal_type: str,
    title: str | None = None,
    servings: int | float = 1,
    note: str | None = None,
) -> str | dict:
    """Add one or more recipes to the Tandoor meal plan for a specific date and meal type.

    Args:
        recipes: Recipe names or recipe IDs to add to the plan
        start_date: The date for the meal plan entry (YYYY-MM-DD)
        meal_type: Meal type name (e.g., "Dinner", "Lunch"); must exist in Tandoor
        title: Optional title for the meal plan entry
        servings: Number of servings (default 1)
        note: Optional note for the meal plan entry

    Returns:
        One line per added recipe, plus any per-recipe errors
    """
    return await dispatch(
        "create_tandoor_meal_plan",
        {
            "recipes": recipes,
            "start_date": start_date,
            "meal_type": meal_type,
            "title": title,
            "servings": servings,
            "note": note,
        },
    )


@mcp.tool(name="get_meal_plans")
async def tool_get_meal_plans(
    from_date: str | None = None,
    to_date: str | None = None,
    meal_type_id: int | None = None,
) -> str | dict:
    """Retrieve meal plan entries, optionally filtering by date range and meal type.

    Args:
        from_date: Start date (YYYY-MM-DD), inclusive
        to_date: End date (YYYY-MM-DD), inclusive
        meal_type_id: Meal Type ID to filter by

    Returns:
        Meal plan entries with recipe, meal type, date and servings
    """
    return await dispatch(
        "get_meal_plans",
        {"from_date": from_date, "to_date": to_date, "meal_type_id": meal_type_id},
    )


@mcp.tool(name="get_meal_types")
async def tool_get_meal_types() -> str | dict:
    """List all available meal types in Tandoor."""
    return await dispatch("get_meal_types", {})


# Register reference data tools
@mcp.tool(name="get_keywords")
async def tool_get_keywords(
    query: str | None = None,
    root: int | None = None,
    tree: int | None = None,
) -> str | dict:
    """List or search for keywords.

    Args:
        query: Search term for keyword name
        root: ID to get first-level children (0 for root)
        tree: ID to get all children in a tree
    """
    return await dispatch("get_keywords", {"query": query, "root": root, "tree": tree})


@mcp.tool(name="get_foods")
async def tool_get_foods(
    query: str | None = None,
    root: int | None = None,
    tree: int | None = None,
) -> str | dict:
    """List or search for foods.

    Args:
        query: Search term for food name
        root: ID to get first-level children (0 for root)
        tree: ID to get all children in a tree
    """
    return await dispatch("get_foods", {"query": query, "root": root, "tree": tree})


@mcp.tool(name="get_units")
async def tool_get_units(query: str | None = None) -> str | dict:
    """List or search for units.

    Args:
        query: Search term for unit name
    """
    return await dispatch("get_units", {"query": query})


# Register shopping list tools
@mcp.tool(name="get_shopping_list")
async def tool_get_shopping_list(checked: str = "recent") -> str | dict:
    """Retrieve the current shopping list items.

    Args:
        checked: Filter by checked status - "true", "false", "both" or "recent" (default)
    """
    return await dispatch("get_shopping_list", {"checked": checked})


@mcp.tool(name="add_shopping_list_item")
async def tool_add_shopping_list_item(
    food_name_or_id: str | int,
    amount: str,
    unit_name_or_id: str | int,
    note: str | None = None,
) -> str | dict:
    """Add an item to the shopping list, allowing food/unit names or IDs.

    Args:
        food_name_or_id: The name or ID of the food item
        amount: The amount needed (e.g., "1", "2.5", "1/2")
        unit_name_or_id: The name or ID of the unit (e.g., "cup", "g", 5)
        note: Optional note for the item

    Returns:
        Confirmation with the new item id
    """
    return await dispatch(
        "add_shopping_list_item",
        {
            "food_name_or_id": food_name_or_id,
            "amount": amount,
            "unit_name_or_id": unit_name_or_id,
            "note": note,
        },
    )


@mcp.tool(name="update_shopping_list_item")
async def tool_update_shopping_list_item(
    item_id: int,
    amount: str | None = None,
    unit_id: int | None = None,
    checked: bool | None = None,
    note: str | None = None,
) -> str | dict:
    """Update an existing shopping list item (e.g., check/uncheck, change amount).

    Args:
        item_id: The ID of the shopping list item to update
        amount: New amount
        unit_id: New unit ID
        checked: New checked status
        note: New note
    """
    return await dispatch(
        "update_shopping_list_item",
        {
            "item_id": item_id,
            "amount": amount,
            "unit_id": unit_id,
            "checked": checked,
            "note": note,
        },
    )


@mcp.tool(name="remove_shopping_list_item")
async def tool_remove_shopping_list_item(item_id: int) -> str | dict:
    """Remove an item from the shopping list.

    Args:
        item_id: The ID of the shopping list item to remove
    """
    return await dispatch("remove_shopping_list_item", {"item_id": item_id})


def main():
    """Run the MCP server.

    Transports:
    - stdio: Local subprocess communication - DEFAULT
    - http: Streamable HTTP at /mcp, served with uvicorn
    """
    # stdout carries the stdio transport, so logs go to stderr
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    # Validate required environment variables
    base_url, token = read_settings()
    if not base_url:
        print("Error: TANDOOR_URL environment variable is required", file=sys.stderr)
        sys.exit(1)

    if not token:
        print(
            "Error: TANDOOR_API_TOKEN (or TANDOOR_API_KEY) environment variable is required",
            file=sys.stderr,
        )
        sys.exit(1)

    transport = os.getenv("MCP_TRANSPORT", "stdio")
    logger.info(f"Initializing Tandoor MCP server for {base_url}")

    if transport == "http":
        import uvicorn

        host = os.getenv("MCP_HOST", "0.0.0.0")
        port = int(os.getenv("MCP_PORT", "8080"))

        print(f"Starting HTTP server on {host}:{port}", file=sys.stderr)
        app = mcp.http_app(path="/mcp")
        uvicorn.run(app, host=host, port=port)

    elif transport == "stdio":
        print("Tandoor MCP server running on stdio", file=sys.stderr)
        mcp.run()

    else:
        print(f"Error: unsupported MCP_TRANSPORT '{transport}' (use stdio or http)", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
