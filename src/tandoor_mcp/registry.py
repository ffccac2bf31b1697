"""Static catalog of the tools this server exposes."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from tandoor_mcp.tools.mealplans import create_meal_plan, get_meal_plans, get_meal_types
from tandoor_mcp.tools.recipes import create_recipe, get_recipe_details, get_recipes
from tandoor_mcp.tools.reference import get_foods, get_keywords, get_units
from tandoor_mcp.tools.shopping import (
    add_shopping_list_item,
    get_shopping_list,
    remove_shopping_list_item,
    update_shopping_list_item,
)

Handler = Callable[[dict[str, Any]], Awaitable[str]]

NAME_OR_ID = {"type": ["string", "integer"]}
DATE = {"type": "string", "format": "date"}


@dataclass(frozen=True)
class ToolSpec:
    """A tool's name, description, declared input shape and handler.

    The schemas published over MCP are generated by FastMCP from the wrapper
    signatures in server.py. Here the dispatcher only reads ``required``; the
    rest of ``input_schema`` documents the same fields and must stay in step
    with those wrappers.
    """

    name: str
    description: str
    input_schema: dict[str, Any]
    handler: Handler

    @property
    def required(self) -> list[str]:
        return self.input_schema.get("required", [])


def _schema(properties: dict[str, Any] | None = None, required: list[str] | None = None) -> dict[str, Any]:
    return {"type": "object", "properties": properties or {}, "required": required or []}


TOOLS: tuple[ToolSpec, ...] = (
    ToolSpec(
        name="create_tandoor_recipe",
        description="Create a new recipe in Tandoor.",
        input_schema=_schema(
            {
                "name": {"type": "string"},
                "description": {"type": "string"},
                "servings": {"type": "integer"},
                "ingredients_block": {"type": "string"},
                "instructions_block": {"type": "string"},
            },
            ["name", "ingredients_block", "instructions_block"],
        ),
        handler=create_recipe,
    ),
    ToolSpec(
        name="create_tandoor_meal_plan",
        description=(
            "Add one or more recipes to the Tandoor meal plan for a specific date "
            "and meal type."
        ),
        input_schema=_schema(
            {
                "title": {"type": "string"},
                "recipes": {"type": "array", "items": NAME_OR_ID},
                "start_date": DATE,
                "meal_type": {"type": "string"},
                "servings": {"type": "number", "default": 1},
                "note": {"type": "string"},
            },
            ["recipes", "start_date", "meal_type"],
        ),
        handler=create_meal_plan,
    ),
    ToolSpec(
        name="get_recipes",
        description="Search for recipes in Tandoor based on various criteria.",
        input_schema=_schema(
            {
                "query": {"type": "string"},
                "keywords": {"type": "array", "items": {"type": "integer"}},
                "foods": {"type": "array", "items": {"type": "integer"}},
                "rating": {"type": "integer", "minimum": 0, "maximum": 5},
                "limit": {"type": "integer", "default": 10},
            }
        ),
        handler=get_recipes,
    ),
    ToolSpec(
        name="get_meal_plans",
        description=(
            "Retrieve meal plan entries from Tandoor, optionally filtering by date "
            "range and meal type."
        ),
        input_schema=_schema(
            {"from_date": DATE, "to_date": DATE, "meal_type_id": {"type": "integer"}}
        ),
        handler=get_meal_plans,
    ),
    ToolSpec(
        name="get_recipe_details",
        description="Retrieve the full details of a specific recipe.",
        input_schema=_schema({"recipe_id": {"type": "integer"}}, ["recipe_id"]),
        handler=get_recipe_details,
    ),
    ToolSpec(
        name="get_meal_types",
        description="List all available meal types in Tandoor.",
        input_schema=_schema(),
        handler=get_meal_types,
    ),
    ToolSpec(
        name="get_keywords",
        description="List or search for keywords.",
        input_schema=_schema(
            {"query": {"type": "string"}, "root": {"type": "integer"}, "tree": {"type": "integer"}}
        ),
        handler=get_keywords,
    ),
    ToolSpec(
        name="get_foods",
        description="List or search for foods.",
        input_schema=_schema(
            {"query": {"type": "string"}, "root": {"type": "integer"}, "tree": {"type": "integer"}}
        ),
        handler=get_foods,
    ),
    ToolSpec(
        name="get_units",
        description="List or search for units.",
        input_schema=_schema({"query": {"type": "string"}}),
        handler=get_units,
    ),
    ToolSpec(
        name="get_shopping_list",
        description="Retrieve the current shopping list items.",
        input_schema=_schema(
            {
                "checked": {
                    "type": "string",
                    "enum": ["true", "false", "both", "recent"],
                    "default": "recent",
                }
            }
        ),
        handler=get_shopping_list,
    ),
    ToolSpec(
        name="add_shopping_list_item",
        description="Add an item to the shopping list, allowing food/unit names or IDs.",
        input_schema=_schema(
            {
                "food_name_or_id": NAME_OR_ID,
                "amount": {"type": "string"},
                "unit_name_or_id": NAME_OR_ID,
                "note": {"type": "string"},
            },
            ["food_name_or_id", "amount", "unit_name_or_id"],
        ),
        handler=add_shopping_list_item,
    ),
    ToolSpec(
        name="update_shopping_list_item",
        description="Update an existing shopping list item (e.g., check/uncheck, change amount).",
        input_schema=_schema(
            {
                "item_id": {"type": "integer"},
                "amount": {"type": "string"},
                "unit_id": {"type": "integer"},
                "checked": {"type": "boolean"},
                "note": {"type": "string"},
            },
            ["item_id"],
        ),
        handler=update_shopping_list_item,
    ),
    ToolSpec(
        name="remove_shopping_list_item",
        description="Remove an item from the shopping list.",
        input_schema=_schema({"item_id": {"type": "integer"}}, ["item_id"]),
        handler=remove_shopping_list_item,
    ),
)

_BY_NAME = {tool.name: tool for tool in TOOLS}


def get_tool(name: str) -> ToolSpec | None:
    """Look up a tool by name."""
    return _BY_NAME.get(name)
