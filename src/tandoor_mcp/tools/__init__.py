"""MCP tool handlers for Tandoor integration."""

from tandoor_mcp.tools.mealplans import create_meal_plan, get_meal_plans, get_meal_types
from tandoor_mcp.tools.recipes import create_recipe, get_recipe_details, get_recipes
from tandoor_mcp.tools.reference import get_foods, get_keywords, get_units
from tandoor_mcp.tools.shopping import (
    add_shopping_list_item,
    get_shopping_list,
    remove_shopping_list_item,
    update_shopping_list_item,
)

__all__ = [
    # Recipes
    "create_recipe",
    "get_recipes",
    "get_recipe_details",
    # Meal Plans
    "create_meal_plan",
    "get_meal_plans",
    "get_meal_types",
    # Reference data
    "get_keywords",
    "get_foods",
    "get_units",
    # Shopping
    "get_shopping_list",
    "add_shopping_list_item",
    "update_shopping_list_item",
    "remove_shopping_list_item",
]
