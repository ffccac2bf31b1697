"""Shopping list MCP tools."""

import logging
from typing import Any

from tandoor_mcp.client import get_client
from tandoor_mcp.errors import TandoorAPIError, ToolInputError
from tandoor_mcp.models import NamedRef, ShoppingListItem, ShoppingListItemCreate
from tandoor_mcp.resolver import FOOD, UNIT, resolve_reference
from tandoor_mcp.tools.arguments import (
    optional_bool,
    optional_int,
    optional_text,
    require_amount,
    require_int,
    require_name_or_id,
)

logger = logging.getLogger(__name__)

CHECKED_FILTERS = ("true", "false", "both", "recent")
DEFAULT_CHECKED_FILTER = "recent"
UNKNOWN_NAME = "Unknown"


def _describe(item: ShoppingListItem | ShoppingListItemCreate) -> str:
    unit = item.unit.name if item.unit else "?"
    food = item.food.name if item.food else "?"
    return f"{item.amount} {unit} {food}"


async def get_shopping_list(arguments: dict[str, Any]) -> str:
    """Get shopping list items.

    Args:
        arguments: checked - one of "true", "false", "both", "recent"
            (default "recent")

    Returns:
        One line per item with id, amount, unit, food, checked state and note
    """
    checked = optional_text(arguments, "checked") or DEFAULT_CHECKED_FILTER
    if checked not in CHECKED_FILTERS:
        raise ToolInputError(
            f"Invalid argument: checked must be one of: {', '.join(CHECKED_FILTERS)}."
        )

    client = get_client()
    items = await client.get_shopping_list(checked)

    if not items:
        return f"No shopping list items found (filter: {checked})."

    lines = []
    for item in items:
        line = f"ID: {item.id} - {_describe(item)}"
        if item.checked:
            line += " [Checked]"
        if item.note:
            line += f" (Note: {item.note})"
        lines.append(line)

    return f"Shopping List Items ({checked}):\n" + "\n".join(lines)


async def add_shopping_list_item(arguments: dict[str, Any]) -> str:
    """Add an item to the shopping list.

    Food and unit may each be given as a name (first search match is used)
    or as an id (its name is looked up, "Unknown" if that fails).

    Args:
        arguments: food_name_or_id, amount, unit_name_or_id (required); note

    Returns:
        Confirmation with the new item's id
    """
    food_ref = require_name_or_id(arguments, "food_name_or_id")
    amount = require_amount(arguments, "amount")
    unit_ref = require_name_or_id(arguments, "unit_name_or_id")
    note = optional_text(arguments, "note")

    client = get_client()
    food = await resolve_reference(client, FOOD, food_ref, fallback_name=UNKNOWN_NAME)
    unit = await resolve_reference(client, UNIT, unit_ref, fallback_name=UNKNOWN_NAME)

    item = ShoppingListItemCreate(
        food=NamedRef(id=food.id, name=food.name or UNKNOWN_NAME),
        unit=NamedRef(id=unit.id, name=unit.name or UNKNOWN_NAME),
        amount=amount,
        note=note,
    )
    logger.debug(f"Adding shopping list item: {item.model_dump(exclude_none=True)}")
    created = await client.add_shopping_list_item(item)
    if created is None:
        return f"Successfully added item to shopping list (ID: unknown): {_describe(item)}."

    return f"Successfully added item to shopping list (ID: {created.id}): {_describe(created)}."


async def update_shopping_list_item(arguments: dict[str, Any]) -> str:
    """Update an existing shopping list item.

    Only the fields supplied among amount, unit_id, checked and note are sent.
    """
    item_id = require_int(arguments, "item_id")

    payload: dict[str, Any] = {}
    if arguments.get("amount") is not None:
        payload["amount"] = require_amount(arguments, "amount")
    unit_id = optional_int(arguments, "unit_id")
    if unit_id is not None:
        payload["unit"] = unit_id
    checked = optional_bool(arguments, "checked")
    if checked is not None:
        payload["checked"] = checked
    note = optional_text(arguments, "note")
    if note is not None:
        payload["note"] = note

    if not payload:
        raise ToolInputError("No fields provided to update.")

    client = get_client()
    await client.update_shopping_list_item(item_id, payload)

    return f"Successfully updated shopping list item ID {item_id}."


async def remove_shopping_list_item(arguments: dict[str, Any]) -> str:
    """Remove an item from the shopping list.

    Raises:
        ToolInputError: Tandoor has no item with that id
    """
    item_id = require_int(arguments, "item_id")

    client = get_client()
    try:
        await client.delete_shopping_list_item(item_id)
    except TandoorAPIError as e:
        if e.status_code == 404:
            raise ToolInputError(f"Shopping list item with ID {item_id} not found.") from e
        raise

    return f"Successfully removed shopping list item ID {item_id}."
