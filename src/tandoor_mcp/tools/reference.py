"""Keyword, food and unit lookup tools."""

from typing import Any

from tandoor_mcp.client import get_client
from tandoor_mcp.models import ReferenceEntity
from tandoor_mcp.tools.arguments import optional_int, optional_text


def _format_entities(heading: str, empty: str, entities: list[ReferenceEntity]) -> str:
    if not entities:
        return empty

    lines = []
    for entity in entities:
        line = f"ID: {entity.id} - Name: {entity.name}"
        if entity.description:
            line += f" - {entity.description}"
        lines.append(line)
    return f"{heading}:\n" + "\n".join(lines)


async def get_keywords(arguments: dict[str, Any]) -> str:
    """List or search keywords.

    Args:
        arguments: query, root (0 for top level), tree; all optional
    """
    client = get_client()
    keywords = await client.list_keywords(
        query=optional_text(arguments, "query"),
        root=optional_int(arguments, "root"),
        tree=optional_int(arguments, "tree"),
    )
    return _format_entities("Found Keywords", "No keywords found.", keywords)


async def get_foods(arguments: dict[str, Any]) -> str:
    """List or search foods.

    Args:
        arguments: query, root (0 for top level), tree; all optional
    """
    client = get_client()
    foods = await client.list_foods(
        query=optional_text(arguments, "query"),
        root=optional_int(arguments, "root"),
        tree=optional_int(arguments, "tree"),
    )
    return _format_entities("Found Foods", "No foods found.", foods)


async def get_units(arguments: dict[str, Any]) -> str:
    """List or search units."""
    client = get_client()
    units = await client.list_units(query=optional_text(arguments, "query"))
    return _format_entities("Found Units", "No units found.", units)
