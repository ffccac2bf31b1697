"""Name-or-id resolution for Tandoor recipes, foods and units.

Tools accept references either as an integer id or as a name. Names are looked
up with the endpoint's search and resolve to the first match. Nested objects
sent back to Tandoor need a name as well as an id, so an id-only reference can
optionally be completed with a detail lookup.
"""

import logging
from dataclasses import dataclass

from tandoor_mcp.client import FOOD_ENDPOINT, RECIPE_ENDPOINT, UNIT_ENDPOINT, TandoorClient
from tandoor_mcp.errors import ReferenceNotFoundError, TandoorAPIError
from tandoor_mcp.models import ResolvedReference

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResourceFamily:
    """A Tandoor resource that can be referenced by name or id."""

    label: str
    endpoint: str
    search_field: str = "query"


RECIPE = ResourceFamily(label="Recipe", endpoint=RECIPE_ENDPOINT)
FOOD = ResourceFamily(label="Food", endpoint=FOOD_ENDPOINT)
UNIT = ResourceFamily(label="Unit", endpoint=UNIT_ENDPOINT)


async def resolve_reference(
    client: TandoorClient,
    family: ResourceFamily,
    ref: str | int,
    *,
    recover_name: bool = True,
    fallback_name: str = "Unknown",
) -> ResolvedReference:
    """Resolve a name or id to an id and display name.

    Args:
        client: Tandoor client
        family: Which resource the reference points at
        ref: Integer id, or a name to search for
        recover_name: For id references, fetch the entity to fill in its name
        fallback_name: Name used when that lookup fails

    Returns:
        The resolved id and name. The name is None only for id references
        resolved with recover_name=False.

    Raises:
        ReferenceNotFoundError: the name search returned nothing
        TandoorAPIError: the name search itself failed
    """
    if isinstance(ref, int):
        if not recover_name:
            return ResolvedReference(id=ref)
        return ResolvedReference(
            id=ref, name=await _recover_name(client, family, ref, fallback_name)
        )

    matches = await client.search_entities(family.endpoint, {family.search_field: ref})
    if not matches:
        logger.error(f'{family.label} named "{ref}" not found.')
        raise ReferenceNotFoundError(family.label, ref)

    first = matches[0]
    if len(matches) > 1:
        logger.warning(
            f'Multiple {family.label.lower()}s found for "{ref}". '
            f"Using the first match (ID: {first['id']})."
        )

    logger.info(f'Found {family.label} ID: {first["id"]} for "{ref}"')
    return ResolvedReference(id=first["id"], name=first.get("name") or fallback_name)


async def _recover_name(
    client: TandoorClient, family: ResourceFamily, entity_id: int, fallback_name: str
) -> str:
    try:
        entity = await client.get_entity(family.endpoint, entity_id)
    except TandoorAPIError as e:
        logger.warning(
            f"Could not fetch name for {family.label.lower()} ID {entity_id}: {e}"
        )
        return fallback_name
    return (entity or {}).get("name") or fallback_name
