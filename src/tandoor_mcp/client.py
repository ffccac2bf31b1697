"""Async HTTP client wrapper for the Tandoor API."""

import logging
import os
from typing import Any

import httpx

from tandoor_mcp.errors import TandoorAPIError
from tandoor_mcp.models import (
    Food,
    Keyword,
    MealPlanCreate,
    MealPlanEntry,
    MealType,
    RecipeCreate,
    RecipePage,
    ShoppingListItem,
    ShoppingListItemCreate,
    Unit,
)

logger = logging.getLogger(__name__)

RECIPE_ENDPOINT = "/api/recipe/"
MEAL_TYPE_ENDPOINT = "/api/meal-type/"
MEAL_PLAN_ENDPOINT = "/api/meal-plan/"
KEYWORD_ENDPOINT = "/api/keyword/"
FOOD_ENDPOINT = "/api/food/"
UNIT_ENDPOINT = "/api/unit/"
SHOPPING_LIST_ENDPOINT = "/api/shopping-list-entry/"


def _results(result: Any) -> list[Any]:
    """Unwrap a paginated ({"results": [...]}) or bare-list response."""
    if isinstance(result, dict):
        return result.get("results") or []
    return result or []


def _compact(params: dict[str, Any]) -> dict[str, Any]:
    """Drop unset query parameters."""
    return {k: v for k, v in params.items() if v is not None and v != []}


class TandoorClient:
    """Async client for interacting with the Tandoor API."""

    def __init__(self, base_url: str, token: str, timeout: float = 30.0):
        """Initialize the Tandoor client.

        Args:
            base_url: Tandoor root URL (e.g., http://tandoor:8080); endpoint
                paths are resolved relative to it
            token: Tandoor API bearer token
            timeout: Request timeout in seconds
        """
        self.base_url = base_url
        self.token = token
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def headers(self) -> dict[str, str]:
        """Get authorization headers."""
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers,
                timeout=self.timeout,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Make an HTTP request to the Tandoor API.

        Args:
            method: HTTP method (GET, POST, PATCH, DELETE)
            endpoint: API endpoint path
            params: Query parameters; list values are sent once per element
            json: JSON body for POST/PATCH requests

        Returns:
            Parsed JSON response, or None for empty responses

        Raises:
            TandoorAPIError: on transport failures and non-2xx responses
        """
        client = await self._get_client()
        logger.debug(f"[API] {method} {endpoint} params={params} payload={json}")

        try:
            response = await client.request(
                method=method,
                url=endpoint,
                params=params,
                json=json,
            )
            logger.debug(f"[API] {method} {endpoint} - Status: {response.status_code}")
            response.raise_for_status()

        except httpx.ConnectError as e:
            raise TandoorAPIError(f"Cannot connect to Tandoor at {self.base_url}") from e
        except httpx.TimeoutException as e:
            raise TandoorAPIError("Request to Tandoor timed out") from e
        except httpx.HTTPStatusError as e:
            raise TandoorAPIError(
                f"HTTP {e.response.status_code}",
                status_code=e.response.status_code,
                body=e.response.text,
            ) from e
        except httpx.HTTPError as e:
            raise TandoorAPIError(f"Request to Tandoor failed: {e}") from e

        if response.status_code == 204 or not response.content:
            return None

        return response.json()

    # Generic entity access, shared by the name-or-id resolver
    async def search_entities(
        self, endpoint: str, params: dict[str, Any]
    ) -> list[dict[str, Any]]:
        """Run a search against a list endpoint.

        Args:
            endpoint: List endpoint path (e.g., /api/food/)
            params: Query parameters

        Returns:
            Matching entities as raw JSON objects, in Tandoor's order
        """
        result = await self._request("GET", endpoint, params=_compact(params))
        return _results(result)

    async def get_entity(self, endpoint: str, entity_id: int) -> dict[str, Any]:
        """Fetch a single entity by id from a list endpoint's detail route."""
        return await self._request("GET", f"{endpoint}{entity_id}/")

    # Recipe Methods
    async def create_recipe(self, recipe: RecipeCreate) -> dict[str, Any]:
        """Create a recipe.

        Args:
            recipe: Recipe payload

        Returns:
            The created recipe as returned by Tandoor
        """
        payload = recipe.model_dump(exclude_none=True)
        result = await self._request("POST", RECIPE_ENDPOINT, json=payload)
        return result or {}

    async def search_recipes(
        self,
        query: str | None = None,
        keywords: list[int] | None = None,
        foods: list[int] | None = None,
        rating: int | None = None,
        page_size: int | None = None,
    ) -> RecipePage:
        """Search recipes with optional filters.

        Args:
            query: Text search term
            keywords: Keyword ids, matched as any-of
            foods: Food ids, matched as any-of
            rating: Minimum rating
            page_size: Results per page

        Returns:
            One page of recipe summaries plus the total count
        """
        params = _compact(
            {
                "query": query or None,
                "rating": rating,
                "page_size": page_size,
                "keywords_or": keywords or None,
                "foods_or": foods or None,
            }
        )
        result = await self._request("GET", RECIPE_ENDPOINT, params=params)

        if isinstance(result, list):
            return RecipePage(count=len(result), results=result)
        return RecipePage.model_validate(result or {})

    async def get_recipe(self, recipe_id: int) -> dict[str, Any]:
        """Get full recipe details.

        Returns:
            The recipe JSON exactly as Tandoor returned it
        """
        return await self.get_entity(RECIPE_ENDPOINT, recipe_id)

    # Meal Plan Methods
    async def list_meal_types(self) -> list[MealType]:
        """Get all meal types, in Tandoor's order."""
        result = await self._request("GET", MEAL_TYPE_ENDPOINT)
        return [MealType.model_validate(mt) for mt in _results(result)]

    async def get_meal_plans(
        self,
        from_date: str | None = None,
        to_date: str | None = None,
        meal_type: int | None = None,
    ) -> list[MealPlanEntry]:
        """Get meal plan entries, optionally filtered.

        Args:
            from_date: Start date (YYYY-MM-DD), inclusive
            to_date: End date (YYYY-MM-DD), inclusive
            meal_type: Meal type id

        Returns:
            List of meal plan entries
        """
        params = _compact(
            {"from_date": from_date, "to_date": to_date, "meal_type": meal_type}
        )
        result = await self._request("GET", MEAL_PLAN_ENDPOINT, params=params or None)
        return [MealPlanEntry.model_validate(e) for e in _results(result)]

    async def create_meal_plan(self, entry: MealPlanCreate) -> dict[str, Any]:
        """Create one meal plan entry."""
        payload = entry.model_dump(exclude_none=True)
        result = await self._request("POST", MEAL_PLAN_ENDPOINT, json=payload)
        return result or {}

    # Reference Methods
    async def list_keywords(
        self, query: str | None = None, root: int | None = None, tree: int | None = None
    ) -> list[Keyword]:
        """List or search keywords."""
        items = await self.search_entities(
            KEYWORD_ENDPOINT, {"query": query or None, "root": root, "tree": tree}
        )
        return [Keyword.model_validate(k) for k in items]

    async def list_foods(
        self, query: str | None = None, root: int | None = None, tree: int | None = None
    ) -> list[Food]:
        """List or search foods."""
        items = await self.search_entities(
            FOOD_ENDPOINT, {"query": query or None, "root": root, "tree": tree}
        )
        return [Food.model_validate(f) for f in items]

    async def list_units(self, query: str | None = None) -> list[Unit]:
        """List or search units."""
        items = await self.search_entities(UNIT_ENDPOINT, {"query": query or None})
        return [Unit.model_validate(u) for u in items]

    # Shopping List Methods
    async def get_shopping_list(self, checked: str = "recent") -> list[ShoppingListItem]:
        """Get shopping list entries.

        Args:
            checked: One of "true", "false", "both", "recent"

        Returns:
            List of shopping list items
        """
        result = await self._request(
            "GET", SHOPPING_LIST_ENDPOINT, params={"checked": checked}
        )
        return [ShoppingListItem.model_validate(i) for i in _results(result)]

    async def add_shopping_list_item(
        self, item: ShoppingListItemCreate
    ) -> ShoppingListItem | None:
        """Add an entry to the shopping list.

        Returns:
            The created entry, or None if Tandoor answered with an empty body
        """
        payload = item.model_dump(exclude_none=True)
        result = await self._request("POST", SHOPPING_LIST_ENDPOINT, json=payload)
        if not result:
            return None
        return ShoppingListItem.model_validate(result)

    async def update_shopping_list_item(
        self, item_id: int, data: dict[str, Any]
    ) -> dict[str, Any]:
        """Partially update a shopping list entry.

        Args:
            item_id: Shopping list entry id
            data: Only the fields to change

        Returns:
            Updated entry as returned by Tandoor
        """
        result = await self._request(
            "PATCH", f"{SHOPPING_LIST_ENDPOINT}{item_id}/", json=data
        )
        return result or {}

    async def delete_shopping_list_item(self, item_id: int) -> None:
        """Delete a shopping list entry."""
        await self._request("DELETE", f"{SHOPPING_LIST_ENDPOINT}{item_id}/")


def read_settings() -> tuple[str | None, str | None]:
    """Read the Tandoor URL and token from the environment.

    TANDOOR_API_KEY is accepted as a fallback name for the token.
    """
    base_url = os.getenv("TANDOOR_URL")
    token = os.getenv("TANDOOR_API_TOKEN") or os.getenv("TANDOOR_API_KEY")
    return base_url, token


# Singleton client instance, configuration is fixed for the process lifetime
_client_instance: TandoorClient | None = None


def get_client() -> TandoorClient:
    """Get or create the singleton Tandoor client.

    Returns:
        TandoorClient configured from TANDOOR_URL and TANDOOR_API_TOKEN

    Raises:
        ValueError: if either setting is missing
    """
    global _client_instance

    if _client_instance is None:
        base_url, token = read_settings()

        if not base_url:
            raise ValueError("TANDOOR_URL environment variable is required.")
        if not token:
            raise ValueError(
                "TANDOOR_API_TOKEN environment variable is required "
                "(TANDOOR_API_KEY is accepted as a fallback)."
            )

        _client_instance = TandoorClient(base_url=base_url, token=token)
        logger.info(f"Created Tandoor client for {base_url}")

    return _client_instance
