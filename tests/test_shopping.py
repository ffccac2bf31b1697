"""Tests for shopping list MCP tools."""

from unittest.mock import AsyncMock, patch

import pytest

from tandoor_mcp.errors import TandoorAPIError, ToolInputError
from tandoor_mcp.models import NamedRef, ShoppingListItem
from tandoor_mcp.tools.shopping import (
    add_shopping_list_item,
    get_shopping_list,
    remove_shopping_list_item,
    update_shopping_list_item,
)


@pytest.fixture
def mock_client():
    """Create a mock Tandoor client."""
    with patch("tandoor_mcp.tools.shopping.get_client") as mock:
        client = AsyncMock()
        mock.return_value = client
        yield client


class TestGetShoppingList:
    """Tests for get_shopping_list tool."""

    @pytest.mark.asyncio
    async def test_defaults_to_recent(self, mock_client):
        """Test that the recent filter is used when none is given."""
        mock_client.get_shopping_list.return_value = []

        result = await get_shopping_list({})

        mock_client.get_shopping_list.assert_awaited_once_with("recent")
        assert result == "No shopping list items found (filter: recent)."

    @pytest.mark.asyncio
    async def test_formats_items(self, mock_client):
        """Test the text layout of shopping list items."""
        mock_client.get_shopping_list.return_value = [
            ShoppingListItem(
                id=1,
                food=NamedRef(id=3, name="Tomato"),
                unit=NamedRef(id=4, name="piece"),
                amount=2.0,
                checked=True,
                note="ripe",
            ),
            ShoppingListItem(id=2, food=NamedRef(id=5, name="Salt"), amount="1"),
        ]

        result = await get_shopping_list({"checked": "both"})

        assert result == (
            "Shopping List Items (both):\n"
            "ID: 1 - 2 piece Tomato [Checked] (Note: ripe)\n"
            "ID: 2 - 1 ? Salt"
        )
        mock_client.get_shopping_list.assert_awaited_once_with("both")

    @pytest.mark.asyncio
    async def test_whole_number_amount(self, mock_client):
        """Test that integer amounts from Tandoor print without a decimal."""
        mock_client.get_shopping_list.return_value = [
            ShoppingListItem.model_validate(
                {
                    "id": 5,
                    "food": {"id": 1, "name": "flour"},
                    "unit": {"id": 2, "name": "cup"},
                    "amount": 2,
                }
            )
        ]

        result = await get_shopping_list({})

        assert result == "Shopping List Items (recent):\nID: 5 - 2 cup flour"

    @pytest.mark.asyncio
    async def test_rejects_unknown_filter(self, mock_client):
        """Test checked filter validation."""
        with pytest.raises(ToolInputError, match="checked must be one of"):
            await get_shopping_list({"checked": "yes"})

        mock_client.get_shopping_list.assert_not_awaited()


class TestAddShoppingListItem:
    """Tests for add_shopping_list_item tool."""

    @pytest.mark.asyncio
    async def test_add_by_ids(self, mock_client):
        """Test that id references are completed with their names."""
        mock_client.get_entity.side_effect = [
            {"id": 3, "name": "Tomato"},
            {"id": 4, "name": "piece"},
        ]
        mock_client.add_shopping_list_item.return_value = ShoppingListItem(
            id=77,
            food=NamedRef(id=3, name="Tomato"),
            unit=NamedRef(id=4, name="piece"),
            amount="2",
        )

        result = await add_shopping_list_item(
            {"food_name_or_id": 3, "amount": 2, "unit_name_or_id": 4}
        )

        assert result == "Successfully added item to shopping list (ID: 77): 2 piece Tomato."
        item = mock_client.add_shopping_list_item.await_args.args[0]
        assert item.food == NamedRef(id=3, name="Tomato")
        assert item.unit == NamedRef(id=4, name="piece")
        assert item.amount == "2"
        assert item.note is None
        mock_client.search_entities.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_by_id_with_failed_name_lookup(self, mock_client):
        """Test that an id whose name cannot be fetched is sent as Unknown."""
        mock_client.get_entity.side_effect = TandoorAPIError("HTTP 404", status_code=404)
        mock_client.add_shopping_list_item.return_value = ShoppingListItem(id=78, amount="1")

        await add_shopping_list_item({"food_name_or_id": 3, "amount": "1", "unit_name_or_id": 4})

        item = mock_client.add_shopping_list_item.await_args.args[0]
        assert item.food == NamedRef(id=3, name="Unknown")
        assert item.unit == NamedRef(id=4, name="Unknown")

    @pytest.mark.asyncio
    async def test_add_by_names(self, mock_client):
        """Test that names are searched on the food and unit endpoints."""
        mock_client.search_entities.side_effect = [
            [{"id": 3, "name": "Tomato"}, {"id": 9, "name": "Tomato paste"}],
            [{"id": 4, "name": "piece"}],
        ]
        mock_client.add_shopping_list_item.return_value = ShoppingListItem(
            id=79,
            food=NamedRef(id=3, name="Tomato"),
            unit=NamedRef(id=4, name="piece"),
            amount="3",
            note="for salad",
        )

        result = await add_shopping_list_item(
            {
                "food_name_or_id": "Tomato",
                "amount": "3",
                "unit_name_or_id": "piece",
                "note": "for salad",
            }
        )

        assert result == "Successfully added item to shopping list (ID: 79): 3 piece Tomato."
        calls = mock_client.search_entities.await_args_list
        assert calls[0].args == ("/api/food/", {"query": "Tomato"})
        assert calls[1].args == ("/api/unit/", {"query": "piece"})
        item = mock_client.add_shopping_list_item.await_args.args[0]
        assert item.food.id == 3
        assert item.note == "for salad"

    @pytest.mark.asyncio
    async def test_add_with_empty_response(self, mock_client):
        """Test the confirmation when Tandoor does not echo the new entry."""
        mock_client.search_entities.side_effect = [
            [{"id": 3, "name": "Tomato"}],
            [{"id": 4, "name": "piece"}],
        ]
        mock_client.add_shopping_list_item.return_value = None

        result = await add_shopping_list_item(
            {"food_name_or_id": "Tomato", "amount": "2", "unit_name_or_id": "piece"}
        )

        assert result == "Successfully added item to shopping list (ID: unknown): 2 piece Tomato."

    @pytest.mark.asyncio
    async def test_add_unknown_food(self, mock_client):
        """Test that an unmatched food name is rejected before anything is created."""
        mock_client.search_entities.return_value = []

        with pytest.raises(ToolInputError, match='Food named "Dragonfruit" not found.'):
            await add_shopping_list_item(
                {"food_name_or_id": "Dragonfruit", "amount": "1", "unit_name_or_id": "piece"}
            )

        mock_client.add_shopping_list_item.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_requires_amount(self, mock_client):
        """Test validation of required fields."""
        with pytest.raises(ToolInputError, match="amount"):
            await add_shopping_list_item({"food_name_or_id": 3, "unit_name_or_id": 4})


class TestUpdateShoppingListItem:
    """Tests for update_shopping_list_item tool."""

    @pytest.mark.asyncio
    async def test_sends_only_supplied_fields(self, mock_client):
        """Test that unit_id is sent as unit and absent fields are omitted."""
        mock_client.update_shopping_list_item.return_value = {"id": 5}

        result = await update_shopping_list_item({"item_id": 5, "unit_id": 4, "checked": True})

        assert result == "Successfully updated shopping list item ID 5."
        mock_client.update_shopping_list_item.assert_awaited_once_with(
            5, {"unit": 4, "checked": True}
        )

    @pytest.mark.asyncio
    async def test_numeric_amount_sent_as_text(self, mock_client):
        """Test amount conversion."""
        await update_shopping_list_item({"item_id": 5, "amount": 1.5})

        mock_client.update_shopping_list_item.assert_awaited_once_with(5, {"amount": "1.5"})

    @pytest.mark.asyncio
    async def test_no_fields(self, mock_client):
        """Test that an update with nothing to change makes no call."""
        with pytest.raises(ToolInputError, match="No fields provided to update."):
            await update_shopping_list_item({"item_id": 5})

        mock_client.update_shopping_list_item.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_requires_item_id(self, mock_client):
        """Test item_id validation."""
        with pytest.raises(ToolInputError, match="item_id"):
            await update_shopping_list_item({"checked": False})


class TestRemoveShoppingListItem:
    """Tests for remove_shopping_list_item tool."""

    @pytest.mark.asyncio
    async def test_remove(self, mock_client):
        """Test successful removal."""
        mock_client.delete_shopping_list_item.return_value = None

        result = await remove_shopping_list_item({"item_id": 12})

        assert result == "Successfully removed shopping list item ID 12."
        mock_client.delete_shopping_list_item.assert_awaited_once_with(12)

    @pytest.mark.asyncio
    async def test_remove_missing_item(self, mock_client):
        """Test that a 404 is reported as an invalid item id."""
        mock_client.delete_shopping_list_item.side_effect = TandoorAPIError(
            "HTTP 404", status_code=404, body='{"detail": "Not found."}'
        )

        with pytest.raises(ToolInputError) as exc_info:
            await remove_shopping_list_item({"item_id": 12})

        assert exc_info.value.message == "Shopping list item with ID 12 not found."

    @pytest.mark.asyncio
    async def test_remove_server_error_propagates(self, mock_client):
        """Test that other API failures are not reinterpreted."""
        mock_client.delete_shopping_list_item.side_effect = TandoorAPIError(
            "HTTP 500", status_code=500
        )

        with pytest.raises(TandoorAPIError):
            await remove_shopping_list_item({"item_id": 12})
