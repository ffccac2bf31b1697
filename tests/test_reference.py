"""Tests for keyword, food and unit MCP tools."""

from unittest.mock import AsyncMock, patch

import pytest

from tandoor_mcp.errors import ToolInputError
from tandoor_mcp.models import Food, Keyword, Unit
from tandoor_mcp.tools.reference import get_foods, get_keywords, get_units


@pytest.fixture
def mock_client():
    """Create a mock Tandoor client."""
    with patch("tandoor_mcp.tools.reference.get_client") as mock:
        client = AsyncMock()
        mock.return_value = client
        yield client


class TestGetKeywords:
    """Tests for get_keywords tool."""

    @pytest.mark.asyncio
    async def test_formats_keywords(self, mock_client):
        """Test the keyword listing with and without descriptions."""
        mock_client.list_keywords.return_value = [
            Keyword(id=1, name="vegan", description="No animal products"),
            Keyword(id=2, name="quick", description=""),
        ]

        result = await get_keywords({"query": "v", "root": 0})

        assert result == (
            "Found Keywords:\n"
            "ID: 1 - Name: vegan - No animal products\n"
            "ID: 2 - Name: quick"
        )
        mock_client.list_keywords.assert_awaited_once_with(query="v", root=0, tree=None)

    @pytest.mark.asyncio
    async def test_empty(self, mock_client):
        """Test the no-results sentence."""
        mock_client.list_keywords.return_value = []

        assert await get_keywords({}) == "No keywords found."

    @pytest.mark.asyncio
    async def test_rejects_non_integer_tree(self, mock_client):
        """Test tree validation."""
        with pytest.raises(ToolInputError, match="tree"):
            await get_keywords({"tree": "3"})

        mock_client.list_keywords.assert_not_awaited()


class TestGetFoods:
    """Tests for get_foods tool."""

    @pytest.mark.asyncio
    async def test_formats_foods(self, mock_client):
        """Test the food listing."""
        mock_client.list_foods.return_value = [
            Food(id=3, name="Tomato", description="Fresh"),
            Food(id=4, name="Basil"),
        ]

        result = await get_foods({"tree": 7})

        assert result == "Found Foods:\nID: 3 - Name: Tomato - Fresh\nID: 4 - Name: Basil"
        mock_client.list_foods.assert_awaited_once_with(query=None, root=None, tree=7)

    @pytest.mark.asyncio
    async def test_empty(self, mock_client):
        """Test the no-results sentence."""
        mock_client.list_foods.return_value = []

        assert await get_foods({"query": "unobtainium"}) == "No foods found."


class TestGetUnits:
    """Tests for get_units tool."""

    @pytest.mark.asyncio
    async def test_formats_units(self, mock_client):
        """Test the unit listing."""
        mock_client.list_units.return_value = [Unit(id=5, name="cup"), Unit(id=6, name="g")]

        result = await get_units({"query": "c"})

        assert result == "Found Units:\nID: 5 - Name: cup\nID: 6 - Name: g"
        mock_client.list_units.assert_awaited_once_with(query="c")

    @pytest.mark.asyncio
    async def test_empty(self, mock_client):
        """Test the no-results sentence."""
        mock_client.list_units.return_value = []

        assert await get_units({}) == "No units found."
