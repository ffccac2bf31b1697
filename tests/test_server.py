"""Tests for server startup and tool wrappers."""

import inspect
from unittest.mock import patch

import pytest

from tandoor_mcp import server
from tandoor_mcp.registry import TOOLS


def wrapper_signature(tool_name: str) -> inspect.Signature:
    wrapper = getattr(server, f"tool_{tool_name}")
    # FastMCP may return a tool object holding the function
    return inspect.signature(getattr(wrapper, "fn", wrapper))


class TestToolWrappers:
    """Tests that published wrappers match the registry."""

    @pytest.mark.parametrize("tool", TOOLS, ids=lambda tool: tool.name)
    def test_wrapper_fields_match_registry(self, tool):
        params = wrapper_signature(tool.name).parameters

        assert set(params) == set(tool.input_schema["properties"])

    @pytest.mark.parametrize("tool", TOOLS, ids=lambda tool: tool.name)
    def test_wrapper_required_fields_match_registry(self, tool):
        params = wrapper_signature(tool.name).parameters
        required = {
            name for name, param in params.items() if param.default is inspect.Parameter.empty
        }

        assert required == set(tool.required)


@pytest.fixture
def env(monkeypatch):
    """Start from a configured environment."""
    monkeypatch.setenv("TANDOOR_URL", "http://tandoor.test")
    monkeypatch.setenv("TANDOOR_API_TOKEN", "secret")
    monkeypatch.delenv("TANDOOR_API_KEY", raising=False)
    monkeypatch.delenv("MCP_TRANSPORT", raising=False)
    monkeypatch.delenv("MCP_HOST", raising=False)
    return monkeypatch


class TestMain:
    """Tests for main()."""

    def test_missing_url_exits(self, env, capsys):
        env.delenv("TANDOOR_URL")

        with pytest.raises(SystemExit) as exc_info:
            server.main()

        assert exc_info.value.code == 1
        assert "TANDOOR_URL" in capsys.readouterr().err

    def test_missing_token_exits(self, env, capsys):
        env.delenv("TANDOOR_API_TOKEN")

        with pytest.raises(SystemExit) as exc_info:
            server.main()

        assert exc_info.value.code == 1
        assert "TANDOOR_API_TOKEN" in capsys.readouterr().err

    def test_stdio_is_default(self, env):
        with patch.object(server.mcp, "run") as run:
            server.main()

        run.assert_called_once_with()

    def test_http_transport(self, env):
        env.setenv("MCP_TRANSPORT", "http")
        env.setenv("MCP_PORT", "9000")

        with patch("uvicorn.run") as run, patch.object(server.mcp, "http_app") as http_app:
            server.main()

        http_app.assert_called_once_with(path="/mcp")
        run.assert_called_once_with(http_app.return_value, host="0.0.0.0", port=9000)

    def test_unknown_transport_exits(self, env):
        env.setenv("MCP_TRANSPORT", "sse")

        with pytest.raises(SystemExit):
            server.main()
