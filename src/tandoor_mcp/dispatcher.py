"""Routes tool calls to their handlers and normalizes failures."""

import logging
from collections.abc import Mapping
from typing import Any

from tandoor_mcp.errors import TandoorAPIError, ToolExecutionError, ToolInputError
from tandoor_mcp.models import ErrorResponse
from tandoor_mcp.registry import get_tool

logger = logging.getLogger(__name__)


async def dispatch(name: str, arguments: Any) -> str | dict[str, Any]:
    """Run a tool by name.

    Args:
        name: Tool name
        arguments: Argument object. None is accepted only for tools without
            required fields. Keys set to None are treated as absent.

    Returns:
        The handler's text result, or an ErrorResponse dict with code
        INVALID_ARGUMENT, NOT_FOUND or INTERNAL_ERROR
    """
    logger.info(f"Received tool call: {name}")

    tool = get_tool(name)
    if tool is None:
        logger.error(f"Unknown tool requested: {name}")
        return ErrorResponse.not_found(f"Unknown tool: {name}").model_dump(exclude_none=True)

    if arguments is None and not tool.required:
        arguments = {}
    if not isinstance(arguments, Mapping):
        return ErrorResponse.invalid_argument("Invalid arguments object.").model_dump(
            exclude_none=True
        )

    arguments = {k: v for k, v in arguments.items() if v is not None}

    try:
        return await tool.handler(arguments)
    except ToolInputError as e:
        logger.error(f"Tool call failed: {name} - invalid arguments: {e}")
        error = ErrorResponse.invalid_argument(e.message)
    except TandoorAPIError as e:
        error = ErrorResponse.api_error(e)
        logger.error(f"[API Error] {name}: {error.message}")
    except ToolExecutionError as e:
        logger.error(f"Tool call failed: {name} - {e}")
        error = ErrorResponse.internal_error(e.message)
    except Exception as e:
        logger.exception(f"Tool call failed: {name}")
        error = ErrorResponse.internal_error(f"Tool execution failed: {e}")

    return error.model_dump(exclude_none=True)
