"""MCP tool registration for the weather server."""

from contextvars import ContextVar
from typing import Annotated, List, NoReturn, Optional

import structlog
from mcp import types
from mcp.server.fastmcp import FastMCP
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, INVALID_PARAMS, ErrorData
from pydantic import Field, ValidationError

from weather_server.client import OpenWeatherClient
from weather_server.config import get_settings
from weather_server.exceptions import ErrorKind, WeatherToolError
from weather_server.orchestrator import WeatherQueryOrchestrator, describe_validation_error
from weather_server.schemas import GetWeatherResponse, TemperatureUnit, WeatherQueryRequest


logger = structlog.get_logger(__name__)

SERVER_NAME = "cardea-weather"
SERVER_INSTRUCTIONS = "A MCP server that can get the weather for a given city"
TOOL_NAME = "get_current_weather"
TOOL_DESCRIPTION = "Get the weather for a given city"

ERROR_CODES = {
    ErrorKind.CONFIGURATION: INVALID_PARAMS,
    ErrorKind.UPSTREAM_UNAVAILABLE: INTERNAL_ERROR,
    ErrorKind.UPSTREAM_PROTOCOL: INTERNAL_ERROR,
    ErrorKind.FORMATTING_INVARIANT: INTERNAL_ERROR,
}

# McpError raised by a tool during the current tools/call request
_tool_failures: ContextVar[Optional[List[McpError]]] = ContextVar("tool_failures", default=None)


def build_orchestrator() -> WeatherQueryOrchestrator:
    settings = get_settings()
    client = OpenWeatherClient(
        geocode_url=settings.geocode_url,
        weather_url=settings.weather_url,
        timeout_seconds=settings.request_timeout_seconds,
    )
    return WeatherQueryOrchestrator(settings.openweathermap_api_key, client)


def to_error_data(exc: WeatherToolError) -> ErrorData:
    return ErrorData(code=ERROR_CODES.get(exc.kind, INTERNAL_ERROR), message=str(exc))


def _raise_tool_error(error: ErrorData, cause: Exception) -> NoReturn:
    """Raise ``McpError`` and record it for the request handler that ran the tool."""

    exc = McpError(error)
    failures = _tool_failures.get()
    if failures is not None:
        failures.append(exc)
    raise exc from cause


async def get_current_weather(
    location: Annotated[
        str,
        Field(min_length=1, description="The city to get the weather for, e.g., 'Beijing', 'New York', 'Tokyo'"),
    ],
    unit: Annotated[
        Optional[TemperatureUnit],
        Field(description="The unit to use for the temperature, e.g., 'celsius', 'fahrenheit'"),
    ] = None,
) -> GetWeatherResponse:
    """Get the weather for a given city."""
    try:
        request = WeatherQueryRequest(location=location, unit=unit)
    except ValidationError as exc:
        _raise_tool_error(ErrorData(code=INVALID_PARAMS, message=describe_validation_error(exc)), exc)
    try:
        return await build_orchestrator().get_current_weather(request)
    except WeatherToolError as exc:
        _raise_tool_error(to_error_data(exc), exc)


def _send_tool_errors_as_jsonrpc(server: FastMCP) -> None:
    """Deliver ``McpError`` raised by a tool as a JSON-RPC error.

    FastMCP turns every tool exception into an ``isError`` result carrying only
    the message. The wrapped handler records the tool's ``McpError`` and
    re-raises it, so the session replies with the error code and message.
    """

    lowlevel = server._mcp_server
    handle_call_tool = lowlevel.request_handlers[types.CallToolRequest]

    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        failures: List[McpError] = []
        token = _tool_failures.set(failures)
        try:
            result = await handle_call_tool(request)
        finally:
            _tool_failures.reset(token)
        if failures:
            logger.info("mcp.tool.error", tool=request.params.name, code=failures[0].error.code)
            raise failures[0]
        return result

    lowlevel.request_handlers[types.CallToolRequest] = call_tool


def create_mcp_server(host: str = "127.0.0.1") -> FastMCP:
    """Build a FastMCP server exposing ``get_current_weather`` over streamable HTTP at ``/mcp``.

    ``host`` is the bind address; the transport uses it to decide which Host
    headers to accept.
    """

    server = FastMCP(SERVER_NAME, instructions=SERVER_INSTRUCTIONS, host=host, streamable_http_path="/mcp")
    server.add_tool(get_current_weather, name=TOOL_NAME, description=TOOL_DESCRIPTION)
    _send_tool_errors_as_jsonrpc(server)
    logger.debug("mcp.tool.registered", tool=TOOL_NAME)
    return server
