import logging
import os
from pathlib import Path
from typing import Dict, Any

from utils.lambda_utils import create_response, create_html_response, handle_error, parse_form_body
from utils.handler_decorators import standard_error_handling, log_request_response

logger = logging.getLogger(__name__)
logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())

VIEWS_DIR = Path(__file__).parent / "views"
INDEX_PAGE = VIEWS_DIR / "index.html"

MISSING_NAME_MESSAGE = "Please provide both a first name and a last name."


def resolve_route(event: Dict[str, Any]) -> str:
    """
    Return the "<METHOD> <path>" route for the event.

    Uses routeKey when API Gateway matched an explicit route, otherwise
    (catch-all "$default" integrations) builds it from the HTTP context.
    """
    route = event.get("routeKey")
    if route and route != "$default":
        return route
    http_context = event.get("requestContext", {}).get("http", {})
    method = http_context.get("method", "")
    path = http_context.get("path") or event.get("rawPath", "")
    return f"{method} {path}"


@standard_error_handling
def index_handler(event: Dict[str, Any]) -> Dict[str, Any]:
    """Serve the static form page."""
    return create_html_response(200, INDEX_PAGE.read_text(encoding="utf-8"))


@standard_error_handling
def name_handler(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Echo the submitted first and last name.

    Both fields must be present and non-empty; nothing else is checked.
    """
    form = parse_form_body(event)
    first_name = form.get("first")
    last_name = form.get("last")

    if not first_name or not last_name:
        raise ValueError(MISSING_NAME_MESSAGE)

    return {"name": f"{first_name} {last_name}"}


@log_request_response
def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Handler for the form page and the name echo endpoint.

    Args:
        event (Dict[str, Any]): API Gateway Lambda Proxy Input Format
        context (Any): Lambda Context runtime methods and attributes

    Returns:
        Dict[str, Any]: API Gateway Lambda Proxy Output Format
    """
    if event.get("requestContext", {}).get("http", {}).get("method") == "OPTIONS":
        return create_response(200, {"message": "OK"})

    route = resolve_route(event)

    if route == "GET /":
        return index_handler(event)
    elif route == "POST /name":
        return name_handler(event)

    logger.warning(f"No handler for route {route}")
    return handle_error(404, "Route not found")
