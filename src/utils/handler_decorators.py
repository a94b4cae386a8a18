"""
Request logging and exception-to-response mapping for the Lambda
handlers, so a route function can return plain data or raise.
"""

import logging
from datetime import datetime, timezone
from functools import wraps
from typing import Dict, Any, Callable

from pydantic import ValidationError

from utils.db.base import NotFound
from utils.lambda_utils import create_response

logger = logging.getLogger(__name__)


def standard_error_handling(func: Callable) -> Callable:
    """
    Turn a route function's result or exception into a response:
    - ValidationError, ValueError, KeyError -> 400 {"error": <message>}
    - NotFound -> 404 {"message": <message>}
    - Exception -> 500 {"message": "Internal server error"}

    If the handler returns a dict with a statusCode it is passed through,
    anything else is wrapped in a 200 response.
    """
    @wraps(func)
    def wrapper(*args, **kwargs) -> Dict[str, Any]:
        try:
            result = func(*args, **kwargs)

            if isinstance(result, dict) and "statusCode" in result:
                return result

            return create_response(200, result)

        except (ValidationError, ValueError, KeyError) as e:
            message = e.args[0] if isinstance(e, KeyError) and e.args else str(e)
            logger.error(f"Validation error in {func.__name__}: {message}")
            return create_response(400, {"error": message})

        except NotFound as e:
            logger.warning(f"{func.__name__}: {e}")
            return create_response(404, {"message": str(e)})

        except Exception as e:
            logger.exception(f"{func.__name__} failed: {e}")
            return create_response(500, {"message": "Internal server error"})

    return wrapper


def log_request_response(func: Callable) -> Callable:
    """
    Decorator that logs request and response details.

    Logs:
    - "<METHOD> <path> - <source ip>" when the request arrives
    - Response status code and duration
    - Error details if the handler raises
    """
    @wraps(func)
    def wrapper(event: Dict[str, Any], *args, **kwargs) -> Dict[str, Any]:
        http_context = event.get("requestContext", {}).get("http", {})
        method = http_context.get("method", "unknown")
        path = http_context.get("path") or event.get("rawPath", "unknown")
        source_ip = http_context.get("sourceIp", "unknown")
        request_id = event.get("requestContext", {}).get("requestId", "unknown")

        start_time = datetime.now(timezone.utc)
        logger.info(f"{method} {path} - {source_ip}")

        try:
            result = func(event, *args, **kwargs)

            duration_ms = (datetime.now(timezone.utc) - start_time).total_seconds() * 1000
            status_code = result.get("statusCode", "unknown") if isinstance(result, dict) else "unknown"
            logger.info(f"[{request_id}] {method} {path} - Response {status_code} in {duration_ms:.1f}ms")

            return result

        except Exception as e:
            duration_ms = (datetime.now(timezone.utc) - start_time).total_seconds() * 1000
            logger.error(f"[{request_id}] {method} {path} - Error after {duration_ms:.1f}ms: {str(e)}")
            raise

    return wrapper
