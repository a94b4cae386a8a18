from typing import Dict, Any, Optional
import base64
import json
from decimal import Decimal
from urllib.parse import parse_qs
import uuid


class DecimalEncoder(json.JSONEncoder):
    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj) if obj % 1 else int(obj)
        if isinstance(obj, uuid.UUID):
            return str(obj)
        return super(DecimalEncoder, self).default(obj)


CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type,Authorization",
    "Access-Control-Allow-Methods": "GET,POST,OPTIONS"
}


def create_response(status_code: int, body: Dict[str, Any], headers: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """Create a standardized API response."""
    final_headers = {"Content-Type": "application/json", **CORS_HEADERS}
    if headers:
        final_headers.update(headers)
    return {
        "statusCode": status_code,
        "headers": final_headers,
        "body": json.dumps(body, cls=DecimalEncoder)
    }


def create_html_response(status_code: int, html: str) -> Dict[str, Any]:
    """Create an API response carrying an HTML page."""
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "text/html; charset=utf-8", **CORS_HEADERS},
        "body": html
    }


def handle_error(status_code: int, message: str) -> Dict[str, Any]:
    """Create a standardized error response."""
    return create_response(status_code, {"message": message})


def get_request_body(event: Dict[str, Any]) -> str:
    """Return the raw request body, decoding it if API Gateway base64-encoded it."""
    body = event.get('body') or ''
    if event.get('isBase64Encoded'):
        body = base64.b64decode(body).decode('utf-8')
    return body


# extract parameters from a url-encoded form body
def parse_form_body(event: Dict[str, Any]) -> Dict[str, str]:
    """
    Parse an application/x-www-form-urlencoded body into a flat dict.

    Blank values are kept so that `first=` reads as an empty string rather
    than a missing field. A repeated key yields its values joined with
    commas in the order sent, so `first=a&first=b` reads as "a,b".
    """
    parsed = parse_qs(get_request_body(event), keep_blank_values=True)
    return {key: ",".join(values) for key, values in parsed.items()}
