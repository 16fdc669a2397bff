from typing import Any, Dict, Optional
import json

from common.errors import AppError, ErrorKind

_DEFAULT_HEADERS = {
    "content-type": "application/json",
}


def api_response(
    status_code: int,
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
) -> Dict[str, Any]:
    """
    Centralized API Gateway response formatter.

    Args:
        status_code: HTTP status code
        body: JSON-encodable payload (dict or list)
        headers: Custom headers to include

    Returns:
        Formatted Lambda response for API Gateway
    """
    final_headers = (
        _DEFAULT_HEADERS if headers is None else {**_DEFAULT_HEADERS, **headers}
    )

    return {
        "statusCode": status_code,
        "headers": dict(final_headers),
        "body": json.dumps(body, allow_nan=False) if body is not None else "",
    }


def success(data: Any, status_code: int = 200) -> Dict[str, Any]:
    """Success response (2xx)."""
    return api_response(status_code, body=data)


def created(data: Any) -> Dict[str, Any]:
    """Created response (201)."""
    return api_response(201, body=data)


def no_content() -> Dict[str, Any]:
    """No content response (204), sent without headers."""
    return {"statusCode": 204, "body": ""}


def error_response(error: AppError) -> Dict[str, Any]:
    """Maps a tagged AppError to its HTTP response."""
    if error.kind is ErrorKind.VALIDATION:
        return api_response(error.status_code, body={"errors": error.errors})
    return api_response(error.status_code, body={"error": error.detail})
