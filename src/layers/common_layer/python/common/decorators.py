from typing import Any, Callable, Dict, List, Optional, TypeVar, Union, TypedDict
from urllib.parse import unquote_plus
from pydantic import BaseModel, Field
from common.errors import AppError, malformed_input, validation_error
from common.log import setup_logger
from common.responses import error_response
from loguru import logger
import functools
import base64
import json

R = TypeVar("R")
JsonDict = Dict[str, Any]


def _reject_constant(name: str):
    raise ValueError(f"Unexpected token {name} in JSON")


class APIGatewayResponse(TypedDict, total=False):
    statusCode: int
    body: str
    headers: Dict[str, str]


Response = Union[APIGatewayResponse, Dict[str, Any]]


class ApiRequest(BaseModel):
    """The parts of an API Gateway proxy event the handlers care about."""

    path_parameters: Dict[str, str] = Field(default_factory=dict)
    body: Optional[str] = None
    is_base64_encoded: bool = False

    @classmethod
    def from_event(cls, event: JsonDict) -> "ApiRequest":
        return cls(
            path_parameters=event.get("pathParameters") or {},
            body=event.get("body"),
            is_base64_encoded=bool(event.get("isBase64Encoded")),
        )

    def path_param(self, name: str) -> tuple[Optional[str], Optional[AppError]]:
        value = self.path_parameters.get(name)
        if not value:
            return None, validation_error([f"{name} is a required path parameter"])
        return value, None

    def json_body(self) -> tuple[Any, Optional[AppError]]:
        """Parses the JSON body; the parser's message is echoed on failure."""
        raw_body = self.body or ""
        try:
            if self.is_base64_encoded:
                raw_body = base64.b64decode(raw_body, validate=True).decode("utf-8")
            return json.loads(raw_body, parse_constant=_reject_constant), None
        except ValueError as e:
            # JSONDecodeError, UnicodeDecodeError and binascii.Error included
            return None, malformed_input(str(e))


class UploadNotification(BaseModel):
    """One object-created record of an S3 event notification."""

    bucket: str
    key: str
    size: Optional[int] = None
    event_name: Optional[str] = None

    @classmethod
    def from_record(cls, record: JsonDict) -> "UploadNotification":
        s3 = record.get("s3") or {}
        obj = s3.get("object") or {}
        return cls(
            bucket=(s3.get("bucket") or {}).get("name", ""),
            key=unquote_plus(obj.get("key", "")),
            size=obj.get("size"),
            event_name=record.get("eventName"),
        )


def _request_id(context: Any) -> Optional[str]:
    return getattr(context, "aws_request_id", None)


def lambda_wrapper(
    func: Callable[[ApiRequest, Any], Union[Response, AppError]],
) -> Callable[..., Response]:
    """
    Decorator for API Gateway handlers.

    The wrapped function receives an ApiRequest and returns either a response
    dict or an AppError, which is mapped to its HTTP response here. Any other
    failure is logged and re-raised to the Lambda runtime.
    """
    setup_logger()

    @functools.wraps(func)
    def wrapper(event: Optional[JsonDict], context: Any) -> Response:
        event = event or {}

        with logger.contextualize(request_id=_request_id(context)):
            try:
                result = func(ApiRequest.from_event(event), context)
            except Exception:
                logger.exception("Unhandled exception in {}", func.__name__)
                raise

            if isinstance(result, AppError):
                logger.warning(
                    "{} rejected request: {} {}",
                    func.__name__,
                    result.kind.value,
                    result.errors or result.detail,
                )
                return error_response(result)
            return result

    return wrapper


def s3_event_wrapper(
    func: Callable[[UploadNotification, Any], R],
) -> Callable[..., Any]:
    """
    Decorator for S3 notification handlers: calls the wrapped function once per
    record, in event order.
    """
    setup_logger()

    @functools.wraps(func)
    def wrapper(event: Optional[JsonDict], context: Any) -> Any:
        event = event or {}
        records: List[JsonDict] = event.get("Records") or []

        with logger.contextualize(request_id=_request_id(context)):
            if not records:
                logger.warning("S3 event without records, nothing to do")
                return []

            results = []
            for record in records:
                notification = UploadNotification.from_record(record)
                try:
                    results.append(func(notification, context))
                except Exception:
                    logger.exception(
                        "Error processing s3://{}/{}",
                        notification.bucket,
                        notification.key,
                    )
                    raise
            return results[0] if len(results) == 1 else results

    return wrapper
