"""
JSON Service - decoding request bodies and encoding JSON responses.

Decoding reads the body up to a byte limit, decodes exactly one JSON
document into the requested type and maps low-level failures to the
JSONBodyError family. Encoding always serializes the payload completely
before a response is built.
"""
import collections.abc
import json
from types import UnionType
from typing import Annotated, Any, Mapping, Optional, Sequence, Tuple, Type, TypeVar, Union, get_args, get_origin

from fastapi import status
from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel, PydanticUserError, TypeAdapter, ValidationError
from starlette.requests import Request
from starlette.responses import Response

from ..api.dto import JSONEnvelope
from ..api.exceptions import (
    BodyTooLargeError,
    EmptyBodyError,
    IncorrectJSONTypeError,
    InvalidJSONTargetError,
    JSONEncodeError,
    MalformedJSONError,
    MissingFieldError,
    MultipleJSONValuesError,
    TruncatedJSONError,
    UnknownFieldError,
)
from ..core.logging_config import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

HeaderValues = Union[str, Sequence[str]]

_decoder = json.JSONDecoder()

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset, collections.abc.Sequence, collections.abc.Set)
_MAPPING_ORIGINS = (dict, collections.abc.Mapping)


class BodyLimitExceeded(Exception):
    """The request body is longer than the allowed number of bytes."""
    pass


class EndOfBody(Exception):
    """The request body holds no JSON value at all."""
    pass


class TrailingData(Exception):
    """Something other than whitespace follows the first JSON value."""
    pass


class UnknownKey(Exception):
    """A JSON object carries a key the target model does not declare."""

    def __init__(self, field: str):
        super().__init__(f"unknown field {field!r}")
        self.field = field


async def read_body(request: Request, max_bytes: int) -> bytes:
    """Read the whole request body, failing once more than max_bytes arrive."""
    chunks = []
    received = 0
    async for chunk in request.stream():
        received += len(chunk)
        if received > max_bytes:
            raise BodyLimitExceeded(f"request body too large (limit {max_bytes})")
        chunks.append(chunk)
    return b"".join(chunks)


def _field_path(loc: Sequence[Any]) -> str:
    return ".".join(str(part) for part in loc)


def _is_model(tp: Any) -> bool:
    try:
        return isinstance(tp, type) and issubclass(tp, BaseModel)
    except TypeError:
        return False


def _find_unknown_field(annotation: Any, value: Any, path: Tuple[str, ...] = ()) -> Optional[str]:
    """
    Path of the first key in value that the models inside annotation do not declare.

    Only shapes with one known model per position are followed: a model,
    Optional[Model], sequences and sets of models, dicts with model values.
    Unions of several models are left to pydantic.
    """
    if _is_model(annotation):
        return _find_unknown_model_field(annotation, value, path)

    origin = get_origin(annotation)
    args = get_args(annotation)

    if origin is Annotated:
        return _find_unknown_field(args[0], value, path)

    if origin in (Union, UnionType):
        members = [arg for arg in args if arg is not type(None)]
        if len(members) == 1:
            return _find_unknown_field(members[0], value, path)
        return None

    if origin in _SEQUENCE_ORIGINS and isinstance(value, list) and args:
        if origin is tuple and not (len(args) == 2 and args[1] is Ellipsis):
            positions = list(zip(args, value))
        else:
            positions = [(args[0], item) for item in value]
        for index, (item_type, item) in enumerate(positions):
            unknown = _find_unknown_field(item_type, item, path + (str(index),))
            if unknown:
                return unknown
        return None

    if origin in _MAPPING_ORIGINS and isinstance(value, dict) and len(args) == 2:
        for key, item in value.items():
            unknown = _find_unknown_field(args[1], item, path + (key,))
            if unknown:
                return unknown

    return None


def _find_unknown_model_field(model: Type[BaseModel], value: Any, path: Tuple[str, ...]) -> Optional[str]:
    if not isinstance(value, dict) or model.model_config.get("extra") == "allow":
        return None

    known = {}
    for name, info in model.model_fields.items():
        known[name] = info
        if isinstance(info.alias, str):
            known[info.alias] = info

    for key, item in value.items():
        info = known.get(key)
        if info is None:
            return _field_path(path + (key,))
        unknown = _find_unknown_field(info.annotation, item, path + (key,))
        if unknown:
            return unknown
    return None


def decode_json(body: bytes, target: Type[T], allow_unknown_fields: bool = False) -> T:
    """
    Decode body, which must hold exactly one JSON document, into target.

    Raises the low-level error on failure; see classify_decode_error.
    """
    adapter = TypeAdapter(target)

    text = body.decode("utf-8")
    start = len(text) - len(text.lstrip())
    if start == len(text):
        raise EndOfBody("body is empty")

    value, end = _decoder.raw_decode(text, start)

    if text[end:].strip():
        raise TrailingData("body must only contain a single JSON payload")

    if not allow_unknown_fields:
        unknown = _find_unknown_field(target, value)
        if unknown:
            raise UnknownKey(unknown)

    return adapter.validate_json(text[start:end], strict=True)


def _classify_validation_error(err: ValidationError) -> Optional[Exception]:
    first = err.errors()[0]
    error_type = first["type"]
    field = _field_path(first["loc"])

    if error_type == "extra_forbidden":
        return UnknownFieldError(f'body contains unknown field "{field}"')
    if error_type == "missing":
        return MissingFieldError(f'body is missing required field "{field}"')
    if error_type.endswith("_type") or error_type.endswith("_parsing"):
        if field:
            return IncorrectJSONTypeError(f'body contains incorrect JSON type for field "{field}"')
        return IncorrectJSONTypeError("body contains incorrect JSON type")
    return None


def classify_decode_error(err: Exception, max_bytes: int) -> Exception:
    """
    Map a low-level decoding failure to a user-facing error.

    Errors that match no known kind are returned unchanged.
    """
    if isinstance(err, json.JSONDecodeError):
        if err.pos >= len(err.doc) or err.msg.startswith("Unterminated string"):
            return TruncatedJSONError("body contains badly formed JSON (unexpected EOF marker)")
        return MalformedJSONError(f"body contains badly formed JSON at character {err.pos + 1}")
    if isinstance(err, UnicodeDecodeError):
        return MalformedJSONError(f"body contains badly formed JSON at character {err.start + 1}")
    if isinstance(err, ValidationError):
        return _classify_validation_error(err) or err
    if isinstance(err, PydanticUserError):
        return InvalidJSONTargetError(f"error unmarshalling JSON: {err}")
    if isinstance(err, EndOfBody):
        return EmptyBodyError("body must not be empty")
    if isinstance(err, UnknownKey):
        return UnknownFieldError(f'body contains unknown field "{err.field}"')
    if isinstance(err, BodyLimitExceeded):
        return BodyTooLargeError(f"body must not be larger than {max_bytes} bytes")
    if isinstance(err, TrailingData):
        return MultipleJSONValuesError(str(err))
    return err


async def read_json(
    request: Request,
    target: Type[T],
    max_bytes: int,
    allow_unknown_fields: bool = False
) -> T:
    """
    Decode the JSON body of request into target.

    Raises:
        JSONBodyError: For every recognized decoding failure
    """
    try:
        body = await read_body(request, max_bytes)
        return decode_json(body, target, allow_unknown_fields)
    except Exception as e:
        classified = classify_decode_error(e, max_bytes)
        if classified is e:
            raise
        logger.debug(f"Rejected JSON body for {request.url.path}: {classified}")
        raise classified from e


def encode_json(payload: Any) -> bytes:
    """Serialize payload to compact JSON bytes."""
    if isinstance(payload, JSONEnvelope):
        payload = payload.to_payload()
    try:
        return json.dumps(
            jsonable_encoder(payload),
            separators=(",", ":"),
            ensure_ascii=False,
            allow_nan=False,
        ).encode("utf-8")
    except (TypeError, ValueError, RecursionError) as e:
        raise JSONEncodeError(f"could not encode JSON: {e}") from e


def write_json(
    status_code: int,
    payload: Any,
    headers: Optional[Mapping[str, HeaderValues]] = None
) -> Response:
    """
    Build a JSON response with the given status and extra headers.

    Raises:
        JSONEncodeError: If payload cannot be serialized; no response is built
    """
    content = encode_json(payload)

    response = Response(content=content, status_code=status_code, media_type="application/json")
    for key, value in (headers or {}).items():
        values = [value] if isinstance(value, str) else list(value)
        del response.headers[key]
        for item in values:
            response.headers.append(key, item)
    response.headers["content-type"] = "application/json"

    return response


def error_json(error: Union[Exception, str], status_code: int = status.HTTP_400_BAD_REQUEST) -> Response:
    """Send error as a JSON envelope with error set."""
    envelope = JSONEnvelope(error=True, message=str(error))
    return write_json(status_code, envelope)
