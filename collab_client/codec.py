"""
Envelope codec for the JSON payloads of the REST API

Encoding is total for well-formed models. Decoding accepts raw bytes, text or
a binary stream, where streams are always closed exactly once, even if the
payload turns out to be garbage. The lenient decoders return ``None`` (the
zero value) for payloads not matching the expected shape, while ``parse``
raises ``ValueError`` for such payloads to let callers know the reason.
"""

import io
import logging
import functools
import contextlib
from typing import Any, BinaryIO, Dict, List, Mapping, Optional, Sequence, Type, TypeVar, Union

try:
    import ujson as json
except ImportError:
    import json

import pydantic

from . import schemas


logger = logging.getLogger(__name__)

T = TypeVar("T")

Payload = Union[bytes, str, BinaryIO, io.IOBase]

DECODE_JSON_ERROR_ID = "model.utils.decode_json.app_error"


def _read(data: Optional[Payload]) -> Union[bytes, str]:
    if data is None:
        return b""
    if isinstance(data, (bytes, str)):
        return data
    with contextlib.closing(data):
        return data.read()


@functools.lru_cache(maxsize=None)
def _get_adapter(target: Any) -> pydantic.TypeAdapter:
    return pydantic.TypeAdapter(target)


def parse(target: Type[T], data: Optional[Payload]) -> T:
    """
    Parse the JSON payload into an instance of the target type

    :param target: pydantic model class or generic alias like ``List[User]``
    :param data: raw bytes, text or a binary stream (which will be closed)
    :return: validated instance of the target type
    :raises ValueError: when the payload is no JSON or doesn't match the target type
    """

    content = _read(data)
    if not content:
        raise ValueError("Empty payload")
    try:
        return _get_adapter(target).validate_python(json.loads(content))
    except RecursionError as exc:
        raise ValueError(f"Payload is nested too deeply: {exc}") from exc


def _parse_or_none(target: Any, data: Optional[Payload]) -> Any:
    try:
        return parse(target, data)
    except ValueError as exc:
        logger.debug(f"Failed to decode payload as {getattr(target, '__name__', target)}: {exc}")
        return None


def to_json(obj: Union[pydantic.BaseModel, Sequence[pydantic.BaseModel]], exclude_none: bool = False) -> str:
    """
    Serialize a model or a sequence of models to a JSON string
    """

    if isinstance(obj, pydantic.BaseModel):
        return json.dumps(obj.model_dump(mode="json", exclude_none=exclude_none))
    return json.dumps([e.model_dump(mode="json", exclude_none=exclude_none) for e in obj])


def model_from_json(schema: Type[T], data: Optional[Payload]) -> Optional[T]:
    return _parse_or_none(schema, data)


def model_list_from_json(schema: Type[T], data: Optional[Payload]) -> Optional[List[T]]:
    return _parse_or_none(List[schema], data)


def user_from_json(data: Optional[Payload]) -> Optional[schemas.User]:
    return model_from_json(schemas.User, data)


def user_list_from_json(data: Optional[Payload]) -> Optional[List[schemas.User]]:
    return model_list_from_json(schemas.User, data)


def post_list_from_json(data: Optional[Payload]) -> Optional[schemas.PostList]:
    return model_from_json(schemas.PostList, data)


def map_to_json(obj: Mapping[str, str]) -> str:
    return json.dumps(dict(obj))


def map_from_json(data: Optional[Payload]) -> Dict[str, str]:
    """
    Decode a JSON object of strings, returning an empty dict for unusable payloads
    """

    result = _parse_or_none(Dict[str, str], data)
    return result if result is not None else {}


def array_to_json(obj: Sequence[str]) -> str:
    return json.dumps(list(obj))


def array_from_json(data: Optional[Payload]) -> List[str]:
    """
    Decode a JSON array of strings, returning an empty list for unusable payloads
    """

    result = _parse_or_none(List[str], data)
    return result if result is not None else []


def app_error_from_json(data: Optional[Payload], status_code: Optional[int] = None) -> schemas.AppError:
    """
    Decode the error envelope of a failed request

    A payload that isn't a valid error envelope results in a synthetic error with
    the ID ``model.utils.decode_json.app_error`` that contains the raw body text.

    :param data: raw bytes, text or a binary stream (which will be closed)
    :param status_code: optional status code of the response, used when
        the decoded envelope doesn't contain a status code on its own
    :return: decoded or synthetic error model
    """

    content = _read(data)
    try:
        error = parse(schemas.AppError, content)
    except ValueError:
        if isinstance(content, bytes):
            content = content.decode("UTF-8", errors="replace")
        return schemas.AppError(
            id=DECODE_JSON_ERROR_ID,
            message="Could not decode the error response of the server",
            detailed_error=f"body: {content}",
            status_code=status_code
        )
    if error.status_code is None and status_code is not None:
        error.status_code = status_code
    return error


def check_status_ok(data: Optional[Payload]) -> bool:
    """
    Check the standard OK response ``{"status": "OK"}`` of the server
    """

    return map_from_json(data).get("status") == "OK"
