"""
GELF wire codec.

Encoding serializes the fixed envelope, then splices the additional fields
into the same JSON object by trimming the outer braces of each serialized
part. Decoding parses a generic JSON object and routes every key either into
a fixed field (with a type check) or into `Message.extra`.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Any, Callable, Dict, Tuple, Union

from pydantic_core import PydanticSerializationError

from .message import Message

_logger = logging.getLogger("gelfmsg.codec")

# Wire keys dropped from the output when they hold their zero value.
_OMIT_EMPTY = ("host", "full_message", "level", "facility")


class GelfError(Exception):
  """Base class for all codec failures."""


class SerializationError(GelfError):
  """The message, or one of its additional fields, is not JSON-representable."""


class DecodeError(GelfError, ValueError):
  """A wire payload could not be turned into a Message."""


class MalformedMessageError(DecodeError):
  """The payload is not valid JSON or not a JSON object."""


class FieldTypeError(DecodeError):
  def __init__(self, field: str, expected: str, actual: str) -> None:
    super().__init__(
      f"invalid type for field {field}: expected {expected}, got {actual}"
    )
    self.field = field
    self.expected = expected
    self.actual = actual


class UnknownFieldError(DecodeError):
  def __init__(self, field: str) -> None:
    super().__init__(
      f"unknown field {field}: additional fields must be prefixed with '_'"
    )
    self.field = field


def _dumps(value: Any) -> bytes:
  return json.dumps(
    value,
    ensure_ascii=False,
    allow_nan=False,
    separators=(",", ":"),
  ).encode("utf-8")


def _interior(obj: bytes) -> bytes:
  """
  Return the key/value pairs of a serialized JSON object, without its braces.
  """
  obj = obj.strip()
  return obj[1:-1].strip()


def encode_into(message: Message, buf: bytearray) -> bytes:
  """
  Append the GELF JSON form of `message` to `buf`.

  Existing content of `buf` is kept. On success the whole buffer is returned
  as bytes. On failure a `SerializationError` is raised and anything already
  appended stays in `buf`; callers should discard the buffer.
  """
  try:
    fixed = message.model_dump(mode="json", by_alias=True)
    for key in _OMIT_EMPTY:
      if not fixed.get(key):
        fixed.pop(key, None)
    b = _dumps(fixed)
  except (TypeError, ValueError, PydanticSerializationError) as exc:
    raise SerializationError(f"cannot serialize message: {exc}") from exc

  # write up until the final }
  buf += b[:-1]

  if message.extra:
    try:
      eb = _dumps(message.extra)
    except (TypeError, ValueError) as exc:
      raise SerializationError(f"cannot serialize additional fields: {exc}") from exc
    buf += b","
    buf += _interior(eb)

  if message.raw_extra:
    raw = _interior(bytes(message.raw_extra))
    if raw:
      buf += b","
      buf += raw

  buf += b"}"
  return bytes(buf)


def encode(message: Message) -> bytes:
  """
  Serialize `message` into a fresh byte string.
  """
  return encode_into(message, bytearray())


def _type_name(value: Any) -> str:
  if value is None:
    return "null"
  if isinstance(value, bool):
    return "boolean"
  if isinstance(value, (int, float)):
    return "number"
  if isinstance(value, str):
    return "string"
  if isinstance(value, list):
    return "array"
  if isinstance(value, dict):
    return "object"
  return type(value).__name__


def _reject_constant(token: str) -> Any:
  # json.loads accepts NaN and Infinity, which are not valid JSON.
  raise MalformedMessageError(f"invalid GELF payload: non-standard JSON constant {token}")


def _as_string(value: Any) -> Tuple[bool, Any]:
  return isinstance(value, str), value


def _as_int(value: Any) -> Tuple[bool, Any]:
  # bool is an int subclass but JSON true/false is not a number.
  if isinstance(value, bool) or not isinstance(value, (int, float)):
    return False, None
  try:
    return True, int(value)
  except (OverflowError, ValueError):
    return False, None


# wire key -> (attribute, expected JSON type, converter)
_FIXED_FIELDS: Dict[str, Tuple[str, str, Callable[[Any], Tuple[bool, Any]]]] = {
  "version": ("version", "string", _as_string),
  "host": ("host", "string", _as_string),
  "short_message": ("short", "string", _as_string),
  "full_message": ("full", "string", _as_string),
  "timestamp": ("time_unix", "number", _as_int),
  "level": ("level", "number", _as_int),
  "facility": ("facility", "string", _as_string),
}


def decode(data: Union[bytes, bytearray, str]) -> Message:
  """
  Build a Message from a GELF JSON payload.

  Keys starting with "_" are stored in `extra` as-is. Every other key must be
  one of the fixed GELF fields and hold a value of the right JSON type.

  Raises:
    MalformedMessageError: payload is not a JSON object
    FieldTypeError: a fixed field holds a value of the wrong type
    UnknownFieldError: a key is neither a fixed field nor "_"-prefixed
  """
  try:
    parsed = json.loads(data, parse_constant=_reject_constant)
  except (UnicodeDecodeError, json.JSONDecodeError) as exc:
    raise MalformedMessageError(f"invalid GELF payload: {exc}") from exc

  if not isinstance(parsed, dict):
    raise MalformedMessageError(
      f"invalid GELF payload: expected a JSON object, got {_type_name(parsed)}"
    )

  values: Dict[str, Any] = {}
  extra: Dict[str, Any] = {}
  for key, value in parsed.items():
    if key.startswith("_"):
      extra[key] = value
      continue

    spec = _FIXED_FIELDS.get(key)
    if spec is None:
      raise UnknownFieldError(key)

    attr, expected, convert = spec
    ok, converted = convert(value)
    if not ok:
      actual = _type_name(value)
      if isinstance(value, float) and not math.isfinite(value):
        actual = "out-of-range number"
      raise FieldTypeError(key, expected, actual)
    values[attr] = converted

  _logger.debug("decoded GELF message with %d additional field(s)", len(extra))
  return Message(extra=extra, **values)
