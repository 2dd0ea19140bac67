"""
gelfmsg

GELF (Graylog Extended Log Format) message model and JSON codec. Additional
fields are flattened into the top-level JSON object on encode and classified
back out of it on decode.
"""

from .codec import (
  DecodeError,
  FieldTypeError,
  GelfError,
  MalformedMessageError,
  SerializationError,
  UnknownFieldError,
  decode,
  encode,
  encode_into,
)
from .construct import from_raw_content, from_string
from .message import GELF_VERSION, Message, Severity, severity_from_logging

__all__ = [
  "GELF_VERSION",
  "DecodeError",
  "FieldTypeError",
  "GelfError",
  "MalformedMessageError",
  "Message",
  "SerializationError",
  "Severity",
  "UnknownFieldError",
  "decode",
  "encode",
  "encode_into",
  "from_raw_content",
  "from_string",
  "severity_from_logging",
]
