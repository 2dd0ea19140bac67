from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field

GELF_VERSION = "1.1"


class Severity(IntEnum):
  """
  Syslog severity levels carried in the GELF `level` field.
  """

  EMERGENCY = 0
  ALERT = 1
  CRITICAL = 2
  ERROR = 3
  WARNING = 4
  NOTICE = 5
  INFO = 6
  DEBUG = 7


class Message(BaseModel):
  """
  Canonical GELF record.

  The fixed envelope fields serialize under their wire names (aliases).
  `extra` and `raw_extra` are extension channels that the codec flattens into
  the same top-level JSON object; they never appear as nested keys.
  """

  model_config = ConfigDict(populate_by_name=True)

  version: str = ""
  host: str = ""
  short: str = Field("", alias="short_message")
  full: str = Field("", alias="full_message")
  time_unix: int = Field(0, alias="timestamp", description="Seconds since the epoch")
  level: int = 0
  facility: str = ""

  # Additional fields, keys conventionally prefixed with "_".
  extra: Dict[str, Any] = Field(default_factory=dict, exclude=True)
  # Pre-serialized JSON object of additional fields, spliced in verbatim.
  raw_extra: bytes = Field(b"", exclude=True)


def severity_from_logging(levelno: int) -> Severity:
  """
  Map a stdlib logging level number onto the nearest syslog severity.
  """
  if levelno >= logging.CRITICAL:
    return Severity.CRITICAL
  if levelno >= logging.ERROR:
    return Severity.ERROR
  if levelno >= logging.WARNING:
    return Severity.WARNING
  if levelno >= logging.INFO:
    return Severity.INFO
  return Severity.DEBUG
