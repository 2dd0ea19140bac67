from __future__ import annotations

import time
from typing import Any, Dict, Optional, Tuple

from .message import GELF_VERSION, Message, Severity


def _split(text: str) -> Tuple[str, str]:
  # If there are newlines in the message, use the first line for the short
  # message and the whole input for the full message. A newline at index 0
  # is not a split point.
  i = text.find("\n")
  if i > 0:
    return text[:i], text
  return text, ""


def from_raw_content(
  content: bytes,
  host: str,
  facility: str,
  file: str,
  line: int,
) -> Message:
  """
  Build a message from raw log output, e.g. bytes written to a log stream.

  The source location is recorded in the `_file` and `_line` additional fields.
  """
  text = content.decode("utf-8", errors="replace").strip()
  short, full = _split(text)

  return Message(
    version=GELF_VERSION,
    host=host,
    short=short,
    full=full,
    time_unix=int(time.time()),
    level=int(Severity.INFO),
    facility=facility,
    extra={
      "_file": file,
      "_line": line,
    },
  )


def from_string(
  message: str,
  level: int,
  extra: Optional[Dict[str, Any]] = None,
) -> Message:
  """
  Build a message from a structured-logging call.

  `version`, `host` and `facility` are left empty for the caller to fill in.
  """
  short, full = _split(message.strip())

  return Message(
    short=short,
    full=full,
    time_unix=int(time.time()),
    level=level,
    extra=extra if extra is not None else {},
  )
