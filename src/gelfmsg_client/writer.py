from __future__ import annotations

import sys
from typing import Optional, Union

from gelfmsg import encode_into, from_raw_content

from .config import ClientConfig
from .logging_setup import Sender


class GelfWriter:
  """
  File-like log sink: every `write` call becomes one GELF message.

  Useful as the stream of a `logging.StreamHandler` or as `file=` for
  `print`. The caller's file name and line number are attached as the
  `_file` and `_line` additional fields. `caller_depth` selects which frame
  above `write` counts as the caller.
  """

  def __init__(
    self,
    sender: Sender,
    config: Optional[ClientConfig] = None,
    caller_depth: int = 1,
  ) -> None:
    self._sender = sender
    self._config = config or ClientConfig.from_env()
    self._caller_depth = caller_depth

  def _caller(self):
    try:
      frame = sys._getframe(self._caller_depth + 1)
    except ValueError:
      return "???", 0
    return frame.f_code.co_filename, frame.f_lineno

  def write(self, data: Union[bytes, str]) -> int:
    if isinstance(data, str):
      content = data.encode("utf-8")
    else:
      content = bytes(data)

    if not self._config.enabled or not content.strip():
      return len(data)

    file, line = self._caller()
    message = from_raw_content(
      content,
      self._config.host,
      self._config.facility,
      file,
      line,
    )
    self._sender(encode_into(message, bytearray()))
    return len(data)

  def flush(self) -> None:
    pass
