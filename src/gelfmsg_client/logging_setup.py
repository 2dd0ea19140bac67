from __future__ import annotations

import logging
import traceback
from logging import Handler, LogRecord
from typing import Any, Callable, Dict, Optional

from gelfmsg import GELF_VERSION, encode_into, from_string, severity_from_logging

from .config import ClientConfig

Sender = Callable[[bytes], None]

# Attributes every LogRecord carries; anything else was passed via `extra=`.
_RESERVED_ATTRS = frozenset(
  vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime"}


class GelfHandler(Handler):
  """
  Logging handler that turns records into GELF messages and hands the
  encoded bytes to a sender.
  """

  def __init__(self, config: ClientConfig, sender: Sender) -> None:
    super().__init__()
    self._config = config
    self._sender = sender

  def build_extra(self, record: LogRecord) -> Dict[str, Any]:
    extra: Dict[str, Any] = {
      "_file": record.pathname,
      "_line": record.lineno,
      "_logger": record.name,
    }
    if record.exc_info and record.exc_info[0] is not None:
      extra["_exception_type"] = record.exc_info[0].__name__

    for key, value in vars(record).items():
      if key in _RESERVED_ATTRS:
        continue
      name = key if key.startswith("_") else "_" + key
      extra[name] = value
    return extra

  def emit(self, record: LogRecord) -> None:
    try:
      if not self._config.enabled:
        return

      text = record.getMessage()
      if record.exc_info:
        text = text + "\n" + "".join(traceback.format_exception(*record.exc_info))

      message = from_string(
        text,
        int(severity_from_logging(record.levelno)),
        self.build_extra(record),
      )
      message.version = GELF_VERSION
      message.host = self._config.host
      message.facility = self._config.facility
      message.time_unix = int(record.created)

      # Fresh buffer per record; handlers may be called from many threads.
      payload = encode_into(message, bytearray())
      self._sender(payload)
    except Exception:
      # Never break application logging.
      self.handleError(record)


def setup_logging(
  logger: Optional[logging.Logger] = None,
  *,
  sender: Sender,
  host: Optional[str] = None,
  facility: Optional[str] = None,
) -> None:
  """
  Attach a GELF handler to the standard logging module.

  This does not replace existing handlers; it adds an additional handler
  that encodes every record as GELF and passes it to `sender`.
  """
  config = ClientConfig.from_params_or_env(host=host, facility=facility)
  if not config.enabled:
    # GELF output is disabled; preserve existing logging behavior only.
    return

  target_logger = logger or logging.getLogger()

  # Avoid attaching duplicate handlers to the same logger.
  for existing in target_logger.handlers:
    if isinstance(existing, GelfHandler):
      return

  target_logger.addHandler(GelfHandler(config=config, sender=sender))
