from __future__ import annotations

import json
import logging
import os
import socket
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

_logger = logging.getLogger("gelfmsg_client.config")

CONFIG_PATH = Path("_gelf/config.json")


@dataclass(frozen=True)
class ClientConfig:
  """
  Envelope values stamped onto every message produced by the client adapters.

  Values are sourced from explicit arguments, environment variables and a
  project config file, with sensible defaults.
  """

  host: str
  facility: str = ""
  enabled: bool = True

  @classmethod
  def from_env(cls) -> "ClientConfig":
    """
    Load configuration from environment variables.

    Optional:
      - GELF_HOST (default: this machine's hostname)
      - GELF_FACILITY
      - GELF_ENABLED (default: true)
    """
    return cls.from_params_or_env()

  @classmethod
  def from_params_or_env(
    cls,
    host: Optional[str] = None,
    facility: Optional[str] = None,
  ) -> "ClientConfig":
    """
    Build configuration from explicit parameters, falling back to environment variables.

    Priority:
      1. Explicit function arguments
      2. Environment variables
      3. Config file (_gelf/config.json)
      4. Defaults (hostname, empty facility)
    """
    file_config: Optional[Dict[str, Any]] = None

    resolved_host = host or os.getenv("GELF_HOST")
    if not resolved_host:
      file_config = _read_config_file()
      resolved_host = file_config.get("host")
    if not resolved_host:
      resolved_host = socket.gethostname()

    resolved_facility = facility or os.getenv("GELF_FACILITY")
    if not resolved_facility:
      if file_config is None:
        file_config = _read_config_file()
      resolved_facility = file_config.get("facility") or ""

    return cls(
      host=str(resolved_host),
      facility=str(resolved_facility),
      enabled=_get_enabled_flag(),
    )


def _read_config_file() -> Dict[str, Any]:
  if not CONFIG_PATH.exists():
    return {}
  try:
    data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
  except (OSError, ValueError) as exc:
    _logger.warning("Ignoring unreadable config file %s: %s", CONFIG_PATH, exc)
    return {}
  if not isinstance(data, dict):
    _logger.warning("Ignoring config file %s: expected a JSON object", CONFIG_PATH)
    return {}
  return data


def _get_enabled_flag() -> bool:
  """
  Determine whether GELF output is enabled.

  Uses GELF_ENABLED env var; defaults to True. Accepts common truthy/falsey
  strings.
  """
  raw = os.getenv("GELF_ENABLED")
  if raw is None:
    return True

  value = raw.strip().lower()
  if value in ("1", "true", "yes", "on"):
    return True
  if value in ("0", "false", "no", "off"):
    return False

  # Unknown value: treat as disabled.
  return False
