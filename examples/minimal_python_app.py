import logging
import os
import sys

from gelfmsg_client import setup_logging  # type: ignore[import]


def print_sender(payload: bytes) -> None:
  # Stand-in for a real transport: write each encoded message on its own line.
  sys.stdout.write(payload.decode("utf-8") + "\n")


def main() -> None:
  # Minimal configuration via environment variables
  os.environ.setdefault("GELF_FACILITY", "example-app")

  logger = logging.getLogger("example_app")
  logger.setLevel(logging.INFO)

  setup_logging(logger, sender=print_sender)

  logger.info("Example INFO log from minimal app", extra={"request_id": "r-42"})
  try:
    1 / 0
  except ZeroDivisionError:
    logger.exception("Example ERROR log with exception")


if __name__ == "__main__":
  main()
