from __future__ import annotations

import argparse
import sys
from datetime import datetime, timezone
from typing import NoReturn, TextIO

from .codec import DecodeError, GelfError, decode, encode
from .construct import from_raw_content
from .message import Severity


def main(argv: list[str] | None = None) -> NoReturn:
  argv = list(sys.argv[1:] if argv is None else argv)

  if not argv or argv[0] not in {"encode", "decode"}:
    print("Usage: python -m gelfmsg {encode|decode}", file=sys.stderr)
    print("  encode        - Wrap raw text from stdin into a GELF JSON message", file=sys.stderr)
    print("  decode        - Validate GELF JSON messages (one per line) and summarize them", file=sys.stderr)
    sys.exit(1)

  if argv[0] == "encode":
    sys.exit(_run_encode(argv[1:]))
  sys.exit(_run_decode(argv[1:]))


def _run_encode(args: list[str]) -> int:
  parser = argparse.ArgumentParser(
    prog="gelfmsg encode",
    description="Wrap raw text into a GELF JSON message",
  )
  parser.add_argument("--host", default="", help="Originating host (default: empty)")
  parser.add_argument("--facility", default="", help="Facility tag (default: empty)")
  parser.add_argument("--file", default=None, help="Read text from this file instead of stdin")
  parsed = parser.parse_args(args)

  try:
    if parsed.file:
      with open(parsed.file, "rb") as f:
        content = f.read()
      source = parsed.file
    else:
      content = sys.stdin.buffer.read()
      source = "<stdin>"
  except OSError as exc:
    print(f"Error: {exc}", file=sys.stderr)
    return 2

  message = from_raw_content(content, parsed.host, parsed.facility, source, 1)
  try:
    payload = encode(message)
  except GelfError as exc:
    print(f"Error: {exc}", file=sys.stderr)
    return 2

  sys.stdout.write(payload.decode("utf-8") + "\n")
  return 0


def _format_line(message) -> str:
  try:
    ts = datetime.fromtimestamp(message.time_unix, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
  except (OverflowError, OSError, ValueError):
    ts = str(message.time_unix)
  try:
    level = Severity(message.level).name
  except ValueError:
    level = str(message.level)
  host = message.host or "-"
  return f"[{ts}] [{host}] [{level}] {message.short}"


def _decode_stream(stream: TextIO) -> int:
  failures = 0
  for lineno, line in enumerate(stream, start=1):
    line = line.strip()
    if not line:
      continue
    try:
      message = decode(line)
    except DecodeError as exc:
      failures += 1
      print(f"line {lineno}: {exc}", file=sys.stderr)
      continue
    print(_format_line(message))
  return failures


def _run_decode(args: list[str]) -> int:
  parser = argparse.ArgumentParser(
    prog="gelfmsg decode",
    description="Validate GELF JSON messages, one per line",
  )
  parser.add_argument("--file", default=None, help="Read messages from this file instead of stdin")
  parsed = parser.parse_args(args)

  try:
    if parsed.file:
      with open(parsed.file, "r", encoding="utf-8") as f:
        failures = _decode_stream(f)
    else:
      failures = _decode_stream(sys.stdin)
  except (OSError, UnicodeDecodeError) as exc:
    print(f"Error: {exc}", file=sys.stderr)
    return 2

  return 2 if failures else 0


if __name__ == "__main__":
  main()
