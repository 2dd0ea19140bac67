"""
gelfmsg_client

Producer-side adapters that turn application logging into encoded GELF
messages and hand them to a caller-supplied sender.
"""

from .config import ClientConfig
from .logging_setup import GelfHandler, setup_logging
from .writer import GelfWriter

__all__ = ["ClientConfig", "GelfHandler", "GelfWriter", "setup_logging"]
