"""speclogic Logging — logging port and structlog adapter."""

from speclogic.logging.port import LoggingPort
from speclogic.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "StructlogAdapter"]
