# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""StructlogAdapter — renders speclogic's stdlib log records through structlog.

speclogic modules log with ``logging.getLogger(__name__)`` so that nothing is
emitted unless the host application asks for it. Calling
:meth:`StructlogAdapter.configure` routes those records through a structlog
processor chain::

    speclogic:
      logging:
        format: json                 # or console
        level:
          root: INFO
          speclogic.expression: DEBUG   # compiled trees
          speclogic.translation: DEBUG  # generated filters
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from speclogic.core.config import Config

_LEVEL_SECTION = "speclogic.logging.level"
_FORMAT_KEY = "speclogic.logging.format"


def _level(name: str) -> int:
    return logging.getLevelNamesMapping().get(name.upper(), logging.INFO)


def _renderer(fmt: str) -> structlog.types.Processor:
    if fmt == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer()


class StructlogAdapter:
    """Default :class:`~speclogic.logging.port.LoggingPort` implementation."""

    def __init__(self) -> None:
        self._root_level = "INFO"
        self._format = "console"
        self._module_levels: dict[str, str] = {}

    def configure(self, config: Config) -> None:
        """Read the ``speclogic.logging`` section and install the processor chain."""
        # Module names contain dots; only ``root`` is readable through get().
        self._root_level = str(config.get(f"{_LEVEL_SECTION}.root", "INFO")).upper()
        self._module_levels = {
            name: str(level).upper() for name, level in config.get_section(_LEVEL_SECTION).items() if name != "root"
        }
        self._format = str(config.get(_FORMAT_KEY, "console")).lower()

        shared: list[structlog.types.Processor] = [
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
        ]
        structlog.configure(
            processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        # Plain ``logging`` records from library modules go through the same chain.
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                foreign_pre_chain=shared,
                processors=[
                    structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                    _renderer(self._format),
                ],
            )
        )
        logging.basicConfig(handlers=[handler], level=_level(self._root_level), force=True)

        for name, level in self._module_levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        """A structlog ``BoundLogger`` for application code."""
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(_level(level))
