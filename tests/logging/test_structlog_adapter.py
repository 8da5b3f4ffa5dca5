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
"""Tests for StructlogAdapter — default LoggingPort implementation."""

import logging

from speclogic.core.config import Config
from speclogic.logging.port import LoggingPort
from speclogic.logging.structlog_adapter import StructlogAdapter
from speclogic.specification.filter import FilterOperator


class TestStructlogAdapterConformance:
    def test_implements_logging_port(self):
        adapter = StructlogAdapter()
        assert isinstance(adapter, LoggingPort)


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"

    def test_configure_reads_root_level(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"speclogic": {"logging": {"level": {"root": "debug"}}}}))
        assert adapter._root_level == "DEBUG"

    def test_configure_reads_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"speclogic": {"logging": {"format": "json"}}}))
        assert adapter._format == "json"

    def test_configure_reads_per_module_levels(self):
        adapter = StructlogAdapter()
        config = Config({"speclogic": {"logging": {"level": {"root": "INFO", "speclogic.expression": "DEBUG"}}}})
        adapter.configure(config)
        assert adapter._module_levels == {"speclogic.expression": "DEBUG"}
        assert logging.getLogger("speclogic.expression").level == logging.DEBUG

    def test_configure_honours_env_overrides(self, monkeypatch):
        monkeypatch.setenv("SPECLOGIC_LOGGING_LEVEL_ROOT", "warning")
        monkeypatch.setenv("SPECLOGIC_LOGGING_FORMAT", "JSON")
        adapter = StructlogAdapter()
        adapter.configure(Config({"speclogic": {"logging": {"level": {"root": "INFO"}, "format": "console"}}}))
        assert adapter._root_level == "WARNING"
        assert adapter._format == "json"
        assert adapter._module_levels == {}

    def test_configure_from_library_defaults(self, tmp_path):
        adapter = StructlogAdapter()
        adapter.configure(Config.from_sources(tmp_path))
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"


class TestStructlogAdapterLoggers:
    def test_get_logger_is_usable(self):
        adapter = StructlogAdapter()
        logger = adapter.get_logger("speclogic.test")
        assert logger is not None
        assert hasattr(logger, "info")

    def test_set_level(self):
        adapter = StructlogAdapter()
        adapter.set_level("speclogic.translation", "WARNING")
        assert logging.getLogger("speclogic.translation").level == logging.WARNING

    def test_compiler_logs_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="speclogic.expression.compiler"):
            FilterOperator.eq("role", "admin").compile()
        assert any(r.name == "speclogic.expression.compiler" for r in caplog.records)
