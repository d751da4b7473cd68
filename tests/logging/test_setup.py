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
"""Tests for structlog setup and the bootstrap entry point."""

import logging

import pytest

from sessionkit import bootstrap
from sessionkit.core.config import Config
from sessionkit.logging.setup import REDACTED, configure_logging, redact_secrets
from sessionkit.session.adapters.cookie import CookieStore
from sessionkit.session.adapters.memory import MemoryStore


class TestRedactSecrets:
    def test_masks_cookie_values(self):
        event = {"event": "session_stored", "cookie_value": "c2VjcmV0", "session_id": "abc"}
        result = redact_secrets(None, "info", event)
        assert result["cookie_value"] == REDACTED
        assert result["session_id"] == "abc"

    def test_leaves_other_events_alone(self):
        event = {"event": "store_cleared"}
        assert redact_secrets(None, "debug", dict(event)) == event


class TestConfigureLogging:
    def test_root_level(self):
        configure_logging(Config({"sessionkit": {"logging": {"level": "warning"}}}))
        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        configure_logging(Config({"sessionkit": {"logging": {"level": "chatty"}}}))
        assert logging.getLogger().level == logging.INFO

    def test_per_logger_levels(self):
        config = Config({"sessionkit": {"logging": {"loggers": {"sessionkit.session.memory": "DEBUG"}}}})
        configure_logging(config)
        assert logging.getLogger("sessionkit.session.memory").level == logging.DEBUG

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SESSIONKIT_LOGGING_LEVEL", "ERROR")
        configure_logging(Config({}))
        assert logging.getLogger().level == logging.ERROR

    @pytest.mark.parametrize("fmt", ["console", "json"])
    def test_formats_log_without_error(self, fmt, capsys):
        configure_logging(Config({"sessionkit": {"logging": {"format": fmt}}}))
        import structlog

        structlog.get_logger("sessionkit.test").info("hello", cookie_value="c2VjcmV0")
        out = capsys.readouterr().out
        assert "hello" in out
        assert "c2VjcmV0" not in out


class TestBootstrap:
    def test_builds_configured_store(self):
        config = Config({"sessionkit": {"session": {"store": "cookie"}, "logging": {"level": "ERROR"}}})
        assert isinstance(bootstrap(config), CookieStore)
        assert logging.getLogger().level == logging.ERROR

    def test_loads_working_directory_with_profile(self, tmp_path, monkeypatch):
        (tmp_path / "sessionkit.yaml").write_text("sessionkit:\n  session:\n    store: cookie\n")
        (tmp_path / "sessionkit-dev.yaml").write_text("sessionkit:\n  session:\n    store: memory\n")
        monkeypatch.chdir(tmp_path)
        assert isinstance(bootstrap(active_profiles=["dev"], configure_logs=False), MemoryStore)
