# ============================================================================
# CORE TESTS
# ============================================================================
# EPOCH: 1 - MONITORING MIDDLEWARE
# STATUS: Tests - Configuration, logging and access filter
# PURPOSE: Verify environment overrides, log context and address filtering
# CREATED: 19 OCT 2026
# ============================================================================
"""
Core Tests

Run with:
    pytest tests/test_core.py -v
"""

import asyncio
import json
import logging

import pytest

from core.config import MonitoringDefaults, get_defaults, reset_defaults
from core.logging import (
    ComponentType,
    HumanFormatter,
    StructuredFormatter,
    configure_logging,
    get_current_context,
    get_logger,
    log_context,
)
from monitoring.access import is_private_address
from monitoring.core import CheckResult, CheckStatus, ReadinessFailure


# ============================================================================
# CONFIGURATION
# ============================================================================

class TestMonitoringDefaults:
    """Tests for MonitoringDefaults and the global instance."""

    def test_defaults(self):
        defaults = MonitoringDefaults()
        assert defaults.private_only is False
        assert defaults.check_timeout is None

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("MONITORING_PRIVATE_ONLY", "yes")
        monkeypatch.setenv("MONITORING_CHECK_TIMEOUT", "2.5")

        defaults = MonitoringDefaults.from_env()

        assert defaults.private_only is True
        assert defaults.check_timeout == 2.5

    def test_from_env_unset(self, monkeypatch):
        monkeypatch.delenv("MONITORING_PRIVATE_ONLY", raising=False)
        monkeypatch.setenv("MONITORING_CHECK_TIMEOUT", "")

        defaults = MonitoringDefaults.from_env()

        assert defaults == MonitoringDefaults()

    def test_get_defaults_cached_until_reset(self, monkeypatch):
        first = get_defaults()
        assert get_defaults() is first

        monkeypatch.setenv("MONITORING_PRIVATE_ONLY", "1")
        reset_defaults()

        assert get_defaults() is not first
        assert get_defaults().private_only is True


# ============================================================================
# LOGGING
# ============================================================================

def _record(msg="hello", extra=None):
    record = logging.LogRecord("monitoring.test", logging.INFO, __file__, 1, msg, None, None)
    if extra is not None:
        record.extra = extra
    return record


class TestLogContext:
    """Tests for log_context() nesting and isolation."""

    def test_nested_contexts_merge(self):
        with log_context(endpoint="livez"):
            with log_context(check_name="db"):
                context = get_current_context()
                assert context.endpoint == "livez"
                assert context.check_name == "db"
            assert get_current_context().check_name is None

        assert get_current_context().endpoint is None

    def test_concurrent_tasks_do_not_share_context(self):
        seen = {}

        async def handle(endpoint, delay):
            with log_context(endpoint=endpoint):
                await asyncio.sleep(delay)
                seen[endpoint] = get_current_context().endpoint

        async def run_test():
            await asyncio.gather(handle("livez", 0.02), handle("checkz", 0))

        asyncio.run(run_test())

        assert seen == {"livez": "livez", "checkz": "checkz"}


class TestFormatters:
    """Tests for the JSON and human formatters."""

    def test_structured_formatter_includes_context(self):
        with log_context(endpoint="healthz", request_path="/healthz"):
            output = json.loads(StructuredFormatter().format(_record()))

        assert output["message"] == "hello"
        assert output["level"] == "INFO"
        assert output["context"] == {"endpoint": "healthz", "request_path": "/healthz"}
        assert output["timestamp"].endswith("Z")

    def test_structured_formatter_extra_data(self):
        output = json.loads(StructuredFormatter().format(_record(extra={"failing": ["db"]})))
        assert output["data"] == {"failing": ["db"]}

    def test_human_formatter_inline_context(self):
        with log_context(endpoint="livez", client_host="10.0.0.1"):
            line = HumanFormatter().format(_record())

        assert "[endpoint=livez, client=10.0.0.1]" in line
        assert line.endswith(": hello")

    def test_context_logger_attaches_component(self, caplog):
        logger = get_logger("monitoring.test", ComponentType.MIDDLEWARE)

        with caplog.at_level(logging.INFO, logger="monitoring.test"):
            with log_context(endpoint="metricz"):
                logger.info("served")

        record = caplog.records[-1]
        assert record.extra["component"] == "middleware"
        assert record.extra["endpoint"] == "metricz"

    def test_configure_logging_json(self):
        root = logging.getLogger()
        saved_handlers, saved_level = root.handlers[:], root.level
        try:
            configure_logging(level="debug", json_output=True)

            assert root.level == logging.DEBUG
            assert len(root.handlers) == 1
            assert isinstance(root.handlers[0].formatter, StructuredFormatter)
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)


# ============================================================================
# ACCESS FILTER & CORE TYPES
# ============================================================================

class TestIsPrivateAddress:
    """Tests for is_private_address()."""

    @pytest.mark.parametrize("host", [
        "127.0.0.1", "10.0.0.5", "172.16.4.4", "192.168.1.1",
        "169.254.0.9", "::1", "fe80::1", "fd00::2", "::ffff:10.0.0.1",
    ])
    def test_private(self, host):
        assert is_private_address(host) is True

    @pytest.mark.parametrize("host", [
        "4.4.4.4", "8.8.8.8", "2001:4860:4860::8888", "::ffff:8.8.8.8",
        "testclient", "", None,
    ])
    def test_not_private(self, host):
        assert is_private_address(host) is False


class TestCoreTypes:
    """Tests for CheckStatus, CheckResult and ReadinessFailure."""

    def test_severity_values(self):
        assert [int(s) for s in CheckStatus] == [0, 1, 2, 3]
        assert CheckStatus.OK.is_ok
        assert not CheckStatus.WARNING.is_ok

    def test_result_line(self):
        assert CheckResult("bob", CheckStatus.UNKNOWN).to_line() == "bob 3\n"

    def test_readiness_failure_message(self):
        failure = ReadinessFailure("db", CheckStatus.CRITICAL)
        assert str(failure) == "Readiness check 'db' reported critical"
