"""
Logging tests - verbosity gating of LOG()
"""

from types import SimpleNamespace

import pytest
from loguru import logger

from wishtext.lib.log import LOG, state_connectToLogger, state_disconnectFromLogger
from wishtext.lib.locator import invocationArgs_find


@pytest.fixture
def messages():
    """Capture loguru output in a list"""
    captured = []
    handler_id = logger.add(lambda message: captured.append(message.record["message"]), level="DEBUG")
    yield captured
    logger.remove(handler_id)


def connected(verbosity):
    return state_connectToLogger(SimpleNamespace(verbosity=verbosity))


class TestLog:
    """Test when LOG emits"""

    def test_silent_without_state(self, messages):
        """Library calls log nothing unless a state is connected"""
        LOG("hidden", level=1)
        assert messages == []

    def test_verbosity_gate(self, messages):
        """Messages above the connected verbosity are dropped"""
        token = connected(2)
        try:
            LOG("normal", level=1)
            LOG("verbose", level=2)
            LOG("debug", level=3)
        finally:
            state_disconnectFromLogger(token)
        assert messages == ["normal", "verbose"]

    def test_degraded_parse_error_logged(self, messages):
        """Swallowed parse errors are visible at verbosity 2"""
        token = connected(2)
        try:
            assert invocationArgs_find("{{tgt}}<!--", "tgt") is None
        finally:
            state_disconnectFromLogger(token)
        assert any("treated as not found" in m for m in messages)
