"""
Name: Server Runner Tests
"""

from unittest.mock import Mock

import pytest

from bug_tracker.crosscutting.config import Settings
from bug_tracker.server import _FatalLoopErrors, build_server

pytestmark = pytest.mark.unit


def test_build_server_uses_settings():
    server = build_server(Settings(host="127.0.0.1", port=8123, log_level="warning"))

    assert server.config.host == "127.0.0.1"
    assert server.config.port == 8123
    assert server.config.app == "bug_tracker.main:app"


def test_loop_errors_stop_the_server():
    server = Mock(should_exit=False)
    handler = _FatalLoopErrors(server)

    handler(Mock(), {"message": "Task exception was never retrieved",
                     "exception": RuntimeError("boom")})

    assert handler.triggered is True
    assert server.should_exit is True


def test_loop_errors_without_exception():
    server = Mock(should_exit=False)
    handler = _FatalLoopErrors(server)

    handler(Mock(), {"message": "something odd"})

    assert server.should_exit is True
